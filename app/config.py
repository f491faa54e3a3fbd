# app/config.py
from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from typing import Optional

class Settings(BaseSettings):
    model_config = ConfigDict(env_file=".env", extra="allow")

    # Database (database_url wins over the MySQL parts when set)
    database_url: Optional[str] = None
    mysql_host: str = "localhost"
    mysql_port: int = 3306
    mysql_user: str = "root"
    mysql_password: str = ""
    mysql_database: str = "leetcode_tracker"

    # LeetCode GraphQL
    leetcode_graphql_url: str = "https://leetcode.com/graphql"
    leetcode_request_timeout: Optional[float] = None  # None = wait forever
    recent_submission_limit: int = 20

    # Tracking
    timezone_name: str = "IST"
    timezone_offset_minutes: int = 330  # UTC+05:30
    track_window_hours: int = 24
    track_concurrency: int = 1

    # Scheduler (local time in timezone_name)
    scheduler_enabled: bool = True
    track_cron_hour: int = 23
    track_cron_minute: int = 55
    refresh_cron_hour: int = 0
    refresh_cron_minute: int = 30

    # App Settings
    debug: bool = False
    log_level: str = "INFO"

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        return f"mysql+aiomysql://{self.mysql_user}:{self.mysql_password}@{self.mysql_host}:{self.mysql_port}/{self.mysql_database}"

settings = Settings()
