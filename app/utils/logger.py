import logging
from app.config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("apscheduler.executors.default", "apscheduler.scheduler", "aiosqlite")


def setup_logger(name: str = "leetcode_tracker") -> logging.Logger:
    """Console logger shared by the whole service; level comes from settings.log_level."""
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # avoid duplicate handlers on re-import
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(console_handler)

    if not settings.debug:
        for noisy in QUIET_LOGGERS:
            logging.getLogger(noisy).setLevel(logging.WARNING)

    return logger


logger = setup_logger()
