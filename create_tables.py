import asyncio

from app.services.database_service import database_service
from app.models import Base

# Create every table (existing tables are left untouched)
async def main():
    await database_service.create_tables()
    for name in Base.metadata.tables:
        print(f" Ready: {name}")
    await database_service.close()

if __name__ == "__main__":
    asyncio.run(main())
