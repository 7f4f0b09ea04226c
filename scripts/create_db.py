"""
Create the PostgreSQL database named in DATABASE_URL, then its tables
"""
import asyncio

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine

from internship_portal.core.config import settings
from internship_portal.core.database import init_db, close_db


async def create_database():
    url = make_url(settings.DATABASE_URL)
    if url.get_backend_name() != "postgresql":
        print(f"{url.get_backend_name()} needs no database creation step")
    else:
        # CREATE DATABASE cannot run inside a transaction or against the target itself
        maintenance = create_async_engine(url.set(database="postgres"), isolation_level="AUTOCOMMIT")
        try:
            async with maintenance.connect() as conn:
                exists = await conn.scalar(
                    text("SELECT 1 FROM pg_database WHERE datname = :name"),
                    {"name": url.database}
                )
                if exists:
                    print(f"Database '{url.database}' already exists")
                else:
                    await conn.execute(text(f'CREATE DATABASE "{url.database}"'))
                    print(f"Database '{url.database}' created")
        except Exception as e:
            print(f"Could not create database '{url.database}': {e}")
            raise
        finally:
            await maintenance.dispose()

    print("Creating tables...")
    await init_db()
    await close_db()
    print("Tables ready.")


if __name__ == "__main__":
    asyncio.run(create_database())
