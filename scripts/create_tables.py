import argparse
import asyncio
import os

from dotenv import load_dotenv

from survey_fleet.db import Base, build_engine
from survey_fleet.models.document import Document  # noqa: F401

# Load environment variables
load_dotenv()


async def create_tables(database_url: str, drop: bool = False) -> None:
    engine = build_engine(database_url)

    async with engine.begin() as conn:
        if drop:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    await engine.dispose()

    print("Document tables created successfully!")


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the survey fleet document table")
    parser.add_argument("--drop", action="store_true", help="Drop existing tables first")
    args = parser.parse_args()

    database_url = os.getenv("FLEET_DATABASE_URL")
    if database_url is None:
        raise ValueError("FLEET_DATABASE_URL environment variable is not set")

    asyncio.run(create_tables(database_url, drop=args.drop))


if __name__ == "__main__":
    main()
