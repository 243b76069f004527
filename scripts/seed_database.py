"""Write the sample fleet (drones, missions, surveys, stats, patterns) into the database."""

import asyncio
import os

from dotenv import load_dotenv

from survey_fleet.store.fixtures import default_seed
from survey_fleet.store.sql import SqlDocumentStore
from survey_fleet.utils.clock import to_iso

# Load environment variables
load_dotenv()


async def seed_database(database_url: str) -> int:
    store = await SqlDocumentStore.connect(database_url)
    written = 0
    try:
        now = to_iso()
        for collection, documents in default_seed().items():
            for document in documents:
                data = {**document, "createdAt": document.get("createdAt", now), "updatedAt": now}
                await store.set(collection, document["id"], data)
                written += 1
            print(f"  {collection}: {len(documents)} documents")
    finally:
        await store.close()
    return written


def main() -> None:
    database_url = os.getenv("FLEET_DATABASE_URL")
    if database_url is None:
        raise ValueError("FLEET_DATABASE_URL environment variable is not set")

    written = asyncio.run(seed_database(database_url))
    print(f"Sample data created successfully! ({written} documents)")


if __name__ == "__main__":
    main()
