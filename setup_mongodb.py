"""
MongoDB Setup Script
Tests connection and initializes the prompt pipeline collections and indexes.
"""
import asyncio
from src.repositories import db_manager
from src.config import settings

COLLECTIONS = [
    "prompt_regeneration_queue",
    "prompt_artifacts",
    "caller_profiles",
    "calls",
    "appointments",
]


async def setup_mongodb():
    """Initialize the database with collections and indexes."""
    print("🔄 Connecting to MongoDB...")
    print(f"   Database: {settings.mongodb_database}")
    print()

    try:
        await db_manager.connect()
        print("✅ Connection successful!")
        print()

        db = db_manager.database

        existing_collections = await db.list_collection_names()
        print(f"📦 Existing collections: {existing_collections or 'None'}")
        print()

        print("🔨 Creating indexes...")
        await db_manager.create_indexes()
        print("✅ Indexes created successfully!")
        print()

        print("📊 Verifying indexes:")
        total = 0
        for name in COLLECTIONS:
            indexes = await db[name].index_information()
            total += len(indexes)
            print(f"   {name}: {len(indexes)} indexes")
            for idx_name in indexes:
                print(f"      - {idx_name}")

        print()
        print("🎉 MongoDB setup complete!")
        print()
        print("📝 Summary:")
        print(f"   ✅ Database: {settings.mongodb_database}")
        print(f"   ✅ Collections: {', '.join(COLLECTIONS)}")
        print(f"   ✅ Indexes: {total} total")
        print()

    except Exception as e:
        print(f"❌ Error: {e}")
        print()
        print("💡 Troubleshooting:")
        print("   1. Verify MONGODB_URI points at a reachable server")
        print("   2. Check that the username and password are correct")
        print("   3. Ensure the cluster is running (not paused)")
        raise

    finally:
        await db_manager.disconnect()
        print("👋 Disconnected from MongoDB")


if __name__ == "__main__":
    asyncio.run(setup_mongodb())
