"""Connection diagnostics for Supabase, MongoDB and Pinecone.

Each check runs on its own: a failing service is reported with a hint and the
remaining checks still run. Not used on the request path; run it through
``scripts/check_connections.py``.
"""

import asyncio
from typing import Dict, Optional

from motor.motor_asyncio import AsyncIOMotorClient
from pinecone import Pinecone
from supabase import create_client

from .config.settings import Settings, get_settings
from .logging import get_logger

logger = get_logger(__name__)

RECOMMENDED_DIMENSION = 1536
RECOMMENDED_METRIC = "cosine"

_DNS_FAILURE_MARKERS = (
    "ENOTFOUND",
    "Name or service not known",
    "nodename nor servname",
    "getaddrinfo failed",
    "DNS",
)


def document_store_hint(message: str) -> Optional[str]:
    """Map a MongoDB connection error message to a likely fix."""
    if "Authentication failed" in message or "bad auth" in message:
        return "Check your MongoDB username and password. Special characters in the password must be URL encoded."
    if any(marker in message for marker in _DNS_FAILURE_MARKERS):
        return "Check your MongoDB cluster URL and make sure the cluster is not paused."
    if "IP" in message:
        return "Add your IP address to the MongoDB Atlas access list."
    return None


def vector_store_hint(message: str) -> Optional[str]:
    """Map a Pinecone error message to a likely fix."""
    if "Invalid API key" in message or "Unauthorized" in message:
        return "Check your Pinecone API key. Get it from https://app.pinecone.io/"
    return None


def mask_secret(secret: str, visible: int = 10) -> str:
    return f"{secret[:visible]}..."


async def check_relational_store(settings: Settings) -> bool:
    """Check that the Supabase ``users`` table can be queried."""
    logger.info("Testing Supabase connection...")

    try:
        if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_ROLE_KEY:
            raise ValueError("Missing Supabase credentials")

        def _query_users() -> None:
            client = create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
            client.table("users").select("count").limit(1).execute()

        await asyncio.to_thread(_query_users)

        logger.info(f"✅ Supabase connection successful! URL: {settings.SUPABASE_URL}, tables accessible: users")
        return True
    except Exception as e:
        logger.error(f"❌ Supabase connection failed: {e}")
        return False


async def check_document_store(settings: Settings) -> bool:
    """Ping MongoDB and list the collections of the configured database."""
    logger.info("Testing MongoDB connection...")

    client: Optional[AsyncIOMotorClient] = None
    try:
        if not settings.MONGODB_URI:
            raise ValueError("Missing MongoDB URI")

        logger.info(f"Connecting to: {settings.MONGODB_HOST}")
        client = AsyncIOMotorClient(settings.MONGODB_URI)
        database = client[settings.MONGODB_DB_NAME]

        await database.command("ping")
        collections = await database.list_collection_names()

        listed = ", ".join(collections) if collections else "None (will be created automatically)"
        logger.info(f"✅ MongoDB connection successful! Database: {settings.MONGODB_DB_NAME}, collections: {listed}")
        return True
    except Exception as e:
        logger.error(f"❌ MongoDB connection failed: {e}")
        hint = document_store_hint(str(e))
        if hint:
            logger.warning(f"💡 Tip: {hint}")
        return False
    finally:
        if client is not None:
            client.close()


async def check_vector_store(settings: Settings) -> bool:
    """List Pinecone indexes and report the record count of the configured one."""
    logger.info("Testing Pinecone connection...")

    try:
        if not settings.PINECONE_API_KEY:
            raise ValueError("Missing Pinecone API key")
        if not settings.PINECONE_INDEX_NAME:
            raise ValueError("Missing Pinecone index name")

        pinecone = Pinecone(api_key=settings.PINECONE_API_KEY)
        index_names = list((await asyncio.to_thread(pinecone.list_indexes)).names())

        logger.info(
            f"✅ Pinecone connection successful! API key: {mask_secret(settings.PINECONE_API_KEY)}, "
            f"available indexes: {', '.join(index_names) or 'None'}"
        )

        if settings.PINECONE_INDEX_NAME in index_names:
            stats = await asyncio.to_thread(pinecone.Index(settings.PINECONE_INDEX_NAME).describe_index_stats)
            logger.info(f'Index "{settings.PINECONE_INDEX_NAME}" exists, vectors in index: {stats.total_vector_count or 0}')
        else:
            logger.warning(
                f'⚠️  Index "{settings.PINECONE_INDEX_NAME}" not found. Create it in the Pinecone dashboard '
                f"with {RECOMMENDED_DIMENSION} dimensions (text-embedding-3-small) and the {RECOMMENDED_METRIC} metric."
            )

        return True
    except Exception as e:
        logger.error(f"❌ Pinecone connection failed: {e}")
        hint = vector_store_hint(str(e))
        if hint:
            logger.warning(f"💡 Tip: {hint}")
        return False


async def run_all_checks(settings: Optional[Settings] = None) -> Dict[str, bool]:
    """Run every check and log a summary.

    Returns:
        Outcome per service
    """
    settings = settings or get_settings()

    results = {
        "supabase": await check_relational_store(settings),
        "mongodb": await check_document_store(settings),
        "pinecone": await check_vector_store(settings),
    }

    passed = sum(results.values())
    for service, ok in results.items():
        logger.info(f"{service}: {'✅ Connected' if ok else '❌ Failed'}")
    logger.info(f"Result: {passed}/{len(results)} connections successful")

    if all(results.values()):
        logger.info("🎉 All database connections are working!")
    else:
        logger.warning("⚠️  Some connections failed. Please fix them before proceeding.")

    return results


def main() -> int:
    """Run the diagnostics and return the process exit code."""
    try:
        results = asyncio.run(run_all_checks())
    except Exception as e:
        logger.error(f"❌ Fatal error: {e}", exc_info=True)
        return 1

    return 0 if all(results.values()) else 1
