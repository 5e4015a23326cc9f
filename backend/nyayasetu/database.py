"""Storage backend selection"""
import logging

from fastapi import Request

from .config import Settings
from .storage import MemoryStorage, MongoStorage, Storage
from .storage.seed import seed_demo_accounts, seed_reference_data
from .utils.security import hash_password

logger = logging.getLogger(__name__)


async def init_storage(settings: Settings) -> Storage:
    """Create the configured storage backend and load initial data.

    When MongoDB is selected and cannot be reached the driver error
    propagates and startup fails.
    """
    if settings.use_mongo:
        logger.info("Using MongoDB storage: %s", settings.mongodb_db_name)
        storage: Storage = await MongoStorage.connect(
            settings.mongodb_uri,
            settings.mongodb_db_name,
            timeout_ms=settings.mongodb_timeout_ms,
        )
    else:
        logger.info("Using in-memory storage")
        storage = MemoryStorage()

    await seed_reference_data(storage)
    if settings.seed_demo_data and not settings.is_production:
        await seed_demo_accounts(storage, hash_password)
    return storage


def get_storage(request: Request) -> Storage:
    """Storage attached to the running application"""
    return request.app.state.storage
