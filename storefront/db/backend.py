import logging

from fastapi import Request

from storefront.core.config import Settings, settings as default_settings
from storefront.db.database import DatabaseStorage
from storefront.db.memory import MemStorage
from storefront.db.seed import seed_catalog
from storefront.db.session import make_engine
from storefront.db.storage import Storage

logger = logging.getLogger(__name__)


def build_storage(settings: Settings = default_settings) -> Storage:
    if settings.STORAGE_BACKEND == "database":
        storage = DatabaseStorage(make_engine(settings.DATABASE_URL))
    else:
        storage = MemStorage()
    logger.info("Using %s storage backend", settings.STORAGE_BACKEND)

    if settings.SEED_CATALOG:
        seed_catalog(storage)
    return storage


def get_storage(request: Request) -> Storage:
    return request.app.state.storage
