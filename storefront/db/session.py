from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from storefront.core.config import settings

IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def make_engine(database_url: str = settings.DATABASE_URL) -> Engine:
    # check_same_thread is needed for SQLite, remove for PostgreSQL
    connect_args = {"check_same_thread": False} if "sqlite" in database_url else {}
    if database_url in IN_MEMORY_URLS:
        # One shared connection, otherwise every checkout sees an empty database
        return create_engine(database_url, connect_args=connect_args, poolclass=StaticPool)
    return create_engine(database_url, connect_args=connect_args)


def create_db_and_tables(engine: Engine) -> None:
    # Import models to ensure they are registered with SQLModel metadata
    import storefront.models  # noqa: F401

    SQLModel.metadata.create_all(engine)
