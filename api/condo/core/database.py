from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from condo.core.config import settings


class Base(DeclarativeBase):
    pass


# Sync engine: only scripts and migrations write to the database directly.
# The payments screen goes through the GraphQL store.
engine = create_engine(settings.database_url_sync, pool_pre_ping=True)
SessionLocal = sessionmaker(bind=engine, expire_on_commit=False)
