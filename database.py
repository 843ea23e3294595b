import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from config import get_settings

logger = logging.getLogger(__name__)

DATABASE_URL = get_settings().database_url


# ============================================================
# SQLALCHEMY SETUP
# ============================================================

def _engine_kwargs(url: str) -> dict:
    # SQLite connections are shared across the request threadpool
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return kwargs
    return {"pool_pre_ping": True}


engine = create_engine(DATABASE_URL, **_engine_kwargs(DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for all SQLAlchemy models
Base = declarative_base()


def init_db():
    """Create any missing tables for the registered models."""
    import models  # noqa: F401  (registers tables on Base.metadata)

    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ready (%s)", engine.url.get_backend_name())


# ============================================================
# FASTAPI DEPENDENCY
# ============================================================

def get_db():
    """
    FastAPI-compatible database dependency.
    Opens a SQLAlchemy session and closes it automatically.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
