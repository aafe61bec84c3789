import logging
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from core.config import settings
from core.errors import DatabaseError
from models.base import Base

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # Single shared connection so an in-memory database survives across sessions
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": 0,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "pool_recycle": settings.DB_POOL_MAX_AGE,
        "pool_pre_ping": True,
    }


engine = create_engine(
    settings.SQLALCHEMY_DATABASE_URI,
    future=True,
    **_engine_options(settings.SQLALCHEMY_DATABASE_URI),
)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def database_errors(message: str):
    """Turn persistence failures into a generic ``DatabaseError``; the cause is only logged."""
    try:
        yield
    except SQLAlchemyError:
        logger.exception(message)
        raise DatabaseError(message)


def database_version(db: Session) -> str:
    if db.get_bind().dialect.name == "sqlite":
        return db.execute(text("SELECT sqlite_version()")).scalar_one()
    return db.execute(text("SELECT version()")).scalar_one()


def check_connection() -> bool:
    try:
        with engine.connect() as conn:
            now = conn.execute(text("SELECT CURRENT_TIMESTAMP")).scalar_one()
    except SQLAlchemyError as exc:
        logger.error("Database connection failed: %s", exc)
        return False
    logger.info("Database connected successfully at: %s", now)
    return True


def create_tables() -> None:
    from models import dustbin, user  # noqa: F401

    Base.metadata.create_all(bind=engine)


def dispose_engine() -> None:
    engine.dispose()
    logger.info("Database pool has ended")
