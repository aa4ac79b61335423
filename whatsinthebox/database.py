"""Database engine, session factory and declarative base."""
import logging
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from whatsinthebox.config import settings

logger = logging.getLogger(__name__)

connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(settings.DATABASE_URL, echo=settings.DEBUG, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db(bind=None) -> None:
    """Create the storage tables if they do not exist yet."""
    # Models must be imported so they register with Base.metadata
    from whatsinthebox import models  # noqa: F401

    bind = bind if bind is not None else engine
    logger.info("Ensuring database tables are created")
    Base.metadata.create_all(bind=bind)
    logger.info("Database tables confirmed")


def get_db() -> Iterator[Session]:
    """FastAPI dependency returning a new database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
