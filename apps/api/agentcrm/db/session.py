import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from agentcrm.core.errors import StorageError

logger = logging.getLogger(__name__)


def create_db_engine(database_url: str) -> Engine:
    """Create the engine for DATABASE_URL with backend-specific connect args."""
    url = make_url(database_url)
    connect_args = {}
    backend = url.get_backend_name()
    if backend.startswith("postgresql"):
        connect_args["options"] = "-c timezone=utc"
    elif backend == "sqlite":
        # Sync dependencies open the session in the threadpool
        connect_args["check_same_thread"] = False
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def storage_guard(db: Session, action: str) -> Iterator[None]:
    """
    Run one datastore operation.

    Any SQLAlchemy failure rolls the session back and surfaces as
    StorageError, so no partial write outlives the request.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Storage failure during %s", action)
        raise StorageError(f"{action}: {exc}") from exc
