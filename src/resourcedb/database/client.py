from contextlib import contextmanager
from typing import Any, Dict, Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from ..utils.logging import get_logger

logger = get_logger(__name__)


def get_engine(engine_url: str, echo: bool = False) -> Engine:
    return create_engine(engine_url, echo=echo)


def get_engine_from_config(config: Dict[str, Any]) -> Engine:
    """Build an engine from the `database` section of a loaded config."""
    database = config["database"]
    logger.debug(f"Creating engine for {database['url']}")
    return get_engine(database["url"], echo=database.get("echo", False))


def get_session(engine: Engine) -> Session:
    """Get a SQLAlchemy session (caller must close it)."""
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)()


@contextmanager
def session_context(engine: Engine) -> Generator[Session, None, None]:
    """
    Context manager for read sessions.

    Rolls back on error and always closes the session.

    Usage:
        with session_context(engine) as session:
            service = ResourceService(session, resource_type)
    """
    session = get_session(engine)
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
