import logging
from typing import Any, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError

from .errors import ConfigurationError, ExecutionError

logger = logging.getLogger(__name__)


def _resolve_engine(engine: Any | None = None, database_url: Optional[str] = None) -> Any:
    if engine is not None:
        return engine
    if not database_url:
        raise ConfigurationError("A database URL is required to run the migration (set MKUTIL_DATABASE_URL)")
    try:
        return create_engine(database_url)
    except (SQLAlchemyError, ImportError) as exc:
        raise ConfigurationError(f"Cannot create database engine: {exc}") from exc


def execute_statement(
    statement: str,
    *,
    engine: Any | None = None,
    database_url: Optional[str] = None,
) -> None:
    """Run one DDL statement in its own transaction. No retry."""
    resolved_engine = _resolve_engine(engine=engine, database_url=database_url)
    logger.debug("Executing statement on %s:\n%s", resolved_engine.url, statement)
    try:
        with resolved_engine.begin() as connection:
            connection.execute(text(statement))
    except SQLAlchemyError as exc:
        raise ExecutionError(statement, exc) from exc
    finally:
        if engine is None:
            resolved_engine.dispose()
