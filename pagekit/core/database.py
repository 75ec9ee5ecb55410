"""Database setup and query execution for SQLAlchemy 2.0."""

from __future__ import annotations

from collections.abc import Generator
from functools import lru_cache
from typing import Any

from sqlalchemy import Engine, Select, create_engine, func, select
from sqlalchemy.orm import Session, sessionmaker

from pagekit.core.config import get_settings


@lru_cache
def get_engine() -> Engine:
    """Return engine built from settings on first use."""
    settings = get_settings()
    return create_engine(settings.database_url, echo=settings.debug, pool_pre_ping=True)


@lru_cache
def get_session_factory() -> sessionmaker[Session]:
    """Return session factory bound to the shared engine."""
    return sessionmaker(get_engine(), class_=Session, expire_on_commit=False)


def close_engine() -> None:
    """Dispose the shared engine if it was ever built."""
    if get_engine.cache_info().currsize:
        get_engine().dispose()
    get_session_factory.cache_clear()
    get_engine.cache_clear()


def get_db_session() -> Generator[Session, None, None]:
    """FastAPI dependency that provides DB session per request."""
    with get_session_factory()() as session:
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise


def selects_single_entity(stmt: Select) -> bool:
    """Return True for ``select(Model)`` style statements."""
    descriptions = stmt.column_descriptions
    if len(descriptions) != 1:
        return False
    entity = descriptions[0]["entity"]
    return entity is not None and descriptions[0]["expr"] is entity


class SessionQueryExecutor:
    """Runs select statements on a session.

    Single-entity selects yield ORM instances, other selects yield row mappings.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def fetch_all(self, stmt: Select) -> list[Any]:
        if selects_single_entity(stmt):
            return list(self.session.scalars(stmt).all())
        return list(self.session.execute(stmt).mappings().all())

    def count(self, stmt: Select) -> int:
        count_stmt = select(func.count()).select_from(stmt.subquery())
        return int(self.session.scalar(count_stmt) or 0)
