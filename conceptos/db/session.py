"""Engine/session helpers for the SQL backend."""
from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from conceptos.core.config import get_settings

Base = declarative_base()


def _resolve_url(url: Optional[str]) -> str:
    value = (url if url is not None else get_settings().database_url or "").strip()
    if not value:
        raise RuntimeError("DATABASE_URL must be configured to use the SQL backend.")
    return value


@lru_cache
def _engine_for(url: str) -> Engine:
    return create_engine(url, future=True, pool_pre_ping=True)


def get_engine(url: Optional[str] = None) -> Engine:
    return _engine_for(_resolve_url(url))


@lru_cache
def _sessionmaker_for(url: str):
    return sessionmaker(bind=_engine_for(url), autoflush=False, autocommit=False, future=True)


@contextmanager
def get_session(url: Optional[str] = None) -> Iterator[Session]:
    session: Session = _sessionmaker_for(_resolve_url(url))()
    try:
        yield session
    finally:
        session.close()


def dispose_engine(url: Optional[str] = None) -> None:
    """Close pooled connections and forget the cached engine for ``url``."""
    resolved = _resolve_url(url)
    _engine_for(resolved).dispose()
    _engine_for.cache_clear()
    _sessionmaker_for.cache_clear()
