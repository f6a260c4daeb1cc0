"""
Persistence adapters.

Both backends (JSON file and SQL table) implement ConceptRepository, so
services never know which one they are talking to.
"""
from __future__ import annotations

from conceptos.core.config import STORAGE_BACKENDS, Settings

from .base import ConceptRepository


def build_repository(settings: Settings) -> ConceptRepository:
    """Instantiate the backend selected by ``settings.storage_backend``."""
    backend = settings.storage_backend
    if backend == "json":
        from .json_storage import JsonConceptRepository

        return JsonConceptRepository(settings.data_file)
    if backend == "sql":
        from .sql_repository import SQLConceptRepository

        return SQLConceptRepository(settings.database_url)
    raise RuntimeError(f"Unknown STORAGE_BACKEND {backend!r}; expected one of {STORAGE_BACKENDS}.")


__all__ = ["ConceptRepository", "build_repository"]
