"""Concept data access backed by SQLAlchemy."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterable, Iterator, List, Optional

from sqlalchemy import delete, func, inspect, or_, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from conceptos.core.errors import PersistenceError
from conceptos.db.create_tables import create_all
from conceptos.db.models import ConceptRecord
from conceptos.db.session import dispose_engine, get_engine, get_session
from conceptos.domain.concepts import Concept, ConceptDraft, ConceptPatch, concept_from_mapping

from .base import ConceptRepository

logger = logging.getLogger(__name__)

# largest value a SQL BIGINT / SQLite INTEGER can hold
MAX_ROW_ID = 2**63 - 1


def _to_concept(entity: ConceptRecord) -> Concept:
    return Concept(id=entity.id, name=entity.name, description=entity.description or "")


def _id_in_range(concept_id: int) -> bool:
    return 0 < concept_id <= MAX_ROW_ID


class SQLConceptRepository(ConceptRepository):
    """Table-backed store. Ids come from the table's auto-increment counter."""

    name = "sql"

    def __init__(self, database_url: Optional[str] = None) -> None:
        self.database_url = database_url

    @contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            with get_session(self.database_url) as session:
                yield session
        except SQLAlchemyError as exc:
            raise PersistenceError("Error de base de datos") from exc

    def _table_exists(self) -> bool:
        """A store whose table was never created reads as empty."""
        try:
            return inspect(get_engine(self.database_url)).has_table(ConceptRecord.__tablename__)
        except SQLAlchemyError as exc:
            raise PersistenceError("Error de base de datos") from exc

    def init(self) -> None:
        try:
            create_all(self.database_url)
        except SQLAlchemyError as exc:
            raise PersistenceError("No se pudo crear el esquema") from exc
        with self._session() as session:
            session.execute(text("SELECT 1"))
        logger.info("SQL storage ready (%s)", ConceptRecord.__tablename__)

    def close(self) -> None:
        dispose_engine(self.database_url)
        logger.info("SQL engine disposed")

    def list_all(self) -> List[Concept]:
        if not self._table_exists():
            return []
        with self._session() as session:
            stmt = select(ConceptRecord).order_by(ConceptRecord.id)
            return [_to_concept(e) for e in session.execute(stmt).scalars().all()]

    def find_by_id(self, concept_id: int) -> Optional[Concept]:
        if not _id_in_range(concept_id) or not self._table_exists():
            return None
        with self._session() as session:
            entity = session.get(ConceptRecord, concept_id)
            return _to_concept(entity) if entity else None

    def insert(self, draft: ConceptDraft) -> Concept:
        entity = ConceptRecord(name=draft.name, description=draft.description)
        with self._session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return _to_concept(entity)

    def update_by_id(self, concept_id: int, patch: ConceptPatch) -> Optional[Concept]:
        if not _id_in_range(concept_id) or not self._table_exists():
            return None
        with self._session() as session:
            entity = session.get(ConceptRecord, concept_id)
            if not entity:
                return None
            if patch.name is not None:
                entity.name = patch.name
            if patch.description is not None:
                entity.description = patch.description
            session.commit()
            session.refresh(entity)
            return _to_concept(entity)

    def delete_by_id(self, concept_id: int) -> bool:
        if not _id_in_range(concept_id) or not self._table_exists():
            return False
        with self._session() as session:
            result = session.execute(delete(ConceptRecord).where(ConceptRecord.id == concept_id))
            session.commit()
            return result.rowcount > 0

    def delete_all(self) -> int:
        if not self._table_exists():
            return 0
        with self._session() as session:
            result = session.execute(delete(ConceptRecord))
            session.commit()
            return int(result.rowcount or 0)

    def search(self, term: str) -> List[Concept]:
        if not self._table_exists():
            return []
        with self._session() as session:
            stmt = (
                select(ConceptRecord)
                .where(
                    or_(
                        ConceptRecord.name.icontains(term, autoescape=True),
                        ConceptRecord.description.icontains(term, autoescape=True),
                    )
                )
                .order_by(ConceptRecord.id)
            )
            return [_to_concept(e) for e in session.execute(stmt).scalars().all()]

    def stats(self) -> dict:
        if not self._table_exists():
            return {"count": 0, "max_id": None}
        with self._session() as session:
            count, max_id = session.execute(
                select(func.count(ConceptRecord.id), func.max(ConceptRecord.id))
            ).one()
            return {"count": int(count or 0), "max_id": max_id}

    def import_concepts(self, records: Iterable[dict]) -> int:
        """Insert or overwrite records keeping their ids (JSON -> SQL migration)."""
        imported = 0
        with self._session() as session:
            for item in records:
                concept = concept_from_mapping(item)
                session.merge(
                    ConceptRecord(id=concept.id, name=concept.name, description=concept.description)
                )
                imported += 1
            session.commit()
        return imported
