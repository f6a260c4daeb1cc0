"""
JSON file persistence adapter.

The whole collection lives in one file holding a JSON array of
``{id, name, description}`` objects. Every mutating call reads the file,
changes the list in memory and rewrites it wholesale.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional
import json
import logging
import os
import threading

from conceptos.core.errors import PersistenceError
from conceptos.domain.concepts import (
    Concept,
    ConceptDraft,
    ConceptPatch,
    concept_from_mapping,
    matches,
)

from .base import ConceptRepository

logger = logging.getLogger(__name__)


def load(path: Path) -> list[dict]:
    """Read the raw records. A missing file is an empty collection."""
    if not path.exists():
        return []
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = f.read()
    except OSError as exc:
        raise PersistenceError(f"No se pudo leer {path}") from exc
    if not raw.strip():
        return []
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise PersistenceError(f"Archivo de datos corrupto: {path}") from exc
    if not isinstance(data, list):
        raise PersistenceError(f"Archivo de datos corrupto: {path} no contiene una lista")
    return data


def save(path: Path, records: list[dict]) -> None:
    """Rewrite the file; the temp file + rename keeps readers from seeing half a write."""
    tmp = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp.write_text(json.dumps(records, ensure_ascii=False, indent=2), encoding="utf-8")
        os.replace(tmp, path)
    except OSError as exc:
        raise PersistenceError(f"No se pudo escribir {path}") from exc


class JsonConceptRepository(ConceptRepository):
    """File-backed store. Ids are ``max(id) + 1``.

    Mutations hold ``self._lock`` for the whole read-modify-write cycle, so two
    requests in the same process cannot lose each other's update. Other
    processes writing the same file are not coordinated.
    """

    name = "json"

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def init(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise PersistenceError(f"No se pudo crear {self.path.parent}") from exc
        # fail at startup rather than on the first request
        self._read()
        logger.info("JSON storage ready at %s", self.path)

    def _read(self) -> List[Concept]:
        try:
            return [concept_from_mapping(item) for item in load(self.path)]
        except (KeyError, TypeError, ValueError) as exc:
            raise PersistenceError(f"Registro invalido en {self.path}") from exc

    def _write(self, concepts: List[Concept]) -> None:
        save(self.path, [c.to_dict() for c in concepts])

    def list_all(self) -> List[Concept]:
        return self._read()

    def find_by_id(self, concept_id: int) -> Optional[Concept]:
        for concept in self._read():
            if concept.id == concept_id:
                return concept
        return None

    def insert(self, draft: ConceptDraft) -> Concept:
        with self._lock:
            concepts = self._read()
            next_id = max((c.id for c in concepts), default=0) + 1
            concept = Concept(id=next_id, name=draft.name, description=draft.description)
            concepts.append(concept)
            self._write(concepts)
            return concept

    def update_by_id(self, concept_id: int, patch: ConceptPatch) -> Optional[Concept]:
        with self._lock:
            concepts = self._read()
            for idx, concept in enumerate(concepts):
                if concept.id == concept_id:
                    updated = patch.apply(concept)
                    concepts[idx] = updated
                    self._write(concepts)
                    return updated
            return None

    def delete_by_id(self, concept_id: int) -> bool:
        with self._lock:
            concepts = self._read()
            remaining = [c for c in concepts if c.id != concept_id]
            if len(remaining) == len(concepts):
                return False
            self._write(remaining)
            return True

    def delete_all(self) -> int:
        with self._lock:
            concepts = self._read()
            self._write([])
            return len(concepts)

    def search(self, term: str) -> List[Concept]:
        return [c for c in self._read() if matches(c, term)]

    def stats(self) -> dict:
        concepts = self._read()
        return {
            "count": len(concepts),
            "max_id": max((c.id for c in concepts), default=None),
        }
