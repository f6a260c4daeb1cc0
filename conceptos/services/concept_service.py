"""Concept use cases: validate input, delegate to the repository, report outcomes."""
from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from conceptos.core.errors import NotFoundError, ValidationError
from conceptos.domain.concepts import Concept, validate_draft, validate_patch
from conceptos.domain.result import Result
from conceptos.repositories.base import ConceptRepository

logger = logging.getLogger(__name__)


def _not_found(concept_id: int) -> NotFoundError:
    return NotFoundError("Concepto no encontrado", context={"id": concept_id})


class ConceptService:
    """Stateless between calls; the repository owns every record."""

    def __init__(self, repository: ConceptRepository) -> None:
        self.repository = repository

    # -------------------------- create --------------------------
    def create(self, data: Mapping[str, Any]) -> Result[Concept]:
        draft = validate_draft(data)
        if not draft.is_success:
            return Result.fail(draft.error)
        concept = self.repository.insert(draft.value)
        logger.info("Concept %s created", concept.id)
        return Result.ok(concept)

    # -------------------------- read --------------------------
    def get_all(self) -> List[Concept]:
        return self.repository.list_all()

    def get_by_id(self, concept_id: int) -> Result[Concept]:
        concept = self.repository.find_by_id(concept_id)
        if concept is None:
            return Result.fail(_not_found(concept_id))
        return Result.ok(concept)

    def search(self, term: Optional[str]) -> Result[List[Concept]]:
        # only an absent or empty q is rejected; whitespace is a valid term
        if not term:
            return Result.fail(ValidationError('Parámetro de búsqueda "q" es requerido'))
        return Result.ok(self.repository.search(term))

    def stats(self) -> dict:
        return self.repository.stats()

    # -------------------------- update --------------------------
    def update(self, concept_id: int, data: Mapping[str, Any]) -> Result[Concept]:
        patch = validate_patch(data)
        if not patch.is_success:
            return Result.fail(patch.error)
        concept = self.repository.update_by_id(concept_id, patch.value)
        if concept is None:
            return Result.fail(_not_found(concept_id))
        logger.info("Concept %s updated", concept_id)
        return Result.ok(concept)

    # -------------------------- delete --------------------------
    def delete_one(self, concept_id: int) -> Result[bool]:
        if not self.repository.delete_by_id(concept_id):
            return Result.fail(_not_found(concept_id))
        logger.info("Concept %s deleted", concept_id)
        return Result.ok(True)

    def delete_all(self) -> Result[int]:
        removed = self.repository.delete_all()
        logger.info("All concepts deleted (%s)", removed)
        return Result.ok(removed)
