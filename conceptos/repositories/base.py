"""Abstract repository interface for concepts."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from conceptos.domain.concepts import Concept, ConceptDraft, ConceptPatch


class ConceptRepository(ABC):
    """Contract shared by every storage backend.

    Missing ids are reported with ``None``/``False``; only failures of the
    backing store itself raise (``PersistenceError``).
    """

    name = "abstract"

    def init(self) -> None:
        """Prepare the backing store at startup."""

    def close(self) -> None:
        """Release resources at shutdown."""

    @abstractmethod
    def list_all(self) -> List[Concept]:
        """Return every stored concept, in storage order."""
        ...

    @abstractmethod
    def find_by_id(self, concept_id: int) -> Optional[Concept]:
        ...

    @abstractmethod
    def insert(self, draft: ConceptDraft) -> Concept:
        """Persist a new concept and return it with its id assigned."""
        ...

    @abstractmethod
    def update_by_id(self, concept_id: int, patch: ConceptPatch) -> Optional[Concept]:
        """Apply the provided fields only. Returns None when the id is unknown."""
        ...

    @abstractmethod
    def delete_by_id(self, concept_id: int) -> bool:
        ...

    @abstractmethod
    def delete_all(self) -> int:
        """Remove every concept and return how many were removed."""
        ...

    @abstractmethod
    def search(self, term: str) -> List[Concept]:
        """Case-insensitive substring match against name or description."""
        ...

    @abstractmethod
    def stats(self) -> dict:
        """Aggregate counts; always contains ``count``."""
        ...
