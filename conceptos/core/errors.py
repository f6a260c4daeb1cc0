"""Error taxonomy shared by repositories, services and routers."""
from __future__ import annotations

from typing import Any, Optional


class ConceptError(Exception):
    """Base error carrying the HTTP status and a JSON-friendly context."""

    code = "error"
    status_code = 500

    def __init__(self, message: str, *, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = dict(context or {})

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, **self.context}


class ValidationError(ConceptError):
    """Raised/returned when client input does not satisfy the concept rules."""

    code = "invalid"
    status_code = 400


class NotFoundError(ConceptError):
    """Returned when no concept has the requested id."""

    code = "not_found"
    status_code = 404


class ParseError(ConceptError):
    """Raised when a request body is not a JSON object."""

    code = "invalid_json"
    status_code = 400


class PersistenceError(ConceptError):
    """Raised when the storage backend cannot be read or written."""

    code = "persistence"
    status_code = 500
