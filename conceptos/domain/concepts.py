"""Concept model and input rules. Pure Python, no I/O."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Mapping, Optional

from conceptos.core.errors import ValidationError
from conceptos.domain.result import Result

# Keys accepted on input; the Spanish spelling is what the original browser client sends.
FIELD_ALIASES = {
    "name": ("name", "nombre"),
    "description": ("description", "descripcion"),
}


@dataclass
class Concept:
    id: int
    name: str
    description: str = ""

    def to_dict(self) -> dict:
        return asdict(self)

    def to_response(self) -> dict:
        """Wire shape: the stored fields plus the Spanish keys the original browser client reads."""
        return {**self.to_dict(), "nombre": self.name, "descripcion": self.description}


@dataclass(frozen=True)
class ConceptDraft:
    name: str
    description: str = ""


@dataclass(frozen=True)
class ConceptPatch:
    name: Optional[str] = None
    description: Optional[str] = None

    def apply(self, concept: Concept) -> Concept:
        """Return a copy of ``concept`` with the provided fields replaced."""
        return Concept(
            id=concept.id,
            name=self.name if self.name is not None else concept.name,
            description=self.description if self.description is not None else concept.description,
        )


def pick_field(data: Mapping[str, Any], field: str) -> Any:
    """Return the first present alias of ``field`` (English key first), or None."""
    for key in FIELD_ALIASES[field]:
        if key in data and data[key] is not None:
            return data[key]
    return None


def concept_from_mapping(data: Mapping[str, Any]) -> Concept:
    """Build a Concept from a stored record, accepting legacy Spanish keys."""
    return Concept(
        id=int(data["id"]),
        name=str(pick_field(data, "name") or ""),
        description=str(pick_field(data, "description") or ""),
    )


def _text(value: Any, field: str) -> Result[Optional[str]]:
    if value is None:
        return Result.ok(None)
    if not isinstance(value, str):
        return Result.fail(ValidationError(f"El campo '{field}' debe ser texto"))
    return Result.ok(value.strip())


def validate_draft(data: Mapping[str, Any]) -> Result[ConceptDraft]:
    """Validate a create payload: name required and non-blank, description optional."""
    name = _text(pick_field(data, "name"), "name")
    if not name.is_success:
        return Result.fail(name.error)
    if not name.value:
        return Result.fail(ValidationError("El nombre es obligatorio"))
    description = _text(pick_field(data, "description"), "description")
    if not description.is_success:
        return Result.fail(description.error)
    return Result.ok(ConceptDraft(name=name.value, description=description.value or ""))


def validate_patch(data: Mapping[str, Any]) -> Result[ConceptPatch]:
    """Validate an update payload. Only provided fields are changed; ``id`` is ignored."""
    name = _text(pick_field(data, "name"), "name")
    if not name.is_success:
        return Result.fail(name.error)
    if name.value is not None and not name.value:
        return Result.fail(ValidationError("El nombre no puede estar vacío"))
    description = _text(pick_field(data, "description"), "description")
    if not description.is_success:
        return Result.fail(description.error)
    return Result.ok(ConceptPatch(name=name.value, description=description.value))


def matches(concept: Concept, term: str) -> bool:
    """Case-insensitive substring match against name or description."""
    needle = term.casefold()
    return needle in concept.name.casefold() or needle in concept.description.casefold()
