"""Normalization and validation of generated documents."""
import copy
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple


@dataclass(frozen=True)
class EnumField:
    """A field constrained to a closed set of uppercase string values."""
    allowed: FrozenSet[str]
    default: str

    def __post_init__(self):
        if self.default not in self.allowed:
            raise ValueError(f"Default {self.default!r} is not one of {sorted(self.allowed)}")


@dataclass(frozen=True)
class DocumentSchema:
    """Shape a generated document is normalized to."""
    enum_fields: Mapping[str, EnumField] = field(default_factory=dict)
    list_fields: Tuple[str, ...] = ()
    number_fields: Mapping[str, float] = field(default_factory=dict)


def normalize_enum(raw: Any, allowed: FrozenSet[str], default: str) -> str:
    """
    Case-fold a raw value and validate it against an allowed set.

    Returns the canonical uppercase member, or ``default`` when the value is
    missing, not a string, or outside the set.
    """
    if not isinstance(raw, str):
        return default
    value = raw.strip().upper()
    return value if value in allowed else default


def coerce_number(raw: Any, default: float) -> float:
    """Coerce a raw value to float, falling back to ``default``."""
    if isinstance(raw, bool):
        return default
    if isinstance(raw, (int, float)):
        return float(raw)
    if isinstance(raw, str):
        try:
            return float(raw.strip().rstrip("%"))
        except ValueError:
            return default
    return default


def normalize_document(document: Dict[str, Any], schema: DocumentSchema) -> Dict[str, Any]:
    """
    Normalize an untrusted generated document against a schema.

    - every enum field holds a member of its allowed set
    - every list field is present, falling back to an empty list
    - every number field is a float, falling back to its declared default

    The input is not modified; unknown keys are carried over unchanged.
    """
    normalized = copy.deepcopy(document)

    for name, enum_field in schema.enum_fields.items():
        normalized[name] = normalize_enum(normalized.get(name), enum_field.allowed, enum_field.default)

    for name in schema.list_fields:
        value = normalized.get(name)
        normalized[name] = list(value) if isinstance(value, (list, tuple)) else []

    for name, default in schema.number_fields.items():
        normalized[name] = coerce_number(normalized.get(name), default)

    return normalized


def normalize_skills(skills: Optional[Any]) -> list:
    """Accept a list or a comma-separated string of skills."""
    if skills is None:
        return []
    if isinstance(skills, str):
        skills = skills.split(",")
    return [str(skill).strip() for skill in skills if str(skill).strip()]
