"""
Utility functions package for the AI Career Coach backend.

This package provides common utility functions for:
- Text cleanup of generated output
- Normalization of generated documents
- Timezone handling

Usage:
    from careercoach.utils.text_processing import strip_code_fences
    from careercoach.utils.validation import normalize_enum, normalize_document
"""

from datetime import datetime, timezone

from .text_processing import (
    clean_text,
    strip_code_fences,
    format_bullet_list
)

from .validation import (
    EnumField,
    DocumentSchema,
    normalize_enum,
    coerce_number,
    normalize_document,
    normalize_skills
)


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes (as returned by SQLite) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


__all__ = [
    # Text processing
    "clean_text",
    "strip_code_fences",
    "format_bullet_list",

    # Validation
    "EnumField",
    "DocumentSchema",
    "normalize_enum",
    "coerce_number",
    "normalize_document",
    "normalize_skills",

    # Time
    "utcnow",
    "as_utc",
]
