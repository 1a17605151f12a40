"""Field validators shared by several request schemas."""

from typing import Any

SUPPORTED_LANGUAGES = frozenset({"en", "de"})


def normalize_email(value: Any) -> Any:
    """Trim and lower-case before EmailStr validation; non-strings pass through."""
    if isinstance(value, str):
        return value.strip().lower()
    return value


def validate_language(value: str) -> str:
    language = value.strip().lower()
    if language not in SUPPORTED_LANGUAGES:
        raise ValueError(f"language must be one of {sorted(SUPPORTED_LANGUAGES)}")
    return language
