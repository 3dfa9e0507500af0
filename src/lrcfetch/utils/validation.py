"""Validation utilities."""

from ..config import KNOWN_PROVIDERS
from ..exceptions import ValidationError


def validate_duration(duration_ms: int) -> int:
    """Validate a track duration given in milliseconds."""
    if isinstance(duration_ms, bool) or not isinstance(duration_ms, int):
        raise ValidationError(
            f"Duration must be an integer number of milliseconds, got {duration_ms!r}"
        )
    if duration_ms < 0:
        raise ValidationError("Duration cannot be negative")
    return duration_ms


def validate_query_text(value: str, field: str) -> str:
    """Validate that an artist/title field is a non-blank string."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field.capitalize()} cannot be empty")
    return value


def validate_provider_name(name: str) -> str:
    """Validate and normalize a provider name."""
    normalized = name.strip().lower()
    if normalized not in KNOWN_PROVIDERS:
        raise ValidationError(
            f"Unknown lyrics provider: {name}. "
            f"Choose from: {', '.join(KNOWN_PROVIDERS)}"
        )
    return normalized
