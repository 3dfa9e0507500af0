"""Test validation utilities."""

import pytest
from lrcfetch.utils.validation import (
    validate_duration,
    validate_query_text,
    validate_provider_name,
)
from lrcfetch.exceptions import ValidationError


class TestValidation:
    """Test validation functions."""

    def test_validate_duration_valid(self):
        assert validate_duration(0) == 0
        assert validate_duration(212_000) == 212_000

    def test_validate_duration_invalid(self):
        for value in [-1, 1.5, "212000", None, True]:
            with pytest.raises(ValidationError):
                validate_duration(value)

    def test_validate_query_text(self):
        assert validate_query_text("Rick Astley", "artist") == "Rick Astley"

        for value in ["", "   ", None]:
            with pytest.raises(ValidationError, match="Artist cannot be empty"):
                validate_query_text(value, "artist")

    def test_validate_provider_name(self):
        assert validate_provider_name("lrclib") == "lrclib"
        assert validate_provider_name(" KuGou ") == "kugou"

        with pytest.raises(ValidationError):
            validate_provider_name("musixmatch")
