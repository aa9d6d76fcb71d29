"""
Unit tests for input validation utilities.
"""

import pytest

from src.core.models import FileStatus
from src.utils.validation import (
    ValidationError,
    validate_file_id,
    validate_file_path,
    validate_limit,
    validate_page,
    validate_status,
)


@pytest.mark.unit
class TestValidateFileId:
    """Tests for validate_file_id"""

    @pytest.mark.parametrize("file_id", [
        "f1",
        "6f1c2a0e-3b7d-4f7e-9a51-1d2b3c4d5e6f",
        "batch_2025.03",
    ])
    def test_valid_ids(self, file_id):
        assert validate_file_id(file_id) == file_id

    def test_strips_whitespace(self):
        assert validate_file_id("  f1 ") == "f1"

    @pytest.mark.parametrize("file_id", ["", "   "])
    def test_empty_rejected(self, file_id):
        with pytest.raises(ValidationError):
            validate_file_id(file_id)

    @pytest.mark.parametrize("file_id", ["f1&select=*", "a b", "id=eq.1", "x/y"])
    def test_filter_characters_rejected(self, file_id):
        """Characters that could alter a REST filter are refused"""
        with pytest.raises(ValidationError, match="invalid characters"):
            validate_file_id(file_id)

    def test_too_long_rejected(self):
        with pytest.raises(ValidationError, match="maximum length"):
            validate_file_id("a" * 256)


@pytest.mark.unit
class TestValidateStatus:
    """Tests for validate_status"""

    def test_known_status(self):
        assert validate_status("added") == FileStatus.ADDED

    def test_case_and_whitespace_ignored(self):
        assert validate_status(" Uploaded ") == FileStatus.UPLOADED

    def test_unknown_status(self):
        with pytest.raises(ValidationError, match="must be one of"):
            validate_status("archived")


@pytest.mark.unit
class TestValidatePagination:
    """Tests for validate_limit and validate_page"""

    def test_limit_in_range(self):
        assert validate_limit(100) == 100
        assert validate_limit(1000) == 1000

    @pytest.mark.parametrize("limit", [0, -5])
    def test_non_positive_limit(self, limit):
        with pytest.raises(ValidationError, match="positive integer"):
            validate_limit(limit)

    def test_limit_over_max(self):
        with pytest.raises(ValidationError, match="exceeds maximum of 1000"):
            validate_limit(1001)

    def test_custom_max(self):
        with pytest.raises(ValidationError, match="batch_size exceeds maximum of 10"):
            validate_limit(11, "batch_size", max_limit=10)

    def test_non_integer_limit(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            validate_limit("10")

    def test_page(self):
        assert validate_page(0) == 0
        assert validate_page(3) == 3

    def test_negative_page(self):
        with pytest.raises(ValidationError, match="non-negative"):
            validate_page(-1)


@pytest.mark.unit
class TestValidateFilePath:
    """Tests for validate_file_path"""

    def test_valid_path(self):
        assert validate_file_path(" data/file.csv ") == "data/file.csv"

    def test_empty_path(self):
        with pytest.raises(ValidationError):
            validate_file_path("")

    def test_null_byte(self):
        with pytest.raises(ValidationError, match="null bytes"):
            validate_file_path("data/\x00file.csv")
