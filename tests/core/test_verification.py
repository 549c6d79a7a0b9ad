"""
Unit tests for hash verification.
"""

import hashlib

import pytest

from provisionkit.core.exceptions import HashFormatError, IntegrityError
from provisionkit.core.verification import (
    compute_file_hash,
    split_hash,
    validate_hash,
    verify_file,
)


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "archive.tar.gz"
    path.write_bytes(b"archive contents")
    return path


class TestComputeFileHash:
    """Test compute_file_hash."""

    def test_sha256(self, sample_file):
        """Test SHA256 digest matches hashlib."""
        expected = hashlib.sha256(b"archive contents").hexdigest()
        assert compute_file_hash(sample_file) == expected

    def test_sha512(self, sample_file):
        """Test SHA512 digest matches hashlib."""
        expected = hashlib.sha512(b"archive contents").hexdigest()
        assert compute_file_hash(sample_file, "sha512") == expected

    def test_missing_file(self, tmp_path):
        """Test missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            compute_file_hash(tmp_path / "missing")

    def test_unsupported_algorithm(self, sample_file):
        """Test unknown algorithm raises ValueError."""
        with pytest.raises(ValueError, match="Unsupported hash algorithm"):
            compute_file_hash(sample_file, "crc32")


class TestSplitHash:
    """Test split_hash."""

    def test_plain_hash_defaults_to_sha256(self):
        assert split_hash("ABCD") == ("sha256", "abcd")

    def test_prefixed_hash(self):
        assert split_hash("SHA512:abcd") == ("sha512", "abcd")


class TestValidateHash:
    """Test validate_hash."""

    def test_valid_hash_returns_algorithm(self):
        assert validate_hash("a" * 64) == "sha256"
        assert validate_hash("SHA512:" + "A" * 128) == "sha512"

    @pytest.mark.parametrize(
        "expected", ["not-a-hash", "sha256:zz", "a" * 63, "crc32:" + "a" * 8]
    )
    def test_malformed_hash(self, expected):
        with pytest.raises(HashFormatError):
            validate_hash(expected)


class TestVerifyFile:
    """Test verify_file."""

    def test_matching_hash(self, sample_file):
        """Test a matching hash returns True."""
        expected = hashlib.sha256(b"archive contents").hexdigest()
        assert verify_file(sample_file, expected) is True

    def test_uppercase_hash(self, sample_file):
        """Test verification is case-insensitive."""
        expected = hashlib.sha256(b"archive contents").hexdigest().upper()
        assert verify_file(sample_file, expected) is True

    def test_prefixed_algorithm(self, sample_file):
        """Test 'sha512:' prefix selects SHA512."""
        expected = hashlib.sha512(b"archive contents").hexdigest()
        assert verify_file(sample_file, f"sha512:{expected}") is True

    def test_mismatch(self, sample_file):
        """Test a mismatch raises IntegrityError with both hashes."""
        wrong = "0" * 64

        with pytest.raises(IntegrityError) as exc_info:
            verify_file(sample_file, wrong)

        assert exc_info.value.expected == wrong
        assert exc_info.value.actual == hashlib.sha256(b"archive contents").hexdigest()

    def test_missing_file(self, tmp_path):
        """Test a missing file is an integrity failure."""
        with pytest.raises(IntegrityError, match="File not found"):
            verify_file(tmp_path / "missing", "0" * 64)

    def test_invalid_length(self, sample_file):
        """Test a hash of the wrong length raises HashFormatError."""
        with pytest.raises(HashFormatError):
            verify_file(sample_file, "abc123")

    def test_non_hex(self, sample_file):
        """Test non-hex characters raise HashFormatError."""
        with pytest.raises(HashFormatError):
            verify_file(sample_file, "z" * 64)

    def test_hash_format_error_is_integrity_error(self, sample_file):
        """Test malformed hashes are still integrity failures for callers."""
        with pytest.raises(IntegrityError):
            verify_file(sample_file, "not-a-hash")
