"""
Hash verification for downloaded archives.

This module provides the default verification collaborator used by the
transfer workflow:
- SHA256, SHA512, SHA1 and MD5 hash computation
- "algorithm:hash" prefixed hash strings (plain hashes default to SHA256)
- Hash format validation (hex characters, expected length)
- Timing-attack resistant comparison
"""

import hashlib
import logging
import secrets
from pathlib import Path
from typing import Tuple, Union

from provisionkit.core.exceptions import HashFormatError, IntegrityError

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "sha256"

_EXPECTED_LENGTHS = {"md5": 32, "sha1": 40, "sha256": 64, "sha512": 128}


def compute_file_hash(file_path: Union[str, Path], algorithm: str = "sha256") -> str:
    """
    Compute cryptographic hash of file.

    Args:
        file_path: Path to file
        algorithm: Hash algorithm ('sha256', 'sha512', 'sha1', 'md5')

    Returns:
        Hex string of hash

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If algorithm is not supported

    Example:
        >>> hash_value = compute_file_hash(Path('file.tar.gz'), 'sha256')
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    algorithm = algorithm.lower()
    if algorithm not in _EXPECTED_LENGTHS:
        raise ValueError(f"Unsupported hash algorithm: {algorithm}")
    if algorithm in ("md5", "sha1"):
        logger.warning(
            f"{algorithm.upper()} is cryptographically weak. "
            "Use SHA256 or SHA512 instead."
        )

    hasher = hashlib.new(algorithm)
    with open(file_path, "rb") as f:
        while chunk := f.read(8192):
            hasher.update(chunk)

    return hasher.hexdigest()


def split_hash(expected_hash: str) -> Tuple[str, str]:
    """
    Split an optionally prefixed hash into (algorithm, hex digest).

    Example:
        >>> split_hash("sha512:ABCD")
        ('sha512', 'abcd')
        >>> split_hash("abcd")
        ('sha256', 'abcd')
    """
    if ":" in expected_hash:
        algorithm, value = expected_hash.split(":", 1)
        return algorithm.strip().lower(), value.strip().lower()
    return DEFAULT_ALGORITHM, expected_hash.strip().lower()


def validate_hash(expected_hash: str, file_path: Union[str, Path] = "") -> str:
    """
    Check that an expected hash is well formed for its algorithm.

    Returns:
        The algorithm name

    Raises:
        HashFormatError: If the hash is malformed or the algorithm unsupported
    """
    algorithm, hash_value = split_hash(expected_hash)
    if not _is_valid_hash_format(hash_value, algorithm):
        raise HashFormatError(str(file_path), expected_hash, algorithm)
    return algorithm


def verify_file(
    file_path: Union[str, Path], expected_hash: str, verbose: bool = False
) -> bool:
    """
    Verify file matches expected hash.

    Args:
        file_path: Path to file
        expected_hash: Expected hash, optionally prefixed with "algorithm:"
        verbose: Log verification progress at INFO level

    Returns:
        True when the hash matches

    Raises:
        IntegrityError: If the file is missing or the hash does not match
        HashFormatError: If the expected hash is malformed
    """
    file_path = Path(file_path)
    algorithm = validate_hash(expected_hash, file_path)
    hash_value = split_hash(expected_hash)[1]

    if verbose:
        logger.info(f"Verifying {file_path} ({algorithm})...")

    try:
        actual_hash = compute_file_hash(file_path, algorithm)
    except FileNotFoundError as e:
        raise IntegrityError(
            str(file_path), hash_value, message=f"File not found: {file_path}"
        ) from e

    if not _constant_time_compare(actual_hash, hash_value):
        raise IntegrityError(str(file_path), hash_value, actual_hash)

    if verbose:
        logger.info(f"  Hash verified for {file_path.name}")
    return True


def _constant_time_compare(a: str, b: str) -> bool:
    return secrets.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


def _is_valid_hash_format(hash_str: str, algorithm: str) -> bool:
    """
    Validate hash string format.

    Args:
        hash_str: Hash string to validate (lowercase)
        algorithm: Algorithm name

    Returns:
        True if format is valid
    """
    if not hash_str:
        return False

    if not all(c in "0123456789abcdef" for c in hash_str):
        return False

    expected_len = _EXPECTED_LENGTHS.get(algorithm)
    if expected_len is None:
        logger.error(f"Unsupported hash algorithm: {algorithm}")
        return False

    if len(hash_str) != expected_len:
        logger.error(
            f"Hash length {len(hash_str)} doesn't match expected "
            f"{expected_len} for {algorithm}"
        )
        return False

    return True
