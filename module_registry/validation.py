"""
Input validation module for the module registry.

Provides validation for the path segments that address a module archive and
the digest helper used when logging stored archives.
"""

import hashlib
import logging
import re

from .config import config
from .exceptions import InvalidSegmentError

logger = logging.getLogger(__name__)

SEGMENT_PATTERN = re.compile(r"[A-Za-z0-9._+-]+")


def compute_sha256(data: bytes) -> str:
    """
    Compute SHA256 digest of an archive payload.

    Args:
        data: Bytes to hash

    Returns:
        String in format "sha256:<64 hex chars>"

    Example:
        >>> compute_sha256(b"hello")
        'sha256:2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    h = hashlib.sha256()
    h.update(data)
    return "sha256:" + h.hexdigest()


def validate_segment(field: str, value: str, max_length: int | None = None) -> None:
    """
    Validate a single path segment before it becomes part of a storage path.

    Args:
        field: Segment role used in the error message ("namespace", "version", ...)
        value: Segment value taken from the request URL
        max_length: Longest accepted value. Defaults to config.MAX_SEGMENT_LENGTH

    Raises:
        InvalidSegmentError: 400 Bad Request if the segment is unsafe

    Validation Rules:
        - Must be 1-{MAX_SEGMENT_LENGTH} characters (configurable)
        - Only alphanumeric characters, dots (.), hyphens (-), underscores (_) and plus (+)
        - Must not be "." or ".." (no directory traversal)

    Security:
        Prevents path traversal out of the registry root. Flask's default
        converter already refuses "/", the character set refuses "\\".

    Examples:
        >>> validate_segment("namespace", "acme")  # OK
        >>> validate_segment("version", "1.0.0-rc.1+build.5")  # OK
        >>> validate_segment("name", "..")  # Raises 400
    """
    limit = max_length if max_length is not None else config.MAX_SEGMENT_LENGTH

    if not value or len(value) > limit:
        logger.warning(f"Invalid {field} length: {len(value or '')}")
        raise InvalidSegmentError(field, value, f"must be 1-{limit} characters")

    if value in (".", ".."):
        logger.warning(f"Rejected traversal segment for {field}: {value}")
        raise InvalidSegmentError(field, value, "relative directory references are not allowed")

    if not SEGMENT_PATTERN.fullmatch(value):
        logger.warning(f"Invalid {field} format: {value}")
        raise InvalidSegmentError(
            field, value, "only alphanumeric, dots, hyphens, underscores, and plus signs allowed"
        )

    logger.debug(f"{field.capitalize()} validated: {value}")


def validate_coordinate(namespace: str, name: str, system: str, max_length: int | None = None) -> None:
    """
    Validate the (namespace, name, system) triple of a module coordinate.

    Raises:
        InvalidSegmentError: 400 Bad Request on the first unsafe segment
    """
    validate_segment("namespace", namespace, max_length)
    validate_segment("name", name, max_length)
    validate_segment("system", system, max_length)


def validate_version(version: str, max_length: int | None = None) -> None:
    """Validate a module version segment."""
    validate_segment("version", version, max_length)
