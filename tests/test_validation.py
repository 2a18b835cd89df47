"""Tests for path segment validation."""

import pytest

from module_registry.exceptions import InvalidSegmentError
from module_registry.validation import (
    compute_sha256,
    validate_coordinate,
    validate_segment,
    validate_version,
)


def test_compute_sha256():
    assert compute_sha256(b"hello") == (
        "sha256:2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
    )


@pytest.mark.parametrize("value", ["acme", "terraform-aws-modules", "my_module", "AWS", "1.0.0", "1.0.0-rc.1+build.5"])
def test_accepts_ordinary_segments(value):
    validate_segment("name", value)


@pytest.mark.parametrize(
    "value",
    [
        "",
        ".",
        "..",
        "a/b",
        "a\\b",
        "../etc",
        "name with space",
        "name;rm",
        "\x00",
        "1.0.0\n",
        "acme\n",
    ],
)
def test_rejects_unsafe_segments(value):
    with pytest.raises(InvalidSegmentError) as exc_info:
        validate_segment("name", value)
    assert exc_info.value.status_code == 400
    assert exc_info.value.message.startswith("Invalid name")


def test_length_limit():
    validate_segment("namespace", "a" * 10, max_length=10)
    with pytest.raises(InvalidSegmentError, match="1-10 characters"):
        validate_segment("namespace", "a" * 11, max_length=10)


def test_coordinate_reports_offending_field():
    with pytest.raises(InvalidSegmentError) as exc_info:
        validate_coordinate("acme", "vpc", "..")
    assert exc_info.value.field == "system"


def test_version():
    validate_version("0.12.0")
    with pytest.raises(InvalidSegmentError) as exc_info:
        validate_version("..")
    assert exc_info.value.field == "version"


def test_version_rejects_trailing_newline():
    with pytest.raises(InvalidSegmentError) as exc_info:
        validate_version("1.0.0\n")
    assert exc_info.value.field == "version"
