"""
Private Terraform module registry backed by a plain directory tree.

This registry implements the module parts of the Terraform Module Registry
Protocol: service discovery, version listing, download redirection and
archive upload. Archives are stored as files, one per version, and the
directory layout is the only index.

Features:
    - Terraform remote service discovery
    - Version listing straight from the filesystem
    - Two-step download via the X-Terraform-Get header
    - Write-once uploads, safe under concurrent publishing
    - Path segment validation (no traversal out of the registry root)
    - Configurable via environment variables

Storage Layout:
    {REGISTRY_ROOT}/modules/{namespace}/{name}/{system}/{version}.zip
    Example: store/modules/acme/vpc/aws/1.0.0.zip
"""

__version__ = "0.1.0"
__author__ = "tf-module-registry contributors"

# Import key components for convenience
from .config import Config
from .exceptions import (
    RegistryError,
    UnknownModuleError,
    ArchiveNotFoundError,
    VersionExistsError,
    EmptyPayloadError,
    InvalidSegmentError,
)
from .validation import compute_sha256, validate_segment, validate_coordinate, validate_version
from .store import ModuleStore
from .routes import create_app

__all__ = [
    "Config",
    "RegistryError",
    "UnknownModuleError",
    "ArchiveNotFoundError",
    "VersionExistsError",
    "EmptyPayloadError",
    "InvalidSegmentError",
    "compute_sha256",
    "validate_segment",
    "validate_coordinate",
    "validate_version",
    "ModuleStore",
    "create_app",
]
