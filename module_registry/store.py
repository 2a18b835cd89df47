"""
Archive storage module for the module registry.

The directory tree under the registry root is the only source of truth:

    {root}/modules/{namespace}/{name}/{system}/{version}.zip

There is no index, cache or metadata file. Every call looks at the
filesystem directly, so results are never stale.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import BinaryIO

from .exceptions import (
    ArchiveNotFoundError,
    EmptyPayloadError,
    UnknownModuleError,
    VersionExistsError,
)
from .validation import compute_sha256

logger = logging.getLogger(__name__)

ARCHIVE_SUFFIX = ".zip"


class ModuleStore:
    """
    Filesystem-backed store for versioned module archives.

    Path segments are used as given; callers are expected to validate them
    (see validation.validate_coordinate) before they reach the store.
    """

    def __init__(self, root: str | os.PathLike):
        """
        Args:
            root: Registry root directory. It does not need to exist yet:
                reads treat it as empty, writes create what they need.
        """
        self.root = Path(root)
        self.modules_dir = self.root / "modules"

    def __repr__(self):
        return f"ModuleStore(root={str(self.root)!r})"

    def module_directory(self, namespace: str, name: str, system: str) -> Path:
        """Directory holding every version of one module coordinate."""
        return self.modules_dir / namespace / name / system

    def module_archive_path(self, namespace: str, name: str, system: str, version: str) -> Path:
        """Path of the archive for one module version."""
        return self.module_directory(namespace, name, system) / f"{version}{ARCHIVE_SUFFIX}"

    def list_versions(self, namespace: str, name: str, system: str) -> list[str]:
        """
        List the stored versions of a module.

        Versions are returned in directory listing order. Callers that need
        a stable order must sort the result themselves.

        Returns:
            Version strings recovered from the archive filenames

        Raises:
            UnknownModuleError: if the coordinate holds no archives
        """
        module_dir = self.module_directory(namespace, name, system)
        logger.debug(f"Listing versions in {module_dir}")

        try:
            with os.scandir(module_dir) as entries:
                versions = [
                    entry.name[: -len(ARCHIVE_SUFFIX)]
                    for entry in entries
                    if entry.name.endswith(ARCHIVE_SUFFIX) and entry.is_file()
                ]
        except (FileNotFoundError, NotADirectoryError):
            raise UnknownModuleError(namespace, name, system) from None

        if not versions:
            logger.debug(f"No archives in {module_dir}")
            raise UnknownModuleError(namespace, name, system)

        logger.debug(f"Found {len(versions)} versions for {namespace}/{name}/{system}")
        return versions

    def archive_exists(self, namespace: str, name: str, system: str, version: str) -> bool:
        return self.module_archive_path(namespace, name, system, version).is_file()

    def read_archive(self, namespace: str, name: str, system: str, version: str) -> BinaryIO:
        """
        Open a stored archive for streaming.

        The caller owns the returned file object and must close it.

        Raises:
            ArchiveNotFoundError: if the version has no archive
        """
        path = self.module_archive_path(namespace, name, system, version)
        try:
            return open(path, "rb")
        except (FileNotFoundError, NotADirectoryError, IsADirectoryError):
            raise ArchiveNotFoundError(namespace, name, system, version) from None

    def write_archive(
        self, namespace: str, name: str, system: str, version: str, data: bytes | None
    ) -> Path:
        """
        Store a new archive. Archives are write-once.

        The payload is written to a hidden temporary file next to the target
        and then published with os.link, which fails if the target already
        exists. Two concurrent uploads of the same version therefore cannot
        both succeed, and readers only ever see complete archives.

        Args:
            namespace: Module namespace
            name: Module name
            system: Target system (e.g. "aws")
            version: Module version
            data: Archive bytes

        Returns:
            Path of the stored archive

        Raises:
            VersionExistsError: if the version is already stored
            EmptyPayloadError: if data is empty; nothing is created on disk
        """
        target = self.module_archive_path(namespace, name, system, version)

        if target.exists():
            logger.warning(f"Rejected upload of existing version: {target}")
            raise VersionExistsError(version)

        if not data:
            logger.warning(f"Rejected empty upload for {namespace}/{name}/{system} {version}")
            raise EmptyPayloadError()

        module_dir = target.parent
        module_dir.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=module_dir, prefix=f".{version}-", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as tmp:
                tmp.write(data)
                tmp.flush()
                os.fsync(tmp.fileno())
            try:
                os.link(tmp_name, target)
            except FileExistsError:
                logger.warning(f"Lost concurrent upload race for {target}")
                raise VersionExistsError(version) from None
        finally:
            os.unlink(tmp_name)

        logger.info(f"Archive stored: {target}, size: {len(data)} bytes, digest: {compute_sha256(data)}")
        return target
