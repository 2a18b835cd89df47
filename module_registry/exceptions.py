"""
Exception classes for the module registry.

Every error a protocol handler can return is raised as a RegistryError
subclass. The Flask error handlers in routes.py turn them into JSON
responses carrying the HTTP status defined here.
"""


class RegistryError(Exception):
    """Base exception class for registry errors."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        """
        Initialize registry error.

        Args:
            message: Human-readable error message returned to the client
            status_code: HTTP status overriding the class default
        """
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class UnknownModuleError(RegistryError):
    """No archive has ever been uploaded for a module coordinate."""

    status_code = 404

    def __init__(self, namespace: str, name: str, system: str):
        super().__init__(f"Module {namespace}/{name}/{system} not found")
        self.namespace = namespace
        self.name = name
        self.system = system


class ArchiveNotFoundError(RegistryError):
    """A specific module version has no archive."""

    status_code = 404

    def __init__(self, namespace: str, name: str, system: str, version: str):
        super().__init__(f"Module {namespace}/{name}/{system} version {version} not found")
        self.namespace = namespace
        self.name = name
        self.system = system
        self.version = version


class VersionExistsError(RegistryError):
    """Upload rejected because the version is already stored."""

    status_code = 400

    def __init__(self, version: str):
        super().__init__(f"Version {version} already exists! Please update the version number.")
        self.version = version


class EmptyPayloadError(RegistryError):
    """Upload rejected because the request body was empty."""

    status_code = 400

    def __init__(self):
        super().__init__("No data received. Please include your module archive as the request body.")


class InvalidSegmentError(RegistryError):
    """A path segment is unsafe to use as part of a storage path."""

    status_code = 400

    def __init__(self, field: str, value: str, reason: str):
        super().__init__(f"Invalid {field}: {reason}")
        self.field = field
        self.value = value
