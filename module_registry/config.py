"""
Configuration module for the module registry.

Loads all configuration from environment variables with sensible defaults.
"""

import os


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """
    Registry configuration from environment variables.

    Loads all configuration values from environment variables with sensible defaults.
    All settings can be overridden by setting the corresponding environment variable.
    """

    def __init__(self):
        """
        Initialize configuration from environment variables.

        Environment Variables:
            LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR). Default: INFO
            FLASK_HOST: Server bind address. Default: 0.0.0.0
            FLASK_PORT: Server bind port. Default: 3001
            REGISTRY_ROOT: Directory holding the module archives. Default: store
            MAX_SEGMENT_LENGTH: Maximum length of a namespace/name/system/version segment. Default: 128
            MAX_UPLOAD_SIZE: Maximum upload body size in bytes. Default: 104857600 (100 MiB)
            TRUST_PROXY_HEADERS: Honour X-Forwarded-* headers when building URLs. Default: false
        """
        # Logging
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

        # Server
        self.FLASK_HOST = os.getenv("FLASK_HOST", "0.0.0.0")
        self.FLASK_PORT = int(os.getenv("FLASK_PORT", "3001"))
        self.TRUST_PROXY_HEADERS = _env_flag("TRUST_PROXY_HEADERS")

        # Storage
        self.REGISTRY_ROOT = os.getenv("REGISTRY_ROOT", "store")
        self.MAX_UPLOAD_SIZE = int(os.getenv("MAX_UPLOAD_SIZE", str(100 * 1024 * 1024)))  # bytes

        # Validation limits
        self.MAX_SEGMENT_LENGTH = int(os.getenv("MAX_SEGMENT_LENGTH", "128"))

    def __repr__(self):
        """String representation for logging."""
        return (
            f"Config(LOG_LEVEL={self.LOG_LEVEL}, "
            f"FLASK_HOST={self.FLASK_HOST}, "
            f"FLASK_PORT={self.FLASK_PORT}, "
            f"REGISTRY_ROOT={self.REGISTRY_ROOT}, "
            f"MAX_UPLOAD_SIZE={self.MAX_UPLOAD_SIZE}, "
            f"TRUST_PROXY_HEADERS={self.TRUST_PROXY_HEADERS})"
        )


# Global config instance
config = Config()
