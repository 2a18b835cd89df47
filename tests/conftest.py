"""
Shared pytest fixtures for the module registry tests.

Every test gets its own registry root under pytest's tmp_path, so tests
never share archives.
"""

import sys
from pathlib import Path

import pytest

# Add project root to Python path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from module_registry.config import Config
from module_registry.routes import create_app
from module_registry.store import ModuleStore


@pytest.fixture
def registry_root(tmp_path):
    """Registry root directory (not created until something is written)."""
    return tmp_path / "store"


@pytest.fixture
def registry_config(registry_root, monkeypatch):
    """Config pointing at the temporary registry root."""
    monkeypatch.setenv("REGISTRY_ROOT", str(registry_root))
    monkeypatch.delenv("TRUST_PROXY_HEADERS", raising=False)
    return Config()


@pytest.fixture
def store(registry_root):
    return ModuleStore(registry_root)


@pytest.fixture
def app(registry_config, store):
    app = create_app(registry_config, store)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def upload(client):
    """Upload helper: upload("acme", "vpc", "aws", "1.0.0", b"...") -> response."""

    def _upload(namespace, name, system, version, data=b"PK\x03\x04module"):
        return client.post(f"/v1/modules/{namespace}/{name}/{system}/{version}/upload", data=data)

    return _upload
