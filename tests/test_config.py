"""Tests for environment-driven configuration."""

from module_registry.config import Config


def test_defaults(monkeypatch):
    for name in [
        "LOG_LEVEL",
        "FLASK_HOST",
        "FLASK_PORT",
        "REGISTRY_ROOT",
        "MAX_SEGMENT_LENGTH",
        "MAX_UPLOAD_SIZE",
        "TRUST_PROXY_HEADERS",
    ]:
        monkeypatch.delenv(name, raising=False)

    cfg = Config()

    assert cfg.LOG_LEVEL == "INFO"
    assert cfg.FLASK_HOST == "0.0.0.0"
    assert cfg.FLASK_PORT == 3001
    assert cfg.REGISTRY_ROOT == "store"
    assert cfg.MAX_SEGMENT_LENGTH == 128
    assert cfg.MAX_UPLOAD_SIZE == 100 * 1024 * 1024
    assert cfg.TRUST_PROXY_HEADERS is False


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("FLASK_PORT", "8080")
    monkeypatch.setenv("REGISTRY_ROOT", str(tmp_path))
    monkeypatch.setenv("MAX_SEGMENT_LENGTH", "64")
    monkeypatch.setenv("MAX_UPLOAD_SIZE", "1024")
    monkeypatch.setenv("TRUST_PROXY_HEADERS", "yes")

    cfg = Config()

    assert cfg.LOG_LEVEL == "DEBUG"
    assert cfg.FLASK_PORT == 8080
    assert cfg.REGISTRY_ROOT == str(tmp_path)
    assert cfg.MAX_SEGMENT_LENGTH == 64
    assert cfg.MAX_UPLOAD_SIZE == 1024
    assert cfg.TRUST_PROXY_HEADERS is True


def test_repr_includes_storage_root(monkeypatch):
    monkeypatch.setenv("REGISTRY_ROOT", "/srv/registry")
    assert "REGISTRY_ROOT=/srv/registry" in repr(Config())
