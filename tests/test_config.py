import pytest
from pydantic import ValidationError

from catalog_client.config import DEFAULT_CONFIG_PATH, load_client_settings


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    monkeypatch.delenv("CATALOG_BACKEND_URL", raising=False)
    monkeypatch.delenv("REDIS_URL", raising=False)


def test_default_config_file_matches_documented_defaults():
    assert DEFAULT_CONFIG_PATH.exists()

    settings = load_client_settings()

    assert settings.backend.api_prefix == "/api"
    assert settings.timeouts.read_seconds == 7.0
    assert settings.timeouts.write_seconds == 12.0
    assert settings.listing.product_page_size == 20
    assert settings.listing.review_page_size == 10
    assert settings.listing.debounce_seconds == 0.5


def test_partial_yaml_keeps_defaults(tmp_path):
    path = tmp_path / "client.yml"
    path.write_text("backend:\n  base_url: http://10.0.2.2:8080\nlisting:\n  debounce_seconds: 0.2\n", encoding="utf-8")

    settings = load_client_settings(path)

    assert settings.backend.base_url == "http://10.0.2.2:8080"
    assert settings.listing.debounce_seconds == 0.2
    assert settings.timeouts.summary_seconds == 10.0


def test_environment_overrides_yaml(tmp_path, monkeypatch):
    path = tmp_path / "client.yml"
    path.write_text("backend:\n  base_url: http://from-yaml:8080\n", encoding="utf-8")
    monkeypatch.setenv("CATALOG_BACKEND_URL", "http://from-env:9000")
    monkeypatch.setenv("REDIS_URL", "redis://localhost:6379/0")

    settings = load_client_settings(path)

    assert settings.backend.base_url == "http://from-env:9000"
    assert settings.storage.redis_url == "redis://localhost:6379/0"


def test_missing_explicit_config_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_client_settings(tmp_path / "missing.yml")


def test_invalid_config_raises_validation_error(tmp_path):
    path = tmp_path / "client.yml"
    path.write_text("timeouts:\n  read_seconds: -1\n", encoding="utf-8")

    with pytest.raises(ValidationError):
        load_client_settings(path)
