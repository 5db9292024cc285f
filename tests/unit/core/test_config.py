"""Unit tests for settings validation and client identification."""

import pytest
from starlette.requests import Request

from core.config import Settings
from core.rate_limiter import get_client_identifier


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("NETWORK_DATA_PATH", raising=False)
        settings = Settings(_env_file=None)
        assert settings.NETWORK_DATA_PATH == "data/underground-network.json"
        assert not settings.is_production

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("NETWORK_DATA_PATH", "/srv/network.json")
        assert Settings(_env_file=None).NETWORK_DATA_PATH == "/srv/network.json"

    def test_production_requires_admin_token(self):
        settings = Settings(_env_file=None, ENVIRONMENT="production", ADMIN_TOKEN="short")
        with pytest.raises(ValueError, match="ADMIN_TOKEN"):
            settings.validate_production_settings()

    def test_production_rejects_debug(self):
        settings = Settings(
            _env_file=None, ENVIRONMENT="production", ADMIN_TOKEN="x" * 32, DEBUG=True
        )
        with pytest.raises(ValueError, match="DEBUG"):
            settings.validate_production_settings()

    def test_valid_production(self):
        settings = Settings(_env_file=None, ENVIRONMENT="production", ADMIN_TOKEN="x" * 32)
        settings.validate_production_settings()

    def test_development_generates_token(self):
        settings = Settings(_env_file=None, ADMIN_TOKEN="")
        settings.validate_development_settings()
        assert len(settings.ADMIN_TOKEN) >= 32


def _request(headers=None):
    return Request({
        "type": "http",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "client": ("10.0.0.1", 1234),
    })


class TestClientIdentifier:

    def test_remote_address(self):
        assert get_client_identifier(_request()) == "10.0.0.1"

    def test_forwarded_for_first_hop(self):
        request = _request({"X-Forwarded-For": "203.0.113.7, 10.0.0.2"})
        assert get_client_identifier(request) == "203.0.113.7"
