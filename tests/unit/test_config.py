"""Tests for core/config.py -- Settings and get_settings singleton."""

import pytest
from pydantic import ValidationError

from core.config import Settings, get_settings


def _make_settings(**overrides: str) -> Settings:
    """Create Settings from keyword overrides, ignoring any .env file."""
    return Settings(_env_file=None, **overrides)  # type: ignore[call-arg]


class TestSettings:
    def test_defaults(self) -> None:
        s = _make_settings()
        assert s.photon_host == "i0.wp.com"
        assert s.photon_image_hosts == ["i0.wp.com", "i1.wp.com", "i2.wp.com"]
        assert s.wpcom_domain == "wordpress.com"
        assert s.atomic_proxy_url_prefix == "https://public-api.wordpress.com/wpcom/v2/sites/"
        assert s.atomic_proxy_url_suffix == "/atomic-auth-proxy/file"
        assert s.emoticon_color == "#21759b"
        assert s.log_level == "INFO"
        assert s.log_json is True

    def test_image_hosts_comma_separated(self) -> None:
        s = _make_settings(photon_image_hosts="i0.wp.com, i3.wp.com")
        assert s.photon_image_hosts == ["i0.wp.com", "i3.wp.com"]

    def test_image_hosts_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PHOTON_IMAGE_HOSTS", "i1.wp.com,i2.wp.com")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.photon_image_hosts == ["i1.wp.com", "i2.wp.com"]

    def test_image_hosts_must_not_be_empty(self) -> None:
        with pytest.raises(ValidationError, match="at least one host"):
            _make_settings(photon_image_hosts=" , ")

    def test_proxy_prefix_must_be_https(self) -> None:
        with pytest.raises(ValidationError, match="https://"):
            _make_settings(atomic_proxy_url_prefix="http://public-api.wordpress.com/")

    def test_emoticon_color_lowercased(self) -> None:
        s = _make_settings(emoticon_color="#21759B")
        assert s.emoticon_color == "#21759b"

    def test_emoticon_color_must_be_hex(self) -> None:
        with pytest.raises(ValidationError):
            _make_settings(emoticon_color="blue")

    def test_log_level_normalized(self) -> None:
        assert _make_settings(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _make_settings(log_level="chatty")


class TestGetSettings:
    def test_returns_settings_instance(self) -> None:
        assert isinstance(get_settings(), Settings)

    def test_singleton_returns_same_instance(self) -> None:
        s1 = get_settings()
        s2 = get_settings()
        assert s1 is s2

    def test_env_override_after_cache_clear(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PHOTON_HOST", "i2.wp.com")
        get_settings.cache_clear()
        assert get_settings().photon_host == "i2.wp.com"
