"""Tests for core/logging_setup.py -- structlog configuration."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
import structlog

from core.logging_setup import configure_logging


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


def _renderer() -> object:
    return structlog.get_config()["processors"][-1]


class TestConfigureLogging:
    def test_json_renderer_by_default(self) -> None:
        configure_logging()
        assert structlog.is_configured()
        assert isinstance(_renderer(), structlog.processors.JSONRenderer)

    def test_console_renderer_when_json_disabled(self) -> None:
        configure_logging(json=False)
        assert isinstance(_renderer(), structlog.dev.ConsoleRenderer)

    def test_json_flag_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_JSON", "false")
        configure_logging()
        assert isinstance(_renderer(), structlog.dev.ConsoleRenderer)

    def test_level_argument_filters(self) -> None:
        configure_logging("warning")
        wrapper = structlog.get_config()["wrapper_class"]
        assert wrapper is structlog.make_filtering_bound_logger(30)
