"""Tests for config module."""

from __future__ import annotations

import pytest

from excel_io.config import (
    _optional_env_str,
    _parse_bool,
    _parse_log_format,
    _parse_log_level,
    default_settings,
    load_excel_io_settings,
    resolve_decimal_separator,
)
from excel_io.testing import hooks, make_fake_env


def test_optional_env_str() -> None:
    env = make_fake_env()
    assert _optional_env_str("OPT_KEY") is None
    env.set("OPT_KEY", " value ")
    assert _optional_env_str("OPT_KEY") == "value"
    env.set("OPT_KEY", "   ")
    assert _optional_env_str("OPT_KEY") is None


def test_parse_bool() -> None:
    env = make_fake_env()
    assert _parse_bool("FLAG", True) is True
    env.set("FLAG", "off")
    assert _parse_bool("FLAG", True) is False
    env.set("FLAG", "Yes")
    assert _parse_bool("FLAG", False) is True
    env.set("FLAG", "maybe")
    with pytest.raises(ValueError):
        _parse_bool("FLAG", False)


def test_parse_log_level() -> None:
    env = make_fake_env()
    assert _parse_log_level("LEVEL", "INFO") == "INFO"
    env.set("LEVEL", "debug")
    assert _parse_log_level("LEVEL", "INFO") == "DEBUG"
    env.set("LEVEL", "critical")
    assert _parse_log_level("LEVEL", "INFO") == "CRITICAL"
    env.set("LEVEL", "verbose")
    assert _parse_log_level("LEVEL", "WARNING") == "WARNING"


def test_parse_log_format() -> None:
    env = make_fake_env()
    assert _parse_log_format("FMT", "text") == "text"
    env.set("FMT", "JSON")
    assert _parse_log_format("FMT", "text") == "json"
    env.set("FMT", "xml")
    with pytest.raises(ValueError):
        _parse_log_format("FMT", "text")


def test_resolve_decimal_separator() -> None:
    assert resolve_decimal_separator(",") == ","
    with pytest.raises(ValueError):
        resolve_decimal_separator("..")
    with pytest.raises(ValueError):
        resolve_decimal_separator("")


def test_resolve_locale_separator() -> None:
    def _comma() -> str:
        return ","

    hooks.locale_decimal_point = _comma
    assert resolve_decimal_separator("locale") == ","


def test_load_defaults() -> None:
    make_fake_env()
    assert load_excel_io_settings() == default_settings()


def test_load_from_environment() -> None:
    env = make_fake_env()
    env.set("EXCEL_IO_DECIMAL_SEPARATOR", ",")
    env.set("EXCEL_IO_LOG_LEVEL", "warning")
    env.set("EXCEL_IO_LOG_FORMAT", "json")
    env.set("EXCEL_IO_WARN_ON_HEADER_MISMATCH", "false")
    settings = load_excel_io_settings()
    assert settings == {
        "decimal_separator": ",",
        "log_level": "WARNING",
        "log_format": "json",
        "warn_on_header_mismatch": False,
    }


def test_load_rejects_long_separator() -> None:
    env = make_fake_env()
    env.set("EXCEL_IO_DECIMAL_SEPARATOR", "::")
    with pytest.raises(ValueError):
        load_excel_io_settings()
