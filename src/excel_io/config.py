"""Settings for excel_io, read from environment variables.

Environment access goes through ``excel_io.testing.hooks.get_env`` so tests can
inject values without touching ``os.environ``.
"""

from __future__ import annotations

from typing import Literal, TypedDict

from excel_io.testing import hooks

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["json", "text"]

LOCALE_SEPARATOR = "locale"


class ExcelIOSettings(TypedDict):
    """Converter settings.

    Attributes:
        decimal_separator: Separator numeric cell text is normalized to.
        log_level: Level used by scripts that call setup_logging.
        log_format: Output format used by scripts that call setup_logging.
        warn_on_header_mismatch: Log a warning when appended rows do not match
            the stored header of an existing sheet.
    """

    decimal_separator: str
    log_level: LogLevel
    log_format: LogFormat
    warn_on_header_mismatch: bool


def _optional_env_str(key: str) -> str | None:
    value = hooks.get_env(key)
    if value is None:
        return None
    trimmed = value.strip()
    if trimmed == "":
        return None
    return trimmed


def _parse_str(key: str, default: str) -> str:
    val = _optional_env_str(key)
    return val if val is not None else default


def _parse_bool(key: str, default: bool) -> bool:
    val = _optional_env_str(key)
    if val is None:
        return default
    normalized = val.lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    raise ValueError(f"Invalid boolean value for {key}: {val!r}")


def _parse_log_level(key: str, default: LogLevel) -> LogLevel:
    val = _optional_env_str(key)
    if val is None:
        return default
    upper_val = val.upper()
    if upper_val == "DEBUG":
        return "DEBUG"
    if upper_val == "INFO":
        return "INFO"
    if upper_val == "WARNING":
        return "WARNING"
    if upper_val == "ERROR":
        return "ERROR"
    if upper_val == "CRITICAL":
        return "CRITICAL"
    return default


def _parse_log_format(key: str, default: LogFormat) -> LogFormat:
    val = _optional_env_str(key)
    if val is None:
        return default
    lower_val = val.lower()
    if lower_val == "json":
        return "json"
    if lower_val == "text":
        return "text"
    raise ValueError(f"Invalid log format for {key}: {val!r}")


def resolve_decimal_separator(value: str) -> str:
    """Turn a configured separator into the single character to use.

    Args:
        value: A single character, or "locale" for the running locale's point.

    Returns:
        Decimal separator character.

    Raises:
        ValueError: If value is neither "locale" nor a single character.
    """
    if value == LOCALE_SEPARATOR:
        return hooks.locale_decimal_point()
    if len(value) != 1:
        raise ValueError(f"Decimal separator must be one character, got {value!r}")
    return value


def default_settings() -> ExcelIOSettings:
    """Settings used when nothing is configured."""
    return {
        "decimal_separator": ".",
        "log_level": "INFO",
        "log_format": "text",
        "warn_on_header_mismatch": True,
    }


def load_excel_io_settings() -> ExcelIOSettings:
    """Load settings from EXCEL_IO_* environment variables.

    Returns:
        ExcelIOSettings with defaults for unset variables.

    Raises:
        ValueError: If a variable holds an invalid value.
    """
    separator = _parse_str("EXCEL_IO_DECIMAL_SEPARATOR", ".")
    return {
        "decimal_separator": resolve_decimal_separator(separator),
        "log_level": _parse_log_level("EXCEL_IO_LOG_LEVEL", "INFO"),
        "log_format": _parse_log_format("EXCEL_IO_LOG_FORMAT", "text"),
        "warn_on_header_mismatch": _parse_bool("EXCEL_IO_WARN_ON_HEADER_MISMATCH", True),
    }


__all__ = [
    "LOCALE_SEPARATOR",
    "ExcelIOSettings",
    "LogFormat",
    "LogLevel",
    "default_settings",
    "load_excel_io_settings",
    "resolve_decimal_separator",
]
