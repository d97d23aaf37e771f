"""Log formatting for excel_io.

The library only emits records through ``get_logger(__name__)`` loggers and
attaches the structured fields listed in STRUCTURED_FIELDS via ``extra=``.
Scripts call ``setup_logging`` once to install a text or JSON handler.
"""

from __future__ import annotations

import json
import logging
import os
import socket
import sys
from datetime import UTC, datetime
from typing import TypedDict

from excel_io.config import LogFormat, LogLevel

_JSONScalar = str | int | float | bool | None
_FieldValue = _JSONScalar | list[str]

STRUCTURED_FIELDS: tuple[str, ...] = ("sheet", "rows", "row_index", "path", "header")

_LEVELS: dict[LogLevel, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class LogEventFields(TypedDict, total=False):
    """Structured fields excel_io attaches to its log records."""

    sheet: str
    rows: int
    row_index: int
    path: str
    header: list[str]


def _field_value(record: logging.LogRecord, name: str) -> tuple[bool, _FieldValue]:
    """Return (present, value) for a JSON-compatible record attribute."""
    if name not in record.__dict__:
        return False, None
    raw: object = record.__dict__[name]
    if raw is None or isinstance(raw, (str, int, float, bool)):
        return True, raw
    if isinstance(raw, list) and all(isinstance(item, str) for item in raw):
        return True, [str(item) for item in raw]
    return False, None


def _collect_fields(record: logging.LogRecord, names: list[str]) -> dict[str, _FieldValue]:
    """Collect structured and requested extra fields present on a record."""
    collected: dict[str, _FieldValue] = {}
    for name in (*STRUCTURED_FIELDS, *names):
        if name in collected:
            continue
        present, value = _field_value(record, name)
        if present:
            collected[name] = value
    return collected


class JsonFormatter(logging.Formatter):
    """One JSON object per record.

    Keys: timestamp (UTC, ISO-8601), level, logger, message, the static
    fields, every structured or extra field present on the record, and
    exc_info when an exception is attached. Attributes that are not JSON
    scalars or lists of strings are left out.
    """

    def __init__(self, *, static_fields: dict[str, str], extra_field_names: list[str]) -> None:
        """Initialize JSON formatter.

        Args:
            static_fields: Fields included in every record, e.g. service name.
            extra_field_names: Record attributes to include besides the
                structured fields.
        """
        super().__init__()
        self._static = dict(static_fields)
        self._extra_names = list(extra_field_names)

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=UTC)
        payload: dict[str, _FieldValue] = {
            "timestamp": created.isoformat(timespec="seconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(self._static)
        for name, value in _collect_fields(record, self._extra_names).items():
            payload.setdefault(name, value)
        if record.exc_info is not None:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, separators=(",", ":"))


class TextFormatter(logging.Formatter):
    """Single-line text output.

    Format: ``[time] [LEVEL] [logger] key=value ... message``. Only the
    requested fields are shown, in the order given.
    """

    def __init__(self, *, extra_fields: list[str]) -> None:
        super().__init__()
        self._fields = list(extra_fields)

    def format(self, record: logging.LogRecord) -> str:
        prefix = (
            f"[{self.formatTime(record, '%Y-%m-%d %H:%M:%S')}] "
            f"[{record.levelname}] [{record.name}]"
        )
        pairs = [
            f"{name}={record.__dict__[name]}" for name in self._fields if name in record.__dict__
        ]
        line = " ".join([prefix, *pairs, record.getMessage()])
        if record.exc_info is not None:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def setup_logging(
    *,
    level: LogLevel,
    format_mode: LogFormat,
    service_name: str,
    instance_id: str | None,
    extra_fields: list[str] | None,
) -> logging.Logger:
    """Install a single stdout handler on the root logger.

    Existing root handlers are removed. openpyxl's own logger is raised to
    ERROR so its extension warnings do not reach the output.

    Args:
        level: Root log level.
        format_mode: "json" or "text".
        service_name: Value of the JSON "service" field.
        instance_id: Value of the JSON "instance_id" field; host-pid if None.
        extra_fields: Record attributes to show besides the structured fields.

    Returns:
        The root logger.
    """
    names = extra_fields if extra_fields is not None else []
    formatter: logging.Formatter
    if format_mode == "json":
        host = socket.gethostname().split(".")[0]
        static = {
            "service": service_name,
            "instance_id": instance_id if instance_id is not None else f"{host}-{os.getpid()}",
        }
        formatter = JsonFormatter(static_fields=static, extra_field_names=names)
    else:
        formatter = TextFormatter(extra_fields=names)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(_LEVELS[level])
    logging.getLogger("openpyxl").setLevel(logging.ERROR)
    return root


stdlib_logging = logging


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module name."""
    return logging.getLogger(name)


__all__ = [
    "STRUCTURED_FIELDS",
    "JsonFormatter",
    "LogEventFields",
    "TextFormatter",
    "get_logger",
    "setup_logging",
    "stdlib_logging",
]
