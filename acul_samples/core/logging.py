"""
Logging setup for the ACUL commands.

Two output modes share one root handler:
- console lines for interactive runs (default)
- JSON lines for CI (--json-logs / STRUCTURED_LOGS=true)

Every record carries the run id of the command invocation, so JSON lines
from one `acul-deploy` can be grouped after the fact.
"""

import json
import logging
import uuid
from contextvars import ContextVar
from datetime import UTC, datetime

_run_id_ctx: ContextVar[str] = ContextVar("run_id", default="")

# Attributes every LogRecord has; anything else came in through `extra=`
_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}


def generate_run_id() -> str:
    return uuid.uuid4().hex[:12]


def get_run_id() -> str:
    return _run_id_ctx.get()


def set_run_id(run_id: str) -> None:
    _run_id_ctx.set(run_id)


def _extra_fields(record: logging.LogRecord) -> dict:
    return {k: v for k, v in record.__dict__.items() if k not in _STANDARD_ATTRS}


def _exception_info(record: logging.LogRecord) -> dict | None:
    if not record.exc_info or record.exc_info[1] is None:
        return None
    exc_type, exc, _ = record.exc_info
    return {"type": exc_type.__name__ if exc_type else None, "message": str(exc)}


class StructuredFormatter(logging.Formatter):
    """
    One JSON object per record.

    Keys: timestamp (UTC ISO 8601), level, logger, message, and when present
    run_id, exception {type, message} and extra (fields passed via `extra=`,
    e.g. the screen id).
    """

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if run_id := get_run_id():
            payload["run_id"] = run_id
        if exception := _exception_info(record):
            payload["exception"] = exception
        if extra := _extra_fields(record):
            payload["extra"] = extra
        return json.dumps(payload, default=str)


class ConsoleFormatter(logging.Formatter):
    """Plain progress lines: `LEVEL  message [key=value ...]`."""

    def format(self, record: logging.LogRecord) -> str:
        line = f"{record.levelname:<7} {record.getMessage()}"
        extra = _extra_fields(record)
        if extra:
            line += " [" + " ".join(f"{k}={v}" for k, v in sorted(extra.items())) + "]"
        exception = _exception_info(record)
        if exception:
            line += f" ({exception['type']}: {exception['message']})"
        return line


def configure_logging(level: str = "INFO", structured: bool = False) -> None:
    """
    Install the single root handler for a command run and start a new run id.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        structured: JSON lines instead of console lines
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter() if structured else ConsoleFormatter())

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(numeric_level)

    # httpx logs every request at INFO; keep it for --verbose runs only
    logging.getLogger("httpx").setLevel(
        logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    )

    set_run_id(generate_run_id())
