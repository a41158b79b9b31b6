"""Log configuration shared by the API process and the CLI.

Event names are dotted (``transaction.processed``, ``stock.adjusted``) and
their fields travel in ``extra={"extra_data": {...}}``; the JSON formatter
lifts them to the top level of each line next to the request id and the
authenticated principal.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Mapping

from ..middlewares import principal_ctx_var, request_id_ctx_var
from .config import settings

_RESERVED = ("ts", "level", "event", "logger", "service")


class JsonLogFormatter(logging.Formatter):
    """One JSON object per line."""

    def __init__(self, service: str) -> None:
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname.lower(),
            "event": record.getMessage(),
            "logger": record.name,
            "service": self.service,
        }
        for key, var in (("request_id", request_id_ctx_var), ("principal", principal_ctx_var)):
            value = var.get()
            if value:
                entry[key] = value
        fields = getattr(record, "extra_data", None)
        if isinstance(fields, Mapping):
            entry.update((k, v) for k, v in fields.items() if k not in _RESERVED)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        # Decimal amounts and ids render as plain strings.
        return json.dumps(entry, separators=(",", ":"), default=str)


def configure_logging(
    level: str | None = None,
    *,
    json_output: bool | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Route the root logger to one handler.

    ``level`` and ``json_output`` default to ``LOG_LEVEL`` / ``LOG_JSON``.
    Output goes to ``stream`` or stderr, leaving stdout to CLI results.
    """

    handler = logging.StreamHandler(stream or sys.stderr)
    use_json = settings.LOG_JSON if json_output is None else json_output
    if use_json:
        handler.setFormatter(JsonLogFormatter(settings.APP_NAME))
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s"))
    logging.root.handlers = [handler]
    logging.root.setLevel(level or settings.LOG_LEVEL)
