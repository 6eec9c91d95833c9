"""Log handlers for the web process.

Two outputs: JSON lines on stdout enriched with the current request (for log
shippers) and, when run as a script, a plain-text file per process start.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from flask import g, has_request_context, request

PLAIN_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
_CONTEXT_FIELDS = ("request_id", "path", "method", "remote_addr", "user")


class RequestContextFilter(logging.Filter):
    """Copy request id, route, client address and signed-in user onto records."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = dict.fromkeys(_CONTEXT_FIELDS)
        if has_request_context():
            # set by Flask-Login once it has loaded the user
            login_user = getattr(g, "_login_user", None)
            context.update(
                request_id=getattr(g, "request_id", None),
                path=request.path,
                method=request.method,
                remote_addr=request.headers.get("X-Forwarded-For", request.remote_addr),
                user=getattr(login_user, "email", None),
            )
        for field, value in context.items():
            setattr(record, field, value)
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update({field: getattr(record, field, None) for field in _CONTEXT_FIELDS})
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def _has_json_stream(root: logging.Logger) -> bool:
    return any(
        isinstance(handler, logging.StreamHandler) and isinstance(handler.formatter, JsonFormatter)
        for handler in root.handlers
    )


def configure_structured_logging(app) -> None:
    """Attach the JSON stdout handler to the root logger, once per process."""
    root = logging.getLogger()
    if _has_json_stream(root):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    handler.addFilter(RequestContextFilter())
    handler.setLevel(logging.DEBUG if app.config.get("DEBUG") else logging.INFO)
    root.addHandler(handler)


def configure_file_logging(log_dir: str, console: bool = False) -> str:
    """Write INFO+ records to a fresh ``spotie-<timestamp>.log`` in ``log_dir``.

    File handlers from an earlier call are closed first. With ``console``
    set, WARNING+ records are echoed to stderr as well. Returns the file path.
    """
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, datetime.now().strftime("spotie-%Y%m%d-%H%M%S.log"))

    root = logging.getLogger()
    root.setLevel(logging.INFO)
    for stale in [h for h in root.handlers if isinstance(h, logging.FileHandler)]:
        root.removeHandler(stale)
        stale.close()

    formatter = logging.Formatter(PLAIN_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    outputs = [(logging.FileHandler(log_path, encoding="utf-8"), logging.INFO)]
    if console:
        outputs.append((logging.StreamHandler(), logging.WARNING))
    for handler, level in outputs:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    # werkzeug and flask.app log through the root handlers only
    for name in ("werkzeug", "flask.app"):
        framework_logger = logging.getLogger(name)
        framework_logger.handlers.clear()
        framework_logger.propagate = True

    return log_path


__all__ = [
    "RequestContextFilter",
    "JsonFormatter",
    "configure_structured_logging",
    "configure_file_logging",
]
