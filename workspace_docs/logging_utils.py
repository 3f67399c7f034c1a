"""
Logging setup for workspace components.

Components log through ``logging.getLogger(__name__)``. The service
wraps its logger in WorkspaceLoggerAdapter so records carry the
workspace and the acting user; with ``json_logs`` enabled those fields
come out as keys of one JSON object per line.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from .config import WorkspaceConfig

ROOT_LOGGER = "workspace_docs"

# Context keys copied from a record into the JSON line, in output order
CONTEXT_FIELDS = (
    "workspace_id",
    "actor_id",
    "page_id",
    "block_id",
    "removed_pages",
    "removed_blocks",
)


class WorkspaceJsonFormatter(logging.Formatter):
    """Render a record as a single JSON line with workspace context.

    Only the keys in CONTEXT_FIELDS are emitted, and only when the
    record carries them; unrelated ``extra`` values are left out.
    """

    def format(self, record: logging.LogRecord) -> str:
        line: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "component": record.name.removeprefix(f"{ROOT_LOGGER}."),
            "message": record.getMessage(),
        }
        for key in CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                line[key] = value
        if record.exc_info:
            line["error"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, default=str)


def configure_from_config(config: WorkspaceConfig) -> logging.Logger:
    """Apply the log level and format named in a workspace config.

    Returns the package logger. With json_logs set, a stdout handler
    using WorkspaceJsonFormatter replaces any JSON handler installed by
    an earlier call; other handlers are untouched.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    level = logging.getLevelName(config.log_level.upper())
    logger.setLevel(level if isinstance(level, int) else logging.INFO)

    for handler in list(logger.handlers):
        if isinstance(handler.formatter, WorkspaceJsonFormatter):
            logger.removeHandler(handler)

    if config.json_logs:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(WorkspaceJsonFormatter())
        logger.addHandler(handler)
        logger.propagate = False
    else:
        logger.propagate = True
    return logger


class WorkspaceLoggerAdapter(logging.LoggerAdapter):
    """Adapter that stamps its context onto every record.

    Per-call ``extra`` values are kept; the adapter's own context wins on
    conflicting keys.
    """

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        kwargs["extra"] = {**kwargs.get("extra", {}), **self.extra}
        return msg, kwargs
