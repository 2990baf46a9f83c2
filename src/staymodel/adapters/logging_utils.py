import json
import logging
import math
import sys
import time
from typing import Any

from .config import config


def _json_value(v: Any) -> Any:
    # inf DSCR and NaN stats are not valid JSON numbers
    if isinstance(v, float) and not math.isfinite(v):
        return str(v)
    return v


class JsonLogFormatter(logging.Formatter):
    """One JSON object per line: ts, level, logger, env, message + context."""

    def format(self, record):
        payload = {
            "ts": time.time(),
            "level": record.levelname,
            "logger": record.name,
            "env": config.ENV,
            "message": record.getMessage(),
        }
        ctx = getattr(record, "context", None)
        if isinstance(ctx, dict):
            payload.update({k: _json_value(v) for k, v in ctx.items()})
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def log_context(**fields: Any) -> dict[str, Any]:
    """extra= payload for structured fields: logger.info("msg", extra=log_context(a=1))."""
    return {"context": fields}


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonLogFormatter())
        logger.addHandler(handler)
        logger.setLevel(config.LOG_LEVEL.upper())
        logger.propagate = False
    return logger
