import json
import logging
import math
import sys
from datetime import datetime, timezone

from .config import config


def _json_safe(value):
    # DSCR is +inf for all-cash deals; NaN marks an undefined ratio
    if isinstance(value, float) and not math.isfinite(value):
        return None if math.isnan(value) else ("inf" if value > 0 else "-inf")
    return value


class JsonLogFormatter(logging.Formatter):
    """One JSON object per line; `extra={"context": {...}}` fields are merged in."""

    def format(self, record):
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "env": config.ENV,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        ctx = getattr(record, "context", None)
        if isinstance(ctx, dict):
            payload.update({k: _json_safe(v) for k, v in ctx.items()})
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, allow_nan=False)


def get_logger(name: str) -> logging.Logger:
    """
    Service logger. Writes to stderr so CLI commands can keep stdout for
    their JSON results.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JsonLogFormatter())
        logger.addHandler(handler)
        logger.setLevel(config.LOG_LEVEL.upper())
        logger.propagate = False
    return logger
