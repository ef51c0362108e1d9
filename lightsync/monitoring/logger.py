# lightsync/monitoring/logger.py
"""
Structured JSON logger for LightSync.
"""
import logging
import json
from datetime import datetime, timezone

from lightsync.config import settings


def get_request_context():
    # Import lazily to avoid import cycles
    from lightsync.monitoring.context import get_request_context as _g
    return _g()

class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "component": getattr(record, "component", None) or record.module,
            "request_id": getattr(record, "request_id", None),
            "server_id": getattr(record, "server_id", None),
            "operation": getattr(record, "operation", None),
        }
        details = getattr(record, "details", None)
        if details:
            log_record["details"] = details
        return json.dumps(log_record, default=str)

logger = logging.getLogger("lightsync")
logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
handler = logging.StreamHandler()
handler.setFormatter(JsonFormatter())
logger.handlers = [handler]

# Helper to log with context
def log(level: str, message: str, component: str = None, request_id: str = None, server_id: str = None, operation: str = None, **kwargs):
    # Map legacy 'module' kwarg to 'component' to avoid LogRecord collision
    if "module" in kwargs and not component:
        component = kwargs.pop("module")
    # Fill missing fields from contextvars
    ctx = get_request_context()
    if request_id is None:
        request_id = ctx.get("request_id")
    if server_id is None:
        server_id = ctx.get("server_id")
    if operation is None:
        operation = ctx.get("operation")

    extra = {
        "request_id": request_id,
        "server_id": server_id,
        "operation": operation,
        "component": component,
        "details": kwargs or None,
    }
    logger.log(getattr(logging, level.upper(), logging.INFO), message, extra=extra)
