"""
Error Logging Service

Every failure worth keeping ends up here. ErrorLogger:
- logs one line per failure through the "error_logging" logger
- writes that line to a rotating errors.log when LOG_DIR is writable
- optionally stores an ErrorLog row, once a session factory is configured
- redacts passwords, tokens, secrets and image payloads from the context

Usage:
    from cookbook_api.services.error_logging import error_logger

    error_logger.log_error(exc, request=request, user=current_user, severity="warning")
"""

import logging
import sys
import traceback
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional
from uuid import UUID

from cookbook_api.core.config import settings
from cookbook_api.models.error_log import ErrorLog


logger = logging.getLogger("error_logging")
logger.setLevel(logging.DEBUG)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 10

# Keys whose values never reach a log line or the error_logs table
SENSITIVE_FIELDS = {
    "password", "token", "authorization", "api_key", "secret", "credential", "signature",
}

SEVERITY_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def attach_file_handler(log_dir: str) -> bool:
    """
    Send WARNING and above from every logger to `log_dir`/errors.log.

    Returns False (console logging only) when the directory cannot be
    created or written to.
    """
    path = Path(log_dir)
    try:
        path.mkdir(parents=True, exist_ok=True)
        marker = path / ".write_test"
        marker.touch()
        marker.unlink()
    except OSError as e:
        logger.warning(f"FILE_LOGGING_DISABLED | dir={path} | error={e}")
        return False

    handler = RotatingFileHandler(
        path / "errors.log",
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(logging.WARNING)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logging.getLogger().addHandler(handler)
    return True


def sanitize_data(data: Any, depth: int = 0) -> Any:
    """
    Return a copy of `data` that is safe to log.

    Dict values under a sensitive key become "[REDACTED]", JWTs become
    "[REDACTED_TOKEN]" and image data URIs become "[IMAGE_DATA]".
    """
    if depth > 10:
        return "[MAX_DEPTH]"

    if isinstance(data, dict):
        return {
            key: "[REDACTED]" if _is_sensitive(key) else sanitize_data(value, depth + 1)
            for key, value in data.items()
        }
    if isinstance(data, (list, tuple)):
        return [sanitize_data(item, depth + 1) for item in data]
    if isinstance(data, str):
        if data.startswith("eyJ") and len(data) > 20:
            return "[REDACTED_TOKEN]"
        if data.startswith("data:image/"):
            return "[IMAGE_DATA]"
    return data


def _is_sensitive(key: Any) -> bool:
    name = str(key).lower()
    return any(field in name for field in SENSITIVE_FIELDS)


def truncate_string(s: str, max_length: int = 10000) -> str:
    """Cut `s` to `max_length` characters, noting the original size."""
    if len(s) <= max_length:
        return s
    return f"{s[:max_length]}... [TRUNCATED, total {len(s)} chars]"


def _request_context(request: Any) -> Dict[str, Optional[str]]:
    """Pull method, path, query, client and user agent off a Starlette request."""
    if request is None:
        return {}
    user_agent = request.headers.get("user-agent")
    return {
        "request_method": request.method,
        "request_path": request.url.path,
        "request_query": request.url.query or None,
        "client_ip": request.client.host if request.client else None,
        "user_agent": truncate_string(user_agent, 500) if user_agent else None,
    }


def _traceback_context() -> Dict[str, Optional[str]]:
    """Stack trace and innermost frame of the exception being handled, if any."""
    exc_type, exc_value, exc_tb = sys.exc_info()
    if exc_tb is None:
        return {}

    frame = traceback.extract_tb(exc_tb)[-1]
    return {
        "stack_trace": "".join(traceback.format_exception(exc_type, exc_value, exc_tb)),
        "module": frame.filename,
        "function": frame.name,
        "line_number": str(frame.lineno),
    }


class ErrorLogger:
    """Logs failures and, when configured, persists them to error_logs."""

    def __init__(self):
        self.db_session_factory = None

    def set_db_session_factory(self, factory):
        self.db_session_factory = factory

    def log_error(
        self,
        error: Exception,
        request: Optional[Any] = None,
        user: Optional[Any] = None,
        severity: str = "error",
        context: Optional[Dict] = None,
        save_to_db: bool = True
    ) -> Optional[UUID]:
        """
        Record one failure.

        Args:
            error: The exception being reported
            request: Request that triggered it, if any
            user: Authenticated user, if any
            severity: debug, info, warning, error or critical
            context: Extra data; sanitized before it is logged or stored
            save_to_db: Also write an ErrorLog row (needs a session factory)

        Returns:
            Id of the stored ErrorLog row, or None when nothing was stored
        """
        safe_context = sanitize_data(context) if context else None
        request_info = _request_context(request)
        user_email = getattr(user, "email", None)

        line = (
            f"{type(error).__name__}: {error} | user={user_email or 'anonymous'} "
            f"| path={request_info.get('request_path') or 'N/A'}"
        )
        if safe_context:
            line += f" | context={safe_context}"
        logger.log(SEVERITY_LEVELS.get(severity, logging.ERROR), line)

        tb_info = _traceback_context()
        if tb_info:
            logger.debug(tb_info["stack_trace"])

        if not (save_to_db and self.db_session_factory):
            return None

        record = ErrorLog(
            timestamp=datetime.now(timezone.utc),
            error_type=type(error).__name__,
            error_code=str(getattr(error, "status_code", "")) or None,
            severity=severity,
            user_id=getattr(user, "id", None),
            user_email=user_email,
            message=truncate_string(str(error), 1000),
            context_data=safe_context,
            module=tb_info.get("module"),
            function=tb_info.get("function"),
            line_number=tb_info.get("line_number"),
            stack_trace=truncate_string(tb_info["stack_trace"], 20000) if tb_info else None,
            **request_info,
        )
        return self._store(record)

    def _store(self, record: ErrorLog) -> Optional[UUID]:
        db = self.db_session_factory()
        try:
            db.add(record)
            db.commit()
            return record.id
        except Exception as db_err:
            # The database may itself be the failing dependency
            db.rollback()
            logger.error(f"ERROR_LOG_NOT_SAVED | error={db_err}")
            return None
        finally:
            db.close()


error_logger = ErrorLogger()


def configure_error_logging(db_session_factory, log_dir: Optional[str] = None) -> None:
    """
    Enable the errors.log file and database persistence.

    Called once from the application startup handler.
    """
    attach_file_handler(log_dir or settings.LOG_DIR)
    error_logger.set_db_session_factory(db_session_factory)
    logger.info("ERROR_LOGGING_CONFIGURED")
