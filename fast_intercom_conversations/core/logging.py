"""Logging setup with optional JSON output."""

import json
import logging
import logging.config
import os
from datetime import datetime
from pathlib import Path
from typing import Any


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record):
        """Format log record as JSON."""
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
            'message': record.getMessage()
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        if hasattr(record, 'extra_data'):
            log_data.update(record.extra_data)

        return json.dumps(log_data)


def setup_logging(
    log_level: str = "INFO",
    log_dir: str | None = None,
    enable_json: bool | None = None,
) -> dict[str, Any]:
    """
    Configure console logging and, when log_dir is given, rotating log files.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory for main.log and errors.log; console only if None
        enable_json: Use JSON formatting; defaults to FASTINTERCOM_JSON_LOGGING

    Returns:
        Dict with logging configuration info
    """
    if enable_json is None:
        enable_json = os.getenv("FASTINTERCOM_JSON_LOGGING", "").lower() in (
            "true",
            "1",
            "yes",
        )

    level = log_level.upper()
    formatter_name = 'json' if enable_json else 'standard'
    formatter: dict[str, Any] = (
        {'()': JSONFormatter}
        if enable_json
        else {
            'format': (
                "%(asctime)s [%(levelname)s] "
                "%(name)s:%(funcName)s:%(lineno)d - %(message)s"
            )
        }
    )

    handlers: dict[str, dict[str, Any]] = {
        'console': {
            'class': 'logging.StreamHandler',
            'level': level,
            'formatter': formatter_name
        }
    }

    info: dict[str, Any] = {'log_dir': 'console', 'json_enabled': enable_json, 'level': level}

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        main_log = log_path / "main.log"
        errors_log = log_path / "errors.log"
        handlers['main_file'] = {
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': str(main_log),
            'maxBytes': 10*1024*1024,
            'backupCount': 5,
            'level': level,
            'formatter': formatter_name
        }
        handlers['error_file'] = {
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': str(errors_log),
            'maxBytes': 10*1024*1024,
            'backupCount': 5,
            'level': 'ERROR',
            'formatter': formatter_name
        }
        info.update(log_dir=log_dir, main_log=str(main_log), errors_log=str(errors_log))

    logging.config.dictConfig({
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {formatter_name: formatter},
        'handlers': handlers,
        'loggers': {
            '': {  # Root logger
                'handlers': list(handlers),
                'level': level,
            }
        }
    })

    # Reduce noise from httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return info
