# ============================================================================
# src/vet_ingestion/utils/logging.py
# ============================================================================
"""
Logging setup for the API and the batch script.

The engine modules only create module loggers and emit debug records;
handlers and formats are chosen here, once, by the entry points.
"""

import json
import logging
import sys
import time
from datetime import datetime, timezone
from functools import wraps
from pathlib import Path
from typing import Optional

# Third-party loggers that flood DEBUG output
NOISY_LOGGERS = ("charset_normalizer", "multipart", "httpx")

# LogRecord attributes copied into JSON output when present
EXTRA_FIELDS = ("document", "duration_ms")


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    format_json: bool = False
) -> None:
    """
    Configure the root logger.

    Args:
        level: Logging level name; unknown names fall back to INFO
        log_file: Optional file receiving a copy of the console output
        format_json: One JSON object per line instead of plain text
    """
    log_level = getattr(logging, str(level).upper(), logging.INFO)

    if format_json:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=log_level, handlers=handlers, force=True)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))


class JsonFormatter(logging.Formatter):
    """JSON log formatter; keeps accented text readable."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'function': record.funcName,
            'line': record.lineno
        }

        for key in EXTRA_FIELDS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


def log_performance(logger: logging.Logger, operation: str):
    """
    Decorator logging how long ``operation`` took.

    The duration travels as ``duration_ms`` on the record. When the first
    string argument after ``self`` is a document name it is attached as
    ``document``.
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            document = next((arg for arg in args if isinstance(arg, str)), None)
            started = time.perf_counter()

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration_ms = round((time.perf_counter() - started) * 1000, 1)
                logger.error(
                    f"{operation} failed after {duration_ms} ms: {e}",
                    extra={"document": document, "duration_ms": duration_ms},
                )
                raise

            duration_ms = round((time.perf_counter() - started) * 1000, 1)
            logger.info(
                f"{operation} completed in {duration_ms} ms",
                extra={"document": document, "duration_ms": duration_ms},
            )
            return result

        return wrapper
    return decorator
