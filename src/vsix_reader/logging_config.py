"""Logging setup for the vsix-reader command."""

import json
import logging
import logging.handlers
import sys
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Iterator

from .config.schema import LoggingConfig
from .errors import VSIXReaderError

CONSOLE_FORMATS = {
    "simple": "%(levelname)-8s | %(name)s | %(message)s",
    "detailed": "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s",
}


class StructuredFormatter(logging.Formatter):
    """One JSON object per record.

    Fields bound with :func:`log_context` are merged in, and a raised
    ``VSIXReaderError`` contributes its ``context`` under ``error_context``.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_data.update(getattr(record, "context_fields", {}))

        if record.exc_info:
            exc = record.exc_info[1]
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(exc),
                "traceback": self.formatException(record.exc_info),
            }
            if isinstance(exc, VSIXReaderError) and exc.context:
                log_data["error_context"] = exc.context

        return json.dumps(log_data, default=str)


def _console_formatter(format_type: str) -> logging.Formatter:
    if format_type == "json":
        return StructuredFormatter()
    return logging.Formatter(CONSOLE_FORMATS[format_type], datefmt="%Y-%m-%d %H:%M:%S")


def setup_logging(config: LoggingConfig) -> None:
    """Configure the root logger from the ``[logging]`` config section.

    Console output goes to stderr so stdout only carries command output.
    The optional log file rotates at ``max_file_size_mb`` and always holds JSON.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(config.level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(_console_formatter(config.format))
    root_logger.addHandler(console_handler)

    if config.file:
        log_file = Path(config.file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=config.max_file_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
        )
        file_handler.setFormatter(StructuredFormatter())
        root_logger.addHandler(file_handler)

    logging.getLogger("asyncio").setLevel(logging.WARNING)


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Attach ``fields`` to every record created inside the block.

    Records are created in the worker thread that scans the archive too, so
    the fields are bound through the global record factory.
    """
    previous: Callable[..., logging.LogRecord] = logging.getLogRecordFactory()

    def record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
        record = previous(*args, **kwargs)
        merged = dict(getattr(record, "context_fields", {}))
        merged.update(fields)
        record.context_fields = merged
        return record

    logging.setLogRecordFactory(record_factory)
    try:
        yield
    finally:
        logging.setLogRecordFactory(previous)
