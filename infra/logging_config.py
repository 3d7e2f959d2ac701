import json
import logging
import sys
from typing import Any, Dict, Optional

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class StructuredFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "module": record.module,
            "function": record.funcName,
            "message": record.getMessage(),
        }

        # Add extra fields if they exist
        if hasattr(record, "extra_data"):
            log_entry.update(getattr(record, "extra_data"))

        return json.dumps(log_entry, ensure_ascii=False)


def resolve_level(name: Optional[str], default: int = logging.WARNING) -> int:
    if not name:
        return default
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else default


def is_own_handler(handler: logging.Handler) -> bool:
    return getattr(handler, "_log_reader", False)


def setup_logging(level: str = "WARNING", fmt: str = "text") -> None:
    """
    Configure the root logger for the CLI.

    Diagnostics go to stderr; stdout is reserved for the report.
    Calling it again replaces our handler instead of stacking a second one,
    and handlers installed by someone else (e.g. a test runner) are left alone.
    """
    if fmt == "json":
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    setattr(handler, "_log_reader", True)

    root = logging.getLogger()
    for old in [h for h in root.handlers if is_own_handler(h)]:
        root.removeHandler(old)
    root.addHandler(handler)
    root.setLevel(resolve_level(level))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
