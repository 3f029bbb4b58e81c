import logging
import re
import sys


class SensitiveDataFilter(logging.Filter):
    """Mask bearer tokens and KV credentials in log messages."""

    PATTERNS = [
        re.compile(r"(bearer\s+)[A-Za-z0-9._~+/=-]+", re.IGNORECASE),
        re.compile(r"((?:token|password|secret)\s*[=:]\s*)\S+", re.IGNORECASE),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        for pattern in self.PATTERNS:
            message = pattern.sub(r"\1[MASKED]", message)
        record.msg = message
        record.args = None
        return True


def _resolve_level(level: str) -> int:
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: str = "INFO", mask_sensitive: bool = True) -> None:
    """Configure the root logger with a single stdout handler."""
    level_value = _resolve_level(level)
    fmt = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level_value)
    handler.setFormatter(logging.Formatter(fmt))
    if mask_sensitive:
        handler.addFilter(SensitiveDataFilter())

    root = logging.getLogger()
    root.setLevel(level_value)
    root.handlers.clear()
    root.addHandler(handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
