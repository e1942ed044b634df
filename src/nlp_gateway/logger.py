"""
Logging setup for NLP Gateway.

Console and file sinks are driven by ``LoggingConfig``; modules get a
loguru logger bound to their name through ``get_logger``.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger as _logger

from nlp_gateway.config import LoggingConfig


def setup_logger(
    config: Optional[LoggingConfig] = None,
    level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> None:
    """Replace loguru's default sink with the configured ones.

    Args:
        config: Logging section of the application config (defaults apply if omitted)
        level: Override the configured level
        log_file: Override the configured file path
    """
    config = config or LoggingConfig()
    level = level or config.level

    _logger.remove()

    if config.console_enabled:
        _logger.add(sys.stderr, format=config.format, level=level, colorize=True)

    if config.file_enabled:
        path = Path(log_file or config.file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        _logger.add(
            str(path),
            format=config.format,
            level=level,
            rotation=config.rotation,
            retention=config.retention,
            compression="zip",
            encoding="utf-8",
            enqueue=True,
        )


def get_logger(name: Optional[str] = None):
    """Return the shared logger, bound to ``name`` when given."""
    return _logger.bind(name=name) if name else _logger


logger = _logger

__all__ = ["setup_logger", "get_logger", "logger"]
