"""Central logging configuration using loguru."""

from __future__ import annotations

import sys
from pathlib import Path
from loguru import logger

from flagdriver.config import DriverSettings

_LOGGER_CONFIGURED = False


def configure_logging(settings: DriverSettings, level: str | None = None) -> None:
    """Route logs to stderr and rotating file only once."""

    global _LOGGER_CONFIGURED
    if _LOGGER_CONFIGURED:
        return

    log_dir: Path = settings.paths.logs_dir
    log_dir.mkdir(parents=True, exist_ok=True)

    logger.remove()
    logger.configure(extra={"context": "flagdriver"})
    logger.add(
        sink=lambda msg: sys.stderr.write(msg),
        level=level or settings.log_level,
        colorize=True,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {extra[context]} | {message}",
    )
    logger.add(
        log_dir / "flagdriver.log",
        level="DEBUG",
        rotation="1 week",
        retention=4,
        compression="zip",
        enqueue=True,
        backtrace=True,
        diagnose=True,
    )
    logger.enable("flagdriver")

    _LOGGER_CONFIGURED = True


def get_logger(name: str | None = None):
    return logger.bind(context=name or "flagdriver")
