"""Logging setup — loguru console and optional file output."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

_CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<blue>{function}</blue> | "
    "<level>{message}</level>"
)
_FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "{name}:{function}:{line} | {message}"
)


def setup_logger(
    level: str = "INFO",
    log_file: str | Path | None = None,
    rotation: str = "50 MB",
    *,
    audit: bool = False,
) -> None:
    """Replace loguru's default handler with genecolony's sinks.

    Args:
        level: Minimum level for console (and file) output.
        log_file: Optional path of a rotating log file.
        rotation: Rotation policy for the log file (e.g. "50 MB").
        audit: Whether to keep audit records of newly built entities.
    """
    logger.remove()

    def keep(record: dict) -> bool:
        return audit or not record["extra"].get("audit", False)

    logger.add(
        sys.stderr,
        level=level,
        format=_CONSOLE_FORMAT,
        colorize=sys.stderr.isatty(),
        filter=keep,
    )
    if log_file is not None:
        logger.add(
            str(log_file),
            level=level,
            format=_FILE_FORMAT,
            rotation=rotation,
            encoding="utf-8",
            filter=keep,
        )
    logger.debug("Log level: {}, audit: {}", level, audit)
