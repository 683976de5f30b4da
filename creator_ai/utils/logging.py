from __future__ import annotations

import sys
from loguru import logger


_DEFAULT_CONTEXT = {
    "project": "-",
    "op": "-",
    "chapter_id": "-",
    "session_id": "-",
    "endpoint": "-",
}


def _inject_default_context(record: dict) -> None:
    extra = record["extra"]
    for key, value in _DEFAULT_CONTEXT.items():
        extra.setdefault(key, value)


def setup_logging(level: str) -> None:
    """Configure loguru logging for CLI runs."""
    logger.remove()
    logger.configure(patcher=_inject_default_context)
    logger.add(
        sys.stderr,
        level=level,
        backtrace=True,
        diagnose=False,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> "
            "| <level>{level:<8}</level> "
            "| project={extra[project]} op={extra[op]} chapter={extra[chapter_id]} "
            "session={extra[session_id]} endpoint={extra[endpoint]} "
            "| {message}"
        ),
    )
