"""Loguru sinks for lintelmark.

Every record carries a ``component`` (the emitting module's short name) and a
``run`` id. ``run_context`` sets the run id for one unification batch so the
lines of that batch can be picked out of a shared log file.
"""

from __future__ import annotations

import json
import sys
import uuid
from contextlib import AbstractContextManager
from pathlib import Path
from typing import Any

from loguru import logger

TEXT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "run={extra[run]} | "
    "<cyan>{extra[component]}</cyan> | "
    "<level>{message}</level>"
)


def tag_record(record: dict[str, Any]) -> None:
    """Fill the ``run`` and ``component`` fields both formats rely on."""
    extra = record["extra"]
    extra.setdefault("run", "-")
    extra.setdefault("component", (record["name"] or "").rsplit(".", 1)[-1])


def format_json(record: dict[str, Any]) -> str:
    """One JSON object per line: time, level, batch fields, message."""
    payload: dict[str, Any] = {
        "time": record["time"].isoformat(),
        "level": record["level"].name,
    }
    payload.update(record["extra"])
    payload["message"] = record["message"]

    exception = record["exception"]
    if exception is not None and exception.type is not None:
        payload["error"] = f"{exception.type.__name__}: {exception.value}"

    # loguru treats the returned string as a template
    return json.dumps(payload, ensure_ascii=False, default=str).replace("{", "{{").replace("}", "}}") + "\n"


def setup_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
    log_file: Path | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """Replace all loguru sinks with the lintelmark ones.

    Args:
        level: Minimum level for every sink.
        json_format: Emit ``format_json`` lines instead of ``TEXT_FORMAT``.
        log_file: Optional file sink, rotated and zipped by loguru.
        rotation: Size or interval after which ``log_file`` is rotated.
        retention: How long rotated files are kept.
    """
    logger.remove()
    logger.configure(patcher=tag_record)

    formatter: Any = format_json if json_format else TEXT_FORMAT
    logger.add(sys.stderr, format=formatter, level=level, colorize=not json_format)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format=formatter,
            level=level,
            rotation=rotation,
            retention=retention,
            compression="zip",
        )


def run_context(item_count: int, mode: str) -> AbstractContextManager:
    """Tag records logged inside the block with a fresh run id and batch size."""
    return logger.contextualize(run=uuid.uuid4().hex[:8], items=item_count, mode=mode)
