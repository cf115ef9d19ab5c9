"""Logging helpers shared by the service layer and the entry points.

Caller-supplied values (tracking numbers, request paths, ids from URLs)
go through ``sanitize_for_log`` before they reach a log record so a
crafted value cannot forge extra log lines.
"""

from __future__ import annotations

import logging
import re
from typing import Any

MAX_LOG_INPUT_LENGTH = 200

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f-\x9f]")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def sanitize_for_log(value: Any, max_length: int = MAX_LOG_INPUT_LENGTH) -> str:
    if value is None:
        return ""
    text = str(value).replace("\r\n", " ").replace("\n", " ").replace("\r", " ")
    text = _CONTROL_CHARS.sub(" ", text)
    if len(text) > max_length:
        text = text[:max_length] + "...[truncated]"
    return text


def configure_logging(level: str = "WARNING") -> None:
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.WARNING
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
