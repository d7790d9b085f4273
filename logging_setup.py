from __future__ import annotations
import logging
from typing import Optional

from settings import LOG_LEVEL

_LEVEL_MAP = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARN,
    "warning": logging.WARN,
    "error": logging.ERROR,
}


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach one stream handler to the root logger; safe to call repeatedly."""
    root = logging.getLogger()
    if not any(getattr(h, "_guna_milan", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        handler._guna_milan = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(_LEVEL_MAP.get((level or LOG_LEVEL).lower(), logging.INFO))
    return root
