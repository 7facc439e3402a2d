"""Logger lookup for the package modules."""

from __future__ import annotations

import logging
from typing import Optional


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module logger; handlers are left to the embedding application."""

    return logging.getLogger(name if name else "dingtalk_webhook")


__all__ = ["get_logger"]
