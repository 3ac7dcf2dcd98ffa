"""
line_core.errors
================

Rejections a caller can recover from are reported as ``ActionResult`` values
carrying a ``Signal``. Exceptions are reserved for integration bugs.
"""
from __future__ import annotations
from enum import Enum
from typing import Optional
from pydantic import BaseModel

from .models import Player


class Signal(str, Enum):
    NO_HISTORY = "no_history"
    INVALID_REORDER = "invalid_reorder"
    UNKNOWN_PLAYER = "unknown_player"
    INVALID_NAME = "invalid_name"


class ActionResult(BaseModel):
    ok: bool = True
    signal: Optional[Signal] = None
    message: Optional[str] = None
    player: Optional[Player] = None
    team: Optional[int] = None

    @classmethod
    def rejected(cls, signal: Signal, message: str) -> "ActionResult":
        return cls(ok=False, signal=signal, message=message)


class LineCoreError(Exception):
    """Base exception for line_core programming errors."""
    pass


class RosterDivergenceError(LineCoreError):
    """Raised when the rotation sequence no longer holds exactly the roster's members."""

    def __init__(self, category: Optional[str], missing, extra):
        self.category = category
        self.missing = sorted(missing)
        self.extra = sorted(extra)
        super().__init__(
            f"Rotation for category '{category or '?'}' diverged from roster "
            f"(missing={self.missing}, extra={self.extra})"
        )
