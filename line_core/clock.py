"""
Countdown helpers for the halftime/end clocks.

Pure functions of a wall-clock ``now``; the ticking loop belongs to the
display layer.
"""
from __future__ import annotations
from datetime import datetime, timedelta
from typing import Dict, Optional

from .config import GameConfig


def parse_clock_time(text: str, now: datetime) -> Optional[datetime]:
    """Next occurrence of ``HH:MM`` at or after ``now``; ``None`` if unparsable."""
    if not text:
        return None
    try:
        h, m = (int(x) for x in str(text).strip().split(":"))
    except ValueError:
        return None
    if not (0 <= h < 24 and 0 <= m < 60):
        return None
    at = now.replace(hour=h, minute=m, second=0, microsecond=0)
    if at < now:
        at += timedelta(days=1)
    return at


def format_countdown(remaining: timedelta) -> str:
    total = int(remaining.total_seconds())
    if total <= 0:
        return "00:00"
    return f"{total // 60:02d}:{total % 60:02d}"


def countdowns(config: GameConfig, now: datetime) -> Dict[str, str]:
    out = {}
    for key, text in (("halftime", config.halftime_time), ("end", config.end_time)):
        at = parse_clock_time(text, now)
        out[key] = format_countdown(at - now) if at else "--:--"
    return out
