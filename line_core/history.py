from __future__ import annotations
from typing import List, Optional, Sequence
import logging

from .models import HistoryEntry, RotationState

logger = logging.getLogger("line_core.history")


class HistoryStack:
    """Pre-advance snapshots, one per score increment not yet undone.

    Each entry also remembers which line played the point, so the stack is
    the log of points that still count.
    """

    def __init__(self):
        self._entries: List[HistoryEntry] = []

    def push(self, state: RotationState, team: int, line: Sequence[str] = ()) -> HistoryEntry:
        entry = HistoryEntry(
            state=state.model_copy(deep=True),
            team=team,
            line=list(line),
            point_number=state.point_number,
        )
        self._entries.append(entry)
        logger.debug("History push (team %d, depth %d)", team, len(self._entries))
        return entry

    def pop(self) -> Optional[HistoryEntry]:
        """Remove and return the top entry, or ``None`` when empty."""
        if not self._entries:
            return None
        return self._entries.pop()

    def peek(self) -> Optional[HistoryEntry]:
        return self._entries[-1] if self._entries else None

    def clear(self):
        self._entries.clear()

    @property
    def entries(self) -> List[HistoryEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
