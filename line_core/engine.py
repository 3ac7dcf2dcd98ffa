from __future__ import annotations
from collections import Counter
from typing import Dict, List, Sequence
import logging

from .constants import CATEGORIES, POLICY_ABBA
from .errors import RosterDivergenceError
from .models import LinePattern, Player, RotationState
from .patterns import resolve_pattern
from .roster import RosterStore

logger = logging.getLogger("line_core.engine")

# -----------------------
# Sequence helpers
# -----------------------
def rotate_left(seq: Sequence, k: int) -> list:
    """Move the first ``k`` items to the end, keeping their relative order.

    No rotation happens when the sequence is not longer than ``k``: consuming
    every player (or more) leaves the queue as it was.
    """
    items = list(seq)
    if len(items) <= k:
        return items
    return items[k:] + items[:k]

def step_cursor(cursor: int, length: int, count: int) -> int:
    # offset form of rotate_left
    if length == 0:
        return 0
    if length <= count:
        return cursor % length
    return (cursor + count) % length

def circular_window(seq: Sequence, start: int, count: int) -> list:
    """Up to ``count`` items from ``start``, wrapping; never repeats an item."""
    n = len(seq)
    if n == 0 or count <= 0:
        return []
    return [seq[(start + i) % n] for i in range(min(count, n))]

# -----------------------
# Engine
# -----------------------
class RotationEngine:
    """Derives lines from the roster through a per-category cursor.

    The engine keeps its own id sequence per category. It starts as the roster
    order and then diverges only through ``reconcile`` (new players are slotted
    in at the cursor). Rotation itself never reorders anything; it moves the
    cursor.
    """

    def __init__(self, roster: RosterStore, policy: str = POLICY_ABBA):
        resolve_pattern(0, policy)
        self.roster = roster
        self.policy = policy
        self._state = RotationState()
        self._seq: Dict[str, List[str]] = {}
        self._seen_gen: Dict[str, int] = {}
        self._sync_from_roster()

    # -----------------------
    # Queries
    # -----------------------
    @property
    def state(self) -> RotationState:
        return self._state.model_copy(deep=True)

    @property
    def line_index(self) -> int:
        return self._state.line_index

    @property
    def point_number(self) -> int:
        return self._state.point_number

    def pattern(self, steps_ahead: int = 0) -> LinePattern:
        return resolve_pattern(self._state.line_index + steps_ahead, self.policy)

    def sequence(self, category: str) -> List[Player]:
        """Rotation order of ``category`` as seen from the cursor (the queue)."""
        seq = self._seq[category]
        return self._players(circular_window(seq, self._state.cursors.get(category, 0), len(seq)))

    def current_line(self) -> List[Player]:
        return self.preview_line(0)

    def next_line(self) -> List[Player]:
        return self.preview_line(1)

    def preview_line(self, steps_ahead: int) -> List[Player]:
        """Line that would be on after ``steps_ahead`` advances. Pure."""
        if steps_ahead < 0:
            raise ValueError("steps_ahead must be >= 0")
        cursors = dict(self._state.cursors)
        for i in range(steps_ahead):
            used = self.pattern(i)
            for cat in CATEGORIES:
                cursors[cat] = step_cursor(cursors.get(cat, 0), len(self._seq[cat]), used.count_for(cat))
        target = self.pattern(steps_ahead)
        ids: List[str] = []
        for cat in CATEGORIES:
            ids.extend(circular_window(self._seq[cat], cursors.get(cat, 0), target.count_for(cat)))
        return self._players(ids)

    def upcoming_lines(self, n: int) -> List[List[Player]]:
        return [self.preview_line(i) for i in range(n)]

    # -----------------------
    # Transitions
    # -----------------------
    def advance(self) -> RotationState:
        used = self.pattern()
        cursors = {
            cat: step_cursor(self._state.cursors.get(cat, 0), len(self._seq[cat]), used.count_for(cat))
            for cat in CATEGORIES
        }
        self._state = RotationState(
            line_index=self._state.line_index + 1,
            point_number=self._state.point_number + 1,
            cursors=cursors,
        )
        logger.debug("Advanced to line %d (cursors %s)", self._state.line_index, cursors)
        return self.state

    def rewind(self, target: RotationState) -> RotationState:
        self._state = target.model_copy(deep=True)
        for cat in CATEGORIES:
            n = len(self._seq[cat])
            self._state.cursors[cat] = self._state.cursors.get(cat, 0) % n if n else 0
        logger.debug("Rewound to line %d", self._state.line_index)
        return self.state

    def set_policy(self, policy: str):
        resolve_pattern(0, policy)
        if policy != self.policy:
            logger.info("Ratio policy %s -> %s at line %d", self.policy, policy, self._state.line_index)
        self.policy = policy

    def reset(self):
        self._state = RotationState()
        self._sync_from_roster()

    def reconcile(self):
        """Fold roster edits into the rotation sequences.

        Added players go in at the cursor so they are up next. Removed players
        are cut out; the cursor follows the player it pointed at. After a
        reorder the roster order is adopted wholesale and the cursor keeps its
        position index.
        """
        for cat in CATEGORIES:
            roster_ids = self.roster.ids_by_category(cat)
            gen = self.roster.reorder_generation(cat)
            cursor = self._state.cursors.get(cat, 0)
            if gen != self._seen_gen.get(cat):
                seq = list(roster_ids)
                self._seen_gen[cat] = gen
            else:
                keep = set(roster_ids)
                old = self._seq[cat]
                cursor -= sum(1 for pid in old[:cursor] if pid not in keep)
                seq = [pid for pid in old if pid in keep]
                present = set(seq)
                added = [pid for pid in roster_ids if pid not in present]
                seq[cursor:cursor] = added
                if added or len(seq) != len(old):
                    logger.debug("Reconciled %s: +%d -%d", cat, len(added), len(old) + len(added) - len(seq))
            self._seq[cat] = seq
            self._state.cursors[cat] = cursor % len(seq) if seq else 0
            self._check_membership(cat)

    # -----------------------
    # Internals
    # -----------------------
    def _sync_from_roster(self):
        for cat in CATEGORIES:
            self._seq[cat] = self.roster.ids_by_category(cat)
            self._seen_gen[cat] = self.roster.reorder_generation(cat)
            self._state.cursors[cat] = 0

    def _check_membership(self, cat: str):
        seq = Counter(self._seq[cat])
        ros = Counter(self.roster.ids_by_category(cat))
        if seq != ros:
            raise RosterDivergenceError(cat, ros - seq, seq - ros)

    def _players(self, ids: List[str]) -> List[Player]:
        lookup = {p.id: p for p in self.roster.all_players()}
        missing = [pid for pid in ids if pid not in lookup]
        if missing:
            raise RosterDivergenceError(None, set(), set(missing))
        return [lookup[pid] for pid in ids]
