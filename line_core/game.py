"""
line_core.game
==============

Score-driven glue around the rotation core. A score increment snapshots the
rotation, advances it and bumps the score; undo pops the snapshot back.
Roster edits pass through here so the engine is reconciled in the same call.
"""
from __future__ import annotations
from typing import Dict, List, Optional, Sequence
import logging

from .config import GameConfig
from .constants import TEAMS, CATEGORIES
from .engine import RotationEngine
from .errors import ActionResult, Signal
from .history import HistoryStack
from .models import Player
from .roster import RosterStore

logger = logging.getLogger("line_core.game")


def category_breakdown(line: Sequence[Player]) -> Dict[str, int]:
    out = {c: 0 for c in CATEGORIES}
    for p in line:
        out[p.category] += 1
    return out

def format_score_diff(diff: int) -> str:
    if diff == 0:
        return "0"
    return f"+{diff}" if diff > 0 else str(diff)


class LineCaller:
    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()
        self.roster = RosterStore(self.config.seed_roster)
        self.engine = RotationEngine(self.roster, self.config.ratio_policy)
        self.history = HistoryStack()
        self.scores: Dict[int, int] = {t: 0 for t in TEAMS}

    # -----------------------
    # Read side (display layer)
    # -----------------------
    def current_line(self) -> List[Player]:
        return self.engine.current_line()

    def next_line(self) -> List[Player]:
        return self.engine.next_line()

    @property
    def point_number(self) -> int:
        return self.engine.point_number

    @property
    def line_index(self) -> int:
        return self.engine.line_index

    @property
    def score_diff(self) -> int:
        return self.scores[1] - self.scores[2]

    @property
    def score_diff_text(self) -> str:
        return format_score_diff(self.score_diff)

    def team_name(self, team: int) -> str:
        self._team(team)
        return self.config.team1_name if team == 1 else self.config.team2_name

    # -----------------------
    # Score transitions
    # -----------------------
    def score(self, team: int) -> ActionResult:
        team = self._team(team)
        played = [p.id for p in self.engine.current_line()]
        self.history.push(self.engine.state, team, played)
        self.engine.advance()
        self.scores[team] += 1
        logger.info("Point to team %d -> %d-%d, line %d", team, self.scores[1], self.scores[2], self.engine.line_index)
        return ActionResult(team=team)

    def unscore(self, team: int) -> ActionResult:
        """Direct decrement. Rotation is left where it is; use undo to roll back a point."""
        team = self._team(team)
        if self.scores[team] > 0:
            self.scores[team] -= 1
            logger.warning(
                "Direct decrement for team %d -> %d-%d; rotation not rolled back",
                team, self.scores[1], self.scores[2],
            )
        return ActionResult(team=team)

    def undo(self) -> ActionResult:
        entry = self.history.pop()
        if entry is None:
            logger.warning("Undo requested with no history")
            return ActionResult.rejected(Signal.NO_HISTORY, "There is no previous line state to return to.")
        self.engine.rewind(entry.state)
        self.scores[entry.team] = max(0, self.scores[entry.team] - 1)
        logger.info("Undid point %d (team %d) -> %d-%d", entry.point_number, entry.team, self.scores[1], self.scores[2])
        return ActionResult(team=entry.team, message=f"Back to point {self.engine.point_number}.")

    def reset(self):
        self.roster.reset()
        self.engine.reset()
        self.history.clear()
        self.scores = {t: 0 for t in TEAMS}
        logger.info("Game reset")

    # -----------------------
    # Settings
    # -----------------------
    def set_ratio_policy(self, policy: str):
        self.engine.set_policy(policy)
        self.config = self.config.model_copy(update={"ratio_policy": policy})

    def set_team_name(self, team: int, name: str) -> ActionResult:
        team = self._team(team)
        clean = " ".join(str(name or "").split())
        if not clean:
            return ActionResult.rejected(Signal.INVALID_NAME, "Team name cannot be blank.")
        key = "team1_name" if team == 1 else "team2_name"
        self.config = self.config.model_copy(update={key: clean})
        return ActionResult(team=team)

    # -----------------------
    # Roster edits (reconciled in the same call)
    # -----------------------
    def add_player(self, name: str, category: str) -> ActionResult:
        return self._reconciled(self.roster.add_player(name, category))

    def remove_player(self, pid: str) -> ActionResult:
        return self._reconciled(self.roster.remove_player(pid))

    def rename_player(self, pid: str, name: str) -> ActionResult:
        return self.roster.rename_player(pid, name)

    def reorder(self, category: str, new_order: Sequence[str]) -> ActionResult:
        return self._reconciled(self.roster.reorder(category, new_order))

    def move_player(self, pid: str, offset: int) -> ActionResult:
        return self._reconciled(self.roster.move(pid, offset))

    def _reconciled(self, result: ActionResult) -> ActionResult:
        if result.ok:
            self.engine.reconcile()
        return result

    @staticmethod
    def _team(team: int) -> int:
        if team not in TEAMS:
            raise ValueError(f"team must be one of {TEAMS}, got {team!r}")
        return team
