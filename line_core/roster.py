"""
RosterStore: canonical ordered list of players per category.

Owns player identity and display numbering. Rotation never mutates it; the
engine keeps its own sequence and is reconciled after every edit here.
"""
from __future__ import annotations
from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
import logging

from .constants import CATEGORIES, normalize_category, normalize_name
from .errors import ActionResult, Signal
from .models import Player, SeedPlayer

logger = logging.getLogger("line_core.roster")


class RosterStore:
    def __init__(self, seed: Iterable[SeedPlayer] = ()):
        self._seed: List[SeedPlayer] = [SeedPlayer(**s.model_dump()) for s in seed]
        self._next_id = 1
        self._order: Dict[str, List[Player]] = {c: [] for c in CATEGORIES}
        self._generation: Dict[str, int] = {c: 0 for c in CATEGORIES}
        self._load_seed()

    # -----------------------
    # Queries
    # -----------------------
    @property
    def seed(self) -> Tuple[SeedPlayer, ...]:
        return tuple(self._seed)

    def players_by_category(self, category: str) -> Tuple[Player, ...]:
        return tuple(self._order[self._category(category)])

    def ids_by_category(self, category: str) -> List[str]:
        return [p.id for p in self._order[self._category(category)]]

    def all_players(self) -> List[Player]:
        return [p for c in CATEGORIES for p in self._order[c]]

    def get(self, pid: str) -> Optional[Player]:
        for c in CATEGORIES:
            for p in self._order[c]:
                if p.id == pid:
                    return p
        return None

    def reorder_generation(self, category: str) -> int:
        """Bumped on every successful reorder of ``category``."""
        return self._generation[self._category(category)]

    def __len__(self) -> int:
        return sum(len(v) for v in self._order.values())

    def __contains__(self, pid: str) -> bool:
        return self.get(pid) is not None

    # -----------------------
    # Mutations
    # -----------------------
    def add_player(self, name: str, category: str) -> ActionResult:
        cat = self._category(category)
        clean = normalize_name(name)
        if not clean:
            logger.warning("Rejected add: blank player name")
            return ActionResult.rejected(Signal.INVALID_NAME, "Player name cannot be blank.")
        player = Player(id=self._mint_id(), name=clean, category=cat)
        self._order[cat].append(player)
        self._renumber(cat)
        logger.info("Added %s (%s) as %s #%d", player.name, player.id, cat, player.number)
        return ActionResult(player=player)

    def remove_player(self, pid: str) -> ActionResult:
        for cat in CATEGORIES:
            members = self._order[cat]
            for i, p in enumerate(members):
                if p.id == pid:
                    del members[i]
                    self._renumber(cat)
                    logger.info("Removed %s (%s) from %s", p.name, pid, cat)
                    return ActionResult(player=p)
        logger.warning("Rejected remove: unknown player id %s", pid)
        return ActionResult.rejected(Signal.UNKNOWN_PLAYER, f"No player with id {pid!r}.")

    def rename_player(self, pid: str, name: str) -> ActionResult:
        player = self.get(pid)
        if player is None:
            logger.warning("Rejected rename: unknown player id %s", pid)
            return ActionResult.rejected(Signal.UNKNOWN_PLAYER, f"No player with id {pid!r}.")
        clean = normalize_name(name)
        if not clean:
            logger.warning("Rejected rename of %s: blank name", pid)
            return ActionResult.rejected(Signal.INVALID_NAME, "Player name cannot be blank.")
        player.name = clean
        return ActionResult(player=player)

    def reorder(self, category: str, new_order: Sequence[str]) -> ActionResult:
        """Replace the order of ``category`` with a permutation of its member ids."""
        cat = self._category(category)
        current = {p.id: p for p in self._order[cat]}
        if Counter(new_order) != Counter(current.keys()):
            logger.warning("Rejected reorder of %s: ids do not match current members", cat)
            return ActionResult.rejected(
                Signal.INVALID_REORDER,
                "Reorder must be a permutation of the current players in this category.",
            )
        self._order[cat] = [current[pid] for pid in new_order]
        self._generation[cat] += 1
        self._renumber(cat)
        logger.debug("Reordered %s: %s", cat, list(new_order))
        return ActionResult()

    def move(self, pid: str, offset: int) -> ActionResult:
        """Shift one player up (negative) or down (positive) within its category."""
        player = self.get(pid)
        if player is None:
            return ActionResult.rejected(Signal.UNKNOWN_PLAYER, f"No player with id {pid!r}.")
        ids = self.ids_by_category(player.category)
        i = ids.index(pid)
        j = max(0, min(len(ids) - 1, i + offset))
        if i == j:
            return ActionResult()
        ids.insert(j, ids.pop(i))
        return self.reorder(player.category, ids)

    def reset(self):
        """Restore the seed roster. Identities are freshly minted, never reused."""
        self._order = {c: [] for c in CATEGORIES}
        self._generation = {c: g + 1 for c, g in self._generation.items()}
        self._load_seed()
        logger.info("Roster reset to seed (%d players)", len(self))

    # -----------------------
    # Internals
    # -----------------------
    def _load_seed(self):
        for s in self._seed:
            self._order[s.category].append(Player(id=self._mint_id(), name=s.name, category=s.category))
        for c in CATEGORIES:
            self._renumber(c)

    def _mint_id(self) -> str:
        pid = f"p{self._next_id:03d}"
        self._next_id += 1
        return pid

    def _renumber(self, category: str):
        for n, p in enumerate(self._order[category], start=1):
            p.number = n

    @staticmethod
    def _category(category: str) -> str:
        cat = normalize_category(category)
        if not cat:
            raise ValueError(f"Unknown category: {category!r}")
        return cat
