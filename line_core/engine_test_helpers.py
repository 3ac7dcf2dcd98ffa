"""
Internal helpers for tests (not imported by app).
"""
from __future__ import annotations
from typing import List
from .models import SeedPlayer
from .roster import RosterStore

def quick_seed(n_open: int = 5, n_women: int = 5) -> List[SeedPlayer]:
    # A1..An are open, B1..Bn are women, in that order
    seed = [SeedPlayer(name=f"A{i}", category="O") for i in range(1, n_open + 1)]
    seed += [SeedPlayer(name=f"B{i}", category="W") for i in range(1, n_women + 1)]
    return seed

def quick_roster(n_open: int = 5, n_women: int = 5) -> RosterStore:
    return RosterStore(quick_seed(n_open, n_women))

def names(players) -> List[str]:
    return [p.name for p in players]
