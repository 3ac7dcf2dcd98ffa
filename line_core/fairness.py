# line_core/fairness.py
from __future__ import annotations
from typing import Dict, Iterable, List
import numpy as np
import pandas as pd

from .constants import CATEGORIES
from .models import HistoryEntry, Player


def usage_counts(entries: Iterable[HistoryEntry], players: Iterable[Player]) -> Dict[str, int]:
    """Points played per current player, from the log of points not undone."""
    counts: Dict[str, int] = {p.id: 0 for p in players}
    for e in entries:
        for pid in set(e.line):
            if pid in counts:
                counts[pid] += 1
    return counts


def check_evenness(counts: List[int]) -> bool:
    return not counts or (max(counts) - min(counts) <= 1)


def category_spread(counts: Dict[str, int], players: Iterable[Player]) -> Dict[str, int]:
    """max - min usage within each category (0 for an empty category)."""
    by_cat: Dict[str, List[int]] = {c: [] for c in CATEGORIES}
    for p in players:
        by_cat[p.category].append(counts.get(p.id, 0))
    out = {}
    for cat, vals in by_cat.items():
        arr = np.asarray(vals, dtype=int)
        out[cat] = int(arr.max() - arr.min()) if arr.size else 0
    return out


def fairness_dashboard_df(entries: Iterable[HistoryEntry], players: Iterable[Player]) -> pd.DataFrame:
    players = list(players)
    counts = usage_counts(entries, players)
    mins = {}
    for cat in CATEGORIES:
        vals = [counts[p.id] for p in players if p.category == cat]
        mins[cat] = min(vals) if vals else 0

    rows = []
    for p in players:
        rows.append({
            "id": p.id,
            "number": p.number,
            "name": p.name,
            "category": p.category,
            "points_played": counts[p.id],
            # "+1 lead" rule inside the player's own category
            "flag_evenness_violation": counts[p.id] > mins[p.category] + 1,
        })
    columns = ["id", "number", "name", "category", "points_played", "flag_evenness_violation"]
    dash = pd.DataFrame(rows, columns=columns)
    if dash.empty:
        return dash
    return dash.sort_values(["category", "number"]).reset_index(drop=True)
