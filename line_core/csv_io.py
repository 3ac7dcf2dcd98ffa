from __future__ import annotations
import csv
import io
from typing import Dict, Iterable, List, Optional
import pandas as pd

from .constants import (
    CATEGORY_LABELS, HEADER_ALIASES, ROSTER_CSV_HEADERS, normalize_category, normalize_name,
)
from .models import HistoryEntry, Player, SeedPlayer

def _header_map(cols: Iterable[str]) -> Dict[str, str]:
    """
    Build a mapping from provided column -> canonical header.
    Case-insensitive, uses HEADER_ALIASES, leaves unknown columns untouched.
    """
    out = {}
    for c in cols:
        lc = str(c).strip().lower()
        mapped = None
        for k, aliases in HEADER_ALIASES.items():
            if lc == k or lc in aliases:
                mapped = k
                break
        out[c] = mapped if mapped else c
    return out

def parse_roster_csv(file) -> List[SeedPlayer]:
    """
    Parse an uploaded roster CSV (bytes or file-like) into seed players.
    Rows with a blank name are skipped; unknown categories raise ValueError.
    """
    if isinstance(file, (bytes, bytearray)):
        df = pd.read_csv(io.BytesIO(file), dtype=str)
    else:
        df = pd.read_csv(file, dtype=str)

    df = df.rename(columns=_header_map(df.columns))
    missing = [k for k in ROSTER_CSV_HEADERS if k not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")
    df = df[ROSTER_CSV_HEADERS].fillna("")

    players: List[SeedPlayer] = []
    for i, r in df.iterrows():
        name = normalize_name(r["name"])
        if not name:
            continue
        cat = normalize_category(r["category"])
        if not cat:
            raise ValueError(f"Unknown category {r['category']!r} at row {i + 2}")
        players.append(SeedPlayer(name=name, category=cat))
    return players

def build_template_csv() -> bytes:
    example = (
        "name,category\n"
        "Jordan,O\n"
        "Hannah,W\n"
    )
    return example.encode("utf-8")

def roster_to_dataframe(players: Iterable[Player]) -> pd.DataFrame:
    rows = []
    for p in players:
        rows.append({
            "id": p.id,
            "number": p.number,
            "name": p.name,
            "category": p.category,
        })
    return pd.DataFrame(rows, columns=["id", "number", "name", "category"])

def export_played_lines_csv(history: Iterable[HistoryEntry], players: Iterable[Player], team_names: Optional[Dict[int, str]] = None) -> bytes:
    """
    Shape: for each point, a header row 'Point N' with the scoring team, then
    Number,Player,Category rows, then a blank line.
    """
    lookup = {p.id: p for p in players}
    team_names = team_names or {1: "Team 1", 2: "Team 2"}
    buf = io.StringIO()
    w = csv.writer(buf)
    for entry in history:
        w.writerow([f"Point {entry.point_number}", f"Scored by {team_names.get(entry.team, entry.team)}"])
        w.writerow(["Number", "Player", "Category"])
        for pid in entry.line:
            p = lookup.get(pid)
            if p is None:
                w.writerow(["", pid, ""])  # removed since
            else:
                w.writerow([p.number, p.name, CATEGORY_LABELS[p.category]])
        w.writerow([])
    return buf.getvalue().encode("utf-8")
