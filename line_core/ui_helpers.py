"""
Small, UI-agnostic helpers shared by app.py.
"""
from __future__ import annotations
from .constants import CATEGORY_LABELS
from .models import Player

def display_name(p: Player) -> str:
    return f"#{p.number} {p.name}"

def category_heading(category: str, count: int) -> str:
    return f"{CATEGORY_LABELS[category]} ({count})"
