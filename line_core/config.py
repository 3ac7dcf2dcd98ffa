# line_core/config.py
from __future__ import annotations
import logging
import re
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .constants import LINE_SIZE, POLICY_ABBA, RATIO_POLICIES
from .models import SeedPlayer

_HHMM = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")

# ===== Seed roster (reused verbatim by reset) =====
DEFAULT_SEED_ROSTER = [
    {"name": "Rhezie", "category": "W"},
    {"name": "Randy", "category": "O"},
    {"name": "Evan", "category": "O"},
    {"name": "Jen", "category": "W"},
    {"name": "Laura", "category": "W"},
    {"name": "Danielle", "category": "W"},
    {"name": "Haley", "category": "W"},
    {"name": "Alyssa", "category": "W"},
    {"name": "Morgan", "category": "W"},
    {"name": "Ashley", "category": "W"},
    {"name": "Nathan", "category": "O"},
    {"name": "Sam", "category": "O"},
    {"name": "Jordan", "category": "O"},
    {"name": "Alex", "category": "O"},
    {"name": "Jason", "category": "O"},
    {"name": "Devin", "category": "W"},
    {"name": "Hannah", "category": "W"},
    {"name": "Nathalie", "category": "W"},
]

# ===== App defaults =====
DEFAULT_CONFIG = {
    "team1_name": "Disco Fever",
    "team2_name": "Team 2",
    "ratio_policy": POLICY_ABBA,
    "line_size": LINE_SIZE,
    "game_start_time": "18:45",
    "halftime_time": "19:30",
    "end_time": "20:15",
    "seed_roster": DEFAULT_SEED_ROSTER,
}

class GameConfig(BaseModel):
    team1_name: str = DEFAULT_CONFIG["team1_name"]
    team2_name: str = DEFAULT_CONFIG["team2_name"]
    ratio_policy: str = POLICY_ABBA
    line_size: int = LINE_SIZE
    game_start_time: str = DEFAULT_CONFIG["game_start_time"]
    halftime_time: str = DEFAULT_CONFIG["halftime_time"]
    end_time: str = DEFAULT_CONFIG["end_time"]
    seed_roster: List[SeedPlayer] = Field(
        default_factory=lambda: [SeedPlayer(**p) for p in DEFAULT_SEED_ROSTER]
    )

    @field_validator("ratio_policy")
    @classmethod
    def _known_policy(cls, v):
        if v not in RATIO_POLICIES:
            raise ValueError(f"ratio_policy must be one of {RATIO_POLICIES}")
        return v

    @field_validator("line_size")
    @classmethod
    def _fixed_line_size(cls, v):
        if v != LINE_SIZE:
            raise ValueError(f"line_size is fixed at {LINE_SIZE}")
        return v

    @field_validator("game_start_time", "halftime_time", "end_time")
    @classmethod
    def _clock_time(cls, v):
        if not _HHMM.match(str(v).strip()):
            raise ValueError("times must be HH:MM (24h)")
        return str(v).strip()

    @field_validator("team1_name", "team2_name")
    @classmethod
    def _nonblank(cls, v):
        if not str(v).strip():
            raise ValueError("team names cannot be blank")
        return str(v).strip()

def load_config(path: Optional[str] = None) -> GameConfig:
    """Read a YAML config; no path or an empty file yields the defaults."""
    if not path:
        return GameConfig()
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return GameConfig.model_validate(raw)

def dump_config(config: GameConfig) -> str:
    return yaml.safe_dump(config.model_dump(), sort_keys=False, allow_unicode=True)

def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
