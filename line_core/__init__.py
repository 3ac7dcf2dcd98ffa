from .constants import (
    LINE_SIZE, CATEGORY_A, CATEGORY_B, CATEGORIES, CATEGORY_LABELS,
    POLICY_ABBA, POLICY_4_3, POLICY_3_4, RATIO_POLICIES,
    normalize_name, normalize_category,
)
from .models import Player, LinePattern, RotationState, HistoryEntry, SeedPlayer
from .errors import ActionResult, Signal, LineCoreError, RosterDivergenceError
from .patterns import resolve_pattern
from .roster import RosterStore
from .engine import RotationEngine, rotate_left
from .history import HistoryStack
from .config import GameConfig, load_config
from .game import LineCaller, category_breakdown
