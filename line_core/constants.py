from __future__ import annotations
from typing import Dict, List

# -----------------------------
# Line shape
# -----------------------------
LINE_SIZE = 7

# Category codes (match the roster sheet exactly)
CATEGORY_A = "O"   # open / majority in an "A" line
CATEGORY_B = "W"   # women / majority in a "B" line
CATEGORIES: List[str] = [CATEGORY_A, CATEGORY_B]

CATEGORY_LABELS: Dict[str, str] = {
    CATEGORY_A: "Open",
    CATEGORY_B: "Women",
}

# canonical -> accepted spellings (lowercase)
CATEGORY_ALIASES: Dict[str, set] = {
    CATEGORY_A: {"o", "open", "m", "male", "man", "men", "mmp", "a"},
    CATEGORY_B: {"w", "women", "woman", "f", "female", "fmp", "wmp", "b"},
}

# --------------------------------
# Ratio policies
# --------------------------------
POLICY_ABBA = "ABBA"
POLICY_4_3 = "4-3"
POLICY_3_4 = "3-4"
RATIO_POLICIES: List[str] = [POLICY_ABBA, POLICY_4_3, POLICY_3_4]

# (category A count, category B count)
PATTERN_A = (4, 3)
PATTERN_B = (3, 4)

# lineIndex % 4 -> A,B,B,A
ABBA_CYCLE = ("A", "B", "B", "A")

FIXED_POLICY_PATTERNS = {
    POLICY_4_3: PATTERN_A,
    POLICY_3_4: PATTERN_B,
}

TEAMS = (1, 2)

ROSTER_CSV_HEADERS = ["name", "category"]
HEADER_ALIASES = {
    "name": {"name", "player", "full name"},
    "category": {"category", "gender", "cat", "pool"},
}

# ---------------------
# Normalization helpers
# ---------------------
def normalize_name(s: str) -> str:
    if s is None:
        return ""
    return " ".join(str(s).split())

def normalize_category(c: str) -> str:
    """Map a free-form category label to O/W, or "" when unrecognized."""
    if not c:
        return ""
    lc = str(c).strip().lower()
    for canon, aliases in CATEGORY_ALIASES.items():
        if lc in aliases:
            return canon
    return ""
