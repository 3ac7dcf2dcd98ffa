from __future__ import annotations

from .models import LinePattern
from .constants import (
    ABBA_CYCLE, FIXED_POLICY_PATTERNS, PATTERN_A, PATTERN_B, POLICY_ABBA,
)

def resolve_pattern(line_index: int, policy: str = POLICY_ABBA) -> LinePattern:
    """Category composition of the line at ``line_index`` under ``policy``.

    Fixed policies ignore the index. ABBA has period 4: indices 0 and 3 of each
    cycle are "A" lines (4 O / 3 W), 1 and 2 are "B" lines (3 O / 4 W).
    """
    if line_index < 0:
        raise ValueError(f"line_index must be >= 0, got {line_index}")
    if policy in FIXED_POLICY_PATTERNS:
        a, b = FIXED_POLICY_PATTERNS[policy]
        return LinePattern(a_count=a, b_count=b)
    if policy != POLICY_ABBA:
        raise ValueError(f"Unknown ratio policy: {policy}")
    a, b = PATTERN_A if ABBA_CYCLE[line_index % 4] == "A" else PATTERN_B
    return LinePattern(a_count=a, b_count=b)

def pattern_label(line_index: int, policy: str = POLICY_ABBA) -> str:
    # "A"/"B" tag shown next to the ABBA indicator
    p = resolve_pattern(line_index, policy)
    return "A" if (p.a_count, p.b_count) == PATTERN_A else "B"
