import pytest
from line_core.constants import LINE_SIZE
from line_core.patterns import resolve_pattern, pattern_label

def test_abba_cycle_and_line_size():
    seq = []
    for i in range(40):
        p = resolve_pattern(i, "ABBA")
        assert p.a_count + p.b_count == LINE_SIZE
        seq.append(pattern_label(i, "ABBA"))
    assert seq[:8] == ["A", "B", "B", "A", "A", "B", "B", "A"]
    assert seq == ["A", "B", "B", "A"] * 10

def test_abba_balances_every_four_lines():
    for start in range(0, 12, 4):
        pats = [resolve_pattern(i) for i in range(start, start + 4)]
        assert sum(p.a_count for p in pats) == 14
        assert sum(p.b_count for p in pats) == 14

def test_fixed_policies_ignore_index():
    for i in (0, 1, 2, 3, 17):
        p = resolve_pattern(i, "4-3")
        assert (p.a_count, p.b_count) == (4, 3)
        q = resolve_pattern(i, "3-4")
        assert (q.a_count, q.b_count) == (3, 4)

def test_bad_inputs_raise():
    with pytest.raises(ValueError):
        resolve_pattern(-1)
    with pytest.raises(ValueError):
        resolve_pattern(0, "5-2")
