from collections import Counter
import pytest
from line_core.engine import RotationEngine, rotate_left, circular_window, step_cursor
from line_core.errors import RosterDivergenceError
from line_core.models import RotationState
from line_core.engine_test_helpers import quick_roster, names

def test_rotate_left_moves_prefix_to_end():
    seq = list("abcdef")
    assert rotate_left(seq, 2) == list("cdefab")
    assert len(rotate_left(seq, 5)) == len(seq)
    assert rotate_left(rotate_left(seq, 2), 3) == rotate_left(seq, 5)
    assert rotate_left(seq, 0) == seq

def test_rotate_left_noop_when_consuming_all():
    seq = list("abc")
    assert rotate_left(seq, 3) == seq
    assert rotate_left(seq, 4) == seq
    assert rotate_left([], 2) == []

def test_cursor_matches_rotation():
    seq = list("abcdefg")
    cursor = 0
    rotated = seq
    for k in (4, 3, 3, 4, 4):
        cursor = step_cursor(cursor, len(seq), k)
        rotated = rotate_left(rotated, k)
        assert circular_window(seq, cursor, len(seq)) == rotated

def test_concrete_abba_scenario():
    eng = RotationEngine(quick_roster(5, 5), "ABBA")
    assert names(eng.current_line()) == ["A1", "A2", "A3", "A4", "B1", "B2", "B3"]
    eng.advance()
    assert names(eng.sequence("O")) == ["A5", "A1", "A2", "A3", "A4"]
    assert names(eng.sequence("W")) == ["B4", "B5", "B1", "B2", "B3"]
    assert eng.line_index == 1 and eng.point_number == 2
    assert names(eng.current_line()) == ["A5", "A1", "A2", "B4", "B5", "B1", "B2"]

def test_next_line_is_pure_preview():
    eng = RotationEngine(quick_roster(5, 5))
    before = eng.state
    preview = names(eng.next_line())
    assert eng.state == before
    eng.advance()
    assert names(eng.current_line()) == preview

def test_preview_line_matches_repeated_advance():
    eng = RotationEngine(quick_roster(6, 8))
    previews = [names(eng.preview_line(i)) for i in range(6)]
    seen = []
    for _ in range(6):
        seen.append(names(eng.current_line()))
        eng.advance()
    assert previews == seen
    assert [names(l) for l in RotationEngine(quick_roster(6, 8)).upcoming_lines(6)] == previews

def test_advance_then_rewind_restores_state():
    eng = RotationEngine(quick_roster(5, 5))
    eng.advance()
    snap = eng.state
    eng.advance()
    eng.rewind(snap)
    assert eng.state == snap

def test_fairness_after_full_abba_cycle():
    eng = RotationEngine(quick_roster(5, 5), "ABBA")
    used = Counter()
    for _ in range(4):
        used.update(p.id for p in eng.current_line())
        eng.advance()
    for cat in ("O", "W"):
        counts = [used[pid] for pid in eng.roster.ids_by_category(cat)]
        assert max(counts) - min(counts) <= 1

def test_short_category_degrades_gracefully():
    eng = RotationEngine(quick_roster(2, 5), "ABBA")
    line = eng.current_line()
    assert names(line) == ["A1", "A2", "B1", "B2", "B3"]
    eng.advance()
    assert eng.state.cursors["O"] == 0
    assert len(set(p.id for p in eng.current_line())) == len(eng.current_line())

def test_empty_category_is_not_an_error():
    eng = RotationEngine(quick_roster(0, 5))
    assert [p.category for p in eng.current_line()] == ["W", "W", "W"]
    eng.advance()
    assert eng.state.cursors["O"] == 0

def test_reconcile_inserts_new_player_at_cursor():
    roster = quick_roster(5, 5)
    eng = RotationEngine(roster, "4-3")
    # cursor for O moves 4 per point on 5 players: 0 -> 4 -> 3 -> 2
    for _ in range(3):
        eng.advance()
    assert eng.state.cursors["O"] == 2
    roster.add_player("A6", "O")
    eng.reconcile()
    assert names(eng.current_line())[0] == "A6"
    assert names(eng.sequence("O")) == ["A6", "A3", "A4", "A5", "A1", "A2"]
    assert [p.number for p in roster.players_by_category("O")] == [1, 2, 3, 4, 5, 6]
    assert roster.get(roster.ids_by_category("O")[-1]).name == "A6"

def test_reconcile_removal_keeps_next_player():
    roster = quick_roster(5, 5)
    eng = RotationEngine(roster, "4-3")
    eng.advance()  # O cursor -> 4 (A5 next)
    a1 = roster.ids_by_category("O")[0]
    roster.remove_player(a1)
    eng.reconcile()
    assert names(eng.current_line())[0] == "A5"
    assert eng.state.cursors["O"] == 3

def test_reconcile_removal_wraps_cursor():
    roster = quick_roster(5, 5)
    eng = RotationEngine(roster, "4-3")
    eng.advance()  # O cursor -> 4
    a5 = roster.ids_by_category("O")[4]
    roster.remove_player(a5)
    eng.reconcile()
    assert eng.state.cursors["O"] == 0
    assert names(eng.current_line())[:4] == ["A1", "A2", "A3", "A4"]

def test_reorder_keeps_cursor_position():
    roster = quick_roster(5, 5)
    eng = RotationEngine(roster, "4-3")
    eng.advance()  # O cursor -> 4
    roster.reorder("O", list(reversed(roster.ids_by_category("O"))))
    eng.reconcile()
    assert eng.state.cursors["O"] == 4
    assert names(eng.sequence("O")) == ["A1", "A5", "A4", "A3", "A2"]

def test_unreconciled_removal_is_a_programming_error():
    roster = quick_roster(3, 3)
    eng = RotationEngine(roster)
    roster.remove_player(roster.ids_by_category("W")[0])
    with pytest.raises(RosterDivergenceError):
        eng.current_line()
    eng.reconcile()
    assert names(eng.current_line()) == ["A1", "A2", "A3", "B2", "B3"]

def test_rewind_normalizes_stale_cursor():
    roster = quick_roster(5, 5)
    eng = RotationEngine(roster)
    eng.rewind(RotationState(line_index=2, point_number=3, cursors={"O": 7, "W": 1}))
    assert eng.state.cursors == {"O": 2, "W": 1}

def test_policy_switch_mid_game():
    eng = RotationEngine(quick_roster(6, 6), "ABBA")
    eng.advance()
    eng.set_policy("4-3")
    assert [p.category for p in eng.current_line()].count("O") == 4
    with pytest.raises(ValueError):
        eng.set_policy("nope")

def test_reconcile_detects_sequence_divergence():
    roster = quick_roster(3, 3)
    eng = RotationEngine(roster)
    eng._seq["O"].append(eng._seq["O"][0])
    with pytest.raises(RosterDivergenceError) as exc:
        eng.reconcile()
    assert exc.value.category == "O"
