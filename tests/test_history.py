from line_core.history import HistoryStack
from line_core.models import RotationState

def test_push_pop_lifo_and_empty():
    h = HistoryStack()
    assert h.pop() is None
    s0 = RotationState()
    s1 = RotationState(line_index=1, point_number=2, cursors={"O": 4, "W": 3})
    h.push(s0, 1, ["p1", "p2"])
    h.push(s1, 2)
    assert len(h) == 2
    top = h.pop()
    assert top.team == 2 and top.state == s1 and top.point_number == 2
    assert h.pop().line == ["p1", "p2"]
    assert h.pop() is None
    assert len(h) == 0

def test_snapshot_is_a_copy():
    h = HistoryStack()
    s = RotationState()
    h.push(s, 1)
    s.cursors["O"] = 3
    assert h.peek().state.cursors["O"] == 0
