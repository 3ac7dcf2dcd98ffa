# FILE: tests/test_fairness.py
from line_core.fairness import check_evenness, usage_counts, category_spread, fairness_dashboard_df
from line_core.game import LineCaller
from line_core.config import GameConfig
from line_core.engine_test_helpers import quick_seed

def _played(points, n_open=5, n_women=5):
    lc = LineCaller(GameConfig(seed_roster=quick_seed(n_open, n_women)))
    for i in range(points):
        lc.score(1 + i % 2)
    return lc

def test_evenness_true_and_false():
    assert check_evenness([2, 2, 3, 2])
    assert not check_evenness([1, 5, 1, 1])
    assert check_evenness([])

def test_usage_counts_follow_undo():
    lc = _played(4)
    players = lc.roster.all_players()
    counts = usage_counts(lc.history.entries, players)
    assert sum(counts.values()) == 4 * 7
    lc.undo()
    counts = usage_counts(lc.history.entries, players)
    assert sum(counts.values()) == 3 * 7

def test_category_spread_after_full_cycle():
    lc = _played(4)
    players = lc.roster.all_players()
    spread = category_spread(usage_counts(lc.history.entries, players), players)
    assert spread == {"O": 1, "W": 1}

def test_dashboard_flags_and_shape():
    lc = _played(8, n_open=6, n_women=9)
    df = fairness_dashboard_df(lc.history.entries, lc.roster.all_players())
    assert list(df.columns) == ["id", "number", "name", "category", "points_played", "flag_evenness_violation"]
    assert len(df) == 15
    assert not df["flag_evenness_violation"].any()
    assert df["points_played"].sum() == 8 * 7

def test_dashboard_empty_roster():
    df = fairness_dashboard_df([], [])
    assert df.empty
