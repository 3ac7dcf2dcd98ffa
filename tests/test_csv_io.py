import io
import pytest
from line_core.csv_io import parse_roster_csv, build_template_csv, roster_to_dataframe, export_played_lines_csv
from line_core.game import LineCaller
from line_core.config import GameConfig
from line_core.engine_test_helpers import quick_seed

def test_parse_with_aliases_and_blank_rows():
    data = b"Player,Gender\nJen,Women\n,O\nRandy,M\n  Nathalie  ,f\n"
    seed = parse_roster_csv(data)
    assert [(s.name, s.category) for s in seed] == [("Jen", "W"), ("Randy", "O"), ("Nathalie", "W")]

def test_parse_template_round_trip():
    seed = parse_roster_csv(io.BytesIO(build_template_csv()))
    assert [s.category for s in seed] == ["O", "W"]

def test_parse_rejects_bad_category_and_missing_columns():
    with pytest.raises(ValueError):
        parse_roster_csv(b"name,category\nJen,X\n")
    with pytest.raises(ValueError):
        parse_roster_csv(b"name\nJen\n")

def test_roster_dataframe_columns():
    lc = LineCaller(GameConfig(seed_roster=quick_seed(2, 1)))
    df = roster_to_dataframe(lc.roster.all_players())
    assert list(df.columns) == ["id", "number", "name", "category"]
    assert df["number"].tolist() == [1, 2, 1]

def test_export_played_lines():
    lc = LineCaller(GameConfig(seed_roster=quick_seed(5, 5)))
    lc.score(1)
    lc.score(2)
    text = export_played_lines_csv(lc.history.entries, lc.roster.all_players(), {1: "Us", 2: "Them"}).decode("utf-8")
    assert "Point 1,Scored by Us" in text
    assert "Point 2,Scored by Them" in text
    assert "1,A1,Open" in text
