import pytest
from pydantic import ValidationError

from lineup_core.constants import Category, parse_categories, position_group, category_label, POSITION_CATEGORIES
from lineup_core.models import Player, Settings, LineupEvent

def test_wildcards_parse_to_flags():
    assert parse_categories("All") == Category.ANY
    assert parse_categories(["All except GK"]) == Category.ALL_FIELD
    assert not (parse_categories("all except gk") & Category.GOALKEEPER)
    assert parse_categories(["Back", "Goalkeeper"]) == Category.BACK | Category.GOALKEEPER

def test_unknown_category_rejected():
    with pytest.raises(ValueError):
        parse_categories(["Sweeper"])
    with pytest.raises(ValidationError):
        Player(id="x", categories=["Sweeper"])

def test_player_accepts_tokens():
    p = Player(id="Skyler", categories=["Midfield", "Defense"])
    assert p.categories & Category.MIDFIELD
    assert p.categories & POSITION_CATEGORIES["center-back"]
    assert not p.categories & POSITION_CATEGORIES["striker"]

def test_position_group_merges_back_and_defense():
    assert position_group(POSITION_CATEGORIES["left-back"]) == Category.BACK
    assert position_group(Category.DEFENSE) == Category.BACK
    assert position_group(POSITION_CATEGORIES["goalkeeper"]) == Category.GOALKEEPER

def test_category_label():
    assert category_label(Category.ANY) == "All"
    assert category_label(Category.ALL_FIELD) == "All except GK"
    assert category_label(Category.STRIKER | Category.WING) == "Striker, Wing"

def test_settings_defaults_and_checks():
    s = Settings()
    assert s.total_periods == 8 and s.period_length == 7.5
    assert s.field_size == 9
    assert "goalkeeper" not in s.field_positions
    with pytest.raises(ValidationError):
        Settings(min_sits=3, max_sits=2)
    with pytest.raises(ValidationError):
        Settings(positions={"striker": "Striker"})

def test_event_describe():
    assert LineupEvent(kind="assign", period=2, player="Olivia", position="left-back").describe() == \
        "Period 2: Olivia to left-back"
    assert LineupEvent(kind="clear").describe() == "Cleared all periods"
