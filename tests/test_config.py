import pytest

from lineup_core.config import (
    DEFAULT_FORMATIONS, DEFAULT_FORMATIONS_YAML, formations_from_text, load_formations_yaml, load_settings,
    save_formations_yaml, settings_for_formation,
)
from lineup_core.constants import POSITION_CATEGORIES, Category

def test_default_formations_parse():
    formations = formations_from_text(DEFAULT_FORMATIONS_YAML)
    assert set(formations) == {"4v4-1-2-1", "7v7-2-3-1", "9v9-3-2-3", "11v11-4-4-2"}
    assert len(formations["11v11-4-4-2"]) == 11
    assert formations["9v9-3-2-3"] == POSITION_CATEGORIES

def test_settings_for_formation():
    s = settings_for_formation("7v7-2-3-1", sitting_quota=2)
    assert s.field_size == 7
    assert s.sitting_quota == 2
    assert s.positions["midfielder-left"] == Category.MIDFIELD | Category.WING
    with pytest.raises(ValueError):
        settings_for_formation("5v5")

def test_formation_needs_goalkeeper():
    with pytest.raises(ValueError):
        formations_from_text("broken:\n  striker: Striker\n")
    with pytest.raises(ValueError):
        formations_from_text("- just\n- a list\n")

def test_load_settings_from_yaml(tmp_path):
    path = tmp_path / "game.yaml"
    path.write_text(
        "total_periods: 6\n"
        "period_length: 10\n"
        "formation: 4v4-1-2-1\n",
        encoding="utf-8",
    )
    s = load_settings(str(path))
    assert s.total_periods == 6
    assert s.period_length == 10
    assert s.positions == DEFAULT_FORMATIONS["4v4-1-2-1"]
    assert s.max_sits == 2

def test_load_settings_with_inline_formation(tmp_path):
    path = tmp_path / "game.yaml"
    path.write_text(
        "formation: mini\n"
        "formations:\n"
        "  mini:\n"
        "    goalkeeper: Goalkeeper\n"
        "    field: All except GK\n",
        encoding="utf-8",
    )
    s = load_settings(str(path))
    assert s.field_positions == ["field"]
    assert s.positions["field"] == Category.ALL_FIELD

def test_save_formations_yaml(tmp_path):
    path = tmp_path / "formations.yaml"
    save_formations_yaml(str(path), DEFAULT_FORMATIONS_YAML)
    assert load_formations_yaml(str(path)) == DEFAULT_FORMATIONS

def test_save_formations_yaml_rejects_bad_text(tmp_path):
    path = tmp_path / "formations.yaml"
    with pytest.raises(ValueError):
        save_formations_yaml(str(path), "4v4:\n  defender: Back\n")
    assert not path.exists()
