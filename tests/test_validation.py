from lineup_core.engine import build_complete_lineup
from lineup_core.engine_test_helpers import make_grid
from lineup_core.validation import (
    non_preferred_assignments, preference_compliance, validate_all_rules, validate_lineup_quality,
)

def test_empty_grid_findings():
    grid = make_grid()
    issues = validate_lineup_quality(grid)
    assert "Period 1: 0 players sitting (should be exactly 3)" in issues
    assert any(i.startswith("Period 1: Unfilled positions - striker") for i in issues)
    assert "Kennedy: 0 bench periods (should be 1-2)" in issues

def test_consecutive_sits_flagged():
    grid = make_grid()
    grid.add_to_bench(2, "Olivia")
    grid.add_to_bench(3, "Olivia")
    violations = validate_all_rules(grid)
    assert "Olivia: Consecutive bench periods 2-3" in violations
    assert "Olivia: 2 bench periods (should be 1-2)" not in violations

def test_missing_jersey_flagged():
    grid = make_grid()
    grid.assign_to_position(4, "Aubree", "goalkeeper")
    grid.assign_to_position(1, "SK", "goalkeeper")
    violations = validate_all_rules(grid)
    assert any(v.startswith("Aubree: Needs jersey preparation in period 3") for v in violations)
    assert not any(v.startswith("SK: Needs jersey") for v in violations)

def test_variety_flagged_only_for_versatile_players():
    grid = make_grid()
    for p in (1, 2, 3):
        grid.assign_to_position(p, "Kennedy", "striker")
        grid.assign_to_position(p, "Olivia", "left-back")
    violations = validate_all_rules(grid)
    assert any(v.startswith("Kennedy: Only played 1") for v in violations)
    assert not any(v.startswith("Olivia: Only played") for v in violations)

def test_validator_is_read_only():
    grid = make_grid()
    build_complete_lineup(grid)
    before = grid.to_dict()
    validate_all_rules(grid)
    validate_lineup_quality(grid)
    assert grid.to_dict() == before

def test_built_lineup_passes_quality_check():
    grid = make_grid()
    build_complete_lineup(grid)
    assert validate_lineup_quality(grid) == []

def test_compliance():
    grid = make_grid()
    assert preference_compliance(grid) == (100, 0, 0)
    grid.assign_to_position(1, "Olivia", "left-back")
    grid.assign_to_position(1, "Olivia", "striker", check_eligibility=False)
    grid.assign_to_position(1, "Chisom", "center-back")
    assert preference_compliance(grid) == (50, 1, 2)
    assert non_preferred_assignments(grid, "Olivia") == ["Period 1: striker"]

def test_unplaced_players_reported():
    grid = make_grid()
    build_complete_lineup(grid)
    pid = grid.positions(2)["striker"]
    grid.remove_from_position(2, "striker")
    assert f"Period 2: {pid} not placed" in validate_lineup_quality(grid)
    assert f"Period 2: {pid} not placed" in validate_all_rules(grid)
    assert not any(v.startswith("Period 3:") and "not placed" in v for v in validate_all_rules(grid))
