from lineup_core.engine import build_complete_lineup
from lineup_core.engine_test_helpers import default_roster, make_grid
from lineup_core.stats import calculate_player_stats, stats_dashboard_df

def test_player_stats_after_build():
    grid = make_grid()
    build_complete_lineup(grid)
    sk = calculate_player_stats(grid, "SK")
    assert sk.bench_periods == 2
    assert sk.jersey_periods == 0
    assert sk.total_minutes == 45.0
    assert sk.positions["goalkeeper"] == 3
    aubree = calculate_player_stats(grid, "Aubree")
    assert aubree.jersey_periods == 1 and aubree.bench_periods == 1

def test_minutes_add_up():
    grid = make_grid()
    build_complete_lineup(grid)
    total = sum(calculate_player_stats(grid, pid).total_minutes for pid in grid.roster.player_names())
    assert total == 8 * 9 * 7.5

def test_dashboard_flags_injured_separately():
    grid = make_grid(default_roster({"Olivia": "injured"}))
    build_complete_lineup(grid)
    dash = stats_dashboard_df(grid)
    assert len(dash) == 12
    olivia = dash[dash["name"] == "Olivia"].iloc[0]
    assert olivia["status"] == "injured"
    assert olivia["minutes"] == 0
    assert olivia["bench"] == 8
    assert not olivia["flag_sit_violation"]
