from __future__ import annotations
from typing import Optional

import pandas as pd

from .constants import POSITION_ABBREVIATIONS
from .grid import LineupGrid
from .models import PlayerStats, Settings
from .roster import Roster
from .validation import non_preferred_assignments


def calculate_player_stats(grid: LineupGrid, player: str, settings: Optional[Settings] = None) -> PlayerStats:
    """Minutes, sit counts and per-slot period counts for one player, read off the grid."""
    settings = settings or grid.settings
    stats = PlayerStats()
    for data in grid.periods.values():
        for pos, pid in data.positions.items():
            if pid == player:
                stats.total_minutes += settings.period_length
                stats.positions[pos] = stats.positions.get(pos, 0) + 1
        if player in data.bench:
            stats.bench_periods += 1
        if player in data.jersey:
            stats.jersey_periods += 1
    return stats


def stats_dashboard_df(grid: LineupGrid, roster: Optional[Roster] = None,
                       settings: Optional[Settings] = None) -> pd.DataFrame:
    roster = grid.roster if roster is None else roster
    settings = settings or grid.settings
    rows = []
    for pid in roster.player_names():
        s = calculate_player_stats(grid, pid, settings)
        sits = s.bench_periods + s.jersey_periods
        schedulable = roster.is_schedulable(pid)
        rows.append({
            "name": pid,
            "status": roster.availability(pid),
            "minutes": s.total_minutes,
            "bench": s.bench_periods,
            "jersey": s.jersey_periods,
            "positions": ", ".join(
                f"{POSITION_ABBREVIATIONS.get(pos, pos)}x{n}" for pos, n in sorted(s.positions.items())
            ),
            "non_preferred": len(non_preferred_assignments(grid, pid)),
            "flag_sit_violation": schedulable and not (settings.min_sits <= sits <= settings.max_sits),
        })

    columns = ["name", "status", "minutes", "bench", "jersey", "positions", "non_preferred", "flag_sit_violation"]
    if not rows:
        return pd.DataFrame(columns=columns)
    dash = pd.DataFrame(rows, columns=columns).sort_values(
        ["flag_sit_violation", "minutes", "name"], ascending=[False, False, True]
    )
    return dash.reset_index(drop=True)
