from __future__ import annotations
from typing import Dict, List, Optional, Tuple

from .assignment import groups_played
from .constants import GOALKEEPER, position_group
from .fairness import adjacent_pairs, effective_quota, group_runs, sits_taken
from .grid import LineupGrid
from .models import PlayerTracking, Settings
from .roster import Roster


def tracking_from_grid(grid: LineupGrid, players: List[str]) -> Dict[str, PlayerTracking]:
    """Rebuild per-player tracking from whatever the grid currently holds."""
    out = {pid: PlayerTracking() for pid in players}
    for period, data in grid.periods.items():
        for pid in data.bench:
            if pid in out:
                out[pid].bench_periods.append(period)
        for pid in data.jersey:
            if pid in out:
                out[pid].jersey_periods.append(period)
        for pos, pid in data.positions.items():
            if pid not in out:
                continue
            out[pid].positions_played.add(pos)
            out[pid].playing_time += grid.settings.period_length
            if pos == GOALKEEPER:
                out[pid].gk_periods.append(period)
    return out


def sitting_count(grid: LineupGrid, period: int, roster: Optional[Roster] = None) -> int:
    """Schedulable players on bench or jersey; injured/absent bench entries don't count."""
    data = grid.period(period)
    roster = grid.roster if roster is None else roster
    return sum(1 for pid in data.bench + data.jersey if roster.is_schedulable(pid))


def unplaced_players(grid: LineupGrid, period: int, players: List[str]) -> List[str]:
    """Players who hold no slot, bench or jersey entry in the period."""
    return [pid for pid in players if grid.assignment_of(period, pid)["type"] == "unassigned"]


def _sit_bound_issues(pid: str, t: PlayerTracking, settings: Settings) -> List[str]:
    total = len(sits_taken(t))
    if total < settings.min_sits or total > settings.max_sits:
        return [f"{pid}: {total} bench periods (should be {settings.min_sits}-{settings.max_sits})"]
    return []


def validate_all_rules(grid: LineupGrid, settings: Optional[Settings] = None) -> List[str]:
    """
    Post-build check of the five fairness rules against the grid. Read-only.
    """
    settings = settings or grid.settings
    roster = grid.roster
    players = roster.schedulable_players()
    tracking = tracking_from_grid(grid, players)
    violations: List[str] = []

    for pid in players:
        t = tracking[pid]
        violations.extend(_sit_bound_issues(pid, t, settings))

        for a, b in adjacent_pairs(sits_taken(t)):
            violations.append(f"{pid}: Consecutive bench periods {a}-{b}")

        eligible_groups = {position_group(settings.positions[pos]) for pos in grid.eligible_positions(pid)}
        played = groups_played(t, settings)
        if len(eligible_groups) >= 2 and len(played) < 2:
            violations.append(f"{pid}: Only played {len(played)} position categories (should play at least 2)")

        for run in group_runs(t.gk_periods):
            first = run[0]
            if first > 1 and (first - 1) not in t.jersey_periods:
                violations.append(
                    f"{pid}: Needs jersey preparation in period {first - 1} "
                    f"before GK duty starts in period {first}"
                )

    quota = effective_quota(settings, len(players))
    for period in grid.periods:
        sitting = sitting_count(grid, period, roster)
        if sitting != quota:
            violations.append(f"Period {period}: {sitting} players sitting (should be exactly {quota})")
        for pid in unplaced_players(grid, period, players):
            violations.append(f"Period {period}: {pid} not placed")

    return violations


def preference_compliance(grid: LineupGrid) -> Tuple[int, int, int]:
    """(percentage, preferred, total) over outfield assignments; 100% when empty."""
    roster = grid.roster
    total = 0
    preferred = 0
    for data in grid.periods.values():
        for pos, pid in data.positions.items():
            if pos == GOALKEEPER or pid is None or pid not in roster:
                continue
            total += 1
            if pos in grid.preferred_positions(pid):
                preferred += 1
    pct = round(preferred * 100 / total) if total else 100
    return pct, preferred, total


def non_preferred_assignments(grid: LineupGrid, pid: str) -> List[str]:
    prefs = grid.preferred_positions(pid)
    out = []
    for period, data in grid.periods.items():
        for pos, assigned in data.positions.items():
            if assigned == pid and pos != GOALKEEPER and pos not in prefs:
                out.append(f"Period {period}: {pos}")
    return out


def validate_lineup_quality(
    grid: LineupGrid, roster: Optional[Roster] = None, settings: Optional[Settings] = None
) -> List[str]:
    """Read-only diagnostics on the current grid: empty slots, sitting counts, unplaced players, sit bounds."""
    settings = settings or grid.settings
    roster = grid.roster if roster is None else roster
    players = roster.schedulable_players()
    quota = effective_quota(settings, len(players))
    issues: List[str] = []

    for period in grid.periods:
        empty = grid.empty_positions(period)
        if empty:
            issues.append(f"Period {period}: Unfilled positions - {', '.join(empty)}")
        sitting = sitting_count(grid, period, roster)
        if sitting != quota:
            issues.append(f"Period {period}: {sitting} players sitting (should be exactly {quota})")
        for pid in unplaced_players(grid, period, players):
            issues.append(f"Period {period}: {pid} not placed")

    tracking = tracking_from_grid(grid, players)
    for pid in players:
        issues.extend(_sit_bound_issues(pid, tracking[pid], settings))
    return issues
