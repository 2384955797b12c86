from __future__ import annotations
import logging
from typing import Callable, Dict, List, Optional

from .assignment import assign_field_positions
from .bench import select_bench_players
from .constants import GOALKEEPER
from .errors import PreconditionError
from .fairness import effective_quota
from .goalkeeper import plan_goalkeepers
from .grid import LineupGrid
from .models import BuildReport, PlayerTracking, Settings
from .roster import Roster
from .validation import preference_compliance, sitting_count, validate_all_rules

logger = logging.getLogger(__name__)

Notify = Callable[[str, str], None]

_NOTIFY_LEVELS = {"success": logging.INFO, "warning": logging.WARNING, "error": logging.ERROR}


def _log_notify(level: str, message: str):
    logger.log(_NOTIFY_LEVELS.get(level, logging.INFO), message)


def _resolve(grid: LineupGrid, roster: Optional[Roster], settings: Optional[Settings]):
    roster = grid.roster if roster is None else roster
    settings = settings or grid.settings
    return roster, settings


def check_preconditions(roster: Roster, settings: Settings) -> List[str]:
    if len(roster) == 0:
        raise PreconditionError("No active team selected")
    players = roster.schedulable_players()
    if len(players) < settings.field_size:
        raise PreconditionError(
            f"Not enough available players: {len(players)} available, "
            f"{settings.field_size} needed to fill every position"
        )
    return players


# -----------------------
# Full build
# -----------------------
def _build_period(
    grid: LineupGrid,
    period: int,
    players: List[str],
    tracking: Dict[str, PlayerTracking],
    settings: Settings,
    quota: int,
    relaxations: List[str],
) -> List[str]:
    gk = grid.goalkeeper(period)
    jersey = [pid for pid in grid.jersey(period) if pid in tracking]
    pool = [pid for pid in players if pid != gk and pid not in jersey]
    target = max(0, quota - len(jersey))

    # more field players than outfield slots: the extra ones sit too
    slots = len(settings.field_positions)
    overflow = len(pool) - slots
    if overflow > target:
        msg = (f"Period {period}: {len(pool)} players for {slots} outfield positions; "
               f"benching {overflow - target} over the sitting quota")
        logger.warning(msg)
        relaxations.append(msg)
        target = overflow

    benched = select_bench_players(period, pool, target, tracking, settings, relaxations)
    for pid in benched:
        grid.add_to_bench(period, pid)
    logger.debug("Period %d: bench %s, jersey %s", period, benched, jersey)

    field_players = [pid for pid in pool if pid not in benched]
    unfilled = assign_field_positions(grid, period, field_players, tracking, settings)

    for pid in field_players:
        if grid.assignment_of(period, pid)["type"] == "unassigned":
            grid.add_to_bench(period, pid)
            tracking[pid].bench_periods.append(period)
            msg = f"Period {period}: no open position for {pid}; moved to bench"
            logger.warning(msg)
            relaxations.append(msg)
    return unfilled


def build_complete_lineup(
    grid: LineupGrid,
    roster: Optional[Roster] = None,
    settings: Optional[Settings] = None,
) -> BuildReport:
    """
    Clear the grid and rebuild every period: goalkeeper plan first, then bench and
    field slots period by period, then the rule validator.

    Raises PreconditionError (grid untouched) when the roster cannot fill the field,
    CriticalAlgorithmFailure when a period cannot be staffed (grid left partial).
    """
    roster, settings = _resolve(grid, roster, settings)
    players = check_preconditions(roster, settings)

    if roster is not grid.roster:
        grid.roster = roster
    grid.settings = settings
    grid.clear_all_periods()

    tracking: Dict[str, PlayerTracking] = {pid: PlayerTracking() for pid in players}
    relaxations: List[str] = []
    unfilled: Dict[int, List[str]] = {}

    for pid in roster.unavailable_players():
        for period in grid.periods:
            grid.add_to_bench(period, pid)
        logger.info("%s is %s and sits every period", pid, roster.availability(pid))

    blocks = plan_goalkeepers(grid, players, tracking, settings)

    quota = effective_quota(settings, len(players))
    if quota < settings.sitting_quota:
        logger.warning("Sitting quota lowered to %d for %d available players", quota, len(players))

    for period in grid.periods:
        empty = _build_period(grid, period, players, tracking, settings, quota, relaxations)
        if empty:
            unfilled[period] = empty

    violations = validate_all_rules(grid, settings)
    compliance, preferred, total = preference_compliance(grid)
    logger.info(
        "Lineup built: %d violations, %d%% preferred (%d/%d)",
        len(violations), compliance, preferred, total,
    )
    return BuildReport(
        tracking=tracking,
        goalkeeper_blocks=blocks,
        relaxations=relaxations,
        unfilled=unfilled,
        violations=violations,
        compliance=compliance,
    )


def auto_fill_all(
    grid: LineupGrid,
    roster: Optional[Roster] = None,
    settings: Optional[Settings] = None,
    notify: Optional[Notify] = None,
) -> BuildReport:
    notify = notify or _log_notify
    try:
        report = build_complete_lineup(grid, roster, settings)
    except Exception as e:
        notify("error", f"Auto-fill failed: {e}")
        raise

    if report.violations:
        for v in report.violations:
            logger.warning("Rule violation: %s", v)
        notify("warning", f"Lineup created with {len(report.violations)} rule violations")
    else:
        notify("success", f"Complete lineup created! {report.compliance}% preferred position compliance")
    return report


# -----------------------
# Single period (no rule enforcement)
# -----------------------
def _periods_at(grid: LineupGrid, pid: str, position: str) -> int:
    return sum(1 for data in grid.periods.values() if data.positions.get(position) == pid)


def auto_fill_period(
    grid: LineupGrid,
    roster: Optional[Roster] = None,
    period: int = 1,
    settings: Optional[Settings] = None,
) -> List[str]:
    """
    Fill the gaps in one period without the fairness rules. Slot, bench and jersey
    entries already in the period stay where they are. Empty slots go first to the
    player who held them in the previous period, then (goalkeeper first) to the
    eligible player who has played that slot least. The remaining players sit, up
    to the sitting quota. Returns the slots left empty.
    """
    roster, settings = _resolve(grid, roster, settings)
    data = grid.period(period)
    placed = {pid for pid in data.positions.values() if pid} | set(data.bench) | set(data.jersey)

    for pid in roster.unavailable_players():
        if pid not in placed:
            grid.add_to_bench(period, pid)
            placed.add(pid)

    free = [pid for pid in roster.schedulable_players() if pid not in placed]

    def eligible(pid: str, pos: str) -> bool:
        return roster.can_play_position(pid, pos, settings.positions)

    if period - 1 in grid.periods:
        previous = grid.positions(period - 1)
        for pos in settings.field_positions:
            pid = previous.get(pos)
            if grid.positions(period).get(pos) is None and pid in free and eligible(pid, pos):
                grid.assign_to_position(period, pid, pos, check_eligibility=False)
                free.remove(pid)

    order = [pos for pos in settings.positions if pos == GOALKEEPER] + settings.field_positions
    for pos in order:
        if grid.positions(period).get(pos) is not None:
            continue
        cands = [pid for pid in free if eligible(pid, pos)]
        if not cands:
            continue
        pid = min(cands, key=lambda c: _periods_at(grid, c, pos))
        grid.assign_to_position(period, pid, pos, check_eligibility=False)
        free.remove(pid)

    quota = effective_quota(settings, len(roster.schedulable_players()))
    room = max(0, quota - sitting_count(grid, period, roster))
    for pid in free[:room]:
        grid.add_to_bench(period, pid)
    if len(free) > room:
        logger.warning("Period %d: no slot or bench room for %s", period, ", ".join(free[room:]))

    empty = grid.empty_positions(period)
    if empty:
        logger.warning("Period %d: unfilled positions %s", period, ", ".join(empty))
    return empty
