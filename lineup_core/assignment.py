from __future__ import annotations
import logging
from typing import Dict, List, Set

from .constants import Category, position_group
from .grid import LineupGrid
from .models import PlayerTracking, Settings

logger = logging.getLogger(__name__)


def groups_played(t: PlayerTracking, settings: Settings) -> Set[Category]:
    return {position_group(settings.positions[pos]) for pos in t.positions_played if pos in settings.positions}


def eligible_groups(grid: LineupGrid, pid: str) -> Set[Category]:
    return {position_group(grid.settings.positions[pos]) for pos in grid.eligible_positions(pid)}


def needs_variety(t: PlayerTracking, settings: Settings, eligible: Set[Category]) -> bool:
    """True while a player who can cover two groups has played fewer than two."""
    return len(eligible) >= 2 and len(groups_played(t, settings)) < 2


def _commit(grid: LineupGrid, period: int, pid: str, pos: str, t: PlayerTracking,
            settings: Settings, check_eligibility: bool = True):
    grid.assign_to_position(period, pid, pos, check_eligibility=check_eligibility)
    t.positions_played.add(pos)
    t.playing_time += settings.period_length


def assign_field_positions(
    grid: LineupGrid,
    period: int,
    field_players: List[str],
    tracking: Dict[str, PlayerTracking],
    settings: Settings,
) -> List[str]:
    """
    Fill the outfield slots of `period` from `field_players` (roster order).
    Phase 1 matches preferred slots, scarcest slot first; phase 2 places whoever is
    left on the first open slot they can play, then on any open outfield slot.
    Returns the slots left empty.
    """
    order = {pid: i for i, pid in enumerate(field_players)}
    groups = {pid: eligible_groups(grid, pid) for pid in field_players}
    open_slots = [pos for pos in settings.field_positions if grid.positions(period).get(pos) is None]
    used: Set[str] = set()

    # Phase 1: preferred positions, scarcest first
    prefs: Dict[str, List[str]] = {}
    for pos in open_slots:
        prefs[pos] = [
            pid for pid in field_players
            if pos in grid.preferred_positions(pid) and grid.can_play(pid, pos)
        ]
    for pos in sorted(open_slots, key=lambda p: len(prefs[p])):
        cands = [pid for pid in prefs[pos] if pid not in used]
        if not cands:
            continue
        group = position_group(settings.positions[pos])

        def key(pid: str):
            t = tracking[pid]
            seen = group in groups_played(t, settings)
            # 0: needs variety and this slot gives it, 1: settled, 2: needs variety elsewhere
            if needs_variety(t, settings, groups[pid]):
                tier = 2 if seen else 0
            else:
                tier = 1
            return (tier, seen, len(t.positions_played), order[pid])

        best = min(cands, key=key)
        _commit(grid, period, best, pos, tracking[best], settings)
        used.add(best)
        logger.debug("Period %d: %s to preferred position %s", period, best, pos)

    # Phase 2: fallback
    remaining_slots = [pos for pos in open_slots if grid.positions(period).get(pos) is None]
    for pid in field_players:
        if pid in used or not remaining_slots:
            continue
        pos = next((p for p in remaining_slots if grid.can_play(pid, p)), None)
        eligible = pos is not None
        if pos is None:
            pos = next((p for p in remaining_slots if grid.can_play_fallback(pid, p)), None)
        if pos is None:
            continue
        _commit(grid, period, pid, pos, tracking[pid], settings, check_eligibility=eligible)
        used.add(pid)
        remaining_slots.remove(pos)
        if eligible:
            logger.debug("Period %d: %s to fallback position %s (not preferred)", period, pid, pos)
        else:
            logger.warning("Period %d: %s placed out of position at %s", period, pid, pos)

    unfilled = [pos for pos in open_slots if grid.positions(period).get(pos) is None]
    if unfilled:
        logger.warning("Period %d: could not assign players to positions: %s", period, ", ".join(unfilled))
    return unfilled
