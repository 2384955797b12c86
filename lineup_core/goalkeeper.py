from __future__ import annotations
import logging
from typing import Dict, List, Optional

from .constants import GOALKEEPER
from .fairness import contiguous_blocks, effective_quota, sits_committed, target_sits
from .grid import LineupGrid
from .models import PlayerTracking, Settings

logger = logging.getLogger(__name__)


def pick_goalkeepers(grid: LineupGrid, players: List[str], count: int) -> List[str]:
    capable = [p for p in players if grid.can_play(p, GOALKEEPER)]
    if len(capable) >= count:
        return capable[:count]
    logger.warning(
        "Only %d goalkeeper-capable players found; using the first %d available players.",
        len(capable), count,
    )
    return players[:count]


def _reserved_load(tracking: Dict[str, PlayerTracking], period: int) -> int:
    return sum(1 for t in tracking.values() if period in t.reserved_periods)


def _next_reserved_period(
    grid: LineupGrid,
    t: PlayerTracking,
    block: List[int],
    tracking: Dict[str, PlayerTracking],
    quota: int,
) -> Optional[int]:
    total = grid.settings.total_periods
    own = sits_committed(t)

    def ok(p: int) -> bool:
        if p < 1 or p > total or p in t.gk_periods or p in own:
            return False
        if (p - 1) in own or (p + 1) in own:
            return False
        return len(grid.jersey(p)) + _reserved_load(tracking, p) < quota

    # rest right after the block first
    after = block[-1] + 1
    if ok(after):
        return after

    def spread(p: int) -> int:
        return min((abs(p - s) for s in own), default=total + 1)

    cands = [p for p in range(1, total + 1) if ok(p)]
    if not cands:
        return None
    return max(cands, key=lambda p: (spread(p), -p))


def plan_goalkeepers(
    grid: LineupGrid,
    players: List[str],
    tracking: Dict[str, PlayerTracking],
    settings: Optional[Settings] = None,
) -> Dict[str, List[int]]:
    """
    Put one goalkeeper on each contiguous block of periods, jersey prep in the period
    before every block that starts after period 1, and reserve bench periods so each
    goalkeeper's sit count lands inside the fairness bounds.
    Returns goalkeeper -> periods.
    """
    settings = settings or grid.settings
    keepers = pick_goalkeepers(grid, players, settings.goalkeeper_count)
    blocks = contiguous_blocks(settings.total_periods, len(keepers))
    plan: Dict[str, List[int]] = {}

    for gk, block in zip(keepers, blocks):
        eligible = grid.can_play(gk, GOALKEEPER)
        t = tracking[gk]
        for p in block:
            grid.assign_to_position(p, gk, GOALKEEPER, check_eligibility=eligible)
            t.gk_periods.append(p)
            t.playing_time += settings.period_length
            t.positions_played.add(GOALKEEPER)
        if block[0] > 1:
            jp = block[0] - 1
            grid.add_to_jersey(jp, gk)
            t.jersey_periods.append(jp)
        plan.setdefault(gk, []).extend(block)
        logger.info("Goalkeeper %s: periods %s", gk, block)

    quota = effective_quota(settings, len(players))
    target = target_sits(settings, len(players))
    for gk, block in zip(keepers, blocks):
        t = tracking[gk]
        while len(sits_committed(t)) < target:
            p = _next_reserved_period(grid, t, block, tracking, quota)
            if p is None:
                logger.warning("No bench period left to reserve for goalkeeper %s", gk)
                break
            t.reserved_periods.append(p)
        logger.debug("Goalkeeper %s reserved bench periods %s", gk, sorted(t.reserved_periods))

    return plan
