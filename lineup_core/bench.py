from __future__ import annotations
import logging
from typing import Dict, List, Optional

from .errors import CriticalAlgorithmFailure
from .fairness import bench_priority, sit_count, sits_adjacent
from .models import PlayerTracking, Settings

logger = logging.getLogger(__name__)


def select_bench_players(
    period: int,
    candidates: List[str],
    target: int,
    tracking: Dict[str, PlayerTracking],
    settings: Settings,
    relaxations: Optional[List[str]] = None,
) -> List[str]:
    """
    Pick who sits in `period` from `candidates` (roster order).

    Reserved sitters go first. Everyone else is ranked by bench_priority and taken
    while they stay under the sit cap and away from their own sits. If that leaves
    the target short, the no-consecutive rule is relaxed, then the sit cap.
    Chosen players get `period` recorded in tracking.bench_periods.
    """
    chosen: List[str] = []

    def seat(pid: str):
        chosen.append(pid)
        t = tracking[pid]
        t.bench_periods.append(period)
        if period in t.reserved_periods:
            t.reserved_periods.remove(period)

    for pid in candidates:
        if period in tracking[pid].reserved_periods:
            seat(pid)
            logger.debug("Period %d: %s benched (pre-planned)", period, pid)

    remaining = [pid for pid in candidates if pid not in chosen]
    if len(chosen) >= target:
        return chosen

    # stable sort keeps roster order on equal scores
    ranked = sorted(remaining, key=lambda pid: -bench_priority(tracking[pid], period, settings.max_sits))
    for pid in ranked:
        if len(chosen) >= target:
            break
        t = tracking[pid]
        if sit_count(t) >= settings.max_sits:
            continue
        if sits_adjacent(t, period):
            continue
        seat(pid)

    while len(chosen) < target:
        under_cap = [pid for pid in ranked if pid not in chosen and sit_count(tracking[pid]) < settings.max_sits]
        if under_cap:
            pid = under_cap[0]
            seat(pid)
            msg = f"Period {period}: relaxed consecutive sitting rule for {pid}"
            logger.warning(msg)
            if relaxations is not None:
                relaxations.append(msg)
            continue

        rest = [pid for pid in ranked if pid not in chosen]
        if rest:
            pid = rest[0]
            seat(pid)
            msg = f"Period {period}: forced {pid} past the {settings.max_sits}-sit limit"
            logger.error(msg)
            if relaxations is not None:
                relaxations.append(msg)
            continue

        raise CriticalAlgorithmFailure(
            f"Period {period}: no more players available for bench "
            f"({len(chosen)} of {target}) - critical algorithm failure",
            period=period,
        )

    return chosen
