from __future__ import annotations
import math
from typing import List, Tuple

from .models import PlayerTracking, Settings


def compute_quotas(num_players: int, total_slots: int) -> List[int]:
    """Even split of total_slots; the remainder goes to the first players."""
    if num_players <= 0:
        return []
    base = total_slots // num_players
    remainder = total_slots % num_players
    quotas = [base] * num_players
    for i in range(remainder):
        quotas[i] += 1
    return quotas


def contiguous_blocks(total_periods: int, count: int) -> List[List[int]]:
    """Split periods 1..N into `count` contiguous blocks, longest first (8 -> 3,3,2)."""
    blocks: List[List[int]] = []
    start = 1
    for size in compute_quotas(count, total_periods):
        if size <= 0:
            continue
        blocks.append(list(range(start, start + size)))
        start += size
    return blocks


def group_runs(periods: List[int]) -> List[List[int]]:
    """[1,2,3,7,8] -> [[1,2,3],[7,8]]"""
    runs: List[List[int]] = []
    for p in sorted(periods):
        if runs and p == runs[-1][-1] + 1:
            runs[-1].append(p)
        else:
            runs.append([p])
    return runs


def effective_quota(settings: Settings, schedulable: int) -> int:
    """Sitting quota capped so the field stays full with a short squad."""
    return max(0, min(settings.sitting_quota, schedulable - settings.field_size))


def target_sits(settings: Settings, schedulable: int) -> int:
    if schedulable <= 0:
        return settings.min_sits
    quota = effective_quota(settings, schedulable)
    avg = math.ceil(quota * settings.total_periods / schedulable)
    return max(settings.min_sits, min(settings.max_sits, avg))


# -----------------------
# Sit bookkeeping
# -----------------------
def sits_taken(t: PlayerTracking) -> List[int]:
    return sorted(set(t.bench_periods) | set(t.jersey_periods))


def sits_committed(t: PlayerTracking) -> List[int]:
    """Sits already taken plus reserved ones still to come."""
    return sorted(set(t.bench_periods) | set(t.jersey_periods) | set(t.reserved_periods))


def sit_count(t: PlayerTracking) -> int:
    return len(sits_committed(t))


def sits_adjacent(t: PlayerTracking, period: int) -> bool:
    committed = sits_committed(t)
    return (period - 1) in committed or (period + 1) in committed


def adjacent_pairs(periods: List[int]) -> List[Tuple[int, int]]:
    ps = sorted(periods)
    return [(a, b) for a, b in zip(ps, ps[1:]) if b == a + 1]


def bench_priority(t: PlayerTracking, period: int, max_sits: int = 2) -> float:
    """
    Higher = sit sooner.
    +100 with no sits, +50 below the cap, -100 at the cap; -200 beside an own sit;
    + playing time so whoever has played most rests first.
    """
    count = sit_count(t)
    if count == 0:
        priority = 100.0
    elif count < max_sits:
        priority = 50.0
    else:
        priority = -100.0
    if sits_adjacent(t, period):
        priority -= 200.0
    priority += t.playing_time
    return priority