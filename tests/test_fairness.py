from lineup_core.fairness import (
    compute_quotas, contiguous_blocks, group_runs,
    effective_quota, target_sits, bench_priority, sits_adjacent, adjacent_pairs,
)
from lineup_core.models import PlayerTracking, Settings

def test_compute_quotas():
    quotas = compute_quotas(4, 10)
    assert sum(quotas) == 10
    assert max(quotas) - min(quotas) <= 1

def test_contiguous_blocks_longest_first():
    assert contiguous_blocks(8, 3) == [[1, 2, 3], [4, 5, 6], [7, 8]]
    assert contiguous_blocks(6, 3) == [[1, 2], [3, 4], [5, 6]]
    assert contiguous_blocks(2, 3) == [[1], [2]]

def test_group_runs():
    assert group_runs([8, 1, 2, 3, 7]) == [[1, 2, 3], [7, 8]]
    assert group_runs([]) == []

def test_effective_quota_shrinks_with_short_squad():
    s = Settings()
    assert effective_quota(s, 12) == 3
    assert effective_quota(s, 10) == 1
    assert effective_quota(s, 9) == 0
    assert effective_quota(s, 15) == 3

def test_target_sits_clamped():
    s = Settings()
    assert target_sits(s, 12) == 2
    assert target_sits(s, 10) == 1
    assert target_sits(s, 9) == 1

def test_bench_priority_ordering():
    fresh = PlayerTracking()
    one = PlayerTracking(bench_periods=[2])
    capped = PlayerTracking(bench_periods=[2], jersey_periods=[8])
    assert bench_priority(fresh, 5) > bench_priority(one, 5) > bench_priority(capped, 5)
    # beside an own sit
    assert bench_priority(one, 3) < bench_priority(capped, 5)

def test_bench_priority_prefers_more_minutes():
    rested = PlayerTracking(playing_time=7.5)
    tired = PlayerTracking(playing_time=30.0)
    assert bench_priority(tired, 4) > bench_priority(rested, 4)

def test_adjacency_counts_reserved_sits():
    t = PlayerTracking(reserved_periods=[5])
    assert sits_adjacent(t, 4)
    assert sits_adjacent(t, 6)
    assert not sits_adjacent(t, 3)
    assert adjacent_pairs([3, 1, 2]) == [(1, 2), (2, 3)]
    assert adjacent_pairs([1, 3, 5]) == []
