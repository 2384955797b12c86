import pytest

from lineup_core.bench import select_bench_players
from lineup_core.errors import CriticalAlgorithmFailure
from lineup_core.models import PlayerTracking, Settings

def _tracking(**sits):
    return {pid: PlayerTracking(bench_periods=list(periods)) for pid, periods in sits.items()}

def test_reserved_sitters_go_first():
    tracking = _tracking(A=[], B=[], C=[])
    tracking["C"].reserved_periods = [4]
    chosen = select_bench_players(4, ["A", "B", "C"], 2, tracking, Settings())
    assert chosen == ["C", "A"]
    assert tracking["C"].reserved_periods == []
    assert tracking["C"].bench_periods == [4]

def test_skips_capped_and_adjacent():
    tracking = _tracking(A=[1, 3], B=[4], C=[], D=[])
    chosen = select_bench_players(5, ["A", "B", "C", "D"], 2, tracking, Settings())
    assert chosen == ["C", "D"]

def test_more_minutes_sits_first():
    tracking = _tracking(A=[], B=[], C=[])
    tracking["B"].playing_time = 15.0
    assert select_bench_players(3, ["A", "B", "C"], 1, tracking, Settings()) == ["B"]

def test_relaxes_consecutive_rule_before_cap():
    tracking = _tracking(A=[2], B=[1, 5])
    relaxations = []
    chosen = select_bench_players(3, ["A", "B"], 1, tracking, Settings(), relaxations)
    assert chosen == ["A"]
    assert "consecutive" in relaxations[0]

def test_relaxes_cap_last():
    tracking = _tracking(A=[1, 5], B=[2, 6])
    relaxations = []
    chosen = select_bench_players(8, ["A", "B"], 1, tracking, Settings(), relaxations)
    assert len(chosen) == 1
    assert "limit" in relaxations[0]

def test_critical_failure_when_pool_exhausted():
    tracking = _tracking(A=[])
    with pytest.raises(CriticalAlgorithmFailure) as exc:
        select_bench_players(2, ["A"], 2, tracking, Settings())
    assert exc.value.period == 2
