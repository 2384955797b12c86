from __future__ import annotations
import logging
from copy import deepcopy
from typing import Callable, Dict, List, Optional

from .constants import GOALKEEPER
from .models import LineupEvent, PeriodAssignment, Settings
from .roster import Roster

logger = logging.getLogger(__name__)

Listener = Callable[[LineupEvent], None]


class LineupGrid:
    """
    Mutable lineup state: for each period, slot -> player, a bench list and a jersey list.
    A player occupies at most one of those within a period.
    """

    def __init__(self, roster: Roster, settings: Optional[Settings] = None):
        self.roster = roster
        self.settings = settings or Settings()
        self._listeners: List[Listener] = []
        self.periods: Dict[int, PeriodAssignment] = {}
        self._reset()

    # -----------------------
    # Observer hook
    # -----------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def _emit(self, kind: str, period: Optional[int] = None, player: Optional[str] = None,
              position: Optional[str] = None):
        event = LineupEvent(kind=kind, period=period, player=player, position=position)
        for listener in list(self._listeners):
            listener(event)

    # -----------------------
    # Structure
    # -----------------------
    def _empty_period(self) -> PeriodAssignment:
        return PeriodAssignment(positions={pos: None for pos in self.settings.positions})

    def _reset(self):
        self.periods = {p: self._empty_period() for p in range(1, self.settings.total_periods + 1)}

    def period(self, period: int) -> PeriodAssignment:
        if period not in self.periods:
            raise KeyError(f"No period {period} (1..{self.settings.total_periods})")
        return self.periods[period]

    def clear_all_periods(self):
        self._reset()
        self._emit("clear")

    def clear_period(self, period: int):
        self.period(period)
        self.periods[period] = self._empty_period()
        self._emit("clear", period)

    # -----------------------
    # Eligibility against this grid's slots
    # -----------------------
    def can_play(self, player: str, position: str) -> bool:
        return self.roster.can_play_position(player, position, self.settings.positions)

    def can_play_fallback(self, player: str, position: str) -> bool:
        return self.roster.can_play_position_fallback(player, position, self.settings.positions)

    def eligible_positions(self, player: str) -> List[str]:
        return self.roster.eligible_positions(player, self.settings.positions)

    def preferred_positions(self, player: str) -> List[str]:
        return self.roster.preferred_positions(player, self.settings.positions)

    # -----------------------
    # Mutation primitives
    # -----------------------
    def _remove_from_period(self, data: PeriodAssignment, player: str):
        for pos, pid in data.positions.items():
            if pid == player:
                data.positions[pos] = None
        data.bench = [p for p in data.bench if p != player]
        data.jersey = [p for p in data.jersey if p != player]

    def assign_to_position(self, period: int, player: str, position: str,
                           check_eligibility: bool = True) -> bool:
        data = self.period(period)
        if position not in data.positions:
            logger.warning("Unknown position %s", position)
            return False
        if check_eligibility and not self.can_play(player, position):
            logger.warning("%s cannot play %s", player, position)
            return False
        self._remove_from_period(data, player)
        data.positions[position] = player
        self._emit("assign", period, player, position)
        return True

    def remove_from_position(self, period: int, position: str):
        data = self.period(period)
        if data.positions.get(position) is None:
            return
        data.positions[position] = None
        self._emit("unassign", period, position=position)

    def add_to_bench(self, period: int, player: str):
        data = self.period(period)
        self._remove_from_period(data, player)
        data.bench.append(player)
        self._emit("bench", period, player)

    def add_to_jersey(self, period: int, player: str):
        data = self.period(period)
        self._remove_from_period(data, player)
        data.jersey.append(player)
        self._emit("jersey", period, player)

    def remove_player_from_all_periods(self, player: str):
        for data in self.periods.values():
            self._remove_from_period(data, player)
        self._emit("unassign", player=player)

    # -----------------------
    # Read accessors
    # -----------------------
    def positions(self, period: int) -> Dict[str, Optional[str]]:
        return dict(self.period(period).positions)

    def bench(self, period: int) -> List[str]:
        return list(self.period(period).bench)

    def jersey(self, period: int) -> List[str]:
        return list(self.period(period).jersey)

    def goalkeeper(self, period: int) -> Optional[str]:
        return self.period(period).positions.get(GOALKEEPER)

    def assignment_of(self, period: int, player: str) -> Dict[str, Optional[str]]:
        data = self.period(period)
        for pos, pid in data.positions.items():
            if pid == player:
                return {"type": "position", "value": pos}
        if player in data.bench:
            return {"type": "bench", "value": None}
        if player in data.jersey:
            return {"type": "jersey", "value": None}
        return {"type": "unassigned", "value": None}

    def empty_positions(self, period: int) -> List[str]:
        return [pos for pos, pid in self.period(period).positions.items() if pid is None]

    # -----------------------
    # Plain nested-structure round trip
    # -----------------------
    def to_dict(self) -> Dict[int, Dict]:
        return {p: data.model_dump() for p, data in self.periods.items()}

    def load_dict(self, data: Dict, emit: bool = True):
        periods: Dict[int, PeriodAssignment] = {}
        for key, value in data.items():
            p = int(key)
            pa = PeriodAssignment.model_validate(deepcopy(value))
            for pos in self.settings.positions:
                pa.positions.setdefault(pos, None)
            periods[p] = pa
        for p in range(1, self.settings.total_periods + 1):
            periods.setdefault(p, self._empty_period())
        self.periods = dict(sorted(periods.items()))
        if emit:
            self._emit("load")

    @classmethod
    def from_dict(cls, data: Dict, roster: Roster, settings: Optional[Settings] = None) -> "LineupGrid":
        grid = cls(roster, settings)
        grid.load_dict(data, emit=False)
        return grid

    def __eq__(self, other) -> bool:
        if not isinstance(other, LineupGrid):
            return NotImplemented
        return self.to_dict() == other.to_dict()
