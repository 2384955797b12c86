from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional

from .constants import GOALKEEPER, POSITION_CATEGORIES, SCHEDULABLE_STATUSES, STATUSES, Category
from .models import AvailabilityStatus, Player, Settings

logger = logging.getLogger(__name__)


class Roster:
    """
    Read-only roster + availability provider consumed by the scheduler.
    Player order is the roster order used for every tie-break.
    """

    def __init__(
        self,
        players: Iterable[Player] = (),
        availability: Optional[Dict[str, AvailabilityStatus]] = None,
        settings: Optional[Settings] = None,
    ):
        self._players: Dict[str, Player] = {}
        for p in players:
            if p.id in self._players:
                raise ValueError(f"Duplicate player id: {p.id}")
            self._players[p.id] = p
        self._availability: Dict[str, str] = {}
        self._positions: Dict[str, Category] = dict(settings.positions) if settings else dict(POSITION_CATEGORIES)
        for pid, status in (availability or {}).items():
            self.set_availability(pid, status)

    def __len__(self) -> int:
        return len(self._players)

    def __contains__(self, pid: str) -> bool:
        return pid in self._players

    def player(self, pid: str) -> Player:
        return self._players[pid]

    def player_names(self) -> List[str]:
        return list(self._players.keys())

    def players(self) -> List[Player]:
        return list(self._players.values())

    # -----------------------
    # Eligibility
    # -----------------------
    def _slots(self, positions: Optional[Dict[str, Category]]) -> Dict[str, Category]:
        return self._positions if positions is None else positions

    def can_play_position(self, pid: str, position: str,
                          positions: Optional[Dict[str, Category]] = None) -> bool:
        p = self._players.get(pid)
        required = self._slots(positions).get(position)
        if p is None or required is None:
            return False
        return bool(p.categories & required)

    def can_play_position_fallback(self, pid: str, position: str,
                                   positions: Optional[Dict[str, Category]] = None) -> bool:
        """Any outfield slot is acceptable for a player who plays the field at all."""
        if self.can_play_position(pid, position, positions):
            return True
        p = self._players.get(pid)
        if p is None or position == GOALKEEPER or position not in self._slots(positions):
            return False
        return bool(p.categories & Category.ALL_FIELD)

    def eligible_positions(self, pid: str, positions: Optional[Dict[str, Category]] = None) -> List[str]:
        return [pos for pos in self._slots(positions) if self.can_play_position(pid, pos, positions)]

    def preferred_positions(self, pid: str, positions: Optional[Dict[str, Category]] = None) -> List[str]:
        p = self._players.get(pid)
        if p is None:
            return []
        slots = self._slots(positions)
        if p.preferred_positions:
            return [pos for pos in p.preferred_positions if pos in slots]
        return [pos for pos in self.eligible_positions(pid, positions) if pos != GOALKEEPER]

    # -----------------------
    # Availability
    # -----------------------
    def availability(self, pid: str) -> AvailabilityStatus:
        return self._availability.get(pid, "available")

    def set_availability(self, pid: str, status: str) -> bool:
        s = str(status).strip().lower()
        if s not in STATUSES:
            logger.error("Invalid availability status %r for %s", status, pid)
            return False
        self._availability[pid] = s
        return True

    def is_schedulable(self, pid: str) -> bool:
        return self.availability(pid) in SCHEDULABLE_STATUSES

    def schedulable_players(self) -> List[str]:
        return [pid for pid in self._players if self.is_schedulable(pid)]

    def unavailable_players(self) -> List[str]:
        return [pid for pid in self._players if not self.is_schedulable(pid)]

    def players_by_status(self) -> Dict[str, List[str]]:
        out: Dict[str, List[str]] = {s: [] for s in STATUSES}
        for pid in self._players:
            out[self.availability(pid)].append(pid)
        return out
