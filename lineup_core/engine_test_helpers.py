"""
Internal helpers for tests (not imported by the library).
"""
from __future__ import annotations
from typing import Dict, List, Optional

from .constants import normalize_pos
from .grid import LineupGrid
from .models import Player, Settings
from .roster import Roster

DEFAULT_PLAYERS: Dict[str, List[str]] = {
    "Kennedy": ["Striker", "Wing", "Midfield"],
    "Brinley": ["Striker", "Wing", "Midfield"],
    "Olivia": ["Back"],
    "Chisom": ["Back"],
    "SK": ["Back", "Goalkeeper"],
    "Aubree": ["All"],
    "Skyler": ["Midfield", "Defense"],
    "Jordan": ["All"],
    "Addie": ["All"],
    "Charlotte": ["All except GK"],
    "Isabella": ["All except GK"],
    "Angelicka": ["Midfield", "Defense"],
}


def quick_player(pid: str, categories: List[str], preferred: Optional[List[str]] = None) -> Player:
    return Player(
        id=pid,
        categories=categories,
        preferred_positions=[normalize_pos(p) for p in (preferred or [])],
    )


def default_roster(availability: Optional[Dict[str, str]] = None) -> Roster:
    return Roster([quick_player(pid, cats) for pid, cats in DEFAULT_PLAYERS.items()], availability)


def versatile_roster(n: int, keepers: int = 3) -> Roster:
    """n players who can play anywhere on the field; the first `keepers` also keep goal."""
    players = [
        quick_player(f"P{i:02d}", ["All"] if i <= keepers else ["All except GK"])
        for i in range(1, n + 1)
    ]
    return Roster(players)


def make_grid(roster: Optional[Roster] = None, settings: Optional[Settings] = None) -> LineupGrid:
    return LineupGrid(roster if roster is not None else default_roster(), settings)
