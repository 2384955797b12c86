from __future__ import annotations
from typing import Dict, List, Literal, Optional, Set
from pydantic import BaseModel, Field, field_validator, model_validator

from .constants import GOALKEEPER, POSITION_CATEGORIES, Category, parse_categories

AvailabilityStatus = Literal["available", "late", "injured", "absent"]


class Player(BaseModel):
    id: str
    categories: Category = Category.NONE
    preferred_positions: List[str] = Field(default_factory=list)  # ordered concrete slots

    @field_validator("categories", mode="before")
    @classmethod
    def _parse_categories(cls, v):
        if isinstance(v, int) and not isinstance(v, Category):
            return Category(v)
        return parse_categories(v)


class Settings(BaseModel):
    total_periods: int = Field(8, ge=1)
    period_length: float = Field(7.5, gt=0)  # minutes
    sitting_quota: int = Field(3, ge=0)
    min_sits: int = Field(1, ge=0)
    max_sits: int = Field(2, ge=0)
    goalkeeper_count: int = Field(3, ge=1)
    positions: Dict[str, Category] = Field(default_factory=lambda: dict(POSITION_CATEGORIES))

    @field_validator("positions", mode="before")
    @classmethod
    def _parse_positions(cls, v):
        if not isinstance(v, dict):
            raise ValueError("positions must be a mapping of slot -> categories")
        return {str(k): parse_categories(c) for k, c in v.items()}

    @model_validator(mode="after")
    def _check(self):
        if GOALKEEPER not in self.positions:
            raise ValueError(f"positions must include a '{GOALKEEPER}' slot")
        if self.min_sits > self.max_sits:
            raise ValueError("min_sits must not exceed max_sits")
        return self

    @property
    def field_size(self) -> int:
        return len(self.positions)

    @property
    def field_positions(self) -> List[str]:
        return [p for p in self.positions if p != GOALKEEPER]


class PeriodAssignment(BaseModel):
    positions: Dict[str, Optional[str]] = Field(default_factory=dict)  # slot -> player id or None
    bench: List[str] = Field(default_factory=list)
    jersey: List[str] = Field(default_factory=list)


class PlayerTracking(BaseModel):
    """Per-build bookkeeping for one player; never persisted."""
    bench_periods: List[int] = Field(default_factory=list)
    jersey_periods: List[int] = Field(default_factory=list)
    gk_periods: List[int] = Field(default_factory=list)
    reserved_periods: List[int] = Field(default_factory=list)  # goalkeeper pre-planned sits
    positions_played: Set[str] = Field(default_factory=set)
    playing_time: float = 0.0


class PlayerStats(BaseModel):
    total_minutes: float = 0.0
    bench_periods: int = 0
    jersey_periods: int = 0
    positions: Dict[str, int] = Field(default_factory=dict)


class LineupEvent(BaseModel):
    kind: Literal["assign", "unassign", "bench", "jersey", "clear", "load"]
    period: Optional[int] = None
    player: Optional[str] = None
    position: Optional[str] = None

    def describe(self) -> str:
        if self.kind == "assign":
            return f"Period {self.period}: {self.player} to {self.position}"
        if self.kind == "unassign":
            if self.period is None:
                return f"Removed {self.player} from all periods"
            return f"Period {self.period}: cleared {self.position}"
        if self.kind in ("bench", "jersey"):
            return f"Period {self.period}: {self.player} to {self.kind}"
        if self.kind == "clear":
            return "Cleared all periods" if self.period is None else f"Cleared period {self.period}"
        return "Loaded lineup"


class BuildReport(BaseModel):
    tracking: Dict[str, PlayerTracking] = Field(default_factory=dict)
    goalkeeper_blocks: Dict[str, List[int]] = Field(default_factory=dict)  # player -> periods
    relaxations: List[str] = Field(default_factory=list)
    unfilled: Dict[int, List[str]] = Field(default_factory=dict)
    violations: List[str] = Field(default_factory=list)
    compliance: int = 100
