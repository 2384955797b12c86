from __future__ import annotations
from typing import Optional


class LineupError(RuntimeError):
    pass


class PreconditionError(LineupError):
    """Raised before any mutation when the roster cannot support a build."""


class CriticalAlgorithmFailure(LineupError):
    def __init__(self, message: str, period: Optional[int] = None) -> None:
        super().__init__(message)
        self.period = period
