from __future__ import annotations
import logging
from contextlib import contextmanager
from copy import deepcopy
from typing import Dict, List, Optional, Tuple

from .grid import LineupGrid
from .models import LineupEvent

logger = logging.getLogger(__name__)


class LineupHistory:
    """
    Undo/redo for a LineupGrid. Subscribes to grid events and keeps a bounded list
    of (label, snapshot) entries; index points at the entry matching the grid.
    """

    def __init__(self, grid: LineupGrid, max_size: int = 50):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.grid = grid
        self.max_size = max_size
        self._entries: List[Tuple[str, Dict]] = [("Initial state", grid.to_dict())]
        self._index = 0
        self._suspended = 0
        self._unsubscribe = grid.subscribe(self._on_event)

    def _on_event(self, event: LineupEvent):
        if self._suspended:
            return
        self.record(event.describe())

    def record(self, label: str):
        del self._entries[self._index + 1:]
        self._entries.append((label, deepcopy(self.grid.to_dict())))
        if len(self._entries) > self.max_size:
            del self._entries[0]
        self._index = len(self._entries) - 1

    @contextmanager
    def batch(self, label: str):
        """Collapse every mutation inside the block into one undo step."""
        self._suspended += 1
        try:
            yield self
        finally:
            self._suspended -= 1
        if not self._suspended:
            self.record(label)

    def _restore(self):
        self._suspended += 1
        try:
            self.grid.load_dict(deepcopy(self._entries[self._index][1]))
        finally:
            self._suspended -= 1

    @property
    def can_undo(self) -> bool:
        return self._index > 0

    @property
    def can_redo(self) -> bool:
        return self._index < len(self._entries) - 1

    def undo(self) -> bool:
        if not self.can_undo:
            return False
        label = self._entries[self._index][0]
        self._index -= 1
        self._restore()
        logger.debug("Undo: %s", label)
        return True

    def redo(self) -> bool:
        if not self.can_redo:
            return False
        self._index += 1
        self._restore()
        logger.debug("Redo: %s", self._entries[self._index][0])
        return True

    def labels(self) -> List[str]:
        return [label for label, _ in self._entries]

    def current_label(self) -> Optional[str]:
        return self._entries[self._index][0] if self._entries else None

    def clear(self):
        self._entries = [("Initial state", self.grid.to_dict())]
        self._index = 0

    def detach(self):
        self._unsubscribe()
