"""Open-position bookkeeping for a decision sequence.

The decision generator needs to know, before each new decision, whether
the simulated trader is in a position and which way. ``PositionBook`` is
fed every decision in order and answers that without rescanning history.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from tradecoach.models import TraderDecision


@dataclass
class PositionBook:
    """Running state of the single simulated position."""

    direction: Optional[str] = None  # long | short while open
    entries: int = 0  # entry/increase decisions since the position opened
    last_entry_idx: int = -1
    _count: int = 0

    @property
    def is_open(self) -> bool:
        return self.direction is not None

    def apply(self, decision: TraderDecision) -> None:
        """Advance the book by one decision."""
        if decision.is_entry:
            if not self.is_open:
                self.entries = 0
            # an entry without a direction keeps the side already held
            self.direction = decision.direction or self.direction or "long"
            self.entries += 1
            self.last_entry_idx = self._count
        elif decision.is_exit:
            self.direction = None
            self.entries = 0
        self._count += 1

    @classmethod
    def replay(cls, decisions: Iterable[TraderDecision]) -> "PositionBook":
        book = cls()
        for decision in decisions:
            book.apply(decision)
        return book
