import logging
from typing import Callable, List, Optional

from klondike.common import DECK_SIZE, ticks
from klondike.board import Board

logger = logging.getLogger(__name__)


class WinDetector:
    """
    Watches the foundations after each successful move. The first time all
    52 cards are home, ``won`` flips and listeners fire; later checks on a
    won board are silent. One detector lives for exactly one game.
    """

    def __init__(self):
        self.won: bool = False
        self._listeners: List[Callable[[], None]] = []

    def add_listener(self, fn: Callable[[], None]):
        self._listeners.append(fn)

    def check(self, board: Board) -> bool:
        """Return True only on the check that first detects the win."""
        if self.won:
            return False
        if board.foundation_count() != DECK_SIZE:
            return False
        self.won = True
        logger.info("game won")
        for fn in list(self._listeners):
            fn()
        return True


class WinAnnouncer:
    """
    Deferred delivery of the win to presentation listeners, in the manner of
    a short timed alert. The engine state is already final when this is
    scheduled; callers pump ``poll()`` from their frame loop.

    ``clock`` returns milliseconds and defaults to pygame's tick counter, started on demand.
    """

    def __init__(self, delay_ms: int = 100, clock: Optional[Callable[[], int]] = None):
        self.delay_ms = max(0, int(delay_ms))
        self.clock = clock or ticks
        self.delivered: bool = False
        self._due_at: Optional[int] = None
        self._listeners: List[Callable[[], None]] = []

    def add_listener(self, fn: Callable[[], None]):
        self._listeners.append(fn)

    @property
    def pending(self) -> bool:
        return self._due_at is not None and not self.delivered

    def schedule(self):
        if self.delivered or self._due_at is not None:
            return
        now = self.clock()
        self._due_at = now + self.delay_ms
        if self.delay_ms == 0:
            self.poll(now)

    def poll(self, now_ms: Optional[int] = None) -> bool:
        """Deliver if due. Returns True on the call that delivers."""
        if not self.pending:
            return False
        now = self.clock() if now_ms is None else now_ms
        if now < self._due_at:
            return False
        self.delivered = True
        for fn in list(self._listeners):
            fn()
        return True
