import pygame
from typing import Callable, Hashable, Optional

from klondike import settings as S
from klondike.common import PickKind, ticks


class PickClassifier:
    """
    Classify left-button presses into single or double picks.

    The input layer hit-tests the press itself and passes the resolved target
    (a card id, or a pile reference for empty slots). Two presses on the same
    target within ``double_pick_ms`` form a double pick; the window then
    resets, so a third press counts as single again.
    Scenes should call reset() whenever the board changes under the cursor
    (new game, stock draw) so stale presses never pair up.
    """

    def __init__(self, double_pick_ms: Optional[int] = None, clock: Optional[Callable[[], int]] = None):
        if double_pick_ms is None:
            double_pick_ms = S.get_setting("double_pick_ms")
        self.double_pick_ms = max(0, int(double_pick_ms))
        self.clock = clock or ticks
        self._last_target: Optional[Hashable] = None
        self._last_ms: Optional[int] = None

    def reset(self):
        self._last_target = None
        self._last_ms = None

    def classify(self, event, target: Hashable, now_ms: Optional[int] = None) -> Optional[PickKind]:
        """Return the pick kind for ``event``, or None if it is not a left press."""
        if event.type != pygame.MOUSEBUTTONDOWN or getattr(event, "button", None) != 1:
            return None
        now = self.clock() if now_ms is None else now_ms
        if (
            self._last_ms is not None
            and target == self._last_target
            and now - self._last_ms <= self.double_pick_ms
        ):
            self.reset()
            return PickKind.DOUBLE
        self._last_target = target
        self._last_ms = now
        return PickKind.SINGLE
