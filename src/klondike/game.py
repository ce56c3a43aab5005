# game.py - Klondike engine facade used by a rendering/input layer
import logging
import random
from typing import Callable, List, Optional, Sequence

from klondike import settings as S
from klondike.common import Card, MoveOutcome, PickKind, PileKind, build_deck, shuffle_deck
from klondike.board import Board, BoardSnapshot, deal
from klondike.moves import MoveExecutor
from klondike.selection import SelectionController
from klondike.win import WinAnnouncer, WinDetector

logger = logging.getLogger(__name__)

WIN_MESSAGE = "Congratulations! You won!"


class KlondikeGame:
    """
    One Klondike table. Every entry point runs to completion (validate,
    mutate, win check) before returning. A new game replaces the board,
    selection and win tracking wholesale; registered win listeners carry over.
    """

    def __init__(self, seed: Optional[int] = None, deck: Optional[Sequence[Card]] = None,
                 board: Optional[Board] = None, win_announce_delay_ms: Optional[int] = None,
                 debug_checks: Optional[bool] = None, clock: Optional[Callable[[], int]] = None):
        cfg = S.get_current_settings()
        self.win_announce_delay_ms = (
            cfg["win_announce_delay_ms"] if win_announce_delay_ms is None else win_announce_delay_ms
        )
        self.debug_checks = cfg["debug_checks"] if debug_checks is None else debug_checks
        self.clock = clock
        self.message = ""
        self._win_listeners: List[Callable[[], None]] = []
        if board is not None:
            # Arranged position, e.g. a mid-game board in tests
            self._install(board)
        elif deck is not None:
            self.start(deck)
        else:
            self.init_game(seed)

    # ---------- Lifecycle ----------
    def init_game(self, seed: Optional[int] = None) -> BoardSnapshot:
        """Shuffle a fresh deck and deal a new game."""
        rng = random.Random(seed)
        return self.start(shuffle_deck(build_deck(), rng))

    def start(self, deck: Sequence[Card]) -> BoardSnapshot:
        """Deal a new game from an explicit card order (last card = stock top)."""
        self._install(deal(deck))
        logger.debug("new game")
        return self.snapshot()

    def _install(self, board: Board):
        self.board = board
        self.win_detector = WinDetector()
        self.win_detector.add_listener(self._on_detected)
        self.announcer = WinAnnouncer(self.win_announce_delay_ms, clock=self.clock)
        self.announcer.add_listener(self._announce)
        self.executor = MoveExecutor(board, self.win_detector, debug_checks=self.debug_checks)
        self.controller = SelectionController(board, self.executor)
        self.message = ""

    # ---------- Interaction ----------
    def handle_card_pick(self, card_id: Optional[str], pile_kind: PileKind, pile_key=None,
                         pick_kind: PickKind = PickKind.SINGLE) -> MoveOutcome:
        return self.controller.handle_card_pick(card_id, pile_kind, pile_key, pick_kind)

    def handle_empty_slot_pick(self, pile_kind: PileKind, pile_key=None) -> MoveOutcome:
        return self.controller.handle_empty_slot_pick(pile_kind, pile_key)

    def draw_from_stock(self) -> BoardSnapshot:
        self.executor.draw_from_stock()
        return self.snapshot()

    def deselect(self):
        self.controller.deselect()

    # ---------- Win ----------
    @property
    def won(self) -> bool:
        return self.win_detector.won

    def on_win(self, fn: Callable[[], None]):
        """Register a callback fired (after the announce delay) once per won game."""
        self._win_listeners.append(fn)

    def update(self, now_ms: Optional[int] = None) -> bool:
        """Pump deferred win delivery; returns True when it fires."""
        return self.announcer.poll(now_ms)

    def _on_detected(self):
        self.message = WIN_MESSAGE
        self.announcer.schedule()

    def _announce(self):
        for fn in list(self._win_listeners):
            fn()

    # ---------- Views ----------
    def snapshot(self) -> BoardSnapshot:
        return self.board.snapshot(won=self.won)
