"""Move execution: the only code that mutates a dealt board."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from klondike.common import Card, PileKind, PileRef, foundation
from klondike.board import Board, ConservationError, Pile
from klondike import rules
from klondike.win import WinDetector

logger = logging.getLogger(__name__)


class MoveExecutor:
    def __init__(self, board: Board, win_detector: Optional[WinDetector] = None, debug_checks: bool = True):
        self.board = board
        self.win_detector = win_detector or WinDetector()
        self.debug_checks = debug_checks

    def _verify(self):
        if self.debug_checks:
            self.board.check_conservation()

    # ---------- Stock ----------
    def draw_from_stock(self) -> bool:
        """Draw one card, or recycle the waste when the stock is empty.

        Returns False only for the no-op case of empty stock and empty waste.
        """
        board = self.board
        board.clear_selection()
        stock, waste = board.stock, board.waste
        if not stock.cards:
            if not waste.cards:
                return False
            recycled = list(reversed(waste.cards))
            for c in recycled:
                c.face_up = False
            stock.cards = recycled
            waste.cards = []
            logger.debug("recycled %d waste cards into stock", len(recycled))
        else:
            c = stock.cards.pop()
            c.face_up = True
            waste.cards.append(c)
            logger.debug("drew %r", c)
        self._verify()
        return True

    # ---------- Moves ----------
    def _removal_index(self, pile: Pile, cards: Sequence[Card]) -> int:
        if pile.kind is PileKind.TABLEAU:
            for i, c in enumerate(pile.cards):
                if c is cards[0]:
                    return i
            return -1
        if pile.kind in (PileKind.WASTE, PileKind.FOUNDATION):
            return len(pile.cards) - 1
        raise ValueError(f"cannot move cards out of {pile.ref!r}")

    def move_cards(self, cards: Sequence[Card], source: PileRef, destination: PileRef):
        """Relocate ``cards`` from ``source`` onto ``destination`` unconditionally.

        Callers validate first. The removal is checked against ``cards`` before
        anything changes, so a bad request leaves the board untouched.
        """
        board = self.board
        src = board.pile(source)
        dst = board.pile(destination)
        if src is None or dst is None:
            raise ValueError(f"unknown pile in move {source!r} -> {destination!r}")
        if dst.kind not in (PileKind.TABLEAU, PileKind.FOUNDATION):
            raise ValueError(f"cannot move cards onto {destination!r}")
        cards = list(cards)
        if not cards:
            raise ValueError("move_cards needs at least one card")

        start = self._removal_index(src, cards)
        removed = src.cards[start:] if start >= 0 else []
        if len(removed) != len(cards) or any(a is not b for a, b in zip(removed, cards)):
            raise ConservationError(f"{cards!r} is not the top of {source!r}")

        del src.cards[start:]
        flipped = None
        # Flip newly exposed tableau top
        if src.kind is PileKind.TABLEAU and src.cards and not src.cards[-1].face_up:
            flipped = src.cards[-1]
            flipped.face_up = True
        dst.cards.extend(removed)
        logger.debug("moved %r %r -> %r%s", removed, source, destination,
                     f", exposed {flipped!r}" if flipped else "")

        board.clear_selection()
        self._verify()
        self.win_detector.check(board)

    def _is_legal(self, cards: Sequence[Card], destination: PileRef) -> bool:
        if self.board.pile(destination) is None:
            return False
        if destination.kind is PileKind.FOUNDATION:
            return rules.can_move_run_to_foundation(self.board, cards, destination.key)
        if destination.kind is PileKind.TABLEAU:
            return rules.can_move_to_tableau(self.board, cards, destination.key)
        # waste and stock never take cards
        return False

    def attempt_move(self, destination_kind: PileKind, destination_key) -> bool:
        """Try the active selection against a destination; always clears it."""
        board = self.board
        sel = board.selection
        if sel is None:
            return False
        board.clear_selection()

        destination = PileRef(destination_kind, destination_key)
        cards: List[Card] = list(sel.cards)
        if destination == sel.source or not self._is_legal(cards, destination):
            logger.debug("rejected %r -> %r", cards, destination)
            return False
        self.move_cards(cards, sel.source, destination)
        return True

    def auto_move_to_foundation(self, card: Card, source: PileRef) -> bool:
        """Send a single card straight to its own suit's foundation if legal."""
        src = self.board.pile(source)
        if src is None or src.top() is not card or src.kind is PileKind.STOCK:
            return False
        if not rules.can_move_to_foundation(self.board, card, card.suit):
            return False
        self.move_cards([card], source, foundation(card.suit))
        return True
