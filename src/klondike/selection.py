"""Turns card and slot picks into selections and move attempts."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from klondike.common import Card, MoveOutcome, PickKind, PileKind, PileRef
from klondike.board import Board, Pile, Selection
from klondike.moves import MoveExecutor

logger = logging.getLogger(__name__)


class SelectionController:
    def __init__(self, board: Board, executor: MoveExecutor):
        self.board = board
        self.executor = executor

    def _resolve(self, card_id: Optional[str], ref: PileRef) -> Tuple[Optional[Pile], int]:
        """Locate the picked card; index is -1 when there is nothing to pick."""
        pile = self.board.pile(ref)
        if pile is None or not pile.cards:
            return pile, -1
        if ref.kind is PileKind.TABLEAU:
            return pile, pile.index_of(card_id) if card_id is not None else -1
        if ref.kind in (PileKind.WASTE, PileKind.FOUNDATION):
            # Only the top card of these piles is ever interactable
            top = len(pile.cards) - 1
            if card_id is not None and pile.cards[top].id != card_id:
                return pile, -1
            return pile, top
        return pile, -1

    def handle_card_pick(self, card_id: Optional[str], pile_kind: PileKind, pile_key=None,
                         pick_kind: PickKind = PickKind.SINGLE) -> MoveOutcome:
        ref = PileRef(pile_kind, pile_key)
        pile, idx = self._resolve(card_id, ref)
        if pile is None or idx < 0:
            return MoveOutcome.REJECTED
        card: Card = pile.cards[idx]
        if not card.face_up:
            return MoveOutcome.REJECTED

        run = tuple(pile.cards[idx:]) if pile_kind is PileKind.TABLEAU else (card,)

        # Double pick: send a lone card straight home
        if pick_kind is PickKind.DOUBLE and pile_kind is not PileKind.FOUNDATION and len(run) == 1:
            if self.executor.auto_move_to_foundation(card, ref):
                return MoveOutcome.MOVED

        if self.board.selection is None:
            self.board.selection = Selection(run, ref)
            logger.debug("selected %r from %r", run, ref)
            return MoveOutcome.SELECTED

        if pile_kind in (PileKind.TABLEAU, PileKind.FOUNDATION):
            return self._attempt(pile_kind, pile_key)
        self.deselect()
        return MoveOutcome.DESELECTED

    def handle_empty_slot_pick(self, pile_kind: PileKind, pile_key=None) -> MoveOutcome:
        if self.board.selection is None:
            return MoveOutcome.REJECTED
        return self._attempt(pile_kind, pile_key)

    def _attempt(self, pile_kind: PileKind, pile_key) -> MoveOutcome:
        if self.executor.attempt_move(pile_kind, pile_key):
            return MoveOutcome.MOVED
        return MoveOutcome.REJECTED

    def deselect(self):
        self.board.clear_selection()
