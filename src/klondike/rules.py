"""Move legality for Klondike. Every predicate is pure over the board."""

from __future__ import annotations

from typing import Sequence

from klondike.common import ACE, KING, Card, Suit
from klondike.board import Board


def can_stack_tableau(upper: Card, lower: Card) -> bool:
    """``upper`` may sit on ``lower``: opposite colour, exactly one rank below."""
    if not lower or not upper:
        return False
    return upper.color() != lower.color() and upper.rank == lower.rank - 1


def can_move_to_empty_tableau(card: Card) -> bool:
    return card.rank == KING


def can_move_to_foundation(board: Board, card: Card, suit: Suit) -> bool:
    f = board.foundations.get(suit)
    if f is None or card.suit is not suit:
        return False
    top = f.top()
    if top is None:
        return card.rank == ACE
    return card.rank == top.rank + 1


def can_move_run_to_foundation(board: Board, cards: Sequence[Card], suit: Suit) -> bool:
    # Foundations only ever take one card at a time
    return len(cards) == 1 and can_move_to_foundation(board, cards[0], suit)


def can_move_to_tableau(board: Board, cards: Sequence[Card], column: int) -> bool:
    """Only the run's leading card is checked against the destination."""
    if not cards or not 0 <= column < len(board.tableau):
        return False
    target = board.tableau[column].top()
    if target is None:
        return can_move_to_empty_tableau(cards[0])
    if not target.face_up:
        return False
    return can_stack_tableau(cards[0], target)
