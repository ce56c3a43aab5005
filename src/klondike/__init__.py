"""
Klondike Solitaire rules-and-state engine.

Modules:
- common.py: Suit, Card, deck building/shuffling, pile and outcome vocabulary
- settings.py: persisted settings with environment overrides
- board.py: Pile, Board, deal(), snapshots, conservation check
- rules.py: move legality predicates
- moves.py: MoveExecutor (draw/recycle, move, attempt, auto-move)
- selection.py: SelectionController
- win.py: WinDetector, WinAnnouncer
- game.py: KlondikeGame facade
- input.py: PickClassifier for pygame mouse events
"""

from klondike.common import (
    Card,
    MoveOutcome,
    PickKind,
    PileKind,
    PileRef,
    Suit,
    build_deck,
    shuffle_deck,
)
from klondike.board import Board, BoardSnapshot, ConservationError, Selection, deal
from klondike.game import KlondikeGame

__all__ = [
    "Board",
    "BoardSnapshot",
    "Card",
    "ConservationError",
    "KlondikeGame",
    "MoveOutcome",
    "PickKind",
    "PileKind",
    "PileRef",
    "Selection",
    "Suit",
    "build_deck",
    "deal",
    "shuffle_deck",
]
