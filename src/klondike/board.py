"""Board state for a single Klondike game.

The board owns every pile and the current selection. It is created by
:func:`deal` and replaced wholesale when a new game starts; only the move
executor mutates it afterwards.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from klondike.common import (
    DECK_SIZE,
    SUITS,
    TABLEAU_COLUMNS,
    Card,
    PileKind,
    PileRef,
    Suit,
    foundation,
    tableau,
    STOCK,
    WASTE,
)

logger = logging.getLogger(__name__)


class ConservationError(AssertionError):
    """Raised when the 52 cards are no longer partitioned across the piles."""


class Pile:
    def __init__(self, ref: PileRef, cards: Optional[List[Card]] = None):
        self.ref = ref
        self.cards: List[Card] = list(cards) if cards else []

    @property
    def kind(self) -> PileKind:
        return self.ref.kind

    def top(self) -> Optional[Card]:
        return self.cards[-1] if self.cards else None

    def index_of(self, card_id: str) -> int:
        for i, c in enumerate(self.cards):
            if c.id == card_id:
                return i
        return -1

    def __len__(self):
        return len(self.cards)

    def __repr__(self):
        return f"Pile({self.ref!r}, {self.cards!r})"


@dataclass(frozen=True)
class Selection:
    """A picked-up run: a non-empty suffix of ``source`` led by a face-up card."""

    cards: Tuple[Card, ...]
    source: PileRef

    @property
    def card_ids(self) -> Tuple[str, ...]:
        return tuple(c.id for c in self.cards)


@dataclass(frozen=True)
class CardView:
    id: str
    suit: Suit
    value: str
    face_up: bool

    @classmethod
    def of(cls, card: Optional[Card]) -> Optional["CardView"]:
        if card is None:
            return None
        return cls(card.id, card.suit, card.value, card.face_up)


@dataclass(frozen=True)
class SelectionView:
    card_ids: Tuple[str, ...]
    source: PileRef


@dataclass(frozen=True)
class BoardSnapshot:
    """Read-only view handed to the presentation layer."""

    stock_size: int
    waste_top: Optional[CardView]
    foundation_tops: Dict[Suit, Optional[CardView]]
    tableau: Tuple[Tuple[CardView, ...], ...]
    selection: Optional[SelectionView]
    won: bool = False


class Board:
    def __init__(self):
        self.stock = Pile(STOCK)
        self.waste = Pile(WASTE)
        self.foundations: Dict[Suit, Pile] = {s: Pile(foundation(s)) for s in SUITS}
        self.tableau: List[Pile] = [Pile(tableau(i)) for i in range(TABLEAU_COLUMNS)]
        self.selection: Optional[Selection] = None

    def pile(self, ref: PileRef) -> Optional[Pile]:
        """Resolve a pile reference; unknown keys resolve to ``None``."""
        if ref.kind is PileKind.STOCK:
            return self.stock
        if ref.kind is PileKind.WASTE:
            return self.waste
        if ref.kind is PileKind.FOUNDATION:
            return self.foundations.get(ref.key)
        if ref.kind is PileKind.TABLEAU:
            if isinstance(ref.key, int) and not isinstance(ref.key, bool) and 0 <= ref.key < len(self.tableau):
                return self.tableau[ref.key]
        return None

    def piles(self) -> Iterator[Pile]:
        yield self.stock
        yield self.waste
        yield from self.foundations.values()
        yield from self.tableau

    def iter_cards(self) -> Iterator[Card]:
        for p in self.piles():
            yield from p.cards

    def foundation_count(self) -> int:
        return sum(len(f) for f in self.foundations.values())

    def check_conservation(self):
        """Fail loudly unless each of the 52 cards sits in exactly one pile."""
        cards = list(self.iter_cards())
        objects = {id(c) for c in cards}
        ids = Counter(c.id for c in cards)
        dupes = sorted(cid for cid, n in ids.items() if n > 1)
        if len(cards) != DECK_SIZE or len(objects) != DECK_SIZE or dupes:
            raise ConservationError(
                f"expected {DECK_SIZE} distinct cards, found {len(cards)} "
                f"({len(objects)} objects, duplicated ids: {dupes})"
            )

    def clear_selection(self):
        self.selection = None

    def snapshot(self, won: bool = False) -> BoardSnapshot:
        sel = None
        if self.selection is not None:
            sel = SelectionView(self.selection.card_ids, self.selection.source)
        return BoardSnapshot(
            stock_size=len(self.stock),
            waste_top=CardView.of(self.waste.top()),
            foundation_tops={s: CardView.of(f.top()) for s, f in self.foundations.items()},
            tableau=tuple(tuple(CardView.of(c) for c in col.cards) for col in self.tableau),
            selection=sel,
            won=won,
        )


def deal(deck: Sequence[Card]) -> Board:
    """Deal a fresh board from an already shuffled 52-card sequence.

    Cards are consumed in order: column ``i`` receives ``i + 1`` cards with
    only the last one face up, and the remaining 24 become the stock with the
    final card of ``deck`` on top.
    """
    if len(deck) != DECK_SIZE:
        raise ValueError(f"a deal needs {DECK_SIZE} cards, got {len(deck)}")
    board = Board()
    card_index = 0
    for col in range(TABLEAU_COLUMNS):
        for row in range(col + 1):
            c = deck[card_index]
            card_index += 1
            c.face_up = row == col
            board.tableau[col].cards.append(c)

    # Remaining cards go to stock, face down
    board.stock.cards = list(deck[card_index:])
    for c in board.stock.cards:
        c.face_up = False
    board.check_conservation()
    logger.debug("dealt board, stock top %r", board.stock.top())
    return board
