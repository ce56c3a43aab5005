# common.py - shared card types for the Klondike engine
import random
import pygame
from enum import Enum
from typing import List, NamedTuple, Optional, Sequence, Union


def ticks() -> int:
    """Milliseconds from pygame's clock, starting pygame on first use."""
    # get_ticks() stays at 0 until pygame is initialised
    if not pygame.get_init():
        pygame.init()
    return pygame.time.get_ticks()


class Suit(Enum):
    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"

    @property
    def symbol(self):
        return SUIT_SYMBOLS[self]


SUITS = [Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES]
SUIT_SYMBOLS = {Suit.HEARTS: "♥", Suit.DIAMONDS: "♦", Suit.CLUBS: "♣", Suit.SPADES: "♠"}

ACE, JACK, QUEEN, KING = 1, 11, 12, 13
RANK_TO_TEXT = {ACE: "A", JACK: "J", QUEEN: "Q", KING: "K"}
for _r in range(2, 11):
    RANK_TO_TEXT[_r] = str(_r)
TEXT_TO_RANK = {v: k for k, v in RANK_TO_TEXT.items()}

DECK_SIZE = 52
TABLEAU_COLUMNS = 7


def is_red(suit):
    return suit in (Suit.HEARTS, Suit.DIAMONDS)


# ---------- Cards ----------
class Card:
    __slots__ = ("suit", "rank", "face_up")

    def __init__(self, suit, rank, face_up=False):
        self.suit = suit   # Suit
        self.rank = rank   # 1..13
        self.face_up = face_up

    @property
    def value(self):
        return RANK_TO_TEXT[self.rank]

    @property
    def id(self):
        return f"{self.value}-{self.suit.value}"

    def color(self):
        return "red" if is_red(self.suit) else "black"

    def __repr__(self):
        return f"{self.value}{self.suit.symbol}{'↑' if self.face_up else '↓'}"


def card_from_id(card_id, face_up=False):
    """Build a fresh Card from an id such as ``"Q-spades"``."""
    value, suit_name = card_id.split("-", 1)
    return Card(Suit(suit_name), TEXT_TO_RANK[value], face_up)


def build_deck() -> List[Card]:
    """All 52 cards face down, suit-major in SUITS order, A..K within a suit."""
    return [Card(suit, rank, False) for suit in SUITS for rank in range(ACE, KING + 1)]


def shuffle_deck(deck: Sequence[Card], rng: Optional[random.Random] = None) -> List[Card]:
    """Return a uniformly shuffled copy of ``deck``; the input is left alone."""
    shuffled = list(deck)
    (rng or random).shuffle(shuffled)
    return shuffled


# ---------- Piles & interaction vocabulary ----------
class PileKind(Enum):
    STOCK = "stock"
    WASTE = "waste"
    FOUNDATION = "foundation"
    TABLEAU = "tableau"


PileKey = Union[Suit, int, None]


class PileRef(NamedTuple):
    kind: PileKind
    key: PileKey = None

    def __repr__(self):
        if self.key is None:
            return self.kind.value
        key = self.key.value if isinstance(self.key, Suit) else self.key
        return f"{self.kind.value}[{key}]"


STOCK = PileRef(PileKind.STOCK)
WASTE = PileRef(PileKind.WASTE)


def foundation(suit) -> PileRef:
    return PileRef(PileKind.FOUNDATION, suit)


def tableau(index) -> PileRef:
    return PileRef(PileKind.TABLEAU, index)


class MoveOutcome(Enum):
    SELECTED = "selected"
    MOVED = "moved"
    REJECTED = "rejected"
    DESELECTED = "deselected"


class PickKind(Enum):
    SINGLE = "single"
    DOUBLE = "double"
