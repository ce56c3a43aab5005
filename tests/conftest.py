from typing import Dict, Iterable, Optional, Sequence

import pytest

from klondike import settings as S
from klondike.board import Board
from klondike.common import RANK_TO_TEXT, Suit, build_deck


def suit_run(suit: Suit, upto: int = 13):
    """Ids A..``upto`` of one suit, e.g. for a filled foundation."""
    return [f"{RANK_TO_TEXT[r]}-{suit.value}" for r in range(1, upto + 1)]


def _arrange(
    tableau: Sequence[Sequence[str]] = (),
    foundations: Optional[Dict[Suit, Iterable[str]]] = None,
    waste: Sequence[str] = (),
    stock: Sequence[str] = (),
    fill_stock: bool = True,
) -> Board:
    """Build a board from card ids. A trailing ``*`` marks a face-down card;
    a foundation given as an int n holds A..n of its suit.

    Cards not placed anywhere go face down under the given stock cards, so
    the board always holds all 52.
    """
    deck = {c.id: c for c in build_deck()}
    board = Board()

    def take(token, face_up):
        c = deck.pop(token.rstrip("*"))
        c.face_up = face_up and not token.endswith("*")
        return c

    for i, col in enumerate(tableau):
        board.tableau[i].cards = [take(s, True) for s in col]
    for suit, ids in (foundations or {}).items():
        if isinstance(ids, int):
            ids = suit_run(suit, ids)
        board.foundations[suit].cards = [take(s, True) for s in ids]
    board.waste.cards = [take(s, True) for s in waste]
    board.stock.cards = [take(s, False) for s in stock]
    if fill_stock:
        board.stock.cards[:0] = list(deck.values())
    return board


@pytest.fixture
def arrange():
    return _arrange


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    monkeypatch.setenv("APPDATA", str(tmp_path))
    for name in ("KLONDIKE_DOUBLE_PICK_MS", "KLONDIKE_WIN_DELAY_MS", "KLONDIKE_DEBUG_CHECKS"):
        monkeypatch.delenv(name, raising=False)
    S.load_settings()
    yield
    S.reset_settings()
