import random

import pytest

from klondike.common import Card, Suit, build_deck, card_from_id, shuffle_deck


def test_build_deck_is_canonical_and_face_down():
    deck = build_deck()
    ids = [c.id for c in deck]
    assert len(deck) == 52
    assert len(set(ids)) == 52
    assert ids[0] == "A-hearts"
    assert ids[12] == "K-hearts"
    assert ids[13] == "A-diamonds"
    assert ids[-1] == "K-spades"
    assert not any(c.face_up for c in deck)


def test_build_deck_returns_new_cards_each_call():
    a, b = build_deck(), build_deck()
    assert all(x is not y for x, y in zip(a, b))


def test_shuffle_is_a_permutation_and_leaves_input_alone():
    deck = build_deck()
    deck[5].face_up = True
    before = list(deck)
    shuffled = shuffle_deck(deck)
    assert deck == before
    assert sorted(c.id for c in shuffled) == sorted(c.id for c in deck)
    assert {id(c) for c in shuffled} == {id(c) for c in deck}
    # face flags travel with the cards untouched
    assert [c for c in shuffled if c.face_up] == [deck[5]]


def test_two_shuffles_differ():
    deck = build_deck()
    assert [c.id for c in shuffle_deck(deck)] != [c.id for c in shuffle_deck(deck)]


def test_seeded_shuffle_is_reproducible():
    deck = build_deck()
    a = shuffle_deck(deck, random.Random(42))
    b = shuffle_deck(deck, random.Random(42))
    assert [c.id for c in a] == [c.id for c in b]


@pytest.mark.parametrize(
    "suit, color",
    [(Suit.HEARTS, "red"), (Suit.DIAMONDS, "red"), (Suit.CLUBS, "black"), (Suit.SPADES, "black")],
)
def test_card_color(suit, color):
    assert Card(suit, 7).color() == color


def test_card_identity_and_display():
    c = Card(Suit.SPADES, 10, face_up=True)
    assert c.id == "10-spades"
    assert c.value == "10"
    assert repr(c) == "10♠↑"
    c.face_up = False
    assert repr(c) == "10♠↓"


def test_card_from_id():
    c = card_from_id("Q-diamonds", face_up=True)
    assert (c.suit, c.rank, c.face_up) == (Suit.DIAMONDS, 12, True)
    with pytest.raises(KeyError):
        card_from_id("Z-hearts")
