from __future__ import annotations

import random
from collections import Counter

import pytest

from quests.core.deck import Deck, EmptyDeckError


def test_draw_takes_from_top_of_pile() -> None:
    deck = Deck(["a", "b"])
    deck.add_card("c")

    assert deck.draw_card() == "c"
    assert deck.draw_card() == "b"
    assert deck.size == 1


def test_discards_come_back_after_draw_pile_runs_out() -> None:
    deck: Deck[str] = Deck(["x"], rng=random.Random(7))
    assert deck.draw_card() == "x"

    discarded = ["a", "b", "b", "c"]
    for card in discarded:
        deck.discard(card)
    assert deck.size == 0
    assert deck.discard_size == 4

    drawn = [deck.draw_card() for _ in discarded]

    assert Counter(drawn) == Counter(discarded)
    assert deck.discard_size == 0


def test_empty_deck_raises_instead_of_returning_none() -> None:
    deck: Deck[str] = Deck()

    with pytest.raises(EmptyDeckError):
        deck.draw_card()


def test_reshuffle_is_a_permutation_of_the_discard_pile() -> None:
    deck: Deck[int] = Deck(rng=random.Random(123))
    for n in range(20):
        deck.discard(n)

    first = deck.draw_card()
    rest = [deck.draw_card() for _ in range(19)]

    assert sorted([first, *rest]) == list(range(20))
    with pytest.raises(EmptyDeckError):
        deck.draw_card()


def test_shuffle_keeps_the_same_cards() -> None:
    cards = list(range(30))
    deck = Deck(list(cards), rng=random.Random(1))

    deck.shuffle()

    assert len(deck) == 30
    assert sorted(deck.draw_card() for _ in range(30)) == cards


def test_discard_does_not_touch_draw_pile() -> None:
    deck = Deck(["a"])
    deck.discard("b")

    assert deck.draw_card() == "a"
    assert deck.draw_card() == "b"
