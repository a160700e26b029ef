from __future__ import annotations

import logging
import random
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EmptyDeckError(RuntimeError):
    """Both the draw pile and the discard pile are empty."""


class Deck(Generic[T]):
    """Draw pile + discard pile for one card family.

    The top of the draw pile is the end of the list. Drawing from an empty draw
    pile first recycles the discard pile (shuffled) into a new draw pile.
    """

    def __init__(self, cards: list[T] | None = None, *, rng: random.Random | None = None):
        self._cards: list[T] = list(cards or [])
        self._discard_pile: list[T] = []
        self._rng = rng or random.Random()

    def add_card(self, card: T) -> None:
        self._cards.append(card)

    def draw_card(self) -> T:
        if not self._cards and self._discard_pile:
            self._reshuffle_discard_pile()
        if not self._cards:
            raise EmptyDeckError("No cards left in deck")
        return self._cards.pop()

    def discard(self, card: T) -> None:
        self._discard_pile.append(card)

    def shuffle(self) -> None:
        self._rng.shuffle(self._cards)

    def _reshuffle_discard_pile(self) -> None:
        recycled = list(self._discard_pile)
        self._rng.shuffle(recycled)
        self._cards.extend(recycled)
        self._discard_pile.clear()
        logger.debug("Reshuffled %d discarded cards into the draw pile", len(recycled))

    @property
    def size(self) -> int:
        return len(self._cards)

    @property
    def discard_size(self) -> int:
        return len(self._discard_pile)

    def __len__(self) -> int:
        return len(self._cards)
