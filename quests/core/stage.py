from __future__ import annotations

from quests.models import FoeCard, WeaponCard


class Stage:
    """Cards the sponsor placed for one quest stage.

    At most one foe, and at most one weapon of each weapon type. A stage is only
    valid once its foe has been placed.
    """

    def __init__(self) -> None:
        self._cards: list[WeaponCard | FoeCard] = []
        self._value = 0
        self._foe: FoeCard | None = None

    def add_card(self, card: WeaponCard | FoeCard) -> bool:
        """Place a card. Returns False (and changes nothing) if the card is not allowed."""

        if isinstance(card, FoeCard):
            if self._foe is not None:
                return False
            self._foe = card
        elif any(isinstance(c, WeaponCard) and c.weapon_type == card.weapon_type for c in self._cards):
            return False

        self._cards.append(card)
        self._value += card.value
        return True

    def is_valid(self) -> bool:
        return self._foe is not None

    @property
    def value(self) -> int:
        return self._value

    @property
    def foe(self) -> FoeCard | None:
        return self._foe

    @property
    def cards(self) -> tuple[WeaponCard | FoeCard, ...]:
        return tuple(self._cards)

    def __contains__(self, card: object) -> bool:
        return any(c == card for c in self._cards)
