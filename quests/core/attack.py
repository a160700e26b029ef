from __future__ import annotations

from quests.models import WeaponCard


class Attack:
    """Weapons one participant commits against a single stage (one per weapon type)."""

    def __init__(self) -> None:
        self._weapons: list[WeaponCard] = []
        self._value = 0

    def add_weapon(self, card: WeaponCard) -> bool:
        if any(w.weapon_type == card.weapon_type for w in self._weapons):
            return False
        self._weapons.append(card)
        self._value += card.value
        return True

    @property
    def value(self) -> int:
        return self._value

    @property
    def weapons(self) -> tuple[WeaponCard, ...]:
        return tuple(self._weapons)
