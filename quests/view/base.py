from __future__ import annotations

from typing import Protocol

from quests.core.attack import Attack
from quests.core.stage import Stage
from quests.models import Player


class View(Protocol):
    """Everything the engine shows to, or asks of, the people at the table.

    Calls are synchronous: each prompt is answered before the next one starts.
    `get_card_choice` returns 0 for "done/none" and 1..N for the Nth hand card.
    """

    def display_message(self, text: str) -> None:  # pragma: no cover
        ...

    def display_error(self, text: str) -> None:  # pragma: no cover
        ...

    def display_player_hand(self, player: Player) -> None:  # pragma: no cover
        ...

    def display_current_stage(self, stage: Stage) -> None:  # pragma: no cover
        ...

    def display_attack(self, attack: Attack) -> None:  # pragma: no cover
        ...

    def get_yes_no_choice(self, prompt: str) -> bool:  # pragma: no cover
        ...

    def get_card_choice(self, player: Player) -> int:  # pragma: no cover
        ...

    def wait_for_key_press(self) -> None:  # pragma: no cover
        ...

    def clear_screen(self) -> None:  # pragma: no cover
        ...
