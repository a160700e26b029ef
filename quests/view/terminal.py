from __future__ import annotations

from collections.abc import Callable

from quests.core.attack import Attack
from quests.core.game_state_text import format_attack, format_hand, format_stage
from quests.core.stage import Stage
from quests.models import Player

_CLEAR = "\033[2J\033[H"


class TerminalView:
    """Text prompts on stdin/stdout.

    `input_fn` and `output_fn` default to the builtins; tests pass their own.
    Malformed answers are re-asked here, so the engine only ever sees ints/bools.
    """

    def __init__(
        self,
        *,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ):
        self._input = input_fn
        self._output = output_fn

    def display_message(self, text: str) -> None:
        self._output(text)

    def display_error(self, text: str) -> None:
        self._output(f"Error: {text}")

    def display_player_hand(self, player: Player) -> None:
        self._output(format_hand(player))

    def display_current_stage(self, stage: Stage) -> None:
        self._output(format_stage(stage))

    def display_attack(self, attack: Attack) -> None:
        self._output(format_attack(attack))

    def get_yes_no_choice(self, prompt: str) -> bool:
        while True:
            answer = self._input(f"{prompt} (y/n): ").strip().casefold()
            if answer in {"y", "yes"}:
                return True
            if answer in {"n", "no"}:
                return False
            self.display_error("Please answer y or n")

    def get_card_choice(self, player: Player) -> int:
        while True:
            raw = self._input(f"{player.label}, choose a card (1-{len(player.hand)}, 0 when done): ").strip()
            try:
                choice = int(raw)
            except ValueError:
                self.display_error(f"'{raw}' is not a number")
                continue
            if choice < 0:
                self.display_error("Choice cannot be negative")
                continue
            return choice

    def wait_for_key_press(self) -> None:
        self._input("Press Enter to continue...")

    def clear_screen(self) -> None:
        self._output(_CLEAR)
