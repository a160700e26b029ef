from __future__ import annotations

from typing import TYPE_CHECKING

from collections.abc import Iterable

from quests.core.stage import Stage
from quests.models import Player
from quests.view.terminal import TerminalView

if TYPE_CHECKING:
    from conftest import CardFactory


def _view(answers: Iterable[str]) -> tuple[TerminalView, list[str], list[str]]:
    pending = list(answers)
    prompts: list[str] = []
    out: list[str] = []

    def fake_input(prompt: str) -> str:
        prompts.append(prompt)
        return pending.pop(0)

    return TerminalView(input_fn=fake_input, output_fn=out.append), prompts, out


def test_yes_no_reasks_until_answered() -> None:
    view, prompts, out = _view(["maybe", " Y "])

    assert view.get_yes_no_choice("Sponsor?") is True
    assert prompts == ["Sponsor? (y/n): ", "Sponsor? (y/n): "]
    assert out == ["Error: Please answer y or n"]


def test_yes_no_accepts_no() -> None:
    view, _, _ = _view(["no"])
    assert view.get_yes_no_choice("Join?") is False


def test_card_choice_reasks_on_garbage_and_negatives(cards: CardFactory) -> None:
    player = Player(player_id="p1", seat=0, display_name="Player 1", hand=[cards.foe(5)])
    view, prompts, out = _view(["two", "-1", "1"])

    assert view.get_card_choice(player) == 1
    assert prompts[0] == "Player 1, choose a card (1-1, 0 when done): "
    assert out == ["Error: 'two' is not a number", "Error: Choice cannot be negative"]


def test_card_choice_passes_out_of_range_numbers_through(cards: CardFactory) -> None:
    player = Player(player_id="p1", seat=0, hand=[cards.foe(5)])
    view, _, _ = _view(["42"])

    # Range checks belong to the selection pipelines.
    assert view.get_card_choice(player) == 42


def test_displays_render_hand_and_stage(cards: CardFactory) -> None:
    player = Player(player_id="p1", seat=0, display_name="Player 1", shields=2)
    player.hand.extend([cards.foe(5, name="Boar"), cards.weapon(10, name="Sword")])
    stage = Stage()
    stage.add_card(player.hand[0])
    view, _, out = _view([])

    view.display_player_hand(player)
    view.display_current_stage(stage)

    assert out[0].splitlines() == [
        "Player 1 - 2 shield(s), 2 card(s):",
        "   1. Boar (foe, 5)",
        "   2. Sword (sword, 10)",
    ]
    assert out[1] == "Stage [ready] value 5: Boar (foe, 5)"
