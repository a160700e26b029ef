from __future__ import annotations

import itertools
from collections import deque
from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

from quests.assets.registry import GameAssets, load_game_assets
from quests.core.attack import Attack
from quests.core.deck import Deck
from quests.core.stage import Stage
from quests.game import Game
from quests.game_setup import build_initial_players
from quests.models import (
    EventActionCard,
    EventEffect,
    FoeCard,
    Player,
    QuestCard,
    WeaponCard,
    WeaponType,
)


@pytest.fixture(scope="session")
def card_assets() -> GameAssets:
    """Card catalogues from `tests/assets`, loaded in strict mode.

    This keeps tests hermetic and prevents coupling to the repo's real deck lists.
    """

    return load_game_assets(root=Path(__file__).resolve().parent, strict=True)


@pytest.fixture(autouse=True)
def _clear_quests_env(monkeypatch: pytest.MonkeyPatch) -> None:
    import os

    for key in list(os.environ):
        if key.startswith("QUESTS_"):
            monkeypatch.delenv(key, raising=False)


class CardFactory:
    """Builds cards with unique ids so identical faces stay distinguishable."""

    def __init__(self) -> None:
        self._ids = itertools.count(1)

    def _id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._ids)}"

    def weapon(self, value: int, weapon_type: WeaponType = WeaponType.sword, name: str | None = None) -> WeaponCard:
        return WeaponCard(
            card_id=self._id("weapon"),
            name=name or weapon_type.value.replace("_", " ").title(),
            weapon_type=weapon_type,
            value=value,
        )

    def foe(self, value: int, name: str | None = None) -> FoeCard:
        return FoeCard(card_id=self._id("foe"), name=name or f"Foe {value}", value=value)

    def quest(self, stages: int, name: str | None = None) -> QuestCard:
        return QuestCard(card_id=self._id("quest"), name=name or f"{stages}-stage quest", stages=stages)

    def event(self, effect: EventEffect) -> EventActionCard:
        return EventActionCard(card_id=self._id("event"), name=effect.value, effect=effect)

    def fillers(self, n: int) -> list[FoeCard]:
        return [self.foe(1, name="Filler") for _ in range(n)]


class ScriptedView:
    """View double: answers prompts from queues and records everything shown.

    Card choices are queued per player id. A queued card is turned into its
    1-based position in the player's hand at the moment the prompt is asked; a
    queued int is returned as is (0 = done).
    """

    def __init__(
        self,
        *,
        yes_no: Iterable[bool] = (),
        choices: dict[str, Iterable[int | WeaponCard | FoeCard]] | None = None,
    ):
        self.yes_no = deque(yes_no)
        self.choices: dict[str, deque[int | WeaponCard | FoeCard]] = {
            pid: deque(items) for pid, items in (choices or {}).items()
        }
        self.messages: list[str] = []
        self.errors: list[str] = []
        self.prompts: list[str] = []
        self.stages_shown: list[int] = []
        self.attacks_shown: list[int] = []
        self.hands_shown: list[str] = []
        self.key_presses = 0
        self.clears = 0

    def display_message(self, text: str) -> None:
        self.messages.append(text)

    def display_error(self, text: str) -> None:
        self.errors.append(text)

    def display_player_hand(self, player: Player) -> None:
        self.hands_shown.append(player.player_id)

    def display_current_stage(self, stage: Stage) -> None:
        self.stages_shown.append(stage.value)

    def display_attack(self, attack: Attack) -> None:
        self.attacks_shown.append(attack.value)

    def get_yes_no_choice(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        if not self.yes_no:
            raise AssertionError(f"Unscripted yes/no prompt: {prompt}")
        return self.yes_no.popleft()

    def get_card_choice(self, player: Player) -> int:
        queue = self.choices.get(player.player_id)
        if not queue:
            raise AssertionError(f"Unscripted card choice for {player.player_id}")
        item = queue.popleft()
        if isinstance(item, int):
            return item
        return player.hand.index(item) + 1

    def wait_for_key_press(self) -> None:
        self.key_presses += 1

    def clear_screen(self) -> None:
        self.clears += 1

    def unused_choices(self) -> dict[str, int]:
        return {pid: len(q) for pid, q in self.choices.items() if q}


GameFactory = Callable[..., Game]
ViewFactory = type[ScriptedView]


@pytest.fixture()
def cards() -> CardFactory:
    return CardFactory()


@pytest.fixture()
def make_view() -> ViewFactory:
    return ScriptedView


@pytest.fixture()
def make_game() -> GameFactory:
    """Un-dealt game: empty hands, the given adventure cards as the draw pile."""

    def _make(
        *,
        num_players: int = 3,
        adventure: list[WeaponCard | FoeCard] | None = None,
        events: list[QuestCard | EventActionCard] | None = None,
        shields_to_win: int = 7,
        hand_size: int = 12,
    ) -> Game:
        return Game(
            players=build_initial_players(num_players=num_players),
            adventure_deck=Deck(list(adventure or [])),
            event_deck=Deck(list(events or [])),
            shields_to_win=shields_to_win,
            hand_size=hand_size,
        )

    return _make
