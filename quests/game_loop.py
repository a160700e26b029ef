from __future__ import annotations

import logging
from typing import Any

from quests.core.deck import EmptyDeckError
from quests.core.events import EventType, GameEvent
from quests.core.game_state_text import format_scoreboard
from quests.event_actions import resolve_event_action
from quests.game import Game
from quests.hand import HandTrimmer
from quests.models import Player, QuestCard
from quests.quest_engine import QuestEngine
from quests.settings import GameSettings
from quests.view.base import View

logger = logging.getLogger(__name__)


class GameController:
    """Turn loop: each turn draws one event-deck card and resolves it.

    Quest cards go through the quest engine, everything else is an event action.
    An exhausted adventure deck ends the game early with the current standings.
    """

    def __init__(
        self,
        game: Game,
        view: View,
        *,
        max_build_attempts: int = 3,
        allow_negative_shields: bool = False,
        max_turns: int | None = None,
    ):
        self.game = game
        self.view = view
        self.trimmer = HandTrimmer(game=game, view=view)
        self.engine = QuestEngine(game=game, view=view, trimmer=self.trimmer, max_build_attempts=max_build_attempts)
        self.allow_negative_shields = allow_negative_shields
        self.max_turns = max_turns
        self.history: list[GameEvent] = []

    @classmethod
    def from_settings(cls, game: Game, view: View, settings: GameSettings) -> "GameController":
        return cls(
            game,
            view,
            max_build_attempts=settings.max_build_attempts,
            allow_negative_shields=settings.allow_negative_shields,
            max_turns=settings.max_turns,
        )

    def start_game(self) -> list[Player]:
        self.game.initialize()
        turns = 0

        try:
            while not self.game.is_game_over():
                if self.max_turns is not None and turns >= self.max_turns:
                    self.view.display_message(f"Turn limit of {self.max_turns} reached.")
                    break
                self.play_turn()
                turns += 1
        except EmptyDeckError as e:
            logger.warning("Stopping game on turn %d: %s", self.game.turn_number, e)
            self.view.display_error(f"{e}; the game cannot continue.")

        return self.announce_winners()

    def play_turn(self) -> None:
        player = self.game.get_current_player()
        self.view.clear_screen()
        self.view.display_message(f"It's {player.label}'s turn!")
        self.view.display_player_hand(player)
        self._record("TURN_STARTED", player_id=player.player_id)

        card = self.game.draw_event_card()
        self.view.display_message(f"Drew event card: {card}")
        self._record("EVENT_CARD_DRAWN", player_id=player.player_id, card=card.name)

        if isinstance(card, QuestCard):
            result = self.engine.run(card, turn_id=self.game.turn_number)
            self.history.extend(result.events)
        else:
            resolve_event_action(
                card,
                game=self.game,
                view=self.view,
                trimmer=self.trimmer,
                allow_negative_shields=self.allow_negative_shields,
            )
            self._record("EVENT_RESOLVED", effect=card.effect.value)

        self.game.discard_event_card(card)
        self.end_turn()

    def end_turn(self) -> None:
        self.view.display_message("End of turn")
        self.view.wait_for_key_press()
        self._record("TURN_ENDED", player_id=self.game.get_current_player().player_id)
        self.game.next_turn()

    def announce_winners(self) -> list[Player]:
        winners = self.game.get_winners()
        if not winners:
            self.view.display_message("Game over! No winners yet.")
        else:
            self.view.display_message("Game over! Winners:")
            for winner in winners:
                self.view.display_message(f"{winner.label} with {winner.shields} shields!")
        self.view.display_message(format_scoreboard(self.game.get_players()))
        return winners

    def _record(self, type: EventType, **payload: Any) -> None:
        logger.debug("%s %s", type, payload)
        self.history.append(GameEvent.now(type=type, turn_id=self.game.turn_number, payload=payload))
