from __future__ import annotations

import logging
from typing import Protocol

from quests.core.deck import Deck
from quests.models import EventActionCard, FoeCard, Player, QuestCard, WeaponCard

logger = logging.getLogger(__name__)


class GameBoundary(Protocol):
    """Player bookkeeping and card supply, as seen by the quest engine."""

    def get_current_player(self) -> Player:  # pragma: no cover
        ...

    def get_players(self) -> list[Player]:  # pragma: no cover
        ...

    def draw_adventure_card(self) -> WeaponCard | FoeCard:  # pragma: no cover
        ...

    def discard_adventure_card(self, card: WeaponCard | FoeCard) -> None:  # pragma: no cover
        ...


class Game:
    """In-memory table: seating, both decks, the turn pointer and the win rule."""

    def __init__(
        self,
        *,
        players: list[Player],
        adventure_deck: Deck[WeaponCard | FoeCard],
        event_deck: Deck[QuestCard | EventActionCard],
        shields_to_win: int = 7,
        hand_size: int = 12,
    ):
        if not players:
            raise ValueError("At least one player is required")
        self.players = players
        self.adventure_deck = adventure_deck
        self.event_deck = event_deck
        self.shields_to_win = shields_to_win
        self.hand_size = hand_size
        self.current_player_idx = 0
        self.turn_number = 0

    def initialize(self) -> None:
        self.adventure_deck.shuffle()
        self.event_deck.shuffle()
        for _ in range(self.hand_size):
            for player in self.players:
                player.add_card_to_hand(self.adventure_deck.draw_card())
        self.current_player_idx = 0
        self.turn_number = 0
        logger.info("Dealt %d cards to each of %d players", self.hand_size, len(self.players))

    def get_current_player(self) -> Player:
        return self.players[self.current_player_idx]

    def get_players(self) -> list[Player]:
        return list(self.players)

    def draw_event_card(self) -> QuestCard | EventActionCard:
        return self.event_deck.draw_card()

    def discard_event_card(self, card: QuestCard | EventActionCard) -> None:
        self.event_deck.discard(card)

    def draw_adventure_card(self) -> WeaponCard | FoeCard:
        return self.adventure_deck.draw_card()

    def discard_adventure_card(self, card: WeaponCard | FoeCard) -> None:
        self.adventure_deck.discard(card)

    def next_turn(self) -> None:
        self.current_player_idx = (self.current_player_idx + 1) % len(self.players)
        self.turn_number += 1

    def is_game_over(self) -> bool:
        return any(p.shields >= self.shields_to_win for p in self.players)

    def get_winners(self) -> list[Player]:
        return [p for p in self.players if p.shields >= self.shields_to_win]
