from __future__ import annotations

import random

from quests.assets.registry import GameAssets
from quests.game import Game
from quests.models import Player
from quests.settings import MAX_PLAYERS, MIN_PLAYERS, GameSettings


def build_initial_players(*, num_players: int) -> list[Player]:
    """Seat players p1..pN in order. Seat order is also turn and sponsorship order."""

    if num_players < MIN_PLAYERS or num_players > MAX_PLAYERS:
        raise ValueError(f"num_players must be between {MIN_PLAYERS} and {MAX_PLAYERS}")
    return [Player(player_id=f"p{seat + 1}", seat=seat, display_name=f"Player {seat + 1}") for seat in range(num_players)]


def create_game(*, settings: GameSettings, assets: GameAssets, rng: random.Random | None = None) -> Game:
    """Seat the players and build both decks. Call `Game.initialize()` to shuffle and deal."""

    if rng is None:
        seed = settings.seed if settings.seed is not None else random.SystemRandom().randint(1, 2**31 - 1)
        rng = random.Random(seed)

    players = build_initial_players(num_players=settings.num_players)
    adventure_deck = assets.build_adventure_deck(rng=rng)

    needed = settings.hand_size * len(players)
    if adventure_deck.size < needed:
        raise ValueError(f"Adventure deck has {adventure_deck.size} cards; dealing needs {needed}")

    return Game(
        players=players,
        adventure_deck=adventure_deck,
        event_deck=assets.build_event_deck(rng=rng),
        shields_to_win=settings.shields_to_win,
        hand_size=settings.hand_size,
    )
