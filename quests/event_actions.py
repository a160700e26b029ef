from __future__ import annotations

import logging

from quests.game import GameBoundary
from quests.hand import HandTrimmer
from quests.models import EventActionCard, EventEffect, Player
from quests.view.base import View

logger = logging.getLogger(__name__)

PLAGUE_SHIELD_LOSS = 2
EVENT_DRAW_COUNT = 2


def resolve_event_action(
    card: EventActionCard,
    *,
    game: GameBoundary,
    view: View,
    trimmer: HandTrimmer,
    allow_negative_shields: bool = False,
) -> None:
    """Apply an event card's effect to the current player (or, for Prosperity, everyone)."""

    current = game.get_current_player()
    logger.info("Resolving %s for %s", card.effect.value, current.player_id)

    if card.effect == EventEffect.plague:
        current.lose_shields(PLAGUE_SHIELD_LOSS, floor=None if allow_negative_shields else 0)
        view.display_message(f"{current.label} loses {PLAGUE_SHIELD_LOSS} shields!")

    elif card.effect == EventEffect.queens_favor:
        _draw_cards(current, game=game, n=EVENT_DRAW_COUNT)
        view.display_message(f"{current.label} draws {EVENT_DRAW_COUNT} cards.")
        trimmer.trim(current)

    elif card.effect == EventEffect.prosperity:
        view.display_message(f"Prosperity! Every player draws {EVENT_DRAW_COUNT} cards.")
        for player in game.get_players():
            _draw_cards(player, game=game, n=EVENT_DRAW_COUNT)
            trimmer.trim(player)

    else:
        raise ValueError(f"Unknown event effect: {card.effect}")


def _draw_cards(player: Player, *, game: GameBoundary, n: int) -> None:
    for _ in range(n):
        player.add_card_to_hand(game.draw_adventure_card())
