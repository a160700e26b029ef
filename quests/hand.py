from __future__ import annotations

import logging

from quests.game import GameBoundary
from quests.models import MAX_HAND_SIZE, FoeCard, Player, WeaponCard
from quests.turn_processing.validators import SelectionContext, pipeline_for_action
from quests.view.base import View

logger = logging.getLogger(__name__)


class HandTrimmer:
    """Enforces the hand limit after anything that grows a hand.

    While the hand holds more than `max_hand_size` cards the player must pick one
    to discard; there is no way to skip.
    """

    def __init__(self, *, game: GameBoundary, view: View, max_hand_size: int = MAX_HAND_SIZE):
        self.game = game
        self.view = view
        self.max_hand_size = max_hand_size

    def trim(self, player: Player) -> list[WeaponCard | FoeCard]:
        pipeline = pipeline_for_action("trim")
        discarded: list[WeaponCard | FoeCard] = []

        while len(player.hand) > self.max_hand_size:
            self.view.display_player_hand(player)
            excess = len(player.hand) - self.max_hand_size
            self.view.display_message(f"{player.label}, you must discard {excess} card(s).")

            ctx = SelectionContext(player=player, choice=self.view.get_card_choice(player), action="trim")
            try:
                card = pipeline.select(ctx=ctx)
            except ValueError as e:
                logger.debug("Rejected discard choice %s from %s: %s", ctx.choice, player.player_id, e)
                self.view.display_error(str(e))
                continue

            self.game.discard_adventure_card(card)
            player.remove_card_from_hand(card)
            discarded.append(card)

        if discarded:
            logger.info("%s discarded %d card(s) down to the hand limit", player.player_id, len(discarded))
        return discarded
