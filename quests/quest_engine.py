from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from quests.core.attack import Attack
from quests.core.events import EventType, GameEvent
from quests.core.quest import Quest, StageBuildError
from quests.core.stage import Stage
from quests.fsm import QuestFSM
from quests.game import GameBoundary
from quests.hand import HandTrimmer
from quests.models import FoeCard, Player, QuestCard, QuestOutcome, QuestPhase, WeaponCard
from quests.turn_processing.validators import SelectionContext, pipeline_for_action
from quests.view.base import View

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class QuestResult:
    """What is left of a quest once it is over: the outcome and the event trail.

    `quest` is None when nobody sponsored.
    """

    outcome: QuestOutcome
    phase: QuestPhase
    quest: Quest | None = None
    events: list[GameEvent] = field(default_factory=list)

    @property
    def winners(self) -> tuple[Player, ...]:
        return self.quest.winners if self.quest is not None else ()


class QuestEngine:
    """Runs one quest card from sponsorship through cleanup.

    Choices come from the view; cards come from (and go back to) the game's
    adventure deck. Bad selections are reported and re-prompted. An empty
    adventure deck (`EmptyDeckError`) is not handled here.
    """

    def __init__(
        self,
        *,
        game: GameBoundary,
        view: View,
        trimmer: HandTrimmer | None = None,
        max_build_attempts: int = 3,
    ):
        if max_build_attempts < 1:
            raise ValueError("max_build_attempts must be >= 1")
        self.game = game
        self.view = view
        self.trimmer = trimmer or HandTrimmer(game=game, view=view)
        self.max_build_attempts = max_build_attempts
        self.fsm = QuestFSM()
        self._events: list[GameEvent] = []
        self._turn_id = 0

    def run(self, quest_card: QuestCard, *, turn_id: int = 0) -> QuestResult:
        self.fsm = QuestFSM()
        self._events = []
        self._turn_id = turn_id

        sponsor = self.find_sponsor(quest_card)
        if sponsor is None:
            self.fsm.no_sponsor()
            self.view.display_message("No one sponsored the quest.")
            self._emit("QUEST_UNSPONSORED", quest=quest_card.name)
            self.fsm.finish()
            return self._result(QuestOutcome.unsponsored, quest=None)

        self.fsm.sponsor_found()
        self._emit("QUEST_SPONSORED", quest=quest_card.name, sponsor=sponsor.player_id)
        quest = Quest(quest_card, sponsor)

        if not self.build_quest(quest):
            self.fsm.build_abandoned()
            self.view.display_message("Failed to build quest properly.")
            self.fsm.finish()
            return self._result(QuestOutcome.build_failed, quest=quest)

        self.fsm.stages_built()
        participants = self.select_participants(quest)
        if participants:
            self.fsm.participants_joined()
            self.resolve_stages(quest, participants)
        else:
            self.fsm.nobody_joined()
            self.view.display_message("No one joined the quest.")

        self.fsm.clean_up()
        self.cleanup_quest(quest)
        self.fsm.finish()
        return self._result(QuestOutcome.completed, quest=quest)

    def find_sponsor(self, quest_card: QuestCard) -> Player | None:
        """Offer the quest to each player in seating order, starting with the current player."""

        players = self.game.get_players()
        current = self.game.get_current_player()
        start = next(i for i, p in enumerate(players) if p.player_id == current.player_id)

        for offset in range(len(players)):
            player = players[(start + offset) % len(players)]
            self.view.display_player_hand(player)
            prompt = f"{player.label}, do you want to sponsor {quest_card.name} ({quest_card.stages} stages)?"
            if self.view.get_yes_no_choice(prompt):
                return player
        return None

    def build_quest(self, quest: Quest) -> bool:
        """Let the sponsor build every stage. Returns False if the quest cannot be built."""

        sponsor = quest.sponsor
        pipeline = pipeline_for_action("build_stage")
        self.view.display_player_hand(sponsor)

        for stage_num in range(1, quest.stage_count + 1):
            stage = Stage()
            rejected_commits = 0
            self.view.display_message(f"Building stage {stage_num} of {quest.stage_count}")

            while True:
                committed = frozenset(c.card_id for c in quest.placed_cards() + list(stage.cards))
                if not stage.is_valid() and not _has_unplaced_foe(sponsor, committed):
                    self.view.display_error(f"{sponsor.label} has no foe left for stage {stage_num}")
                    self._emit("QUEST_BUILD_FAILED", stage=stage_num, reason="no_foe")
                    return False

                choice = self.view.get_card_choice(sponsor)
                if choice == 0:
                    try:
                        quest.add_stage(stage)
                    except StageBuildError as e:
                        logger.debug("Rejected stage %d commit from %s: %s", stage_num, sponsor.player_id, e)
                        self.view.display_error(str(e))
                        rejected_commits += 1
                        if rejected_commits >= self.max_build_attempts:
                            self._emit("QUEST_BUILD_FAILED", stage=stage_num, reason="too_many_attempts")
                            return False
                        continue
                    self._emit("STAGE_BUILT", stage=stage_num, value=stage.value, cards=len(stage.cards))
                    break

                ctx = SelectionContext(
                    player=sponsor,
                    choice=choice,
                    action="build_stage",
                    committed_ids=committed,
                )
                try:
                    card = pipeline.select(ctx=ctx)
                except ValueError as e:
                    logger.debug("Rejected stage selection %s from %s: %s", choice, sponsor.player_id, e)
                    self.view.display_error(str(e))
                    continue

                if not stage.add_card(card):
                    self.view.display_error(_placement_error(card))
                    continue
                self.view.display_current_stage(stage)

        return True

    def select_participants(self, quest: Quest) -> list[Player]:
        participants: list[Player] = []
        for player in self.game.get_players():
            if player.player_id == quest.sponsor.player_id:
                continue
            if self.view.get_yes_no_choice(f"{player.label}, do you want to participate in {quest.quest_card.name}?"):
                participants.append(player)
                quest.add_participant(player)
                self._emit("PARTICIPANT_JOINED", player_id=player.player_id)
        return participants

    def resolve_stages(self, quest: Quest, participants: list[Player]) -> None:
        """Run the stages in order until they are all resolved or nobody is left."""

        active = list(participants)
        stages = quest.stages
        last = len(stages) - 1

        for i, stage in enumerate(stages):
            if not active:
                break
            if i > 0:
                self.fsm.next_stage()

            self.view.display_message(f"\nResolving stage {i + 1} (value {stage.value})")
            self._emit("STAGE_STARTED", stage=i + 1, value=stage.value, participants=[p.player_id for p in active])

            for participant in active:
                participant.add_card_to_hand(self.game.draw_adventure_card())
                self.trimmer.trim(participant)

            survivors: list[Player] = []
            for participant in active:
                attack = self.build_attack(participant)
                if attack.value >= stage.value:
                    survivors.append(participant)
                    self._emit("PARTICIPANT_SURVIVED", stage=i + 1, player_id=participant.player_id, attack=attack.value)
                    self.view.display_message(f"{participant.label} survives stage {i + 1} ({attack.value} vs {stage.value}).")
                else:
                    self._emit("PARTICIPANT_ELIMINATED", stage=i + 1, player_id=participant.player_id, attack=attack.value)
                    self.view.display_message(f"{participant.label} is eliminated ({attack.value} vs {stage.value}).")
                self.discard_attack_cards(participant, attack)

            active = survivors

            if i == last:
                for winner in active:
                    winner.add_shields(quest.stage_count)
                    quest.add_winner(winner)
                    self._emit("SHIELDS_AWARDED", player_id=winner.player_id, shields=quest.stage_count)
                    self.view.display_message(f"{winner.label} completes the quest and earns {quest.stage_count} shields!")

        self.fsm.stages_finished()

    def build_attack(self, player: Player) -> Attack:
        attack = Attack()
        pipeline = pipeline_for_action("attack")
        self.view.display_player_hand(player)
        self.view.display_message(f"{player.label}, choose weapons for your attack (0 when done).")

        while True:
            choice = self.view.get_card_choice(player)
            if choice == 0:
                break

            ctx = SelectionContext(player=player, choice=choice, action="attack")
            try:
                card = pipeline.select(ctx=ctx)
            except ValueError as e:
                logger.debug("Rejected attack selection %s from %s: %s", choice, player.player_id, e)
                self.view.display_error(str(e))
                continue

            if not isinstance(card, WeaponCard) or not attack.add_weapon(card):
                self.view.display_error("Cannot use duplicate weapon types")
                continue
            self.view.display_attack(attack)

        return attack

    def discard_attack_cards(self, player: Player, attack: Attack) -> None:
        for weapon in attack.weapons:
            self.game.discard_adventure_card(weapon)
            player.remove_card_from_hand(weapon)

    def cleanup_quest(self, quest: Quest) -> None:
        """Discard the sponsor's stage cards, then redraw them plus one card per stage."""

        sponsor = quest.sponsor
        placed = quest.placed_cards()
        for card in placed:
            self.game.discard_adventure_card(card)
            sponsor.remove_card_from_hand(card)

        to_draw = len(placed) + quest.stage_count
        for _ in range(to_draw):
            sponsor.add_card_to_hand(self.game.draw_adventure_card())
        self._emit("SPONSOR_REDREW", player_id=sponsor.player_id, discarded=len(placed), drawn=to_draw)

        self.trimmer.trim(sponsor)

    def _emit(self, type: EventType, **payload: Any) -> None:
        logger.info("%s %s", type, payload)
        self._events.append(GameEvent.now(type=type, turn_id=self._turn_id, payload=payload))

    def _result(self, outcome: QuestOutcome, *, quest: Quest | None) -> QuestResult:
        logger.info("Quest finished: %s", outcome.value)
        return QuestResult(outcome=outcome, phase=self.fsm.phase, quest=quest, events=list(self._events))


def _has_unplaced_foe(player: Player, committed_ids: frozenset[str]) -> bool:
    return any(isinstance(c, FoeCard) and c.card_id not in committed_ids for c in player.hand)


def _placement_error(card: WeaponCard | FoeCard) -> str:
    if isinstance(card, FoeCard):
        return "Only one foe is allowed per stage"
    return f"This stage already has a {card.weapon_type.value}"
