from __future__ import annotations

from quests.core.stage import Stage
from quests.models import FoeCard, Player, QuestCard, WeaponCard


class StageBuildError(ValueError):
    pass


class InvalidStageError(StageBuildError):
    """The stage has no foe."""


class InsufficientStageValueError(StageBuildError):
    """The stage is weaker than the stage before it."""


class QuestFullError(StageBuildError):
    """Every stage the quest card calls for is already built."""


class Quest:
    """One sponsored quest: its built stages plus participant/winner bookkeeping.

    Lives for a single sponsorship attempt. The sponsor is held by reference only;
    participants and winners are kept in the order they were recorded.
    """

    def __init__(self, quest_card: QuestCard, sponsor: Player):
        self.quest_card = quest_card
        self.sponsor = sponsor
        self._stages: list[Stage] = []
        self._participants: list[Player] = []
        self._winners: list[Player] = []

    @property
    def stage_count(self) -> int:
        return self.quest_card.stages

    @property
    def stages(self) -> tuple[Stage, ...]:
        return tuple(self._stages)

    @property
    def participants(self) -> tuple[Player, ...]:
        return tuple(self._participants)

    @property
    def winners(self) -> tuple[Player, ...]:
        return tuple(self._winners)

    def add_stage(self, stage: Stage) -> None:
        if len(self._stages) >= self.stage_count:
            raise QuestFullError(f"This quest only has {self.stage_count} stage(s)")
        if not stage.is_valid():
            raise InvalidStageError("Stage cannot be empty: place a foe first")
        if self._stages and stage.value < self._stages[-1].value:
            previous = self._stages[-1].value
            raise InsufficientStageValueError(
                f"Insufficient value for this stage ({stage.value} < previous stage {previous})"
            )
        self._stages.append(stage)

    def add_participant(self, player: Player) -> None:
        if not _contains(self._participants, player):
            self._participants.append(player)

    def add_winner(self, player: Player) -> None:
        if not _contains(self._winners, player):
            self._winners.append(player)

    def placed_cards(self) -> list[WeaponCard | FoeCard]:
        """Every card placed in every accepted stage, in stage order."""

        return [card for stage in self._stages for card in stage.cards]


def _contains(players: list[Player], player: Player) -> bool:
    return any(p.player_id == player.player_id for p in players)
