from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from quests.models import FoeCard, Player, WeaponCard


@dataclass(frozen=True, slots=True)
class SelectionContext:
    """A single hand selection to validate.

    `choice` is the raw answer from the view: 0 is the "done" sentinel, 1..N picks
    the Nth card of the player's hand. `committed_ids` holds card ids that are
    already spoken for (placed in a stage of the current quest).
    """

    player: Player
    choice: int
    action: str
    committed_ids: frozenset[str] = field(default_factory=frozenset)

    @property
    def card(self) -> WeaponCard | FoeCard:
        return self.player.hand[self.choice - 1]


class SelectionValidator(ABC):
    """A small, composable validation unit for a hand selection."""

    @abstractmethod
    def validate(self, *, ctx: SelectionContext) -> None:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class MandatoryChoiceValidator(SelectionValidator):
    """Deny the 0 sentinel where picking a card is compulsory."""

    message: str = "You must choose a card"

    def validate(self, *, ctx: SelectionContext) -> None:
        if ctx.choice == 0:
            raise ValueError(self.message)


@dataclass(frozen=True, slots=True)
class ChoiceRangeValidator(SelectionValidator):
    def validate(self, *, ctx: SelectionContext) -> None:
        size = len(ctx.player.hand)
        if not 1 <= ctx.choice <= size:
            if size == 0:
                raise ValueError("Invalid card selection: hand is empty")
            raise ValueError(f"Invalid card selection: choose a card between 1 and {size}")


@dataclass(frozen=True, slots=True)
class CardKindValidator(SelectionValidator):
    """Validate that the selected card is of an allowed kind (weapon, foe, ...)."""

    allowed_kinds: frozenset[str]
    message: str

    def validate(self, *, ctx: SelectionContext) -> None:
        if ctx.card.kind not in self.allowed_kinds:
            raise ValueError(self.message)


@dataclass(frozen=True, slots=True)
class UncommittedCardValidator(SelectionValidator):
    """A card placed in one stage of a quest cannot be placed again."""

    def validate(self, *, ctx: SelectionContext) -> None:
        if ctx.card.card_id in ctx.committed_ids:
            raise ValueError(f"{ctx.card.name} is already placed in this quest")


@dataclass(frozen=True, slots=True)
class SelectionPipeline:
    validators: tuple[SelectionValidator, ...]

    def validate(self, *, ctx: SelectionContext) -> None:
        for v in self.validators:
            v.validate(ctx=ctx)

    def select(self, *, ctx: SelectionContext) -> WeaponCard | FoeCard:
        """Validate, then return the selected hand card."""

        self.validate(ctx=ctx)
        return ctx.card


DEFAULT_SELECTION_PIPELINES: dict[str, SelectionPipeline] = {
    "build_stage": SelectionPipeline(
        validators=(
            ChoiceRangeValidator(),
            CardKindValidator(
                allowed_kinds=frozenset({"foe", "weapon"}),
                message="Only foe and weapon cards can be placed in a stage",
            ),
            UncommittedCardValidator(),
        )
    ),
    "attack": SelectionPipeline(
        validators=(
            ChoiceRangeValidator(),
            CardKindValidator(
                allowed_kinds=frozenset({"weapon"}),
                message="Only weapon cards can be used in attacks",
            ),
        )
    ),
    "trim": SelectionPipeline(
        validators=(
            MandatoryChoiceValidator(message="You must choose a card to discard"),
            ChoiceRangeValidator(),
        )
    ),
}


def pipeline_for_action(action: str) -> SelectionPipeline:
    pipe = DEFAULT_SELECTION_PIPELINES.get(action)
    if pipe is None:
        raise ValueError(f"Unknown action: {action}")
    return pipe
