from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


MAX_HAND_SIZE = 12


class WeaponType(StrEnum):
    dagger = "dagger"
    horse = "horse"
    sword = "sword"
    battle_axe = "battle_axe"
    lance = "lance"
    excalibur = "excalibur"


class EventEffect(StrEnum):
    plague = "plague"
    queens_favor = "queens_favor"
    prosperity = "prosperity"


class QuestPhase(StrEnum):
    sponsor_selection = "sponsor_selection"
    building = "building"
    participant_selection = "participant_selection"
    resolving_stage = "resolving_stage"
    completed = "completed"
    cleanup = "cleanup"
    done = "done"
    unsponsored = "unsponsored"
    build_failed = "build_failed"


class QuestOutcome(StrEnum):
    unsponsored = "unsponsored"
    build_failed = "build_failed"
    completed = "completed"


class _CardBase(BaseModel):
    # Cards are relocated between hands, piles and stages but never changed.
    model_config = ConfigDict(frozen=True)

    card_id: str
    name: str

    def __str__(self) -> str:
        return self.name


class WeaponCard(_CardBase):
    kind: Literal["weapon"] = "weapon"
    weapon_type: WeaponType
    value: int = Field(..., ge=0)

    def __str__(self) -> str:
        return f"{self.name} ({self.weapon_type.value}, {self.value})"


class FoeCard(_CardBase):
    kind: Literal["foe"] = "foe"
    value: int = Field(..., ge=0)

    def __str__(self) -> str:
        return f"{self.name} (foe, {self.value})"


class QuestCard(_CardBase):
    kind: Literal["quest"] = "quest"
    stages: int = Field(..., ge=1)

    def __str__(self) -> str:
        return f"{self.name} (quest, {self.stages} stages)"


class EventActionCard(_CardBase):
    kind: Literal["event"] = "event"
    effect: EventEffect

    def __str__(self) -> str:
        return f"{self.name} (event)"


# Adventure deck: what players hold in hand.
AdventureCard = Annotated[WeaponCard | FoeCard, Field(discriminator="kind")]

# Event deck: drawn once per turn.
EventDeckCard = Annotated[QuestCard | EventActionCard, Field(discriminator="kind")]

Card = Annotated[WeaponCard | FoeCard | QuestCard | EventActionCard, Field(discriminator="kind")]


class Player(BaseModel):
    player_id: str
    seat: int

    # Human-friendly name for prompts.
    display_name: str | None = None

    # Insertion order is the order shown to the player (choice 1..N).
    hand: list[AdventureCard] = Field(default_factory=list)
    shields: int = 0

    @property
    def label(self) -> str:
        return self.display_name or self.player_id

    def add_card_to_hand(self, card: WeaponCard | FoeCard) -> None:
        self.hand.append(card)

    def remove_card_from_hand(self, card: WeaponCard | FoeCard) -> None:
        for idx, held in enumerate(self.hand):
            if held.card_id == card.card_id:
                del self.hand[idx]
                return
        raise ValueError(f"Card {card.card_id} is not in {self.player_id}'s hand")

    def add_shields(self, n: int) -> None:
        self.shields += n

    def lose_shields(self, n: int, *, floor: int | None = 0) -> None:
        """Remove `n` shields. `floor=None` lets the count go negative."""

        self.shields -= n
        if floor is not None and self.shields < floor:
            self.shields = floor
