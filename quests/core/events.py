from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Literal

EventType = Literal[
    "TURN_STARTED",
    "EVENT_CARD_DRAWN",
    "EVENT_RESOLVED",
    "QUEST_SPONSORED",
    "QUEST_UNSPONSORED",
    "STAGE_BUILT",
    "QUEST_BUILD_FAILED",
    "PARTICIPANT_JOINED",
    "STAGE_STARTED",
    "PARTICIPANT_SURVIVED",
    "PARTICIPANT_ELIMINATED",
    "SHIELDS_AWARDED",
    "SPONSOR_REDREW",
    "TURN_ENDED",
]


@dataclass(frozen=True, slots=True)
class GameEvent:
    type: EventType
    turn_id: int
    payload: dict[str, Any]
    ts: datetime

    @staticmethod
    def now(*, type: EventType, turn_id: int, payload: dict[str, Any]) -> "GameEvent":
        return GameEvent(type=type, turn_id=turn_id, payload=payload, ts=datetime.now(timezone.utc))
