from __future__ import annotations

import pytest
from statemachine.exceptions import TransitionNotAllowed

from quests.fsm import QuestFSM
from quests.models import QuestPhase


def test_happy_path_walks_every_phase() -> None:
    fsm = QuestFSM()
    assert fsm.phase == QuestPhase.sponsor_selection

    fsm.sponsor_found()
    assert fsm.phase == QuestPhase.building
    fsm.stages_built()
    fsm.participants_joined()
    assert fsm.phase == QuestPhase.resolving_stage
    fsm.next_stage()
    fsm.next_stage()
    assert fsm.phase == QuestPhase.resolving_stage
    fsm.stages_finished()
    assert fsm.phase == QuestPhase.completed
    fsm.clean_up()
    fsm.finish()
    assert fsm.phase == QuestPhase.done


@pytest.mark.parametrize(
    ("steps", "terminal"),
    [
        (["no_sponsor"], QuestPhase.unsponsored),
        (["sponsor_found", "build_abandoned"], QuestPhase.build_failed),
    ],
)
def test_short_circuits_end_in_done(steps: list[str], terminal: QuestPhase) -> None:
    fsm = QuestFSM()
    for step in steps:
        getattr(fsm, step)()
    assert fsm.phase == terminal

    fsm.finish()
    assert fsm.phase == QuestPhase.done


def test_nobody_joined_goes_to_completed() -> None:
    fsm = QuestFSM()
    fsm.sponsor_found()
    fsm.stages_built()
    fsm.nobody_joined()
    assert fsm.phase == QuestPhase.completed


def test_out_of_order_events_are_rejected() -> None:
    fsm = QuestFSM()
    with pytest.raises(TransitionNotAllowed):
        fsm.participants_joined()

    fsm.no_sponsor()
    with pytest.raises(TransitionNotAllowed):
        fsm.clean_up()
