from __future__ import annotations

from statemachine import State, StateMachine

from quests.models import QuestPhase


class QuestFSM(StateMachine):
    """Lifecycle of a single quest, from sponsorship to cleanup.

    The engine does the work; the FSM only guards the order of the steps:
    sponsor selection -> building -> participant selection -> stage resolution
    (one `next_stage` per extra stage) -> completed -> cleanup -> done.
    Unsponsored and failed builds short-circuit to done.
    """

    sponsor_selection = State(
        QuestPhase.sponsor_selection.value,
        value=QuestPhase.sponsor_selection.value,
        initial=True,
    )
    building = State(QuestPhase.building.value, value=QuestPhase.building.value)
    participant_selection = State(
        QuestPhase.participant_selection.value,
        value=QuestPhase.participant_selection.value,
    )
    resolving_stage = State(QuestPhase.resolving_stage.value, value=QuestPhase.resolving_stage.value)
    completed = State(QuestPhase.completed.value, value=QuestPhase.completed.value)
    cleanup = State(QuestPhase.cleanup.value, value=QuestPhase.cleanup.value)
    unsponsored = State(QuestPhase.unsponsored.value, value=QuestPhase.unsponsored.value)
    build_failed = State(QuestPhase.build_failed.value, value=QuestPhase.build_failed.value)
    done = State(QuestPhase.done.value, value=QuestPhase.done.value, final=True)

    sponsor_found = sponsor_selection.to(building)
    no_sponsor = sponsor_selection.to(unsponsored)
    stages_built = building.to(participant_selection)
    build_abandoned = building.to(build_failed)
    participants_joined = participant_selection.to(resolving_stage)
    nobody_joined = participant_selection.to(completed)
    next_stage = resolving_stage.to.itself()
    stages_finished = resolving_stage.to(completed)
    clean_up = completed.to(cleanup)
    finish = cleanup.to(done) | unsponsored.to(done) | build_failed.to(done)

    @property
    def phase(self) -> QuestPhase:
        return QuestPhase(str(self.current_state.value))
