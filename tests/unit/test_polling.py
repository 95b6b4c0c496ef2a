"""Tests for the poll state machine."""

import pytest

from qa_cli.polling import PollEffect, PollEvent, PollPhase, PollState, advance


def test_ready_delivers_immediately() -> None:
    """A payload on any attempt completes the run."""
    state, effect = advance(PollState(max_attempts=10), PollEvent.READY)

    assert effect is PollEffect.DELIVER
    assert state.phase is PollPhase.COMPLETED
    assert state.attempt == 1


def test_pending_below_ceiling_waits_and_counts() -> None:
    """A missing payload before the ceiling schedules another attempt."""
    state, effect = advance(PollState(max_attempts=3), PollEvent.PENDING)

    assert effect is PollEffect.WAIT
    assert state.phase is PollPhase.POLLING
    assert state.attempt == 2


def test_pending_at_ceiling_gives_up() -> None:
    """A missing payload on the last attempt times out without waiting."""
    state, effect = advance(
        PollState(max_attempts=3, attempt=3), PollEvent.PENDING
    )

    assert effect is PollEffect.GIVE_UP
    assert state.phase is PollPhase.TIMED_OUT
    assert state.attempt == 3


def test_ready_on_last_attempt_still_delivers() -> None:
    """The ceiling only applies when the last attempt has no payload."""
    _, effect = advance(PollState(max_attempts=2, attempt=2), PollEvent.READY)

    assert effect is PollEffect.DELIVER


@pytest.mark.parametrize("max_attempts", [1, 3, 10])
def test_sequence_of_pending_waits_max_minus_one_times(max_attempts: int) -> None:
    """A never-ready job waits between attempts, never after the last."""
    state = PollState(max_attempts=max_attempts)
    effects: list[PollEffect] = []

    while state.phase is PollPhase.POLLING:
        state, effect = advance(state, PollEvent.PENDING)
        effects.append(effect)

    assert effects == [PollEffect.WAIT] * (max_attempts - 1) + [PollEffect.GIVE_UP]


def test_terminal_state_rejects_events() -> None:
    """No state is re-entered once the run is over."""
    state, _ = advance(PollState(max_attempts=1), PollEvent.READY)

    with pytest.raises(ValueError, match="already completed"):
        advance(state, PollEvent.PENDING)


def test_requires_at_least_one_attempt() -> None:
    """A run with no attempts is meaningless."""
    with pytest.raises(ValueError, match="at least 1"):
        PollState(max_attempts=0)
