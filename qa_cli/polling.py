"""State machine for bounded polling of a submitted job.

The transition function is pure: it decides what the poll loop does next
from the attempt count and whether the last poll returned a payload. The
loop itself (network call and sleep) lives with the report source.
"""

from dataclasses import dataclass, replace
from enum import StrEnum


class PollPhase(StrEnum):
    """Where a poll run stands."""

    POLLING = "polling"
    COMPLETED = "completed"
    TIMED_OUT = "timed_out"


class PollEvent(StrEnum):
    """Outcome of one poll attempt."""

    READY = "ready"
    PENDING = "pending"


class PollEffect(StrEnum):
    """What the loop must do after a transition."""

    DELIVER = "deliver"
    WAIT = "wait"
    GIVE_UP = "give_up"


@dataclass(frozen=True, kw_only=True)
class PollState:
    """Attempt counter of a poll run.

    ``attempt`` is the number of the attempt currently in flight, starting at 1.
    """

    max_attempts: int
    attempt: int = 1
    phase: PollPhase = PollPhase.POLLING

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")


def advance(state: PollState, event: PollEvent) -> tuple[PollState, PollEffect]:
    """Apply the outcome of the current attempt.

    Raises:
        ValueError: If the state is already terminal

    """
    if state.phase is not PollPhase.POLLING:
        raise ValueError(f"Poll run already {state.phase}")

    if event is PollEvent.READY:
        return replace(state, phase=PollPhase.COMPLETED), PollEffect.DELIVER

    if state.attempt >= state.max_attempts:
        return replace(state, phase=PollPhase.TIMED_OUT), PollEffect.GIVE_UP

    return replace(state, attempt=state.attempt + 1), PollEffect.WAIT
