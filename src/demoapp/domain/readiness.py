"""
Readiness state of the service.
"""

from enum import IntEnum


class ReadinessState(IntEnum):
    """
    Lifecycle phase used to gate external traffic.

    NOT_READY -> READY -> STOPPING, or NOT_READY -> STOPPING.
    """

    NOT_READY = 0
    READY = 1
    STOPPING = 2

    def can_transition_to(self, target: "ReadinessState") -> bool:
        """
        Check whether moving to ``target`` is a valid transition.

        Args:
            target: Requested state

        Returns:
            True if the transition is allowed
        """
        return target in _TRANSITIONS[self]


_TRANSITIONS = {
    ReadinessState.NOT_READY: frozenset(
        {ReadinessState.READY, ReadinessState.STOPPING}
    ),
    ReadinessState.READY: frozenset({ReadinessState.STOPPING}),
    ReadinessState.STOPPING: frozenset(),
}
