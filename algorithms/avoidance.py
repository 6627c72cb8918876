"""
Deadlock Avoidance (Banker's resource-request algorithm).

Evaluates a resource request against a snapshot of the live state and,
as a separate explicit step, commits an approved request.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence

from models.allocation_state import AllocationState
from models.vectors import less_or_equal, to_vector
from algorithms.safety import check_safety


class RequestReason(Enum):
    """Reason codes reported with every request outcome."""
    REQUEST_EXCEEDS = "request_exceeds"
    INSUFFICIENT_RESOURCES = "insufficient_resources"
    SAFE = "safe"
    UNSAFE = "unsafe"


_MESSAGES = {
    RequestReason.REQUEST_EXCEEDS: "Request exceeds maximum claim (Need)",
    RequestReason.INSUFFICIENT_RESOURCES: "Insufficient resources available",
    RequestReason.SAFE: "Request approved - system remains safe",
    RequestReason.UNSAFE: "Request denied - would lead to unsafe state",
}


@dataclass
class RequestOutcome:
    """
    Result of evaluating a request.

    Attributes:
        approved: True only when the request keeps the system safe
        reason: Why the request was approved or denied
        safe_sequence: Safe sequence of the post-grant state (empty unless approved)
    """
    approved: bool
    reason: RequestReason
    safe_sequence: List[int] = field(default_factory=list)

    @property
    def message(self) -> str:
        """Human-readable description of the reason."""
        return _MESSAGES[self.reason]


def evaluate_request(
    state: AllocationState,
    process_index: int,
    request: Sequence[int]
) -> RequestOutcome:
    """
    Evaluate a resource request using Banker's Algorithm.

    Steps:
    1. Validate process index and request length
    2. Check: request <= Need[i] (otherwise request_exceeds)
    3. Check: request <= Available (otherwise insufficient_resources)
    4. Tentatively allocate on a snapshot
    5. Run safety algorithm on the snapshot: safe -> approved, unsafe -> denied

    The live state is never touched; an approved outcome is not applied
    until commit_request() is called.

    Args:
        state: Live allocation state
        process_index: Requesting process
        request: Units requested per resource type

    Returns:
        RequestOutcome

    Raises:
        IndexOutOfRangeError: If process_index is outside [0, P)
        DimensionMismatchError: If len(request) != R
        ValueError: If request entries are non-integer or negative
    """
    i = state.check_process_index(process_index)
    request = to_vector(request, state.num_resources, "request")

    if not less_or_equal(request, state.need_matrix[i]):
        return RequestOutcome(approved=False, reason=RequestReason.REQUEST_EXCEEDS)

    if not less_or_equal(request, state.available_vector):
        return RequestOutcome(approved=False, reason=RequestReason.INSUFFICIENT_RESOURCES)

    # Tentative allocation on an independent copy; nothing to roll back on denial
    trial = state.snapshot()
    trial.allocate(i, request)

    safety = check_safety(trial)

    if safety.is_safe:
        return RequestOutcome(
            approved=True,
            reason=RequestReason.SAFE,
            safe_sequence=safety.safe_sequence
        )
    return RequestOutcome(approved=False, reason=RequestReason.UNSAFE)


def commit_request(
    state: AllocationState,
    process_index: int,
    request: Sequence[int]
) -> RequestOutcome:
    """
    Evaluate a request and, if approved, apply it to the live state.

    A denied request leaves the state untouched and is returned as a
    normal negative outcome.

    Returns:
        The RequestOutcome from evaluate_request()
    """
    outcome = evaluate_request(state, process_index, request)
    if not outcome.approved:
        return outcome

    supply = state.total_supply()
    state.allocate(process_index, request)

    # SANITY CHECK: Verify resource conservation after commit
    state.assert_resource_conservation(supply, f"after committing {list(request)} to P{process_index}")

    return outcome
