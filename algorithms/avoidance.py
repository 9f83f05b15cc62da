"""
Deadlock Avoidance Algorithm (Banker's Algorithm).

Safety check, request feasibility check, and tentative grant of a request
with commit or rollback.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from models.request import ResourceRequest
from models.system_state import SystemState


def is_safe_state(system_state: SystemState) -> Tuple[bool, Optional[List[int]]]:
    """
    Check if system is in a safe state using Banker's Algorithm.

    Algorithm:
    1. Initialize Work = Available, Finish = [False] * num_processes
    2. Scan unfinished processes in index order; for each i with Need[i] <= Work,
       set Finish[i] = True and Work += Allocation[i] immediately, so later
       processes in the same pass see the released resources
    3. Repeat passes until a full pass finishes no new process
    4. SAFE iff every process finished

    Does not modify system_state.

    Time Complexity: O(P²×R)

    Args:
        system_state: Current system state

    Returns:
        Tuple of (is_safe, safe_sequence if exists else None)

    References:
        Silberschatz, A., Galvin, P. B., & Gagne, G. (2018).
        Operating System Concepts (10th ed.). Chapter 7.5: Deadlock Avoidance.
    """
    work = system_state.available_vector.copy()
    finish = np.zeros(system_state.num_processes, dtype=bool)
    safe_sequence = []

    made_progress = True
    while made_progress:
        made_progress = False

        for i in range(system_state.num_processes):
            if finish[i]:
                continue

            if np.all(system_state.need_matrix[i] <= work):
                work += system_state.allocation_matrix[i]
                finish[i] = True
                safe_sequence.append(i)
                made_progress = True

    if finish.all():
        return True, safe_sequence
    return False, None


def verify_safe_sequence(system_state: SystemState, sequence: Sequence[int]) -> bool:
    """
    Replay a finishing order against the current state.

    Args:
        system_state: Current system state
        sequence: Process indices in proposed finishing order

    Returns:
        True if sequence names every process exactly once and each process's
        Need fits in Work at its turn
    """
    if sorted(sequence) != list(range(system_state.num_processes)):
        return False

    work = system_state.available_vector.copy()
    for pid in sequence:
        if not np.all(system_state.need_matrix[pid] <= work):
            return False
        work += system_state.allocation_matrix[pid]
    return True


def can_request(system_state: SystemState, pid: int, request: Sequence[int]) -> bool:
    """
    Feasibility pre-check: request <= Need[pid] and request <= Available.

    Equality is allowed in both bounds.

    Args:
        system_state: Current system state
        pid: Requesting process index
        request: Requested instances per resource type [R]

    Returns:
        False for an out-of-range pid, a request of the wrong length, or a
        request exceeding need or availability in any resource type
    """
    if not system_state.is_valid_pid(pid):
        return False
    if len(request) != system_state.num_resources:
        return False

    request = np.asarray(request, dtype=int)
    if np.any(request > system_state.need_matrix[pid]):
        return False
    if np.any(request > system_state.available_vector):
        return False
    return True


def apply_request(system_state: SystemState, pid: int, request: Sequence[int]) -> None:
    """
    Tentatively grant a request. Modifies allocation, available and need.

    Assumes can_request() already returned True; nothing is re-checked here.
    An out-of-range pid is ignored.

    Args:
        system_state: Current system state
        pid: Requesting process index
        request: Requested instances per resource type [R]
    """
    if not system_state.is_valid_pid(pid):
        return

    request = np.asarray(request, dtype=int)
    system_state.allocation_matrix[pid] += request
    system_state.available_vector -= request
    system_state.need_matrix[pid] = np.maximum(system_state.need_matrix[pid] - request, 0)


def revert_request(system_state: SystemState, pid: int, request: Sequence[int]) -> None:
    """
    Undo apply_request(): take the allocation back, return it to available,
    and recompute need.

    Args:
        system_state: Current system state
        pid: Process index the request was applied to
        request: The same request vector passed to apply_request()
    """
    if not system_state.is_valid_pid(pid):
        return

    request = np.asarray(request, dtype=int)
    system_state.allocation_matrix[pid] -= request
    system_state.available_vector += request
    system_state.compute_need()


@dataclass
class RequestOutcome:
    """
    Result of evaluating one request.

    Attributes:
        request: The evaluated request
        feasible: Request was within need and availability
        granted: Grant kept the system safe and was committed
        safe_sequence: Finishing order after the grant (None if unsafe or infeasible)
        need_after: Need matrix right after the tentative grant (None if infeasible)
        need_report: display_need() rendering of need_after (empty if infeasible)
        state_safe: State was safe before the request was looked at
        prior_sequence: Finishing order of the state before the request
        reason: Human-readable decision
    """
    request: ResourceRequest
    feasible: bool
    granted: bool
    safe_sequence: Optional[List[int]] = None
    need_after: Optional[np.ndarray] = field(default=None, repr=False)
    need_report: str = field(default="", repr=False)
    state_safe: bool = True
    prior_sequence: Optional[List[int]] = None
    reason: str = ""


def handle_request(
    system_state: SystemState,
    request: ResourceRequest,
    need_header: str = "New Need"
) -> RequestOutcome:
    """
    Handle resource request using Banker's Algorithm.

    Steps:
    1. Validate: request <= need and request <= available (otherwise rejected)
    2. Snapshot state and tentatively allocate resources
    3. Run safety algorithm on new state
    4. If safe: commit allocation
       If unsafe: restore the snapshot

    Args:
        system_state: Current system state
        request: Request to evaluate
        need_header: Header for the rendered post-grant Need matrix

    Returns:
        RequestOutcome describing the decision
    """
    if not can_request(system_state, request.pid, request.amounts):
        return RequestOutcome(
            request=request,
            feasible=False,
            granted=False,
            reason="Request exceeds need or available",
        )

    snapshot = system_state.snapshot()
    apply_request(system_state, request.pid, request.amounts)
    need_after = system_state.need_matrix.copy()
    need_report = system_state.display_need(need_header)

    is_safe, safe_seq = is_safe_state(system_state)

    if is_safe:
        seq_str = " -> ".join(f"P{pid}" for pid in safe_seq)
        return RequestOutcome(
            request=request,
            feasible=True,
            granted=True,
            safe_sequence=safe_seq,
            need_after=need_after,
            need_report=need_report,
            reason=f"GRANTED (Safe state maintained, sequence: {seq_str})",
        )

    system_state.restore(snapshot)
    return RequestOutcome(
        request=request,
        feasible=True,
        granted=False,
        need_after=need_after,
        need_report=need_report,
        reason="DENIED (Unsafe state detected) - grant rolled back",
    )


def evaluate_requests(
    system_state: SystemState,
    requests: List[ResourceRequest],
    need_header: str = "New Need"
) -> List[RequestOutcome]:
    """
    Evaluate queued requests one at a time, in order.

    Before each request the current state is checked for safety. An unsafe
    state ends the queue: its outcome has state_safe=False and no later
    request is looked at. Otherwise the request is committed or rolled back
    before the next one.

    Args:
        system_state: Current system state
        requests: Requests in arrival order
        need_header: Header for the rendered post-grant Need matrix

    Returns:
        One RequestOutcome per request looked at
    """
    outcomes = []

    for request in requests:
        is_safe, prior_seq = is_safe_state(system_state)
        if not is_safe:
            outcomes.append(RequestOutcome(
                request=request,
                feasible=False,
                granted=False,
                state_safe=False,
                reason="Current state is unsafe",
            ))
            break

        outcome = handle_request(system_state, request, need_header)
        outcome.prior_sequence = prior_seq
        outcomes.append(outcome)

    return outcomes
