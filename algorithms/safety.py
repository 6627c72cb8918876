"""
Safety Algorithm (Banker's Algorithm) for the allocation core.

Decides whether an allocation state admits an ordering in which every
process can obtain its remaining need and finish.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import List, Optional

from models.allocation_state import AllocationState
from models.vectors import less_or_equal


@dataclass
class SafetyStep:
    """
    One observation of the safety algorithm, recorded only when tracing.

    Attributes:
        iteration: 0 for the initial step, then one per admission, then the verdict
        description: Why this step happened
        work: Copy of Work at this point
        finish: Copy of Finish at this point
        safe_sequence: Processes admitted so far
        process_index: Process admitted in this step (None for initial/verdict steps)
        is_safe: Verdict, set only on the final step
    """
    iteration: int
    description: str
    work: List[int]
    finish: List[bool]
    safe_sequence: List[int] = field(default_factory=list)
    process_index: Optional[int] = None
    is_safe: Optional[bool] = None


@dataclass
class SafetyResult:
    """
    Outcome of a safety check.

    safe_sequence is empty whenever is_safe is False; a partial ordering
    from a failed attempt is only visible through the trace steps.
    """
    is_safe: bool
    safe_sequence: List[int] = field(default_factory=list)
    steps: List[SafetyStep] = field(default_factory=list)


def check_safety(state: AllocationState, trace: bool = False) -> SafetyResult:
    """
    Check if the state is safe using Banker's safety algorithm.

    Algorithm:
    1. Initialize Work = Available, Finish = [False] * P
    2. Scan 0..P-1 for the first unfinished i with Need[i] <= Work
    3. If found: Work += Allocation[i], Finish[i] = True, append i, rescan from 0
    4. Stop when nothing is eligible; SAFE iff every process finished

    The rescan from index 0 after every admission is the tie-break: the
    lowest-index eligible process always wins. Do not turn it into a single
    continuous sweep, that returns different sequences for some inputs.

    Time Complexity: O(P²×R)

    Args:
        state: State satisfying Allocation <= Max and Need = Max - Allocation
        trace: Record a step-by-step trace (does not change the outcome)

    Returns:
        SafetyResult with the safe sequence (empty if unsafe) and optional steps
    """
    num_processes = state.num_processes
    need = state.need_matrix
    allocation = state.allocation_matrix

    work = state.available_vector.copy()
    finish = np.zeros(num_processes, dtype=bool)
    safe_sequence: List[int] = []
    steps: List[SafetyStep] = []

    if trace:
        steps.append(SafetyStep(
            iteration=0,
            description="Initialize Work = Available, Finish[i] = false",
            work=work.tolist(),
            finish=finish.tolist()
        ))

    found = True
    iteration = 0

    while found and len(safe_sequence) < num_processes:
        found = False
        iteration += 1

        for i in range(num_processes):
            if finish[i] or not less_or_equal(need[i], work):
                continue

            work += allocation[i]
            finish[i] = True
            safe_sequence.append(i)
            found = True

            if trace:
                steps.append(SafetyStep(
                    iteration=iteration,
                    description=f"Process P{i} can finish. Need[{i}] <= Work",
                    work=work.tolist(),
                    finish=finish.tolist(),
                    safe_sequence=list(safe_sequence),
                    process_index=i
                ))
            break  # Restart search from beginning for determinism

    is_safe = len(safe_sequence) == num_processes

    if trace:
        steps.append(SafetyStep(
            iteration=iteration + 1,
            description="System is in SAFE state" if is_safe else "System is in UNSAFE state",
            work=work.tolist(),
            finish=finish.tolist(),
            safe_sequence=list(safe_sequence),
            is_safe=is_safe
        ))

    return SafetyResult(
        is_safe=is_safe,
        safe_sequence=safe_sequence if is_safe else [],
        steps=steps
    )
