"""
Allocation State model for the Banker's Algorithm.

Owns the four structures the safety and request algorithms reason about:
Available [R], Max [P][R], Allocation [P][R] and the derived Need [P][R].
"""

import numpy as np
from typing import Sequence
from dataclasses import dataclass, field

from models.errors import (
    DimensionMismatchError,
    IndexOutOfRangeError,
    InvalidDimensionError,
)
from models.vectors import add, subtract, to_vector


def _empty_vector() -> np.ndarray:
    return np.zeros(0, dtype=int)


def _empty_matrix() -> np.ndarray:
    return np.zeros((0, 0), dtype=int)


def _is_int(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


@dataclass(eq=False)
class AllocationState:
    """
    Allocation state for a fixed set of processes and resource types.

    Attributes:
        num_processes: Number of processes (P)
        num_resources: Number of resource types (R)
        available_vector: [R] Units of each resource currently unassigned
        max_demand_matrix: [P][R] Declared maximum claim of each process
        allocation_matrix: [P][R] Units currently held by each process
        need_matrix: [P][R] Derived as Max - Allocation, never set directly

    Allocation <= Max is not enforced on row edits, so an interactive editor
    may pass through transient violations. The safety checker and request
    evaluator assume it holds.
    """
    num_processes: int = 0
    num_resources: int = 0

    _available_vector: np.ndarray = field(default_factory=_empty_vector, init=False, repr=False)
    _max_demand_matrix: np.ndarray = field(default_factory=_empty_matrix, init=False, repr=False)
    _allocation_matrix: np.ndarray = field(default_factory=_empty_matrix, init=False, repr=False)
    _need_matrix: np.ndarray = field(default_factory=_empty_matrix, init=False, repr=False)

    def __post_init__(self):
        self.initialize(self.num_processes, self.num_resources)

    @property
    def available_vector(self) -> np.ndarray:
        """Get available resources vector [R]."""
        return self._available_vector

    @property
    def max_demand_matrix(self) -> np.ndarray:
        """Get max demand matrix [P][R]."""
        return self._max_demand_matrix

    @property
    def allocation_matrix(self) -> np.ndarray:
        """Get allocation matrix [P][R]."""
        return self._allocation_matrix

    @property
    def need_matrix(self) -> np.ndarray:
        """
        Get need matrix [P][R].
        Kept in sync as: Need = Max - Allocation
        """
        return self._need_matrix

    def initialize(self, num_processes: int, num_resources: int) -> None:
        """
        Reset all structures to zero-filled P x R (Available to length R).

        Raises:
            InvalidDimensionError: If either count is missing, non-integer or negative
        """
        for label, value in (("process count", num_processes), ("resource count", num_resources)):
            if value is None or not _is_int(value):
                raise InvalidDimensionError(f"Invalid {label}: {value!r}")
            if value < 0:
                raise InvalidDimensionError(f"Invalid {label}: {value} (must be >= 0)")

        self.num_processes = int(num_processes)
        self.num_resources = int(num_resources)
        shape = (self.num_processes, self.num_resources)
        self._available_vector = np.zeros(self.num_resources, dtype=int)
        self._max_demand_matrix = np.zeros(shape, dtype=int)
        self._allocation_matrix = np.zeros(shape, dtype=int)
        self._need_matrix = np.zeros(shape, dtype=int)

    def check_process_index(self, process_index: int) -> int:
        if not _is_int(process_index) or not 0 <= process_index < self.num_processes:
            raise IndexOutOfRangeError(
                f"Process index {process_index!r} out of range [0, {self.num_processes})"
            )
        return int(process_index)

    def set_available(self, values: Sequence[int]) -> None:
        """Replace the Available vector."""
        self._available_vector = to_vector(values, self.num_resources, "available")

    def set_max_row(self, process_index: int, values: Sequence[int]) -> None:
        """Replace Max[i] and recompute Need[i]."""
        i = self.check_process_index(process_index)
        self._max_demand_matrix[i] = to_vector(values, self.num_resources, f"max[{i}]")
        self.recompute_need(i)

    def set_allocation_row(self, process_index: int, values: Sequence[int]) -> None:
        """Replace Allocation[i] and recompute Need[i]."""
        i = self.check_process_index(process_index)
        self._allocation_matrix[i] = to_vector(values, self.num_resources, f"allocation[{i}]")
        self.recompute_need(i)

    def recompute_need(self, process_index: int) -> None:
        """Re-derive Need[i] from Max[i] and Allocation[i]."""
        i = self.check_process_index(process_index)
        self._need_matrix[i] = self._max_demand_matrix[i] - self._allocation_matrix[i]

    def recompute_all_needs(self) -> None:
        """Re-derive the whole Need matrix."""
        self._need_matrix = self._max_demand_matrix - self._allocation_matrix

    def load(
        self,
        num_processes: int,
        num_resources: int,
        available: Sequence[int],
        max_demand: Sequence[Sequence[int]],
        allocation: Sequence[Sequence[int]]
    ) -> None:
        """
        Bulk replacement (preset load, import).

        The replacement is built and validated in a separate state and only
        then swapped in, so on any failure this state keeps its previous contents.

        Raises:
            InvalidDimensionError: If dimensions are invalid
            DimensionMismatchError: If row counts or vector lengths disagree with P, R
            ValueError: If entries are non-integer or negative
        """
        replacement = AllocationState(num_processes, num_resources)
        try:
            if len(max_demand) != replacement.num_processes:
                raise DimensionMismatchError(
                    f"max: expected {replacement.num_processes} rows, got {len(max_demand)}"
                )
            if len(allocation) != replacement.num_processes:
                raise DimensionMismatchError(
                    f"allocation: expected {replacement.num_processes} rows, got {len(allocation)}"
                )
        except TypeError as e:
            raise DimensionMismatchError(f"max/allocation must be sequences of rows ({e})")

        replacement.set_available(available)
        for i in range(replacement.num_processes):
            replacement.set_max_row(i, max_demand[i])
            replacement.set_allocation_row(i, allocation[i])
        replacement.recompute_all_needs()

        self.restore(replacement)

    def allocate(self, process_index: int, request: Sequence[int]) -> None:
        """
        Apply a request in place: Available -= request, Allocation[i] += request,
        Need[i] -= request.

        Only index and shape are checked. Callers must already have proven
        request <= Need[i] and request <= Available.
        """
        i = self.check_process_index(process_index)
        request = to_vector(request, self.num_resources, "request")
        self._available_vector = subtract(self._available_vector, request)
        self._allocation_matrix[i] = add(self._allocation_matrix[i], request)
        self._need_matrix[i] = subtract(self._need_matrix[i], request)

    def snapshot(self) -> "AllocationState":
        """
        Create an independent deep copy of this state.

        Returns:
            New AllocationState sharing no storage with this one
        """
        clone = AllocationState()
        clone.num_processes = self.num_processes
        clone.num_resources = self.num_resources
        clone._available_vector = self._available_vector.copy()
        clone._max_demand_matrix = self._max_demand_matrix.copy()
        clone._allocation_matrix = self._allocation_matrix.copy()
        clone._need_matrix = self._need_matrix.copy()
        return clone

    def restore(self, snapshot: "AllocationState") -> None:
        """
        Replace this state with a copy of a previous snapshot (undo).

        Args:
            snapshot: State from a previous snapshot()
        """
        self.num_processes = snapshot.num_processes
        self.num_resources = snapshot.num_resources
        self._available_vector = snapshot._available_vector.copy()
        self._max_demand_matrix = snapshot._max_demand_matrix.copy()
        self._allocation_matrix = snapshot._allocation_matrix.copy()
        self._need_matrix = snapshot._need_matrix.copy()

    def matches(self, other: "AllocationState") -> bool:
        """True if both states have the same dimensions and identical matrices."""
        return (
            self.num_processes == other.num_processes
            and self.num_resources == other.num_resources
            and np.array_equal(self._available_vector, other._available_vector)
            and np.array_equal(self._max_demand_matrix, other._max_demand_matrix)
            and np.array_equal(self._allocation_matrix, other._allocation_matrix)
            and np.array_equal(self._need_matrix, other._need_matrix)
        )

    def total_supply(self) -> np.ndarray:
        """Total units per resource: allocated to any process plus available."""
        return self._allocation_matrix.sum(axis=0) + self._available_vector

    def assert_resource_conservation(self, expected_supply: Sequence[int], context: str = "") -> None:
        """Verify resource conservation: allocated + available = total for all resources.

        Args:
            expected_supply: Total supply per resource before the mutation
            context: Description of when this check is being run (for error messages)

        Raises:
            AssertionError: If resource conservation is violated
        """
        supply = self.total_supply()

        for r_idx in range(self.num_resources):
            allocated = self._allocation_matrix[:, r_idx].sum()
            available = self._available_vector[r_idx]
            total = expected_supply[r_idx]

            assert supply[r_idx] == total, (
                f"Resource conservation violated for R{r_idx} {context}\n"
                f"  Allocated: {allocated}, Available: {available}, Total: {total}\n"
                f"  Allocated + Available = {supply[r_idx]} != {total}"
            )

            assert available >= 0, (
                f"Negative available resources for R{r_idx} {context}\n"
                f"  Available: {available}"
            )
