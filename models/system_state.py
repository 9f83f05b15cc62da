"""
System State model for the Banker's Algorithm evaluator.

Holds the Available vector and the Max, Allocation and Need matrices for a
fixed number of processes and resource types.
"""

import numpy as np
from typing import Dict, List, Sequence
from dataclasses import dataclass, field


class DimensionMismatchError(ValueError):
    """Raised when a vector or row does not match the resource count."""
    pass


class ProcessIndexError(IndexError):
    """Raised when a process index is outside [0, num_processes)."""
    pass


@dataclass
class SystemState:
    """
    Resource allocation state for Banker's Algorithm.

    Dimensions are fixed at construction; every matrix is [P][R] and the
    available vector is [R]. All structures start zero-filled.

    Attributes:
        num_processes: Number of processes (P)
        num_resources: Number of resource types (R)
        available_vector: [R] Free resource instances by type
        max_demand_matrix: [P][R] Maximum resource need declared by each process
        allocation_matrix: [P][R] Current resources held by each process
        need_matrix: [P][R] Computed as max(Max - Allocation, 0)
    """
    num_processes: int
    num_resources: int

    available_vector: np.ndarray = field(init=False, repr=False)
    max_demand_matrix: np.ndarray = field(init=False, repr=False)
    allocation_matrix: np.ndarray = field(init=False, repr=False)
    need_matrix: np.ndarray = field(init=False, repr=False)

    def __post_init__(self):
        """Allocate zero-filled matrices and vectors."""
        if self.num_processes < 0 or self.num_resources < 0:
            raise ValueError(
                f"Counts must be non-negative (processes={self.num_processes}, "
                f"resources={self.num_resources})"
            )
        shape = (self.num_processes, self.num_resources)
        self.available_vector = np.zeros(self.num_resources, dtype=int)
        self.max_demand_matrix = np.zeros(shape, dtype=int)
        self.allocation_matrix = np.zeros(shape, dtype=int)
        self.need_matrix = np.zeros(shape, dtype=int)

    def is_valid_pid(self, pid: int) -> bool:
        """True if pid indexes a process row."""
        return 0 <= pid < self.num_processes

    def _check_row(self, what: str, row: Sequence[int]) -> np.ndarray:
        if len(row) != self.num_resources:
            raise DimensionMismatchError(
                f"{what}: expected {self.num_resources} values, got {len(row)}"
            )
        return np.array(row, dtype=int)

    def _check_pid(self, what: str, pid: int) -> None:
        if not self.is_valid_pid(pid):
            raise ProcessIndexError(
                f"{what}: process index {pid} out of range "
                f"[0, {self.num_processes})"
            )

    def set_available(self, vector: Sequence[int]) -> None:
        """
        Replace the Available vector.

        Raises:
            DimensionMismatchError: If len(vector) != num_resources
        """
        self.available_vector = self._check_row("Available", vector)

    def set_max_row(self, pid: int, row: Sequence[int]) -> None:
        """
        Replace the Max row of process pid.

        Raises:
            ProcessIndexError: If pid is out of range
            DimensionMismatchError: If len(row) != num_resources
        """
        self._check_pid("Max", pid)
        self.max_demand_matrix[pid] = self._check_row(f"Max row P{pid}", row)

    def set_allocation_row(self, pid: int, row: Sequence[int]) -> None:
        """
        Replace the Allocation row of process pid.

        Raises:
            ProcessIndexError: If pid is out of range
            DimensionMismatchError: If len(row) != num_resources
        """
        self._check_pid("Allocation", pid)
        self.allocation_matrix[pid] = self._check_row(f"Allocation row P{pid}", row)

    def compute_need(self) -> None:
        """
        Recompute the Need matrix from Max and Allocation.
        Need[i][j] = max(Max[i][j] - Allocation[i][j], 0)
        """
        self.need_matrix = np.maximum(self.max_demand_matrix - self.allocation_matrix, 0)

    def snapshot(self) -> Dict:
        """
        Copy the mutable structures so a tentative grant can be undone.

        Returns:
            Dictionary with copies of available, allocation and need
        """
        return {
            'available_vector': self.available_vector.copy(),
            'allocation_matrix': self.allocation_matrix.copy(),
            'need_matrix': self.need_matrix.copy(),
        }

    def restore(self, snapshot: Dict) -> None:
        """
        Restore state from a previous snapshot().

        Args:
            snapshot: State dictionary from snapshot()
        """
        self.available_vector = snapshot['available_vector'].copy()
        self.allocation_matrix = snapshot['allocation_matrix'].copy()
        self.need_matrix = snapshot['need_matrix'].copy()

    @staticmethod
    def format_rows(matrix: np.ndarray) -> List[str]:
        return [" ".join(str(value) for value in row) for row in matrix]

    def display(self) -> str:
        """
        Render all four structures as text.

        Returns:
            Header line followed by Available, Max, Allocation and Need blocks
        """
        output = [f"Resources: {self.num_resources}, Processes: {self.num_processes}"]
        output.append("Available")
        output.append(" ".join(str(value) for value in self.available_vector))
        output.append("Max")
        output.extend(self.format_rows(self.max_demand_matrix))
        output.append("Allocation")
        output.extend(self.format_rows(self.allocation_matrix))
        output.append("Need")
        output.extend(self.format_rows(self.need_matrix))
        return "\n".join(output)

    def display_need(self, header: str) -> str:
        """Render the Need matrix under a caller-supplied header."""
        return "\n".join([header] + self.format_rows(self.need_matrix))

    def assert_non_negative(self, context=""):
        """Verify Available and Allocation hold no negative entries.

        Args:
            context: Description of when this check is being run (for error messages)

        Raises:
            AssertionError: If any entry is negative
        """
        for r_idx in range(self.num_resources):
            available = self.available_vector[r_idx]
            assert available >= 0, (
                f"Negative available resources for R{r_idx} {context}\n"
                f"  Available: {available}"
            )

        negative = np.argwhere(self.allocation_matrix < 0)
        assert len(negative) == 0, (
            f"Negative allocation {context}: "
            + ", ".join(f"P{i} R{j}" for i, j in negative)
        )
