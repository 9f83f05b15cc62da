"""
Request model for the Banker's Algorithm evaluator.

Represents a single resource request issued by one process.
"""

from dataclasses import dataclass, field
from typing import List


def parse_process_label(label: str) -> int:
    """
    Turn a process label such as "P2" or "p2" into its zero-based index.

    Args:
        label: Process label from the input

    Returns:
        Process index, or -1 if the label is not of the form P<int>
    """
    if not label or label[0] not in ("P", "p"):
        return -1
    try:
        return int(label[1:])
    except ValueError:
        return -1


@dataclass
class ResourceRequest:
    """
    A request for additional resource instances.

    Attributes:
        label: Process label as written in the input (used for reporting)
        amounts: Requested instances per resource type [R]
        pid: Process index derived from label (-1 if the label is malformed)
    """
    label: str
    amounts: List[int] = field(default_factory=list)
    pid: int = field(init=False)

    def __post_init__(self):
        """Derive the process index from the label."""
        self.pid = parse_process_label(self.label)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"ResourceRequest(label={self.label}, pid={self.pid}, amounts={self.amounts})"
