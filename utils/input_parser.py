"""
Input Reader for the Banker's Algorithm evaluator.

Parses the whitespace-delimited token format:

    R <resources>
    P <processes>
    Available <R ints>
    Max <P rows of R ints>
    Allocation <P rows of R ints>
    [<label> <R ints>] ...
"""

from typing import Iterator, List, Optional, Tuple

from models.request import ResourceRequest
from models.system_state import SystemState


class InputParseError(Exception):
    """Exception raised when the input stream is malformed."""
    pass


class _TokenStream:
    """Sequential reader over whitespace-separated tokens."""

    def __init__(self, text: str):
        self._tokens: Iterator[str] = iter(text.split())

    def next(self, expecting: str) -> str:
        token = next(self._tokens, None)
        if token is None:
            raise InputParseError(f"Unexpected EOF reading {expecting}")
        return token

    def next_or_none(self) -> Optional[str]:
        """Return the next token, or None at end of input."""
        return next(self._tokens, None)

    def next_int(self, expecting: str) -> int:
        token = self.next(expecting)
        try:
            return int(token)
        except ValueError:
            raise InputParseError(f"Expected integer for {expecting} but found '{token}'")

    def next_ints(self, count: int, expecting: str) -> List[int]:
        return [self.next_int(expecting) for _ in range(count)]

    def next_amounts(self, count: int, expecting: str) -> List[int]:
        """Read count integers, none of which may be negative."""
        values = self.next_ints(count, expecting)
        for value in values:
            if value < 0:
                raise InputParseError(f"Negative value {value} in {expecting}")
        return values

    def expect(self, *keywords: str) -> None:
        token = self.next(keywords[0])
        if token not in keywords:
            raise InputParseError(f"Expected '{keywords[0]}' but found '{token}'")


def parse_input(text: str) -> Tuple[Optional[SystemState], List[ResourceRequest]]:
    """
    Parse evaluator input.

    Args:
        text: Full input text

    Returns:
        Tuple of (SystemState, requests)
        - SystemState: Populated state with Need computed, or None for empty input
        - requests: Requests in input order (usually zero or one)

    Raises:
        InputParseError: If keywords are missing or out of order, a value is
            not an integer, a matrix, vector or request entry is negative,
            or input ends early
    """
    tokens = _TokenStream(text)

    first = tokens.next_or_none()
    if first is None:
        return None, []
    if first not in ("R", "r"):
        raise InputParseError("Expected 'R' at start")
    num_resources = tokens.next_int("R")

    tokens.expect("P")
    num_processes = tokens.next_int("P")

    if num_resources < 0 or num_processes < 0:
        raise InputParseError(
            f"Counts must be non-negative (R={num_resources}, P={num_processes})"
        )

    system_state = SystemState(num_processes=num_processes, num_resources=num_resources)

    tokens.expect("Available")
    system_state.set_available(tokens.next_amounts(num_resources, "Available"))

    tokens.expect("Max")
    for pid in range(num_processes):
        system_state.set_max_row(pid, tokens.next_amounts(num_resources, f"Max row P{pid}"))

    tokens.expect("Allocation")
    for pid in range(num_processes):
        system_state.set_allocation_row(pid, tokens.next_amounts(num_resources, f"Allocation row P{pid}"))

    requests = _parse_requests(tokens, num_resources)

    system_state.compute_need()
    return system_state, requests


def _parse_requests(tokens: _TokenStream, num_resources: int) -> List[ResourceRequest]:
    """
    Read trailing request groups until end of input.

    Args:
        tokens: Token stream positioned after the Allocation block
        num_resources: Number of values per request

    Returns:
        List of ResourceRequest objects
    """
    requests = []

    label = tokens.next_or_none()
    while label is not None:
        amounts = tokens.next_amounts(num_resources, f"request of {label}")
        requests.append(ResourceRequest(label=label, amounts=amounts))
        label = tokens.next_or_none()

    return requests


def load_input(file_path: str) -> Tuple[Optional[SystemState], List[ResourceRequest]]:
    """
    Load evaluator input from a file.

    Args:
        file_path: Path to input file

    Returns:
        Same as parse_input()

    Raises:
        InputParseError: If file cannot be read or is invalid
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            text = f.read()
    except FileNotFoundError:
        raise InputParseError(f"Input file not found: {file_path}")
    except OSError as e:
        raise InputParseError(f"Cannot read input file {file_path}: {e}")

    return parse_input(text)
