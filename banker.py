#!/usr/bin/env python3
"""
Banker's Algorithm Evaluator
Main entry point.

Reads a resource-allocation state (and optional requests), reports whether
the state is safe, and simulates granting each request.
"""

import argparse
import sys
from typing import List, Optional, Tuple

from models.request import ResourceRequest
from models.system_state import SystemState
from utils.input_parser import load_input, parse_input, InputParseError
from utils.logger import BankerLogger
from algorithms.avoidance import evaluate_requests, is_safe_state
from analysis.events import EventLog, EvaluationEvent, EventType


def run_evaluation(
    input_path: Optional[str],
    verbose: bool = False,
    show_state: bool = False,
    log_file: Optional[str] = None
) -> Tuple[EventLog, int]:
    """
    Run the safety check and evaluate each request.

    Per request, in input order:
    1. Check the current state is safe (stop if not)
    2. Reject the request if it exceeds need or available
    3. Tentatively grant it and print the new Need matrix
    4. Keep the grant if the new state is safe, otherwise roll it back

    Args:
        input_path: Path to input file, or None to read stdin
        verbose: Enable debug logging (safe sequences, state dumps, event log)
        show_state: Print the full state before evaluating
        log_file: Optional file to mirror output into

    Returns:
        Tuple of (EventLog, exit status)
    """
    event_log = EventLog()

    try:
        logger = BankerLogger(verbose=verbose, log_file=log_file)
    except OSError as e:
        BankerLogger().log(f"Cannot open log file {log_file}: {e}", "error")
        return event_log, 1

    try:
        try:
            if input_path is None:
                system_state, requests = parse_input(sys.stdin.read())
            else:
                system_state, requests = load_input(input_path)
        except InputParseError as e:
            logger.log(str(e), "error")
            return event_log, 1

        if system_state is None:
            return event_log, 0

        if show_state:
            logger.log(system_state.display())
        else:
            logger.log_state(system_state.display())

        if not requests:
            _report_safety(system_state, logger, event_log)
        else:
            _report_requests(system_state, requests, logger, event_log)

        if verbose:
            system_state.assert_non_negative("after evaluation")
            logger.log_state(system_state.display())
            logger.log(f"Event Log:\n{event_log.display()}", "debug")

        return event_log, 0
    finally:
        logger.close()


def _report_safety(system_state: SystemState, logger: BankerLogger, event_log: EventLog) -> None:
    """Report whether the state is safe when no request is given."""
    is_safe, safe_seq = is_safe_state(system_state)
    _record_safety(is_safe, safe_seq, logger, event_log)

    if is_safe:
        logger.log("The current system is in safe state.")
    else:
        logger.log("The current system is in unsafe state.")


def _report_requests(
    system_state: SystemState,
    requests: List[ResourceRequest],
    logger: BankerLogger,
    event_log: EventLog
) -> None:
    """
    Evaluate queued requests and report each verdict.

    Args:
        system_state: Current system state
        requests: Requests in input order
        logger: Logger instance
        event_log: Event log
    """
    for outcome in evaluate_requests(system_state, requests, need_header="New Need"):
        request = outcome.request
        label = request.label

        _record_safety(outcome.state_safe, outcome.prior_sequence, logger, event_log)
        if not outcome.state_safe:
            logger.log("The current system is in unsafe state.")
            return

        logger.log(f"Before granting the request of {label}, the system is in safe state.")

        if not outcome.feasible:
            logger.log(f"{label}'s request cannot be granted (exceeds need or available).")
            event_log.add(EvaluationEvent(
                event_type=EventType.REJECTED,
                label=label,
                amounts=list(request.amounts),
                reason=outcome.reason
            ))
            continue

        logger.log(f"Simulating granting {label}'s request.")
        logger.log(outcome.need_report)

        if outcome.granted:
            logger.log(f"{label}'s request can be granted. The system will be in safe state.")
            event_type = EventType.GRANTED
        else:
            logger.log(f"{label}'s request cannot be granted. The system will be in unsafe state.")
            event_type = EventType.DENIED

        logger.log(f"  {outcome.reason}", "debug")
        event_log.add(EvaluationEvent(
            event_type=event_type,
            label=label,
            amounts=list(request.amounts),
            safe_sequence=outcome.safe_sequence,
            reason=outcome.reason
        ))


def _record_safety(
    is_safe: bool,
    safe_seq: Optional[List[int]],
    logger: BankerLogger,
    event_log: EventLog
) -> None:
    """Record a safety verdict."""
    event = EvaluationEvent(
        event_type=EventType.SAFE_STATE if is_safe else EventType.UNSAFE_STATE,
        safe_sequence=safe_seq
    )
    event_log.add(event)
    logger.log(str(event), "debug")


def main():
    """Main entry point for the evaluator."""
    parser = argparse.ArgumentParser(
        description="Banker's Algorithm safety and request evaluator"
    )
    parser.add_argument(
        '--input',
        type=str,
        default=None,
        help='Path to input file (default: read stdin)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )
    parser.add_argument(
        '--show-state',
        action='store_true',
        help='Print Available, Max, Allocation and Need before evaluating'
    )
    parser.add_argument(
        '--log-file',
        type=str,
        default=None,
        help='Also write output to this file'
    )

    args = parser.parse_args()

    _, status = run_evaluation(args.input, args.verbose, args.show_state, args.log_file)
    return status


if __name__ == '__main__':
    sys.exit(main())
