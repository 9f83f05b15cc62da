"""
End-to-end Report Tests

Runs the evaluator on the scenario files and checks the printed report.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from banker import run_evaluation
from analysis.events import EventType


SCENARIOS_DIR = project_root / "tests" / "scenarios"


def _run(capsys, scenario, **kwargs):
    event_log, status = run_evaluation(str(SCENARIOS_DIR / scenario), **kwargs)
    captured = capsys.readouterr()
    return event_log, status, captured


def test_safe_request_report(capsys):
    event_log, status, captured = _run(capsys, "textbook_request.txt")

    assert status == 0
    assert captured.out.splitlines() == [
        "Before granting the request of P1, the system is in safe state.",
        "Simulating granting P1's request.",
        "New Need",
        "7 4 3",
        "0 2 0",
        "6 0 0",
        "0 1 1",
        "4 3 1",
        "P1's request can be granted. The system will be in safe state.",
    ]
    granted = event_log.get_events_by_type(EventType.GRANTED)
    assert len(granted) == 1
    assert granted[0].safe_sequence == [1, 3, 4, 0, 2]


def test_request_exceeding_available(capsys):
    event_log, status, captured = _run(capsys, "exceeds_available.txt")

    assert status == 0
    assert captured.out.splitlines() == [
        "Before granting the request of P0, the system is in safe state.",
        "P0's request cannot be granted (exceeds need or available).",
    ]
    assert len(event_log.get_events_by_type(EventType.REJECTED)) == 1


def test_unsafe_grant_report(capsys):
    event_log, status, captured = _run(capsys, "unsafe_grant.txt")

    assert captured.out.splitlines() == [
        "Before granting the request of P2, the system is in safe state.",
        "Simulating granting P2's request.",
        "New Need",
        "5",
        "2",
        "6",
        "P2's request cannot be granted. The system will be in unsafe state.",
    ]
    assert len(event_log.get_events_by_type(EventType.DENIED)) == 1


def test_unsafe_initial_state(capsys):
    event_log, status, captured = _run(capsys, "unsafe_initial.txt")

    assert status == 0
    assert captured.out.splitlines() == ["The current system is in unsafe state."]
    assert event_log.get_events_by_type(EventType.GRANTED) == []


def test_no_request_reports_safety(capsys):
    _, status, captured = _run(capsys, "textbook_no_request.txt")

    assert status == 0
    assert captured.out.splitlines() == ["The current system is in safe state."]


def test_request_queue(capsys):
    """P1 granted, P4 no longer fits, P0 would leave the system unsafe."""
    event_log, _, captured = _run(capsys, "request_queue.txt")
    lines = captured.out.splitlines()

    assert "P1's request can be granted. The system will be in safe state." in lines
    assert "P4's request cannot be granted (exceeds need or available)." in lines
    assert lines[-1] == "P0's request cannot be granted. The system will be in unsafe state."
    assert [e.label for e in event_log.get_events_by_type(EventType.GRANTED)] == ["P1"]
    assert [e.label for e in event_log.get_events_by_type(EventType.DENIED)] == ["P0"]


def test_parse_error_exit_status(capsys):
    event_log, status, captured = _run(capsys, "bad_keyword.txt")

    assert status == 1
    assert captured.out == ""
    assert "[ERROR] Expected 'Available' but found 'Avail'" in captured.err
    assert event_log.events == []


def test_show_state_and_verbose(capsys):
    _, _, captured = _run(capsys, "textbook_request.txt", verbose=True, show_state=True)
    lines = captured.out.splitlines()

    assert lines[0] == "Resources: 3, Processes: 5"
    assert "[DEBUG] System is SAFE (sequence: P1 -> P3 -> P4 -> P0 -> P2)" in lines
    assert "[DEBUG] Event Log:" in lines
    assert lines[-1] == "P1 requests [1, 0, 2] - GRANTED (Safe state maintained, sequence: P1 -> P3 -> P4 -> P0 -> P2)"


def test_log_file(capsys, tmp_path):
    log_path = tmp_path / "run.log"
    _run(capsys, "textbook_request.txt", log_file=str(log_path))

    content = log_path.read_text(encoding='utf-8')
    assert content.startswith("Banker's Algorithm Log - ")
    assert "P1's request can be granted. The system will be in safe state." in content


def test_negative_request_rejected_in_verbose_mode(capsys):
    """A negative request amount is an input error, not a grant."""
    event_log, status, captured = _run(capsys, "negative_request.txt", verbose=True)

    assert status == 1
    assert captured.out == ""
    assert "[ERROR] Negative value -5 in request of P1" in captured.err
    assert event_log.get_events_by_type(EventType.GRANTED) == []


def test_unopenable_log_file(capsys, tmp_path):
    log_path = tmp_path / "missing_dir" / "run.log"
    event_log, status, captured = _run(capsys, "textbook_request.txt", log_file=str(log_path))

    assert status == 1
    assert captured.out == ""
    assert f"[ERROR] Cannot open log file {log_path}" in captured.err
    assert event_log.events == []
