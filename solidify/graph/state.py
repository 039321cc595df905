"""Shared workflow state schema for LangGraph."""

from datetime import datetime, timezone
from typing import Literal, Optional, TypedDict

from solidify.models import ScanResult, Violation


class ScanState(TypedDict):
    """Full workflow state passed between LangGraph nodes.

    Each node reads what it needs and writes its outputs.
    """

    # ── Input ──
    target: str
    explain: bool
    report_path: Optional[str]   # None → no report file is written
    report_format: str           # html | json

    # ── Outputs ──
    violations: list[Violation]
    files_scanned: int
    files_skipped: list[str]
    result: Optional[ScanResult]
    report_written: Optional[str]

    # ── Control Flow ──
    status: Literal["initializing", "scanning", "explaining", "reporting", "complete", "error"]

    # ── Error Tracking ──
    errors: list[str]

    # ── Metadata ──
    started_at: str
    completed_at: Optional[str]


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def create_initial_state(
    target: str,
    explain: bool = False,
    report_path: Optional[str] = None,
    report_format: str = "html",
) -> ScanState:
    """Create the initial state for a new scan."""
    return ScanState(
        target=target,
        explain=explain,
        report_path=report_path,
        report_format=report_format,
        violations=[],
        files_scanned=0,
        files_skipped=[],
        result=None,
        report_written=None,
        status="initializing",
        errors=[],
        started_at=utc_now(),
        completed_at=None,
    )
