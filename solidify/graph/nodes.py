"""LangGraph nodes — each wraps one stage of a scan.

Nodes are built by factories that close over the stage's service, so a
compiled graph carries its own engine and explanation step.
"""

import asyncio
from typing import Awaitable, Callable

import structlog

from solidify.checkers.engine import AnalysisEngine
from solidify.graph.state import ScanState, utc_now
from solidify.services.explanation import ExplanationStep
from solidify.services.report import get_renderer, write_report

logger = structlog.get_logger()

Node = Callable[[ScanState], Awaitable[dict]]


def make_scan_node(engine: AnalysisEngine) -> Node:
    async def scan_node(state: ScanState) -> dict:
        """Run every checker over the target. Blocking work goes to a thread."""
        result = await asyncio.to_thread(engine.scan, state["target"])
        return {
            "violations": result.violations,
            "files_scanned": result.files_scanned,
            "files_skipped": result.files_skipped,
            "result": result,
            "status": "scanning",
        }

    return scan_node


def make_explain_node(get_step: Callable[[], ExplanationStep]) -> Node:
    async def explain_node(state: ScanState) -> dict:
        explained = await get_step().run(state["violations"])
        result = state["result"]
        return {
            "violations": explained,
            "result": result.model_copy(update={"violations": explained}) if result else None,
            "status": "explaining",
        }

    return explain_node


async def report_node(state: ScanState) -> dict:
    """Write the report when a destination was requested. Write errors propagate."""
    written = None
    if state.get("report_path"):
        renderer = get_renderer(state.get("report_format", "html"))
        written = str(write_report(state["violations"], state["report_path"], renderer))
    return {
        "report_written": written,
        "status": "complete",
        "completed_at": utc_now(),
    }


def should_explain(state: ScanState) -> str:
    """Route to the explanation step only when asked for and there is something to explain."""
    if state.get("explain") and state.get("violations"):
        return "explain"
    return "report"
