"""LangGraph workflow definition — wires the scan stages into a graph.

The workflow:
1. Scan the target with every principle checker
2. Conditional: explain each violation through the LLM, or skip
3. Write the report
"""

from pathlib import Path
from typing import Optional, Union

import structlog
from langgraph.graph import StateGraph, END

from solidify.agents.explainer import ExplanationAgent
from solidify.checkers.engine import AnalysisEngine
from solidify.config import get_settings
from solidify.graph.nodes import make_explain_node, make_scan_node, report_node, should_explain
from solidify.graph.state import ScanState, create_initial_state
from solidify.services.explanation import ExplanationStep
from solidify.services.report import ReportWriteFailure

logger = structlog.get_logger()


class WorkflowServices:
    """Collaborators used by one compiled graph.

    The explanation step is created on first use so a scan without
    explanations never builds an LLM client.
    """

    def __init__(
        self,
        engine: Optional[AnalysisEngine] = None,
        explanation_step: Optional[ExplanationStep] = None,
    ):
        self.engine = engine or AnalysisEngine()
        self._explanation_step = explanation_step

    def get_explanation_step(self) -> ExplanationStep:
        if self._explanation_step is None:
            settings = get_settings()
            agent = ExplanationAgent()
            self._explanation_step = ExplanationStep(agent.explain, settings.EXPLANATION_TIMEOUT_SECONDS)
        return self._explanation_step


def build_graph(services: WorkflowServices) -> StateGraph:
    """Build the LangGraph workflow.

    Flow:
        scan ├── explain → report → END
             └── report → END
    """
    workflow = StateGraph(ScanState)

    workflow.add_node("scan", make_scan_node(services.engine))
    workflow.add_node("explain", make_explain_node(services.get_explanation_step))
    workflow.add_node("report", report_node)

    workflow.set_entry_point("scan")
    workflow.add_conditional_edges(
        "scan",
        should_explain,
        {
            "explain": "explain",
            "report": "report",
        },
    )
    workflow.add_edge("explain", "report")
    workflow.add_edge("report", END)

    return workflow


def compile_graph(services: Optional[WorkflowServices] = None):
    """Compile the workflow graph for execution."""
    return build_graph(services or WorkflowServices()).compile()


async def run_scan_workflow(
    target: Union[str, Path],
    explain: bool = False,
    report_path: Optional[Union[str, Path]] = None,
    report_format: str = "html",
    services: Optional[WorkflowServices] = None,
) -> ScanState:
    """Execute a full scan: check, optionally explain, and report.

    Args:
        target: File or directory to scan
        explain: Ask the LLM for an explanation of each violation
        report_path: Where to write the report; None writes nothing
        report_format: html or json
        services: Engine and explanation step; defaults built from settings

    Returns:
        Final workflow state with the ScanResult under "result"

    Raises:
        ReportWriteFailure: the report could not be written
        FileNotFoundError: the target does not exist
    """
    logger.info("workflow_started", target=str(target), explain=explain, report_path=report_path)

    state = create_initial_state(
        str(target),
        explain=explain,
        report_path=str(report_path) if report_path else None,
        report_format=report_format,
    )

    try:
        graph = compile_graph(services)
        final_state = await graph.ainvoke(state)
    except (ReportWriteFailure, FileNotFoundError) as e:
        logger.error("workflow_failed", target=str(target), error=str(e))
        raise
    except Exception as e:
        logger.error("workflow_failed", target=str(target), error=str(e))
        state["status"] = "error"
        state["errors"] = state.get("errors", []) + [str(e)]
        return state

    logger.info(
        "workflow_completed",
        target=str(target),
        status=final_state["status"],
        violations=len(final_state["violations"]),
        report=final_state.get("report_written"),
    )
    return final_state
