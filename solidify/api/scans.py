"""Scans API — run a scan and list the registered rules."""

from pathlib import Path

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request

from solidify.graph.workflow import WorkflowServices, run_scan_workflow
from solidify.models import RuleResponse, ScanRequest, ScanResult

logger = structlog.get_logger()

router = APIRouter()


def get_services(request: Request) -> WorkflowServices:
    """Services created at startup, or a fresh set when the app runs without lifespan."""
    services = getattr(request.app.state, "services", None)
    if services is None:
        services = WorkflowServices()
        request.app.state.services = services
    return services


@router.post("/scans", response_model=ScanResult)
async def create_scan(body: ScanRequest, services: WorkflowServices = Depends(get_services)):
    """Scan a path on the server and return the aggregated violations."""
    target = Path(body.path)
    if not target.exists():
        raise HTTPException(status_code=404, detail=f"Path not found: {body.path}")

    logger.info("scan_requested", path=body.path, explain=body.explain)

    state = await run_scan_workflow(target, explain=body.explain, services=services)
    if state["status"] == "error" or state["result"] is None:
        raise HTTPException(status_code=500, detail="; ".join(state["errors"]) or "Scan failed")

    return state["result"]


@router.get("/rules", response_model=list[RuleResponse])
async def list_rules(services: WorkflowServices = Depends(get_services)):
    """List the principle checkers in execution order."""
    return [
        RuleResponse(
            principle=checker.principle.value,
            name=checker.name,
            applies_to=checker.applies_to.value,
            description=checker.describe(),
        )
        for checker in services.engine.checkers
    ]
