"""Health endpoint — reports whether scans and explanations can run."""

import time

from fastapi import APIRouter, Depends

from solidify import __version__
from solidify.api.scans import get_services
from solidify.config import get_settings
from solidify.graph.workflow import WorkflowServices
from solidify.models import HealthDependency, HealthResponse

router = APIRouter()

_started = time.monotonic()

# Worst dependency decides the overall status
_SEVERITY = {"healthy": 0, "degraded": 1, "unhealthy": 2}


def _llm_status() -> HealthDependency:
    settings = get_settings()
    if settings.OPENAI_API_KEY:
        return HealthDependency(status="healthy", message=settings.EXPLANATION_MODEL)
    return HealthDependency(status="degraded", message="OPENAI_API_KEY is not set; explanations will fail")


def _checker_status(services: WorkflowServices) -> HealthDependency:
    names = [checker.name for checker in services.engine.checkers]
    if not names:
        return HealthDependency(status="unhealthy", message="no checkers registered")
    return HealthDependency(status="healthy", message=", ".join(names))


@router.get("/health", response_model=HealthResponse)
async def health_check(services: WorkflowServices = Depends(get_services)):
    dependencies = {
        "checkers": _checker_status(services),
        "llm": _llm_status(),
    }
    status = max((d.status for d in dependencies.values()), key=_SEVERITY.__getitem__)
    return HealthResponse(
        status=status,
        version=__version__,
        uptime_seconds=round(time.monotonic() - _started, 2),
        dependencies=dependencies,
    )
