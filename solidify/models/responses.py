"""API response models."""

from typing import Literal, Optional

from pydantic import BaseModel


class HealthDependency(BaseModel):
    """Health status of a single dependency."""

    status: Literal["healthy", "unhealthy", "degraded"]
    latency_ms: Optional[float] = None
    message: Optional[str] = None


class HealthResponse(BaseModel):
    """System health check response."""

    status: Literal["healthy", "unhealthy", "degraded"]
    version: str = "1.0.0"
    uptime_seconds: float
    dependencies: dict[str, HealthDependency]


class RuleResponse(BaseModel):
    """One registered principle checker."""

    principle: str
    name: str
    applies_to: str
    description: str
