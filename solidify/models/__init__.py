from solidify.models.source import (
    Accessor,
    Declaration,
    DeclarationKind,
    Member,
    MemberKind,
    Parameter,
    TypeSymbol,
)
from solidify.models.requests import ScanRequest
from solidify.models.responses import HealthDependency, HealthResponse, RuleResponse
from solidify.models.violations import Evidence, Principle, ScanResult, Violation

__all__ = [
    "Accessor",
    "Declaration",
    "DeclarationKind",
    "Member",
    "MemberKind",
    "Parameter",
    "TypeSymbol",
    "ScanRequest",
    "HealthDependency",
    "HealthResponse",
    "RuleResponse",
    "Evidence",
    "Principle",
    "ScanResult",
    "Violation",
]
