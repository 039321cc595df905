"""Principle checkers — deterministic SOLID heuristics over parsed C# declarations.

Usage:
    from solidify.checkers import AnalysisEngine

    result = AnalysisEngine().scan("src/")
    if result.violations:
        # Hand result.violations to the explanation step and the report
"""

from solidify.checkers.base import BasePrincipleChecker
from solidify.checkers.dip import DIPChecker
from solidify.checkers.engine import AnalysisEngine
from solidify.checkers.isp import ISPChecker
from solidify.checkers.lsp import LSPChecker
from solidify.checkers.ocp import OCPChecker
from solidify.checkers.srp import SRPChecker
from solidify.checkers.store import ViolationHandle, ViolationStore

__all__ = [
    "AnalysisEngine",
    "BasePrincipleChecker",
    "DIPChecker",
    "ISPChecker",
    "LSPChecker",
    "OCPChecker",
    "SRPChecker",
    "ViolationHandle",
    "ViolationStore",
]
