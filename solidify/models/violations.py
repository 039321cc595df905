"""Violation models — principles, evidence records, violations and the scan result.

Evidence and Violation are immutable values. The store builds Violations
from appended evidence and the explanation step folds explanations into new
Violation values instead of mutating them.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from solidify.models.source import Declaration


class Principle(str, Enum):
    """The five design heuristics the checkers flag."""

    SRP = "SRP"
    OCP = "OCP"
    LSP = "LSP"
    ISP = "ISP"
    DIP = "DIP"

    @property
    def full_name(self) -> str:
        return PRINCIPLE_TITLES[self]


PRINCIPLE_TITLES = {
    Principle.SRP: "Single Responsibility Principle",
    Principle.OCP: "Open/Closed Principle",
    Principle.LSP: "Liskov Substitution Principle",
    Principle.ISP: "Interface Segregation Principle",
    Principle.DIP: "Dependency Inversion Principle",
}


class Evidence(BaseModel):
    """One concrete file/line/snippet instance supporting a violation."""

    model_config = {"frozen": True}

    file: str
    line: int = Field(ge=1, description="1-based line of the declaration")
    snippet: str = Field(description="Full source text of the declaration")

    @classmethod
    def for_declaration(cls, declaration: Declaration) -> "Evidence":
        return cls(file=declaration.file, line=declaration.line, snippet=declaration.source)

    def __str__(self) -> str:
        return f"File: {self.file}, Line: {self.line}, Code: {self.snippet}"


class Violation(BaseModel):
    """Aggregated record that a principle was broken at least once."""

    model_config = {"frozen": True}

    principle: Principle
    evidences: tuple[Evidence, ...] = ()
    explanation: Optional[str] = None

    def with_explanation(self, text: str) -> "Violation":
        """Return a copy carrying the explanation. An explanation is set once."""
        if self.explanation is not None:
            raise ValueError(f"Explanation for {self.principle.value} is already set")
        return self.model_copy(update={"explanation": text})

    def __str__(self) -> str:
        files = "; ".join(str(e) for e in self.evidences)
        return f"Principle: {self.principle.value}, Files: {files}"


class ScanResult(BaseModel):
    """Complete output of one scan — the input of the report sink."""

    target: str
    violations: list[Violation] = Field(default_factory=list)
    files_scanned: int = 0
    files_skipped: list[str] = Field(default_factory=list)
    duration_ms: float = 0.0
    summary: dict[str, int] = Field(default_factory=dict, description="Evidence count per principle")
    verdict: str = ""

    @classmethod
    def build(
        cls,
        target: str,
        violations: list[Violation],
        files_scanned: int = 0,
        files_skipped: Optional[list[str]] = None,
        duration_ms: float = 0.0,
    ) -> "ScanResult":
        """Build a result with per-principle counts and a human-readable verdict."""
        summary = {p.value: 0 for p in Principle}
        for violation in violations:
            summary[violation.principle.value] += len(violation.evidences)

        flagged = sum(summary.values())
        if not violations:
            verdict = f"No SOLID violations suspected across {files_scanned} file(s)."
        else:
            principles = ", ".join(v.principle.value for v in violations)
            verdict = (
                f"{len(violations)} principle(s) flagged ({principles}) "
                f"with {flagged} finding(s) across {files_scanned} file(s)."
            )

        return cls(
            target=target,
            violations=list(violations),
            files_scanned=files_scanned,
            files_skipped=list(files_skipped or []),
            duration_ms=round(duration_ms, 2),
            summary=summary,
            verdict=verdict,
        )
