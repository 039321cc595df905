"""SRP Checker — classes mixing unrelated kinds of work or simply too big."""

from typing import Iterable, Optional

from solidify.checkers.base import BasePrincipleChecker, CategoryRules
from solidify.models import Declaration, Member, Principle
from solidify.source.csharp import SourceUnit

DEFAULT_LOGGING_RECEIVERS = ("Console", "Debug")


def _name_contains(*words: str):
    return lambda member: any(w in member.name.lower() for w in words)


class SRPChecker(BasePrincipleChecker):
    """Flags classes whose methods fall into more than one responsibility."""

    def __init__(
        self,
        max_methods: int = 10,
        max_properties: int = 10,
        logging_receivers: Optional[Iterable[str]] = None,
    ):
        self.max_methods = max_methods
        self.max_properties = max_properties
        self.logging_receivers = frozenset(logging_receivers or DEFAULT_LOGGING_RECEIVERS)
        self.rules: CategoryRules = [
            (_name_contains("calculate", "compute"), "Calculation"),
            (_name_contains("save", "load", "fetch"), "DataAccess"),
            (_name_contains("validate", "check"), "Validation"),
            (_name_contains("format", "parse"), "Formatting"),
            (self._logs, "Logging"),
        ]

    @property
    def principle(self) -> Principle:
        return Principle.SRP

    def describe(self) -> str:
        return (
            f"{self.principle.full_name}: more than one method category, "
            f"> {self.max_methods} methods or > {self.max_properties} properties"
        )

    def responsibilities(self, declaration: Declaration) -> set[str]:
        categories = {self._categorize(m, self.rules) for m in declaration.methods}
        if any(p.visibility == "public" for p in declaration.properties):
            categories.add("DataManagement")
        return categories

    def detect(self, declaration: Declaration, unit: SourceUnit) -> bool:
        return (
            len(self.responsibilities(declaration)) > 1
            or len(declaration.methods) > self.max_methods
            or len(declaration.properties) > self.max_properties
        )

    def _logs(self, member: Member) -> bool:
        return bool(self.logging_receivers & member.body_markers)
