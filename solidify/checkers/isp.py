"""ISP Checker — interfaces that are too wide or serve too many purposes."""

from solidify.checkers.base import BasePrincipleChecker, CategoryRules
from solidify.models import Declaration, DeclarationKind, Principle
from solidify.source.csharp import SourceUnit


def _name_starts_with(*prefixes: str):
    return lambda member: member.name.startswith(prefixes)


class ISPChecker(BasePrincipleChecker):
    """Flags interfaces with too many members or too many method categories."""

    applies_to = DeclarationKind.INTERFACE

    def __init__(self, max_members: int = 7, max_categories: int = 2):
        self.max_members = max_members
        self.max_categories = max_categories
        # Prefix match is case-sensitive
        self.rules: CategoryRules = [
            (_name_starts_with("Get", "Set", "Is"), "Accessor"),
            (_name_starts_with("Calculate", "Compute"), "Calculation"),
            (_name_starts_with("Save", "Load", "Delete"), "Persistence"),
            (_name_starts_with("Validate", "Check"), "Validation"),
        ]

    @property
    def principle(self) -> Principle:
        return Principle.ISP

    def describe(self) -> str:
        return (
            f"{self.principle.full_name}: > {self.max_members} members "
            f"or > {self.max_categories} method categories"
        )

    def member_count(self, declaration: Declaration) -> int:
        return len(declaration.methods) + len(declaration.properties) + len(declaration.events)

    def categories(self, declaration: Declaration) -> set[str]:
        return {self._categorize(m, self.rules) for m in declaration.methods}

    def detect(self, declaration: Declaration, unit: SourceUnit) -> bool:
        return (
            self.member_count(declaration) > self.max_members
            or len(self.categories(declaration)) > self.max_categories
        )
