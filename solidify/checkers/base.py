"""Base principle checker — abstract class implementing the Strategy Pattern.

Each checker is a standalone, independently testable unit.
New checkers are added without modifying the engine.
"""

from abc import ABC, abstractmethod
from typing import Callable

from solidify.checkers.store import ViolationStore
from solidify.models import Declaration, DeclarationKind, Evidence, Member, Principle
from solidify.source.csharp import SourceUnit

# Ordered (predicate, label) pairs. First matching predicate wins.
CategoryRules = list[tuple[Callable[[Member], bool], str]]


class BasePrincipleChecker(ABC):
    """Abstract base for all principle checkers.

    Contract:
        - detect() is pure: same declaration and unit → same answer
        - check() returns zero or one Evidence for a declaration
        - run() files evidence through the store in declaration order
        - No LLM calls, no network calls, no randomness
    """

    applies_to: DeclarationKind = DeclarationKind.CLASS

    @property
    @abstractmethod
    def principle(self) -> Principle:
        """Principle this checker flags."""
        ...

    @property
    def name(self) -> str:
        """Human-readable name for logging."""
        return type(self).__name__

    @abstractmethod
    def detect(self, declaration: Declaration, unit: SourceUnit) -> bool:
        """Return True if the declaration is suspected of breaking the principle."""
        ...

    def describe(self) -> str:
        """One-line description of the rule and its thresholds."""
        return self.principle.full_name

    def check(self, declaration: Declaration, unit: SourceUnit) -> list[Evidence]:
        if declaration.kind != self.applies_to:
            return []
        if not self.detect(declaration, unit):
            return []
        return [Evidence.for_declaration(declaration)]

    def run(self, unit: SourceUnit, store: ViolationStore) -> int:
        """Check every declaration of the unit and record findings. Returns the count."""
        found = 0
        for declaration in unit.declarations:
            for evidence in self.check(declaration, unit):
                store.append(store.get_or_create(self.principle), evidence)
                found += 1
        return found

    # ── Helper Methods ──

    @staticmethod
    def _categorize(member: Member, rules: CategoryRules, default: str = "Other") -> str:
        """Label a member by the first matching rule."""
        for predicate, label in rules:
            if predicate(member):
                return label
        return default
