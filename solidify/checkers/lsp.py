"""LSP Checker — derived classes that do not faithfully override their base.

Only the first base type is considered, and only when it names a class
declared earlier or later in the same file. Anything the symbol table cannot
resolve is a resolution gap: the class is skipped, never flagged.
"""

from typing import Optional

import structlog

from solidify.checkers.base import BasePrincipleChecker
from solidify.models import Declaration, Member, Principle
from solidify.source.csharp import SourceUnit
from solidify.source.symbols import SymbolTable

logger = structlog.get_logger()


class LSPChecker(BasePrincipleChecker):
    """Every base method needs a matching ``override`` with compatible types."""

    @property
    def principle(self) -> Principle:
        return Principle.LSP

    def describe(self) -> str:
        return f"{self.principle.full_name}: base methods not overridden with compatible signatures"

    def detect(self, declaration: Declaration, unit: SourceUnit) -> bool:
        return self.evaluate(declaration, unit) is False

    def evaluate(self, declaration: Declaration, unit: SourceUnit) -> Optional[bool]:
        """True if compliant, False if violating, None when it cannot be decided."""
        if not declaration.base_types:
            return None
        base = unit.find_class(declaration.base_types[0])
        if base is None:
            return None

        pairs = []
        for base_method in base.methods:
            derived_method = self._find_override(declaration, base_method)
            if derived_method is None:
                return False
            pairs.append((base_method, derived_method))

        for base_method, derived_method in pairs:
            verdict = self._types_compatible(base_method, derived_method, unit.symbols)
            if verdict is None:
                logger.debug(
                    "lsp_resolution_gap",
                    declaration=declaration.name,
                    method=derived_method.name,
                )
                return None
            if not verdict:
                return False
        return True

    @staticmethod
    def _find_override(declaration: Declaration, base_method: Member) -> Optional[Member]:
        for method in declaration.methods:
            if (
                method.name == base_method.name
                and method.parameter_types == base_method.parameter_types
                and method.has_modifier("override")
            ):
                return method
        return None

    @staticmethod
    def _types_compatible(base_method: Member, derived_method: Member, symbols: SymbolTable) -> Optional[bool]:
        if derived_method.type_text != base_method.type_text:
            derived_return = symbols.resolve(derived_method.type_text)
            base_return = symbols.resolve(base_method.type_text)
            if derived_return is None or base_return is None:
                return None
            if not symbols.is_subtype(derived_return, base_return):
                return False

        for base_param, derived_param in zip(base_method.parameters, derived_method.parameters):
            if base_param.type_text == derived_param.type_text:
                continue
            base_type = symbols.resolve(base_param.type_text)
            derived_type = symbols.resolve(derived_param.type_text)
            if base_type is None or derived_type is None:
                return None
            if not symbols.is_subtype(derived_type, base_type):
                return False
        return True
