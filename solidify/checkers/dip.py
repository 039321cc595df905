"""DIP Checker — classes depending on types that are not simple named abstractions."""

from solidify.checkers.base import BasePrincipleChecker
from solidify.models import Declaration, Principle
from solidify.source.csharp import SourceUnit
from solidify.source.symbols import is_bare_name, is_predefined


class DIPChecker(BasePrincipleChecker):
    """Every field, property and method parameter type must be a primitive or a bare name.

    Abstractions and concrete classes look the same here: ``ILogger`` and
    ``FileLogger`` both pass, while ``List<ILogger>`` or ``Foo.Bar`` do not.
    """

    @property
    def principle(self) -> Principle:
        return Principle.DIP

    def describe(self) -> str:
        return f"{self.principle.full_name}: dependencies on generic, qualified or composite types"

    def dependency_types(self, declaration: Declaration) -> list[str]:
        types = [f.type_text for f in declaration.fields]
        types += [p.type_text for p in declaration.properties]
        types += [t for m in declaration.methods for t in m.parameter_types]
        return types

    def detect(self, declaration: Declaration, unit: SourceUnit) -> bool:
        return not all(is_predefined(t) or is_bare_name(t) for t in self.dependency_types(declaration))
