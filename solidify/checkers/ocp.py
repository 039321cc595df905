"""OCP Checker — classes that offer no extension point or expose mutable state."""

from solidify.checkers.base import BasePrincipleChecker
from solidify.models import Declaration, Member, Principle
from solidify.source.csharp import SourceUnit
from solidify.source.symbols import is_bare_name


class OCPChecker(BasePrincipleChecker):
    """A class must be open for extension and closed for modification.

    Open: it has a base list, a virtual or abstract method, an extension
    method, or a field typed by a named type. Closed: it is sealed, or all its
    properties have private setters, or all its fields are readonly; and in
    every case no field is both public and writable. Classes with no members
    pass the "closed" half vacuously.
    """

    @property
    def principle(self) -> Principle:
        return Principle.OCP

    def describe(self) -> str:
        return f"{self.principle.full_name}: no extension point, or publicly mutable state"

    def is_open(self, declaration: Declaration) -> bool:
        methods = declaration.methods
        return (
            len(declaration.base_types) > 0
            or any(is_bare_name(b) for b in declaration.base_types)
            or any(m.has_modifier("virtual") or m.has_modifier("abstract") for m in methods)
            or any("this" in p.modifiers for m in methods for p in m.parameters)
            or any(is_bare_name(f.type_text) for f in declaration.fields)
        )

    def is_closed(self, declaration: Declaration) -> bool:
        if any(f.visibility == "public" and not f.has_modifier("readonly") for f in declaration.fields):
            return False
        return (
            declaration.has_modifier("sealed")
            or all(self._has_private_setter(p) for p in declaration.properties)
            or all(f.has_modifier("readonly") for f in declaration.fields)
        )

    def detect(self, declaration: Declaration, unit: SourceUnit) -> bool:
        return not self.is_open(declaration) or not self.is_closed(declaration)

    @staticmethod
    def _has_private_setter(prop: Member) -> bool:
        # Arrow-bodied properties have no accessor list and count as private
        if prop.accessors is None:
            return True
        setter = prop.accessor("set")
        return setter is not None and "private" in setter.modifiers
