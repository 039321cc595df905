"""Type text helpers and the per-unit symbol table.

Resolution is deliberately shallow: predefined types and types declared in
the same unit. Anything else is unknown and resolves to None; nothing here
raises on malformed input.
"""

import re
from typing import Iterable, Iterator, Optional

from solidify.models.source import TypeSymbol

# C# predefined type keywords (PredefinedTypeSyntax)
PREDEFINED_TYPES = frozenset({
    "bool", "byte", "sbyte", "char", "decimal", "double", "float",
    "int", "uint", "long", "ulong", "short", "ushort",
    "object", "string", "void",
})

# CLR names that alias a predefined keyword
CLR_ALIASES = {
    "Boolean": "bool",
    "Byte": "byte",
    "SByte": "sbyte",
    "Char": "char",
    "Decimal": "decimal",
    "Double": "double",
    "Single": "float",
    "Int32": "int",
    "UInt32": "uint",
    "Int64": "long",
    "UInt64": "ulong",
    "Int16": "short",
    "UInt16": "ushort",
    "Object": "object",
    "String": "string",
    "Void": "void",
}

OBJECT = TypeSymbol(name="object", kind="builtin")

# Kinds whose chain continues through a class base
_CLASS_LIKE = {"class", "record"}

_BARE_NAME = re.compile(r"^@?[A-Za-z_][A-Za-z0-9_]*$")
_WHITESPACE = re.compile(r"\s+")


def normalize_type(type_text: str) -> str:
    """Collapse runs of whitespace; the text is otherwise kept as written."""
    return _WHITESPACE.sub(" ", type_text.strip())


def is_predefined(type_text: str) -> bool:
    return type_text.strip() in PREDEFINED_TYPES


def is_bare_name(type_text: str) -> bool:
    """True for a single identifier that is not a predefined keyword."""
    text = type_text.strip()
    return bool(_BARE_NAME.match(text)) and text not in PREDEFINED_TYPES


class SymbolTable:
    """Symbols of one compilation unit plus the predefined types."""

    def __init__(self, symbols: Iterable[TypeSymbol] = ()):
        self._symbols: dict[str, TypeSymbol] = {}
        for symbol in symbols:
            # First declaration in source order wins
            self._symbols.setdefault(symbol.name, symbol)

    def __contains__(self, name: str) -> bool:
        return name in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def resolve(self, type_text: str) -> Optional[TypeSymbol]:
        """Resolve a type reference to a symbol, or None when unknown."""
        if not type_text:
            return None
        text = type_text.strip().removeprefix("global::")

        if text in PREDEFINED_TYPES:
            return self._builtin(text)

        declared = self._symbols.get(text)
        if declared is not None:
            return declared

        simple = text.removeprefix("System.")
        if simple in CLR_ALIASES:
            return self._builtin(CLR_ALIASES[simple])

        return None

    def parent(self, symbol: TypeSymbol) -> Optional[TypeSymbol]:
        """Direct supertype along the class chain."""
        if symbol.kind == "interface" or symbol == OBJECT:
            return None
        if symbol.kind in _CLASS_LIKE:
            for base in symbol.base_types:
                resolved = self.resolve(base)
                if resolved is not None and resolved.kind in _CLASS_LIKE:
                    return resolved
        return OBJECT

    def supertypes(self, symbol: TypeSymbol) -> Iterator[TypeSymbol]:
        """Walk the chain starting at ``symbol`` itself. Terminates on cycles."""
        seen: set[str] = set()
        current: Optional[TypeSymbol] = symbol
        while current is not None and current.name not in seen:
            seen.add(current.name)
            yield current
            current = self.parent(current)

    def is_subtype(self, derived: Optional[TypeSymbol], base: Optional[TypeSymbol]) -> bool:
        """True when ``derived`` is ``base`` or one of its descendants."""
        if derived is None or base is None:
            return False
        return any(s == base for s in self.supertypes(derived))

    @staticmethod
    def _builtin(name: str) -> TypeSymbol:
        if name == "object":
            return OBJECT
        return TypeSymbol(name=name, kind="builtin")
