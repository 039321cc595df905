from solidify.source.csharp import CSharpReader, SourceParseError, SourceUnit
from solidify.source.loader import discover_sources
from solidify.source.symbols import SymbolTable, is_bare_name, is_predefined

__all__ = [
    "CSharpReader",
    "SourceParseError",
    "SourceUnit",
    "SymbolTable",
    "discover_sources",
    "is_bare_name",
    "is_predefined",
]
