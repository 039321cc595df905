"""C# declaration reader — turns a source file into Declarations and symbols.

This is a structural reader, not a compiler front end. It masks comments,
string/char literals and preprocessor lines, tokenizes the rest and walks
namespaces, type declarations and member headers. Method bodies and
initializers are skipped by bracket matching; only block bodies are scanned
for receiver identifiers (``Console.``) used by the SRP logging rule.

Raises SourceParseError when the file cannot be turned into a declaration
tree (unterminated literals or comments, unbalanced brackets).
"""

import bisect
import re
from pathlib import Path
from typing import NamedTuple, Optional, Union

import structlog

from solidify.models.source import (
    Accessor,
    Declaration,
    DeclarationKind,
    Member,
    MemberKind,
    Parameter,
    TypeSymbol,
    visibility_from,
)
from solidify.source.symbols import SymbolTable, normalize_type

logger = structlog.get_logger()

MODIFIERS = frozenset({
    "public", "private", "protected", "internal", "static", "sealed",
    "abstract", "virtual", "override", "readonly", "const", "new",
    "partial", "async", "extern", "unsafe", "volatile", "required",
    "file", "ref", "fixed", "implicit", "explicit",
})

PARAMETER_MODIFIERS = frozenset({"this", "ref", "out", "in", "params", "scoped", "readonly"})

TYPE_KEYWORDS = frozenset({"class", "interface", "struct", "enum", "delegate", "record"})

OPENERS = {"(": ")", "[": "]", "{": "}"}
CLOSERS = frozenset(OPENERS.values())

_TOKEN_RE = re.compile(
    r"\s+|(?P<ident>@?[^\W\d]\w*)|(?P<num>\d[\w.]*)|(?P<op>=>|::|.)",
    re.DOTALL,
)
_STRING_START = re.compile(r'(\$+@?|@\$*)?("{3,}|")')
_RECEIVER_RE = re.compile(r"([^\W\d]\w*)\s*\??\.")


class SourceParseError(Exception):
    """A file could not be turned into a declaration tree."""

    def __init__(self, path: str, message: str, line: Optional[int] = None):
        self.path = path
        self.message = message
        self.line = line
        location = f"{path}:{line}" if line else path
        super().__init__(f"{location}: {message}")


class Token(NamedTuple):
    value: str
    start: int
    end: int
    kind: str  # ident | num | op


class SourceUnit:
    """One parsed file: its declarations in source order and its symbols."""

    def __init__(self, path: str, declarations: list[Declaration], symbols: SymbolTable):
        self.path = path
        self.declarations = declarations
        self.symbols = symbols

    def find_class(self, name: str) -> Optional[Declaration]:
        """First class declaration in source order whose name matches exactly."""
        for declaration in self.declarations:
            if declaration.kind == DeclarationKind.CLASS and declaration.name == name:
                return declaration
        return None

    def __repr__(self) -> str:
        return f"SourceUnit({self.path!r}, declarations={len(self.declarations)})"


# ── Masking ──


def mask_source(text: str, path: str = "<string>") -> str:
    """Blank out comments, literals and preprocessor lines, keeping offsets.

    Newlines survive so line numbers computed on the masked text match the
    original.
    """
    out = list(text)
    n = len(text)

    def blank(start: int, end: int) -> None:
        for k in range(start, min(end, n)):
            if out[k] not in "\r\n":
                out[k] = " "

    def line_at(offset: int) -> int:
        return text.count("\n", 0, offset) + 1

    def string_end(i: int) -> int:
        """Return the offset just past the string literal starting at ``i``."""
        match = _STRING_START.match(text, i)
        prefix, quotes = match.group(1) or "", match.group(2)
        interpolated = "$" in prefix
        j = match.end()
        if "@" in prefix:
            # Verbatim strings are never raw; "" inside them is an escaped quote
            quotes = '"'
            j = match.start(2) + 1

        if len(quotes) >= 3:
            close = text.find(quotes, j)
            if close == -1:
                raise SourceParseError(path, "unterminated raw string literal", line_at(i))
            return close + len(quotes)

        verbatim = "@" in prefix
        while j < n:
            c = text[j]
            if c == '"':
                if verbatim and j + 1 < n and text[j + 1] == '"':
                    j += 2
                    continue
                return j + 1
            if c == "\\" and not verbatim:
                j += 2
                continue
            if c == "\n" and not verbatim:
                break
            if interpolated and c == "{":
                if j + 1 < n and text[j + 1] == "{":
                    j += 2
                    continue
                j = hole_end(j)
                continue
            j += 1
        raise SourceParseError(path, "unterminated string literal", line_at(i))

    def hole_end(j: int) -> int:
        depth = 0
        while j < n:
            c = text[j]
            if c == "{":
                depth += 1
            elif c == "}":
                depth -= 1
                if depth == 0:
                    return j + 1
            elif c in "\"$@" and _STRING_START.match(text, j):
                j = string_end(j)
                continue
            elif c == "'":
                j = char_end(j)
                continue
            j += 1
        raise SourceParseError(path, "unterminated interpolation hole", line_at(j))

    def char_end(i: int) -> int:
        j = i + 1
        while j < n and text[j] != "'":
            if text[j] == "\n":
                raise SourceParseError(path, "unterminated character literal", line_at(i))
            j += 2 if text[j] == "\\" else 1
        if j >= n:
            raise SourceParseError(path, "unterminated character literal", line_at(i))
        return j + 1

    i = 0
    while i < n:
        c = text[i]
        nxt = text[i + 1] if i + 1 < n else ""
        if c == "/" and nxt == "/":
            end = text.find("\n", i)
            end = n if end == -1 else end
            blank(i, end)
            i = end
        elif c == "/" and nxt == "*":
            end = text.find("*/", i + 2)
            if end == -1:
                raise SourceParseError(path, "unterminated block comment", line_at(i))
            blank(i, end + 2)
            i = end + 2
        elif c == "#" and not text[text.rfind("\n", 0, i) + 1:i].strip():
            end = text.find("\n", i)
            end = n if end == -1 else end
            blank(i, end)
            i = end
        elif c in "\"$@" and _STRING_START.match(text, i):
            end = string_end(i)
            blank(i, end)
            i = end
        elif c == "'":
            end = char_end(i)
            blank(i, end)
            i = end
        else:
            i += 1
    return "".join(out)


def tokenize(masked: str) -> list[Token]:
    tokens = []
    for match in _TOKEN_RE.finditer(masked):
        kind = match.lastgroup
        if kind is None:
            continue
        tokens.append(Token(match.group(), match.start(), match.end(), kind))
    return tokens


# ── Parser ──


class _Parser:
    """Recursive walk over the token stream of one file."""

    def __init__(self, text: str, path: str):
        self.text = text
        self.path = path
        self.masked = mask_source(text, path)
        self.tokens = tokenize(self.masked)
        self.pos = 0
        self.declarations: list[Optional[Declaration]] = []
        self.symbols: list[TypeSymbol] = []
        self._line_starts = [0] + [m.end() for m in re.finditer("\n", text)]

    # ── token helpers ──

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def peek(self, k: int = 0) -> Optional[Token]:
        index = self.pos + k
        return self.tokens[index] if index < len(self.tokens) else None

    def value(self, k: int = 0) -> str:
        tok = self.peek(k)
        return tok.value if tok else ""

    def is_ident(self, k: int = 0) -> bool:
        tok = self.peek(k)
        return tok is not None and tok.kind == "ident"

    def advance(self) -> Token:
        if self.at_end():
            raise self.error("unexpected end of file")
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def expect(self, value: str) -> Token:
        if self.value() != value:
            raise self.error(f"expected '{value}' but found '{self.value() or 'end of file'}'")
        return self.advance()

    def error(self, message: str) -> SourceParseError:
        tok = self.peek() or (self.tokens[-1] if self.tokens else None)
        return SourceParseError(self.path, message, self.line_of(tok.start) if tok else None)

    def line_of(self, offset: int) -> int:
        return bisect.bisect_right(self._line_starts, offset)

    def column_of(self, offset: int) -> int:
        return offset - self._line_starts[self.line_of(offset) - 1] + 1

    def skip_balanced(self) -> Token:
        """Skip from an opening bracket to its match and return the closer."""
        opener = self.advance()
        stack = [OPENERS[opener.value]]
        while stack:
            if self.at_end():
                raise SourceParseError(self.path, f"unclosed '{opener.value}'", self.line_of(opener.start))
            tok = self.advance()
            if tok.value in OPENERS:
                stack.append(OPENERS[tok.value])
            elif tok.value in CLOSERS:
                expected = stack.pop()
                if tok.value != expected:
                    raise SourceParseError(
                        self.path, f"expected '{expected}' but found '{tok.value}'", self.line_of(tok.start)
                    )
        return tok

    def skip_angle(self) -> Token:
        """Skip a generic argument/parameter list and return the closing '>'."""
        opener = self.advance()
        depth = 1
        while depth:
            if self.at_end():
                raise SourceParseError(self.path, "unclosed '<'", self.line_of(opener.start))
            if self.value() in ("(", "["):
                self.skip_balanced()
                continue
            tok = self.advance()
            if tok.value == "<":
                depth += 1
            elif tok.value == ">":
                depth -= 1
        return tok

    def skip_attributes(self) -> None:
        while self.value() == "[":
            self.skip_balanced()

    def skip_to_semicolon(self) -> None:
        """Skip an initializer or expression body through its ';'."""
        while not self.at_end():
            v = self.value()
            if v == ";":
                self.advance()
                return
            if v == "}":
                return
            if v in OPENERS:
                self.skip_balanced()
                continue
            if v in CLOSERS:
                raise self.error(f"unexpected '{v}'")
            self.advance()

    def skip_statement(self) -> None:
        """Skip a top-level statement or directive."""
        while not self.at_end():
            v = self.value()
            if v == ";":
                self.advance()
                return
            if v == "}":
                return
            if v in ("(", "["):
                self.skip_balanced()
                continue
            if v == "{":
                self.skip_balanced()
                if self.value() not in (";", ")", ",", "."):
                    return
                continue
            if v in CLOSERS:
                raise self.error(f"unexpected '{v}'")
            self.advance()

    def skip_member_tail(self) -> None:
        """Skip constructors, operators, indexers and anything unrecognised."""
        while not self.at_end():
            v = self.value()
            if v == ";":
                self.advance()
                return
            if v == "}":
                return
            if v == "=>":
                self.skip_to_semicolon()
                return
            if v == "{":
                self.skip_balanced()
                if self.value() == ";":
                    self.advance()
                return
            if v in ("(", "["):
                self.skip_balanced()
                continue
            if v in CLOSERS:
                raise self.error(f"unexpected '{v}'")
            self.advance()

    def source_between(self, start: int, end: int) -> str:
        return normalize_type(self.masked[start:end])

    # ── namespaces and types ──

    def parse(self) -> list[Declaration]:
        self.parse_namespace_body(until_close=False)
        return [d for d in self.declarations if d is not None]

    def parse_namespace_body(self, until_close: bool) -> None:
        while not self.at_end():
            v = self.value()
            if v == "}":
                if until_close:
                    return
                raise self.error("unexpected '}'")
            if v == "using" or (v == "extern" and self.value(1) == "alias"):
                self.skip_statement()
            elif v == "namespace":
                self.advance()
                while self.value() not in ("{", ";"):
                    self.advance()
                if self.advance().value == "{":
                    self.parse_namespace_body(until_close=True)
                    self.expect("}")
            elif v == "[" and self.value(1) in ("assembly", "module") and self.value(2) == ":":
                self.skip_balanced()
            elif v == ";":
                self.advance()
            elif not self.try_type_declaration():
                self.skip_statement()
        if until_close:
            raise self.error("unexpected end of file inside namespace")

    def read_modifiers(self) -> list[str]:
        modifiers = []
        while self.value() in MODIFIERS and self.is_ident():
            modifiers.append(self.advance().value)
        return modifiers

    def try_type_declaration(self) -> bool:
        """Parse a type declaration at the cursor, or rewind and return False."""
        saved = self.pos
        first = self.peek()
        self.skip_attributes()
        modifiers = self.read_modifiers()
        keyword = self.value()
        is_type = keyword in TYPE_KEYWORDS and keyword != "record"
        if keyword == "record":
            is_type = self.value(1) in ("class", "struct") or self.is_ident(1)
        if not is_type:
            self.pos = saved
            return False
        self.parse_type(keyword, modifiers, first.start)
        return True

    def parse_type(self, keyword: str, modifiers: list[str], start: int) -> None:
        self.advance()
        kind = keyword
        if keyword == "record":
            kind = "struct" if self.value() == "struct" else "record"
            if self.value() in ("class", "struct"):
                self.advance()

        if keyword == "delegate":
            self.parse_type_ref()
            name = self.advance().value
            self.skip_to_semicolon()
            self.symbols.append(TypeSymbol(name=name, kind="delegate"))
            return

        if not self.is_ident():
            raise self.error(f"expected a name after '{keyword}'")
        name = self.advance().value
        if self.value() == "<":
            self.skip_angle()
        if self.value() == "(":
            self.skip_balanced()

        bases: list[str] = []
        if self.value() == ":":
            self.advance()
            bases = self.parse_base_list()
        while self.value() == "where":
            while not self.at_end() and self.value() not in ("{", ";"):
                if self.value() == "(":
                    self.skip_balanced()
                else:
                    self.advance()

        self.symbols.append(TypeSymbol(name=name, kind=kind, base_types=tuple(bases)))

        if keyword == "enum":
            self.skip_balanced()
            if self.value() == ";":
                self.advance()
            return

        slot = None
        if keyword in ("class", "interface"):
            slot = len(self.declarations)
            self.declarations.append(None)

        members: list[Member] = []
        if self.value() == ";":
            end = self.advance().end
        else:
            self.expect("{")
            members = self.parse_type_body(name, keyword)
            end = self.expect("}").end
            if self.value() == ";":
                end = self.advance().end

        if slot is not None:
            self.declarations[slot] = Declaration(
                file=self.path,
                name=name,
                kind=DeclarationKind(keyword),
                modifiers=frozenset(modifiers),
                base_types=tuple(bases),
                members=tuple(members),
                line=self.line_of(start),
                column=self.column_of(start),
                source=self.text[start:end],
            )

    def parse_base_list(self) -> list[str]:
        bases = []
        while True:
            type_text = self.parse_type_ref()
            if type_text is None:
                raise self.error("expected a base type")
            bases.append(type_text)
            if self.value() == "(":
                self.skip_balanced()
            if self.value() != ",":
                return bases
            self.advance()

    def parse_type_ref(self) -> Optional[str]:
        """Parse a type reference and return its text, or None if there is none."""
        first = self.peek()
        if first is None:
            return None
        if first.value == "(":
            last = self.skip_balanced()
        elif first.kind == "ident":
            while True:
                last = self.advance()
                if self.value() == "::" and self.is_ident(1):
                    self.advance()
                    continue
                if self.value() == "<":
                    last = self.skip_angle()
                if self.value() == "." and self.is_ident(1):
                    self.advance()
                    continue
                break
        else:
            return None

        while True:
            if self.value() in ("?", "*"):
                last = self.advance()
            elif self.value() == "[" and self.value(1) in ("]", ","):
                last = self.skip_balanced()
            else:
                break
        return self.source_between(first.start, last.end)

    # ── members ──

    def parse_type_body(self, type_name: str, keyword: str) -> list[Member]:
        members = []
        default_visibility = "public" if keyword == "interface" else "private"
        while self.value() != "}":
            if self.at_end():
                raise self.error(f"unexpected end of file inside '{type_name}'")
            member = self.parse_member(type_name, default_visibility)
            if member is not None:
                members.append(member)
        return members

    def parse_member(self, type_name: str, default_visibility: str) -> Optional[Member]:
        if self.value() == ";":
            self.advance()
            return None
        if self.try_type_declaration():
            return None

        first = self.peek()
        line = self.line_of(first.start)
        self.skip_attributes()
        modifiers = self.read_modifiers()
        visibility = visibility_from(modifiers, default_visibility)
        v = self.value()

        if v == "~" or "implicit" in modifiers or "explicit" in modifiers:
            self.skip_member_tail()
            return None
        if v == "event":
            self.advance()
            return self.parse_event(modifiers, visibility, line)
        if v == type_name and self.value(1) == "(":
            self.skip_member_tail()
            return None

        type_text = self.parse_type_ref()
        if type_text is None:
            self.skip_member_tail()
            return None
        if self.value() == "operator" or (self.value() == "this" and self.value(1) == "["):
            self.skip_member_tail()
            return None

        name = self.parse_member_name()
        if name is None or name == "this":
            self.skip_member_tail()
            return None

        common = dict(name=name, visibility=visibility, modifiers=frozenset(modifiers), line=line)

        if self.value() == "(":
            parameters = self.parse_parameters()
            while self.value() == "where":
                while not self.at_end() and self.value() not in ("{", ";", "=>"):
                    if self.value() == "(":
                        self.skip_balanced()
                    else:
                        self.advance()
            markers: frozenset[str] = frozenset()
            if self.value() == "{":
                opener = self.peek()
                closer = self.skip_balanced()
                markers = frozenset(_RECEIVER_RE.findall(self.masked[opener.end:closer.start]))
            elif self.value() == "=>":
                self.skip_to_semicolon()
            elif self.value() == ";":
                self.advance()
            else:
                raise self.error(f"unexpected '{self.value()}' after parameters of '{name}'")
            return Member(
                kind=MemberKind.METHOD,
                parameters=tuple(parameters),
                type_text=type_text,
                body_markers=markers,
                **common,
            )

        if self.value() == "{":
            accessors = self.parse_accessors()
            if self.value() == "=":
                self.skip_to_semicolon()
            return Member(kind=MemberKind.PROPERTY, type_text=type_text, accessors=accessors, **common)

        if self.value() == "=>":
            self.skip_to_semicolon()
            return Member(kind=MemberKind.PROPERTY, type_text=type_text, **common)

        self.skip_to_semicolon()
        return Member(kind=MemberKind.FIELD, type_text=type_text, **common)

    def parse_member_name(self) -> Optional[str]:
        """Read a possibly qualified member name (``IFoo<T>.Bar``); return the last part."""
        name = None
        while self.is_ident():
            name = self.advance().value
            if self.value() == "<":
                self.skip_angle()
            if self.value() == "." and self.is_ident(1):
                self.advance()
                continue
            break
        return name

    def parse_event(self, modifiers: list[str], visibility: str, line: int) -> Member:
        type_text = self.parse_type_ref() or ""
        name = self.parse_member_name() or ""
        accessors = None
        if self.value() == "{":
            accessors = self.parse_accessors()
        else:
            self.skip_to_semicolon()
        return Member(
            kind=MemberKind.EVENT,
            name=name,
            visibility=visibility,
            modifiers=frozenset(modifiers),
            type_text=type_text,
            accessors=accessors,
            line=line,
        )

    def parse_parameters(self) -> list[Parameter]:
        self.expect("(")
        parameters = []
        while self.value() != ")":
            if self.at_end():
                raise self.error("unexpected end of file inside a parameter list")
            self.skip_attributes()
            modifiers = []
            while self.value() in PARAMETER_MODIFIERS and self.is_ident(1):
                modifiers.append(self.advance().value)
            type_text = self.parse_type_ref()
            name = self.advance().value if self.is_ident() else ""
            if type_text is not None:
                parameters.append(Parameter(name=name, type_text=type_text, modifiers=frozenset(modifiers)))
            while self.value() not in (",", ")"):
                if self.at_end():
                    raise self.error("unexpected end of file inside a parameter list")
                if self.value() in OPENERS:
                    self.skip_balanced()
                elif self.value() in CLOSERS:
                    raise self.error(f"unexpected '{self.value()}' in a parameter list")
                else:
                    self.advance()
            if self.value() == ",":
                self.advance()
        self.expect(")")
        return parameters

    def parse_accessors(self) -> tuple[Accessor, ...]:
        self.expect("{")
        accessors = []
        while self.value() != "}":
            if self.at_end():
                raise self.error("unexpected end of file inside an accessor list")
            self.skip_attributes()
            modifiers = self.read_modifiers()
            kind = self.advance().value
            if self.value() == ";":
                self.advance()
            elif self.value() == "{":
                self.skip_balanced()
            elif self.value() == "=>":
                self.skip_to_semicolon()
            else:
                raise self.error(f"unexpected '{self.value()}' in accessor '{kind}'")
            accessors.append(Accessor(kind=kind, modifiers=frozenset(modifiers)))
        self.expect("}")
        return tuple(accessors)


class CSharpReader:
    """SourceModel adapter for C# files."""

    language = "csharp"

    def read(self, text: str, path: str) -> SourceUnit:
        parser = _Parser(text, path)
        declarations = parser.parse()
        logger.debug("source_parsed", file=path, declarations=len(declarations))
        return SourceUnit(path, declarations, SymbolTable(parser.symbols))

    def read_file(self, path: Union[str, Path]) -> SourceUnit:
        """Read and parse a file. I/O and decode errors surface as SourceParseError."""
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceParseError(str(path), f"cannot read file: {e}") from e
        return self.read(text, str(path))
