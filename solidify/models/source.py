"""Declaration model — read-only structural snapshots of scanned types.

A Declaration is produced once per type/interface by the source reader and
discarded after the checkers have visited it.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


ACCESS_MODIFIERS = ("public", "private", "protected", "internal")


class DeclarationKind(str, Enum):
    """Kinds of declarations the checkers inspect."""

    CLASS = "class"
    INTERFACE = "interface"


class MemberKind(str, Enum):
    """Kinds of members recorded on a declaration."""

    METHOD = "method"
    PROPERTY = "property"
    FIELD = "field"
    EVENT = "event"


class Parameter(BaseModel):
    """A single method parameter."""

    model_config = {"frozen": True}

    name: str
    type_text: str
    modifiers: frozenset[str] = frozenset()


class Accessor(BaseModel):
    """A get/set/init/add/remove accessor of a property or event."""

    model_config = {"frozen": True}

    kind: str
    modifiers: frozenset[str] = frozenset()


class Member(BaseModel):
    """One method, property, field or event of a declaration.

    ``type_text`` is the return type for methods and the declared type for
    everything else. ``accessors`` is None when the member has no accessor
    list (fields, arrow-bodied properties, field-like events).
    """

    model_config = {"frozen": True}

    kind: MemberKind
    name: str
    visibility: str = "private"
    modifiers: frozenset[str] = frozenset()
    parameters: tuple[Parameter, ...] = ()
    type_text: str = ""
    accessors: Optional[tuple[Accessor, ...]] = None
    body_markers: frozenset[str] = frozenset()
    line: int = Field(default=1, ge=1)

    @property
    def parameter_types(self) -> tuple[str, ...]:
        return tuple(p.type_text for p in self.parameters)

    def has_modifier(self, modifier: str) -> bool:
        return modifier in self.modifiers

    def accessor(self, kind: str) -> Optional[Accessor]:
        """Return the first accessor of the given kind, if any."""
        for acc in self.accessors or ():
            if acc.kind == kind:
                return acc
        return None


class Declaration(BaseModel):
    """Structural snapshot of one class or interface."""

    model_config = {"frozen": True}

    file: str
    name: str
    kind: DeclarationKind
    modifiers: frozenset[str] = frozenset()
    base_types: tuple[str, ...] = ()
    members: tuple[Member, ...] = ()
    line: int = Field(default=1, ge=1)
    column: int = Field(default=1, ge=1)
    source: str = ""

    def has_modifier(self, modifier: str) -> bool:
        return modifier in self.modifiers

    def members_of(self, kind: MemberKind) -> list[Member]:
        return [m for m in self.members if m.kind == kind]

    @property
    def methods(self) -> list[Member]:
        return self.members_of(MemberKind.METHOD)

    @property
    def properties(self) -> list[Member]:
        return self.members_of(MemberKind.PROPERTY)

    @property
    def fields(self) -> list[Member]:
        return self.members_of(MemberKind.FIELD)

    @property
    def events(self) -> list[Member]:
        return self.members_of(MemberKind.EVENT)


class TypeSymbol(BaseModel):
    """A resolved type: a builtin or a type declared in the scanned unit."""

    model_config = {"frozen": True}

    name: str
    kind: str  # builtin | class | interface | struct | enum | record | delegate
    base_types: tuple[str, ...] = ()


def visibility_from(modifiers, default: str = "private") -> str:
    """Collapse access keywords into a single visibility string."""
    present = [m for m in ACCESS_MODIFIERS if m in modifiers]
    if not present:
        return default
    return " ".join(present)
