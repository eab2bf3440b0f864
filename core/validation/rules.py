"""
Declarative validation rules.

A rule is a small frozen value: its class is the tag and its fields are
the parameters.  Rules carry no behaviour; :mod:`core.validation.engine`
evaluates them.  Operands (:class:`Payload`, :class:`Route`,
:class:`Lookup`) let a rule refer to another field, a URL parameter or an
attribute of a stored record.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Mapping, Optional, Sequence, Union


@dataclass(frozen=True)
class Payload:
    """Value of another field of the same request."""
    field: str


@dataclass(frozen=True)
class Route:
    """URL parameter of the current request."""
    name: str


@dataclass(frozen=True)
class Lookup:
    """``attribute`` of the record of ``collection`` whose id is ``key``."""
    collection: str
    key: 'Operand'
    attribute: str


@dataclass(frozen=True)
class Coalesce:
    """First operand that resolves to a value."""
    operands: tuple

    def __init__(self, *operands: 'Operand'):
        object.__setattr__(self, 'operands', tuple(operands))


Operand = Union[Payload, Route, Lookup, Coalesce]


class Rule:
    kind: ClassVar[str]


@dataclass(frozen=True)
class String(Rule):
    kind: ClassVar[str] = 'string'
    min: Optional[int] = None
    max: Optional[int] = None
    sanitize: bool = False


@dataclass(frozen=True)
class Email(Rule):
    kind: ClassVar[str] = 'email'


@dataclass(frozen=True)
class Numeric(Rule):
    """Decimal number; ``max_digits``/``decimal_places`` mirror the column it lands in."""
    kind: ClassVar[str] = 'numeric'
    min: Optional[Any] = None
    max: Optional[Any] = None
    max_digits: Optional[int] = None
    decimal_places: Optional[int] = None


@dataclass(frozen=True)
class Integer(Rule):
    kind: ClassVar[str] = 'integer'
    min: Optional[int] = None
    max: Optional[int] = None


@dataclass(frozen=True)
class Date(Rule):
    kind: ClassVar[str] = 'date'


@dataclass(frozen=True)
class DateTime(Rule):
    kind: ClassVar[str] = 'datetime'


@dataclass(frozen=True)
class In(Rule):
    kind: ClassVar[str] = 'in'
    choices: Sequence[Any] = ()


@dataclass(frozen=True)
class Exists(Rule):
    """The value identifies a record of ``collection``."""
    kind: ClassVar[str] = 'exists'
    collection: str = ''
    column: str = 'id'
    where: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Unique(Rule):
    """No other record of ``collection`` holds the value.

    ``ignore`` names the record being updated; ``where`` narrows the
    scope, e.g. ``{'sale_id': Route('sale')}`` for one row per sale.
    """
    kind: ClassVar[str] = 'unique'
    collection: str = ''
    column: Optional[str] = None
    ignore: Optional[Operand] = None
    where: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Different(Rule):
    """The value differs from field ``other``.

    ``ref`` overrides where the compared value comes from, e.g. the stored
    column when an update leaves ``other`` out of the payload.
    """
    kind: ClassVar[str] = 'different'
    other: str = ''
    ref: Optional[Operand] = None


@dataclass(frozen=True)
class GreaterThan(Rule):
    kind: ClassVar[str] = 'gt'
    ref: Optional[Operand] = None


@dataclass(frozen=True)
class AtMost(Rule):
    kind: ClassVar[str] = 'lte'
    ref: Optional[Operand] = None


@dataclass(frozen=True)
class Field:
    """Presence flags plus the ordered rules of one payload key.

    ``sometimes`` skips the field entirely when the key is absent, which is
    how update requests keep unset columns untouched.
    """
    name: str
    rules: tuple = ()
    required: bool = True
    nullable: bool = False
    sometimes: bool = False

    def __init__(self, name: str, *rules: Rule, required: bool = True, nullable: bool = False,
                 sometimes: bool = False):
        object.__setattr__(self, 'name', name)
        object.__setattr__(self, 'rules', tuple(rules))
        object.__setattr__(self, 'required', required and not nullable)
        object.__setattr__(self, 'nullable', nullable)
        object.__setattr__(self, 'sometimes', sometimes)


def optional(field_: Field) -> Field:
    return Field(field_.name, *field_.rules, required=field_.required, nullable=field_.nullable,
                 sometimes=True)


def as_update(fields: Sequence[Field]) -> list[Field]:
    """Same rules, but every field may be left out."""
    return [optional(f) for f in fields]
