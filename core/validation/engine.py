"""
Rule evaluation.

:func:`validate` walks the declared fields in order and returns the
accepted (normalised) payload together with every violation found.
Nothing is persisted here; callers only act on the accepted payload once
the error mapping is empty.
"""
from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from functools import singledispatch
from typing import Any, Mapping, Optional, Sequence

import bleach
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from core.identity import ANONYMOUS, Identity, RouteParams
from core.validation.messages import message_for
from core.validation.rules import (
    AtMost, Coalesce, Date, DateTime, Different, Email, Exists, Field, GreaterThan, In, Integer, Lookup,
    Numeric, Payload, Route, Rule, String, Unique,
)

MISSING = object()


class RuleViolation(Exception):
    """Raised by a check; ``fatal`` stops the remaining rules of the field."""

    def __init__(self, kind: str, fatal: bool = False, value: Any = MISSING, **params):
        super().__init__(kind)
        self.kind = kind
        self.fatal = fatal
        self.value = value
        self.params = params


@dataclass
class RuleContext:
    payload: Mapping[str, Any]
    store: Any
    route: RouteParams = field(default_factory=RouteParams)
    identity: Identity = ANONYMOUS
    accepted: dict = field(default_factory=dict)
    field_name: str = ''

    def resolve(self, operand: Any) -> Any:
        """Return the operand's value, or ``None`` when it cannot be resolved."""
        if isinstance(operand, Payload):
            if operand.field in self.accepted:
                return self.accepted[operand.field]
            return self.payload.get(operand.field)
        if isinstance(operand, Route):
            return self.route.param(operand.name)
        if isinstance(operand, Lookup):
            record = self.store.find(operand.collection, self.resolve(operand.key))
            return getattr(record, operand.attribute, None) if record is not None else None
        if isinstance(operand, Coalesce):
            for candidate in operand.operands:
                value = self.resolve(candidate)
                if value is not None:
                    return value
            return None
        return operand


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip()) or value == []


def _decimal(value: Any) -> Optional[Decimal]:
    if isinstance(value, bool):
        return None
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return result if result.is_finite() else None


@singledispatch
def check(rule: Rule, value: Any, ctx: RuleContext) -> Any:
    raise TypeError(f'no check registered for {type(rule).__name__}')


@check.register
def _(rule: String, value, ctx):
    if not isinstance(value, str):
        raise RuleViolation('string', fatal=True)
    value = value.strip()
    if rule.sanitize:
        value = bleach.clean(value, strip=True)
    if rule.max is not None and len(value) > rule.max:
        raise RuleViolation('max_length', value=value, max=rule.max)
    if rule.min is not None and len(value) < rule.min:
        raise RuleViolation('min_length', value=value, min=rule.min)
    return value


@check.register
def _(rule: Email, value, ctx):
    if not isinstance(value, str):
        raise RuleViolation('email', fatal=True)
    try:
        validate_email(value)
    except DjangoValidationError:
        raise RuleViolation('email', fatal=True) from None
    return value


def _digits(number: Decimal) -> tuple[int, int]:
    """``(whole, decimal)`` digit counts, ignoring trailing zeros."""
    _sign, digits, exponent = number.normalize().as_tuple()
    if exponent >= 0:
        return len(digits) + exponent, 0
    return max(len(digits) + exponent, 0), -exponent


@check.register
def _(rule: Numeric, value, ctx):
    number = _decimal(value)
    if number is None:
        raise RuleViolation('numeric', fatal=True)
    whole, decimals = _digits(number)
    if rule.decimal_places is not None and decimals > rule.decimal_places:
        raise RuleViolation('decimal_places', fatal=True, decimal_places=rule.decimal_places)
    if rule.max_digits is not None and whole > rule.max_digits - (rule.decimal_places or 0):
        raise RuleViolation('max_digits', fatal=True, max_digits=rule.max_digits)
    if rule.min is not None and number < Decimal(str(rule.min)):
        raise RuleViolation('min', value=number, min=rule.min)
    if rule.max is not None and number > Decimal(str(rule.max)):
        raise RuleViolation('max', value=number, max=rule.max)
    return number


@check.register
def _(rule: Integer, value, ctx):
    number = _decimal(value)
    if number is None or number != number.to_integral_value():
        raise RuleViolation('integer', fatal=True)
    number = int(number)
    if rule.min is not None and number < rule.min:
        raise RuleViolation('min', value=number, min=rule.min)
    if rule.max is not None and number > rule.max:
        raise RuleViolation('max', value=number, max=rule.max)
    return number


@check.register
def _(rule: Date, value, ctx):
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    parsed = None
    if isinstance(value, str):
        text = value.strip()
        try:
            parsed = parse_date(text)
            if parsed is None:
                # a full ISO datetime is accepted and truncated to its day
                moment = parse_datetime(text)
                parsed = moment.date() if moment is not None else None
        except ValueError:
            parsed = None
    if parsed is None:
        raise RuleViolation('date', fatal=True)
    return parsed


@check.register
def _(rule: DateTime, value, ctx):
    parsed = value if isinstance(value, datetime.datetime) else None
    if parsed is None and isinstance(value, str):
        text = value.strip()
        try:
            parsed = parse_datetime(text)
            if parsed is None:
                day = parse_date(text)
                parsed = datetime.datetime.combine(day, datetime.time.min) if day else None
        except ValueError:
            parsed = None
    if parsed is None:
        raise RuleViolation('datetime', fatal=True)
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


@check.register
def _(rule: In, value, ctx):
    if value not in rule.choices:
        raise RuleViolation('in', values=', '.join(str(c) for c in rule.choices))
    return value


def _filters(where: Mapping[str, Any], ctx: RuleContext) -> dict:
    return {column: ctx.resolve(operand) for column, operand in where.items()}


@check.register
def _(rule: Exists, value, ctx):
    if not ctx.store.exists(rule.collection, **{rule.column: value}, **_filters(rule.where, ctx)):
        raise RuleViolation('exists')
    return value


@check.register
def _(rule: Unique, value, ctx):
    column = rule.column or ctx.field_name
    ignored = ctx.resolve(rule.ignore) if rule.ignore is not None else None
    exclude = {'pk': ignored} if ignored is not None else None
    if ctx.store.exists(rule.collection, exclude=exclude, **{column: value}, **_filters(rule.where, ctx)):
        raise RuleViolation('unique')
    return value


def _same(left: Any, right: Any) -> bool:
    """Equality after the casting the database applies to ids and amounts."""
    left_number, right_number = _decimal(left), _decimal(right)
    if left_number is not None and right_number is not None:
        return left_number == right_number
    return str(left).strip() == str(right).strip()


@check.register
def _(rule: Different, value, ctx):
    other = ctx.resolve(rule.ref if rule.ref is not None else Payload(rule.other))
    if not _is_blank(other) and _same(other, value):
        raise RuleViolation('different', other=rule.other)
    return value


def _compare(value, ctx: RuleContext, ref) -> tuple[Optional[Decimal], Optional[Decimal]]:
    reference = ctx.resolve(ref)
    if reference is None:
        return None, None
    return _decimal(value), _decimal(reference)


@check.register
def _(rule: GreaterThan, value, ctx):
    number, reference = _compare(value, ctx, rule.ref)
    if number is not None and reference is not None and not number > reference:
        raise RuleViolation('gt', value=reference)
    return value


@check.register
def _(rule: AtMost, value, ctx):
    number, reference = _compare(value, ctx, rule.ref)
    if number is not None and reference is not None and number > reference:
        raise RuleViolation('lte', value=reference)
    return value


def validate(fields: Sequence[Field], payload: Mapping[str, Any], *, store,
             route: Optional[RouteParams] = None, identity: Identity = ANONYMOUS,
             messages: Optional[Mapping[str, Any]] = None) -> tuple[dict, dict[str, list[str]]]:
    """Evaluate ``fields`` against ``payload``.

    Returns ``(accepted, errors)``.  ``accepted`` only holds declared keys
    that were present; ``errors`` maps a field to its messages in rule
    order and is empty when the payload passed.
    """
    ctx = RuleContext(payload=payload, store=store, route=route or RouteParams(), identity=identity)
    errors: dict[str, list[str]] = {}

    def fail(name: str, kind: str, params: Mapping[str, Any]) -> None:
        errors.setdefault(name, []).append(message_for(name, kind, params, messages))

    for spec in fields:
        value = payload.get(spec.name, MISSING)
        if value is MISSING:
            if spec.required and not spec.sometimes:
                fail(spec.name, 'required', {})
            continue
        if _is_blank(value):
            if spec.nullable:
                ctx.accepted[spec.name] = None
            elif spec.required:
                fail(spec.name, 'required', {})
            continue

        ctx.field_name = spec.name
        failed = False
        for rule in spec.rules:
            try:
                value = check(rule, value, ctx)
            except RuleViolation as violation:
                failed = True
                fail(spec.name, violation.kind, violation.params)
                if violation.fatal:
                    break
                if violation.value is not MISSING:
                    value = violation.value
        if not failed:
            ctx.accepted[spec.name] = value

    return ctx.accepted, errors
