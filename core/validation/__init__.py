"""Declarative request validation: rule values plus the engine that evaluates them."""
from .engine import RuleContext, RuleViolation, validate
from .rules import (
    AtMost, Coalesce, Date, DateTime, Different, Email, Exists, Field, GreaterThan, In, Integer, Lookup,
    Numeric, Payload, Route, String, Unique, as_update, optional,
)

__all__ = [
    'validate', 'RuleContext', 'RuleViolation',
    'Field', 'as_update', 'optional',
    'String', 'Email', 'Numeric', 'Integer', 'Date', 'DateTime', 'In',
    'Exists', 'Unique', 'Different', 'GreaterThan', 'AtMost',
    'Payload', 'Route', 'Lookup', 'Coalesce',
]
