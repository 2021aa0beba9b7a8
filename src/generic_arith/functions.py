"""Pointwise arithmetic on callables.

``add(f, g)`` is the function ``x -> add(f(x), g(x))`` with the arity both
operands accept; a constant operand is held fixed. Unary operations
compose: ``sin(f)`` is ``x -> sin(f(x))``.
"""

from __future__ import annotations

from typing import Final

from .arity import arity, with_arity
from .generic import POINTWISE_UNARY, GenericOperation
from .kinds import ARRAY_KINDS, NUMERIC_KINDS, Kind
from .registry import Registry

_POINTWISE_BINARY: Final[tuple[str, ...]] = ("add", "sub", "mul", "div", "expt")
_CONSTANT_KINDS: Final[tuple[Kind, ...]] = NUMERIC_KINDS + ARRAY_KINDS + (Kind.SYMBOLIC,)


def _label(fn) -> str:
    return str(getattr(fn, "__name__", None) or fn)


def _pointwise(op: GenericOperation):
    def combine(f, g):
        shared = arity(f).intersect(arity(g))
        return with_arity(lambda *args: op(f(*args), g(*args)), shared, name=f"{op.name}({_label(f)}, {_label(g)})")

    return combine


def _constant_left(op: GenericOperation):
    def combine(c, g):
        return with_arity(lambda *args: op(c, g(*args)), arity(g), name=f"{op.name}({c}, {_label(g)})")

    return combine


def _constant_right(op: GenericOperation):
    def combine(f, c):
        return with_arity(lambda *args: op(f(*args), c), arity(f), name=f"{op.name}({_label(f)}, {c})")

    return combine


def _lifted(op: GenericOperation):
    def apply(f):
        return with_arity(lambda *args: op(f(*args)), arity(f), name=f"{op.name}({_label(f)})")

    return apply


def _constant_function(value):
    def build(f):
        return with_arity(lambda *_args: value, arity(f), name=str(value))

    return build


def install(registry: Registry) -> None:
    for name in _POINTWISE_BINARY:
        op = GenericOperation(registry, name)
        registry.register_method(name, (Kind.FUNCTION, Kind.FUNCTION), _pointwise(op))
        registry.register_method(name, (_CONSTANT_KINDS, Kind.FUNCTION), _constant_left(op))
        registry.register_method(name, (Kind.FUNCTION, _CONSTANT_KINDS), _constant_right(op))
    for name in POINTWISE_UNARY:
        registry.register_method(name, (Kind.FUNCTION,), _lifted(GenericOperation(registry, name)))
    registry.register_identity(Kind.FUNCTION, zero=_constant_function(0), one=_constant_function(1))
