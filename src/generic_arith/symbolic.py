"""Symbolic expression values that record generic operations as trees."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, Union

from .generic import POINTWISE_UNARY
from .kinds import NUMERIC_KINDS, Kind
from .registry import Registry

if TYPE_CHECKING:
    from .arithmetic import GenericArithmetic


@dataclass(frozen=True)
class Symbol:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Expression:
    operator: str
    operands: tuple["Term", ...]

    def __str__(self) -> str:
        inner = " ".join(str(item) for item in self.operands)
        return f"({self.operator} {inner})"


Term = Union[Symbol, Expression, object]

_SYMBOLIC_BINARY: Final[tuple[str, ...]] = ("add", "sub", "mul", "div", "expt", "atan", "make_rectangular", "make_polar")


def is_symbolic(value: object) -> bool:
    return isinstance(value, (Symbol, Expression))


def symbols(names: str) -> tuple[Symbol, ...]:
    return tuple(Symbol(name) for name in names.split())


def _recorder(name: str):
    def record(*operands):
        return Expression(operator=name, operands=operands)

    record.__name__ = f"symbolic_{name}"
    return record


def variables(term: Term) -> frozenset[str]:
    if isinstance(term, Symbol):
        return frozenset((term.name,))
    if isinstance(term, Expression):
        out: frozenset[str] = frozenset()
        for item in term.operands:
            out |= variables(item)
        return out
    return frozenset()


def substitute(term: Term, bindings: Mapping[str, object], arithmetic: "GenericArithmetic"):
    """Evaluate ``term`` with ``bindings`` through generic dispatch.

    Unbound symbols stay symbolic, so partial bindings return a smaller tree.
    """
    if isinstance(term, Symbol):
        return bindings.get(term.name, term)
    if isinstance(term, Expression):
        operands = [substitute(item, bindings, arithmetic) for item in term.operands]
        return arithmetic.operation(term.operator)(*operands)
    return term


def install(registry: Registry) -> None:
    registry.register_kind(is_symbolic, Kind.SYMBOLIC)
    operand_kinds = NUMERIC_KINDS + (Kind.SYMBOLIC,)
    for name in _SYMBOLIC_BINARY:
        record = _recorder(name)
        registry.register_method(name, (Kind.SYMBOLIC, operand_kinds), record)
        registry.register_method(name, (NUMERIC_KINDS, Kind.SYMBOLIC), record)
    for name in POINTWISE_UNARY:
        registry.register_method(name, (Kind.SYMBOLIC,), _recorder(name))
