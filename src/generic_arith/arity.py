"""Arity introspection and arity-preserving function combinators."""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Callable

from .errors import ArityMismatch


@dataclass(frozen=True)
class Arity:
    """Positional argument count: exactly ``count`` or at least ``count``."""

    count: int
    exact: bool = True

    @classmethod
    def exactly(cls, count: int) -> "Arity":
        return cls(count, True)

    @classmethod
    def at_least(cls, count: int) -> "Arity":
        return cls(count, False)

    def accepts(self, count: int) -> bool:
        if self.exact:
            return count == self.count
        return count >= self.count

    def intersect(self, other: "Arity") -> "Arity":
        if self.exact and other.exact:
            if self.count != other.count:
                raise ArityMismatch(f"incompatible arities: {self} and {other}")
            return self
        if self.exact:
            if not other.accepts(self.count):
                raise ArityMismatch(f"incompatible arities: {self} and {other}")
            return self
        if other.exact:
            return other.intersect(self)
        return Arity.at_least(max(self.count, other.count))

    def __str__(self) -> str:
        if self.exact:
            return f"exactly {self.count}"
        return f"at least {self.count}"


@dataclass(frozen=True)
class ArityFunction:
    """Callable carrying an explicit arity, checked on every call."""

    fn: Callable[..., object]
    arity: Arity
    name: str = field(default="", compare=False)

    @property
    def __arity__(self) -> Arity:
        return self.arity

    def __call__(self, *args):
        if not self.arity.accepts(len(args)):
            raise ArityMismatch(f"{self} takes {self.arity} arguments, got {len(args)}")
        return self.fn(*args)

    def __str__(self) -> str:
        return self.name or _callable_name(self.fn)


@dataclass(frozen=True)
class ProcedureVector:
    """Structure of callables applied together; returns a tuple of results."""

    procedures: tuple[Callable[..., object], ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "procedures", tuple(self.procedures))
        if not self.procedures:
            raise ArityMismatch("a procedure vector needs at least one procedure")
        for proc in self.procedures:
            if not callable(proc):
                raise ArityMismatch(f"procedure vector member {proc!r} is not callable")

    @property
    def __arity__(self) -> Arity:
        result = arity(self.procedures[0])
        for proc in self.procedures[1:]:
            result = result.intersect(arity(proc))
        return result

    def __call__(self, *args):
        return tuple(proc(*args) for proc in self.procedures)

    def __len__(self) -> int:
        return len(self.procedures)


def _callable_name(fn: object) -> str:
    if isinstance(fn, ArityFunction):
        return str(fn)
    name = getattr(fn, "__name__", None)
    if isinstance(name, str):
        return name
    return repr(fn)


def arity(fn: object) -> Arity:
    if not callable(fn):
        raise ArityMismatch(f"{fn!r} is not callable")
    declared = getattr(fn, "__arity__", None)
    if isinstance(declared, Arity):
        return declared
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return Arity.at_least(0)

    required = 0
    optional = False
    for param in signature.parameters.values():
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            if param.default is param.empty:
                required += 1
            else:
                optional = True
        elif param.kind is param.VAR_POSITIONAL:
            optional = True
        elif param.kind is param.KEYWORD_ONLY and param.default is param.empty:
            raise ArityMismatch(f"{_callable_name(fn)} requires keyword argument {param.name!r}")
    if optional:
        return Arity.at_least(required)
    return Arity.exactly(required)


def with_arity(fn: Callable[..., object], declared: Arity, name: str = "") -> ArityFunction:
    return ArityFunction(fn=fn, arity=declared, name=name)


def identity(x):
    return x


def compose(*fns: Callable[..., object]) -> Callable[..., object]:
    """Right-to-left composition keeping the innermost function's arity.

    Only the last function sees the caller's arguments; every other
    function is applied to a single value and must accept one argument.
    """
    if not fns:
        return with_arity(identity, Arity.exactly(1), name="identity")
    if len(fns) == 1:
        return fns[0]
    inner = fns[-1]
    inner_arity = arity(inner)
    outer = fns[:-1]
    for fn in outer:
        if not arity(fn).accepts(1):
            raise ArityMismatch(f"cannot compose {_callable_name(fn)}: it does not take one argument")

    def composed(*args):
        value = inner(*args)
        for fn in reversed(outer):
            value = fn(value)
        return value

    name = "compose(" + ", ".join(_callable_name(fn) for fn in fns) + ")"
    return with_arity(composed, inner_arity, name=name)


def transform_arguments(
    fn: Callable[..., object],
    factors: tuple[object, ...],
    combine: Callable[[object, object], object],
    *,
    label: str,
) -> ArityFunction:
    """Wrap ``fn`` so argument ``i`` is replaced by ``combine(arg_i, factors[i])``."""
    declared = arity(fn)
    count = len(factors)
    if not declared.accepts(count):
        raise ArityMismatch(f"{label}: {_callable_name(fn)} takes {declared} arguments, got {count} factors")
    result_arity = declared if declared.exact else Arity.exactly(count)

    def transformed(*args):
        return fn(*(combine(arg, factor) for arg, factor in zip(args, factors, strict=True)))

    return with_arity(transformed, result_arity, name=f"{label}({_callable_name(fn)})")
