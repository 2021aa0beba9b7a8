"""Structured error types for generic dispatch and registration."""

from __future__ import annotations

from dataclasses import dataclass


class GenericArithError(Exception):
    """Base class for structured generic-arith errors."""


class UnclassifiableOperand(GenericArithError, TypeError):
    """No kind rule matched a value while strict classification is enabled."""

    def __init__(self, value: object) -> None:
        super().__init__(value)
        self.value = value

    def __str__(self) -> str:
        return f"cannot classify operand {self.value!r} of type {type(self.value).__name__}"


@dataclass(frozen=True)
class NoApplicableMethod(GenericArithError, TypeError):
    """An operation has no method for the resolved kind tuple."""

    operation: str
    kinds: tuple[object, ...]

    def __str__(self) -> str:
        rendered = ", ".join(str(kind) for kind in self.kinds)
        return f"no applicable method for {self.operation} on ({rendered})"


class ArityMismatch(GenericArithError, TypeError):
    """A callable or argument list does not fit the computed arity."""


class MalformedRegistration(GenericArithError, ValueError):
    """Invalid kind, identity, operation, or method registration."""


class UnknownOperation(GenericArithError, LookupError):
    """An operation name was used before it was defined."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"operation {self.name!r} is not defined"
