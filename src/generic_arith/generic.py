"""Generic operations: identity short-circuits in front of table dispatch."""

from __future__ import annotations

from functools import reduce
from typing import Final

from .arity import Arity
from .errors import ArityMismatch
from .registry import IdentityRole, OperationSpec, Registry

# (name, min_arity, max_arity, identity role, unary inverse)
STANDARD_OPERATIONS: Final[tuple[tuple[str, int, int | None, IdentityRole, str | None], ...]] = (
    ("add", 0, None, IdentityRole.ADDITIVE, None),
    ("sub", 0, None, IdentityRole.SUBTRACTIVE, "negate"),
    ("mul", 0, None, IdentityRole.MULTIPLICATIVE, None),
    ("div", 0, None, IdentityRole.DIVISIVE, "invert"),
    ("negate", 1, 1, IdentityRole.NONE, None),
    ("invert", 1, 1, IdentityRole.NONE, None),
    ("is_negative", 1, 1, IdentityRole.NONE, None),
    ("expt", 2, 2, IdentityRole.NONE, None),
    ("quotient", 2, 2, IdentityRole.NONE, None),
    ("remainder", 2, 2, IdentityRole.NONE, None),
    ("modulo", 2, 2, IdentityRole.NONE, None),
    ("exact_divide", 2, 2, IdentityRole.NONE, None),
    ("gcd", 2, 2, IdentityRole.NONE, None),
    ("lcm", 2, 2, IdentityRole.NONE, None),
    ("exp", 1, 1, IdentityRole.NONE, None),
    ("log", 1, 1, IdentityRole.NONE, None),
    ("sin", 1, 1, IdentityRole.NONE, None),
    ("cos", 1, 1, IdentityRole.NONE, None),
    ("tan", 1, 1, IdentityRole.NONE, None),
    ("asin", 1, 1, IdentityRole.NONE, None),
    ("acos", 1, 1, IdentityRole.NONE, None),
    ("atan", 1, 2, IdentityRole.NONE, None),
    ("sinh", 1, 1, IdentityRole.NONE, None),
    ("cosh", 1, 1, IdentityRole.NONE, None),
    ("tanh", 1, 1, IdentityRole.NONE, None),
    ("sqrt", 1, 1, IdentityRole.NONE, None),
    ("abs", 1, 1, IdentityRole.NONE, None),
    ("real_part", 1, 1, IdentityRole.NONE, None),
    ("imag_part", 1, 1, IdentityRole.NONE, None),
    ("magnitude", 1, 1, IdentityRole.NONE, None),
    ("angle", 1, 1, IdentityRole.NONE, None),
    ("conjugate", 1, 1, IdentityRole.NONE, None),
    ("make_rectangular", 2, 2, IdentityRole.NONE, None),
    ("make_polar", 2, 2, IdentityRole.NONE, None),
    ("transpose", 1, 1, IdentityRole.NONE, None),
    ("dot_product", 2, 2, IdentityRole.NONE, None),
    ("inner_product", 2, 2, IdentityRole.NONE, None),
    ("outer_product", 2, 2, IdentityRole.NONE, None),
    ("cross_product", 2, 2, IdentityRole.NONE, None),
    ("determinant", 1, 1, IdentityRole.NONE, None),
    ("trace", 1, 1, IdentityRole.NONE, None),
)

STRUCTURAL_OPERATIONS: Final[frozenset[str]] = frozenset(
    {"transpose", "determinant", "trace", "dot_product", "inner_product", "outer_product", "cross_product"}
)

# Unary operations that act on a value rather than on its structure.
POINTWISE_UNARY: Final[tuple[str, ...]] = tuple(
    name
    for name, lo, hi, _, _ in STANDARD_OPERATIONS
    if lo == 1 and name != "is_negative" and name not in STRUCTURAL_OPERATIONS
)

_DEFAULT_IDENTITY: Final[dict[IdentityRole, int]] = {
    IdentityRole.ADDITIVE: 0,
    IdentityRole.SUBTRACTIVE: 0,
    IdentityRole.MULTIPLICATIVE: 1,
    IdentityRole.DIVISIVE: 1,
}


def install_standard_operations(registry: Registry) -> None:
    for name, lo, hi, role, inverse in STANDARD_OPERATIONS:
        registry.define_operation(name, lo, hi, role, inverse=inverse)


class GenericOperation:
    """Callable front end for one operation of a registry.

    Identity-aware operations (add, sub, mul, div) reduce variadic calls
    left to right and answer two-operand calls involving an identity
    element before the method table is consulted. Every other operation
    dispatches straight on its operands' kinds.
    """

    __slots__ = ("registry", "name")

    def __init__(self, registry: Registry, name: str) -> None:
        registry.table(name)
        self.registry = registry
        self.name = name

    @property
    def spec(self) -> OperationSpec:
        return self.registry.spec(self.name)

    @property
    def __name__(self) -> str:
        return self.name

    @property
    def __arity__(self) -> Arity:
        spec = self.spec
        if spec.max_arity == spec.min_arity:
            return Arity.exactly(spec.min_arity)
        return Arity.at_least(spec.min_arity)

    def __repr__(self) -> str:
        return f"<generic operation {self.name}>"

    def __call__(self, *args):
        spec = self.spec
        if not spec.accepts(len(args)):
            raise ArityMismatch(f"{self.name} takes {spec.describe_arity()} arguments, got {len(args)}")
        if spec.identity is IdentityRole.NONE:
            return self.registry.dispatch(self.name, args)
        if not args:
            return _DEFAULT_IDENTITY[spec.identity]
        if len(args) == 1:
            if spec.inverse is not None:
                return self.registry.dispatch(spec.inverse, args)
            return args[0]
        return reduce(self._binary, args[1:], args[0])

    def _binary(self, left, right):
        role = self.spec.identity
        identities = self.registry.identities
        if role is IdentityRole.ADDITIVE:
            if identities.drops_zero(left, right):
                return right
            if identities.drops_zero(right, left):
                return left
        elif role is IdentityRole.MULTIPLICATIVE:
            if identities.drops_one(left, right):
                return right
            if identities.drops_one(right, left):
                return left
        elif role is IdentityRole.SUBTRACTIVE:
            if identities.drops_zero(right, left):
                return left
            if identities.drops_zero(left, right):
                return self.registry.dispatch(self.spec.inverse, (right,))
        elif role is IdentityRole.DIVISIVE:
            if identities.drops_one(right, left):
                return left
            if identities.drops_one(left, right):
                return self.registry.dispatch(self.spec.inverse, (right,))
        return self.registry.dispatch(self.name, (left, right))
