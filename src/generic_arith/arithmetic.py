"""Composition root binding generic operations to one registry."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Callable

from . import arrays, functions, natives, symbolic
from .arity import Arity, arity, compose, transform_arguments
from .generic import GenericOperation, install_standard_operations
from .kinds import KindTag, Predicate
from .registry import IdentityRole, Method, OperationSpec, Registry

logger = logging.getLogger(__name__)

_DATATYPE_MODULES = (natives, functions, arrays, symbolic)


class GenericArithmetic:
    """Generic operations, identities and combinators over one ``Registry``.

    Every defined operation is reachable as an attribute, so
    ``arith.add(1, 2)`` and ``arith.operation("add")(1, 2)`` are the same
    call. Operations defined later through :meth:`define_operation` become
    attributes as soon as they exist.
    """

    def __init__(self, registry: Registry) -> None:
        self.registry = registry
        self._operations: dict[str, GenericOperation] = {}

    def operation(self, name: str) -> GenericOperation:
        op = self._operations.get(name)
        if op is None:
            op = GenericOperation(self.registry, name)
            self._operations[name] = op
        return op

    def __getattr__(self, name: str) -> GenericOperation:
        if name.startswith("_") or name == "registry":
            raise AttributeError(name)
        if not self.registry.has_operation(name):
            raise AttributeError(f"{type(self).__name__!s} has no operation {name!r}")
        return self.operation(name)

    # registration surface

    def register_kind(self, predicate: Predicate, kind: KindTag, *, parent: KindTag | None = None) -> None:
        """Classify values matching ``predicate`` as ``kind``; see ``KindClassifier.register`` for ``parent``."""
        self.registry.register_kind(predicate, kind, parent=parent)

    def register_identity(self, kind: KindTag, is_zero=None, is_one=None, zero=None, one=None, *, compatible=None) -> None:
        self.registry.register_identity(kind, is_zero, is_one, zero, one, compatible=compatible)

    def define_operation(
        self,
        name: str,
        min_arity: int,
        max_arity: int | None,
        identity: IdentityRole = IdentityRole.NONE,
        *,
        inverse: str | None = None,
    ) -> OperationSpec:
        return self.registry.define_operation(name, min_arity, max_arity, identity, inverse=inverse)

    def register_method(self, name: str, kinds, impl: Method) -> Method:
        return self.registry.register_method(name, kinds, impl)

    def method(self, name: str, kinds) -> Callable[[Method], Method]:
        return self.registry.method(name, kinds)

    # classification and identities

    def kind(self, value: object) -> KindTag:
        return self.registry.kind(value)

    def kind_predicate(self, value: object) -> Predicate:
        return self.registry.kind_predicate(value)

    def is_zero(self, value: object) -> bool:
        return self.registry.identities.is_zero(value)

    def is_one(self, value: object) -> bool:
        return self.registry.identities.is_one(value)

    def zero_like(self, value: object) -> object:
        return self.registry.identities.zero_like(value)

    def one_like(self, value: object) -> object:
        return self.registry.identities.one_like(value)

    # derived operations

    def square(self, x):
        return self.operation("mul")(x, x)

    def cube(self, x):
        return self.operation("mul")(x, x, x)

    def arity(self, fn) -> Arity:
        return arity(fn)

    def compose(self, *fns):
        return compose(*fns)

    def arg_shift(self, fn, *shifts):
        return transform_arguments(fn, shifts, self.operation("add"), label="arg_shift")

    def arg_scale(self, fn, *factors):
        return transform_arguments(fn, factors, self.operation("mul"), label="arg_scale")

    def sigma(self, fn, lo: int, hi: int):
        """Sum ``fn(i)`` for integers ``lo <= i < hi`` with the generic ``add``."""
        return self.operation("add")(*(fn(i) for i in range(lo, hi)))


def build_arithmetic(registry: Registry | None = None, *, install_defaults: bool = True) -> GenericArithmetic:
    """Create an arithmetic over ``registry`` (a fresh one by default).

    With ``install_defaults`` the standard operations and the bundled
    datatypes (native numbers, functions, JAX arrays, symbolic
    expressions) are installed.
    """
    registry = Registry() if registry is None else registry
    if install_defaults:
        install_standard_operations(registry)
        for module in _DATATYPE_MODULES:
            module.install(registry)
        logger.debug("installed %d operations and %d datatype modules", len(registry.operations()), len(_DATATYPE_MODULES))
    return GenericArithmetic(registry)


@lru_cache(maxsize=1)
def default_arithmetic() -> GenericArithmetic:
    return build_arithmetic()
