"""Per-operation method tables and the registry that owns them."""

from __future__ import annotations

import logging
import os
import threading
from contextlib import nullcontext
from dataclasses import dataclass
from enum import Enum
from itertools import product
from typing import Callable, Final, Iterable

from .errors import MalformedRegistration, NoApplicableMethod, UnknownOperation
from .identities import IdentityRule, IdentityTable
from .kinds import Kind, KindClassifier, KindTag, Predicate

logger = logging.getLogger(__name__)

_USE_TABLE_LOCK: Final[bool] = os.environ.get("GENERIC_ARITH_DISABLE_TABLE_LOCK", "0") != "1"
_WARN_ON_OVERWRITE: Final[bool] = os.environ.get("GENERIC_ARITH_WARN_ON_OVERWRITE", "0") == "1"

DispatchKey = tuple[KindTag, ...]
Method = Callable[..., object]


class IdentityRole(str, Enum):
    NONE = "none"
    ADDITIVE = "additive"
    SUBTRACTIVE = "subtractive"
    MULTIPLICATIVE = "multiplicative"
    DIVISIVE = "divisive"


@dataclass(frozen=True)
class OperationSpec:
    name: str
    min_arity: int
    max_arity: int | None
    identity: IdentityRole = IdentityRole.NONE
    inverse: str | None = None

    def accepts(self, count: int) -> bool:
        if count < self.min_arity:
            return False
        return self.max_arity is None or count <= self.max_arity

    def describe_arity(self) -> str:
        if self.max_arity is None:
            return f"at least {self.min_arity}"
        if self.min_arity == self.max_arity:
            return f"exactly {self.min_arity}"
        return f"{self.min_arity} to {self.max_arity}"


class MethodTable:
    """Exact-key method table for one operation; last registration wins."""

    def __init__(self, spec: OperationSpec, *, use_lock: bool = _USE_TABLE_LOCK) -> None:
        self.spec = spec
        self._methods: dict[DispatchKey, Method] = {}
        self._lock = threading.Lock() if use_lock else nullcontext()

    def register(self, key: DispatchKey, impl: Method) -> Method | None:
        with self._lock:
            previous = self._methods.get(key)
            self._methods[key] = impl
        return previous

    def lookup(self, key: DispatchKey) -> Method | None:
        with self._lock:
            return self._methods.get(key)

    def keys(self) -> tuple[DispatchKey, ...]:
        with self._lock:
            return tuple(self._methods)

    def __len__(self) -> int:
        return len(self._methods)


def _expand_key(kinds: Iterable[KindTag | tuple[KindTag, ...]]) -> list[DispatchKey]:
    slots = []
    for entry in kinds:
        if isinstance(entry, tuple):
            if not entry:
                raise MalformedRegistration("empty kind alternative in dispatch key")
            slots.append(entry)
        else:
            slots.append((entry,))
    return [tuple(combo) for combo in product(*slots)]


class Registry:
    """Composition root for kinds, identities and operation tables.

    A registry is ordinary process state: datatype modules populate it when
    they are installed, and call sites resolve through it. Building a fresh
    ``Registry`` gives an isolated arithmetic, which is how tests shadow
    global behavior without leaking it.
    """

    def __init__(self, *, strict_kinds: bool | None = None, use_lock: bool = _USE_TABLE_LOCK) -> None:
        if strict_kinds is None:
            self.kinds = KindClassifier()
        else:
            self.kinds = KindClassifier(strict=strict_kinds)
        self.identities = IdentityTable(self.kinds)
        self._use_lock = use_lock
        self._tables: dict[str, MethodTable] = {}
        self._define_lock = threading.Lock() if use_lock else nullcontext()

    def kind(self, value: object) -> KindTag:
        return self.kinds.kind(value)

    def kind_predicate(self, value: object) -> Predicate:
        return self.kinds.kind_predicate(value)

    def register_kind(self, predicate: Predicate, kind: KindTag, *, parent: KindTag | None = None) -> None:
        self.kinds.register(predicate, kind, parent=parent)

    def register_identity(
        self,
        kind: KindTag,
        is_zero: Callable[[object], bool] | None = None,
        is_one: Callable[[object], bool] | None = None,
        zero: Callable[[object], object] | None = None,
        one: Callable[[object], object] | None = None,
        *,
        compatible: Callable[[object, object], bool] | None = None,
    ) -> IdentityRule:
        return self.identities.register(kind, is_zero, is_one, zero, one, compatible=compatible)

    def define_operation(
        self,
        name: str,
        min_arity: int,
        max_arity: int | None,
        identity: IdentityRole = IdentityRole.NONE,
        *,
        inverse: str | None = None,
    ) -> OperationSpec:
        if not isinstance(name, str) or not name:
            raise MalformedRegistration("operation name must be a non-empty string")
        if min_arity < 0:
            raise MalformedRegistration(f"{name}: minimum arity must be non-negative")
        if max_arity is not None and max_arity < max(min_arity, 1):
            raise MalformedRegistration(f"{name}: maximum arity {max_arity} is below minimum {min_arity}")
        identity = IdentityRole(identity)
        if identity is IdentityRole.NONE and inverse is not None:
            raise MalformedRegistration(f"{name}: only identity-aware operations take an inverse")
        if identity in (IdentityRole.SUBTRACTIVE, IdentityRole.DIVISIVE) and inverse is None:
            raise MalformedRegistration(f"{name}: {identity.value} operations need a unary inverse")
        if identity is not IdentityRole.NONE and max_arity is not None:
            raise MalformedRegistration(f"{name}: identity-aware operations are variadic")
        spec = OperationSpec(name=name, min_arity=min_arity, max_arity=max_arity, identity=identity, inverse=inverse)
        with self._define_lock:
            if name in self._tables:
                raise MalformedRegistration(f"operation {name!r} is already defined")
            self._tables[name] = MethodTable(spec, use_lock=self._use_lock)
        logger.debug("defined operation %s (arity %s, identity %s)", name, spec.describe_arity(), identity.value)
        return spec

    def has_operation(self, name: str) -> bool:
        return name in self._tables

    def operations(self) -> tuple[str, ...]:
        return tuple(self._tables)

    def table(self, name: str) -> MethodTable:
        table = self._tables.get(name)
        if table is None:
            raise UnknownOperation(name)
        return table

    def spec(self, name: str) -> OperationSpec:
        return self.table(name).spec

    def register_method(self, name: str, kinds: Iterable[KindTag | tuple[KindTag, ...]], impl: Method) -> Method:
        """Register ``impl`` for every exact key spelled by ``kinds``.

        A slot given as a tuple of kinds registers the method for each
        alternative, so ``((Kind.INTEGRAL, Kind.REAL), Kind.MATRIX)`` installs
        two keys.
        """
        if not self.has_operation(name):
            raise MalformedRegistration(f"cannot register a method for undefined operation {name!r}")
        if not callable(impl):
            raise MalformedRegistration(f"{name}: method implementation must be callable")
        table = self._tables[name]
        keys = _expand_key(kinds)
        for key in keys:
            self._check_key(table.spec, key)
        for key in keys:
            previous = table.register(key, impl)
            if previous is None:
                logger.debug("registered %s%s", name, _render_key(key))
            elif previous is not impl:
                level = logging.WARNING if _WARN_ON_OVERWRITE else logging.DEBUG
                logger.log(level, "overwrote %s%s", name, _render_key(key))
        return impl

    def method(self, name: str, kinds: Iterable[KindTag | tuple[KindTag, ...]]) -> Callable[[Method], Method]:
        def decorator(impl: Method) -> Method:
            return self.register_method(name, kinds, impl)

        return decorator

    def _check_key(self, spec: OperationSpec, key: DispatchKey) -> None:
        if not key:
            raise MalformedRegistration(f"{spec.name}: dispatch key must name at least one kind")
        if not spec.accepts(len(key)):
            raise MalformedRegistration(
                f"{spec.name}: key of length {len(key)} does not fit arity {spec.describe_arity()}"
            )
        if spec.identity is not IdentityRole.NONE and len(key) != 2:
            raise MalformedRegistration(f"{spec.name}: methods are registered for the binary form only")
        for kind in key:
            if kind is Kind.OPAQUE:
                raise MalformedRegistration(f"{spec.name}: opaque values never take part in dispatch")
            if not self.kinds.is_known(kind):
                raise MalformedRegistration(f"{spec.name}: kind {kind} has no classifier rule")

    def lookup(self, name: str, key: DispatchKey) -> Method | None:
        return self.table(name).lookup(key)

    def dispatch(self, name: str, args: tuple[object, ...]) -> object:
        table = self.table(name)
        key = tuple(self.kinds.kind(arg) for arg in args)
        impl = table.lookup(key)
        if impl is None:
            raise NoApplicableMethod(name, key)
        return impl(*args)


def _render_key(key: DispatchKey) -> str:
    return "(" + ", ".join(str(kind) for kind in key) + ")"
