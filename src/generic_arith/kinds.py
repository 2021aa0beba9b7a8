"""Kind model and the value classifier used to build dispatch keys."""

from __future__ import annotations

import logging
import numbers
import os
from collections.abc import Hashable
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Final

from .errors import MalformedRegistration, UnclassifiableOperand

logger = logging.getLogger(__name__)

_STRICT_KINDS: Final[bool] = os.environ.get("GENERIC_ARITH_STRICT_KINDS", "0") == "1"


class Kind(str, Enum):
    NUMBER = "number"
    INTEGRAL = "integral"
    RATIONAL = "rational"
    REAL = "real"
    COMPLEX = "complex"
    TEXT = "text"
    ARRAY = "array"
    VECTOR = "vector"
    MATRIX = "matrix"
    FUNCTION = "function"
    SYMBOLIC = "symbolic"
    OPAQUE = "opaque"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class UserKind:
    """Kind tag for datatypes defined outside this package."""

    name: str

    def __str__(self) -> str:
        return self.name


KindTag = Hashable
Predicate = Callable[[object], bool]

NUMERIC_KINDS: Final[tuple[Kind, ...]] = (Kind.INTEGRAL, Kind.RATIONAL, Kind.REAL, Kind.COMPLEX)
ORDERED_KINDS: Final[tuple[Kind, ...]] = (Kind.INTEGRAL, Kind.RATIONAL, Kind.REAL)
EXACT_KINDS: Final[tuple[Kind, ...]] = (Kind.INTEGRAL, Kind.RATIONAL)
ARRAY_KINDS: Final[tuple[Kind, ...]] = (Kind.ARRAY, Kind.VECTOR, Kind.MATRIX)

_BUILTIN_PARENTS: Final[dict[Kind, Kind]] = {
    Kind.INTEGRAL: Kind.NUMBER,
    Kind.RATIONAL: Kind.NUMBER,
    Kind.REAL: Kind.NUMBER,
    Kind.COMPLEX: Kind.NUMBER,
    Kind.VECTOR: Kind.ARRAY,
    Kind.MATRIX: Kind.ARRAY,
}


@dataclass(frozen=True)
class KindRule:
    predicate: Predicate
    kind: KindTag
    order: int


def _is_integral(value: object) -> bool:
    return isinstance(value, numbers.Integral)


def _is_rational(value: object) -> bool:
    return isinstance(value, numbers.Rational) and not isinstance(value, numbers.Integral)


def _is_real(value: object) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, numbers.Rational)


def _is_complex(value: object) -> bool:
    return isinstance(value, numbers.Complex) and not isinstance(value, numbers.Real)


def _is_number(value: object) -> bool:
    return isinstance(value, numbers.Number)


def _is_text(value: object) -> bool:
    return isinstance(value, str)


class KindClassifier:
    """Assigns a kind to any value from an ordered table of predicate rules.

    When several rules match, the rule whose kind sits deepest in the kind
    hierarchy wins, and among equally deep kinds the most recently registered
    rule wins. Values matching no rule get ``Kind.OPAQUE`` unless the
    classifier is strict, in which case ``UnclassifiableOperand`` is raised.
    """

    def __init__(self, *, strict: bool = _STRICT_KINDS) -> None:
        self.strict = strict
        self._rules: list[KindRule] = []
        self._parents: dict[KindTag, KindTag | None] = {kind: None for kind in Kind}
        self._parents.update(_BUILTIN_PARENTS)
        self.register(_is_number, Kind.NUMBER)
        self.register(_is_integral, Kind.INTEGRAL)
        self.register(_is_rational, Kind.RATIONAL)
        self.register(_is_real, Kind.REAL)
        self.register(_is_complex, Kind.COMPLEX)
        self.register(_is_text, Kind.TEXT)
        self.register(callable, Kind.FUNCTION)

    def register(self, predicate: Predicate, kind: KindTag, *, parent: KindTag | None = None) -> KindRule:
        """Add a classification rule for ``kind``.

        A value matched by several rules takes the deepest kind. A rule without
        ``parent`` sits at depth zero, so it loses to any deeper builtin kind that
        also matches (``bool`` is ``INTEGRAL``, a ``Fraction`` subclass is
        ``RATIONAL``). Pass the matching builtin kind as ``parent`` to claim such
        values.
        """
        if not callable(predicate):
            raise MalformedRegistration(f"kind predicate for {kind} must be callable")
        if kind is Kind.OPAQUE:
            raise MalformedRegistration("the opaque kind is reserved for unclassified values")
        try:
            hash(kind)
        except TypeError as err:
            raise MalformedRegistration(f"kind tag {kind!r} must be hashable") from err
        if parent is not None:
            if parent not in self._parents:
                raise MalformedRegistration(f"parent kind {parent} is not known")
            if parent == kind or kind in self.ancestors(parent):
                raise MalformedRegistration(f"kind {kind} cannot descend from itself")
            self._parents[kind] = parent
        else:
            self._parents.setdefault(kind, None)
        rule = KindRule(predicate=predicate, kind=kind, order=len(self._rules))
        self._rules.append(rule)
        logger.debug("registered kind rule %s (parent=%s)", kind, self._parents[kind])
        return rule

    def is_known(self, kind: KindTag) -> bool:
        return kind in self._parents

    def parent(self, kind: KindTag) -> KindTag | None:
        return self._parents.get(kind)

    def ancestors(self, kind: KindTag) -> tuple[KindTag, ...]:
        out = []
        current = self._parents.get(kind)
        while current is not None:
            out.append(current)
            current = self._parents.get(current)
        return tuple(out)

    def depth(self, kind: KindTag) -> int:
        return len(self.ancestors(kind))

    def is_subkind(self, kind: KindTag, family: KindTag) -> bool:
        return kind == family or family in self.ancestors(kind)

    def kinds(self) -> tuple[KindTag, ...]:
        return tuple(self._parents)

    def kind(self, value: object) -> KindTag:
        best: KindRule | None = None
        best_rank = (-1, -1)
        for rule in self._rules:
            if not rule.predicate(value):
                continue
            rank = (self.depth(rule.kind), rule.order)
            if rank > best_rank:
                best, best_rank = rule, rank
        if best is None:
            if self.strict:
                raise UnclassifiableOperand(value)
            return Kind.OPAQUE
        return best.kind

    def kind_predicate(self, value: object) -> Predicate:
        target = self.kind(value)

        def matches(other: object) -> bool:
            return self.is_subkind(self.kind(other), target)

        return matches
