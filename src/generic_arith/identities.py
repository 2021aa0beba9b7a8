"""Value-level additive and multiplicative identity predicates per kind."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from .errors import MalformedRegistration, NoApplicableMethod
from .kinds import KindClassifier, KindTag

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IdentityRule:
    """Identity predicates and constructors for one kind.

    ``compatible(identity, other)`` limits where the identity may be dropped
    during a two-operand call; without it the identity is universal, as the
    native ``0`` and ``1`` are.
    """

    kind: KindTag
    is_zero: Callable[[object], bool]
    is_one: Callable[[object], bool]
    zero: Callable[[object], object] | None = None
    one: Callable[[object], object] | None = None
    compatible: Callable[[object, object], bool] | None = None


def _never(_value: object) -> bool:
    return False


class IdentityTable:
    """Identity rules keyed by kind.

    A rule registered on a family kind (``Kind.NUMBER``) also answers for
    its members unless a member registers its own rule.
    """

    def __init__(self, classifier: KindClassifier) -> None:
        self._classifier = classifier
        self._rules: dict[KindTag, IdentityRule] = {}

    def register(
        self,
        kind: KindTag,
        is_zero: Callable[[object], bool] | None = None,
        is_one: Callable[[object], bool] | None = None,
        zero: Callable[[object], object] | None = None,
        one: Callable[[object], object] | None = None,
        *,
        compatible: Callable[[object, object], bool] | None = None,
    ) -> IdentityRule:
        if not self._classifier.is_known(kind):
            raise MalformedRegistration(f"identity registered for unknown kind {kind}")
        checks = (("is_zero", is_zero), ("is_one", is_one), ("zero", zero), ("one", one), ("compatible", compatible))
        for label, fn in checks:
            if fn is not None and not callable(fn):
                raise MalformedRegistration(f"{label} for kind {kind} must be callable")
        rule = IdentityRule(
            kind=kind,
            is_zero=is_zero or _never,
            is_one=is_one or _never,
            zero=zero,
            one=one,
            compatible=compatible,
        )
        self._rules[kind] = rule
        logger.debug("registered identity rule for %s", kind)
        return rule

    def rule_for(self, kind: KindTag) -> IdentityRule | None:
        rule = self._rules.get(kind)
        if rule is not None:
            return rule
        for ancestor in self._classifier.ancestors(kind):
            rule = self._rules.get(ancestor)
            if rule is not None:
                return rule
        return None

    def is_zero(self, value: object) -> bool:
        rule = self.rule_for(self._classifier.kind(value))
        return rule is not None and bool(rule.is_zero(value))

    def is_one(self, value: object) -> bool:
        rule = self.rule_for(self._classifier.kind(value))
        return rule is not None and bool(rule.is_one(value))

    def drops_zero(self, value: object, other: object) -> bool:
        """True when ``value`` is a zero that may be dropped next to ``other``."""
        rule = self.rule_for(self._classifier.kind(value))
        if rule is None or not rule.is_zero(value):
            return False
        return rule.compatible is None or bool(rule.compatible(value, other))

    def drops_one(self, value: object, other: object) -> bool:
        """True when ``value`` is a one that may be dropped next to ``other``."""
        rule = self.rule_for(self._classifier.kind(value))
        if rule is None or not rule.is_one(value):
            return False
        return rule.compatible is None or bool(rule.compatible(value, other))

    def zero_like(self, value: object) -> object:
        kind = self._classifier.kind(value)
        rule = self.rule_for(kind)
        if rule is None or rule.zero is None:
            raise NoApplicableMethod("zero_like", (kind,))
        return rule.zero(value)

    def one_like(self, value: object) -> object:
        kind = self._classifier.kind(value)
        rule = self.rule_for(kind)
        if rule is None or rule.one is None:
            raise NoApplicableMethod("one_like", (kind,))
        return rule.one(value)
