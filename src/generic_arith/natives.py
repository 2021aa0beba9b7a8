"""Methods and identities for native Python numbers.

Exact operands stay exact: dividing integers yields ``Fraction`` values
(collapsed back to ``int`` when the denominator is one), and negative
integer powers of exact bases stay rational. Transcendental functions use
``math`` and switch to ``cmath`` once the argument or result leaves the
real line.
"""

from __future__ import annotations

import cmath
import math
import numbers
import operator
from fractions import Fraction
from typing import Callable

from .kinds import NUMERIC_KINDS, ORDERED_KINDS, Kind
from .registry import Registry


def _exact(value: Fraction) -> numbers.Rational:
    if value.denominator == 1:
        return value.numerator
    return value


def _is_exact(value: object) -> bool:
    return isinstance(value, numbers.Rational)


def _divide(left, right):
    if _is_exact(left) and _is_exact(right):
        return _exact(Fraction(left) / Fraction(right))
    return left / right


def _invert(value):
    return _divide(1, value)


def _expt(base, exponent):
    if _is_exact(base) and isinstance(exponent, numbers.Integral):
        if exponent >= 0:
            return base**exponent
        return _exact(Fraction(base) ** exponent)
    return base**exponent


def _quotient(left, right):
    q = abs(left) // abs(right)
    return q if (left >= 0) == (right >= 0) else -q


def _remainder(left, right):
    return left - right * _quotient(left, right)


def _modulo(left, right):
    return left % right


def _exact_divide(left, right):
    q, r = divmod(left, right)
    if r != 0:
        raise ValueError(f"exact_divide: {left} is not divisible by {right}")
    return q


def _exact_sqrt(value: numbers.Rational):
    if isinstance(value, numbers.Integral):
        root = math.isqrt(value)
        return root if root * root == value else None
    num = _exact_sqrt(value.numerator)
    den = _exact_sqrt(value.denominator)
    if num is None or den is None:
        return None
    return _exact(Fraction(num, den))


def _sqrt(value):
    if isinstance(value, numbers.Real) and not isinstance(value, numbers.Rational):
        return math.sqrt(value) if value >= 0 else cmath.sqrt(value)
    if isinstance(value, numbers.Rational):
        if value >= 0:
            exact = _exact_sqrt(value)
            if exact is not None:
                return exact
            return math.sqrt(value)
        return cmath.sqrt(value)
    return cmath.sqrt(value)


def _transcendental(
    real_fn: Callable[[float], float],
    complex_fn: Callable[[complex], complex],
    *,
    exact_at: tuple[int, int] | None = None,
    domain: Callable[[float], bool] | None = None,
) -> Callable[[object], object]:
    """Build a unary method that stays real inside ``domain``.

    ``exact_at=(a, b)`` maps the exact argument ``a`` to the exact result ``b``.
    """

    def method(value):
        if exact_at is not None and _is_exact(value) and value == exact_at[0]:
            return exact_at[1]
        if isinstance(value, numbers.Real):
            if domain is None or domain(value):
                return real_fn(value)
        return complex_fn(value)

    method.__name__ = real_fn.__name__
    return method


def _within_unit(value) -> bool:
    return -1 <= value <= 1


def _atan(*args):
    if len(args) == 1:
        (value,) = args
        if _is_exact(value) and value == 0:
            return 0
        if isinstance(value, numbers.Real):
            return math.atan(value)
        return cmath.atan(value)
    y, x = args
    if _is_exact(y) and y == 0 and x > 0:
        return 0
    return math.atan2(y, x)


def _angle(value):
    if isinstance(value, numbers.Real):
        return 0 if value >= 0 else math.pi
    return cmath.phase(value)


def _make_rectangular(real, imag):
    if _is_exact(imag) and imag == 0:
        return real
    return complex(real, imag)


def _make_polar(radius, theta):
    if _is_exact(theta) and theta == 0:
        return radius
    return cmath.rect(radius, theta)


def _zero_for(kind: Kind):
    value = {Kind.REAL: 0.0, Kind.COMPLEX: 0j}.get(kind, 0)
    return lambda _template: value


def _one_for(kind: Kind):
    value = {Kind.REAL: 1.0, Kind.COMPLEX: 1 + 0j}.get(kind, 1)
    return lambda _template: value


def install(registry: Registry) -> None:
    method = registry.register_method
    both = (NUMERIC_KINDS, NUMERIC_KINDS)
    method("add", both, operator.add)
    method("sub", both, operator.sub)
    method("mul", both, operator.mul)
    method("div", both, _divide)
    method("expt", both, _expt)
    method("negate", (NUMERIC_KINDS,), operator.neg)
    method("invert", (NUMERIC_KINDS,), _invert)
    method("is_negative", (ORDERED_KINDS,), lambda value: value < 0)

    method("quotient", (Kind.INTEGRAL, Kind.INTEGRAL), _quotient)
    method("remainder", (Kind.INTEGRAL, Kind.INTEGRAL), _remainder)
    method("modulo", (Kind.INTEGRAL, Kind.INTEGRAL), _modulo)
    method("exact_divide", (Kind.INTEGRAL, Kind.INTEGRAL), _exact_divide)
    method("gcd", (Kind.INTEGRAL, Kind.INTEGRAL), math.gcd)
    method("lcm", (Kind.INTEGRAL, Kind.INTEGRAL), math.lcm)

    method("exp", (NUMERIC_KINDS,), _transcendental(math.exp, cmath.exp, exact_at=(0, 1)))
    method("log", (NUMERIC_KINDS,), _transcendental(math.log, cmath.log, exact_at=(1, 0), domain=lambda x: x > 0))
    method("sin", (NUMERIC_KINDS,), _transcendental(math.sin, cmath.sin, exact_at=(0, 0)))
    method("cos", (NUMERIC_KINDS,), _transcendental(math.cos, cmath.cos, exact_at=(0, 1)))
    method("tan", (NUMERIC_KINDS,), _transcendental(math.tan, cmath.tan, exact_at=(0, 0)))
    method("asin", (NUMERIC_KINDS,), _transcendental(math.asin, cmath.asin, exact_at=(0, 0), domain=_within_unit))
    method("acos", (NUMERIC_KINDS,), _transcendental(math.acos, cmath.acos, exact_at=(1, 0), domain=_within_unit))
    method("sinh", (NUMERIC_KINDS,), _transcendental(math.sinh, cmath.sinh, exact_at=(0, 0)))
    method("cosh", (NUMERIC_KINDS,), _transcendental(math.cosh, cmath.cosh, exact_at=(0, 1)))
    method("tanh", (NUMERIC_KINDS,), _transcendental(math.tanh, cmath.tanh, exact_at=(0, 0)))
    method("atan", (NUMERIC_KINDS,), _atan)
    method("atan", (ORDERED_KINDS, ORDERED_KINDS), _atan)
    method("sqrt", (NUMERIC_KINDS,), _sqrt)

    method("abs", (NUMERIC_KINDS,), abs)
    method("magnitude", (NUMERIC_KINDS,), abs)
    method("angle", (NUMERIC_KINDS,), _angle)
    method("real_part", (NUMERIC_KINDS,), lambda value: value.real)
    method("imag_part", (NUMERIC_KINDS,), lambda value: value.imag)
    method("conjugate", (NUMERIC_KINDS,), lambda value: value.conjugate())
    method("make_rectangular", (ORDERED_KINDS, ORDERED_KINDS), _make_rectangular)
    method("make_polar", (ORDERED_KINDS, ORDERED_KINDS), _make_polar)

    for kind in NUMERIC_KINDS:
        registry.register_identity(
            kind,
            is_zero=lambda value: value == 0,
            is_one=lambda value: value == 1,
            zero=_zero_for(kind),
            one=_one_for(kind),
        )

