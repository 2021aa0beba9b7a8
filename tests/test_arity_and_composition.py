from __future__ import annotations

import math
import unittest

from generic_arith import (
    Arity,
    ArityMismatch,
    ProcedureVector,
    build_arithmetic,
    identity,
    with_arity,
)


def square(x):
    return x * x


def pair(x, y):
    return (x, y)


def optional_tail(x, y=0):
    return x + y


def star(*args):
    return sum(args)


def needs_keyword(x, *, scale):
    return x * scale


class ArityTests(unittest.TestCase):
    def setUp(self) -> None:
        self.arith = build_arithmetic()

    def test_arity_from_signature(self) -> None:
        cases = [
            (square, Arity.exactly(1)),
            (pair, Arity.exactly(2)),
            (lambda: 0, Arity.exactly(0)),
            (optional_tail, Arity.at_least(1)),
            (star, Arity.at_least(0)),
            (identity, Arity.exactly(1)),
        ]
        for fn, expected in cases:
            with self.subTest(fn=getattr(fn, "__name__", fn)):
                self.assertEqual(self.arith.arity(fn), expected)

    def test_declared_arity_wins_over_signature(self) -> None:
        fn = with_arity(star, Arity.exactly(3), name="sum3")
        self.assertEqual(self.arith.arity(fn), Arity.exactly(3))
        self.assertEqual(fn(1, 2, 3), 6)
        self.assertEqual(str(fn), "sum3")
        with self.assertRaises(ArityMismatch):
            fn(1, 2)

    def test_arity_rejects_non_callables_and_required_keywords(self) -> None:
        with self.assertRaises(ArityMismatch):
            self.arith.arity(42)
        with self.assertRaises(ArityMismatch):
            self.arith.arity(needs_keyword)

    def test_arity_intersection(self) -> None:
        self.assertEqual(Arity.exactly(2).intersect(Arity.at_least(1)), Arity.exactly(2))
        self.assertEqual(Arity.at_least(1).intersect(Arity.exactly(2)), Arity.exactly(2))
        self.assertEqual(Arity.at_least(1).intersect(Arity.at_least(3)), Arity.at_least(3))
        with self.assertRaises(ArityMismatch):
            Arity.exactly(1).intersect(Arity.exactly(2))
        with self.assertRaises(ArityMismatch):
            Arity.exactly(0).intersect(Arity.at_least(1))

    def test_procedure_vector(self) -> None:
        vec = ProcedureVector((pair, lambda a, b: a + b))
        self.assertEqual(self.arith.arity(vec), Arity.exactly(2))
        self.assertEqual(vec(2, 3), ((2, 3), 5))
        self.assertEqual(len(vec), 2)
        mixed = ProcedureVector([optional_tail, star])
        self.assertEqual(self.arith.arity(mixed), Arity.at_least(1))
        with self.assertRaises(ArityMismatch):
            self.arith.arity(ProcedureVector((square, pair)))
        with self.assertRaises(ArityMismatch):
            ProcedureVector(())
        with self.assertRaises(ArityMismatch):
            ProcedureVector((square, 3))


class CompositionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.arith = build_arithmetic()

    def test_compose_applies_right_to_left(self) -> None:
        f = self.arith.compose(lambda v: v + 1, square)
        self.assertEqual(f(4), 17)
        g = self.arith.compose(str, lambda v: v + 1, square)
        self.assertEqual(g(2), "5")

    def test_compose_keeps_inner_arity(self) -> None:
        composed = self.arith.compose(square, pair)
        self.assertEqual(self.arith.arity(self.arith.compose(square, optional_tail)), Arity.at_least(1))
        self.assertEqual(self.arith.arity(self.arith.compose(len, pair)), Arity.exactly(2))
        self.assertEqual(self.arith.arity(composed), Arity.exactly(2))
        self.assertEqual(str(self.arith.compose(square, pair)), "compose(square, pair)")

    def test_compose_degenerate_cases(self) -> None:
        self.assertIs(self.arith.compose(square), square)
        ident = self.arith.compose()
        self.assertEqual(ident("x"), "x")
        self.assertEqual(self.arith.arity(ident), Arity.exactly(1))

    def test_compose_rejects_outer_functions_without_one_argument(self) -> None:
        with self.assertRaises(ArityMismatch):
            self.arith.compose(pair, square)

    def test_compose_with_generic_operations(self) -> None:
        f = self.arith.compose(self.arith.negate, self.arith.square)
        self.assertEqual(f(3), -9)
        self.assertEqual(self.arith.arity(f), Arity.exactly(1))
        g = self.arith.compose(self.arith.sqrt, self.arith.add)
        self.assertEqual(g(9, 16), 5)
        self.assertEqual(self.arith.arity(g), Arity.at_least(0))


class ArgumentTransformTests(unittest.TestCase):
    def setUp(self) -> None:
        self.arith = build_arithmetic()

    def test_arg_shift_and_arg_scale(self) -> None:
        self.assertEqual(self.arith.arg_shift(square, 3)(4), 49)
        self.assertEqual(self.arith.arg_scale(square, 3)(4), 144)
        self.assertEqual(self.arith.arg_shift(pair, 1, 10)(0, 0), (1, 10))
        self.assertEqual(self.arith.arg_scale(pair, 2, 3)(1, 1), (2, 3))

    def test_transformed_functions_keep_arity(self) -> None:
        shifted = self.arith.arg_shift(pair, 1, 2)
        self.assertEqual(self.arith.arity(shifted), Arity.exactly(2))
        with self.assertRaises(ArityMismatch):
            shifted(1)
        variadic = self.arith.arg_scale(star, 2, 2, 2)
        self.assertEqual(self.arith.arity(variadic), Arity.exactly(3))
        self.assertEqual(variadic(1, 2, 3), 12)

    def test_factor_count_must_match_arity(self) -> None:
        with self.assertRaises(ArityMismatch):
            self.arith.arg_shift(square, 1, 2)
        with self.assertRaises(ArityMismatch):
            self.arith.arg_scale(pair, 2)
        with self.assertRaises(ArityMismatch):
            self.arith.arg_shift(optional_tail)

    def test_shift_uses_generic_add(self) -> None:
        shifted = self.arith.arg_shift(lambda v: v, 0.5)
        self.assertEqual(shifted(1), 1.5)
        self.assertEqual(self.arith.arg_shift(lambda s: s, 0)("abc"), "abc")


class SigmaTests(unittest.TestCase):
    def setUp(self) -> None:
        self.arith = build_arithmetic()

    def test_sigma_over_half_open_range(self) -> None:
        self.assertEqual(self.arith.sigma(square, 1, 5), 30)
        self.assertEqual(self.arith.sigma(square, 1, 6), 55)
        self.assertEqual(self.arith.sigma(identity, 1, 101), 5050)

    def test_empty_range_gives_additive_identity(self) -> None:
        for n in (0, 7, -3):
            with self.subTest(n=n):
                self.assertEqual(self.arith.sigma(square, n, n), 0)
        self.assertEqual(self.arith.sigma(square, 5, 1), 0)

    def test_sigma_sums_any_addable_kind(self) -> None:
        self.assertAlmostEqual(self.arith.sigma(lambda i: 1.0 / 2**i, 0, 30), 2.0, places=6)
        total = self.arith.sigma(lambda i: self.arith.div(1, i * (i + 1)), 1, 10)
        self.assertEqual(total, self.arith.div(9, 10))
        wave = self.arith.sigma(lambda k: self.arith.mul(k, self.arith.sin), 1, 3)
        self.assertAlmostEqual(wave(math.pi / 2), 3.0)


if __name__ == "__main__":
    unittest.main()
