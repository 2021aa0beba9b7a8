from __future__ import annotations

import math
import unittest

from generic_arith import Arity, ArityMismatch, Kind, NoApplicableMethod, build_arithmetic, vector


def square(x):
    return x * x


def double(x):
    return 2 * x


def hypot2(x, y):
    return x * x + y * y


class FunctionArithmeticTests(unittest.TestCase):
    def setUp(self) -> None:
        self.arith = build_arithmetic()

    def test_pointwise_binary_operations(self) -> None:
        self.assertEqual(self.arith.add(square, double)(3), 15)
        self.assertEqual(self.arith.sub(square, double)(3), 3)
        self.assertEqual(self.arith.mul(square, double)(3), 54)
        self.assertEqual(self.arith.div(square, double)(4), 2)
        self.assertEqual(self.arith.expt(double, square)(1), 2)

    def test_constant_operands_are_held_fixed(self) -> None:
        self.assertEqual(self.arith.add(square, 1)(3), 10)
        self.assertEqual(self.arith.sub(10, square)(3), 1)
        self.assertEqual(self.arith.mul(3, square)(2), 12)
        scaled = self.arith.mul(square, vector(1.0, 2.0))
        self.assertEqual(scaled(2.0).tolist(), [4.0, 8.0])

    def test_identity_constants_return_the_function(self) -> None:
        self.assertIs(self.arith.add(square, 0), square)
        self.assertIs(self.arith.mul(1, square), square)

    def test_unary_operations_lift(self) -> None:
        f = self.arith.sin(square)
        self.assertAlmostEqual(f(math.sqrt(math.pi / 2)), 1.0)
        self.assertEqual(self.arith.negate(square)(3), -9)
        self.assertEqual(self.arith.sub(square)(2), -4)
        self.assertEqual(self.arith.sqrt(square)(-5), 5)

    def test_results_keep_shared_arity(self) -> None:
        self.assertEqual(self.arith.arity(self.arith.add(square, double)), Arity.exactly(1))
        summed = self.arith.add(hypot2, lambda x, *rest: x)
        self.assertEqual(self.arith.arity(summed), Arity.exactly(2))
        self.assertEqual(summed(3, 4), 28)
        self.assertEqual(self.arith.arity(self.arith.cos(hypot2)), Arity.exactly(2))
        with self.assertRaises(ArityMismatch):
            self.arith.add(square, hypot2)

    def test_combined_functions_are_functions_again(self) -> None:
        f = self.arith.add(square, double)
        self.assertIs(self.arith.kind(f), Kind.FUNCTION)
        g = self.arith.mul(f, f)
        self.assertEqual(g(1), 9)
        self.assertEqual(str(f), "add(square, double)")

    def test_generic_operations_are_function_operands(self) -> None:
        identity_sum = self.arith.add(self.arith.square(self.arith.sin), self.arith.square(self.arith.cos))
        for x in (0.0, 0.3, 1.7, -2.2):
            with self.subTest(x=x):
                self.assertAlmostEqual(identity_sum(x), 1.0)

    def test_function_and_text_do_not_combine(self) -> None:
        with self.assertRaises(NoApplicableMethod):
            self.arith.add(square, "abc")

    def test_errors_surface_when_the_combined_function_runs(self) -> None:
        f = self.arith.add(square, lambda x: "text")
        with self.assertRaises(NoApplicableMethod):
            f(2)


if __name__ == "__main__":
    unittest.main()
