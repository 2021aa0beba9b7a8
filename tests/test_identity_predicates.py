from __future__ import annotations

import unittest
from fractions import Fraction

import jax.numpy as jnp

from generic_arith import Kind, NoApplicableMethod, Symbol, UserKind, build_arithmetic
from generic_arith.errors import MalformedRegistration


class IdentityPredicateTests(unittest.TestCase):
    def setUp(self) -> None:
        self.arith = build_arithmetic()

    def test_numeric_zero_and_one_across_kinds(self) -> None:
        for value in (0, Fraction(0), 0.0, 0j, -0.0):
            with self.subTest(value=value):
                self.assertTrue(self.arith.is_zero(value))
                self.assertFalse(self.arith.is_one(value))
        for value in (1, Fraction(1), 1.0, 1 + 0j):
            with self.subTest(value=value):
                self.assertTrue(self.arith.is_one(value))
                self.assertFalse(self.arith.is_zero(value))

    def test_non_identity_values(self) -> None:
        for value in (2, Fraction(1, 2), 0.5, 1j, "", "0", Symbol("x"), None):
            with self.subTest(value=value):
                self.assertFalse(self.arith.is_zero(value))
                self.assertFalse(self.arith.is_one(value))

    def test_array_identities(self) -> None:
        self.assertTrue(self.arith.is_zero(jnp.zeros(3)))
        self.assertTrue(self.arith.is_zero(jnp.zeros((2, 2))))
        self.assertFalse(self.arith.is_zero(jnp.asarray([0.0, 1.0])))
        self.assertTrue(self.arith.is_one(jnp.eye(3)))
        self.assertFalse(self.arith.is_one(jnp.ones((2, 2))))
        self.assertFalse(self.arith.is_one(jnp.ones(3)))

    def test_zero_like_and_one_like_keep_kind(self) -> None:
        self.assertEqual(self.arith.zero_like(5), 0)
        self.assertIsInstance(self.arith.zero_like(2.5), float)
        self.assertEqual(self.arith.one_like(3j), 1 + 0j)
        zeros = self.arith.zero_like(jnp.ones((2, 3)))
        self.assertEqual(zeros.shape, (2, 3))
        self.assertTrue(self.arith.is_zero(zeros))
        eye = self.arith.one_like(jnp.ones((2, 2)))
        self.assertTrue(self.arith.is_one(eye))

    def test_zero_like_without_constructor_raises(self) -> None:
        with self.assertRaises(NoApplicableMethod) as ctx:
            self.arith.zero_like("text")
        self.assertEqual(ctx.exception.operation, "zero_like")
        self.assertEqual(ctx.exception.kinds, (Kind.TEXT,))
        with self.assertRaises(NoApplicableMethod):
            self.arith.one_like(jnp.ones(3))

    def test_function_identities_are_constant_functions(self) -> None:
        zero = self.arith.zero_like(lambda x, y: x + y)
        self.assertEqual(zero(4, 5), 0)
        self.assertEqual(str(self.arith.arity(zero)), "exactly 2")
        self.assertFalse(self.arith.is_zero(zero))

    def test_user_identity_rule_is_inherited_by_subkinds(self) -> None:
        class Money:
            def __init__(self, cents: int) -> None:
                self.cents = cents

        money = UserKind("money")
        euros = UserKind("euros")
        self.arith.register_kind(lambda v: isinstance(v, Money), money)
        self.arith.register_kind(lambda v: isinstance(v, Money) and v.cents % 100 == 0, euros, parent=money)
        self.arith.register_identity(money, is_zero=lambda v: v.cents == 0)

        self.assertTrue(self.arith.is_zero(Money(0)))
        self.assertFalse(self.arith.is_zero(Money(250)))
        self.assertEqual(self.arith.kind(Money(300)), euros)
        self.assertFalse(self.arith.is_one(Money(100)))

    def test_compatible_hook_limits_where_an_identity_is_dropped(self) -> None:
        class Ledger:
            def __init__(self, currency: str, cents: int) -> None:
                self.currency = currency
                self.cents = cents

        ledger = UserKind("ledger")
        self.arith.register_kind(lambda v: isinstance(v, Ledger), ledger)
        self.arith.register_identity(
            ledger,
            is_zero=lambda v: v.cents == 0,
            compatible=lambda zero, other: isinstance(other, Ledger) and other.currency == zero.currency,
        )
        self.arith.register_method("add", (ledger, ledger), lambda a, b: ("added", a.currency, b.currency))

        eur = Ledger("EUR", 500)
        self.assertIs(self.arith.add(Ledger("EUR", 0), eur), eur)
        self.assertEqual(self.arith.add(Ledger("USD", 0), eur), ("added", "USD", "EUR"))
        self.assertTrue(self.arith.is_zero(Ledger("USD", 0)))
        with self.assertRaises(NoApplicableMethod):
            self.arith.add(Ledger("EUR", 0), 7)
        with self.assertRaises(MalformedRegistration):
            self.arith.register_identity(ledger, compatible="same currency")

    def test_identity_registration_is_validated(self) -> None:
        with self.assertRaises(MalformedRegistration):
            self.arith.register_identity(UserKind("never-registered"), is_zero=lambda v: False)
        with self.assertRaises(MalformedRegistration):
            self.arith.register_identity(Kind.TEXT, is_zero="empty")


if __name__ == "__main__":
    unittest.main()
