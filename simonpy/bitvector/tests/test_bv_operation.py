"""Tests for the operation module."""
import doctest
import unittest

from hypothesis import given
from hypothesis.strategies import integers, sampled_from

from simonpy.bitvector import operation
from simonpy.bitvector.core import Constant, Variable
from simonpy.bitvector.operation import (
    BvNot, BvAnd, BvXor, RotateLeft, RotateRight, Extract, Concat, Parity
)

WIDTHS = [8, 16, 24, 32, 48, 64]


class TestConstantFolding(unittest.TestCase):
    """Operations on constants against the integer operations."""

    @given(sampled_from(WIDTHS), integers(min_value=0), integers(min_value=0))
    def test_bitwise(self, n, x, y):
        x, y = x % 2 ** n, y % 2 ** n
        bx, by = Constant(x, n), Constant(y, n)
        self.assertEqual(BvNot(bx), (2 ** n - 1) - x)
        self.assertEqual(BvAnd(bx, by), x & y)
        self.assertEqual(BvXor(bx, by), x ^ y)
        self.assertEqual(Parity(bx), bin(x).count("1") % 2)

    @given(sampled_from(WIDTHS), integers(min_value=0), integers(min_value=0))
    def test_rotations(self, n, x, r):
        x, r = x % 2 ** n, r % n
        bx = Constant(x, n)
        bits = format(x, "0{}b".format(n))
        self.assertEqual(RotateLeft(bx, r), int(bits[r:] + bits[:r], 2))
        self.assertEqual(RotateRight(RotateLeft(bx, r), r), bx)
        self.assertEqual(RotateRight(bx, r), RotateLeft(bx, (n - r) % n))

    @given(sampled_from(WIDTHS), integers(min_value=0), integers(min_value=0))
    def test_extract_concat(self, n, x, i):
        x, i = x % 2 ** n, i % n
        bx = Constant(x, n)
        self.assertEqual(bx[i], (x >> i) & 1)
        high, low = bx[n - 1:i], bx[i - 1:0] if i > 0 else None
        self.assertEqual(high, x >> i)
        if low is not None:
            self.assertEqual(Concat(high, low), bx)

    def test_widths(self):
        x = Constant(0x1234, 16)
        self.assertEqual(Concat(x, x[7:0]).width, 24)
        self.assertEqual(Parity(x).width, 1)
        self.assertEqual(x[11:4], 0x23)


class TestSymbolic(unittest.TestCase):
    """Symbolic operations and their simplifications."""

    def setUp(self):
        self.x = Variable("x", 16)
        self.y = Variable("y", 16)

    def test_simplifications(self):
        x, y = self.x, self.y
        self.assertEqual(x & 0, 0)
        self.assertEqual(x ^ x, 0)
        self.assertEqual(x ^ 0xffff, ~x)
        self.assertEqual(~~x, x)
        self.assertEqual(RotateLeft(RotateLeft(x, 9), 7), x)
        self.assertEqual(RotateRight(RotateLeft(x, 2), 5), RotateRight(x, 3))
        self.assertEqual(Extract(Extract(x, 11, 4), 3, 0), Extract(x, 7, 4))
        self.assertEqual(Concat(x, y)[15:0], y)
        self.assertEqual(Concat(x, y)[31:16], x)
        self.assertEqual(Parity(x[3]), x[3])

    def test_no_simplification(self):
        x, y = self.x, self.y
        self.assertIsInstance(x ^ y, BvXor)
        self.assertIsInstance(Concat(x, y)[17:14], Extract)
        self.assertNotEqual(x ^ y, y ^ x)

    def test_printing(self):
        x, y = self.x, self.y
        self.assertEqual(str((x ^ y) & x), "(x ^ y) & x")
        self.assertEqual(str(x ^ y ^ RotateLeft(x, 1)), "x ^ y ^ (x <<< 1)")
        self.assertEqual(str(~RotateRight(y, 3)), "~(y >>> 3)")
        self.assertEqual(str((~x)[3:0]), "(~x)[3:0]")
        self.assertEqual(str(Parity(x ^ y)), "Parity(x ^ y)")

    def test_equality(self):
        x, y = self.x, self.y
        self.assertEqual(RotateLeft(x, 1), RotateLeft(x, 1))
        self.assertNotEqual(RotateLeft(x, 1), RotateLeft(x, 2))
        self.assertEqual(len({x[3], x[3], x[4]}), 2)

    def test_invalid(self):
        x = self.x
        with self.assertRaises(ValueError):
            x ^ Variable("z", 8)
        with self.assertRaises(ValueError):
            RotateLeft(x, 16)
        with self.assertRaises(ValueError):
            BvAnd(1, 2)
        with self.assertRaises(TypeError):
            RotateLeft(x, Constant(1, 4))
        with self.assertRaises(TypeError):
            Concat(x, 1)
        with self.assertRaises(TypeError):
            BvNot(x, x)
        with self.assertRaises(IndexError):
            Extract(x, 16, 0)


# noinspection PyUnusedLocal,PyUnusedLocal
def load_tests(loader, tests, ignore):
    """Add doctests."""
    tests.addTests(doctest.DocTestSuite(operation))
    return tests
