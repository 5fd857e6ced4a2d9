"""Tests for the packing module."""
import doctest
import unittest

from hypothesis import given
from hypothesis.strategies import binary, sampled_from

from simonpy import packing
from simonpy.bitvector.core import Constant
from simonpy.packing import (
    bytes_to_words, words_to_bytes, key_from_bytes, key_to_bytes, text_from_bytes, text_to_bytes
)


class TestPacking(unittest.TestCase):
    """Tests of the byte/word conversion."""

    def test_little_endian(self):
        self.assertEqual(bytes_to_words(bytes.fromhex("00010203"), 32), [0x03020100])
        self.assertEqual(bytes_to_words(bytes.fromhex("000102"), 24), [0x020100])
        self.assertEqual(words_to_bytes([Constant(0x0b0a0908, 32)]), bytes.fromhex("08090a0b"))
        self.assertEqual(bytes_to_words(b"", 16), [])

    def test_word_order(self):
        # Simon128/128 test vector
        key = key_from_bytes(bytes.fromhex("000102030405060708090a0b0c0d0e0f"), 64)
        self.assertEqual(key, (0x0f0e0d0c0b0a0908, 0x0706050403020100))
        text = text_from_bytes(bytes.fromhex("2074726176656c6c6572732064657363"), 64)
        self.assertEqual(text, (0x6373656420737265, 0x6c6c657661727420))
        self.assertEqual(text_to_bytes((0x49681b1e1e54fe3f, 0x65aa832af84e0bbc), 64),
                         bytes.fromhex("bc0b4ef82a83aa653ffe541e1e1b6849"))

    def test_invalid(self):
        with self.assertRaises(ValueError):
            bytes_to_words(b"\x00\x01\x02", 16)
        with self.assertRaises(ValueError):
            bytes_to_words(b"\x00\x01", 12)
        with self.assertRaises(ValueError):
            text_from_bytes(bytes(6), 16)

    @given(sampled_from([16, 24, 32, 48, 64]), binary(min_size=16, max_size=16))
    def test_bytes_round_trip(self, width, data):
        size = width // 4
        block = (data * 2)[:size]
        self.assertEqual(text_to_bytes(text_from_bytes(block, width), width), block)
        self.assertEqual(key_to_bytes(key_from_bytes(block, width), width), block)


# noinspection PyUnusedLocal,PyUnusedLocal
def load_tests(loader, tests, ignore):
    """Add doctests."""
    tests.addTests(doctest.DocTestSuite(packing))
    return tests
