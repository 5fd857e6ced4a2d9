"""Tests for the primitives and simon modules."""
import doctest
import unittest
import warnings

from hypothesis import given, settings
from hypothesis.strategies import integers, sampled_from

from simonpy.bitvector.core import Variable
from simonpy.engine.config import Direction, get_config
from simonpy.engine.sequence import z_sequence
from simonpy.primitives import primitives, simon
from simonpy.primitives.primitives import BvFunction, KeySchedule, Encryption, Decryption, Cipher
from simonpy.primitives.simon import get_Simon_instance, find_instance, reference_cipher, SimonInstance


class XorSwap(BvFunction):
    input_widths = [8, 8]
    output_widths = [8, 8]

    @classmethod
    def eval(cls, x, y):
        return x ^ y, x


class TestBvFunction(unittest.TestCase):
    """Tests of the BvFunction class."""

    def test_call(self):
        self.assertEqual(XorSwap(3, 5), (0x06, 0x03))
        self.assertIsInstance(XorSwap(0, 0), tuple)
        with self.assertRaises(ValueError):
            XorSwap(0)
        with self.assertRaises(ValueError):
            XorSwap(0, 256)

    def test_symbolic_inputs(self):
        x, y = Variable("x", 8), Variable("y", 8)
        with self.assertRaises(TypeError):
            XorSwap(x, y)
        self.assertEqual(XorSwap(x, y, symbolic_inputs=True), (x ^ y, x))


def toy_cipher(rounds):
    """Return a cipher XORing the block with the key plus the round index."""

    class ToyKeySchedule(KeySchedule):
        input_widths = [8]
        output_widths = [8] * rounds

        @classmethod
        def eval(cls, k):
            return [k ^ i for i in range(len(cls.output_widths))]

    class ToyEncryption(Encryption):
        input_widths = output_widths = [8]

        @classmethod
        def eval(cls, x):
            for k in cls.round_keys:
                x ^= k
            return [x]

    class ToyDecryption(Decryption):
        input_widths = output_widths = [8]

        @classmethod
        def eval(cls, x):
            for k in reversed(cls.round_keys):
                x ^= k
            return [x]

    class ToyCipher(Cipher):
        key_schedule = ToyKeySchedule
        encryption = ToyEncryption
        decryption = ToyDecryption

    return ToyCipher


class TestCipher(unittest.TestCase):
    """Tests of the Cipher class."""

    def test_round_trip(self):
        cipher = toy_cipher(3)
        self.assertEqual(cipher([0x10], [0xa0]), (0xb3, ))
        self.assertEqual(cipher.decrypt([0xb3], [0xa0]), (0x10, ))

    def test_round_keys_are_restored(self):
        cipher = toy_cipher(2)
        cipher([0], [0])
        self.assertIsNone(cipher.encryption.round_keys)
        with self.assertRaises(TypeError):
            cipher([0], [Variable("k", 8)])
        self.assertIsNone(cipher.encryption.round_keys)

    def test_no_decryption(self):
        class EncryptOnly(toy_cipher(1)):
            decryption = None

        with self.assertRaises(NotImplementedError):
            EncryptOnly.decrypt([0], [0])


class TestSimon(unittest.TestCase):
    """Tests of the reference Simon ciphers."""

    def test_instances(self):
        for instance in SimonInstance:
            cipher = get_Simon_instance(instance)
            self.assertTrue(issubclass(cipher, Cipher))
            self.assertEqual(find_instance(cipher.word_width, cipher.key_words), instance)
            self.assertEqual(cipher.__name__, instance.name.replace("simon_", "Simon"))
            cipher.test()

        with self.assertRaises(ValueError):
            get_Simon_instance("simon_32_64")
        with self.assertRaises(ValueError):
            find_instance(32, 2)

    def test_set_rounds(self):
        cipher = get_Simon_instance(SimonInstance.simon_32_64)
        cipher.set_rounds(4)
        self.assertEqual(len(cipher.key_schedule(0, 0, 0, 0)), 4)
        cipher.test()
        self.assertEqual(cipher.rounds, 4)

    @given(
        sampled_from(list(SimonInstance)),
        integers(min_value=0),
        integers(min_value=0),
        integers(min_value=0),
    )
    @settings(deadline=None, max_examples=20)
    def test_decryption(self, instance, x, y, k):
        cipher = get_Simon_instance(instance)
        n, m = cipher.word_width, cipher.key_words
        plaintext = (x % 2 ** n, y % 2 ** n)
        key = [(k >> (n * i)) % 2 ** n for i in range(m)]
        self.assertEqual(cipher.decrypt(cipher(plaintext, key), key), plaintext)

    def test_round_constant_sequences(self):
        # the reference sequences against the ones generated by the engine LFSR
        for instance, (n, m, _, z_index) in simon._PARAMETERS.items():
            with warnings.catch_warnings():
                warnings.simplefilter("ignore")
                config = get_config(n, m, allow_experimental=True)
            self.assertEqual(z_sequence(config, length=62), simon._Z[z_index], msg=instance.name)

    def test_reference_cipher(self):
        key = bytes.fromhex("0001080910111819")
        self.assertEqual(reference_cipher(Direction.Encrypt, key, bytes.fromhex("77686565")),
                         bytes.fromhex("bbe99bc6"))
        with self.assertRaises(ValueError):
            reference_cipher(Direction.Encrypt, key, b"")
        with self.assertRaises(ValueError):
            reference_cipher(Direction.Encrypt, key[:5], bytes.fromhex("77686565"))
        with self.assertRaises(ValueError):
            reference_cipher("encrypt", key, bytes.fromhex("77686565"))


# noinspection PyUnusedLocal,PyUnusedLocal
def load_tests(loader, tests, ignore):
    """Add doctests."""
    tests.addTests(doctest.DocTestSuite(primitives))
    tests.addTests(doctest.DocTestSuite(simon))
    return tests
