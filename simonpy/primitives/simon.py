"""Simon family of block ciphers.

Whole-cipher reference implementation, computing all the round keys
at once from the published round-constant sequences. It is independent
of the step-wise engine and is used to check it.
"""
import enum

from simonpy import packing
from simonpy.bitvector.operation import RotateLeft, RotateRight
from simonpy.engine.config import Direction

from simonpy.primitives.primitives import KeySchedule, Encryption, Decryption, Cipher


def simon_rf(x):
    """The non-linear part of the round function of Simon."""
    return (RotateLeft(x, 8) & RotateLeft(x, 1)) ^ RotateLeft(x, 2)


class SimonInstance(enum.Enum):
    simon_32_64 = enum.auto()
    simon_48_72 = enum.auto()
    simon_48_96 = enum.auto()
    simon_64_96 = enum.auto()
    simon_64_128 = enum.auto()
    simon_96_96 = enum.auto()
    simon_96_144 = enum.auto()
    simon_128_128 = enum.auto()
    simon_128_192 = enum.auto()
    simon_128_256 = enum.auto()


# the published round-constant sequences z0, ..., z4
_Z = (
    "11111010001001010110000111001101111101000100101011000011100110",
    "10001110111110010011000010110101000111011111001001100001011010",
    "10101111011100000011010010011000101000010001111110010110110011",
    "11011011101011000110010111100000010010001010011100110100001111",
    "11010001111001101011011000100000010111000011001010010011101111",
)

# instance: (n, m, rounds, z)
_PARAMETERS = {
    SimonInstance.simon_32_64: (16, 4, 32, 0),
    SimonInstance.simon_48_72: (24, 3, 36, 0),
    SimonInstance.simon_48_96: (24, 4, 36, 1),
    SimonInstance.simon_64_96: (32, 3, 42, 2),
    SimonInstance.simon_64_128: (32, 4, 44, 3),
    SimonInstance.simon_96_96: (48, 2, 52, 2),
    SimonInstance.simon_96_144: (48, 3, 54, 3),
    SimonInstance.simon_128_128: (64, 2, 68, 2),
    SimonInstance.simon_128_192: (64, 3, 69, 3),
    SimonInstance.simon_128_256: (64, 4, 72, 4),
}

# instance: (plaintext, key, ciphertext), key most significant word first
TEST_VECTORS = {
    SimonInstance.simon_32_64: (
        (0x6565, 0x6877),
        (0x1918, 0x1110, 0x0908, 0x0100),
        (0xc69b, 0xe9bb)),
    SimonInstance.simon_48_72: (
        (0x612067, 0x6e696c),
        (0x121110, 0x0a0908, 0x020100),
        (0xdae5ac, 0x292cac)),
    SimonInstance.simon_48_96: (
        (0x726963, 0x20646e),
        (0x1a1918, 0x121110, 0x0a0908, 0x020100),
        (0x6e06a5, 0xacf156)),
    SimonInstance.simon_64_96: (
        (0x6f722067, 0x6e696c63),
        (0x13121110, 0x0b0a0908, 0x03020100),
        (0x5ca2e27f, 0x111a8fc8)),
    SimonInstance.simon_64_128: (
        (0x656b696c, 0x20646e75),
        (0x1b1a1918, 0x13121110, 0x0b0a0908, 0x03020100),
        (0x44c8fc20, 0xb9dfa07a)),
    SimonInstance.simon_96_96: (
        (0x2072616c6c69, 0x702065687420),
        (0x0d0c0b0a0908, 0x050403020100),
        (0x602807a462b4, 0x69063d8ff082)),
    SimonInstance.simon_96_144: (
        (0x746168742074, 0x73756420666f),
        (0x151413121110, 0x0d0c0b0a0908, 0x050403020100),
        (0xecad1c6c451e, 0x3f59c5db1ae9)),
    SimonInstance.simon_128_128: (
        (0x6373656420737265, 0x6c6c657661727420),
        (0x0f0e0d0c0b0a0908, 0x0706050403020100),
        (0x49681b1e1e54fe3f, 0x65aa832af84e0bbc)),
    SimonInstance.simon_128_192: (
        (0x206572656874206e, 0x6568772065626972),
        (0x1716151413121110, 0x0f0e0d0c0b0a0908, 0x0706050403020100),
        (0xc4ac61effcdc0d4f, 0x6c9c8d6e2597b85b)),
    SimonInstance.simon_128_256: (
        (0x74206e69206d6f6f, 0x6d69732061207369),
        (0x1f1e1d1c1b1a1918, 0x1716151413121110, 0x0f0e0d0c0b0a0908, 0x0706050403020100),
        (0x8d2b5579afc8a3a0, 0x3bf72a87efe7b868)),
}


def find_instance(word_width, key_words):
    """Return the `SimonInstance` with the given word width and key words."""
    for instance, (n, m, _, _) in _PARAMETERS.items():
        if (n, m) == (word_width, key_words):
            return instance
    raise ValueError("invalid instance of Simon")


class SimonKeySchedule(KeySchedule):
    """Key schedule of Simon, computing all the round keys at once."""

    word_width = None
    key_words = None
    z = None

    @classmethod
    def set_rounds(cls, new_rounds):
        cls.rounds = new_rounds
        cls.output_widths = [cls.word_width] * new_rounds

    @classmethod
    def eval(cls, *master_key):
        m = cls.key_words
        k = list(reversed(master_key))
        while len(k) < cls.rounds:
            i = len(k)
            tmp = RotateRight(k[i - 1], 3)
            if m == 4:
                tmp ^= k[i - 3]
            tmp ^= RotateRight(tmp, 1)
            # ~k ^ 3 == k ^ (2^n - 4)
            k.append(~k[i - m] ^ tmp ^ int(cls.z[(i - m) % 62]) ^ 3)
        return k[:cls.rounds]


class SimonEncryption(Encryption):

    @classmethod
    def set_rounds(cls, new_rounds):
        cls.rounds = new_rounds

    @classmethod
    def eval(cls, x, y):
        for k in cls.round_keys:
            x, y = y ^ simon_rf(x) ^ k, x
        return x, y


class SimonDecryption(Decryption):

    @classmethod
    def set_rounds(cls, new_rounds):
        cls.rounds = new_rounds

    @classmethod
    def eval(cls, x, y):
        for k in reversed(cls.round_keys):
            x, y = y, x ^ simon_rf(y) ^ k
        return x, y


class SimonCipher(Cipher):
    """Base class of the ciphers returned by `get_Simon_instance`."""

    word_width = None
    key_words = None
    instance = None

    @classmethod
    def set_rounds(cls, new_rounds):
        cls.rounds = new_rounds
        for function in (cls.key_schedule, cls.encryption, cls.decryption):
            function.set_rounds(new_rounds)

    @classmethod
    def test(cls):
        """Check the published test vector with the full number of rounds."""
        old_rounds = cls.rounds
        cls.set_rounds(_PARAMETERS[cls.instance][2])
        try:
            plaintext, key, ciphertext = TEST_VECTORS[cls.instance]
            assert cls(plaintext, key) == ciphertext
            assert cls.decrypt(ciphertext, key) == plaintext
        finally:
            cls.set_rounds(old_rounds)


def get_Simon_instance(simon_instance):
    """Return a new `Cipher` class for the given `SimonInstance`.

        >>> from simonpy.primitives.simon import get_Simon_instance, SimonInstance
        >>> Simon48 = get_Simon_instance(SimonInstance.simon_48_72)
        >>> Simon48.__name__, Simon48.rounds, len(Simon48.key_schedule(0, 0, 0))
        ('Simon48_72', 36, 36)

    """
    if simon_instance not in _PARAMETERS:
        raise ValueError("invalid instance of Simon")
    n, m, rounds, z_index = _PARAMETERS[simon_instance]
    name = "Simon{}_{}".format(2 * n, n * m)

    key_schedule = type(name + "KeySchedule", (SimonKeySchedule, ), dict(
        word_width=n, key_words=m, z=_Z[z_index], rounds=rounds,
        input_widths=[n] * m, output_widths=[n] * rounds))
    encryption = type(name + "Encryption", (SimonEncryption, ), dict(
        rounds=rounds, input_widths=[n, n], output_widths=[n, n]))
    decryption = type(name + "Decryption", (SimonDecryption, ), dict(
        rounds=rounds, input_widths=[n, n], output_widths=[n, n]))

    return type(name, (SimonCipher, ), dict(
        word_width=n, key_words=m, instance=simon_instance, rounds=rounds,
        key_schedule=key_schedule, encryption=encryption, decryption=decryption))


def reference_cipher(direction, key_bytes, text_bytes):
    """Encrypt or decrypt one block of bytes.

    The word width is given by the size of the block and the number
    of key words by the size of the key.

        >>> from simonpy.engine.config import Direction
        >>> from simonpy.primitives.simon import reference_cipher
        >>> key = bytes.fromhex("0001020308090a0b1011121318191a1b")
        >>> reference_cipher(Direction.Encrypt, key, bytes.fromhex("756e64206c696b65")).hex()
        '7aa0dfb920fcc844'
        >>> reference_cipher(Direction.Decrypt, key, bytes.fromhex("7aa0dfb920fcc844")).hex()
        '756e64206c696b65'

    """
    n = 4 * len(text_bytes)
    if n == 0 or (8 * len(key_bytes)) % n != 0:
        raise ValueError("invalid block or key size")
    m = 8 * len(key_bytes) // n
    cipher = get_Simon_instance(find_instance(n, m))

    key = packing.key_from_bytes(key_bytes, n)
    text = packing.text_from_bytes(text_bytes, n)
    if direction == Direction.Encrypt:
        result = cipher(text, key)
    elif direction == Direction.Decrypt:
        result = cipher.decrypt(text, key)
    else:
        raise ValueError("invalid direction: {}".format(direction))
    return packing.text_to_bytes(result, n)
