"""Conversion between byte strings and bit-vector words.

Words are stored little-endian, as in the implementation guide of Simon
and Speck. A block is stored as the word y followed by the word x, and
a key as the words k[0], k[1], ..., k[m-1].

    >>> from simonpy.packing import key_from_bytes, text_from_bytes, text_to_bytes
    >>> text_from_bytes(bytes.fromhex("756e64206c696b65"), 32)
    (0x656b696c, 0x20646e75)
    >>> key_from_bytes(bytes.fromhex("0001020308090a0b"), 32)
    (0x0b0a0908, 0x03020100)
    >>> text_to_bytes((0x44c8fc20, 0xb9dfa07a), 32).hex()
    '7aa0dfb920fcc844'

"""
from simonpy.bitvector import core
from simonpy.bitvector.operation import Concat


def bytes_to_words(data, width):
    """Split the byte string into little-endian words of the given width.

        >>> from simonpy.packing import bytes_to_words
        >>> bytes_to_words(b"\\x00\\x01\\x08\\x09", 16)
        [0x0100, 0x0908]

    """
    if width % 8 != 0:
        raise ValueError("the word width must be a multiple of 8")
    size = width // 8
    data = bytes(data)
    if len(data) % size != 0:
        raise ValueError("{} bytes cannot be split into {}-bit words".format(len(data), width))

    words = []
    for i in range(0, len(data), size):
        word = None
        for byte in data[i:i + size]:
            b = core.Constant(byte, 8)
            word = b if word is None else Concat(b, word)
        words.append(word)
    return words


def words_to_bytes(words):
    """Concatenate the little-endian representation of the words."""
    output = bytearray()
    for w in words:
        assert isinstance(w, core.Constant) and w.width % 8 == 0
        for i in range(w.width // 8):
            output.append(int(w[8 * i + 7:8 * i]))
    return bytes(output)


def text_from_bytes(data, width):
    """Return the pair (x, y) stored in a block of bytes."""
    words = bytes_to_words(data, width)
    if len(words) != 2:
        raise ValueError("a block has 2 words but {} were given".format(len(words)))
    y, x = words
    return x, y


def text_to_bytes(text, width):
    """Return the bytes of the pair (x, y)."""
    x, y = [core.bitvectify(w, width) for w in text]
    return words_to_bytes([y, x])


def key_from_bytes(data, width):
    """Return the key words stored in the bytes, most significant first."""
    return tuple(reversed(bytes_to_words(data, width)))


def key_to_bytes(key, width):
    """Return the bytes of the key words (most significant first)."""
    return words_to_bytes([core.bitvectify(w, width) for w in reversed(key)])
