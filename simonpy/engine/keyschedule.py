"""Key schedule step of Simon."""
from simonpy.bitvector import core
from simonpy.bitvector.core import Constant, bitvectify
from simonpy.bitvector.operation import RotateRight, Concat
from simonpy.engine.config import Direction


def round_constant(width, sequence_bit):
    """Return the round constant (2^n - 4) ^ z of a round.

        >>> from simonpy.engine.keyschedule import round_constant
        >>> round_constant(16, 1)
        0xfffd
        >>> round_constant(24, 0)
        0xfffffc

    """
    bit = bitvectify(sequence_bit, 1)
    return Constant(2 ** width - 4, width) ^ Concat(Constant(0, width - 1), bit)


def next_key_word(window, direction, sequence_bit):
    """Return the word appended to the key window by a key schedule step.

    The window ``(w[0], ..., w[m-1])`` holds the last m key words; w[0]
    is the oldest one (the round key of the current round). In the
    forward direction the new word is k[i+m] computed from
    ``(k[i], ..., k[i+m-1])``. In the reverse direction the window holds
    ``(k[i+m], ..., k[i+1])`` and the new word is k[i].

        >>> from simonpy.bitvector.core import Constant, Variable
        >>> from simonpy.engine.config import Direction
        >>> from simonpy.engine.keyschedule import next_key_word
        >>> key = [Constant(k, 16) for k in (0x0100, 0x0908, 0x1110, 0x1918)]
        >>> next_key_word(key, Direction.Encrypt, 1)
        0x71c3
        >>> k = [Variable("k{}".format(i), 8) for i in range(2)]
        >>> next_key_word(k, Direction.Encrypt, 0)
        (k1 >>> 3) ^ k0 ^ (k1 >>> 4) ^ 0xfc

    """
    m = len(window)
    if not all(isinstance(w, core.Term) for w in window):
        raise TypeError("key words must be bit-vectors")
    width = window[0].width
    if any(w.width != width for w in window):
        raise ValueError("the key words must have the same width")
    decrypt = direction == Direction.Decrypt

    if m == 2:
        tmp = RotateRight(window[1], 3)
    elif m == 3:
        tmp = RotateRight(window[1] if decrypt else window[2], 3)
    elif m == 4:
        tmp = RotateRight(window[1] if decrypt else window[3], 3)
        tmp ^= window[3] if decrypt else window[1]
    else:
        raise ValueError("Simon uses 2, 3 or 4 key words but {} were given".format(m))

    return tmp ^ window[0] ^ RotateRight(tmp, 1) ^ round_constant(width, sequence_bit)


def key_schedule_step(window, direction, sequence_bit):
    """Shift the key window by one word and return the new window."""
    new_word = next_key_word(window, direction, sequence_bit)
    return tuple(window[1:]) + (new_word, )
