"""Constant tables of the Simon instances.

Each legal (word width, key words) pair maps to an immutable `CipherConfig`
holding the number of rounds, the class of the round-constant sequence
and the two feedback configurations of the sequence generator
(index 0 runs the sequence backwards for decryption, index 1 forwards).

The five round-constant sequences z0, ..., z4 are built from three
period-31 sequences u, v, w: z0 = u, z1 = v, z2 = u ^ t, z3 = v ^ t and
z4 = w ^ t, where t = 0101... is a period-2 toggle.

    >>> from simonpy.engine.config import get_config
    >>> config = get_config(32, 4)
    >>> config.name, config.rounds, config.z_class
    ('Simon64/128', 44, 3)
    >>> get_config(32, 2)
    Traceback (most recent call last):
     ...
    simonpy.engine.errors.ConfigurationError: Simon with 32-bit words and 2 key words is not supported

"""
import collections
import enum
import warnings

from simonpy.engine.errors import ConfigurationError, ExperimentalConfigurationWarning


class Direction(enum.Enum):
    """Direction of a block operation."""

    Encrypt = enum.auto()
    Decrypt = enum.auto()


LFSR_WIDTH = 5

REVERSE = 0
FORWARD = 1

# Beaulieu et al., "The SIMON and SPECK Families of Lightweight Block Ciphers"
Z_SEQUENCES = (
    "11111010001001010110000111001101111101000100101011000011100110",
    "10001110111110010011000010110101000111011111001001100001011010",
    "10101111011100000011010010011000101000010001111110010110110011",
    "11011011101011000110010111100000010010001010011100110100001111",
    "11010001111001101011011000100000010111000011001010010011101111",
)

# s[k + 5] = XOR of s[k + t] for t in taps
_FEEDBACK_TAPS = {
    "u": (0, 1, 2, 4),
    "v": (0, 1, 2, 3),
    "w": (0, 2),
}

_PERIOD_31_SEQUENCE = ("u", "v", "u", "v", "w")

_TOGGLED_CLASSES = frozenset([2, 3, 4])

# (word width, key words): (rounds, z class)
_INSTANCES = {
    (16, 4): (32, 0),
    (24, 3): (36, 0),
    (24, 4): (36, 1),
    (32, 3): (42, 2),
    (32, 4): (44, 3),
    (48, 2): (52, 2),
    (48, 3): (54, 3),
    (64, 2): (68, 2),
    (64, 3): (69, 3),
    (64, 4): (72, 4),
}

# seed constants of Simon48/96 are marked as unverified upstream
_EXPERIMENTAL = frozenset([(24, 4)])

LEGAL_PAIRS = tuple(sorted(pair for pair in _INSTANCES if pair not in _EXPERIMENTAL))


class CipherConfig(collections.namedtuple("CipherConfig", [
        "word_width", "key_words", "rounds", "z_class",
        "matrices", "lfsr_seeds", "toggle_seeds", "experimental"])):
    """Constants of a Simon instance.

    Attributes:
        word_width: the bit-width n of a word
        key_words: the number m of words of the key
        rounds: the number of rounds T
        z_class: the index of the round-constant sequence (0 to 4)
        matrices: the reverse and forward feedback matrices of the LFSR
        lfsr_seeds: the reverse and forward LFSR seeds
        toggle_seeds: the reverse and forward toggle seeds, or None
            if the sequence has no toggle
        experimental: True if the instance is not verified

    """

    __slots__ = ()

    @property
    def name(self):
        """The name of the instance, e.g. Simon64/128."""
        return "Simon{}/{}".format(2 * self.word_width, self.word_width * self.key_words)

    @property
    def block_size(self):
        return 2 * self.word_width

    @property
    def key_size(self):
        return self.word_width * self.key_words

    @property
    def has_toggle(self):
        return self.toggle_seeds is not None


def config_index(direction):
    """Return the LFSR configuration used by the given direction.

        >>> from simonpy.engine.config import config_index, Direction
        >>> config_index(Direction.Decrypt), config_index(Direction.Encrypt)
        (0, 1)

    """
    if direction == Direction.Decrypt:
        return REVERSE
    elif direction == Direction.Encrypt:
        return FORWARD
    else:
        raise ValueError("invalid direction: {}".format(direction))


def feedback_matrix(taps, width=LFSR_WIDTH):
    """Return the feedback matrix M of a Fibonacci LFSR.

    The state bit ``width - 1 - i`` holds the (i+1)-th next output, so the
    register shifts towards the most significant bit and the feedback
    enters at bit 0. ``M[j][i]`` is 1 if state bit j feeds bit i.

        >>> from simonpy.engine.config import feedback_matrix
        >>> for row in feedback_matrix((0, 2), 3): print(row)
        (1, 1, 0)
        (0, 0, 1)
        (1, 0, 0)

    """
    matrix = [[0 for _ in range(width)] for _ in range(width)]
    for j in range(width - 1):
        matrix[j][j + 1] = 1
    for t in taps:
        matrix[width - 1 - t][0] ^= 1
    return tuple(tuple(row) for row in matrix)


def reverse_taps(taps, width=LFSR_WIDTH):
    """Return the taps generating the same sequence backwards.

        >>> from simonpy.engine.config import reverse_taps
        >>> reverse_taps((0, 1, 2, 4))
        (0, 1, 3, 4)

    """
    assert 0 in taps
    return tuple(sorted({0} | {width - t for t in taps if t != 0}))


def _period_31_bit(z_class, k):
    """Return the k-th bit of the period-31 sequence of the class."""
    bit = int(Z_SEQUENCES[z_class][k % len(Z_SEQUENCES[z_class])])
    if z_class in _TOGGLED_CLASSES:
        bit ^= k % 2
    return bit


def _seed(z_class, start, step, width=LFSR_WIDTH):
    """Return the LFSR state whose outputs are s[start], s[start + step], ..."""
    seed = 0
    for i in range(width):
        seed = (seed << 1) | _period_31_bit(z_class, start + step * i)
    return seed


def _build_config(word_width, key_words):
    rounds, z_class = _INSTANCES[(word_width, key_words)]
    taps = _FEEDBACK_TAPS[_PERIOD_31_SEQUENCE[z_class]]

    matrices = (feedback_matrix(reverse_taps(taps)), feedback_matrix(taps))

    # decryption consumes the constants of rounds T-1-m, T-2-m, ...
    last = rounds - 1 - key_words
    lfsr_seeds = (_seed(z_class, last, -1), _seed(z_class, 0, 1))

    if z_class in _TOGGLED_CLASSES:
        toggle_seeds = (last % 2, 0)
    else:
        toggle_seeds = None

    return CipherConfig(
        word_width=word_width,
        key_words=key_words,
        rounds=rounds,
        z_class=z_class,
        matrices=matrices,
        lfsr_seeds=lfsr_seeds,
        toggle_seeds=toggle_seeds,
        experimental=(word_width, key_words) in _EXPERIMENTAL,
    )


_TABLE = {pair: _build_config(*pair) for pair in _INSTANCES}


def get_config(word_width, key_words, allow_experimental=False):
    """Return the `CipherConfig` of the given Simon instance.

    Raises `ConfigurationError` if the pair is not a Simon instance, or if
    it is experimental and ``allow_experimental`` is False.
    """
    try:
        config = _TABLE[(word_width, key_words)]
    except KeyError:
        msg = "Simon with {}-bit words and {} key words is not supported"
        raise ConfigurationError(msg.format(word_width, key_words)) from None

    if config.experimental:
        if not allow_experimental:
            msg = "{} is experimental, its constants are unverified; " \
                  "use allow_experimental=True to build it anyway"
            raise ConfigurationError(msg.format(config.name))
        warnings.warn("{} uses unverified constants".format(config.name),
                      ExperimentalConfigurationWarning)

    return config
