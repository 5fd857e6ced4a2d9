"""Whole-cipher functions on bit-vector words.

These classes compute a complete key schedule or a complete encryption
in one call. The step-wise engine is checked against them.
"""
from simonpy.bitvector import core


class BvFunction(object):
    """A function from fixed-width words to a tuple of fixed-width words.

    Subclasses set ``input_widths``, ``output_widths`` and ``rounds``
    and implement `eval`. Calling the class evaluates the function:
    int inputs are converted to `Constant` of the matching width, and
    symbolic inputs are refused unless ``symbolic_inputs=True`` is given.

        >>> from simonpy.primitives.primitives import BvFunction
        >>> class Swap(BvFunction):
        ...     input_widths = output_widths = [8, 8]
        ...     @classmethod
        ...     def eval(cls, x, y):
        ...         return y, x
        >>> Swap(1, 2)
        (0x02, 0x01)

    """

    input_widths = None
    output_widths = None
    rounds = None

    def __new__(cls, *args, symbolic_inputs=False):
        if len(args) != len(cls.input_widths):
            raise ValueError("{} takes {} words but {} were given".format(
                cls.__name__, len(cls.input_widths), len(args)))
        args = [core.bitvectify(a, w) for a, w in zip(args, cls.input_widths)]
        if not symbolic_inputs and not all(isinstance(a, core.Constant) for a in args):
            raise TypeError("{} expects constant words".format(cls.__name__))

        result = tuple(cls.eval(*args))
        if len(result) != len(cls.output_widths):
            raise ValueError("{} returned {} words instead of {}".format(
                cls.__name__, len(result), len(cls.output_widths)))
        return tuple(core.bitvectify(r, w) for r, w in zip(result, cls.output_widths))

    @classmethod
    def eval(cls, *args):
        raise NotImplementedError("subclasses need to override this method")

    @classmethod
    def set_rounds(cls, new_rounds):
        """Change the number of rounds (and the widths depending on it)."""
        raise NotImplementedError("subclasses need to override this method")


class KeySchedule(BvFunction):
    """Maps the master key to the round keys."""


class Encryption(BvFunction):
    """Maps a plaintext to a ciphertext using ``round_keys``."""

    round_keys = None


class Decryption(BvFunction):
    """Maps a ciphertext to a plaintext using the round keys of the encryption."""

    round_keys = None


class Cipher(object):
    """A block cipher made of a key schedule, an encryption and a decryption.

    ``cipher(plaintext, key)`` returns the ciphertext and
    ``cipher.decrypt(ciphertext, key)`` the plaintext. The round keys
    are only set on the encryption or decryption function while it runs.

        >>> from simonpy.primitives import simon
        >>> Simon32 = simon.get_Simon_instance(simon.SimonInstance.simon_32_64)
        >>> Simon32((0x6565, 0x6877), (0x1918, 0x1110, 0x0908, 0x0100))
        (0xc69b, 0xe9bb)
        >>> Simon32.decrypt((0xc69b, 0xe9bb), (0x1918, 0x1110, 0x0908, 0x0100))
        (0x6565, 0x6877)

    """

    key_schedule = None
    encryption = None
    decryption = None
    rounds = None

    def __new__(cls, plaintext, masterkey, **options):
        return cls._run(cls.encryption, plaintext, masterkey, **options)

    @classmethod
    def decrypt(cls, ciphertext, masterkey, **options):
        if cls.decryption is None:
            raise NotImplementedError("{} cannot decrypt".format(cls.__name__))
        return cls._run(cls.decryption, ciphertext, masterkey, **options)

    @classmethod
    def _run(cls, function, text, masterkey, **options):
        saved = function.round_keys
        function.round_keys = cls.key_schedule(*masterkey, **options)
        try:
            return function(*text, **options)
        finally:
            function.round_keys = saved

    @classmethod
    def set_rounds(cls, new_rounds):
        raise NotImplementedError("subclasses need to override this method")
