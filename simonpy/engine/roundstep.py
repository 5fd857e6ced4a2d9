"""Round step of Simon."""
from simonpy.bitvector.operation import Operation, RotateLeft


class SimonRF(Operation):
    """The non-linear part of the round function of Simon.

    This corresponds to ((x <<< a) & (x <<< b)) ^ (x <<< c),
    where (a, b, c) = (8, 1, 2).

        >>> from simonpy.bitvector.core import Constant, Variable
        >>> from simonpy.engine.roundstep import SimonRF
        >>> SimonRF(Constant(0x0001, 16))
        0x0004
        >>> SimonRF(Constant(0x0101, 16))
        0x0404
        >>> SimonRF(Variable("x", 16))
        SimonRF(x)

    """

    a, b, c = 8, 1, 2

    @classmethod
    def output_width(cls, x):
        return x.width

    @classmethod
    def expand(cls, x):
        return (RotateLeft(x, cls.a) & RotateLeft(x, cls.b)) ^ RotateLeft(x, cls.c)

    @classmethod
    def compute(cls, x):
        return int(cls.expand(x))

    def doit_bitwise(self):
        """Expand the function into rotations, AND and XOR."""
        return self.expand(self.args[0])


def round_step(x, y, round_key):
    """Apply one Feistel round and return the new pair (x, y).

        >>> from simonpy.bitvector.core import Variable
        >>> from simonpy.engine.roundstep import round_step
        >>> x, y, k = Variable("x", 16), Variable("y", 16), Variable("k", 16)
        >>> round_step(x, y, k)
        (y ^ SimonRF(x) ^ k, x)

    """
    return y ^ SimonRF(x) ^ round_key, x
