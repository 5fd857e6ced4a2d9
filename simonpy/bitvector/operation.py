"""Bit-vector operations on fixed-width registers.

Only the operations the Simon engine computes with are provided:
bitwise negation, AND and XOR, rotations, bit extraction, concatenation
and parity. They are folded into a `Constant` as soon as all the
operands are constants.
"""
import functools

from simonpy.bitvector import core


class Operation(core.Term):
    """A bit-vector operation applied to some operands.

    The arguments are ``num_terms`` bit-vector operands followed by
    ``num_params`` integer parameters (e.g. the offset of a rotation).
    When all the operands are `Constant` the result is computed with
    `compute`; otherwise `simplify` may return an equivalent term, and
    if it does not a symbolic term is built.

    Subclasses implement `output_width` and `compute`, and optionally
    `check` and `simplify`. If ``same_width`` is set, the operands must
    have the same width and plain int operands are converted to constants.

        >>> from simonpy.bitvector.core import Constant
        >>> Constant(0xfffc, 16) ^ 1
        0xfffd

    Attributes:
        infix: the symbol printed between the operands, if any
        prefix: the symbol printed before the single operand, if any

    """

    num_terms = 1
    num_params = 0
    same_width = False
    infix = None
    prefix = None

    __slots__ = ["_params"]

    def __new__(cls, *args):
        if len(args) != cls.num_terms + cls.num_params:
            raise TypeError("{} takes {} arguments but {} were given".format(
                cls.__name__, cls.num_terms + cls.num_params, len(args)))
        terms = cls._parse_terms(args[:cls.num_terms])
        params = tuple(args[cls.num_terms:])
        if not all(isinstance(p, int) for p in params):
            raise TypeError("the parameters of {} must be int".format(cls.__name__))

        cls.check(*(terms + params))
        width = cls.output_width(*(terms + params))

        if all(isinstance(t, core.Constant) for t in terms):
            return core.Constant(cls.compute(*(terms + params)), width)

        result = cls.simplify(*(terms + params))
        if result is not None:
            return result

        obj = core.Term.__new__(cls, *terms, width=width)
        obj._params = params
        return obj

    @classmethod
    def _parse_terms(cls, args):
        if cls.same_width:
            widths = {a.width for a in args if isinstance(a, core.Term)}
            if len(widths) != 1:
                raise ValueError("{} expects bit-vector operands of one width".format(cls.__name__))
            w = widths.pop()
            args = [core.Constant(a, w) if isinstance(a, int) else a for a in args]
        if not all(isinstance(a, core.Term) for a in args):
            raise TypeError("the operands of {} must be bit-vectors".format(cls.__name__))
        return tuple(args)

    @property
    def params(self):
        """The integer parameters of the operation."""
        return self._params

    @property
    def func(self):
        # used by sympy to rebuild the term from new operands
        params = self._params
        return lambda *terms: type(self)(*(terms + params))

    def _hashable_content(self):
        return self.args + self.params + (self.width, )

    @classmethod
    def check(cls, *args):
        """Raise an exception if the arguments are not valid."""

    @classmethod
    def output_width(cls, *args):
        raise NotImplementedError("subclasses need to override this method")

    @classmethod
    def compute(cls, *args):
        """Return the integer value of the operation on constant operands."""
        raise NotImplementedError("subclasses need to override this method")

    @classmethod
    def simplify(cls, *args):
        """Return a term equivalent to the operation, or None."""
        return None

    def _wrap(self, arg):
        s = str(arg)
        if isinstance(arg, Operation) and arg.infix is not None and type(arg) is not type(self):
            return "({})".format(s)
        return s

    def __str__(self):
        if self.prefix is not None:
            return self.prefix + self._wrap(self.args[0])
        if self.infix is not None:
            operands = [self._wrap(a) for a in self.args] + [str(p) for p in self.params]
            return " {} ".format(self.infix).join(operands)
        operands = [str(a) for a in self.args] + [str(p) for p in self.params]
        return "{}({})".format(type(self).__name__, ", ".join(operands))


def _mask(width):
    return 2 ** width - 1


class BvNot(Operation):
    """Bitwise negation.

        >>> from simonpy.bitvector.core import Constant, Variable
        >>> ~Constant(0b1010101, 7)
        0b0101010
        >>> ~(Variable("x", 8) ^ Variable("y", 8))
        ~(x ^ y)
        >>> ~~Variable("x", 8)
        x

    """

    prefix = "~"

    @classmethod
    def output_width(cls, x):
        return x.width

    @classmethod
    def compute(cls, x):
        return x.val ^ _mask(x.width)

    @classmethod
    def simplify(cls, x):
        if isinstance(x, BvNot):
            return x.args[0]


class BvAnd(Operation):
    """Bitwise AND.

        >>> from simonpy.bitvector.core import Constant, Variable
        >>> Constant(5, 8) & 3
        0x01
        >>> Variable("x", 8) & 0xff
        x

    """

    num_terms = 2
    same_width = True
    infix = "&"

    @classmethod
    def output_width(cls, x, y):
        return x.width

    @classmethod
    def compute(cls, x, y):
        return x.val & y.val

    @classmethod
    def simplify(cls, x, y):
        for a, b in [(x, y), (y, x)]:
            if isinstance(a, core.Constant):
                if a.val == 0:
                    return a
                if a.val == _mask(a.width):
                    return b
        if x == y:
            return x


class BvXor(Operation):
    """Bitwise XOR.

        >>> from simonpy.bitvector.core import Constant, Variable
        >>> Constant(5, 8) ^ Constant(3, 8)
        0x06
        >>> x = Variable("x", 8)
        >>> x ^ 0, x ^ x, x ^ 0xff
        (x, 0x00, ~x)

    """

    num_terms = 2
    same_width = True
    infix = "^"

    @classmethod
    def output_width(cls, x, y):
        return x.width

    @classmethod
    def compute(cls, x, y):
        return x.val ^ y.val

    @classmethod
    def simplify(cls, x, y):
        for a, b in [(x, y), (y, x)]:
            if isinstance(a, core.Constant):
                if a.val == 0:
                    return b
                if a.val == _mask(a.width):
                    return BvNot(b)
        if x == y:
            return core.Constant(0, x.width)


class _Rotation(Operation):
    """Base class of the circular rotations."""

    num_params = 1
    sign = None  # +1 to the left, -1 to the right

    @classmethod
    def check(cls, x, r):
        if not 0 <= r < x.width:
            raise ValueError("cannot rotate a {}-bit term by {}".format(x.width, r))

    @classmethod
    def output_width(cls, x, r):
        return x.width

    @classmethod
    def compute(cls, x, r):
        n = x.width
        left = (cls.sign * r) % n
        return ((x.val << left) | (x.val >> (n - left))) & _mask(n)

    @classmethod
    def simplify(cls, x, r):
        if r == 0:
            return x
        if isinstance(x, _Rotation):
            inner, s = x.args[0], x.params[0]
            total = (x.sign * s + cls.sign * r) % x.width
            return cls(inner, (cls.sign * total) % x.width)


class RotateLeft(_Rotation):
    """Circular left rotation.

        >>> from simonpy.bitvector.core import Constant, Variable
        >>> RotateLeft(Constant(150, 8), 2)
        0x5a
        >>> RotateLeft(Variable("x", 16), 8)
        x <<< 8

    """

    sign = 1
    infix = "<<<"


class RotateRight(_Rotation):
    """Circular right rotation.

        >>> from simonpy.bitvector.core import Constant, Variable
        >>> RotateRight(Constant(150, 8), 3)
        0xd2
        >>> RotateRight(RotateRight(Variable("k", 16), 3), 1)
        k >>> 4
        >>> RotateLeft(RotateRight(Variable("k", 16), 3), 3)
        k

    """

    sign = -1
    infix = ">>>"


class Extract(Operation):
    """The bits ``i`` down to ``j`` of a term, also written ``t[i:j]``.

    Unlike python slices, both end points are included and the most
    significant position comes first.

        >>> from simonpy.bitvector.core import Constant, Variable
        >>> Constant(0x0100, 16)[15:8]
        0x01
        >>> x = Variable("x", 8)
        >>> x[4:2], x[3], x[7:0]
        (x[4:2], x[3], x)
        >>> (x ^ Variable("y", 8))[0]
        (x ^ y)[0]

    """

    num_params = 2

    @classmethod
    def check(cls, x, i, j):
        if not x.width > i >= j >= 0:
            raise IndexError("cannot extract bits {}..{} of a {}-bit term".format(i, j, x.width))

    @classmethod
    def output_width(cls, x, i, j):
        return i - j + 1

    @classmethod
    def compute(cls, x, i, j):
        return (x.val >> j) & _mask(i - j + 1)

    @classmethod
    def simplify(cls, x, i, j):
        if (i, j) == (x.width - 1, 0):
            return x
        if isinstance(x, Extract):
            offset = x.params[1]
            return Extract(x.args[0], i + offset, j + offset)
        if isinstance(x, Concat):
            high, low = x.args
            if i < low.width:
                return Extract(low, i, j)
            if j >= low.width:
                return Extract(high, i - low.width, j - low.width)

    def __str__(self):
        x = self.args[0]
        i, j = self.params
        s = str(x)
        if isinstance(x, Operation) and (x.infix or x.prefix):
            s = "({})".format(s)
        if i == j:
            return "{}[{}]".format(s, i)
        return "{}[{}:{}]".format(s, i, j)


class Concat(Operation):
    """Concatenation, the first operand being the most significant.

        >>> from simonpy.bitvector.core import Constant, Variable
        >>> Concat(Constant(0x12, 8), Constant(0x345, 12))
        0x12345
        >>> Concat(Variable("x", 8), Variable("y", 8))
        x :: y

    """

    num_terms = 2
    infix = "::"

    @classmethod
    def output_width(cls, x, y):
        return x.width + y.width

    @classmethod
    def compute(cls, x, y):
        return (x.val << y.width) | y.val


class Parity(Operation):
    """The XOR of all the bits of a term, as a 1-bit term.

        >>> from simonpy.bitvector.core import Constant, Variable
        >>> Parity(Constant(0b1011, 4)), Parity(Constant(0b1001, 4))
        (0b1, 0b0)
        >>> Parity(Variable("x", 4))
        Parity(x)
        >>> Parity(Variable("x", 4)).doit_bitwise()
        x[0] ^ x[1] ^ x[2] ^ x[3]

    """

    @classmethod
    def output_width(cls, x):
        return 1

    @classmethod
    def compute(cls, x):
        return bin(x.val).count("1") % 2

    @classmethod
    def simplify(cls, x):
        if x.width == 1:
            return x

    def doit_bitwise(self):
        """Expand the parity into the XOR of the bits of the operand."""
        x = self.args[0]
        return functools.reduce(BvXor, [x[i] for i in range(x.width)])
