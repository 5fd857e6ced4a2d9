"""Fixed-width bit-vector terms.

A term is a `Constant`, a `Variable` or an operation applied to other
terms (see `operation`). Terms are sympy expression trees whose ``args``
are the bit-vector operands, so ``atoms``, ``xreplace`` and
``preorder_traversal`` work on them.
"""
import sympy


class Term(sympy.Basic):
    """Base class of the bit-vector terms.

    Every term has a fixed ``width``. The operators ``~``, ``&`` and ``^``
    build bitwise operations, and ``t[i:j]`` extracts the bits ``i``
    down to ``j`` (both included, bit 0 being the least significant).
    """

    __slots__ = ["_width"]

    def __new__(cls, *args, width):
        if not isinstance(width, int) or width <= 0:
            raise ValueError("invalid bit-width: {}".format(width))
        obj = sympy.Basic.__new__(cls, *args)
        obj._width = width
        return obj

    @property
    def width(self):
        """The number of bits of the term."""
        return self._width

    def _hashable_content(self):
        return self.args + (self.width, )

    @staticmethod
    def _build(name, *args):
        from simonpy.bitvector import operation
        return getattr(operation, name)(*args)

    def __invert__(self):
        return self._build("BvNot", self)

    def __and__(self, other):
        return self._build("BvAnd", self, other)

    __rand__ = __and__

    def __xor__(self, other):
        return self._build("BvXor", self, other)

    __rxor__ = __xor__

    def __getitem__(self, key):
        if isinstance(key, slice):
            if key.step is not None:
                raise IndexError("bit slices do not take a step")
            i = self.width - 1 if key.start is None else key.start
            j = 0 if key.stop is None else key.stop
        else:
            i = j = key
        return self._build("Extract", self, i, j)

    def __iter__(self):
        raise TypeError("bit-vector terms are not iterable")

    def __repr__(self):
        return str(self)


class Constant(sympy.Atom, Term):
    """A bit-vector constant, the unsigned integer ``val`` on ``width`` bits.

    Constants whose width is a multiple of 4 are printed in hexadecimal,
    the others in binary.

        >>> from simonpy.bitvector.core import Constant
        >>> Constant(0x44c8fc20, 32)
        0x44c8fc20
        >>> Constant(5, 3)
        0b101
        >>> int(Constant(0x0100, 16))
        256
        >>> Constant(0x0100, 16) == 256
        True

    """

    __slots__ = ["_val"]

    def __new__(cls, val, width):
        obj = Term.__new__(cls, width=width)
        if not isinstance(val, int):
            raise TypeError("expected an int but got {}".format(type(val).__name__))
        if not 0 <= val < 2 ** width:
            raise ValueError("{} does not fit in {} bits".format(val, width))
        obj._val = val
        return obj

    @property
    def val(self):
        return self._val

    def _hashable_content(self):
        return self.val, self.width

    def __int__(self):
        return self.val

    def __bool__(self):
        if self.width != 1:
            raise TypeError("only 1-bit constants have a truth value")
        return self.val == 1

    def __eq__(self, other):
        if isinstance(other, int):
            return self.val == other
        return isinstance(other, Constant) and \
            (self.val, self.width) == (other.val, other.width)

    __hash__ = Term.__hash__

    def __str__(self):
        if self.width % 4 == 0:
            return "0x{:0{}x}".format(self.val, self.width // 4)
        return "0b{:0{}b}".format(self.val, self.width)


class Variable(sympy.Atom, Term):
    """A named bit-vector of unknown value.

        >>> from simonpy.bitvector.core import Variable
        >>> Variable("k0", 16) ^ Variable("k1", 16)
        k0 ^ k1

    """

    __slots__ = ["_name"]

    def __new__(cls, name, width):
        if not isinstance(name, str):
            raise TypeError("the name of a variable must be a str")
        obj = Term.__new__(cls, width=width)
        obj._name = name
        return obj

    @property
    def name(self):
        return self._name

    def _hashable_content(self):
        return self.name, self.width

    def __str__(self):
        return self.name


def bitvectify(value, width):
    """Return *value* as a term of the given width.

    An int becomes a `Constant`, a str a `Variable`, and a term
    is returned unchanged if it has the given width.

        >>> from simonpy.bitvector.core import bitvectify
        >>> bitvectify(0x0100, 16)
        0x0100
        >>> bitvectify("x", 16)
        x

    """
    if isinstance(value, Term):
        if value.width != width:
            raise ValueError("expected a {}-bit term but got a {}-bit one".format(
                width, value.width))
        return value
    elif isinstance(value, int):
        return Constant(value, width)
    elif isinstance(value, str):
        return Variable(value, width)
    raise TypeError("cannot convert '{}' to a bit-vector".format(type(value).__name__))
