"""Fixed-width bit-vectors.

The registers of the Simon engine hold `core.Constant` values; the
same operations also accept `core.Variable` operands and then build
symbolic expressions, which is how the round and key schedule steps
are printed and inspected.
"""
