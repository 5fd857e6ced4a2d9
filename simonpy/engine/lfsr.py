"""Linear-feedback shift register with selectable feedback."""
from simonpy.bitvector.core import Constant, bitvectify
from simonpy.bitvector.operation import Concat, Parity


class ReconfigurableLFSR(object):
    """Represent an n-bit LFSR with several linear feedback configurations.

    Each configuration is an n x n binary matrix M and one update computes
    ``next[i] = XOR_j state[j] & M[j][i]``. Every step either loads a seed
    or applies one of the configurations, and returns the most significant
    bit of the state before the step.

        >>> from simonpy.engine.config import feedback_matrix, reverse_taps
        >>> from simonpy.engine.lfsr import ReconfigurableLFSR
        >>> taps = (0, 1, 2, 4)
        >>> lfsr = ReconfigurableLFSR([feedback_matrix(reverse_taps(taps)), feedback_matrix(taps)])
        >>> lfsr.load_seed(0b11111)
        0b0
        >>> lfsr.sequence(10, 1)
        [1, 1, 1, 1, 1, 0, 1, 0, 0, 0]
        >>> lfsr.state
        0b10010

    Attributes:
        width: the number of bits of the register
        matrices: the feedback matrices, indexed by configuration

    """

    def __init__(self, matrices, seed=0):
        assert len(matrices) >= 1
        width = len(matrices[0])
        for matrix in matrices:
            assert len(matrix) == width and all(len(row) == width for row in matrix)

        self.width = width
        self.matrices = tuple(tuple(tuple(row) for row in m) for m in matrices)

        # column i of M as a mask over the state bits
        self._columns = []
        for matrix in self.matrices:
            masks = []
            for i in range(width):
                masks.append(Constant(sum(matrix[j][i] << j for j in range(width)), width))
            self._columns.append(tuple(masks))
        self._columns = tuple(self._columns)

        self._state = bitvectify(seed, width)

    @property
    def state(self):
        """The current state as a bit-vector."""
        return self._state

    @property
    def config_count(self):
        """The number of feedback configurations."""
        return len(self.matrices)

    def peek(self):
        """Return the output of the next step without stepping."""
        return self._state[self.width - 1]

    def step(self, config_index=None, seed=None):
        """Perform one step and return its output bit.

        Exactly one of ``config_index`` (apply that feedback configuration)
        or ``seed`` (overwrite the state) must be given.
        """
        if (config_index is None) == (seed is None):
            raise ValueError("a step either loads a seed or advances the register")

        output = self.peek()
        if seed is not None:
            self._state = bitvectify(seed, self.width)
        else:
            self._state = self.next_state(config_index)
        return output

    def load_seed(self, bits):
        """Overwrite the state with the given seed."""
        return self.step(seed=bits)

    def advance(self, config_index):
        """Update the state with the given feedback configuration."""
        return self.step(config_index=config_index)

    def next_state(self, config_index):
        """Return the state that `advance` would produce."""
        if not 0 <= config_index < self.config_count:
            raise IndexError("invalid configuration index {}".format(config_index))

        state = None
        for mask in self._columns[config_index]:
            bit = Parity(self._state & mask)
            state = bit if state is None else Concat(bit, state)
        return state

    def sequence(self, n, config_index):
        """Advance n times and return the outputs as a list of int."""
        return [int(self.advance(config_index)) for _ in range(n)]
