"""Round-constant sequence generator."""
from simonpy.bitvector.core import Constant
from simonpy.engine.config import config_index, Direction
from simonpy.engine.errors import ProtocolError
from simonpy.engine.lfsr import ReconfigurableLFSR


class SequenceGenerator(object):
    """Generate the bits of the round-constant sequence z of a Simon instance.

    The sequence is produced by a `ReconfigurableLFSR` holding the reverse
    (decryption) and forward (encryption) feedback of the instance. For the
    sequences z2, z3 and z4 the LFSR bit is XORed with a toggle bit that
    flips on every advance.

    Each call to `step` either reseeds the generator for a direction
    (``reset``) or advances it by one bit, never both.

        >>> from simonpy.engine.config import get_config, Direction
        >>> from simonpy.engine.sequence import SequenceGenerator
        >>> generator = SequenceGenerator(get_config(32, 4))
        >>> generator.step(reset=Direction.Encrypt)
        >>> [int(generator.step()) for _ in range(8)]
        [1, 1, 0, 1, 1, 0, 1, 1]

    """

    def __init__(self, config):
        self.config = config
        self.lfsr = ReconfigurableLFSR(config.matrices)
        self._toggle = None
        self._direction = None

    @property
    def direction(self):
        """The direction selected by the last reset."""
        return self._direction

    @property
    def toggle(self):
        """The current toggle bit, or None if the sequence has no toggle."""
        return self._toggle

    @property
    def bit(self):
        """The sequence bit of the current step."""
        if self._direction is None:
            raise ProtocolError("the sequence generator has not been reset")
        bit = self.lfsr.peek()
        if self._toggle is not None:
            bit ^= self._toggle
        return bit

    def step(self, reset=None):
        """Perform one step.

        If ``reset`` is a `Direction`, reseed the LFSR and the toggle for
        that direction and return None. Otherwise return the current bit
        and move to the next one.
        """
        if reset is not None:
            if not isinstance(reset, Direction):
                raise TypeError("invalid direction: {}".format(reset))
            index = config_index(reset)
            self.lfsr.step(seed=self.config.lfsr_seeds[index])
            if self.config.has_toggle:
                self._toggle = Constant(self.config.toggle_seeds[index], 1)
            else:
                self._toggle = None
            self._direction = reset
            return None

        bit = self.bit
        self.lfsr.step(config_index=config_index(self._direction))
        if self._toggle is not None:
            self._toggle = ~self._toggle
        return bit

    def reset(self, direction):
        """Reseed the generator for the given direction."""
        self.step(reset=direction)

    def advance(self):
        """Return the current bit and move to the next one."""
        return self.step()


def z_sequence(config, direction=Direction.Encrypt, length=62):
    """Return the first bits generated for the given direction as a string.

        >>> from simonpy.engine.config import get_config
        >>> from simonpy.engine.sequence import z_sequence
        >>> z_sequence(get_config(16, 4), length=31)
        '1111101000100101011000011100110'

    """
    generator = SequenceGenerator(config)
    generator.reset(direction)
    return "".join(str(int(generator.advance())) for _ in range(length))
