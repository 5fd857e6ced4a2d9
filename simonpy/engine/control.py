"""Control state machine of the Simon engine."""
import collections
import enum
import logging

from simonpy.bitvector import core
from simonpy.engine.config import Direction, get_config
from simonpy.engine.errors import EngineBusyError, ProtocolError
from simonpy.engine.keyschedule import key_schedule_step
from simonpy.engine.roundstep import round_step
from simonpy.engine.sequence import SequenceGenerator

logger = logging.getLogger(__name__)


class Phase(enum.Enum):
    """Phases of the `ControlEngine`."""

    Idle = enum.auto()
    EncPrepare = enum.auto()
    EncRun = enum.auto()
    DecKeyPrepare = enum.auto()
    DecKeyRun = enum.auto()
    DecPrepare = enum.auto()
    DecRun = enum.auto()
    Output = enum.auto()


class Request(collections.namedtuple("Request", ["direction", "key", "text"])):
    """A block operation.

    Attributes:
        direction: a `Direction`
        key: the key words, most significant first, i.e. (k[m-1], ..., k[0])
        text: the pair of words (x, y)

    """

    __slots__ = ()


class Response(collections.namedtuple("Response", ["direction", "text"])):
    """The result (x, y) of a block operation."""

    __slots__ = ()


class Registers(collections.namedtuple("Registers", [
        "phase", "direction", "counter", "text", "window", "cache", "request"])):
    """Snapshot of the state of a `ControlEngine`.

    Attributes:
        phase: the current `Phase`
        direction: the `Direction` of the operation in flight, or None
        counter: the round counter
        text: the pair (x, y) being processed
        window: the key window, the round key of the next round first
        cache: the last round keys of the key warm-up (decryption only)
        request: the `Request` in flight, or None

    """

    __slots__ = ()


_IDLE = Registers(phase=Phase.Idle, direction=None, counter=0, text=None,
                  window=None, cache=(), request=None)


class ControlEngine(object):
    """Step-wise Simon engine for one instance.

    The engine processes one block at a time. `load` accepts a `Request`
    in the ``Idle`` phase and each call to `step` advances the state by
    one step: a prepare step loads the registers, and a run step performs
    one key schedule step (and one round, except during the key warm-up
    of decryption). Encryption takes 1 + T steps and decryption
    2 + 2T steps, where T is the number of rounds. The result stays
    in the ``Output`` phase until `release` is called.

        >>> from simonpy.engine.config import Direction
        >>> from simonpy.engine.control import ControlEngine, Phase, Request
        >>> engine = ControlEngine(16, 4)
        >>> engine.load(Request(Direction.Encrypt, (0x1918, 0x1110, 0x0908, 0x0100), (0x6565, 0x6877)))
        >>> while engine.phase != Phase.Output:
        ...     _ = engine.step()
        >>> engine.cycles
        33
        >>> engine.response()
        Response(direction=<Direction.Encrypt: 1>, text=(0xc69b, 0xe9bb))
        >>> engine.release()
        >>> engine.busy
        False

    Attributes:
        config: the `CipherConfig` of the instance
        sequence: the `SequenceGenerator` of the round constants
        cycles: the number of steps taken

    """

    def __init__(self, word_width, key_words, allow_experimental=False):
        self.config = get_config(word_width, key_words, allow_experimental)
        self.sequence = SequenceGenerator(self.config)
        self.cycles = 0
        self._regs = _IDLE
        self._started_at = None

        self._handlers = {
            Phase.Idle: self._wait,
            Phase.EncPrepare: self._enc_prepare,
            Phase.EncRun: self._enc_run,
            Phase.DecKeyPrepare: self._dec_key_prepare,
            Phase.DecKeyRun: self._dec_key_run,
            Phase.DecPrepare: self._dec_prepare,
            Phase.DecRun: self._dec_run,
            Phase.Output: self._wait,
        }

    def __str__(self):
        return "{}({}, {})".format(type(self).__name__, self.config.name, self.phase.name)

    @property
    def phase(self):
        """The current `Phase`."""
        return self._regs.phase

    @property
    def round_counter(self):
        """The round counter, between 0 and T - 1."""
        return self._regs.counter

    @property
    def busy(self):
        """False only in the ``Idle`` phase."""
        return self._regs.phase != Phase.Idle

    @property
    def ready(self):
        return self._regs.phase == Phase.Idle

    @property
    def response_valid(self):
        return self._regs.phase == Phase.Output

    def snapshot(self):
        """Return the current `Registers`."""
        return self._regs

    def normalize(self, request):
        """Return a copy of the request with bit-vector words.

        The key and the text are copied into tuples of `Constant`;
        int words are converted with the word width of the instance.
        """
        m = self.config.key_words

        direction, key, text = request
        if not isinstance(direction, Direction):
            raise TypeError("invalid direction: {}".format(direction))

        key = tuple(key)
        text = tuple(text)
        if len(key) != m:
            raise ValueError("{} requires {} key words but {} were given".format(
                self.config.name, m, len(key)))
        if len(text) != 2:
            raise ValueError("{} requires 2 text words but {} were given".format(
                self.config.name, len(text)))

        return Request(direction, self._words(key), self._words(text))

    def _words(self, values):
        n = self.config.word_width
        words = []
        for w in values:
            if isinstance(w, core.Constant):
                if w.width != n:
                    raise ValueError("expected {}-bit words but got a {}-bit one".format(n, w.width))
            elif isinstance(w, int):
                if not 0 <= w < 2 ** n:
                    raise ValueError("{:#x} is not a {}-bit word".format(w, n))
                w = core.Constant(w, n)
            else:
                raise TypeError("expected int or Constant words but got {}".format(
                    type(w).__name__))
            words.append(w)
        return tuple(words)

    def load(self, request):
        """Accept a request; only allowed in the ``Idle`` phase."""
        if self.busy:
            raise EngineBusyError("{} is busy ({})".format(self.config.name, self.phase.name))

        request = self.normalize(request)
        if request.direction == Direction.Encrypt:
            phase = Phase.EncPrepare
        else:
            phase = Phase.DecKeyPrepare

        logger.debug("%s: accepted %s request", self.config.name, request.direction.name.lower())
        self._commit(_IDLE._replace(phase=phase, direction=request.direction, request=request))
        self._started_at = self.cycles

    def step(self):
        """Advance the engine by one step and return the new phase."""
        regs = self._regs
        new_regs = self._handlers[regs.phase](regs)
        self.cycles += 1
        self._commit(new_regs)
        if regs.phase != new_regs.phase and new_regs.phase == Phase.Output:
            logger.debug("%s: %s completed after %d steps", self.config.name,
                         regs.direction.name.lower(), self.cycles - self._started_at)
        return new_regs.phase

    def response(self):
        """Return the `Response` held in the ``Output`` phase."""
        if not self.response_valid:
            raise ProtocolError("{} holds no response ({})".format(self.config.name, self.phase.name))
        x, y = self._regs.text
        if self._regs.direction == Direction.Decrypt:
            x, y = y, x
        return Response(self._regs.direction, (x, y))

    def release(self):
        """Drop the response and return to the ``Idle`` phase."""
        if not self.response_valid:
            raise ProtocolError("{} holds no response ({})".format(self.config.name, self.phase.name))
        self._commit(_IDLE)
        self._started_at = None

    def _commit(self, regs):
        if regs.phase != self._regs.phase:
            logger.debug("%s: %s -> %s", self.config.name, self._regs.phase.name, regs.phase.name)
        self._regs = regs

    def _last_round(self, regs):
        return regs.counter == self.config.rounds - 1

    # Phase handlers, each one returns the registers after the step

    def _wait(self, regs):
        return regs

    def _enc_prepare(self, regs):
        request = regs.request
        self.sequence.step(reset=Direction.Encrypt)
        return regs._replace(phase=Phase.EncRun, counter=0, text=request.text,
                             window=tuple(reversed(request.key)))

    def _enc_run(self, regs):
        bit = self.sequence.step()
        window = key_schedule_step(regs.window, Direction.Encrypt, bit)
        text = round_step(regs.text[0], regs.text[1], regs.window[0])

        if self._last_round(regs):
            return regs._replace(phase=Phase.Output, text=text, window=window)
        return regs._replace(counter=regs.counter + 1, text=text, window=window)

    def _dec_key_prepare(self, regs):
        self.sequence.step(reset=Direction.Encrypt)
        return regs._replace(phase=Phase.DecKeyRun, counter=0, cache=(),
                             window=tuple(reversed(regs.request.key)))

    def _dec_key_run(self, regs):
        bit = self.sequence.step()
        window = key_schedule_step(regs.window, Direction.Encrypt, bit)
        cache = (regs.cache + (regs.window[0], ))[-self.config.key_words:]

        if self._last_round(regs):
            return regs._replace(phase=Phase.DecPrepare, window=window, cache=cache)
        return regs._replace(counter=regs.counter + 1, window=window, cache=cache)

    def _dec_prepare(self, regs):
        assert len(regs.cache) == self.config.key_words
        ciphertext = regs.request.text
        self.sequence.step(reset=Direction.Decrypt)
        # the cache holds k[T-m], ..., k[T-1]
        return regs._replace(phase=Phase.DecRun, counter=0, cache=(),
                             text=(ciphertext[1], ciphertext[0]),
                             window=tuple(reversed(regs.cache)))

    def _dec_run(self, regs):
        bit = self.sequence.step()
        window = key_schedule_step(regs.window, Direction.Decrypt, bit)
        text = round_step(regs.text[0], regs.text[1], regs.window[0])

        if self._last_round(regs):
            return regs._replace(phase=Phase.Output, text=text, window=window)
        return regs._replace(counter=regs.counter + 1, text=text, window=window)
