"""Request/response interface of the Simon engine."""
import collections
import itertools

from simonpy import packing
from simonpy.engine.config import Direction
from simonpy.engine.control import ControlEngine, Request
from simonpy.engine.errors import EngineBusyError, ProtocolError


class Ticket(collections.namedtuple("Ticket", ["serial", "request"])):
    """Ownership token of the operation in flight.

    Only the object returned by `StreamingFront.submit` is accepted,
    not an equal copy of it.
    """

    __slots__ = ()


class StreamingFront(object):
    """Ready/valid interface to a `ControlEngine`.

    At most one operation is in flight. A request is submitted with
    `submit` while `request_ready` holds; the returned `Ticket` must be
    passed to `accept` to collect the response once `response_valid`
    holds. The response is held stable until it is accepted, no matter
    how many steps are taken.

        >>> from simonpy.engine.config import Direction
        >>> from simonpy.engine.control import Request
        >>> from simonpy.engine.front import StreamingFront
        >>> front = StreamingFront.from_instance(32, 4)
        >>> key = (0x1b1a1918, 0x13121110, 0x0b0a0908, 0x03020100)
        >>> ticket = front.submit(Request(Direction.Encrypt, key, (0x656b696c, 0x20646e75)))
        >>> front.request_ready, front.response_valid
        (False, False)
        >>> front.run_until_valid()
        45
        >>> front.accept(ticket).text
        (0x44c8fc20, 0xb9dfa07a)
        >>> front.decrypt(key, (0x44c8fc20, 0xb9dfa07a))
        (0x656b696c, 0x20646e75)

    Attributes:
        engine: the `ControlEngine` driven by the interface

    """

    def __init__(self, engine):
        self.engine = engine
        self._serials = itertools.count()
        self._ticket = None

    @classmethod
    def from_instance(cls, word_width, key_words, allow_experimental=False):
        """Return an interface to a new engine of the given instance."""
        return cls(ControlEngine(word_width, key_words, allow_experimental))

    @property
    def config(self):
        return self.engine.config

    @property
    def request_ready(self):
        """True if a request can be submitted."""
        return self.engine.ready

    @property
    def response_valid(self):
        """True if a response is waiting to be accepted."""
        return self.engine.response_valid

    def submit(self, request):
        """Start an operation and return its `Ticket`.

        The words of the request are copied when submitted.
        """
        if not self.request_ready:
            raise EngineBusyError("{} cannot accept a request ({})".format(
                self.config.name, self.engine.phase.name))
        self.engine.load(request)
        self._ticket = Ticket(next(self._serials), self.engine.snapshot().request)
        return self._ticket

    def step(self, steps=1):
        """Advance the engine and return its phase."""
        for _ in range(steps):
            self.engine.step()
        return self.engine.phase

    def run_until_valid(self):
        """Step until a response is valid and return the number of steps."""
        if not self.engine.busy:
            raise ProtocolError("no operation in flight")
        steps = 0
        while not self.response_valid:
            self.engine.step()
            steps += 1
        return steps

    def peek(self):
        """Return the valid `Response` without releasing the engine."""
        if not self.response_valid:
            raise ProtocolError("no response is valid ({})".format(self.engine.phase.name))
        return self.engine.response()

    def accept(self, ticket):
        """Collect the response of the ticket and release the engine."""
        if not self.response_valid:
            raise ProtocolError("no response is valid ({})".format(self.engine.phase.name))
        if ticket is not self._ticket:
            raise ProtocolError("{} does not own the operation in flight".format(ticket))
        response = self.engine.response()
        self.engine.release()
        self._ticket = None
        return response

    def run(self, request):
        """Process a request from submission to acceptance."""
        ticket = self.submit(request)
        self.run_until_valid()
        return self.accept(ticket)

    def encrypt(self, key, plaintext):
        """Return the ciphertext (x, y) of the plaintext (x, y)."""
        return self.run(Request(Direction.Encrypt, key, plaintext)).text

    def decrypt(self, key, ciphertext):
        """Return the plaintext (x, y) of the ciphertext (x, y)."""
        return self.run(Request(Direction.Decrypt, key, ciphertext)).text

    def process_bytes(self, direction, key_bytes, text_bytes):
        """Process a block of bytes with a key of bytes.

            >>> from simonpy.engine.config import Direction
            >>> from simonpy.engine.front import StreamingFront
            >>> front = StreamingFront.from_instance(32, 4)
            >>> key = bytes.fromhex("0001020308090a0b1011121318191a1b")
            >>> front.process_bytes(Direction.Encrypt, key, bytes.fromhex("756e64206c696b65")).hex()
            '7aa0dfb920fcc844'

        """
        n = self.config.word_width
        key = packing.key_from_bytes(key_bytes, n)
        text = packing.text_from_bytes(text_bytes, n)
        response = self.run(Request(direction, key, text))
        return packing.text_to_bytes(response.text, n)
