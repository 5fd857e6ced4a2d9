"""Top-level script environment.

Encrypt or decrypt one block with the step-wise engine, e.g.::

    python -m simonpy encrypt 32 4 --key 1b1a1918 13121110 0b0a0908 03020100 --text 656b696c 20646e75

"""
import argparse
import logging
import sys

from simonpy.engine.config import Direction
from simonpy.engine.errors import SimonError
from simonpy.engine.front import StreamingFront

logger = logging.getLogger(__name__)


def _hex_word(value):
    try:
        return int(value, 16)
    except ValueError:
        raise argparse.ArgumentTypeError("invalid hexadecimal word: {}".format(value))


def get_parser():
    parser = argparse.ArgumentParser(prog="simonpy", description="Step-wise Simon block cipher")
    parser.add_argument("direction", choices=["encrypt", "decrypt"])
    parser.add_argument("word_width", type=int, help="bit-width of a word (16, 24, 32, 48 or 64)")
    parser.add_argument("key_words", type=int, help="number of key words (2, 3 or 4)")
    parser.add_argument("-k", "--key", type=_hex_word, nargs="+", required=True,
                        help="key words in hexadecimal, most significant first")
    parser.add_argument("-t", "--text", type=_hex_word, nargs=2, required=True,
                        metavar=("X", "Y"), help="block words in hexadecimal")
    parser.add_argument("--experimental", action="store_true",
                        help="allow instances with unverified constants")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def main(argv=None):
    args = get_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    direction = Direction.Encrypt if args.direction == "encrypt" else Direction.Decrypt

    try:
        front = StreamingFront.from_instance(args.word_width, args.key_words, args.experimental)
        if direction == Direction.Encrypt:
            x, y = front.encrypt(args.key, args.text)
        else:
            x, y = front.decrypt(args.key, args.text)
    except (SimonError, ValueError) as e:
        logger.error("%s", e)
        return 1

    logger.info("%s %s in %d steps", front.config.name, args.direction + "ed", front.engine.cycles)
    print(x, y)
    return 0


if __name__ == "__main__":
    sys.exit(main())
