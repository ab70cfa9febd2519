# filename: huffman_cli.py

import argparse
import logging
import sys

import huffman_config as config
from huffman_errors import HuffmanError
from huffman_service import HuffmanService

logger = logging.getLogger("huffman_codec")


def _read_input(path):
    if path is None or path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as f:
        return f.read()


def _write_output(path, payload):
    binary = isinstance(payload, bytes)
    if path is None or path == "-":
        if binary:
            sys.stdout.buffer.write(payload)
            sys.stdout.buffer.flush()
        else:
            sys.stdout.write(payload)
            sys.stdout.flush()
        return
    with open(path, "wb" if binary else "w", encoding=None if binary else "ascii") as f:
        f.write(payload)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="huffman-codec",
        description="Huffman encode bytes into a self-describing 0/1 text string, or decode it back")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug output to stderr")
    parser.add_argument(
        "-j", "--workers",
        type=int,
        default=config.DEFAULT_WORKERS,
        help="processes used to count byte frequencies of large inputs")

    sub = parser.add_subparsers(dest="mode", required=True)
    for mode, text in (("encode", "bytes to encode"), ("decode", "transportable string to decode")):
        p = sub.add_parser(mode, help=f"{mode} INPUT")
        p.add_argument("input", nargs="?", default=None, help=f"file holding the {text} (default: stdin)")
        p.add_argument("-o", "--output", default=None, help="destination file (default: stdout)")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    if args.workers < 1:
        logger.error("--workers must be at least 1")
        return 2

    service = HuffmanService(workers=args.workers)
    data = _read_input(args.input)
    try:
        if args.mode == "encode":
            result = service.compress(data)
            logger.debug("encode: %dB -> %d chars", len(data), len(result))
        else:
            # Stored strings may carry a trailing newline
            result = service.decompress(data.rstrip(b"\r\n"))
            logger.debug("decode: %d chars -> %dB", len(data), len(result))
    except HuffmanError as e:
        logger.error("%s failed: %s", args.mode, e)
        return 1

    _write_output(args.output, result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
