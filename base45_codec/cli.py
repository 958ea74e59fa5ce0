import argparse
import logging
import sys
from typing import Iterable, List, Optional

from .codec import Base45Error, decode, decode_to_text, encode, encode_text

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(
    level: str = "WARNING", extra_handlers: Optional[Iterable[logging.Handler]] = None
) -> None:
    logging_level = getattr(logging, level.upper(), logging.WARNING)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    handlers = [handler]
    if extra_handlers:
        handlers.extend(extra_handlers)
    logging.basicConfig(level=logging_level, handlers=handlers, force=True)


def _read_bytes(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as f:
        return f.read()


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def _write_bytes(path: str, data: bytes) -> None:
    if path == "-":
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
    else:
        with open(path, "wb") as f:
            f.write(data)


def _write_text(path: str, text: str) -> None:
    if path == "-":
        sys.stdout.write(text)
        sys.stdout.flush()
    else:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(text)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="base45", description="Base45 encoder/decoder (draft-faltstrom-base45)"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--input", default="-", help="Input path, '-' for stdin")
    common.add_argument("--output", default="-", help="Output path, '-' for stdout")
    common.add_argument(
        "--text",
        action="store_true",
        help="Treat the plain side as UTF-8 text instead of raw bytes",
    )
    common.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    enc = subparsers.add_parser("encode", parents=[common])
    enc.add_argument(
        "--no-newline",
        action="store_true",
        help="Do not append a newline after the encoded text",
    )

    subparsers.add_parser("decode", parents=[common])

    return parser


def run_encode(args) -> None:
    if args.text:
        payload = _read_text(args.input)
        encoded = encode_text(payload)
    else:
        payload = _read_bytes(args.input)
        encoded = encode(payload)
    logger.debug("Encoded %d input units into %d characters", len(payload), len(encoded))
    _write_text(args.output, encoded if args.no_newline else encoded + "\n")


def run_decode(args) -> None:
    # Space is part of the alphabet, so only line endings are stripped.
    encoded = _read_text(args.input).rstrip("\r\n")
    if args.text:
        text = decode_to_text(encoded)
        logger.debug("Decoded %d characters into %d characters", len(encoded), len(text))
        _write_text(args.output, text)
    else:
        data = decode(encoded)
        logger.debug("Decoded %d characters into %d bytes", len(encoded), len(data))
        _write_bytes(args.output, data)


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        if args.command == "encode":
            run_encode(args)
        elif args.command == "decode":
            run_decode(args)
        else:
            parser.error("Unknown command")
    except Base45Error as exc:
        logger.error("%s failed: %s", args.command, exc)
        parser.error(str(exc))
    except ValueError as exc:
        parser.error(str(exc))


__all__ = ["build_arg_parser", "configure_logging", "run_encode", "run_decode", "main"]
