"""CLI shim for running the codec directly from the repository checkout."""

from base45_codec.cli import main
from base45_codec.codec import (
    ALPHABET,
    Base45Error,
    InvalidEncodingError,
    InvalidUtf8Error,
    decode,
    decode_to_text,
    encode,
    encode_text,
)

__all__ = [
    "ALPHABET",
    "Base45Error",
    "InvalidEncodingError",
    "InvalidUtf8Error",
    "decode",
    "decode_to_text",
    "encode",
    "encode_text",
    "main",
]


if __name__ == "__main__":
    main()
