"""Base45 binary-to-text encoding (draft-faltstrom-base45)."""

from .codec import (
    ALPHABET,
    Base45Error,
    InvalidEncodingError,
    InvalidUtf8Error,
    decode,
    decode_to_text,
    decoded_length,
    encode,
    encode_text,
    encoded_length,
)

__all__ = [
    "ALPHABET",
    "Base45Error",
    "InvalidEncodingError",
    "InvalidUtf8Error",
    "decode",
    "decode_to_text",
    "decoded_length",
    "encode",
    "encode_text",
    "encoded_length",
]

__version__ = "0.1.0"
