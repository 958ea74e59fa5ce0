"""Base45 encoding as defined by draft-faltstrom-base45."""

import logging
from typing import List, Optional, Sequence, Union

logger = logging.getLogger(__name__)

ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:"
BASE = len(ALPHABET)
INVALID = -1

CHUNK_SIZE = 2
ENCODED_CHUNK_SIZE = 3
SMALL_ENCODED_CHUNK_SIZE = 2


def _build_decode_table(alphabet: str) -> tuple:
    table = [INVALID] * 256
    for index, char in enumerate(alphabet):
        table[ord(char)] = index
    return tuple(table)


# Read-only after import.
DECODE_TABLE = _build_decode_table(ALPHABET)

BytesLike = Union[bytes, bytearray, memoryview]


class Base45Error(ValueError):
    """Base class for every error raised by the codec."""


class InvalidEncodingError(Base45Error):
    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(message)
        self.position = position


class InvalidUtf8Error(Base45Error):
    pass


def encoded_length(data_length: int) -> int:
    if data_length < 0:
        raise ValueError("data_length must be >= 0")
    whole, remainder = divmod(data_length, CHUNK_SIZE)
    return whole * ENCODED_CHUNK_SIZE + (SMALL_ENCODED_CHUNK_SIZE if remainder else 0)


def decoded_length(text_length: int) -> int:
    """Byte count produced by decoding ``text_length`` characters.

    Raises InvalidEncodingError for lengths that no encoder can produce.
    """
    if text_length < 0:
        raise ValueError("text_length must be >= 0")
    whole, remainder = divmod(text_length, ENCODED_CHUNK_SIZE)
    if remainder == 1:
        raise InvalidEncodingError(
            f"Invalid base45 length {text_length}: a trailing group of one "
            "character cannot be decoded",
            position=text_length - 1,
        )
    return whole * CHUNK_SIZE + (1 if remainder == SMALL_ENCODED_CHUNK_SIZE else 0)


def encode(data: Union[BytesLike, str]) -> str:
    """Encode bytes to a base45 string.

    A ``str`` argument is encoded as its UTF-8 bytes.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    elif isinstance(data, (bytes, bytearray, memoryview)):
        data = bytes(data)
    else:
        raise TypeError(
            f"a bytes-like object or str is required, not {type(data).__name__!r}"
        )

    out: List[str] = []
    whole_end = len(data) - len(data) % CHUNK_SIZE
    for i in range(0, whole_end, CHUNK_SIZE):
        value = data[i] * 256 + data[i + 1]
        value, d0 = divmod(value, BASE)
        d2, d1 = divmod(value, BASE)
        out.append(ALPHABET[d0])
        out.append(ALPHABET[d1])
        out.append(ALPHABET[d2])

    if whole_end < len(data):
        d1, d0 = divmod(data[-1], BASE)
        out.append(ALPHABET[d0])
        out.append(ALPHABET[d1])

    return "".join(out)


def encode_text(text: str) -> str:
    if not isinstance(text, str):
        raise TypeError(f"a str is required, not {type(text).__name__!r}")
    return encode(text.encode("utf-8"))


def _to_digits(text: Union[str, BytesLike]) -> List[int]:
    if isinstance(text, str):
        codes: Sequence[int] = [ord(char) for char in text]
    elif isinstance(text, (bytes, bytearray, memoryview)):
        codes = bytes(text)
    else:
        raise TypeError(
            f"a str or bytes-like object is required, not {type(text).__name__!r}"
        )

    digits: List[int] = []
    for position, code in enumerate(codes):
        digit = DECODE_TABLE[code] if code < len(DECODE_TABLE) else INVALID
        if digit == INVALID:
            logger.debug("Rejecting base45 input at position %d", position)
            raise InvalidEncodingError(
                f"Invalid base45 character {chr(code)!r} at position {position}",
                position=position,
            )
        digits.append(digit)
    return digits


def decode(text: Union[str, BytesLike]) -> bytes:
    """Decode a base45 string to bytes.

    Raises InvalidEncodingError when the input holds a character outside the
    alphabet, has a length of 1 modulo 3, or contains a group whose value
    does not fit its byte width.
    """
    digits = _to_digits(text)
    result = bytearray(decoded_length(len(digits)))

    whole_end = len(digits) - len(digits) % ENCODED_CHUNK_SIZE
    ri = 0
    for i in range(0, whole_end, ENCODED_CHUNK_SIZE):
        value = digits[i] + BASE * digits[i + 1] + BASE * BASE * digits[i + 2]
        if value > 0xFFFF:
            raise InvalidEncodingError(
                f"Base45 group at position {i} decodes to {value}, "
                "which exceeds 0xFFFF",
                position=i,
            )
        result[ri], result[ri + 1] = divmod(value, 256)
        ri += CHUNK_SIZE

    if whole_end < len(digits):
        value = digits[whole_end] + BASE * digits[whole_end + 1]
        if value > 0xFF:
            raise InvalidEncodingError(
                f"Trailing base45 group at position {whole_end} decodes to "
                f"{value}, which exceeds 0xFF",
                position=whole_end,
            )
        result[ri] = value

    return bytes(result)


def decode_to_text(text: Union[str, BytesLike]) -> str:
    data = decode(text)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidUtf8Error(
            f"Decoded base45 payload is not valid UTF-8: {exc.reason} "
            f"at byte {exc.start}"
        ) from exc


__all__ = [
    "ALPHABET",
    "BASE",
    "DECODE_TABLE",
    "INVALID",
    "Base45Error",
    "InvalidEncodingError",
    "InvalidUtf8Error",
    "encoded_length",
    "decoded_length",
    "encode",
    "encode_text",
    "decode",
    "decode_to_text",
]
