from __future__ import annotations

import re

from .constants import ENCODED_CODE_SIZE, MAX_REFERRAL_CODE_LENGTH
from .errors import CodeTooLongError

HEX_PAIR_RE = re.compile(r"[0-9a-fA-F]{2}")
TRAILING_BLANK_RE = re.compile(r"[\s\x00]+\Z")


def encode_referral_code(code: str) -> bytes:
    """Encodes a referral code as a null-padded 32-byte value.

    A terminating null byte must always fit, so both the character count and
    the UTF-8 byte length are capped at 31.
    """
    if len(code) > MAX_REFERRAL_CODE_LENGTH:
        raise CodeTooLongError(code, max_length=MAX_REFERRAL_CODE_LENGTH)
    raw = code.encode("utf-8")
    if len(raw) > MAX_REFERRAL_CODE_LENGTH:
        raise CodeTooLongError(code, max_length=MAX_REFERRAL_CODE_LENGTH)
    return raw.ljust(ENCODED_CODE_SIZE, b"\x00")


def encode_referral_code_hex(code: str) -> str:
    return "0x" + encode_referral_code(code).hex()


def _hex_to_bytes(value: str) -> bytes:
    digits = value[2:]
    pairs = (digits[index : index + 2] for index in range(0, len(digits), 2))
    return bytes(int(pair, 16) if HEX_PAIR_RE.fullmatch(pair) else 0 for pair in pairs)


def _decode_null_terminated(raw: bytes) -> str | None:
    if len(raw) != ENCODED_CODE_SIZE:
        return None
    try:
        return raw.split(b"\x00", 1)[0].decode("utf-8")
    except UnicodeDecodeError:
        return None


def _decode_bytewise(raw: bytes) -> str:
    code = "".join(chr(byte) for byte in raw[:ENCODED_CODE_SIZE])
    return TRAILING_BLANK_RE.sub("", code)


def decode_referral_code(encoded: bytes | str) -> str:
    """Decodes a 32-byte referral code given as raw bytes or a 0x-prefixed hex string.

    Values that are not valid null-terminated UTF-8 are rendered byte by byte
    instead, so this never raises.
    """
    raw = _hex_to_bytes(encoded) if isinstance(encoded, str) else bytes(encoded)
    code = _decode_null_terminated(raw)
    if code is not None:
        return code
    return _decode_bytewise(raw)
