"""
Utility functions for scanning mangled byte strings.
"""

from io import BufferedIOBase, BytesIO
from typing import Optional

DELIMITER = b"__"

_HEX_DIGITS = b"0123456789abcdef"


def read_exact(src: BufferedIOBase, size: int) -> bytes:
    """
    Read exactly `size` bytes from `src`, or raise a ValueError
    """
    value = src.read(size)
    if len(value) != size:
        raise ValueError(f"Unable to read {size} bytes; got {value!r}")
    return value


def bytes_left(src: BytesIO) -> int:
    """
    Retrieve the number of bytes left in `src`.
    """
    return len(src.getbuffer()) - src.tell()


def hex_to_code_unit(digits: bytes) -> int:
    """
    Convert 2 or 4 lowercase ASCII hex digits to a 16-bit code unit.

    GNAT always writes its hex escapes in lowercase, so anything else
    (including uppercase digits) raises a ValueError.
    """
    if len(digits) not in (2, 4):
        raise ValueError(f"Expected 2 or 4 hex digits, got {digits!r}")

    unit = 0
    for digit in digits:
        value = _HEX_DIGITS.find(digit)
        if value < 0:
            raise ValueError(f"Invalid hex digit {chr(digit)!r} in {digits!r}")
        unit = (unit << 4) | value
    return unit


def split_suffix(src: bytes) -> Optional[tuple[bytes, bytes]]:
    """
    Look behind from the end of `src` for the last `__` delimiter.

    If one is found, return the bytes before it and the bytes after it.
    Otherwise, return `None`.
    """
    index = src.rfind(DELIMITER)
    if index < 0:
        return None
    return src[:index], src[index + len(DELIMITER) :]


def rfind_any(src: bytes, chars: bytes) -> Optional[int]:
    """
    Return the index of the last byte in `src` which is one of `chars`,
    or `None` if there is no such byte.
    """
    index = max((src.rfind(bytes([char])) for char in chars), default=-1)
    if index < 0:
        return None
    return index


def is_ascii_digits(src: bytes) -> bool:
    """
    Determine if `src` is non-empty and made only of ASCII decimal digits.
    """
    return src.isdigit()
