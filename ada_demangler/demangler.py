"""
Demangler for GNAT Ada symbols.

GNAT encodes a qualified name such as `Ada.Exceptions.Exception_Traces` by
joining lowercased components with `__`, optionally followed by suffixes that
carry overloading and debugging information. See `exp_dbug.ads` in the GNAT
sources for the full set of conventions.
"""

import logging
from typing import Union

from ada_demangler.io_util import DELIMITER, is_ascii_digits, rfind_any, split_suffix
from ada_demangler.token import DecodedText, Operator
from ada_demangler.visitor import DemangleVisitor, DottedNameVisitor

logger = logging.getLogger(__name__)

LIBRARY_PREFIX = b"_ada_"
SHORT_NAME_PREFIX = b"ada_main__"
SEPARATOR = DecodedText.borrowed(".")

# Trailing markers for type, exception, profile and block information.
_NAME_TERMINATORS = b"XNEB"


class DemangleError(ValueError):
    """
    Raised when a segment of a symbol cannot be decoded into text.
    """


def _as_bytes(symbol: Union[bytes, str]) -> bytes:
    if isinstance(symbol, str):
        return symbol.encode("utf-8")
    return bytes(symbol)


def is_short_name(symbol: Union[bytes, str]) -> bool:
    """
    Determine if `symbol` is one of the compressed names GNAT emits for
    `ada_main` internals, e.g. `ada_main__u00005`. These carry no useful
    name and are not worth demangling.
    """
    symbol = _as_bytes(symbol)
    if not symbol.startswith(SHORT_NAME_PREFIX) or len(symbol) < 12:
        return False

    marker = symbol[10:11]
    if not b"a" <= marker <= b"z":
        return False

    return is_ascii_digits(symbol[11:])


def is_anonymous_block(segment: bytes) -> bool:
    """
    Determine if `segment` names a compiler generated block, e.g. `B_4`.
    """
    return len(segment) >= 3 and segment.startswith(b"B_") and is_ascii_digits(segment[2:])


def decode_text(segment: Union[bytes, str]) -> DecodedText:
    """
    Decode one mangled segment, raising a `DemangleError` if it is malformed.
    """
    segment = _as_bytes(segment)
    try:
        return DecodedText.decode(segment)
    except ValueError as e:
        raise DemangleError(f"Unable to decode segment {segment!r}: {e}") from e


def parse(symbol: Union[bytes, str], visitor: DemangleVisitor):
    """
    Demangle `symbol`, reporting its structure to `visitor`.

    A `DemangleError` is raised on the first segment that cannot be decoded.
    The visitor may have received events for earlier segments by then.
    """
    rest = _as_bytes(symbol)

    if rest.startswith(LIBRARY_PREFIX):
        rest = rest[len(LIBRARY_PREFIX) :]

    # Overloaded subprograms get a `__<n>` counter.
    split = split_suffix(rest)
    if split:
        before, suffix = split
        if suffix[:1].isdigit():
            rest = before

    start = 0
    index = rest.find(DELIMITER)
    while index >= 0:
        prefix = rest[start:index]
        start = index + len(DELIMITER)
        index = rest.find(DELIMITER, start)

        # Drop a trailing `T` tag from the segment.
        tag = prefix.rfind(b"T")
        if tag >= 0:
            prefix = prefix[:tag]

        if is_anonymous_block(prefix):
            continue

        name = decode_text(prefix)
        visitor.enter_prefix()
        visitor.enter_ident()
        visitor.text(str(name))
        visitor.exit()
        visitor.text(str(SEPARATOR))
        visitor.exit()

    rest = rest[start:]
    end = rfind_any(rest, _NAME_TERMINATORS)
    if end is not None:
        rest = rest[:end]

    op = Operator.from_segment(rest)
    name = DecodedText.borrowed(str(op)) if op is not None else decode_text(rest)
    visitor.enter_ident()
    visitor.text(str(name))
    visitor.exit()

    # No special symbol kinds are detected yet.
    visitor.finish(None)


def demangle(symbol: Union[bytes, str], visitor: DemangleVisitor) -> bool:
    """
    Demangle `symbol`, reporting its structure to `visitor`.

    Returns False if the symbol could not be decoded, in which case the caller
    should display it verbatim.
    """
    try:
        parse(symbol, visitor)
    except DemangleError as e:
        logger.debug("Failed to demangle %r: %s", symbol, e)
        return False
    return True


def demangle_name(symbol: Union[bytes, str]) -> str:
    """
    Return the dotted name for `symbol`, or the symbol itself if it cannot be
    demangled.
    """
    visitor = DottedNameVisitor()
    if demangle(symbol, visitor):
        return visitor.result

    if isinstance(symbol, str):
        return symbol
    return bytes(symbol).decode("utf-8", errors="replace")
