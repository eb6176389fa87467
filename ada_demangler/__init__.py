"""
Python package which implements a demangler for GNAT Ada symbols.
"""

from ada_demangler.demangler import (
    DemangleError,
    decode_text,
    demangle,
    demangle_name,
    is_anonymous_block,
    is_short_name,
    parse,
)
from ada_demangler.token import DecodedText, Operator, SpecialSymbol
from ada_demangler.visitor import BracketVisitor, DemangleVisitor, DottedNameVisitor

__all__ = [
    "parse",
    "demangle",
    "demangle_name",
    "decode_text",
    "is_short_name",
    "is_anonymous_block",
    "DemangleError",
    "DemangleVisitor",
    "BracketVisitor",
    "DottedNameVisitor",
    "DecodedText",
    "Operator",
    "SpecialSymbol",
]
