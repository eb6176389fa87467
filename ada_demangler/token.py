"""
Module implementing variant types for GNAT name encodings.

These variants are mostly used to improve the readability of the demangler.
"""

from dataclasses import dataclass
from io import BytesIO
from typing import ClassVar, Optional

from strenum import StrEnum

from ada_demangler.io_util import bytes_left, hex_to_code_unit, read_exact


@dataclass(frozen=True)
class DecodedText:
    """
    Variant type for the displayable text of one mangled segment.

    `BORROWED` text is a direct view of the mangled bytes (or a static table
    entry), while `OWNED` text was rebuilt from GNAT's `U`/`W` escapes.
    """

    class Kind(StrEnum):
        BORROWED = "borrowed"
        OWNED = "owned"

    # Escape prefix -> number of hex digits that follow it.
    _ESCAPES: ClassVar[dict[int, int]] = {
        ord("U"): 2,
        ord("W"): 4,
    }

    kind: Kind
    content: str

    def is_borrowed(self) -> bool:
        return self.kind == DecodedText.Kind.BORROWED

    def is_owned(self) -> bool:
        return self.kind == DecodedText.Kind.OWNED

    @staticmethod
    def borrowed(content: str) -> "DecodedText":
        return DecodedText(kind=DecodedText.Kind.BORROWED, content=content)

    @staticmethod
    def decode(segment: bytes) -> "DecodedText":
        """
        Decode a mangled segment into text.

        Upper half characters are encoded as `Uhh` and wide characters as
        `Whhhh`, where `h` is a lowercase hex digit. Every other byte stands for
        itself. The resulting code units are decoded as UTF-16.

        A ValueError is raised if an escape is truncated, holds a non-hex
        digit, or the code units are not valid UTF-16.
        """
        if segment.isascii() and not any(c in DecodedText._ESCAPES for c in segment):
            return DecodedText.borrowed(segment.decode("ascii"))

        units: list[int] = []
        src = BytesIO(segment)
        while bytes_left(src):
            char = read_exact(src, 1)[0]
            num_digits = DecodedText._ESCAPES.get(char)
            if num_digits is None:
                units.append(char)
            else:
                units.append(hex_to_code_unit(read_exact(src, num_digits)))

        raw = b"".join(unit.to_bytes(2, "little") for unit in units)
        try:
            content = raw.decode("utf-16-le")
        except UnicodeDecodeError as e:
            raise ValueError(f"Invalid UTF-16 sequence in {segment!r}") from e

        return DecodedText(kind=DecodedText.Kind.OWNED, content=content)

    def __str__(self) -> str:
        return self.content


@dataclass(frozen=True)
class Operator:
    """
    Variant type for GNAT operator encodings (`Oeq`, `Oadd`, ...).
    """

    class Kind(StrEnum):
        ABS = "abs"
        AND = "and"
        MOD = "mod"
        NOT = "not"
        OR = "or"
        REM = "rem"
        XOR = "xor"
        EQUAL = "eq"
        NOT_EQUAL = "ne"
        LESS = "lt"
        LESS_EQUAL = "le"
        GREATER = "gt"
        GREATER_EQUAL = "ge"
        ADD = "add"
        SUBTRACT = "subtract"
        CONCAT = "concat"
        MULTIPLY = "multiply"
        DIVIDE = "divide"
        EXPON = "expon"

    _OPERATORS: ClassVar[dict[Kind, str]] = {
        Kind.ABS: "abs",
        Kind.AND: "and",
        Kind.MOD: "mod",
        Kind.NOT: "not",
        Kind.OR: "or",
        Kind.REM: "rem",
        Kind.XOR: "xor",
        Kind.EQUAL: "=",
        Kind.NOT_EQUAL: "/=",
        Kind.LESS: "<",
        Kind.LESS_EQUAL: "<=",
        Kind.GREATER: ">",
        Kind.GREATER_EQUAL: ">=",
        Kind.ADD: "+",
        Kind.SUBTRACT: "-",
        Kind.CONCAT: "&",
        Kind.MULTIPLY: "*",
        Kind.DIVIDE: "/",
        Kind.EXPON: "**",
    }

    PREFIX: ClassVar[bytes] = b"O"

    kind: Kind

    def get_symbol(self) -> str:
        """
        Return the Ada spelling of this operator.
        """
        return self._OPERATORS[self.kind]

    def __str__(self) -> str:
        return self.get_symbol()

    @staticmethod
    def from_segment(segment: bytes) -> Optional["Operator"]:
        """
        Given a mangled segment, determine if it is an encoded operator.

        Only an exact, case-sensitive match of the whole segment counts;
        otherwise `None` is returned and the segment should be decoded as
        ordinary text.
        """
        if not segment.startswith(Operator.PREFIX):
            return None

        name = segment[len(Operator.PREFIX) :]
        if not name.isascii():
            return None

        try:
            return Operator(kind=Operator.Kind(name.decode("ascii")))
        except ValueError:
            return None


class SpecialSymbol(StrEnum):
    """
    Classification of a whole symbol, reported once through
    `DemangleVisitor.finish`.
    """

    TASK_BODY = "task_body"
