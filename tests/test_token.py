"""
Tests for the GNAT encoding variants and scanning helpers.
"""

import pytest

from ada_demangler import (
    BracketVisitor,
    DecodedText,
    DemangleError,
    DottedNameVisitor,
    Operator,
    SpecialSymbol,
    decode_text,
)
from ada_demangler.io_util import hex_to_code_unit, rfind_any, split_suffix


def test_decode_borrowed():
    text = decode_text(b"hello_world")
    assert text.is_borrowed()
    assert str(text) == "hello_world"


def test_decode_owned():
    text = decode_text(b"Uc3W00e9")
    assert text.is_owned()
    assert str(text) == "Ãé"


def test_decode_surrogate_pair():
    text = decode_text(b"xWd83dWde00y")
    assert text == DecodedText(kind=DecodedText.Kind.OWNED, content="x\U0001f600y")


def test_decode_raw_upper_half_byte():
    """
    Bytes outside ASCII stand for the code unit of the same value.
    """
    text = decode_text(b"caf\xe9")
    assert text.is_owned()
    assert str(text) == "café"


def test_decode_ascii_escape():
    assert str(decode_text(b"U41W0042")) == "AB"


@pytest.mark.parametrize(
    "segment", [b"U", b"U4", b"W", b"W123", b"Ug0", b"UAB", b"Wd800", b"Wdc00x"]
)
def test_decode_failures(segment):
    with pytest.raises(DemangleError):
        decode_text(segment)


def test_decode_failures_are_value_errors():
    with pytest.raises(ValueError):
        DecodedText.decode(b"U")


def test_operators():
    expected = {
        b"Oabs": "abs",
        b"Oand": "and",
        b"Omod": "mod",
        b"Onot": "not",
        b"Oor": "or",
        b"Orem": "rem",
        b"Oxor": "xor",
        b"Oeq": "=",
        b"One": "/=",
        b"Olt": "<",
        b"Ole": "<=",
        b"Ogt": ">",
        b"Oge": ">=",
        b"Oadd": "+",
        b"Osubtract": "-",
        b"Oconcat": "&",
        b"Omultiply": "*",
        b"Odivide": "/",
        b"Oexpon": "**",
    }
    for segment, symbol in expected.items():
        op = Operator.from_segment(segment)
        assert op is not None, segment
        assert str(op) == symbol


@pytest.mark.parametrize(
    "segment", [b"", b"O", b"eq", b"OEQ", b"Oeqx", b"oeq", b"Oadd_", b"O\xffeq"]
)
def test_not_operators(segment):
    assert Operator.from_segment(segment) is None


def test_split_suffix():
    assert split_suffix(b"a__b__c") == (b"a__b", b"c")
    assert split_suffix(b"a___b") == (b"a_", b"b")
    assert split_suffix(b"a__") == (b"a", b"")
    assert split_suffix(b"abc") is None


def test_rfind_any():
    assert rfind_any(b"nameXnB", b"XNEB") == 6
    assert rfind_any(b"nameXn", b"XNEB") == 4
    assert rfind_any(b"name", b"XNEB") is None
    assert rfind_any(b"name", b"") is None


def test_hex_to_code_unit():
    assert hex_to_code_unit(b"e9") == 0xE9
    assert hex_to_code_unit(b"03b1") == 0x3B1
    with pytest.raises(ValueError):
        hex_to_code_unit(b"E9")
    with pytest.raises(ValueError):
        hex_to_code_unit(b"abc")


def test_special_symbol_rendering():
    """
    Renderers mark task bodies when told about them.
    """
    brackets = BracketVisitor()
    brackets.enter_ident()
    brackets.text("worker")
    brackets.exit()
    brackets.finish(SpecialSymbol.TASK_BODY)
    assert brackets.result == "(worker) task body"

    dotted = DottedNameVisitor()
    dotted.text("worker")
    dotted.finish(SpecialSymbol.TASK_BODY)
    assert str(dotted) == "worker task body"

    dotted.reset()
    assert dotted.result == ""
