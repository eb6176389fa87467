"""
Module implementing the visitor protocol the demangler reports to, along with
the renderers shipped with the package.
"""

import abc
from typing import Optional

from ada_demangler.token import SpecialSymbol


class DemangleVisitor(abc.ABC):
    """
    Receives the structure of a symbol as it is demangled.

    For `pkg__child__name` the demangler calls:

        enter_prefix, enter_ident, text("pkg"), exit, text("."), exit,
        enter_prefix, enter_ident, text("child"), exit, text("."), exit,
        enter_ident, text("name"), exit,
        finish(None)

    Only `text` has to be implemented.
    """

    def enter_prefix(self) -> None:
        """Start of one qualifying name level."""

    def enter_ident(self) -> None:
        """Start of one identifier, qualifying or terminal."""

    @abc.abstractmethod
    def text(self, text: str) -> None:
        raise NotImplementedError("Trying to visit text with base class")

    def exit(self) -> None:
        """End of the most recently entered scope."""

    def finish(self, special: Optional[SpecialSymbol]) -> None:
        """End of the symbol, with its special classification if any."""


class _RenderingVisitor(DemangleVisitor):
    _SPECIAL_SUFFIXES: dict[SpecialSymbol, str] = {
        SpecialSymbol.TASK_BODY: " task body",
    }

    def __init__(self):
        self.reset()

    def reset(self):
        """
        Clear the rendered output so the visitor can be used again.
        """
        self._parts: list[str] = []

    @property
    def result(self) -> str:
        return "".join(self._parts)

    def text(self, text: str) -> None:
        self._parts.append(text)

    def finish(self, special: Optional[SpecialSymbol]) -> None:
        if special is not None:
            self._parts.append(self._SPECIAL_SUFFIXES[special])

    def __str__(self) -> str:
        return self.result


class DottedNameVisitor(_RenderingVisitor):
    """
    Renders the plain qualified name, e.g. `ada_main.adafinal.s_stalib_adafinal`.
    """


class BracketVisitor(_RenderingVisitor):
    """
    Renders the symbol structure: `[` opens a qualifying level, `(` opens an
    identifier and `)` closes either one.

    `module__pcontrolled__l2` renders as `[(module).)[(pcontrolled).)(l2)`.
    """

    def enter_prefix(self) -> None:
        self._parts.append("[")

    def enter_ident(self) -> None:
        self._parts.append("(")

    def exit(self) -> None:
        self._parts.append(")")
