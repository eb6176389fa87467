"""
CLI for the demangler.
"""

import argparse
import logging
import os
import sys
from typing import BinaryIO, Iterable, Optional

from ada_demangler.demangler import DemangleError, demangle, is_short_name, parse
from ada_demangler.visitor import BracketVisitor, DottedNameVisitor

logger = logging.getLogger(__name__)

VISITORS = {
    "dotted": DottedNameVisitor,
    "brackets": BracketVisitor,
}

parser = argparse.ArgumentParser("ada-demangler", description="Demangler for GNAT Ada symbols.")
parser.add_argument(
    "symbol",
    help="Symbols to demangle. Reads one symbol per line from stdin if omitted.",
    nargs="*",
)
parser.add_argument(
    "--style", "-s", help="Output style.", choices=sorted(VISITORS), default="dotted"
)
parser.add_argument(
    "--skip-short-names",
    help="Print GNAT compressed `ada_main` names as-is instead of demangling them.",
    action="store_true",
)
parser.add_argument(
    "--error-on-failure", "-e", help="Throw an exception if demangling fails", action="store_true"
)
parser.add_argument("--verbose", "-v", help="Enable debug logging.", action="store_true")


def demangle_stream(
    src: Iterable[bytes],
    dst: BinaryIO,
    style: str = "dotted",
    skip_short_names: bool = False,
    error_on_failure: bool = False,
) -> int:
    """
    Demangle every line of `src` and write the results to `dst`, keeping the
    line endings as they were.

    Lines that cannot be demangled are written unchanged, unless
    `error_on_failure` is set, in which case the `DemangleError` propagates.
    Returns the number of lines that could not be demangled.
    """
    visitor_cls = VISITORS[style]
    failures = 0

    for line in src:
        newline = line.endswith(b"\n")
        symbol = line[:-1] if newline else line

        visitor = visitor_cls()
        if skip_short_names and is_short_name(symbol):
            logger.debug("Skipping short name %r", symbol)
            out = symbol
        elif error_on_failure:
            parse(symbol, visitor)
            out = visitor.result.encode("utf-8")
        elif demangle(symbol, visitor):
            out = visitor.result.encode("utf-8")
        else:
            failures += 1
            out = symbol

        dst.write(out)
        if newline:
            dst.write(b"\n")

    return failures


def main(argv: Optional[list[str]] = None):
    args = parser.parse_args(argv)  # noqa
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
    )

    if args.symbol:
        lines = [os.fsencode(symbol) + b"\n" for symbol in args.symbol]
    else:
        lines = sys.stdin.buffer

    try:
        failures = demangle_stream(
            lines,
            sys.stdout.buffer,
            style=args.style,
            skip_short_names=args.skip_short_names,
            error_on_failure=args.error_on_failure,
        )
    except DemangleError as e:
        parser.exit(1, f"ada-demangler: error: {e}\n")
    finally:
        sys.stdout.buffer.flush()

    if failures:
        logger.debug("%d symbol(s) could not be demangled", failures)


if __name__ == "__main__":
    main()
