"""Command-line option parsing shared by the markdown tools."""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from typing import Optional

_INTEGER = re.compile(r"[ \t\n\v\f\r]*[+-]?[0-9]+\Z")
_LONG_MIN = -(2**63)
_LONG_MAX = 2**63 - 1

ShortHandler = Callable[[str, Optional[str]], int]
LongHandler = Callable[[str, Optional[str]], int]
ArgumentHandler = Callable[[int, str, bool], int]


class OptionError(ValueError):
    """An option or argument on the command line could not be used."""


def parse_int(text: str) -> int:
    """Parse a whole decimal number that fits in a signed 64-bit value.

    Leading whitespace and a sign are allowed; anything after the digits is
    an error. An empty string reads as zero.
    """
    if text == "":
        return 0
    if not _INTEGER.match(text):
        raise ValueError(f"not an integer: {text!r}")
    value = int(text.lstrip(" \t\n\v\f\r"))
    if not _LONG_MIN <= value <= _LONG_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


def strip_prefix(text: str, prefix: str) -> Optional[str]:
    """Return what follows ``prefix`` in ``text``, or ``None`` if it does not start so."""
    if text.startswith(prefix):
        return text[len(prefix):]
    return None


def format_option(short_opt: Optional[str], long_opt: str, description: str) -> str:
    """Format one line of option help."""
    lead = f"  -{short_opt}, " if short_opt else "      "
    return f"{lead}--{long_opt:<13}  {description}"


def parse_options(
    argv: Sequence[str],
    on_short: ShortHandler,
    on_long: LongHandler,
    on_argument: ArgumentHandler,
) -> bool:
    """Walk ``argv`` (program name first), handing options and arguments to callbacks.

    ``on_short(opt, next)`` and ``on_long(opt, next)`` return 1 when the
    option stands alone, 2 when it used ``next`` as its value, or 0 to stop.
    ``on_argument(index, arg, forced)`` returns a false value to stop;
    arguments after ``--`` are forced. Returns ``False`` if a callback
    stopped the walk and ``True`` otherwise. Callbacks report errors by
    raising :class:`OptionError`.
    """
    i = 1
    regular_args = 0
    count = len(argv)

    while i < count:
        arg = argv[i]
        if len(arg) > 1 and arg[0] == "-":
            next_arg = argv[i + 1] if i + 1 < count else None

            if arg == "--":
                i += 1
                break

            if arg[1] == "-":
                result = on_long(arg[2:], next_arg)
                if not result:
                    return False
                i += result
            else:
                for pos in range(1, len(arg)):
                    attached = pos + 1 < len(arg)
                    value = arg[pos + 1:] if attached else next_arg
                    result = on_short(arg[pos], value)
                    if not result:
                        return False
                    if result == 2:
                        if not attached:
                            i += 1
                        break
                i += 1
        else:
            if not on_argument(regular_args, arg, False):
                return False
            regular_args += 1
            i += 1

    while i < count:
        if not on_argument(regular_args, argv[i], True):
            return False
        regular_args += 1
        i += 1

    return True