"""
Printf-like token substitution for log messages.

A format string may contain ``%x`` tokens. Each token whose letter has a
registered formatter consumes the next unused argument and is replaced by
the formatter's output. Consumed arguments are removed from the argument
list; whatever is left over is printed after the message by the caller.

    render("user %o logged in", [{"id": 7}, "extra"])
        -> ("user {'id': 7} logged in", ["extra"])

Built-in tokens:
    %o   single-line inspection of the value
    %O   full (possibly multi-line) inspection of the value
    %s   str(value)
    %d   integer (also %i)
    %f   float
    %j   JSON
    %%   a literal percent sign, consumes nothing

Unknown letters are left exactly as written and consume nothing.
"""

import json
import pprint
import traceback
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple


Formatter = Callable[[Any], str]


def inspect_full(value: Any) -> str:
    """Structural dump of ``value``; long containers span several lines."""
    return pprint.pformat(value, width=80, sort_dicts=False)


def inspect_line(value: Any) -> str:
    """Structural dump of ``value`` collapsed onto a single line."""
    return " ".join(line.strip() for line in inspect_full(value).split("\n"))


def _as_json(value: Any) -> str:
    return json.dumps(value, default=str)


FORMATTERS: Dict[str, Formatter] = {
    'o': inspect_line,
    'O': inspect_full,
    's': str,
    'd': lambda v: str(int(v)),
    'i': lambda v: str(int(v)),
    'f': lambda v: str(float(v)),
    'j': _as_json,
}


def register_formatter(token: str, func: Formatter) -> None:
    """Register (or replace) the formatter for a single-letter token.

    Call at import time, before any logger formats with the token.
    """
    if len(token) != 1 or not token.isalpha():
        raise ValueError(f"formatter token must be a single letter, got {token!r}")
    FORMATTERS[token] = func


def get_formatter(token: str) -> Optional[Formatter]:
    """Look up a formatter by token letter. Returns None if not registered."""
    return FORMATTERS.get(token)


def render(fmt: str, args: Sequence[Any]) -> Tuple[str, List[Any]]:
    """Substitute ``%x`` tokens in ``fmt`` using ``args``.

    Args:
        fmt: Format string
        args: Positional values, consumed left to right

    Returns:
        (rendered string, arguments not consumed by any token)

    A token whose formatter raises, or that has no argument left to
    consume, is kept literally and consumes nothing.
    """
    remaining = list(args)
    out = []
    pos = 0
    length = len(fmt)

    while pos < length:
        ch = fmt[pos]
        if ch != '%' or pos + 1 >= length:
            out.append(ch)
            pos += 1
            continue

        token = fmt[pos + 1]
        if token == '%':
            out.append('%')
            pos += 2
            continue
        if not token.isalpha():
            out.append(ch)
            pos += 1
            continue

        formatter = FORMATTERS.get(token)
        if formatter is not None and remaining:
            try:
                text = formatter(remaining[0])
            except Exception:
                text = None
            if text is not None:
                out.append(text)
                del remaining[0]
                pos += 2
                continue

        out.append(fmt[pos:pos + 2])
        pos += 2

    return "".join(out), remaining


def format_exception(exc: BaseException) -> str:
    """Traceback text for ``exc``, or "Type: message" if it was never raised."""
    lines = traceback.format_exception(type(exc), exc, exc.__traceback__)
    return "".join(lines).rstrip("\n")


def normalize_args(args: Sequence[Any]) -> Tuple[str, List[Any]]:
    """Pick the format string for a logger call.

    - exception first  ->  its traceback text is the format string
    - str first        ->  used as the format string
    - anything else    ->  "%O", with the value left to be consumed by it

    Returns:
        (format string, arguments still to be substituted)
    """
    if not args:
        return "", []
    first = args[0]
    if isinstance(first, BaseException):
        return format_exception(first), list(args[1:])
    if isinstance(first, str):
        return first, list(args[1:])
    return "%O", list(args)
