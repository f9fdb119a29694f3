"""Line assembly and the default stream sink for nsdebug.

Turns a rendered message into the final line that a sink writes:

  colors on:   "  <esc>[36;1mapi:users <esc>[0mfetched 3 rows <esc>[36m+12ms<esc>[0m"
  colors off:  "2026-01-01T12:00:00.000Z api:users fetched 3 rows"

The sink is anything callable with one string. StreamSink is the default
and writes to sys.stderr unless handed another file.
"""

import sys
from datetime import datetime, timezone
from typing import Any, Optional, Sequence, TextIO

from .env import COLORS_VAR, HIDE_DATE_VAR, env_flag, get_env, is_unset, truthy
from .formatters import inspect_line


# ANSI color numbers, picked by namespace hash
COLORS = [6, 2, 3, 4, 5, 1]


def select_color(name: str) -> int:
    """Pick a palette color for ``name``, stable across runs.

    Rolling 32-bit signed hash (h = h*31 + unit) over the UTF-16 code
    units of the name, then abs(h) modulo the palette size.
    """
    h = 0
    data = name.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = (h * 31 + unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return COLORS[abs(h) % len(COLORS)]


def color_code(color: int) -> str:
    """Escape-sequence prefix for ``color``, without the closing 'm'."""
    if color < 8:
        return f"\x1b[3{color}"
    return f"\x1b[38;5;{color}"


def humanize(ms: float) -> str:
    """Short elapsed-time text: 850ms, 2s, 5m, 3h, 1d."""
    ms = abs(ms)
    for unit, size in (('d', 86_400_000), ('h', 3_600_000),
                       ('m', 60_000), ('s', 1000)):
        if ms >= size:
            return f"{round(ms / size)}{unit}"
    return f"{int(ms)}ms"


def get_date(environ=None, hide: Optional[bool] = None) -> str:
    """ISO-8601 UTC timestamp plus a space, or "" when the date is hidden.

    ``hide`` wins when given; otherwise DEBUG_HIDE_DATE decides.
    """
    if hide is None:
        hide = env_flag(HIDE_DATE_VAR, environ)
    if hide:
        return ""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z") + " "


def _describe(value: Any) -> str:
    """inspect_line(), falling back to "<TypeName>" if inspection raises."""
    if isinstance(value, str):
        return value
    try:
        return inspect_line(value)
    except Exception:
        return f"<{type(value).__name__}>"


def _join_extra(args: Sequence[Any]) -> str:
    return "".join(" " + _describe(a) for a in args)


def format_line(message: str, extra: Sequence[Any], *, name: str,
                use_colors: bool, color: int, diff: float,
                hide_date: Optional[bool] = None, environ=None) -> str:
    """Build the full output line for one logger call.

    Args:
        message: Rendered message (may contain newlines)
        extra: Arguments left over after token substitution
        name: Logger namespace
        use_colors: Emit ANSI colors and the elapsed marker
        color: Palette color for the namespace
        diff: Milliseconds since this logger's previous call
        hide_date: Drop the date prefix (default: DEBUG_HIDE_DATE)
        environ: Mapping consulted for DEBUG_HIDE_DATE (default: os.environ)

    The elapsed marker is humanized (+850ms, +2s, +5m) instead of a raw
    millisecond count.
    """
    if use_colors:
        code = color_code(color)
        prefix = f"  {code};1m{name} \x1b[0m"
        body = prefix + message.replace("\n", "\n" + prefix)
        return f"{body}{_join_extra(extra)} {code}m+{humanize(diff)}\x1b[0m"
    return f"{get_date(environ, hide_date)}{name} {message}{_join_extra(extra)}"


class StreamSink:
    """Writes each line plus a newline to a text stream.

    The stream defaults to sys.stderr, looked up at write time so a
    redirected stderr is honoured. Write errors propagate to the caller.
    """

    def __init__(self, file: TextIO = None):
        self._file = file

    @property
    def file(self) -> TextIO:
        return self._file if self._file is not None else sys.stderr

    def __call__(self, line: str) -> None:
        self.file.write(line + "\n")

    def isatty(self) -> bool:
        isatty = getattr(self.file, "isatty", None)
        return bool(isatty and isatty())


default_sink = StreamSink()


def use_colors_for(sink: Any = None, environ=None) -> bool:
    """Decide whether output to ``sink`` should be colorized.

    DEBUG_COLORS wins when set; otherwise colors follow whether the sink
    (default: stderr) is attached to a terminal.
    """
    value = get_env(COLORS_VAR, environ)
    if not is_unset(value):
        return truthy(value)
    sink = default_sink if sink is None else sink
    isatty = getattr(sink, "isatty", None)
    return bool(callable(isatty) and isatty())
