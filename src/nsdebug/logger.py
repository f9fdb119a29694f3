"""
Namespaced debug loggers.

    from nsdebug import create_logger, enable

    log = create_logger("worker:queue")
    enable("worker:*")
    log("picked job %s after %d retries", job_id, retries)

A logger call is a no-op unless its namespace is enabled in the registry:
no timestamp update, no formatting, no output. When enabled, the call
renders its arguments, decorates the line with the namespace, a color and
the time since the logger's previous call, and hands it to the sink.
"""

import time
import weakref
from typing import Any, Callable, Optional, Union

from .formatters import normalize_args, render
from .output import default_sink, format_line, select_color, use_colors_for
from .registry import Registry, get_registry


Sink = Callable[[str], Any]

# Logger -> namespace, without keeping loggers alive
_namespaces: "weakref.WeakKeyDictionary[DebugLogger, str]" = weakref.WeakKeyDictionary()


def _now_ms() -> int:
    return int(time.time() * 1000)


class DebugLogger:
    """A callable bound to one namespace.

    Attributes:
        last_call: Timestamp (ms) of the last emitted call, None before any
        color: Palette color derived from the namespace
        use_colors: Whether lines are colorized
        hide_date: Drop the date prefix on plain lines (None: DEBUG_HIDE_DATE)
    """

    def __init__(
        self,
        name: str,
        log: Optional[Sink] = None,
        use_colors: Optional[bool] = None,
        registry: Optional[Registry] = None,
        hide_date: Optional[bool] = None,
    ):
        self._name = name
        self._log = log
        self._registry = registry
        self.last_call: Optional[int] = None
        self.color = select_color(name)
        if use_colors is None:
            use_colors = use_colors_for(log if log is not None else default_sink)
        self.use_colors = use_colors
        self.hide_date = hide_date

    @property
    def namespace(self) -> str:
        return self._name

    @property
    def registry(self) -> Registry:
        return self._registry if self._registry is not None else get_registry()

    @property
    def enabled(self) -> bool:
        return self.registry.is_enabled(self._name)

    def __call__(self, *args: Any) -> None:
        if not self.registry.is_enabled(self._name):
            return

        now = _now_ms()
        diff = now - (self.last_call if self.last_call is not None else now)
        self.last_call = now

        fmt, values = normalize_args(args)
        message, extra = render(fmt, values)
        line = format_line(message, extra, name=self._name,
                           use_colors=self.use_colors, color=self.color,
                           diff=diff, hide_date=self.hide_date)
        (self._log or default_sink)(line)

    def extend(self, sub: str, delimiter: str = ":") -> "DebugLogger":
        """Create a child logger named ``<namespace><delimiter><sub>``.

        The child shares this logger's sink, color and date settings and
        registry.
        """
        return create_logger(f"{self._name}{delimiter}{sub}", log=self._log,
                             use_colors=self.use_colors,
                             registry=self._registry,
                             hide_date=self.hide_date)

    def __repr__(self) -> str:
        return f"DebugLogger({self._name!r})"


def create_logger(
    name: str,
    *,
    log: Optional[Sink] = None,
    use_colors: Optional[bool] = None,
    registry: Optional[Registry] = None,
    hide_date: Optional[bool] = None,
) -> DebugLogger:
    """Create a logger for ``name``.

    The registry re-reads the DEBUG environment variable here, so a spec
    exported after import is picked up by the next logger created. Names
    added with enable(logger) before this point are forgotten.

    Args:
        name: Namespace, e.g. "app:db"
        log: Sink receiving each finished line (default: stderr)
        use_colors: Force colors on/off (default: DEBUG_COLORS, then TTY)
        registry: Registry to consult (default: module singleton)
        hide_date: Drop the date prefix (default: DEBUG_HIDE_DATE)

    Returns:
        A callable DebugLogger
    """
    logger = DebugLogger(name, log=log, use_colors=use_colors,
                         registry=registry, hide_date=hide_date)
    _namespaces[logger] = name
    logger.registry.reload()
    return logger


# Familiar spelling: debug = create_logger("app")
debug = create_logger


def namespace_of(logger: DebugLogger) -> Optional[str]:
    """Namespace a logger was created with, or None if unknown."""
    return _namespaces.get(logger)


def enable(target: Union[str, DebugLogger, None],
           registry: Optional[Registry] = None) -> None:
    """Enable namespaces.

    A string (or None) replaces the whole spec and is written to DEBUG;
    an empty spec disables everything. A logger adds its own namespace
    to the current allow list without touching the rest.
    """
    registry = registry if registry is not None else get_registry()
    if isinstance(target, DebugLogger):
        name = _namespaces.get(target)
        if name is not None:
            registry.add(name)
        return
    registry.set_spec(target)


def disable(registry: Optional[Registry] = None) -> Optional[str]:
    """Disable every namespace and return the spec that was active."""
    registry = registry if registry is not None else get_registry()
    previous = registry.spec
    registry.set_spec(None)
    return previous


def enabled(target: Union[str, DebugLogger],
            registry: Optional[Registry] = None) -> bool:
    """Check whether a namespace (or a logger's namespace) is enabled."""
    registry = registry if registry is not None else get_registry()
    if isinstance(target, DebugLogger):
        name = _namespaces.get(target)
        if name is None:
            return False
        target = name
    return registry.is_enabled(target)


is_enabled = enabled
