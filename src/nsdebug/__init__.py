"""nsdebug — namespaced debug logging.

Create named loggers, switch them on with glob-style namespace specs
(DEBUG=api:*,-api:health) and format arguments with %o/%O style tokens.

Public API:
    create_logger / debug  — create a namespaced logger
    enable                 — set the spec, or enable one logger
    disable                — disable everything, returning the old spec
    enabled / is_enabled   — check a namespace or logger
    matches                — wildcard template matching
    Registry               — enabled-set container
    init_registry / get_registry / reset_registry — singleton lifecycle
    register_formatter     — add a %x token
    render                 — token substitution
    StreamSink             — default stderr writer
    trace                  — function tracing decorator
"""

from nsdebug._version import __version__, __app_name__
from nsdebug.formatters import register_formatter, get_formatter, render
from nsdebug.logger import (
    DebugLogger, create_logger, debug, enable, disable, enabled, is_enabled,
)
from nsdebug.matcher import matches
from nsdebug.output import StreamSink
from nsdebug.registry import (
    Registry, parse_spec, init_registry, get_registry, reset_registry,
)
from nsdebug.trace import trace

__all__ = [
    "__version__", "__app_name__",
    "DebugLogger", "create_logger", "debug",
    "enable", "disable", "enabled", "is_enabled",
    "matches",
    "Registry", "parse_spec", "init_registry", "get_registry", "reset_registry",
    "register_formatter", "get_formatter", "render",
    "StreamSink",
    "trace",
]
