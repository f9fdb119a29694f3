"""
Function tracing decorator.

Routes call tracing through a namespaced DebugLogger, so tracing is
switched on and off with the same DEBUG spec as everything else:

    log = create_logger("app:trace")

    @trace(log)
    def load(path): ...
"""

import functools
from pathlib import Path


def _short_repr(value):
    """repr() with long strings and lists summarized."""
    if isinstance(value, Path):
        return f"Path('{value}')"
    if isinstance(value, str) and len(value) > 50:
        return f"'{value[:47]}...'"
    if isinstance(value, list) and len(value) > 3:
        return f"[...{len(value)} items...]"
    return repr(value)


def trace(logger):
    """Decorator factory logging entry/exit of a function on ``logger``.

    Shows arguments on entry, the return value (if not None) on exit,
    and the exception type and message if the call raises. The exception
    is re-raised unchanged. When the logger is disabled the function is
    called directly with no extra work.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            if not logger.enabled:
                return func(*args, **kwargs)

            name = f"{func.__module__}.{func.__qualname__}"
            parts = [_short_repr(a) for a in args]
            parts += [f"{k}={_short_repr(v)}" for k, v in kwargs.items()]
            logger(">> %s(%s)", name, ", ".join(parts))

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger("!! %s raised: %s: %s", name, type(e).__name__, str(e))
                raise

            if result is not None:
                logger("<< %s returned: %s", name, _short_repr(result))
            return result

        return wrapper

    return decorator
