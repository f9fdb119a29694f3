"""Environment channel for nsdebug.

Three variables drive the library at runtime:

  DEBUG            namespace spec, e.g. "api:*,-api:health"
  DEBUG_COLORS     force colors on/off (yes/no/true/false/on/off/1/0)
  DEBUG_HIDE_DATE  when truthy, plain output drops its ISO date prefix

DEBUG is read fresh every time it is needed. The boolean-ish variables are
parsed once per key and cached for the life of the process; tests call
clear_env_cache() to start over.
"""

import math
import os
import re
from typing import Any, Dict, MutableMapping, Optional


DEBUG_VAR = "DEBUG"
COLORS_VAR = "DEBUG_COLORS"
HIDE_DATE_VAR = "DEBUG_HIDE_DATE"

_YES = re.compile(r"^(yes|on|true|enabled)$", re.IGNORECASE)
_NO = re.compile(r"^(no|off|false|disabled)$", re.IGNORECASE)

# Missing sentinel: a cached None means the variable held "null"
_UNSET = object()

_cache: Dict[str, Any] = {}


def parse_env_value(raw: Optional[str]) -> Any:
    """Parse a boolean-ish environment value.

    Returns:
        _UNSET for a missing variable, True/False for yes/no words,
        None for the literal "null", otherwise a float (NaN when the
        text is not a number, 0.0 for blank text).
    """
    if raw is None:
        return _UNSET
    if _YES.match(raw):
        return True
    if _NO.match(raw):
        return False
    if raw == "null":
        return None
    text = raw.strip()
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return math.nan


def get_env(key: str, environ: Optional[MutableMapping[str, str]] = None) -> Any:
    """Read and parse ``key`` once; later reads come from the cache.

    Returns _UNSET when the variable is not set (use is_unset() to test).
    """
    if key in _cache:
        return _cache[key]
    environ = os.environ if environ is None else environ
    value = parse_env_value(environ.get(key))
    _cache[key] = value
    return value


def is_unset(value: Any) -> bool:
    """True if ``value`` is the result of reading a missing variable."""
    return value is _UNSET


def truthy(value: Any) -> bool:
    """Truthiness with NaN, 0, None, False and unset all counting as false."""
    if value is _UNSET or value is None:
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def env_flag(key: str, environ: Optional[MutableMapping[str, str]] = None) -> bool:
    """Shorthand for truthy(get_env(key))."""
    return truthy(get_env(key, environ))


def clear_env_cache() -> None:
    """Forget every cached boolean-ish variable."""
    _cache.clear()


# ---------------------------------------------------------------------------
# Namespace spec persistence
# ---------------------------------------------------------------------------
def read_spec(environ: Optional[MutableMapping[str, str]] = None,
              var: str = DEBUG_VAR) -> Optional[str]:
    """Return the current namespace spec, or None when unset."""
    environ = os.environ if environ is None else environ
    return environ.get(var)


def write_spec(spec: Optional[str],
               environ: Optional[MutableMapping[str, str]] = None,
               var: str = DEBUG_VAR) -> None:
    """Store ``spec`` in the environment, removing the variable when empty."""
    environ = os.environ if environ is None else environ
    if spec:
        environ[var] = spec
    else:
        environ.pop(var, None)
