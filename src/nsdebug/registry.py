"""
Registry — which namespaces are currently enabled.

The registry holds the active namespace spec decomposed into an allow
list and a deny list of wildcard templates. Deny wins:

    spec "api:*,-api:health"
        allow = ["api:*"]
        deny  = ["api:health"]

    is_enabled("api:users")   -> True
    is_enabled("api:health")  -> False
    is_enabled("db")          -> False

State lives in a single immutable snapshot. Every change builds a new
snapshot and swaps it in under a lock, so a reader on another thread sees
either the old spec or the new one, never a half-filled list.

Lifecycle of the module-level singleton:
    init_registry()   once at startup (optional, get_registry() does it lazily)
    get_registry()    everywhere else
    reset_registry()  between tests
"""

import os
import re
import threading
from dataclasses import dataclass
from typing import MutableMapping, Optional, Tuple

from .env import DEBUG_VAR, read_spec, write_spec
from .matcher import matches_any


_SPLIT = re.compile(r"[\s,]+")


def parse_spec(spec: Optional[str]) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
    """Split a namespace spec into (allow, deny) template tuples.

    Tokens are separated by any run of commas and whitespace; empty tokens
    are dropped. A token starting with '-' is a deny template (the rest of
    the token, which may be empty).

    Args:
        spec: Spec string like "a:*, -a:b", or None

    Returns:
        (allow, deny), each in the order the tokens appeared
    """
    allow = []
    deny = []
    for token in _SPLIT.split((spec or "").strip()):
        if not token:
            continue
        if token[0] == '-':
            deny.append(token[1:])
        else:
            allow.append(token)
    return tuple(allow), tuple(deny)


@dataclass(frozen=True)
class Snapshot:
    """One immutable view of the enabled set."""
    spec: Optional[str] = None
    allow: Tuple[str, ...] = ()
    deny: Tuple[str, ...] = ()

    def is_enabled(self, name: str) -> bool:
        if matches_any(name, self.deny):
            return False
        return matches_any(name, self.allow)


class Registry:
    """Process-wide enabled set, persisted through an environment variable.

    Usage::

        reg = Registry(environ={})
        reg.set_spec("worker:*,-worker:noisy")
        reg.is_enabled("worker:queue")   # True
        reg.add("db")                    # enable one more namespace
    """

    def __init__(
        self,
        environ: MutableMapping[str, str] = None,
        var: str = DEBUG_VAR,
    ):
        self.environ = environ if environ is not None else os.environ
        self.var = var
        self._lock = threading.Lock()
        self._snapshot = Snapshot()

    # -- writes ---------------------------------------------------------------

    def set_spec(self, spec: Optional[str]) -> None:
        """Replace the enabled set with ``spec`` and persist it.

        The environment variable is set to the spec, or removed when the
        spec is empty or None (which leaves nothing enabled).
        """
        with self._lock:
            write_spec(spec, self.environ, self.var)
            self._snapshot = self._build(spec)

    def reload(self) -> None:
        """Re-apply whatever spec the environment variable holds now.

        Anything added with add() since the last set_spec() is dropped.
        """
        with self._lock:
            self._snapshot = self._build(read_spec(self.environ, self.var))

    def add(self, name: str) -> None:
        """Enable one literal namespace on top of the current spec."""
        with self._lock:
            snap = self._snapshot
            self._snapshot = Snapshot(spec=snap.spec,
                                      allow=snap.allow + (name,),
                                      deny=snap.deny)

    @staticmethod
    def _build(spec: Optional[str]) -> Snapshot:
        allow, deny = parse_spec(spec)
        return Snapshot(spec=spec, allow=allow, deny=deny)

    # -- reads ----------------------------------------------------------------

    def is_enabled(self, name: str) -> bool:
        """Deny templates are checked first, then allow templates."""
        return self._snapshot.is_enabled(name)

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def spec(self) -> Optional[str]:
        """The spec last applied (from set_spec or reload)."""
        return self._snapshot.spec

    @property
    def allow(self) -> Tuple[str, ...]:
        return self._snapshot.allow

    @property
    def deny(self) -> Tuple[str, ...]:
        return self._snapshot.deny


# =============================================================================
# Module-level singleton
# =============================================================================

_registry: Optional[Registry] = None


def init_registry(spec: Optional[str] = None,
                  environ: MutableMapping[str, str] = None) -> Registry:
    """Initialize the module-level Registry singleton.

    Args:
        spec: Spec to apply immediately. None means "read the environment".
        environ: Mapping used as the environment (default: os.environ)

    Returns:
        The initialized Registry
    """
    global _registry
    _registry = Registry(environ=environ)
    if spec is None:
        _registry.reload()
    else:
        _registry.set_spec(spec)
    return _registry


def get_registry() -> Registry:
    """Get the module-level Registry, creating one from os.environ if needed."""
    global _registry
    if _registry is None:
        _registry = Registry()
        _registry.reload()
    return _registry


def reset_registry() -> None:
    """Drop the singleton; the next get_registry() starts fresh."""
    global _registry
    _registry = None
