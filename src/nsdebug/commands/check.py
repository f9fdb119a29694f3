"""nsdebug check — report which namespaces the current spec enables.

Exit status is 0 when every namespace given is enabled, 1 otherwise, so
scripts can gate expensive diagnostics:

    if nsdebug check deploy:verbose >/dev/null; then ...
"""

from nsdebug.logger import enabled
from nsdebug.registry import get_registry


def register(subparsers, parents):
    """Register the 'check' subcommand."""
    p = subparsers.add_parser(
        "check",
        parents=parents,
        help="Show whether namespaces are enabled",
        description="Print '<namespace>: enabled|disabled' for each namespace.",
    )
    p.add_argument("namespaces", nargs="+", metavar="NAMESPACE",
                   help="Namespace to test against the active spec")
    p.set_defaults(func=run)


def run(args):
    get_registry().reload()
    all_enabled = True
    for ns in args.namespaces:
        on = enabled(ns)
        all_enabled = all_enabled and on
        print(f"{ns}: {'enabled' if on else 'disabled'}")
    return 0 if all_enabled else 1
