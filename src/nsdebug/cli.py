"""Main CLI entry point for nsdebug.

Lets shell scripts share the same DEBUG namespace switches as the Python
code they drive:

  DEBUG=deploy:* nsdebug emit deploy:upload "sent %d files" 12
  nsdebug --spec "api:*,-api:health" check api:users api:health

Two-pass argument parsing:
  1. First pass: extract global flags (--spec, --colors, --no-color,
     --hide-date)
  2. Second pass: dispatch to the subcommand

Global flags can appear before OR after the subcommand.

Subcommands self-register via the register(subparsers, parents) convention.
"""

import argparse
import sys

from nsdebug._version import BASE_VERSION, VERSION


# ---------------------------------------------------------------------------
# Global flags (can precede or follow the subcommand)
# ---------------------------------------------------------------------------
GLOBAL_FLAGS = {
    "--spec": {"aliases": ["-s"], "metavar": "SPEC", "default": None,
               "help": "Namespace spec to enable (default: $DEBUG)"},
    "--colors": {"dest": "colors", "action": "store_const", "const": True,
                 "default": None, "help": "Force colored output"},
    "--no-color": {"dest": "colors", "action": "store_const", "const": False,
                   "default": None, "help": "Disable colored output"},
    "--hide-date": {"dest": "hide_date", "action": "store_const", "const": True,
                    "default": None,
                    "help": "Omit the date prefix on uncolored lines"},
}


def _extract_global_flags(argv):
    """Two-pass parse: pull global flags from anywhere in argv.

    Returns (global_namespace, remaining_argv).
    """
    global_parser = argparse.ArgumentParser(add_help=False)
    for flag, kwargs in GLOBAL_FLAGS.items():
        kw = {k: v for k, v in kwargs.items() if k != "aliases"}
        global_parser.add_argument(flag, *kwargs.get("aliases", []), **kw)

    global_args, remaining = global_parser.parse_known_args(argv)
    return global_args, remaining


# ---------------------------------------------------------------------------
# Subcommand discovery and registration
# ---------------------------------------------------------------------------
def _discover_commands():
    """Import and return all command modules.

    Each module in nsdebug.commands must export:
      register(subparsers, parents) — add itself to the subparser
      run(args) — execute the command, returning an exit code
    """
    from nsdebug.commands import check, emit
    return [check, emit]


def _build_parser(commands):
    """Build the main argparse parser with subcommand dispatch."""
    parser = argparse.ArgumentParser(
        prog="nsdebug",
        description="nsdebug — namespaced debug logging from the shell",
        epilog=(
            "Run 'nsdebug <command> --help' for details on a specific command.\n"
            "\n"
            "Global flags (--spec, --colors, --no-color, --hide-date) can\n"
            "appear before or after the subcommand."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"nsdebug {BASE_VERSION} ({VERSION})",
    )

    # Global flags again, for --help display
    for flag, kwargs in GLOBAL_FLAGS.items():
        kw = {k: v for k, v in kwargs.items() if k != "aliases"}
        parser.add_argument(flag, *kwargs.get("aliases", []), **kw)

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    for cmd_module in commands:
        cmd_module.register(subparsers, parents=[])

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def main(argv=None):
    """Main entry point for the nsdebug CLI.

    Args:
        argv: Command-line arguments. None means sys.argv[1:].

    Returns:
        Exit code (0 = success).
    """
    if argv is None:
        argv = sys.argv[1:]

    # Pass 1: extract global flags from anywhere in the arg list
    global_args, remaining = _extract_global_flags(argv)

    # Pass 2: parse subcommand args
    parser = _build_parser(_discover_commands())

    if not remaining:
        parser.print_help()
        return 0

    args = parser.parse_args(remaining)

    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    for key, value in vars(global_args).items():
        if getattr(args, key, None) is None:
            setattr(args, key, value)

    if args.spec is not None:
        from nsdebug.logger import enable
        enable(args.spec)

    try:
        return args.func(args) or 0
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
