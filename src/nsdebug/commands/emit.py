"""nsdebug emit — write one debug line from a shell script.

    nsdebug emit deploy:upload "sent %s files to %s" 12 s3://bucket

Arguments after the format string are substituted as strings. Nothing is
written when the namespace is disabled.
"""

from nsdebug.logger import create_logger


def register(subparsers, parents):
    """Register the 'emit' subcommand."""
    p = subparsers.add_parser(
        "emit",
        parents=parents,
        help="Log a message on a namespace",
        description="Format a message with %-tokens and write it to stderr "
                    "if NAMESPACE is enabled.",
    )
    p.add_argument("namespace", metavar="NAMESPACE",
                   help="Logger namespace, e.g. deploy:upload")
    p.add_argument("format", metavar="FORMAT",
                   help="Message format string")
    p.add_argument("values", nargs="*", metavar="ARG",
                   help="Values for the format tokens")
    p.set_defaults(func=run)


def run(args):
    log = create_logger(args.namespace, use_colors=args.colors,
                        hide_date=args.hide_date)
    log(args.format, *args.values)
    return 0
