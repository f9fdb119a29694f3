"""nsdebug subcommands."""
