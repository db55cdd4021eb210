"""Command-line subcommands for depbuilder."""
