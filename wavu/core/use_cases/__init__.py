"""Use cases — entry-point-agnostic workflows called by the CLI."""
