"""Command-line interface for diamondbook."""
