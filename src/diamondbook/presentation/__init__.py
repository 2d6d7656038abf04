"""Presentation helpers that turn domain views into printable output."""
