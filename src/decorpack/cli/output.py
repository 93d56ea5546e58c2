"""Output utilities for CLI commands with clear intent.

user_output: human-facing messages, progress and errors (stderr)
machine_output: data meant to be piped or parsed (stdout)
"""

import click


def user_output(message: str = "", nl: bool = True) -> None:
    """Write a message for the user to stderr."""
    click.echo(message, err=True, nl=nl)


def machine_output(message: str = "", nl: bool = True) -> None:
    """Write data to stdout."""
    click.echo(message, nl=nl)
