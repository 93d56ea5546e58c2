"""CLI error handling utilities with styled output.

This module provides the Ensure class for asserting invariants in CLI commands
with consistent, user-friendly error messages. All errors use red "Error:" prefix
for visual consistency.

Domain-Specific Methods:
- File/path validations (descriptor exists, output does not collide)
- Item key validations
- Registration results (core failure records become styled errors)
"""

from pathlib import Path
from typing import TypeVar

import click

from decorpack.cli.output import user_output
from decorpack.core.errors import RegistrationError
from decorpack.core.types import is_valid_internal_key

T = TypeVar("T")


def _fail(error_message: str) -> None:
    user_output(click.style("Error: ", fg="red") + error_message)
    raise SystemExit(1)


class Ensure:
    """Helper class for asserting invariants with consistent error handling."""

    @staticmethod
    def invariant(condition: bool, error_message: str) -> None:
        """Ensure condition is true, otherwise output styled error and exit.

        Args:
            condition: Boolean condition to check
            error_message: Error message to display if condition is false.
                          "Error: " prefix will be added automatically in red.

        Raises:
            SystemExit: If condition is false (with exit code 1)
        """
        if not condition:
            _fail(error_message)

    @staticmethod
    def not_none(value: T | None, error_message: str) -> T:
        """Ensure value is not None, otherwise output styled error and exit.

        This method provides type narrowing: it takes `T | None` and returns `T`.

        Raises:
            SystemExit: If value is None (with exit code 1)

        Example:
            >>> template = Ensure.not_none(get_template(name), f"Unknown template '{name}'")
        """
        if value is None:
            _fail(error_message)
        assert value is not None
        return value

    @staticmethod
    def path_exists(path: Path, error_message: str | None = None) -> None:
        """Ensure path exists, otherwise output styled error and exit.

        Example:
            >>> Ensure.path_exists(descriptor_path, f"Descriptor not found: {descriptor_path}")
        """
        if not path.exists():
            if error_message is None:
                error_message = f"Path not found: {path}"
            _fail(error_message)

    @staticmethod
    def path_not_exists(path: Path, error_message: str) -> None:
        """Ensure path does NOT exist, otherwise output styled error and exit.

        Inverse of path_exists - used when creating files that must not be clobbered.
        """
        if path.exists():
            _fail(error_message)

    @staticmethod
    def valid_item_key(key: str) -> None:
        """Ensure an item key matches ``^[a-z_][a-z0-9_]*$``."""
        if not is_valid_internal_key(key):
            _fail(
                f"Invalid item key '{key}' - Use lowercase letters, digits and "
                f"underscores, starting with a letter or underscore"
            )

    @staticmethod
    def ok(result: T | RegistrationError, context: str = "") -> T:
        """Unwrap a core result, exiting with its message if it is a failure.

        Args:
            result: Value returned by a core operation
            context: Optional prefix such as the descriptor path

        Returns:
            The result unchanged if it is not a RegistrationError

        Raises:
            SystemExit: If result is a RegistrationError

        Example:
            >>> pack = Ensure.ok(load_pack(path), str(path))
        """
        if isinstance(result, RegistrationError):
            prefix = f"{context}: " if context else ""
            _fail(f"{prefix}{result.message}")
        assert not isinstance(result, RegistrationError)
        return result
