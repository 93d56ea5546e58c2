"""JSON output utilities for CLI commands with machine-parseable output."""

import json
from typing import Any

from decorpack.cli.output import machine_output


def emit_json(data: dict[str, Any]) -> None:
    """Output JSON data to stdout for machine consumption.

    Routes JSON through machine_output() to keep data on stdout and human
    messages on stderr. Pydantic responses are passed in already dumped with
    ``model_dump(mode="json")``.

    Args:
        data: Dictionary to serialize as JSON
    """
    machine_output(json.dumps(data, indent=2))
