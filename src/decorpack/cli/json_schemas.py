"""Pydantic models for JSON output schemas.

This module defines the validated JSON schemas for CLI commands that support
--json output.
"""

from pydantic import BaseModel, ConfigDict, Field


class ItemIdInfo(BaseModel):
    """One registered item in `decorpack ids --json`.

    Attributes:
        internal_key: Item key within its pack
        id: Assigned id in the expansion range
        category: Category after registration (unknown values coerced)
    """

    model_config = ConfigDict(strict=True)

    internal_key: str
    id: int = Field(..., ge=760000, le=999999)
    category: str


class ErrorInfo(BaseModel):
    """A registration failure.

    Attributes:
        kind: Failure kind, e.g. "InvalidKey" or "DependencyError"
        message: Human readable description
        internal_key: Offending item key (None for pack-level failures)
    """

    model_config = ConfigDict(strict=True)

    kind: str
    message: str
    internal_key: str | None


class PackIdsInfo(BaseModel):
    model_config = ConfigDict(strict=True)

    pack_id: str
    items: list[ItemIdInfo]
    errors: list[ErrorInfo]


class IdsCommandResponse(BaseModel):
    """JSON response schema for the `decorpack ids` command."""

    model_config = ConfigDict(strict=True)

    packs: list[PackIdsInfo]


class ChecklistCommandResponse(BaseModel):
    """JSON response schema for the `decorpack checklist` command.

    Attributes:
        pack_id: Pack the checklist belongs to
        project_name: Project folder name inside the archive
        assets: Asset paths relative to the project root
    """

    model_config = ConfigDict(strict=True)

    pack_id: str
    project_name: str
    assets: list[str]


class GlobalConfigInfo(BaseModel):
    """Global configuration for `decorpack config list --json`.

    Attributes:
        default_author: Author used by `decorpack new`
        output_dir: Default bundle output directory
        indent_size: Indentation of generated C#
        exists: Whether the config file exists
    """

    model_config = ConfigDict(strict=True)

    default_author: str
    output_dir: str
    indent_size: int
    exists: bool
