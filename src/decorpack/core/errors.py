"""Failure results returned by the allocator and the registry.

Core operations never raise for caller mistakes. They return one of these
frozen records instead, and callers discriminate with ``isinstance``:

    >>> result = registry.register_item("a.demo", Item(internal_key="lamp"))
    >>> if isinstance(result, RegistrationError):
    ...     user_output(result.message)

Nothing in the registry is mutated when a failure is returned.
"""

from dataclasses import dataclass
from typing import Literal

ValidationKind = Literal[
    "EmptyId", "UnknownPack", "InvalidKey", "InvalidAssetName", "InvalidDescriptor"
]
ConflictKind = Literal["AlreadyExists", "DuplicateKey"]


@dataclass(frozen=True)
class RegistrationError:
    """Base for every failure kind."""

    message: str

    @property
    def kind(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ValidationError(RegistrationError):
    """Bad or missing required field. Caller's fault, nothing was mutated."""

    field: str = ""
    reason: ValidationKind = "InvalidDescriptor"

    @property
    def kind(self) -> str:
        return self.reason


@dataclass(frozen=True)
class ConflictError(RegistrationError):
    """Duplicate pack id, or an internal key re-registered with different data."""

    reason: ConflictKind = "AlreadyExists"

    @property
    def kind(self) -> str:
        return self.reason


@dataclass(frozen=True)
class AllocationExhausted(RegistrationError):
    """Every probe for a free id collided. Fatal for this one item only."""

    namespace_key: str = ""
    item_key: str = ""
    attempts: int = 0


@dataclass(frozen=True)
class DependencyError(RegistrationError):
    """A pack declares a dependency that is not registered."""

    pack_id: str = ""
    missing_pack: str = ""
