"""Deterministic id allocation for expansion items.

Ids are derived from a SHA-256 digest of ``"{namespace}:{key}"`` so that any
two independently built packs compute the same id for the same item without a
shared counter. The first four digest bytes (little-endian) are folded into the
reserved expansion range. When the candidate is already occupied the key is
re-hashed with an ``_{attempt}`` suffix until a free slot turns up.

Example:
    >>> first = allocate("a.demo", "lamp", set())
    >>> first == allocate("a.demo", "lamp", set())
    True
    >>> is_expansion_id(first)
    True
"""

import hashlib
from collections.abc import Container

from decorpack.core.errors import AllocationExhausted, ValidationError

# Reserved for externally registered content; disjoint from the host's built-in ids.
EXPANSION_ID_START = 760000
EXPANSION_ID_END = 999999

MAX_ATTEMPTS = 1000


def _hash_to_range(namespace_key: str, item_key: str) -> int:
    digest = hashlib.sha256(f"{namespace_key}:{item_key}".encode()).digest()
    value = int.from_bytes(digest[:4], "little", signed=False)
    return EXPANSION_ID_START + value % (EXPANSION_ID_END - EXPANSION_ID_START)


def candidate_id(namespace_key: str, item_key: str) -> int:
    """First-choice id for an item, before any collision probing."""
    return _hash_to_range(namespace_key, item_key)


def probe_sequence(namespace_key: str, item_key: str, attempts: int = MAX_ATTEMPTS) -> list[int]:
    """Candidate ids in the order ``allocate`` tries them.

    Index 0 is the primary candidate; index ``n`` re-hashes ``{item_key}_{n}``.
    """
    sequence = [_hash_to_range(namespace_key, item_key)]
    for attempt in range(1, attempts + 1):
        sequence.append(_hash_to_range(namespace_key, f"{item_key}_{attempt}"))
    return sequence


def allocate(
    namespace_key: str,
    item_key: str,
    occupied: Container[int],
) -> int | ValidationError | AllocationExhausted:
    """Map (namespace, item key) to a free id in the reserved range.

    Args:
        namespace_key: Owning pack id
        item_key: Item internal key, must be non-empty
        occupied: Ids already taken by live items

    Returns:
        The allocated id, ValidationError for an empty key, or
        AllocationExhausted when all MAX_ATTEMPTS probes collide
    """
    if not item_key:
        return ValidationError(
            message="Item internal key cannot be empty",
            field="internal_key",
            reason="InvalidKey",
        )

    candidate = _hash_to_range(namespace_key, item_key)
    if candidate not in occupied:
        return candidate

    for attempt in range(1, MAX_ATTEMPTS + 1):
        candidate = _hash_to_range(namespace_key, f"{item_key}_{attempt}")
        if candidate not in occupied:
            return candidate

    return AllocationExhausted(
        message=(
            f"No free id for '{item_key}' in pack '{namespace_key}' "
            f"after {MAX_ATTEMPTS} collision probes"
        ),
        namespace_key=namespace_key,
        item_key=item_key,
        attempts=MAX_ATTEMPTS,
    )


def is_expansion_id(value: int) -> bool:
    """Check whether an id belongs to the reserved expansion range."""
    return EXPANSION_ID_START <= value <= EXPANSION_ID_END
