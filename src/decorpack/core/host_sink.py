"""Host integration boundary for assigned items.

The registry never reaches into a host runtime. Publishing hands every
assigned item to a HostSink, which accepts or rejects it; the registry only
records the outcome.
"""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from decorpack.core.ids import is_expansion_id
from decorpack.core.types import Item

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HostPayload:
    """Everything a host needs to materialize one item."""

    pack_id: str
    item: Item


class HostSink(ABC):
    """Abstract consumer of (id, payload) pairs."""

    @abstractmethod
    def accept(self, item_id: int, payload: HostPayload) -> bool:
        """Hand an assigned item to the host.

        Args:
            item_id: The item's assigned id
            payload: Pack id and item data

        Returns:
            True if the host took the item, False if it rejected it
        """
        ...


class RangeCheckingHostSink(HostSink):
    """Wrapper that rejects ids outside the reserved expansion range."""

    def __init__(self, wrapped: HostSink) -> None:
        self._wrapped = wrapped

    def accept(self, item_id: int, payload: HostPayload) -> bool:
        if not is_expansion_id(item_id):
            logger.warning(
                "Rejecting %s:%s, id %d is outside the expansion range",
                payload.pack_id,
                payload.item.internal_key,
                item_id,
            )
            return False
        return self._wrapped.accept(item_id, payload)


class JsonFileHostSink(HostSink):
    """Collects accepted items into an id map and writes it as JSON.

    The file maps each id to its pack, key and display name:

        {"760123": {"pack": "com.me.pack", "key": "lamp", "name": "Lamp"}}
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._entries: dict[int, dict[str, str]] = {}

    @property
    def entries(self) -> dict[int, dict[str, str]]:
        return dict(self._entries)

    def accept(self, item_id: int, payload: HostPayload) -> bool:
        if item_id in self._entries:
            logger.warning("Id %d already published, rejecting duplicate", item_id)
            return False
        self._entries[item_id] = {
            "pack": payload.pack_id,
            "key": payload.item.internal_key,
            "name": payload.item.display_name,
        }
        return True

    def flush(self) -> Path:
        """Write the collected id map to disk.

        Returns:
            Path of the written file
        """
        self._path.parent.mkdir(parents=True, exist_ok=True)
        data = {str(item_id): entry for item_id, entry in sorted(self._entries.items())}
        self._path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        return self._path
