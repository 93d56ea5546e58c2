"""In-memory registry of decor packs and their items.

The Registry is an explicit object owned by its caller (one per session);
there is no process-wide instance. It enforces:

- pack ids are unique and non-blank
- item keys are valid and unique within their pack
- declared pack dependencies are registered before items are
- assigned ids are unique across every live item

Pack lifecycle: ``Unregistered -> Registered (enabled) <-> Disabled``.
Item lifecycle: ``Pending -> Assigned -> Active | Rejected``. ``Pending`` only
exists inside ``register_item``; callers observe an item once it is Assigned.

Every operation runs to completion or returns a failure record without
touching state. The registry is not safe for concurrent writers: allocation
reads the occupancy and writes it back in two steps, so a multi-tenant host
must serialize registrations per registry.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from enum import StrEnum

from decorpack.core.errors import (
    ConflictError,
    DependencyError,
    RegistrationError,
    ValidationError,
)
from decorpack.core.host_sink import HostPayload, HostSink
from decorpack.core.ids import allocate, candidate_id
from decorpack.core.types import (
    DEFAULT_BOX_SIZE,
    DEFAULT_CATEGORY,
    AssetReferences,
    BoxSize,
    Category,
    Item,
    Pack,
    PackMetadata,
    is_valid_asset_name,
    is_valid_internal_key,
)

logger = logging.getLogger(__name__)

ItemRef = tuple[str, str]  # (pack_id, internal_key)


class PackState(StrEnum):
    REGISTERED = "registered"
    DISABLED = "disabled"


class ItemState(StrEnum):
    PENDING = "pending"
    ASSIGNED = "assigned"
    ACTIVE = "active"
    REJECTED = "rejected"


@dataclass(frozen=True)
class PublishReport:
    """Outcome of handing assigned items to a HostSink."""

    active: tuple[ItemRef, ...] = ()
    rejected: tuple[ItemRef, ...] = ()
    skipped_packs: tuple[str, ...] = ()


@dataclass(frozen=True)
class ItemOutcome:
    """Registration result of one item."""

    internal_key: str
    result: int | RegistrationError

    @property
    def ok(self) -> bool:
        return not isinstance(self.result, RegistrationError)


@dataclass(frozen=True)
class RegistrationReport:
    """Result of registering a whole pack together with its items."""

    pack_id: str
    pack: Pack | None
    pack_error: RegistrationError | None = None
    outcomes: tuple[ItemOutcome, ...] = field(default=())

    @property
    def ok(self) -> bool:
        return self.pack_error is None and all(outcome.ok for outcome in self.outcomes)

    @property
    def errors(self) -> list[RegistrationError]:
        found: list[RegistrationError] = []
        if self.pack_error is not None:
            found.append(self.pack_error)
        for outcome in self.outcomes:
            if isinstance(outcome.result, RegistrationError):
                found.append(outcome.result)
        return found

    @property
    def assigned_ids(self) -> dict[str, int]:
        return {
            outcome.internal_key: outcome.result
            for outcome in self.outcomes
            if isinstance(outcome.result, int)
        }


class Registry:
    """Explicitly owned store of packs, items and their assigned ids."""

    def __init__(self) -> None:
        self._packs: dict[str, Pack] = {}
        self._pack_states: dict[str, PackState] = {}
        # Insertion order of the occupancy drives deterministic probing.
        self._occupied: dict[int, ItemRef] = {}
        self._ids: dict[ItemRef, int] = {}
        self._item_states: dict[ItemRef, ItemState] = {}

    def reset(self) -> None:
        """Drop every pack, item and id."""
        self._packs.clear()
        self._pack_states.clear()
        self._occupied.clear()
        self._ids.clear()
        self._item_states.clear()
        logger.debug("Registry reset")

    # Packs

    def register_pack(
        self,
        pack_id: str,
        metadata: PackMetadata | None = None,
        dependencies: Iterable[str] = (),
    ) -> Pack | ValidationError | ConflictError:
        """Register a pack namespace.

        Args:
            pack_id: Globally unique pack id (e.g. "com.author.pack")
            metadata: Display name, version, author and generator options
            dependencies: Ids of packs that must be present before items register

        Returns:
            The registered (empty) Pack, ValidationError for a blank id or a
            self-dependency, ConflictError if the id is taken
        """
        if not pack_id or not pack_id.strip():
            return ValidationError(
                message="Pack id cannot be empty", field="id", reason="EmptyId"
            )
        if pack_id in self._packs:
            return ConflictError(
                message=f"Pack '{pack_id}' is already registered", reason="AlreadyExists"
            )

        deps = tuple(dict.fromkeys(dep for dep in dependencies if dep))
        if pack_id in deps:
            return ValidationError(
                message=f"Pack '{pack_id}' cannot depend on itself",
                field="dependencies",
                reason="InvalidDescriptor",
            )

        meta = metadata if metadata is not None else PackMetadata(display_name=pack_id)
        pack = Pack(
            id=pack_id,
            display_name=meta.display_name,
            version=meta.version,
            author=meta.author,
            dependencies=deps,
            items=(),
            enabled=True,
            options=meta.options,
            use_assembly_resources=meta.use_assembly_resources,
        )
        self._packs[pack_id] = pack
        self._pack_states[pack_id] = PackState.REGISTERED
        logger.info(
            "Registered pack %s (%s v%s by %s)",
            pack_id,
            meta.display_name,
            meta.version,
            meta.author or "unknown",
        )
        return pack

    def unregister_pack(self, pack_id: str) -> bool:
        """Remove a pack and every item it owns, freeing their ids.

        Returns:
            False if the pack was not registered
        """
        pack = self._packs.get(pack_id)
        if pack is None:
            logger.debug("Unregister of unknown pack %s ignored", pack_id)
            return False

        for item in pack.items:
            self._forget((pack_id, item.internal_key))
        del self._packs[pack_id]
        del self._pack_states[pack_id]
        logger.info("Unregistered pack %s (%d items freed)", pack_id, len(pack.items))
        return True

    def enable_pack(self, pack_id: str) -> bool:
        return self._set_pack_state(pack_id, PackState.REGISTERED)

    def disable_pack(self, pack_id: str) -> bool:
        return self._set_pack_state(pack_id, PackState.DISABLED)

    def _set_pack_state(self, pack_id: str, state: PackState) -> bool:
        pack = self._packs.get(pack_id)
        if pack is None:
            return False
        self._pack_states[pack_id] = state
        self._packs[pack_id] = replace(pack, enabled=state == PackState.REGISTERED)
        logger.debug("Pack %s is now %s", pack_id, state)
        return True

    def pack_state(self, pack_id: str) -> PackState | None:
        return self._pack_states.get(pack_id)

    def is_registered(self, pack_id: str) -> bool:
        return pack_id in self._packs

    def get_pack(self, pack_id: str) -> Pack | None:
        return self._packs.get(pack_id)

    def list_packs(self) -> list[Pack]:
        return list(self._packs.values())

    # Items

    def register_item(self, pack_id: str, item: Item) -> int | RegistrationError:
        """Validate an item, assign its id and append it to its pack.

        Unknown categories and box sizes are coerced to their defaults with a
        warning rather than rejected. Re-registering an identical item is a
        no-op that returns the id it already holds.

        Args:
            pack_id: Owning pack id
            item: Item descriptor; any assigned_id on it is ignored

        Returns:
            The assigned id, or the failure describing why nothing changed
        """
        pack = self._packs.get(pack_id)
        if pack is None:
            return ValidationError(
                message=f"Pack '{pack_id}' is not registered",
                field="pack_id",
                reason="UnknownPack",
            )

        key = item.internal_key
        if not key:
            return ValidationError(
                message="Item internal key cannot be empty",
                field="internal_key",
                reason="InvalidKey",
            )
        if not is_valid_internal_key(key):
            return ValidationError(
                message=(
                    f"Invalid internal key '{key}': use lowercase letters, digits "
                    f"and underscores, starting with a letter or underscore"
                ),
                field="internal_key",
                reason="InvalidKey",
            )

        refs = item.asset_refs
        for field_name, name in (
            ("icon", refs.icon),
            ("mesh", refs.mesh),
            ("material", refs.material),
        ):
            if not is_valid_asset_name(name):
                return ValidationError(
                    message=(
                        f"Invalid {field_name} asset name '{name}' for item '{key}': "
                        f"use letters, digits, dots, dashes and underscores"
                    ),
                    field=f"assets.{field_name}",
                    reason="InvalidAssetName",
                )

        for dependency in pack.dependencies:
            if dependency not in self._packs:
                return DependencyError(
                    message=f"Pack '{pack_id}' depends on '{dependency}', which is not registered",
                    pack_id=pack_id,
                    missing_pack=dependency,
                )

        candidate = _normalize_item(pack_id, item)

        existing = pack.find_item(key)
        if existing is not None:
            if existing.without_id() == candidate:
                logger.debug("Item %s:%s already registered, nothing to do", pack_id, key)
                assert existing.assigned_id is not None
                return existing.assigned_id
            return ConflictError(
                message=(
                    f"Item '{key}' is already registered in pack '{pack_id}' "
                    f"with different data"
                ),
                reason="DuplicateKey",
            )

        allocated = allocate(pack_id, key, self._occupied)
        if isinstance(allocated, RegistrationError):
            logger.error("Allocation failed for %s:%s: %s", pack_id, key, allocated.message)
            return allocated

        if allocated != candidate_id(pack_id, key):
            logger.warning(
                "Id collision for %s:%s, using alternative id %d", pack_id, key, allocated
            )

        ref = (pack_id, key)
        stored = replace(candidate, assigned_id=allocated)
        self._packs[pack_id] = replace(pack, items=(*pack.items, stored))
        self._occupied[allocated] = ref
        self._ids[ref] = allocated
        self._item_states[ref] = ItemState.ASSIGNED
        logger.info(
            "Registered item '%s' with id %d in pack %s (category %s)",
            stored.display_name,
            allocated,
            pack_id,
            stored.category,
        )
        return allocated

    def unregister_item(self, pack_id: str, internal_key: str) -> bool:
        """Remove one item from its pack and free its id.

        Returns:
            False if the pack or item is not registered
        """
        pack = self._packs.get(pack_id)
        if pack is None or pack.find_item(internal_key) is None:
            return False

        remaining = tuple(item for item in pack.items if item.internal_key != internal_key)
        self._packs[pack_id] = replace(pack, items=remaining)
        self._forget((pack_id, internal_key))
        logger.info("Unregistered item %s:%s", pack_id, internal_key)
        return True

    def _forget(self, ref: ItemRef) -> None:
        assigned = self._ids.pop(ref, None)
        if assigned is not None:
            self._occupied.pop(assigned, None)
        self._item_states.pop(ref, None)

    def get_item(self, pack_id: str, internal_key: str) -> Item | None:
        pack = self._packs.get(pack_id)
        if pack is None:
            return None
        return pack.find_item(internal_key)

    def item_by_id(self, item_id: int) -> Item | None:
        ref = self._occupied.get(item_id)
        if ref is None:
            return None
        return self.get_item(*ref)

    def item_state(self, pack_id: str, internal_key: str) -> ItemState | None:
        return self._item_states.get((pack_id, internal_key))

    def items_in_category(self, category: str) -> list[Item]:
        """Items whose category matches, case-insensitively, across all packs."""
        wanted = category.lower()
        if not wanted:
            return []
        return [
            item
            for pack in self._packs.values()
            for item in pack.items
            if item.category.lower() == wanted
        ]

    def occupied_ids(self) -> list[int]:
        """Live ids in the order they were assigned."""
        return list(self._occupied)

    # Publishing

    def publish(self, sink: HostSink) -> PublishReport:
        """Hand every Assigned item of enabled packs to the host sink.

        Items move to Active when the sink accepts them and to Rejected
        otherwise. Items already Active or Rejected are not sent again.
        """
        active: list[ItemRef] = []
        rejected: list[ItemRef] = []
        skipped: list[str] = []

        for pack_id, pack in self._packs.items():
            if self._pack_states[pack_id] == PackState.DISABLED:
                skipped.append(pack_id)
                continue
            for item in pack.items:
                ref = (pack_id, item.internal_key)
                if self._item_states.get(ref) != ItemState.ASSIGNED:
                    continue
                assert item.assigned_id is not None
                if sink.accept(item.assigned_id, HostPayload(pack_id=pack_id, item=item)):
                    self._item_states[ref] = ItemState.ACTIVE
                    active.append(ref)
                else:
                    self._item_states[ref] = ItemState.REJECTED
                    rejected.append(ref)
                    logger.warning("Host rejected item %s:%s", pack_id, item.internal_key)

        logger.info(
            "Published %d items (%d rejected, %d packs disabled)",
            len(active),
            len(rejected),
            len(skipped),
        )
        return PublishReport(
            active=tuple(active), rejected=tuple(rejected), skipped_packs=tuple(skipped)
        )


def _normalize_item(pack_id: str, item: Item) -> Item:
    """Coerce category and box size to the allow-lists and fill asset names."""
    category = item.category
    if not category:
        category = DEFAULT_CATEGORY.value
    elif category not in {member.value for member in Category}:
        logger.warning(
            "Invalid category '%s' for item '%s' in pack %s, using default category '%s'",
            category,
            item.internal_key,
            pack_id,
            DEFAULT_CATEGORY.value,
        )
        category = DEFAULT_CATEGORY.value

    box_size = item.box_size
    if box_size not in {member.value for member in BoxSize}:
        logger.warning(
            "Invalid box size '%s' for item '%s' in pack %s, defaulting to %s",
            box_size,
            item.internal_key,
            pack_id,
            DEFAULT_BOX_SIZE.value,
        )
        box_size = DEFAULT_BOX_SIZE.value

    refs = item.asset_refs
    assets = AssetReferences.resolve(item.internal_key, refs.icon, refs.mesh, refs.material)

    return replace(item, category=category, box_size=box_size, assets=assets, assigned_id=None)


def register_pack_with_items(registry: Registry, pack: Pack) -> RegistrationReport:
    """Register a pack descriptor and then each of its items in order.

    Items are attempted even after an earlier item fails, so the report lists
    every problem at once. A disabled descriptor is registered and then
    disabled.
    """
    registered = registry.register_pack(pack.id, pack.metadata, pack.dependencies)
    if isinstance(registered, RegistrationError):
        return RegistrationReport(pack_id=pack.id, pack=None, pack_error=registered)
    return _register_items(registry, pack)


def register_packs(registry: Registry, packs: Iterable[Pack]) -> list[RegistrationReport]:
    """Register several packs, all namespaces first, then their items.

    Dependencies only need to be registered (not populated) before items, so
    registering every namespace up front lets packs load in any order.
    """
    packs = list(packs)
    reports: list[RegistrationReport | None] = []
    for pack in packs:
        registered = registry.register_pack(pack.id, pack.metadata, pack.dependencies)
        if isinstance(registered, RegistrationError):
            reports.append(RegistrationReport(pack_id=pack.id, pack=None, pack_error=registered))
        else:
            reports.append(None)

    completed: list[RegistrationReport] = []
    for pack, report in zip(packs, reports, strict=True):
        completed.append(report if report is not None else _register_items(registry, pack))
    return completed


def _register_items(registry: Registry, pack: Pack) -> RegistrationReport:
    outcomes = tuple(
        ItemOutcome(internal_key=item.internal_key, result=registry.register_item(pack.id, item))
        for item in pack.items
    )
    if not pack.enabled:
        registry.disable_pack(pack.id)
    return RegistrationReport(pack_id=pack.id, pack=registry.get_pack(pack.id), outcomes=outcomes)
