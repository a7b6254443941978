"""Sort criteria controller for the group or zone list.

Holds the user's sort criteria for one list, persists them through the
ConfigManager, and keeps the most recently computed ordering so the UI
can translate between row positions and identifiers. Re-sorting is never
automatic: call :meth:`SortCriteriaController.sort_identifiers` after the
criteria or the underlying attributes change.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from zonectrl.core.config import ConfigManager
from zonectrl.errors import (
    BindingRequiredError,
    InvalidArgumentError,
    NotFoundError,
)
from zonectrl.models.entity import EntityKind, EntityRef
from zonectrl.sort.criteria import SortCriteria
from zonectrl.sort.engine import EntitySnapshot, sort_snapshots
from zonectrl.sort.parameter import SortKey, SortOrder, SortParameter

if TYPE_CHECKING:
    from zonectrl.core.controller import ClientController

logger = logging.getLogger(__name__)

DEFAULT_CRITERIA = (
    SortParameter(SortKey.FAVORITE, SortOrder.DESCENDING),
    SortParameter(SortKey.NAME, SortOrder.ASCENDING),
)


class SortCriteriaController:
    """Sort criteria and current sorted output for groups or zones.

    Example:
        sorter = SortCriteriaController(config, EntityKind.ZONE)
        sorter.set_client_controller(client_controller)
        sorter.load()
        sorter.sort_identifiers()
        first_row = sorter.map_index_to_identifier(0)
    """

    def __init__(self, config: ConfigManager, kind: EntityKind) -> None:
        """Initialize with the default criteria and no sorted output.

        Args:
            config: Configuration manager used for persistence.
            kind: Whether this controller sorts groups or zones.
        """
        self._config = config
        self._kind = kind
        self._criteria = SortCriteria(DEFAULT_CRITERIA)
        self._client: ClientController | None = None
        self._sorted: list[int] = []
        self._index_by_identifier: dict[int, int] = {}

    @property
    def kind(self) -> EntityKind:
        """Return whether this controller sorts groups or zones."""
        return self._kind

    @property
    def criteria(self) -> SortCriteria:
        """Return the live criteria list."""
        return self._criteria

    @property
    def sorted_identifiers(self) -> list[int]:
        """Return a copy of the most recently computed ordering."""
        return list(self._sorted)

    def set_client_controller(self, client: ClientController | None) -> None:
        """Attach the client controller supplying live attributes and preferences."""
        self._client = client

    # -- Criteria delegation ---------------------------------------------------

    def count(self) -> int:
        return self._criteria.count()

    def has_key(self, key: SortKey) -> bool:
        return self._criteria.has_key(key)

    def key_at(self, index: int) -> SortKey:
        return self._criteria.key_at(index)

    def order_at(self, index: int) -> SortOrder:
        return self._criteria.order_at(index)

    def order_for(self, key: SortKey) -> SortOrder:
        return self._criteria.order_for(key)

    def add(self, key: SortKey, order: SortOrder = SortOrder.ASCENDING) -> int:
        return self._criteria.add(key, order)

    def remove_at(self, index: int) -> SortParameter:
        return self._criteria.remove_at(index)

    def move(self, from_index: int, to_index: int) -> None:
        self._criteria.move(from_index, to_index)

    def set_order(self, key: SortKey, order: SortOrder) -> bool:
        return self._criteria.set_order(key, order)

    def replace_at(self, index: int, key: SortKey, order: SortOrder) -> None:
        self._criteria.replace_at(index, key, order)

    # -- Persistence -----------------------------------------------------------

    def load(self) -> None:
        """Load saved criteria, falling back to the defaults.

        Unreadable saved criteria are logged and replaced by the defaults.
        """
        pairs = self._config.get_sort_criteria(self._kind)
        if pairs is None:
            self._criteria = SortCriteria(DEFAULT_CRITERIA)
            return
        try:
            self._criteria = SortCriteria.from_list(pairs)
        except InvalidArgumentError as e:
            logger.warning("Using default %s sort criteria: %s", self._kind.value, e)
            self._criteria = SortCriteria(DEFAULT_CRITERIA)
        logger.debug("Loaded %s sort criteria: %r", self._kind.value, self._criteria)

    def store(self) -> None:
        """Save the current criteria."""
        self._config.save_sort_criteria(self._kind, self._criteria.to_list())

    # -- Sorting ---------------------------------------------------------------

    def build_snapshots(self) -> list[EntitySnapshot]:
        """Collect the current attributes of every group or zone.

        Raises:
            BindingRequiredError: If no client controller is attached.
        """
        if self._client is None:
            raise BindingRequiredError("Sort criteria controller has no client controller")

        state = self._client.state
        prefs = self._client.preferences
        snapshots: list[EntitySnapshot] = []
        if self._kind is EntityKind.GROUP:
            for group in state.groups:
                favorite, last_used = prefs.snapshot(EntityRef.group(group.id))
                snapshots.append(
                    EntitySnapshot(group.id, group.name, group.muted, favorite, last_used)
                )
        else:
            for zone in state.zones:
                favorite, last_used = prefs.snapshot(EntityRef.zone(zone.id))
                snapshots.append(
                    EntitySnapshot(zone.id, zone.name, zone.muted, favorite, last_used)
                )
        return snapshots

    def sort_identifiers(self) -> list[int]:
        """Recompute the ordering from the current criteria and attributes.

        Returns:
            The sorted identifiers.

        Raises:
            BindingRequiredError: If no client controller is attached.
        """
        self._sorted = sort_snapshots(self.build_snapshots(), self._criteria)
        self._index_by_identifier = {ident: index for index, ident in enumerate(self._sorted)}
        return list(self._sorted)

    def map_index_to_identifier(self, index: int) -> int:
        """Return the identifier at ``index`` of the last sorted output.

        Raises:
            InvalidArgumentError: If ``index`` is out of range.
        """
        if index < 0 or index >= len(self._sorted):
            raise InvalidArgumentError(
                f"Row {index} out of range (sorted {len(self._sorted)} {self._kind.value})"
            )
        return self._sorted[index]

    def map_identifier_to_index(self, identifier: int) -> int:
        """Return the row of ``identifier`` in the last sorted output.

        Raises:
            NotFoundError: If the identifier was not part of the last sort.
        """
        index = self._index_by_identifier.get(identifier)
        if index is None:
            raise NotFoundError(f"{self._kind.label} {identifier} is not in the sorted output")
        return index
