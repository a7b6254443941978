"""ClientController - owns the live state, preferences, and sort criteria.

One ClientController exists per application session. The UI reads the
StateStore for live attributes, the PreferencesController for favorites
and usage, and the two SortCriteriaControllers for row order. It never
persists or re-sorts on its own; callers decide when.
"""

import logging

from zonectrl.core.config import ConfigManager
from zonectrl.core.history import ConnectHistory
from zonectrl.core.preferences import PreferencesController
from zonectrl.core.sort_controller import SortCriteriaController
from zonectrl.core.state import StateStore
from zonectrl.models.entity import EntityKind, EntityRef

logger = logging.getLogger(__name__)


class ClientController:
    """Session owner bridging the live source and the preferences engine.

    Example:
        controller = ClientController(config)
        controller.state.update_from_system_state(system_state)
        controller.bind()
        controller.activate(EntityRef.zone(3))
        rows = controller.sorted(EntityKind.ZONE)
        controller.save()
    """

    def __init__(self, config: ConfigManager, state: StateStore | None = None) -> None:
        """Initialize the controller.

        Args:
            config: Configuration manager shared by all owned controllers.
            state: Live state store, or None to create an empty one.
        """
        self._config = config
        self._state = state if state is not None else StateStore()
        self._preferences = PreferencesController(config)
        self._history = ConnectHistory(config)
        self._group_sort = SortCriteriaController(config, EntityKind.GROUP)
        self._zone_sort = SortCriteriaController(config, EntityKind.ZONE)
        for sorter in (self._group_sort, self._zone_sort):
            sorter.set_client_controller(self)

    @property
    def config(self) -> ConfigManager:
        """Return the configuration manager."""
        return self._config

    @property
    def state(self) -> StateStore:
        """Return the live state store."""
        return self._state

    @property
    def preferences(self) -> PreferencesController:
        """Return the preferences controller."""
        return self._preferences

    @property
    def history(self) -> ConnectHistory:
        """Return the history of connected controller locations."""
        return self._history

    def sort_controller(self, kind: EntityKind) -> SortCriteriaController:
        """Return the sort criteria controller for groups or zones."""
        return self._group_sort if kind is EntityKind.GROUP else self._zone_sort

    def bind(self) -> None:
        """Bind preferences to the live source and load both sort criteria.

        A successful bind also records the controller's host in the connect
        history.

        Raises:
            InvalidArgumentError: If the live source has no controller identity.
            PersistenceError: If saved preferences cannot be read.
        """
        self._preferences.bind(self._state)
        self._group_sort.load()
        self._zone_sort.load()
        self._record_connection()
        logger.info("Bound to controller %s", self._preferences.controller_identity)

    def _record_connection(self) -> None:
        controller = self._state.controller
        if controller is None or not controller.host.strip():
            logger.debug("No controller host to record in connect history")
            return
        self._history.add_or_update_entry(controller.host)

    def unbind(self) -> None:
        """Unbind preferences from the live source."""
        self._preferences.unbind()

    def activate(self, ref: EntityRef) -> int:
        """Record that the user activated a group or zone.

        Returns:
            The post-increment use count.
        """
        count = self._preferences.touch(ref)
        logger.debug("%s activated (use count %d)", ref, count)
        return count

    def toggle_favorite(self, ref: EntityRef) -> bool:
        """Flip a group's or zone's favorite flag and return the new value."""
        return self._preferences.toggle_favorite(ref)

    def sorted(self, kind: EntityKind) -> list[int]:
        """Re-sort groups or zones with their current criteria and return the order."""
        return self.sort_controller(kind).sort_identifiers()

    def save(self) -> None:
        """Persist preferences and both sort criteria, then flush to disk.

        Raises:
            BindingRequiredError: If preferences are not bound.
        """
        self._preferences.store_preferences()
        self._group_sort.store()
        self._zone_sort.store()
        self._config.sync()
