"""Ordered, duplicate-free list of sort criteria."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from zonectrl.errors import InvalidArgumentError, NotFoundError
from zonectrl.sort.parameter import SortKey, SortOrder, SortParameter


class SortCriteria:
    """Priority-ordered sort criteria.

    Index 0 is the primary key; every later entry breaks ties left by the
    entries before it. A key appears at most once.

    Example:
        criteria = SortCriteria()
        criteria.add(SortKey.FAVORITE, SortOrder.DESCENDING)
        criteria.add(SortKey.NAME, SortOrder.ASCENDING)
        criteria.key_at(0)  # SortKey.FAVORITE
    """

    __slots__ = ("_parameters",)

    def __init__(self, parameters: Iterable[SortParameter] = ()) -> None:
        self._parameters: list[SortParameter] = []
        for parameter in parameters:
            self.add(parameter.key, parameter.order)

    # -- Introspection ---------------------------------------------------------

    def count(self) -> int:
        """Return the number of criteria."""
        return len(self._parameters)

    def has_key(self, key: SortKey) -> bool:
        """Return True if ``key`` is one of the criteria."""
        return any(p.key is key for p in self._parameters)

    def index_of(self, key: SortKey) -> int:
        """Return the priority index of ``key``.

        Raises:
            NotFoundError: If ``key`` is not in the list.
        """
        for index, parameter in enumerate(self._parameters):
            if parameter.key is key:
                return index
        raise NotFoundError(f"Sort key {key.value} is not in the criteria")

    def parameter_at(self, index: int) -> SortParameter:
        """Return the criterion at ``index``.

        Raises:
            InvalidArgumentError: If ``index`` is out of range.
        """
        self._check_index(index)
        return self._parameters[index]

    def key_at(self, index: int) -> SortKey:
        return self.parameter_at(index).key

    def order_at(self, index: int) -> SortOrder:
        return self.parameter_at(index).order

    def order_for(self, key: SortKey) -> SortOrder:
        """Return the order configured for ``key`` (NotFoundError if absent)."""
        return self._parameters[self.index_of(key)].order

    def available_keys(self) -> list[SortKey]:
        """Return the keys not yet used, in declaration order."""
        return [key for key in SortKey if not self.has_key(key)]

    @property
    def parameters(self) -> tuple[SortParameter, ...]:
        """Return the criteria in priority order."""
        return tuple(self._parameters)

    # -- Mutation --------------------------------------------------------------

    def add(self, key: SortKey, order: SortOrder = SortOrder.ASCENDING) -> int:
        """Append a lowest-priority criterion and return its index.

        Raises:
            InvalidArgumentError: If ``key`` is already present.
        """
        return self.insert(len(self._parameters), key, order)

    def insert(self, index: int, key: SortKey, order: SortOrder = SortOrder.ASCENDING) -> int:
        """Insert a criterion at ``index`` (0..count inclusive) and return the index."""
        if index < 0 or index > len(self._parameters):
            raise InvalidArgumentError(
                f"Insert index {index} out of range 0..{len(self._parameters)}"
            )
        parameter = SortParameter(key, order)
        if self.has_key(key):
            raise InvalidArgumentError(f"Sort key {key.value} is already in the criteria")
        self._parameters.insert(index, parameter)
        return index

    def set_order(self, key: SortKey, order: SortOrder) -> bool:
        """Change the order for an existing key.

        Returns:
            True if the order changed, False if it already matched.
        """
        index = self.index_of(key)
        if self._parameters[index].order is order:
            return False
        self._parameters[index] = SortParameter(key, order)
        return True

    def replace_at(self, index: int, key: SortKey, order: SortOrder) -> None:
        """Replace the criterion at ``index``, keeping its priority.

        Raises:
            InvalidArgumentError: If ``index`` is out of range or ``key`` is
                used by a different criterion.
        """
        self._check_index(index)
        if self.has_key(key) and self.index_of(key) != index:
            raise InvalidArgumentError(f"Sort key {key.value} is already in the criteria")
        self._parameters[index] = SortParameter(key, order)

    def remove_at(self, index: int) -> SortParameter:
        """Remove and return the criterion at ``index``; later criteria move up."""
        self._check_index(index)
        return self._parameters.pop(index)

    def move(self, from_index: int, to_index: int) -> None:
        """Move a criterion to a new priority, shifting the ones in between."""
        self._check_index(from_index)
        self._check_index(to_index)
        parameter = self._parameters.pop(from_index)
        self._parameters.insert(to_index, parameter)

    def clear(self) -> None:
        self._parameters.clear()

    # -- Persistence -----------------------------------------------------------

    def to_list(self) -> list[list[str]]:
        """Return the criteria as ``[[key-name, order-name], ...]``."""
        return [[p.key.value, p.order.value] for p in self._parameters]

    @classmethod
    def from_list(cls, pairs: Sequence[Sequence[str]]) -> SortCriteria:
        """Build criteria from ``[[key-name, order-name], ...]``.

        Raises:
            InvalidArgumentError: For malformed pairs, unknown names, or
                duplicate keys.
        """
        criteria = cls()
        for pair in pairs:
            if not isinstance(pair, (list, tuple)) or len(pair) != 2:  # noqa: PLR2004
                raise InvalidArgumentError(f"Malformed sort criterion: {pair!r}")
            key_name, order_name = pair
            criteria.add(SortKey.parse(key_name), SortOrder.parse(order_name))
        return criteria

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self._parameters):
            raise InvalidArgumentError(
                f"Sort criteria index {index} out of range (count {len(self._parameters)})"
            )

    def __len__(self) -> int:
        return len(self._parameters)

    def __iter__(self) -> Iterator[SortParameter]:
        return iter(self._parameters)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SortCriteria):
            return NotImplemented
        return self._parameters == other._parameters

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        shown = ", ".join(f"{p.key.value} {p.order.value}" for p in self._parameters)
        return f"SortCriteria([{shown}])"
