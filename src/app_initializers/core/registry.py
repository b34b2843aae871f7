# src/app_initializers/core/registry.py

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .errors import DuplicateInitializerError
from .models import InitializerPriority
from .ports import Initializer, InitializerId


class InitializerRegistry:
    """
    Immutable, ordered collection of every initializer the app registered.

    Registration order is kept: it decides the order in which independent
    initializers of one phase are attempted. Dependencies are not validated here;
    a missing one is reported when something tries to resolve it.
    """

    __slots__ = ("_items", "_by_id")

    def __init__(self, initializers: Iterable[Initializer]) -> None:
        items = tuple(initializers)
        by_id: dict[InitializerId, Initializer] = {}
        for item in items:
            if item.id in by_id:
                raise DuplicateInitializerError(item.id)
            by_id[item.id] = item
        self._items = items
        self._by_id = by_id

    def get(self, initializer_id: InitializerId) -> Initializer | None:
        return self._by_id.get(initializer_id)

    def filter_by(self, priority: InitializerPriority) -> list[Initializer]:
        return [i for i in self._items if i.priority == priority]

    def ids_for(self, priority: InitializerPriority) -> frozenset[InitializerId]:
        return frozenset(i.id for i in self._items if i.priority == priority)

    def __contains__(self, initializer_id: object) -> bool:
        return initializer_id in self._by_id

    def __iter__(self) -> Iterator[Initializer]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)
