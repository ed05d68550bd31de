"""Pure grouping helper."""

from collections.abc import Callable, Hashable, Iterable, Mapping
from types import MappingProxyType
from typing import TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


def group_by(items: Iterable[V], key: Callable[[V], K]) -> Mapping[K, tuple[V, ...]]:
    """Group items by key, preserving first-seen key order and item order.

    Args:
        items: Items to group.
        key: Function computing the group key of an item.

    Returns:
        Read-only mapping from key to the tuple of items with that key.
    """
    groups: dict[K, list[V]] = {}
    for item in items:
        groups.setdefault(key(item), []).append(item)
    return MappingProxyType({k: tuple(v) for k, v in groups.items()})
