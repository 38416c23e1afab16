import typing as t
from typing import Any, Callable, Hashable, Iterable, TypeVar

T = TypeVar("T")


def unique_items_in_order(
    items: Iterable[T], key: t.Optional[Callable[[T], Hashable]] = None
) -> list[T]:
    """Drops every item whose key was already seen, keeping the first occurrence.

    >>> unique_items_in_order([3, 1, 3, 2, 1])
    [3, 1, 2]
    >>> unique_items_in_order(["a", "B", "b", "A"], key=str.lower)
    ['a', 'B']
    """
    if key is None:
        return list(dict.fromkeys(items))
    out: dict[Any, T] = {}
    for item in items:
        out.setdefault(key(item), item)
    return list(out.values())
