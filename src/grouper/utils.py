from collections import defaultdict
from itertools import groupby
from typing import Callable, Hashable, Iterable, Optional, TypeVar

U = TypeVar("U")
V = TypeVar("V", bound=Hashable)


def group_positions(it: Iterable[U], by_key: Callable[[U], V]) -> "dict[V, list[int]]":
    """
    The positions of the items of `it` grouped by key. Keys are ordered by first
    occurrence and positions are ascending within each group.
    """
    result = defaultdict(list)
    for position, item in enumerate(it):
        result[by_key(item)].append(position)
    return result


def all_equal(iterable: Iterable[U], key: Optional[Callable[[U], Hashable]] = None) -> bool:
    """https://stackoverflow.com/a/3844948/6324055"""
    g = groupby(iterable, key=key)
    return next(g, True) and not next(g, False)
