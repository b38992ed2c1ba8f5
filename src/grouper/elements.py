from collections.abc import Sequence
from dataclasses import is_dataclass
from enum import Enum, auto
from typing import Any, Optional

import numpy as np

from .utils import all_equal


class RecordShape(Enum):
    VALUE = auto()
    REFERENCE = auto()


def record_shape(item: Any) -> Optional[RecordShape]:
    """
    The shape of a single record, or `None` if `item` is not a record. Named tuples and
    structured NumPy rows are value records, dataclass instances are record references.
    """
    if isinstance(item, tuple) and hasattr(type(item), "_fields"):
        return RecordShape.VALUE
    if isinstance(item, np.void) and item.dtype.names is not None:
        return RecordShape.VALUE
    if is_dataclass(item) and not isinstance(item, type):
        return RecordShape.REFERENCE
    return None


class ElementKind:
    """
    Runtime description of the records held by a collection, used to build per-group
    subsets with the same shape as the input collection.
    """

    __slots__ = ("record_type", "shape", "container")

    def __init__(
        self,
        record_type: Optional[type],
        shape: Optional[RecordShape],
        container: type,
    ) -> None:
        self.record_type = record_type
        self.shape = shape
        self.container = container

    @property
    def is_empty(self) -> bool:
        """`True` if the collection had no element to infer the record type from."""
        return self.record_type is None

    def subset(self, collection: Any, indices: "list[int]") -> Any:
        """
        A fresh collection holding the records of `collection` at `indices`, in order.
        Structured arrays are copied by fancy indexing, other containers hold the same
        record objects as the input.
        """
        if self.container is np.ndarray:
            return collection[np.asarray(indices, dtype=np.intp)]

        items = [collection[i] for i in indices]

        if self.container is tuple:
            return tuple(items)
        return items

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ElementKind):
            return NotImplemented
        return (
            self.record_type is other.record_type
            and self.shape == other.shape
            and self.container is other.container
        )

    def __repr__(self) -> str:
        record_type = getattr(self.record_type, "__name__", None)
        return (
            f"ElementKind(record_type: {record_type}, shape: {self.shape}, "
            f"container: {self.container.__name__})"
        )


def _is_sequence(obj: Any) -> bool:
    return isinstance(obj, Sequence) and not isinstance(obj, (str, bytes, bytearray))


def _signature(item: Any) -> tuple:
    # Structured rows only share a record type if they share a dtype.
    return type(item), (item.dtype if isinstance(item, np.void) else None)


def element_kind(collection: Any) -> Optional[ElementKind]:
    """
    Describe the records of `collection`, or return `None` if it is not a homogeneous
    sequence of records.
    """
    if isinstance(collection, np.ndarray):
        if collection.ndim != 1 or collection.dtype.names is None:
            return None
        return ElementKind(np.void, RecordShape.VALUE, np.ndarray)

    if not _is_sequence(collection):
        return None

    if type(collection) is tuple:
        container = tuple
    else:
        container = list

    if len(collection) == 0:
        return ElementKind(None, None, container)

    first = collection[0]
    shape = record_shape(first)

    if shape is None:
        return None

    if not all_equal(collection, key=_signature):
        return None

    return ElementKind(type(first), shape, container)


def describe_type(obj: Any) -> str:
    """A short human-readable name for the type of `obj`, e.g. `list[str]`."""
    if isinstance(obj, np.ndarray):
        return f"ndarray[{obj.dtype}]"

    name = type(obj).__name__

    if not _is_sequence(obj):
        return name

    item_types = list(dict.fromkeys(type(item).__name__ for item in obj))

    if len(item_types) == 0:
        return name

    return f"{name}[{' | '.join(item_types)}]"
