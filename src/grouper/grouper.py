from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Iterable,
    List,
    Optional,
    Sequence,
    TypeVar,
)

from tqdm import tqdm

from .elements import ElementKind, describe_type, element_kind
from .errors import UnsupportedInputError
from .thread_utils import thread_map
from .utils import group_positions

T = TypeVar("T")
R = TypeVar("R")


class Grouper(Generic[T]):
    """
    Split a homogeneous sequence of records into named groups and reduce each group to
    a single value.

    The grouper keeps a read-only reference to the collection: records are never
    modified, and per-group subsets are built on demand when reducing.
    """

    def __init__(self, collection: Sequence[T]) -> None:
        """
        Create a `Grouper` from a sequence of records.

        Parameters:

        * `collection`: a sequence of value records (named tuples, or a NumPy structured
        array) or of record references (dataclass instances). All the records must share
        the same type.

        An `UnsupportedInputError` is raised if `collection` is not such a sequence.
        """
        kind = element_kind(collection)

        if kind is None:
            raise UnsupportedInputError(describe_type(collection))

        self._collection = collection
        self._kind = kind
        self._groups: List[str] = []

    def __len__(self) -> int:
        """The number of records in the collection."""
        return len(self._collection)

    @property
    def element_kind(self) -> ElementKind:
        return self._kind

    @property
    def groups(self) -> "list[str]":
        """
        The group names found by the last call to `group_by`, in order of first
        occurrence. Empty if `group_by` was never called.
        """
        return list(self._groups)

    def group_by(
        self, key_fn: Callable[[T], str], *, verbose: bool = False
    ) -> "list[list[int]]":
        """
        Assign each record to a group and return the positions of the records of each
        group. The returned index lists are aligned with `self.groups`, which is replaced
        by the group names found during this call.

        Parameters:

        * `key_fn`: maps a record to the name of its group. It is called exactly once
        per record, in collection order.
        * `verbose`: show a progress bar.
        """
        records = tqdm(
            self._collection, desc="Grouping", unit="record", disable=not verbose
        )

        groups = group_positions(records, by_key=key_fn)

        self._groups = list(groups.keys())
        return list(groups.values())

    def _names_for(
        self, indices: "Sequence[list[int]]", names: Optional[Iterable[str]]
    ) -> "list[str]":
        names = self._groups if names is None else list(names)
        assert len(names) == len(indices), (
            f"The number of index lists ({len(indices)}) should be equal to the number "
            f"of group names ({len(names)})."
        )
        return names

    def _subsets(self, indices: "Sequence[list[int]]") -> Iterable[Any]:
        for group_indices in indices:
            yield self._kind.subset(self._collection, group_indices)

    def reduce(
        self,
        indices: "Sequence[list[int]]",
        reducer: Callable[[Sequence[T]], R],
        *,
        names: Optional[Iterable[str]] = None,
        parallel: bool = False,
        threads: Optional[int] = None,
        verbose: bool = False,
    ) -> "dict[str, R]":
        """
        Reduce each group to one value and return a mapping from group name to value.

        Parameters:

        * `indices`: the index lists returned by the last call to `group_by`.
        * `reducer`: maps the records of a group (a collection of the same kind as the
        input one) to a value. Called once per group.
        * `names`: the group names matching `indices`. Defaults to `self.groups`.
        * `parallel`: run the reducers in worker threads. The reducers should not share
        mutable state.
        * `threads`: the number of worker threads when `parallel` is set. Defaults to
        the shared thread pool.
        * `verbose`: show a progress bar.
        """
        names = self._names_for(indices, names)
        subsets = self._subsets(indices)

        if parallel:
            results = thread_map(
                reducer,
                subsets,
                desc="Reducing",
                total=len(names),
                unit="group",
                verbose=verbose,
                threads=threads,
            )
        else:
            results = [
                reducer(subset)
                for subset in tqdm(
                    subsets,
                    desc="Reducing",
                    total=len(names),
                    unit="group",
                    disable=not verbose,
                )
            ]

        return dict(zip(names, results))

    def reduce_with_name(
        self,
        indices: "Sequence[list[int]]",
        reducer: Callable[[Sequence[T], str], None],
        *,
        names: Optional[Iterable[str]] = None,
        verbose: bool = False,
    ) -> None:
        """
        Same as `reduce()` except that `reducer` also receives the group name and returns
        nothing. Groups are visited in the order of the group names.
        """
        names = self._names_for(indices, names)
        subsets = zip(self._subsets(indices), names)

        for subset, name in tqdm(
            subsets, desc="Reducing", total=len(names), unit="group", disable=not verbose
        ):
            reducer(subset, name)

    def group_reduce(
        self,
        key_fn: Callable[[T], str],
        reducer: Callable[[Sequence[T]], R],
        *,
        parallel: bool = False,
        threads: Optional[int] = None,
        verbose: bool = False,
    ) -> "dict[str, R]":
        """Call `group_by()` followed by `reduce()`."""
        indices = self.group_by(key_fn, verbose=verbose)
        return self.reduce(
            indices, reducer, parallel=parallel, threads=threads, verbose=verbose
        )

    def group_reduce_with_name(
        self,
        key_fn: Callable[[T], str],
        reducer: Callable[[Sequence[T], str], None],
        *,
        verbose: bool = False,
    ) -> None:
        """Call `group_by()` followed by `reduce_with_name()`."""
        indices = self.group_by(key_fn, verbose=verbose)
        self.reduce_with_name(indices, reducer, verbose=verbose)

    def show_stats(
        self, indices: "Sequence[list[int]]", *, title: str = "Groups"
    ) -> None:
        """
        Print in the console a synthetic view of the groups (number and share of records
        by group), in the order of the group names.
        """
        from rich import print as rprint
        from rich.table import Table

        names = self._names_for(indices, None)
        total = len(self)
        counts: Dict[str, int] = {
            name: len(group_indices) for name, group_indices in zip(names, indices)
        }

        def share(count: int) -> str:
            return f"{count / total:.2%}" if total > 0 else "-"

        table = Table(title=title, show_footer=True)
        table.add_column("Group", footer="Total")
        table.add_column("Records", footer=f"{sum(counts.values())}", justify="right")
        table.add_column("Share", footer=share(sum(counts.values())), justify="right")

        for name, count in counts.items():
            table.add_row(str(name), f"{count}", share(count))

        rprint(table)

    def __repr__(self) -> str:
        return f"Grouper(records: {len(self)}, groups: {self._groups})"
