import atexit
from concurrent.futures import Executor, ThreadPoolExecutor
from operator import length_hint
from typing import Callable, Iterable, Optional, TypeVar

from tqdm import tqdm

SHARED_THREAD_POOL = ThreadPoolExecutor()


def at_exit():
    SHARED_THREAD_POOL.shutdown()


atexit.register(at_exit)


U = TypeVar("U")
V = TypeVar("V")


def thread_map(
    fn: Callable[[U], V],
    it: Iterable[U],
    desc: Optional[str] = None,
    total: Optional[int] = None,
    unit: str = "it",
    verbose: bool = False,
    threads: Optional[int] = None,
) -> "list[V]":
    """
    Run a group reducer `fn` on every group subset of `it` in worker threads, as done
    by `Grouper.reduce(parallel=True)`. Results keep the group order. The shared pool
    is used unless a number of `threads` is given, in which case a dedicated pool is
    created for this call only.
    """
    assert (
        threads is None or threads > 0
    ), f"The number of threads '{threads}' should either be None or be greater than 0."

    disable = not verbose
    total = total or length_hint(it)
    pool: Executor = (
        SHARED_THREAD_POOL if threads is None else ThreadPoolExecutor(threads)
    )
    results = []

    try:
        with tqdm(desc=desc, total=total, unit=unit, disable=disable) as pbar:
            for result in pool.map(fn, it):
                results.append(result)
                pbar.update()
    finally:
        if pool is not SHARED_THREAD_POOL:
            pool.shutdown()

    return results
