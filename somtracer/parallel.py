"""
Fork-join execution over contiguous node index ranges
"""

import os
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Tuple

import numpy as np


class NodeChunkExecutor:
    """Run a function over disjoint node ranges on a thread pool.

    Every call to :meth:`run` blocks until all chunks have finished, so the
    caller sees a fully written buffer afterwards. Chunks never overlap, which
    lets workers write into the same node map without locking.
    """

    def __init__(self, n_workers: Optional[int] = None):
        self.n_workers = n_workers or os.cpu_count() or 1
        self._pool = ThreadPoolExecutor(
            max_workers=self.n_workers, thread_name_prefix="somtracer"
        )

    def chunks(self, start: int, stop: int) -> List[Tuple[int, int]]:
        """Split ``[start, stop)`` into at most ``n_workers`` contiguous ranges"""
        n_chunks = min(self.n_workers, stop - start)
        if n_chunks <= 0:
            return []
        bounds = np.linspace(start, stop, n_chunks + 1).astype(int)
        return [(int(a), int(b)) for a, b in zip(bounds[:-1], bounds[1:]) if b > a]

    def run(self, func: Callable[[int, int], None], start: int, stop: int) -> None:
        futures = [self._pool.submit(func, a, b) for a, b in self.chunks(start, stop)]
        for future in futures:
            # Re-raises the first worker exception
            future.result()

    def shutdown(self) -> None:
        self._pool.shutdown(wait=True)

    def __enter__(self) -> "NodeChunkExecutor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()
