"""
Exhaustive pairwise frustum intersection.

Every unordered pair of frustums is tested once (the intersection test is
symmetric, so only i < j is evaluated). The outer loop is distributed over a
thread pool; the shared pair set and the optional progress callback are only
touched under a lock.
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, List, Optional, Set, Tuple

from ..geometry import Frustum
from ..logger import get_logger


PairSet = Set[Tuple[int, int]]
ProgressCallback = Callable[[int, int], None]


class PairwiseOverlapScanner:
    """
    Find all pairs of views whose frustums intersect.

    Args:
        num_workers: Thread pool size (None = ThreadPoolExecutor default)
        progress_callback: Optional callable(done, total), called after each test
    """

    def __init__(self, num_workers: Optional[int] = None,
                 progress_callback: Optional[ProgressCallback] = None):
        self.num_workers = num_workers
        self.progress_callback = progress_callback
        self.logger = get_logger("scanner")

        self.stats = {
            'num_frustums': 0,
            'num_tests': 0,
            'num_pairs': 0,
            'processing_time': 0.0
        }

    def scan(self, frustums: Dict[int, Frustum]) -> PairSet:
        """
        Test all frustum pairs for intersection.

        Args:
            frustums: Mapping view id -> frustum

        Returns:
            Set of (id_i, id_j) pairs with id_i < id_j
        """
        view_ids: List[int] = sorted(frustums)
        n = len(view_ids)
        total = n * (n - 1) // 2

        pairs: PairSet = set()
        lock = threading.Lock()
        done = [0]

        self.logger.info(f"Computing frustum intersection for {n} views ({total} pairs)")
        start = time.time()

        def scan_row(i: int) -> None:
            frustum_i = frustums[view_ids[i]]
            for j in range(i + 1, n):
                overlap = frustum_i.intersects(frustums[view_ids[j]])
                with lock:
                    if overlap:
                        pairs.add((view_ids[i], view_ids[j]))
                    done[0] += 1
                    if self.progress_callback is not None:
                        self.progress_callback(done[0], total)

        with ThreadPoolExecutor(max_workers=self.num_workers) as executor:
            # list() re-raises any exception from a worker
            list(executor.map(scan_row, range(n)))

        self.stats = {
            'num_frustums': n,
            'num_tests': done[0],
            'num_pairs': len(pairs),
            'processing_time': time.time() - start
        }
        self.logger.info(f"Found {len(pairs)} overlapping pairs out of {total} "
                         f"in {self.stats['processing_time']:.2f}s")
        return pairs
