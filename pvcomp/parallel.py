import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable

import numpy as np

logger = logging.getLogger("pvcomp.parallel")

def parallel_map(func: Callable[[int], float], count: int, workers: int | None = None) -> np.ndarray:
    """
    Evaluates func(i) for every i in range(count) and returns the results as a
    float64 array in index order.

    Each task writes exactly one slot of the pre-sized output, so no locking
    is needed. workers=1 runs inline; None lets the executor pick a size.
    """
    if workers is not None and workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")

    out = np.empty(count, dtype=np.float64)

    def _fill(i: int):
        out[i] = func(i)

    if workers == 1 or count <= 1:
        for i in range(count):
            _fill(i)
        return out

    logger.debug("Mapping %d tasks over %s workers", count, workers or "default")
    with ThreadPoolExecutor(max_workers=workers) as pool:
        # list() re-raises the first task exception here
        list(pool.map(_fill, range(count)))
    return out
