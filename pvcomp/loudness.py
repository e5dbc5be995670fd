import logging
from typing import Sequence

import numpy as np

from .parallel import parallel_map
from .slicing import SliceTable

logger = logging.getLogger("pvcomp.loudness")

def rms_db(samples: np.ndarray) -> float:
    """
    RMS level of a sample window in dB (20*log10(rms)), unreferenced.

    Silence gives -inf and an empty window gives NaN; both are returned
    as-is rather than clamped.
    """
    with np.errstate(divide='ignore', invalid='ignore'):
        ms = np.mean(np.square(samples)) if samples.size else np.nan
        return float(20 * np.log10(np.sqrt(ms)))

def calculate_loudness(buffers: Sequence[np.ndarray], table: SliceTable,
                       workers: int | None = None) -> np.ndarray:
    """
    Channel-averaged RMS loudness (dB) of every slice in `table`.

    Returns one value per slice, in slice order.
    """
    if not buffers:
        raise ValueError("At least one channel buffer is required")

    frame_count = min(len(b) for b in buffers)
    table.check_bounds(frame_count)

    length = table.length
    offsets = table.offsets

    def _slice_loudness(i: int) -> float:
        start = offsets[i]
        per_channel = [rms_db(buf[start:start + length]) for buf in buffers]
        return sum(per_channel) / len(per_channel)

    loudness = parallel_map(_slice_loudness, len(table), workers)
    loudness.setflags(write=False)

    if np.isnan(loudness).any():
        logger.warning("Loudness contains NaN (slice length %d samples)", length)

    return loudness
