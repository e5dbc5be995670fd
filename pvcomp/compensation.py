import logging
from dataclasses import dataclass

import numpy as np

from .slicing import SliceTable

logger = logging.getLogger("pvcomp.compensation")

@dataclass(frozen=True)
class CompensationResult:
    table: SliceTable
    loudness: np.ndarray
    smoothed: np.ndarray
    compensation: np.ndarray

def calculate_compensation(loudness, smoothed) -> np.ndarray:
    """
    Per-key dB delta (smoothed - loudness).

    Positive values mean the key was recorded quieter than its neighbourhood
    and should be boosted.
    """
    raw = np.asarray(loudness, dtype=np.float64)
    avg = np.asarray(smoothed, dtype=np.float64)
    if raw.shape != avg.shape:
        raise ValueError(f"Curve length mismatch: loudness {raw.shape} vs smoothed {avg.shape}")

    with np.errstate(invalid='ignore'):
        delta = avg - raw
    delta.setflags(write=False)

    finite = delta[np.isfinite(delta)]
    if finite.size:
        logger.info("Compensation range: %+.3f dB .. %+.3f dB", finite.min(), finite.max())
    return delta
