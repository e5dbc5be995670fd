import logging
from dataclasses import dataclass

import numpy as np

from .constants import NUM_KEYS
from .errors import TimingError

logger = logging.getLogger("pvcomp.slicing")

@dataclass(frozen=True)
class SliceTable:
    offsets: tuple[int, ...]
    length: int
    duration: float
    sample_rate: int

    def __len__(self):
        return len(self.offsets)

    @property
    def start_times(self) -> np.ndarray:
        """Slice start positions in seconds, as actually sampled."""
        return np.asarray(self.offsets, dtype=np.float64) / self.sample_rate

    def check_bounds(self, frame_count: int):
        """Raises TimingError if any slice reaches past `frame_count` frames."""
        last_end = max(self.offsets) + self.length if self.offsets else 0
        if min(self.offsets, default=0) < 0 or last_end > frame_count:
            raise TimingError(
                f"Slices need {last_end} frames but the recording has only {frame_count} "
                f"({frame_count / self.sample_rate:.3f} s)"
            )

def _round_half_away(x: float) -> int:
    return int(np.sign(x) * np.floor(abs(x) + 0.5))

def build_slice_table(start_time: float, end_time: float, sample_rate: int,
                      num_slices: int = NUM_KEYS, strict: bool = False) -> SliceTable:
    """
    Partitions [start_time, end_time) into `num_slices` equal slices.

    offset[i] = round((start_time + i * duration) * sample_rate)
    length    = floor(duration * sample_rate)

    A negative length collapses to 0, which later yields NaN loudness.
    With strict=True degenerate timing is rejected instead.
    """
    if sample_rate <= 0:
        raise TimingError(f"Sample rate must be positive, got {sample_rate}")

    duration = (end_time - start_time) / num_slices
    length = max(0, int(np.floor(duration * sample_rate)))

    if strict:
        if end_time <= start_time:
            raise TimingError(f"end_time ({end_time}) must be greater than start_time ({start_time})")
        if length == 0:
            raise TimingError(
                f"Slice duration {duration:.6f} s is shorter than one sample at {sample_rate} Hz"
            )

    offsets = tuple(
        _round_half_away((start_time + i * duration) * sample_rate) for i in range(num_slices)
    )

    logger.debug("Slice table: %d slices, %.6f s / %d samples each", num_slices, duration, length)
    return SliceTable(offsets=offsets, length=length, duration=duration, sample_rate=sample_rate)
