import numpy as np

from .parallel import parallel_map

def moving_average(loudness, span: int, workers: int | None = None) -> np.ndarray:
    """
    Centered moving average with a half-window of `span` indices.

    The window is clipped at both ends of the curve, so edge values average
    over fewer than 2*span + 1 points.
    """
    if isinstance(span, bool) or not isinstance(span, (int, np.integer)) or span < 0:
        raise ValueError(f"Smoothing span must be a non-negative integer, got {span!r}")

    values = np.asarray(loudness, dtype=np.float64)
    n = values.size

    def _window_mean(i: int) -> float:
        lo = max(0, i - span)
        hi = min(n - 1, i + span)
        window = values[lo:hi + 1]
        # flat windows return their value exactly
        if (window == window[0]).all():
            return float(window[0])
        return float(np.mean(window))

    smoothed = parallel_map(_window_mean, n, workers)
    smoothed.setflags(write=False)
    return smoothed
