import numpy as np

def split_channels(samples, channels: int) -> list[np.ndarray]:
    """
    De-interleaves a flat sample sequence into one buffer per channel.

    Trailing samples that do not fill a whole frame are dropped.
    """
    if channels < 1:
        raise ValueError(f"Channel count must be >= 1, got {channels}")

    flat = np.asarray(samples, dtype=np.float64).ravel()
    frames = flat.size // channels
    frame_matrix = flat[:frames * channels].reshape(frames, channels)

    buffers = []
    for ch in range(channels):
        buf = frame_matrix[:, ch].copy()
        buf.setflags(write=False)
        buffers.append(buf)
    return buffers
