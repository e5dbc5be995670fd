import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np
import soundfile as sf

from .errors import AudioLoadError

logger = logging.getLogger("pvcomp.audio_loader")

@dataclass(frozen=True)
class DecodedAudio:
    """Flat, channel-interleaved samples as stored in the file."""
    samples: np.ndarray
    sample_rate: int
    channels: int

    @property
    def frame_count(self) -> int:
        return self.samples.size // self.channels

    @property
    def duration(self) -> float:
        return self.frame_count / self.sample_rate

def load_audio(filepath: str | Path) -> DecodedAudio:
    """
    Decodes an audio file into interleaved float samples in [-1.0, 1.0].

    Integer PCM is scaled by soundfile; the samples are returned as float32,
    the precision the recordings are analyzed at.
    """
    path = Path(filepath)
    if not path.exists():
        raise AudioLoadError(f"Input file not found: {path}")

    try:
        info = sf.info(str(path))
        data, fs = sf.read(str(path), dtype='float32', always_2d=True)
    except (sf.LibsndfileError, RuntimeError, ValueError) as e:
        raise AudioLoadError(f"Failed to read input file {path.name}: {e}") from e

    channels = data.shape[1]
    if channels < 1 or fs <= 0:
        raise AudioLoadError(f"Invalid stream in {path.name}: {channels} channel(s) at {fs} Hz")

    # (frames, channels) row-major is already the interleaved order
    samples = np.ascontiguousarray(data).reshape(-1)
    samples.setflags(write=False)

    logger.info("Loaded %s: %s, %d Hz, %d ch, %.2f s",
                path.name, info.subtype, fs, channels, data.shape[0] / fs)
    return DecodedAudio(samples=samples, sample_rate=int(fs), channels=channels)
