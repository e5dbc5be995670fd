import logging
from pathlib import Path
from typing import Callable

from .audio_loader import DecodedAudio, load_audio
from .compensation import CompensationResult, calculate_compensation
from .demux import split_channels
from .loudness import calculate_loudness
from .plotting import ResultPlotter
from .result_exporter import ResultsExporter
from .settings_manager import AppSettings
from .slicing import build_slice_table
from .smoothing import moving_average

logger = logging.getLogger("pvcomp.pipeline")

def compute_compensation(samples, sample_rate: int, channels: int,
                         start_time: float, end_time: float, smooth_span: int,
                         workers: int | None = None, strict: bool = False) -> CompensationResult:
    """
    Runs the analysis core on an interleaved sample stream:
    demultiplex -> slice loudness -> smoothing -> compensation.
    """
    table = build_slice_table(start_time, end_time, sample_rate, strict=strict)
    buffers = split_channels(samples, channels)
    loudness = calculate_loudness(buffers, table, workers)
    smoothed = moving_average(loudness, smooth_span, workers)
    compensation = calculate_compensation(loudness, smoothed)
    return CompensationResult(table=table, loudness=loudness, smoothed=smoothed,
                              compensation=compensation)

class CompensationPipeline:
    """
    Wires loading, analysis and export for one configured run.
    Errors are raised to the caller; nothing here prints or exits.
    """
    def __init__(self, settings: AppSettings, on_status: Callable[[str], None] | None = None):
        self.settings = settings
        self._on_status = on_status

    def _status(self, msg: str):
        logger.debug(msg)
        if self._on_status:
            self._on_status(msg)

    def load(self) -> DecodedAudio:
        self._status("Loading input...")
        audio = load_audio(self.settings.input_file)
        self._status(f"Sample rate: {audio.sample_rate} Hz")
        self._status(f"Channels: {audio.channels}")
        return audio

    def analyze(self, audio: DecodedAudio) -> CompensationResult:
        s = self.settings
        self._status("Analyzing loudness...")
        result = compute_compensation(
            audio.samples, audio.sample_rate, audio.channels,
            s.start_time, s.end_time, s.smooth_span,
            workers=s.workers, strict=s.strict_timing,
        )
        self._status(f"Duration per slice: {result.table.duration} s")
        self._status(f"Samples per slice: {result.table.length}")
        self._status("Volume compensation calculated.")
        return result

    def export(self, result: CompensationResult):
        """Binary first, then text; optional reports last."""
        s = self.settings
        self._status("Writing output files...")
        ResultsExporter.export_bin(Path(s.output_bin), result.compensation)
        ResultsExporter.export_txt(Path(s.output_txt), result.compensation)
        if s.output_csv:
            ResultsExporter.export_csv(Path(s.output_csv), result)
        if s.output_plot:
            ResultPlotter.export_png(Path(s.output_plot), result)
        logger.info("Wrote %s and %s", s.output_bin, s.output_txt)
        self._status("Output files written.")

    def run(self) -> CompensationResult:
        audio = self.load()
        result = self.analyze(audio)
        self.export(result)
        return result
