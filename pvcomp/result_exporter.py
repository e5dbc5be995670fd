import csv
from pathlib import Path
import numpy as np

from .compensation import CompensationResult
from .constants import KEY_NAMES, TEXT_DECIMALS
from .errors import ExportError

class ResultsExporter:
    """
    Serializes compensation curves and writes them to disk.
    """

    @staticmethod
    def to_bytes(values) -> bytes:
        """Little-endian float32 per value, key order, no header."""
        return np.asarray(values, dtype='<f4').tobytes()

    @staticmethod
    def from_bytes(data: bytes) -> np.ndarray:
        if len(data) % 4:
            raise ValueError(f"Binary curve length {len(data)} is not a multiple of 4")
        return np.frombuffer(data, dtype='<f4')

    @staticmethod
    def format_value(value) -> str:
        v = float(value)
        if np.isnan(v):
            return "NaN"
        return f"{v:.{TEXT_DECIMALS}f}"

    @staticmethod
    def to_text(values) -> str:
        """One value per line with fixed decimals, no trailing newline."""
        return "\n".join(ResultsExporter.format_value(v) for v in np.asarray(values, dtype=np.float32))

    @staticmethod
    def _write(filepath: Path, payload: bytes, label: str):
        try:
            with open(filepath, 'wb') as f:
                f.write(payload)
        except OSError as e:
            raise ExportError(f"Failed to write output {label} file {filepath}: {e}") from e

    @staticmethod
    def export_bin(filepath: Path, compensation):
        ResultsExporter._write(Path(filepath), ResultsExporter.to_bytes(compensation), "binary")

    @staticmethod
    def export_txt(filepath: Path, compensation):
        text = ResultsExporter.to_text(compensation)
        ResultsExporter._write(Path(filepath), text.encode('utf-8'), "text")

    @staticmethod
    def export_csv(filepath: Path, result: CompensationResult):
        """Per-key report of every pipeline stage."""
        try:
            with open(filepath, 'w', newline='', encoding='utf-8') as f:
                writer = csv.writer(f)
                writer.writerow(["# pvcomp Export",
                                 f"Slice: {result.table.duration:.6f} s",
                                 f"Samples: {result.table.length}"])
                writer.writerow(["Key", "Note", "Start (s)", "Loudness [dB]",
                                 "Smoothed [dB]", "Compensation [dB]"])

                rows = zip(KEY_NAMES, result.table.start_times,
                           result.loudness, result.smoothed, result.compensation)
                for i, (name, t, l, s, c) in enumerate(rows):
                    writer.writerow([i, name, f"{t:.4f}", f"{l:.3f}", f"{s:.3f}", f"{c:.3f}"])
        except OSError as e:
            raise ExportError(f"Failed to write output CSV file {filepath}: {e}") from e
