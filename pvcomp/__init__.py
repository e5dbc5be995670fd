"""Per-key volume compensation for sampled pianos."""

__version__ = "0.1.0"
