class CompensatorError(Exception):
    """Base class for every fatal condition raised by the pipeline."""

class ConfigError(CompensatorError):
    pass

class AudioLoadError(CompensatorError):
    pass

class TimingError(CompensatorError):
    """Slice geometry that cannot be analyzed."""

class ExportError(CompensatorError):
    pass
