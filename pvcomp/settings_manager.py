import logging
import yaml
from pathlib import Path
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict, ValidationError

from .errors import ConfigError

logger = logging.getLogger("pvcomp.settings_manager")

DEFAULT_CONFIG_NAME = "config.yaml"

class AppSettings(BaseModel):
    """
    Pydantic Model describing one compensation run.
    Relative paths are resolved against the directory of the config file.
    """
    # File I/O
    input_file: str
    output_bin: str
    output_txt: str
    output_csv: str | None = None
    output_plot: str | None = None

    # Analyzed section of the recording (seconds)
    start_time: float = Field(ge=0)
    end_time: float

    # Number of neighbouring keys averaged on each side
    smooth_span: int = Field(ge=0, le=255)

    # Execution
    workers: int | None = Field(default=None, ge=1)
    strict_timing: bool = False

    model_config = ConfigDict(extra='ignore', validate_assignment=True)

    def resolve(self, base_dir: Path) -> "AppSettings":
        """Returns a copy whose file paths are absolute, anchored at base_dir."""
        updates = {}
        for name in ("input_file", "output_bin", "output_txt", "output_csv", "output_plot"):
            value = getattr(self, name)
            if value is None:
                continue
            p = Path(value).expanduser()
            updates[name] = str(p if p.is_absolute() else (base_dir / p))
        return self.model_copy(update=updates)

class SettingsManager:
    """Handles loading and saving AppSettings to a YAML file using Pydantic."""
    def __init__(self, default_path: Path):
        self.default_path = Path(default_path)

    def load(self, filepath: Path = None) -> AppSettings:
        path_to_load = Path(filepath) if filepath else self.default_path

        if not path_to_load.exists():
            raise ConfigError(f"Config file not found: {path_to_load}")

        try:
            with open(path_to_load, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to read config file: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path_to_load.name} is empty or not a mapping")

        try:
            settings = AppSettings.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid config file {path_to_load.name}:\n{e}") from e

        logger.debug("Loaded settings from %s", path_to_load)
        return settings.resolve(path_to_load.resolve().parent)

    def save(self, settings: AppSettings, filepath: Path = None):
        path_to_save = Path(filepath) if filepath else self.default_path
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

        try:
            settings_dict = settings.model_dump(mode='json')

            with open(path_to_save, 'w', encoding='utf-8') as f:
                f.write(f"# Saved by pvcomp on {timestamp}\n")
                yaml.dump(settings_dict, f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            raise ConfigError(f"Failed to save config file: {e}") from e
