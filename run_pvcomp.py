import argparse
import logging
import sys
import os
from pathlib import Path

# Ensure the current directory is strictly in the Python path
current_dir = os.path.dirname(os.path.abspath(__file__))
if current_dir not in sys.path:
    sys.path.insert(0, current_dir)

from pvcomp import __version__
from pvcomp.errors import CompensatorError
from pvcomp.pipeline import CompensationPipeline
from pvcomp.settings_manager import DEFAULT_CONFIG_NAME, SettingsManager

def default_config_path(script_dir=None) -> Path:
    """config.yaml beside this script in a source checkout, else in the working directory."""
    beside_script = Path(script_dir or current_dir) / DEFAULT_CONFIG_NAME
    if beside_script.exists():
        return beside_script
    return Path.cwd() / DEFAULT_CONFIG_NAME

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Derive per-key volume compensation from an 88-key recording.")
    parser.add_argument("--config", type=Path, default=None,
                        help=f"YAML config file (default: {DEFAULT_CONFIG_NAME} next to this script, else in the working directory)")
    parser.add_argument("--no-wait", action="store_true", help="Exit without waiting for Enter")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)

def wait_for_enter(args):
    if args.no_wait:
        return
    try:
        input()
    except EOFError:
        pass

def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("Piano Volume Compensator")
    print(f"Version: {__version__}")

    try:
        print("Loading configuration...")
        settings = SettingsManager(args.config or default_config_path()).load()
        print("Configuration loaded.")

        pipeline = CompensationPipeline(settings, on_status=print)
        pipeline.run()
    except CompensatorError as e:
        print(f"Error: {e}\nPress enter to exit.")
        wait_for_enter(args)
        return 1

    print("Done!\nPress enter to exit.")
    wait_for_enter(args)
    return 0

if __name__ == "__main__":
    sys.exit(main())
