import unittest
import tempfile
import sys
import os
from pathlib import Path

# Path Hack
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from pvcomp.errors import ConfigError
from pvcomp.settings_manager import AppSettings, SettingsManager

VALID_YAML = """
input_file: recording.wav
output_bin: out/comp.bin
output_txt: /abs/comp.txt
start_time: 1.5
end_time: 177.5
smooth_span: 6
unknown_key: ignored
"""

class TestSettingsManager(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)
        self.path = self.dir / "config.yaml"

    def tearDown(self):
        self.tmp.cleanup()

    def test_load_resolves_relative_paths(self):
        print("\n--- Testing Settings: Load YAML ---")
        self.path.write_text(VALID_YAML)
        settings = SettingsManager(self.path).load()

        base = self.dir.resolve()
        self.assertEqual(Path(settings.input_file), base / "recording.wav")
        self.assertEqual(Path(settings.output_bin), base / "out" / "comp.bin")
        self.assertEqual(Path(settings.output_txt), Path("/abs/comp.txt"))
        self.assertIsNone(settings.output_csv)
        self.assertEqual(settings.start_time, 1.5)
        self.assertEqual(settings.smooth_span, 6)
        self.assertIsNone(settings.workers)
        self.assertFalse(settings.strict_timing)

    def test_missing_file(self):
        with self.assertRaises(ConfigError):
            SettingsManager(self.path).load()

    def test_empty_file(self):
        self.path.write_text("")
        with self.assertRaises(ConfigError):
            SettingsManager(self.path).load()

    def test_malformed_yaml(self):
        self.path.write_text("input_file: [unclosed\n")
        with self.assertRaises(ConfigError):
            SettingsManager(self.path).load()

    def test_missing_required_key(self):
        self.path.write_text("input_file: a.wav\nstart_time: 0\nend_time: 1\n")
        with self.assertRaises(ConfigError):
            SettingsManager(self.path).load()

    def test_out_of_range_values(self):
        cases = [
            ("smooth_span: 6", "smooth_span: -1"),
            ("smooth_span: 6", "smooth_span: 256"),
            ("start_time: 1.5", "start_time: -2.0"),
            ("smooth_span: 6", "smooth_span: 6\nworkers: 0"),
        ]
        for old, new in cases:
            self.path.write_text(VALID_YAML.replace(old, new))
            with self.assertRaises(ConfigError, msg=new):
                SettingsManager(self.path).load()

    def test_save_and_reload(self):
        settings = AppSettings(input_file=str(self.dir / "in.wav"),
                               output_bin=str(self.dir / "o.bin"),
                               output_txt=str(self.dir / "o.txt"),
                               start_time=0.0, end_time=88.0, smooth_span=3,
                               output_csv=str(self.dir / "o.csv"), workers=2)
        manager = SettingsManager(self.path)
        manager.save(settings)

        self.assertTrue(self.path.read_text().startswith("# Saved by pvcomp on "))
        reloaded = manager.load()
        self.assertEqual(reloaded, settings)

    def test_validate_assignment(self):
        settings = AppSettings(input_file="a", output_bin="b", output_txt="c",
                               start_time=0.0, end_time=1.0, smooth_span=1)
        with self.assertRaises(ValueError):
            settings.smooth_span = -4

if __name__ == '__main__':
    unittest.main()
