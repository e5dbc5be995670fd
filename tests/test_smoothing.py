import unittest
import numpy as np
import sys
import os

# Path Hack
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from pvcomp.constants import NUM_KEYS
from pvcomp.loudness import rms_db
from pvcomp.smoothing import moving_average

class TestMovingAverage(unittest.TestCase):

    def test_boundary_clipping(self):
        print("\n--- Testing Smoothing: Clipped window ---")
        smoothed = moving_average([1.0, 2.0, 3.0, 4.0], 1, workers=1)
        np.testing.assert_allclose(smoothed, [1.5, 2.0, 3.0, 3.5])

    def test_zero_span_is_identity(self):
        values = np.linspace(-40.0, -10.0, NUM_KEYS)
        np.testing.assert_array_equal(moving_average(values, 0), values)

    def test_constant_curve_unchanged(self):
        print("\n--- Testing Smoothing: Constant curve ---")
        measured = rms_db(np.full(441, 0.0371))
        for level in (-23.25, 0.1, -23.7, -31.41, -47.3, measured):
            values = np.full(NUM_KEYS, level)
            for span in (0, 1, 2, 3, 5, 6, 12, 87, 200):
                np.testing.assert_array_equal(moving_average(values, span, workers=1), values,
                                              err_msg=f"level={level} span={span}")

    def test_flat_region_inside_varying_curve(self):
        values = np.full(NUM_KEYS, -23.7)
        values[:5] = -40.0
        smoothed = moving_average(values, 3, workers=1)
        np.testing.assert_array_equal(smoothed[8:], values[8:])
        self.assertNotEqual(smoothed[7], -23.7)

    def test_nan_propagates(self):
        values = np.full(NUM_KEYS, 0.1)
        values[50] = np.nan
        smoothed = moving_average(values, 2, workers=1)
        self.assertTrue(np.isnan(smoothed[48:53]).all())
        self.assertEqual(smoothed[47], 0.1)

    def test_all_silent_curve_stays_negative_infinity(self):
        values = np.full(NUM_KEYS, float("-inf"))
        self.assertTrue(np.isneginf(moving_average(values, 4)).all())

    def test_span_wider_than_curve_is_global_mean(self):
        values = np.arange(10, dtype=np.float64)
        np.testing.assert_allclose(moving_average(values, 50), np.full(10, 4.5))

    def test_interior_window_size(self):
        values = np.zeros(NUM_KEYS)
        values[40] = 7.0
        smoothed = moving_average(values, 3, workers=1)
        np.testing.assert_allclose(smoothed[37:44], np.full(7, 1.0))
        self.assertEqual(smoothed[36], 0.0)
        self.assertEqual(smoothed[44], 0.0)

    def test_negative_infinity_spreads(self):
        values = np.zeros(NUM_KEYS)
        values[10] = float('-inf')
        smoothed = moving_average(values, 2, workers=1)
        self.assertTrue(np.isneginf(smoothed[8:13]).all())
        self.assertEqual(smoothed[7], 0.0)

    def test_parallel_matches_sequential(self):
        rng = np.random.default_rng(3)
        values = rng.normal(-30.0, 4.0, NUM_KEYS)
        np.testing.assert_allclose(moving_average(values, 4, workers=8),
                                   moving_average(values, 4, workers=1), rtol=1e-12)

    def test_invalid_span(self):
        for span in (-1, 1.5, True):
            with self.assertRaises(ValueError):
                moving_average([1.0, 2.0], span)

if __name__ == '__main__':
    unittest.main()
