"""
Unit tests for noise models
"""

import unittest
import numpy as np
from numpy.testing import assert_array_equal
import stim
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tanner.noise import (
    BinarySymmetricChannel,
    DepolarizingNoise,
    ErasureChannel,
    check_probability,
)


class TestNoiseModels(unittest.TestCase):
    """Test cases for error samplers"""

    def test_invalid_probability(self):
        with self.assertRaises(ValueError):
            check_probability(1.5)
        with self.assertRaises(ValueError):
            BinarySymmetricChannel(-0.1)

    def test_binary_symmetric_channel_extremes(self):
        rng = np.random.default_rng(0)
        silent = BinarySymmetricChannel(0.0).sample_error_of_length(10, rng)
        assert_array_equal(silent, np.zeros(10))
        self.assertEqual(silent.dtype, np.uint8)
        assert_array_equal(BinarySymmetricChannel(1.0).sample_error_of_length(10, rng), np.ones(10))

    def test_binary_symmetric_channel_rate(self):
        error = BinarySymmetricChannel(0.2).sample_error_of_length(10000, np.random.default_rng(1))
        self.assertAlmostEqual(error.mean(), 0.2, delta=0.02)

    def test_seeded_samples_are_reproducible(self):
        channel = ErasureChannel(0.5)
        first = channel.sample_error_of_length(50, np.random.default_rng(3))
        second = channel.sample_error_of_length(50, np.random.default_rng(3))
        assert_array_equal(first, second)

    def test_depolarizing_noise(self):
        rng = np.random.default_rng(0)
        error = DepolarizingNoise(1.0).sample_error_of_length(30, rng)
        self.assertIsInstance(error, stim.PauliString)
        self.assertEqual(len(error), 30)
        self.assertEqual(error.weight, 30)
        self.assertEqual(DepolarizingNoise(0.0).sample_error_of_length(30, rng).weight, 0)

    def test_depolarizing_noise_uses_every_pauli(self):
        error = DepolarizingNoise(1.0).sample_error_of_length(300, np.random.default_rng(5))
        self.assertEqual({error[q] for q in range(len(error))}, {1, 2, 3})

    def test_descriptions(self):
        self.assertEqual(str(BinarySymmetricChannel(0.1)), "Binary symmetric channel (prob = 0.1)")
        self.assertEqual(str(ErasureChannel(0.25)), "Erasure(0.25)")


if __name__ == "__main__":
    unittest.main()
