"""
Unit tests for the Monte Carlo simulators
"""

import io
import unittest
from contextlib import redirect_stdout
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tanner.code import LinearCode
from tanner.css_code import CssCode
from tanner.decoder import DecoderConfig
from tanner.flip import FlipDecoder
from tanner.simulator import ClassicalSimulator, QuantumSimulator


class TestQuantumSimulator(unittest.TestCase):
    """Test cases for QuantumSimulator"""

    def setUp(self):
        """Set up test fixtures"""
        self.simulator = QuantumSimulator(CssCode.steane_code(), DecoderConfig(max_iter=10))

    def test_default_config(self):
        simulator = QuantumSimulator(CssCode.steane_code())
        self.assertEqual(simulator.config, DecoderConfig())

    def test_noiseless_point(self):
        point = self.simulator.run_point(0.0, 20, seed=1)
        self.assertEqual(point["fails"], 0)
        self.assertEqual(point["shots"], 20)
        self.assertEqual(point["wer"], 0.0)
        self.assertGreaterEqual(point["seconds"], 0.0)

    def test_reproducible_with_seed(self):
        first = self.simulator.run_point(0.1, 30, seed=7)
        second = self.simulator.run_point(0.1, 30, seed=7)
        self.assertEqual(first["fails"], second["fails"])

    def test_run_experiment(self):
        results = self.simulator.run_experiment([0.0, 0.05], total_shots=10, verbose=False, seed=3)
        self.assertEqual(list(results), [0.0, 0.05])
        self.assertEqual(results[0.0], 0.0)
        for wer in results.values():
            self.assertTrue(0.0 <= wer <= 1.0)

    def test_run_experiment_details(self):
        results = self.simulator.run_experiment(
            [0.02], total_shots=5, verbose=False, return_details=True, seed=0
        )
        self.assertEqual(set(results[0.02]), {"wer", "fails", "shots", "seconds"})

    def test_verbose_table(self):
        output = io.StringIO()
        with redirect_stdout(output):
            self.simulator.run_experiment([0.0], total_shots=2, verbose=True, seed=0)
        text = output.getvalue()
        self.assertIn("WER", text)
        self.assertIn("SIMULATION COMPLETE", text)


class TestClassicalSimulator(unittest.TestCase):
    """Test cases for ClassicalSimulator"""

    def setUp(self):
        """Set up test fixtures"""
        code = LinearCode.hamming_code()
        self.simulator = ClassicalSimulator(code, FlipDecoder(code))

    def test_noiseless_point(self):
        self.assertEqual(self.simulator.run_point(0.0, 10, seed=0)["wer"], 0.0)

    def test_undetectable_errors_fail(self):
        # Flipping every bit gives a codeword, so nothing is corrected.
        self.assertEqual(self.simulator.run_point(1.0, 10, seed=0)["wer"], 1.0)


if __name__ == "__main__":
    unittest.main()
