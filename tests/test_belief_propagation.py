"""
Unit tests for the belief propagation decoder
"""

import unittest
import numpy as np
from numpy.testing import assert_allclose, assert_array_equal
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tanner import linalg
from tanner.belief_propagation import (
    BpDecoder,
    TannerGraph,
    hard_decision,
    initial_state,
    next_state,
    prior_llrs,
    update_bit_to_check,
    update_check_to_bit,
)
from tanner.code import LinearCode


class TestMessages(unittest.TestCase):
    """Test cases for a single round of message passing"""

    def setUp(self):
        """Set up test fixtures"""
        self.graph = TannerGraph(linalg.binary_matrix(3, [[0, 1], [1, 2]]))
        self.probabilities = np.array([0.1, 0.2, 0.3])
        self.priors = prior_llrs(self.probabilities, 3)
        self.syndrome = np.array([0, 1], dtype=np.uint8)

    def test_graph(self):
        assert_array_equal(self.graph.edge_bits, [0, 1, 1, 2])
        assert_array_equal(self.graph.edge_checks, [0, 0, 1, 1])
        self.assertEqual(self.graph.num_edges, 4)
        self.assertEqual(self.graph.edge(2), (1, 1))

    def test_priors(self):
        assert_allclose(self.priors, np.log((1 - self.probabilities) / self.probabilities))

    def test_initial_state(self):
        state = initial_state(self.graph, self.priors)
        l0, l1, l2 = self.priors
        assert_allclose(state.bit_to_check, [l0, l1, l1, l2])
        assert_array_equal(state.check_to_bit, np.zeros(4))
        self.assertEqual(state.iteration, 0)

    def test_check_to_bit(self):
        state = initial_state(self.graph, self.priors)
        l0, l1, l2 = self.priors
        messages = update_check_to_bit(self.graph, state.bit_to_check, self.syndrome)
        assert_allclose(messages, [l1, l0, -l2, -l1])

    def test_bit_to_check(self):
        l0, l1, l2 = self.priors
        check_to_bit = np.array([l1, l0, -l2, -l1])
        messages = update_bit_to_check(self.graph, self.priors, check_to_bit)
        assert_allclose(messages, [l0, l1 - l2, l1 + l0, l2])

    def test_next_state(self):
        state = next_state(self.graph, self.priors, initial_state(self.graph, self.priors), self.syndrome)
        self.assertEqual(state.iteration, 1)
        # Bit 2 is the likeliest explanation of the unsatisfied check.
        assert_array_equal(hard_decision(self.graph, self.priors, state), [0, 0, 1])

    def test_saturated_messages_stay_finite(self):
        priors = prior_llrs(1e-15, 3)
        state = initial_state(self.graph, priors)
        for _ in range(3):
            state = next_state(self.graph, priors, state, self.syndrome)
        self.assertTrue(np.all(np.isfinite(state.check_to_bit)))
        self.assertTrue(np.all(np.isfinite(state.bit_to_check)))


class TestPriors(unittest.TestCase):
    """Test cases for error rate validation"""

    def setUp(self):
        self.code = LinearCode.hamming_code()

    def test_invalid_error_rates(self):
        for error_rate in [0.0, 1.0, -0.5]:
            with self.assertRaises(ValueError):
                BpDecoder(self.code, error_rate=error_rate)

    def test_per_bit_error_rates(self):
        decoder = BpDecoder(self.code, error_rate=np.full(7, 0.05))
        assert_allclose(decoder.priors, np.full(7, np.log(19.0)))
        with self.assertRaises(ValueError):
            BpDecoder(self.code, error_rate=np.full(6, 0.05))


class TestBpDecoder(unittest.TestCase):
    """Test cases for BpDecoder on the Hamming code"""

    def setUp(self):
        """Set up test fixtures"""
        self.code = LinearCode.hamming_code()
        self.decoder = BpDecoder(self.code, error_rate=0.1, max_iterations=10)

    def test_zero_syndrome(self):
        result = self.decoder.run(np.zeros(3, dtype=np.uint8))
        assert_array_equal(result.correction, np.zeros(7))
        self.assertTrue(result.converged)
        self.assertEqual(result.iterations, 0)

    def test_single_errors_are_corrected(self):
        codeword = linalg.binary_vector(7, [0, 1, 2])
        assert_array_equal(self.decoder.decode(codeword ^ linalg.binary_vector(7, [0])), codeword)
        codeword = linalg.binary_vector(7, [3, 4, 5, 6])
        assert_array_equal(self.decoder.decode(codeword ^ linalg.binary_vector(7, [2])), codeword)

    def test_decode_message(self):
        message = linalg.binary_vector(7, [4, 6])
        assert_array_equal(self.decoder.decode(message), linalg.binary_vector(7, [1, 4, 6]))

    def test_always_returns_codewords(self):
        for position in range(7):
            error = linalg.binary_vector(7, [position])
            result = self.decoder.run(self.code.syndrome_of(error))
            self.assertTrue(result.converged)
            self.assertTrue(self.code.has_codeword(error ^ result.correction))

    def test_exact_single_errors(self):
        for position in range(6):
            error = linalg.binary_vector(7, [position])
            assert_array_equal(self.decoder.correction_for(self.code.syndrome_of(error)), error)

    def test_saturated_priors_never_flip(self):
        # Prior LLRs near 690 outweigh any saturated check message.
        decoder = BpDecoder(self.code, error_rate=1e-300, max_iterations=20)
        result = decoder.run(np.array([1, 1, 1], dtype=np.uint8))
        self.assertFalse(result.converged)
        self.assertEqual(result.iterations, 20)
        assert_array_equal(result.correction, np.zeros(7))

    def test_matrix_input(self):
        decoder = BpDecoder(self.code.parity_check_matrix, error_rate=0.1, max_iterations=10)
        syndrome = np.array([0, 1, 0], dtype=np.uint8)
        assert_array_equal(decoder.correction_for(syndrome), self.decoder.correction_for(syndrome))

    def test_iteration_cap(self):
        decoder = BpDecoder(self.code, error_rate=0.1, max_iterations=0)
        result = decoder.run(np.array([1, 1, 1], dtype=np.uint8))
        self.assertFalse(result.converged)
        self.assertEqual(result.iterations, 0)

    def test_syndrome_length_mismatch(self):
        with self.assertRaises(ValueError):
            self.decoder.run(np.zeros(2, dtype=np.uint8))


if __name__ == "__main__":
    unittest.main()
