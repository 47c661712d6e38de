"""
Unit tests for code construction module
"""

import unittest
import numpy as np
from numpy.testing import assert_array_equal
from scipy.sparse import csr_matrix
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tanner import linalg
from tanner.code import Edge, LinearCode
from tanner.noise import BinarySymmetricChannel
from tanner.random_code import RandomRegularCode


class TestRepetitionCode(unittest.TestCase):
    """Test cases for the repetition code"""

    def setUp(self):
        """Set up test fixtures"""
        self.code = LinearCode.repetition_code(3)

    def test_initialization(self):
        """Test code parameters"""
        self.assertEqual(self.code.block_size, 3)
        self.assertEqual(len(self.code), 3)
        self.assertEqual(self.code.number_of_checks, 2)
        self.assertEqual(self.code.dimension, 1)
        self.assertEqual(self.code.minimal_distance(), 3)

    def test_matrix_sparsity(self):
        """Test that matrices are sparse"""
        self.assertIsInstance(self.code.parity_check_matrix, csr_matrix)
        self.assertIsInstance(self.code.generator_matrix, csr_matrix)
        assert_array_equal(self.code.generator_matrix.toarray(), [[1, 1, 1]])

    def test_invalid_length(self):
        with self.assertRaises(ValueError):
            LinearCode.repetition_code(0)

    def test_random_error(self):
        rng = np.random.default_rng(0)
        assert_array_equal(self.code.random_error(BinarySymmetricChannel(0.0), rng), [0, 0, 0])
        assert_array_equal(self.code.random_error(BinarySymmetricChannel(1.0), rng), [1, 1, 1])


class TestHammingCode(unittest.TestCase):
    """Test cases for the Hamming code"""

    def setUp(self):
        """Set up test fixtures"""
        self.code = LinearCode.hamming_code()

    def test_parameters(self):
        self.assertEqual(self.code.block_size, 7)
        self.assertEqual(self.code.number_of_checks, 3)
        self.assertEqual(self.code.dimension, 4)
        self.assertEqual(self.code.minimal_distance(), 3)

    def test_generators_are_codewords(self):
        product = linalg.mod2_matmul(self.code.parity_check_matrix, self.code.generator_matrix.T)
        self.assertTrue(linalg.is_zero(product))
        for generator in self.code.generator_matrix.toarray():
            self.assertTrue(self.code.has_codeword(generator))

    def test_edges(self):
        """Test Tanner graph edges in check-major order"""
        expected = [
            (3, 0), (4, 0), (5, 0), (6, 0),
            (1, 1), (2, 1), (5, 1), (6, 1),
            (0, 2), (2, 2), (4, 2), (6, 2),
        ]
        self.assertEqual(list(self.code.edges()), [Edge(bit, check) for bit, check in expected])

    def test_adjacencies(self):
        self.assertEqual(self.code.checks_adjacent_to_bit(6), [0, 1, 2])
        self.assertEqual(self.code.checks_adjacent_to_bit(0), [2])
        self.assertEqual(self.code.bits_adjacent_to_check(1), [1, 2, 5, 6])
        self.assertEqual(self.code.bit_adjacencies.shape, (7, 3))

    def test_syndrome(self):
        assert_array_equal(self.code.syndrome_of(linalg.binary_vector(7, [4, 6])), [0, 1, 0])
        self.assertTrue(self.code.has_codeword(np.ones(7, dtype=np.uint8)))
        self.assertFalse(self.code.has_codeword(linalg.binary_vector(7, [2])))

    def test_syndrome_length_mismatch(self):
        with self.assertRaises(ValueError):
            self.code.syndrome_of(np.zeros(6, dtype=np.uint8))

    def test_same_codespace_from_generators(self):
        other = LinearCode.from_generator_matrix(self.code.generator_matrix)
        self.assertTrue(self.code.has_same_codespace_as(other))
        self.assertTrue(other.has_same_codespace_as(self.code))
        self.assertFalse(self.code.has_same_codespace_as(LinearCode.repetition_code(7)))

    def test_equality(self):
        self.assertEqual(self.code, LinearCode.hamming_code())
        self.assertNotEqual(self.code, LinearCode.repetition_code(7))
        self.assertNotEqual(self.code, LinearCode.repetition_code(3))


class TestDegenerateCodes(unittest.TestCase):
    """Test cases for codes without codewords"""

    def test_no_codeword(self):
        code = LinearCode.from_parity_check_matrix(linalg.identity(3))
        self.assertEqual(code.dimension, 0)
        self.assertIsNone(code.minimal_distance())

    def test_random_regular_code_sampler(self):
        sampler = LinearCode.random_regular_code(
            block_size=4, number_of_checks=2, bit_degree=1, check_degree=2
        )
        self.assertIsInstance(sampler, RandomRegularCode)
        self.assertEqual(sampler.block_size, 4)


if __name__ == "__main__":
    unittest.main()
