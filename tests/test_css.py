"""
Unit tests for X/Z pairs and Pauli operator conversion
"""

import unittest
import numpy as np
from numpy.testing import assert_array_equal
import stim
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tanner.css import (
    Css,
    as_operator,
    both,
    is_trivial,
    map_css,
    multiply,
    operator_from_pauli,
    operator_to_pauli,
    swap_xz,
    zip_css,
)


class TestCssPairs(unittest.TestCase):
    """Test cases for the Css container helpers"""

    def test_map_and_swap(self):
        pair = Css(x=2, z=5)
        self.assertEqual(map_css(lambda value: value + 1, pair), Css(3, 6))
        self.assertEqual(swap_xz(pair), Css(5, 2))

    def test_zip(self):
        self.assertEqual(zip_css(Css(1, 2), Css(3, 4)), Css((1, 3), (2, 4)))

    def test_both(self):
        self.assertTrue(both(lambda value: value > 0, Css(1, 2)))
        self.assertFalse(both(lambda value: value > 0, Css(1, 0)))

    def test_is_trivial(self):
        self.assertTrue(is_trivial(Css(np.zeros(2), np.zeros(3))))
        self.assertFalse(is_trivial(Css(np.zeros(2), np.array([0, 1, 0]))))


class TestPauliConversion(unittest.TestCase):
    """Test cases for stim.PauliString conversion"""

    def test_from_pauli(self):
        operator = operator_from_pauli(stim.PauliString("_XYZ"))
        assert_array_equal(operator.x, [0, 1, 1, 0])
        assert_array_equal(operator.z, [0, 0, 1, 1])
        self.assertEqual(operator.x.dtype, np.uint8)

    def test_to_pauli(self):
        pauli = operator_to_pauli(Css(np.array([1, 0, 1, 0]), np.array([0, 1, 1, 0])))
        self.assertEqual(pauli, stim.PauliString("XZY_"))

    def test_to_pauli_rejects_different_lengths(self):
        with self.assertRaises(ValueError):
            operator_to_pauli(Css(np.zeros(2), np.zeros(3)))

    def test_as_operator(self):
        operator = as_operator(stim.PauliString("Y_"))
        assert_array_equal(operator.x, [1, 0])
        assert_array_equal(operator.z, [1, 0])
        same = as_operator(Css([1, 0], [1, 0]))
        assert_array_equal(same.x, operator.x)

    def test_multiply(self):
        product = multiply(
            operator_from_pauli(stim.PauliString("XYZ")),
            operator_from_pauli(stim.PauliString("YYX")),
        )
        self.assertEqual(operator_to_pauli(product), stim.PauliString("Z_Y"))


if __name__ == "__main__":
    unittest.main()
