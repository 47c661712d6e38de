"""
Code Construction Module

Implements classical linear codes optimized for LDPC decoding.

A code is defined from either a parity check matrix H or a generator
matrix G, the missing one being computed as the null space of the other,
so that H @ G.T = 0 always holds.
"""

import itertools
from typing import Iterator, List, NamedTuple, Optional

import numpy as np
from scipy.sparse import csr_matrix

from . import linalg


class Edge(NamedTuple):
    """A (bit, check) pair identifying a non-zero entry of the parity check matrix."""

    bit: int
    check: int


class LinearCode:
    """
    A binary linear code and its Tanner graph.

    Use the ``from_parity_check_matrix`` or ``from_generator_matrix``
    constructors rather than calling ``__init__`` directly. Instances are
    never mutated after construction.

    Attributes
    ----------
    parity_check_matrix : csr_matrix
        Checks x bits matrix H whose null space is the codespace.
    generator_matrix : csr_matrix
        Generators x bits matrix G whose rows span the codespace.
    bit_adjacencies : csr_matrix
        H transposed; row b lists the checks touching bit b.

    Examples
    --------
    >>> code = LinearCode.repetition_code(3)
    >>> code.block_size, code.dimension, code.minimal_distance()
    (3, 1, 3)
    """

    def __init__(self, parity_check_matrix: csr_matrix, generator_matrix: csr_matrix):
        self._parity_check_matrix = linalg.to_csr(parity_check_matrix)
        self._generator_matrix = linalg.to_csr(generator_matrix)
        self._bit_adjacencies = linalg.to_csr(self._parity_check_matrix.T)

    @classmethod
    def from_parity_check_matrix(cls, matrix) -> "LinearCode":
        """Creates the code whose codewords are the null space of ``matrix``."""
        matrix = linalg.to_csr(matrix)
        return cls(matrix, linalg.nullspace(matrix))

    @classmethod
    def from_generator_matrix(cls, matrix) -> "LinearCode":
        """Creates the code spanned by the rows of ``matrix``."""
        matrix = linalg.to_csr(matrix)
        return cls(linalg.nullspace(matrix), matrix)

    @classmethod
    def repetition_code(cls, length: int) -> "LinearCode":
        """
        Returns the repetition code of the given length.

        Check i enforces bit i == bit i+1.
        """
        if length < 1:
            raise ValueError("length must be >= 1")
        checks = [[i, i + 1] for i in range(length - 1)]
        return cls.from_parity_check_matrix(linalg.binary_matrix(length, checks))

    @classmethod
    def hamming_code(cls) -> "LinearCode":
        """Returns the [7, 4, 3] Hamming code."""
        checks = [[3, 4, 5, 6], [1, 2, 5, 6], [0, 2, 4, 6]]
        return cls.from_parity_check_matrix(linalg.binary_matrix(7, checks))

    @staticmethod
    def random_regular_code(**parameters):
        """
        Returns a sampler of random LDPC codes with regular parity check matrix.

        See ``tanner.random_code.RandomRegularCode``.
        """
        from .random_code import RandomRegularCode

        return RandomRegularCode(**parameters)

    @property
    def parity_check_matrix(self) -> csr_matrix:
        return self._parity_check_matrix

    @property
    def generator_matrix(self) -> csr_matrix:
        return self._generator_matrix

    @property
    def bit_adjacencies(self) -> csr_matrix:
        return self._bit_adjacencies

    @property
    def block_size(self) -> int:
        """Number of bits of the code."""
        return self._parity_check_matrix.shape[1]

    def __len__(self) -> int:
        return self.block_size

    @property
    def number_of_checks(self) -> int:
        return self._parity_check_matrix.shape[0]

    @property
    def number_of_generators(self) -> int:
        return self._generator_matrix.shape[0]

    @property
    def dimension(self) -> int:
        """Number of linearly independent codewords."""
        return linalg.rank(self._generator_matrix)

    def checks_adjacent_to_bit(self, bit: int) -> List[int]:
        row = self._bit_adjacencies
        return [int(c) for c in row.indices[row.indptr[bit]:row.indptr[bit + 1]]]

    def bits_adjacent_to_check(self, check: int) -> List[int]:
        row = self._parity_check_matrix
        return [int(b) for b in row.indices[row.indptr[check]:row.indptr[check + 1]]]

    def edges(self) -> Iterator[Edge]:
        """
        Iterates through the edges of the Tanner graph.

        Edges are ordered by check, then by bit.
        """
        matrix = self._parity_check_matrix
        for check in range(self.number_of_checks):
            for bit in matrix.indices[matrix.indptr[check]:matrix.indptr[check + 1]]:
                yield Edge(bit=int(bit), check=check)

    def minimal_distance(self) -> Optional[int]:
        """
        Returns the weight of the smallest non-trivial codeword.

        Every non-empty combination of generators is enumerated, so the
        execution time scales exponentially with the number of generators.
        Only use it for small codes.

        Returns
        -------
        int or None
            None if the code has no non-zero codeword.
        """
        generators = linalg.to_dense(self._generator_matrix)
        best = None
        for size in range(1, len(generators) + 1):
            for combination in itertools.combinations(generators, size):
                weight = linalg.weight(np.bitwise_xor.reduce(combination))
                if weight > 0 and (best is None or weight < best):
                    best = weight
        return best

    def syndrome_of(self, message) -> np.ndarray:
        """
        Returns H @ message (mod 2).

        Raises
        ------
        ValueError
            If the message length differs from the block size.
        """
        message = np.asarray(message)
        if message.shape != (self.block_size,):
            raise ValueError(
                f"message of shape {message.shape} for a code of block size {self.block_size}"
            )
        return linalg.mod2_matvec(self._parity_check_matrix, message)

    def has_codeword(self, message) -> bool:
        return linalg.is_zero(self.syndrome_of(message))

    def has_same_codespace_as(self, other: "LinearCode") -> bool:
        """
        Checks if two codes define the same codespace, even if their
        parity check or generator matrices differ.
        """
        return (
            self.block_size == other.block_size
            and self.dimension == other.dimension
            and linalg.is_zero(
                linalg.mod2_matmul(self._parity_check_matrix, other.generator_matrix.T)
            )
        )

    def random_error(self, noise_model, rng: np.random.Generator) -> np.ndarray:
        """Samples an error of length ``block_size`` from the noise model."""
        return noise_model.sample_error_of_length(self.block_size, rng)

    def __eq__(self, other) -> bool:
        if not isinstance(other, LinearCode):
            return NotImplemented
        return _same_matrix(self._parity_check_matrix, other.parity_check_matrix) and _same_matrix(
            self._generator_matrix, other.generator_matrix
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"LinearCode(block_size={self.block_size}, "
            f"number_of_checks={self.number_of_checks}, "
            f"number_of_generators={self.number_of_generators})"
        )


def _same_matrix(first: csr_matrix, second: csr_matrix) -> bool:
    return first.shape == second.shape and (first != second).nnz == 0
