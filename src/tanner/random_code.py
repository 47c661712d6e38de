"""
Random regular LDPC codes.

The Tanner graph is drawn from the bipartite configuration model and
resampled until it has no parallel edges, so every bit touches exactly
``bit_degree`` distinct checks and every check exactly ``check_degree``
distinct bits.
"""

import logging
from dataclasses import dataclass

import networkx as nx
import numpy as np

from . import linalg
from .code import LinearCode

logger = logging.getLogger(__name__)


class SamplingError(ValueError):
    """Raised when no regular code exists for the requested parameters."""

    def __init__(self, block_size: int, number_of_checks: int, bit_degree: int, check_degree: int):
        self.block_size = block_size
        self.number_of_checks = number_of_checks
        self.bit_degree = bit_degree
        self.check_degree = check_degree
        super().__init__(
            f"can't generate a regular code with {block_size} bits of degree {bit_degree} "
            f"and {number_of_checks} checks of degree {check_degree}"
        )


@dataclass(frozen=True)
class RandomRegularCode:
    """
    Sampler of random LDPC codes with regular parity check matrix.

    Parameters
    ----------
    block_size : int
        Number of bits.
    number_of_checks : int
        Number of checks.
    bit_degree : int
        Number of checks connected to each bit.
    check_degree : int
        Number of bits connected to each check.
    max_attempts : int, default=1000
        Number of graphs drawn before giving up on finding one without
        parallel edges.

    Examples
    --------
    >>> sampler = RandomRegularCode(block_size=20, number_of_checks=15, bit_degree=3, check_degree=4)
    >>> code = sampler.sample_with(np.random.default_rng(0))
    >>> code.parity_check_matrix.nnz
    60
    """

    block_size: int = 0
    number_of_checks: int = 0
    bit_degree: int = 0
    check_degree: int = 0
    max_attempts: int = 1000

    def _error(self) -> SamplingError:
        return SamplingError(
            self.block_size, self.number_of_checks, self.bit_degree, self.check_degree
        )

    def sample_with(self, rng: np.random.Generator) -> LinearCode:
        """
        Samples a random code.

        Raises
        ------
        SamplingError
            If ``block_size * bit_degree != number_of_checks * check_degree``
            or no simple graph was found within ``max_attempts`` draws.
        """
        if self.block_size * self.bit_degree != self.number_of_checks * self.check_degree:
            raise self._error()
        if self.bit_degree > self.number_of_checks or self.check_degree > self.block_size:
            raise self._error()

        bit_degrees = [self.bit_degree] * self.block_size
        check_degrees = [self.check_degree] * self.number_of_checks
        for attempt in range(self.max_attempts):
            graph = nx.bipartite.configuration_model(
                bit_degrees, check_degrees, seed=int(rng.integers(2**31))
            )
            checks = self._checks_of(graph)
            if checks is not None:
                logger.debug("sampled regular graph after %d attempt(s)", attempt + 1)
                matrix = linalg.binary_matrix(self.block_size, checks)
                return LinearCode.from_parity_check_matrix(matrix)
        raise self._error()

    def _checks_of(self, graph):
        """Neighbourhood of each check, or None if the graph has parallel edges."""
        checks = [set() for _ in range(self.number_of_checks)]
        for u, v in graph.edges():
            bit, check = min(u, v), max(u, v) - self.block_size
            if bit in checks[check]:
                return None
            checks[check].add(bit)
        return [sorted(neighbors) for neighbors in checks]
