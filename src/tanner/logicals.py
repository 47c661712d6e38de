"""
Logical operators of CSS codes.

A variation of the method of https://arxiv.org/abs/0903.5256 computing
canonically paired logical generators from the two classical codes of a
CSS code: after the computation, X logical i anticommutes with Z logical i
and commutes with every other logical and with every stabilizer.
"""

import logging
from typing import List, Optional

import numpy as np

from . import linalg
from .code import LinearCode
from .css import Css

logger = logging.getLogger(__name__)


def from_linear_codes(x_code: LinearCode, z_code: LinearCode) -> Css:
    """
    Computes paired logical generators.

    X logical candidates are the codewords of ``z_code`` (they commute with
    the Z stabilizers) and Z logical candidates are the codewords of
    ``x_code``.

    Returns
    -------
    Css
        Pair of csr matrices with the same number of rows.
    """
    return _Logicals(x_code, z_code).compute()


class _Logicals:
    def __init__(self, x_code: LinearCode, z_code: LinearCode):
        self.length = len(x_code)
        self.raw_x_generators = list(linalg.to_dense(z_code.generator_matrix))
        self.raw_z_generators = list(linalg.to_dense(x_code.generator_matrix))
        self.x_logicals: List[np.ndarray] = []
        self.z_logicals: List[np.ndarray] = []

    def compute(self) -> Css:
        while self.raw_x_generators:
            x_generator = self.raw_x_generators.pop()
            z_generator = self.find_anticommuting_z_generator(x_generator)
            if z_generator is None:
                # Product of stabilizers.
                continue
            self.update_remaining_generators(x_generator, z_generator)
            self.x_logicals.append(x_generator)
            self.z_logicals.append(z_generator)
        logger.debug("found %d logical pairs on %d qubits", len(self.x_logicals), self.length)
        return Css(self._to_matrix(self.x_logicals), self._to_matrix(self.z_logicals))

    @staticmethod
    def anticommute(x_generator: np.ndarray, z_generator: np.ndarray) -> bool:
        return int(np.dot(x_generator.astype(np.int64), z_generator)) % 2 == 1

    def find_anticommuting_z_generator(self, x_generator: np.ndarray) -> Optional[np.ndarray]:
        for position, z_generator in enumerate(self.raw_z_generators):
            if self.anticommute(x_generator, z_generator):
                last = self.raw_z_generators.pop()
                if position < len(self.raw_z_generators):
                    self.raw_z_generators[position] = last
                return z_generator
        return None

    def update_remaining_generators(self, x_generator: np.ndarray, z_generator: np.ndarray):
        self.raw_z_generators = [
            generator ^ z_generator if self.anticommute(x_generator, generator) else generator
            for generator in self.raw_z_generators
        ]
        self.raw_x_generators = [
            generator ^ x_generator if self.anticommute(generator, z_generator) else generator
            for generator in self.raw_x_generators
        ]

    def _to_matrix(self, rows: List[np.ndarray]):
        if not rows:
            return linalg.zeros(0, self.length)
        return linalg.to_csr(np.vstack(rows))
