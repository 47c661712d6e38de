"""
Erasure decoding for CSS codes.

An erased qubit suffers an unknown Pauli error, so every X and Z error
supported on the erasure is possible. The erasure can be corrected iff each
such error with trivial syndrome is a stabilizer. This is decided by rank
computations only, without message passing.
"""

import logging

import numpy as np

from . import linalg
from .base import ErasureDecoder
from .css_code import CssCode

logger = logging.getLogger(__name__)


class CssErasureDecoder(ErasureDecoder):
    """
    Decides if an erasure pattern of a CSS code is recoverable.

    Parameters
    ----------
    code : CssCode
        The code whose qubits are erased.

    Examples
    --------
    >>> decoder = CssErasureDecoder(CssCode.shor_code())
    >>> erasure = np.zeros(9, dtype=np.uint8)
    >>> erasure[[0, 4, 8]] = 1
    >>> decoder.recovery_probability(erasure)
    0.5
    """

    def __init__(self, code: CssCode):
        self.code = code

    def error_basis(self, erasure):
        """
        Single qubit errors on the erasure.

        Parameters
        ----------
        erasure : array_like
            Binary mask of length ``len(code)`` with a one at each erased qubit.

        Returns
        -------
        csr_matrix
            One row per erased qubit, with a single one at that qubit.
        """
        erasure = np.asarray(erasure)
        if erasure.shape != (len(self.code),):
            raise ValueError(
                f"erasure of shape {erasure.shape} for a code of {len(self.code)} qubits"
            )
        positions = linalg.support(erasure)
        return linalg.binary_matrix(len(self.code), [[position] for position in positions])

    def num_bad_x_errors(self, erasure) -> int:
        """
        Number of independent X errors on the erasure that are undetectable
        and act as non-trivial logical operators.
        """
        return self._num_bad_errors(erasure, self.code.stabilizers.z, self.code.logicals.z)

    def num_bad_z_errors(self, erasure) -> int:
        """
        Number of independent Z errors on the erasure that are undetectable
        and act as non-trivial logical operators.
        """
        return self._num_bad_errors(erasure, self.code.stabilizers.x, self.code.logicals.x)

    def _num_bad_errors(self, erasure, stabilizers, logicals) -> int:
        basis = self.error_basis(erasure)
        if basis.shape[0] == 0:
            return 0
        # Row i holds the syndrome then the logical flips of erased qubit i.
        syndromes = linalg.mod2_matmul(basis, stabilizers.T)
        flips = linalg.mod2_matmul(basis, logicals.T)
        combined = linalg.hstack([syndromes, flips])
        return linalg.rank(combined) - linalg.rank(syndromes)

    def recovery_probability(self, erasure) -> float:
        """
        Probability of recovering from a uniformly random Pauli error on the erasure.

        Each bad error halves the probability of guessing the right logical
        class, so this is 2 ** -(bad x errors + bad z errors).
        """
        bad_x = self.num_bad_x_errors(erasure)
        bad_z = self.num_bad_z_errors(erasure)
        logger.debug("erasure has %d bad x and %d bad z errors", bad_x, bad_z)
        return 1.0 / 2 ** (bad_x + bad_z)

    def __str__(self):
        return "CSS erasure decoder"
