"""
Greedy bit-flip decoding.
"""

import logging
from typing import Optional

import numpy as np

from .base import DecodingResult, LinearDecoder
from .code import LinearCode

logger = logging.getLogger(__name__)


class FlipDecoder(LinearDecoder):
    """
    Greedy bit-flip decoder.

    Bits are scanned in order and the first bit with a strict majority of
    unsatisfied adjacent checks is flipped, until no such bit remains. Each
    flip lowers the number of unsatisfied checks, so at most
    ``number_of_checks`` flips ever happen. The result is not guaranteed to
    be the minimum weight correction.

    Parameters
    ----------
    code : LinearCode
        The code to decode.
    max_iterations : int, optional
        Maximum number of flips. Defaults to the number of checks.
    """

    def __init__(self, code: LinearCode, max_iterations: Optional[int] = None):
        self.code = code
        self.parity_check_matrix = code.parity_check_matrix
        self.max_iterations = code.number_of_checks if max_iterations is None else max_iterations
        self._adjacencies = code.bit_adjacencies.astype(np.int64)
        self._degrees = np.diff(code.bit_adjacencies.indptr)

    def run(self, syndrome) -> DecodingResult:
        """
        Flips bits until no bit has a majority of unsatisfied checks.

        ``converged`` is False when the remaining syndrome is not zero.
        """
        syndrome = np.array(syndrome, dtype=np.uint8)
        if syndrome.shape != (self.code.number_of_checks,):
            raise ValueError(
                f"syndrome of shape {syndrome.shape} for {self.code.number_of_checks} checks"
            )
        correction = np.zeros(self.code.block_size, dtype=np.uint8)
        flips = 0
        while flips < self.max_iterations:
            bit = self._find_flippable(syndrome)
            if bit is None:
                break
            syndrome[self.code.checks_adjacent_to_bit(bit)] ^= 1
            correction[bit] ^= 1
            flips += 1
        converged = not syndrome.any()
        if not converged:
            logger.debug("flip decoding stopped after %d flips with %d unsatisfied checks",
                         flips, int(syndrome.sum()))
        return DecodingResult(correction, converged, flips)

    def correction_for(self, syndrome) -> np.ndarray:
        return self.run(syndrome).correction

    def _find_flippable(self, syndrome: np.ndarray) -> Optional[int]:
        unsatisfied = self._adjacencies @ syndrome.astype(np.int64)
        candidates = np.flatnonzero(2 * unsatisfied > self._degrees)
        if candidates.size == 0:
            return None
        return int(candidates[0])

    def __str__(self):
        return "Flip decoder"
