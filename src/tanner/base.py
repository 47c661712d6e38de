"""
Decoder interfaces.

Every syndrome decoder exposes ``correction_for(syndrome)`` so that call
sites can swap decoding algorithms freely. Classical decoders also decode
full messages.
"""

from abc import ABC, abstractmethod
from typing import NamedTuple

import numpy as np

from . import linalg


class DecodingResult(NamedTuple):
    """
    Outcome of an iterative decoding run.

    Attributes
    ----------
    correction : np.ndarray
        The correction found, returned even if decoding did not converge.
    converged : bool
        True if the correction reproduces the input syndrome.
    iterations : int
        Number of iterations (or flips) performed.
    """

    correction: np.ndarray
    converged: bool
    iterations: int


class SyndromeDecoder(ABC):
    """A decoder producing a correction from a syndrome."""

    @abstractmethod
    def correction_for(self, syndrome):
        ...


class LinearDecoder(SyndromeDecoder):
    """
    A classical syndrome decoder bound to a parity check matrix.

    Subclasses set ``parity_check_matrix``.
    """

    parity_check_matrix = None

    def syndrome_of(self, message) -> np.ndarray:
        return linalg.mod2_matvec(self.parity_check_matrix, message)

    def decode(self, message) -> np.ndarray:
        """Returns the message with the correction of its syndrome applied."""
        message = np.asarray(message, dtype=np.uint8)
        correction = self.correction_for(self.syndrome_of(message))
        return np.bitwise_xor(message, correction).astype(np.uint8)


class ErasureDecoder(ABC):
    """A decoder deciding if an erasure pattern can be recovered."""

    @abstractmethod
    def recovery_probability(self, erasure) -> float:
        ...

    def is_recoverable(self, erasure) -> bool:
        return self.recovery_probability(erasure) == 1.0
