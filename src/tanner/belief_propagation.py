"""
Belief Propagation Decoder Module

Log-domain sum-product decoding on the Tanner graph of a parity check matrix.

Messages live in flat float arrays indexed by edge ordinal. Edges are
numbered in check-major order, the order of the non-zero entries of the
CSR parity check matrix, so the edges of a check form a contiguous slice.
A decoding run is a sequence of ``BpState`` values produced by pure update
functions taking the static ``TannerGraph`` as context.
"""

import logging
from typing import NamedTuple, Optional

import numpy as np

from . import linalg
from .base import DecodingResult, LinearDecoder
from .code import Edge, LinearCode

logger = logging.getLogger(__name__)

# Bound on |prod tanh| so atanh stays finite; messages saturate near +-28.
MAX_TANH_PRODUCT = 1.0 - 1e-12


class TannerGraph:
    """
    Edge-indexed view of a parity check matrix.

    Attributes
    ----------
    num_bits, num_checks : int
        Shape of the parity check matrix (transposed).
    edge_bits, edge_checks : np.ndarray
        Bit and check of each edge ordinal.
    check_pointers : np.ndarray
        Edges of check c are the ordinals check_pointers[c]:check_pointers[c + 1].
    """

    def __init__(self, parity_check_matrix):
        matrix = linalg.to_csr(parity_check_matrix)
        self.parity_check_matrix = matrix
        self.num_checks, self.num_bits = matrix.shape
        self.check_pointers = matrix.indptr.astype(np.int64)
        self.edge_bits = matrix.indices.astype(np.int64)
        self.edge_checks = np.repeat(
            np.arange(self.num_checks, dtype=np.int64), np.diff(self.check_pointers)
        )

    @property
    def num_edges(self) -> int:
        return len(self.edge_bits)

    def edge(self, ordinal: int) -> Edge:
        return Edge(bit=int(self.edge_bits[ordinal]), check=int(self.edge_checks[ordinal]))

    def check_edges(self, check: int) -> slice:
        return slice(int(self.check_pointers[check]), int(self.check_pointers[check + 1]))

    def sum_at_bits(self, values: np.ndarray) -> np.ndarray:
        """Sums edge values over the edges of each bit."""
        return np.bincount(self.edge_bits, weights=values, minlength=self.num_bits)


class BpState(NamedTuple):
    """Messages after ``iteration`` rounds of message passing."""

    bit_to_check: np.ndarray
    check_to_bit: np.ndarray
    iteration: int


def initial_state(graph: TannerGraph, priors: np.ndarray) -> BpState:
    """Bit-to-check messages start at the prior LLRs, check-to-bit at zero."""
    return BpState(
        bit_to_check=priors[graph.edge_bits].astype(float),
        check_to_bit=np.zeros(graph.num_edges),
        iteration=0,
    )


def update_check_to_bit(graph: TannerGraph, bit_to_check: np.ndarray,
                        syndrome: np.ndarray) -> np.ndarray:
    """
    Check-to-bit messages.

    For edge (b, c) the message is 2 atanh of the product of
    tanh(m / 2) over the bit-to-check messages m of the other edges of c,
    negated when syndrome[c] is 1.
    """
    halves = np.tanh(bit_to_check / 2.0)
    products = np.ones(graph.num_edges)
    for check in range(graph.num_checks):
        edges = graph.check_edges(check)
        values = halves[edges]
        if values.size == 0:
            continue
        # Product of every other edge of the check, without division.
        left = np.cumprod(np.concatenate(([1.0], values[:-1])))
        right = np.cumprod(np.concatenate(([1.0], values[:0:-1])))[::-1]
        products[edges] = left * right
    products = np.clip(products, -MAX_TANH_PRODUCT, MAX_TANH_PRODUCT)
    signs = np.where(syndrome[graph.edge_checks] == 1, -1.0, 1.0)
    return signs * 2.0 * np.arctanh(products)


def posterior(graph: TannerGraph, priors: np.ndarray, check_to_bit: np.ndarray) -> np.ndarray:
    """Prior LLR of each bit plus every check-to-bit message it receives."""
    return priors + graph.sum_at_bits(check_to_bit)


def update_bit_to_check(graph: TannerGraph, priors: np.ndarray,
                        check_to_bit: np.ndarray) -> np.ndarray:
    """
    Bit-to-check messages.

    For edge (b, c) the message is the prior of b plus the check-to-bit
    messages of the other edges of b.
    """
    return posterior(graph, priors, check_to_bit)[graph.edge_bits] - check_to_bit


def next_state(graph: TannerGraph, priors: np.ndarray, state: BpState,
               syndrome: np.ndarray) -> BpState:
    """One round: every check-to-bit message, then every bit-to-check message."""
    check_to_bit = update_check_to_bit(graph, state.bit_to_check, syndrome)
    bit_to_check = update_bit_to_check(graph, priors, check_to_bit)
    return BpState(bit_to_check, check_to_bit, state.iteration + 1)


def hard_decision(graph: TannerGraph, priors: np.ndarray, state: BpState) -> np.ndarray:
    """A bit is in the correction when its posterior LLR is not positive."""
    return (posterior(graph, priors, state.check_to_bit) <= 0).astype(np.uint8)


def prior_llrs(error_rate, num_bits: int) -> np.ndarray:
    """
    Log-likelihood ratios ln((1 - p) / p).

    Raises
    ------
    ValueError
        If a probability is not strictly between 0 and 1 or the number of
        per-bit probabilities differs from the number of bits.
    """
    probabilities = np.broadcast_to(np.asarray(error_rate, dtype=float), (num_bits,)) \
        if np.ndim(error_rate) == 0 else np.asarray(error_rate, dtype=float)
    if probabilities.shape != (num_bits,):
        raise ValueError(f"expected {num_bits} error probabilities, got {probabilities.shape}")
    if np.any(probabilities <= 0.0) or np.any(probabilities >= 1.0):
        raise ValueError("error probabilities must be strictly between 0 and 1")
    return np.log((1.0 - probabilities) / probabilities)


class BpDecoder(LinearDecoder):
    """
    Sum-product belief propagation decoder.

    Decoding stops as soon as the hard decision reproduces the syndrome or
    after ``max_iterations`` rounds. In the latter case the last correction
    is returned anyway; use ``run`` to know if decoding converged.

    Parameters
    ----------
    code : LinearCode or matrix
        The code, or directly its parity check matrix.
    error_rate : float or array_like
        Crossover probability, shared by every bit or given per bit, strictly
        between 0 and 1. Check messages saturate near +-28, so a bit whose
        prior LLR exceeds about 28 times its degree (p below roughly 1e-12)
        is never flipped.
    max_iterations : int, default=50
        Maximum number of message passing rounds.

    Examples
    --------
    >>> code = LinearCode.hamming_code()
    >>> decoder = BpDecoder(code, error_rate=0.1, max_iterations=10)
    >>> decoder.correction_for(code.syndrome_of([0, 0, 1, 0, 0, 0, 0]))
    array([0, 0, 1, 0, 0, 0, 0], dtype=uint8)
    """

    def __init__(self, code, error_rate=0.1,
                 max_iterations: int = 50):
        matrix = code.parity_check_matrix if isinstance(code, LinearCode) else code
        self.graph = TannerGraph(matrix)
        self.parity_check_matrix = self.graph.parity_check_matrix
        self.priors = prior_llrs(error_rate, self.graph.num_bits)
        self.max_iterations = max_iterations

    @property
    def num_bits(self) -> int:
        return self.graph.num_bits

    @property
    def num_checks(self) -> int:
        return self.graph.num_checks

    def initialize(self) -> BpState:
        return initial_state(self.graph, self.priors)

    def run(self, syndrome, max_iterations: Optional[int] = None) -> DecodingResult:
        """Runs message passing until the syndrome is matched or the cap is reached."""
        syndrome = np.asarray(syndrome, dtype=np.uint8)
        if syndrome.shape != (self.num_checks,):
            raise ValueError(f"syndrome of shape {syndrome.shape} for {self.num_checks} checks")
        cap = self.max_iterations if max_iterations is None else max_iterations

        state = self.initialize()
        correction = hard_decision(self.graph, self.priors, state)
        converged = self._matches(correction, syndrome)
        while not converged and state.iteration < cap:
            state = next_state(self.graph, self.priors, state, syndrome)
            correction = hard_decision(self.graph, self.priors, state)
            converged = self._matches(correction, syndrome)
        if not converged:
            logger.debug("belief propagation did not converge in %d iterations", state.iteration)
        return DecodingResult(correction, converged, state.iteration)

    def correction_for(self, syndrome) -> np.ndarray:
        return self.run(syndrome).correction

    def _matches(self, correction: np.ndarray, syndrome: np.ndarray) -> bool:
        return np.array_equal(self.syndrome_of(correction), syndrome)

    def __str__(self):
        return f"BP decoder (max iterations = {self.max_iterations})"
