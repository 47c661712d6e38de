"""
Decoder Configuration Module

Provides the CSS decoder composition, a pymatching adapter and the
configuration used to build a pair of decoders for a CSS code.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pymatching

from . import linalg
from .base import DecodingResult, ErasureDecoder, LinearDecoder, SyndromeDecoder
from .belief_propagation import BpDecoder
from .code import LinearCode
from .css import Css
from .css_code import CssCode
from .flip import FlipDecoder

logger = logging.getLogger(__name__)

METHODS = ("bp", "flip", "matching")


@dataclass
class DecoderConfig:
    """
    Configuration for the decoders of a CSS code.

    Parameters
    ----------
    method : str, default="bp"
        Decoding algorithm: "bp" (belief propagation), "flip" (greedy bit
        flip) or "matching" (minimum weight perfect matching, graph-like
        codes only).
    max_iter : int, default=50
        Maximum number of BP iterations.
    max_flips : int, optional
        Maximum number of flips of the flip decoder. Defaults to the number
        of checks, which greedy flipping never exceeds.
    """
    method: str = "bp"
    max_iter: int = 50
    max_flips: Optional[int] = None

    def __post_init__(self):
        if self.method not in METHODS:
            raise ValueError(f"unknown decoding method {self.method!r}, expected one of {METHODS}")


class CssDecoder(SyndromeDecoder):
    """
    Quantum decoder made of one classical decoder per stabilizer type.

    X errors are detected by the Z stabilizers and Z errors by the X
    stabilizers, so the decoder assigned to the X stabilizers produces the Z
    part of the correction and the other one the X part.

    Parameters
    ----------
    x : SyndromeDecoder
        Decoder for the X stabilizer matrix, fed with the X part of the syndrome.
    z : SyndromeDecoder
        Decoder for the Z stabilizer matrix, fed with the Z part of the syndrome.

    Examples
    --------
    >>> code = CssCode.steane_code()
    >>> decoder = CssDecoder(
    ...     x=BpDecoder(code.stabilizers.x, error_rate=0.1),
    ...     z=BpDecoder(code.stabilizers.z, error_rate=0.1),
    ... )
    """

    def __init__(self, x: SyndromeDecoder, z: SyndromeDecoder):
        self.x = x
        self.z = z

    def correction_for(self, syndrome: Css) -> Css:
        """Returns the correction as a Css pair of binary vectors."""
        return Css(
            x=np.asarray(self.z.correction_for(syndrome.z), dtype=np.uint8),
            z=np.asarray(self.x.correction_for(syndrome.x), dtype=np.uint8),
        )

    def __str__(self):
        return f"CSS decoder (x: {self.x}, z: {self.z})"


class MatchingDecoder(LinearDecoder):
    """
    Minimum weight perfect matching decoder backed by pymatching.

    Only graph-like parity check matrices, with at most two ones per column,
    are supported.

    Parameters
    ----------
    parity_check_matrix : matrix or LinearCode
        The checks to decode against.
    weights : array_like, optional
        Per-bit edge weights, for instance log-likelihood ratios.
    """

    def __init__(self, parity_check_matrix, weights=None):
        if isinstance(parity_check_matrix, LinearCode):
            parity_check_matrix = parity_check_matrix.parity_check_matrix
        self.parity_check_matrix = linalg.to_csr(parity_check_matrix)
        self.matching = pymatching.Matching(self.parity_check_matrix, weights=weights)

    def correction_for(self, syndrome) -> np.ndarray:
        syndrome = np.asarray(syndrome, dtype=np.uint8)
        return np.asarray(self.matching.decode(syndrome), dtype=np.uint8)

    def __str__(self):
        return "Matching decoder"


def create_decoder(parity_check_matrix, config: DecoderConfig, error_rate: float = 0.1):
    """
    Creates a classical decoder for one stabilizer type.

    Parameters
    ----------
    parity_check_matrix : sparse matrix
        Stabilizer matrix of one type.
    config : DecoderConfig
        Decoder configuration parameters.
    error_rate : float, default=0.1
        Error probability of each bit, used as BP prior and matching weight.
    """
    if config.method == "bp":
        return BpDecoder(parity_check_matrix, error_rate=error_rate, max_iterations=config.max_iter)
    if config.method == "flip":
        return FlipDecoder(
            LinearCode.from_parity_check_matrix(parity_check_matrix),
            max_iterations=config.max_flips,
        )
    weights = np.full(parity_check_matrix.shape[1], np.log((1 - error_rate) / error_rate))
    return MatchingDecoder(parity_check_matrix, weights=weights)


def create_decoders(code: CssCode, config: Optional[DecoderConfig] = None,
                    error_rate: float = 0.1) -> CssDecoder:
    """
    Creates decoders for both stabilizer types of a CSS code.

    Returns
    -------
    CssDecoder
        decoder.x decodes against the X stabilizers (Z errors) and
        decoder.z against the Z stabilizers (X errors).
    """
    config = config or DecoderConfig()
    logger.debug("creating %s decoders for %r", config.method, code)
    return CssDecoder(
        x=create_decoder(code.stabilizers.x, config, error_rate),
        z=create_decoder(code.stabilizers.z, config, error_rate),
    )


__all__ = [
    "CssDecoder",
    "DecoderConfig",
    "DecodingResult",
    "ErasureDecoder",
    "LinearDecoder",
    "MatchingDecoder",
    "SyndromeDecoder",
    "create_decoder",
    "create_decoders",
]
