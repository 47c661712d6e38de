"""
Tanner: Low-Density Parity-Check and CSS Code Decoding Framework

Classical linear codes and quantum CSS codes built on sparse binary
matrices, together with bit-flip, belief propagation, matching and erasure
decoders, and a Monte Carlo simulator estimating their word error rates.
"""

__version__ = "0.1.0"

from .code import Edge, LinearCode
from .random_code import RandomRegularCode, SamplingError
from .noise import BinarySymmetricChannel, DepolarizingNoise, ErasureChannel
from .css import Css
from .css_code import CssCode, CssError, DifferentLengthsError, NonOrthogonalCodesError
from .flip import FlipDecoder
from .belief_propagation import BpDecoder
from .erasure import CssErasureDecoder
from .decoder import CssDecoder, DecoderConfig, MatchingDecoder, create_decoders
from .simulator import ClassicalSimulator, QuantumSimulator

__all__ = [
    "BinarySymmetricChannel",
    "BpDecoder",
    "ClassicalSimulator",
    "Css",
    "CssCode",
    "CssDecoder",
    "CssErasureDecoder",
    "CssError",
    "DecoderConfig",
    "DepolarizingNoise",
    "DifferentLengthsError",
    "Edge",
    "ErasureChannel",
    "FlipDecoder",
    "LinearCode",
    "MatchingDecoder",
    "NonOrthogonalCodesError",
    "QuantumSimulator",
    "RandomRegularCode",
    "SamplingError",
    "create_decoders",
]
