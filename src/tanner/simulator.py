"""
Error Correction Simulator

Monte Carlo estimation of the word error rate of classical and CSS codes
under their decoders.
"""

import logging
import time
from typing import Dict, List, Optional

import numpy as np

from . import linalg
from .base import LinearDecoder
from .code import LinearCode
from .css import as_operator, multiply
from .css_code import CssCode
from .decoder import DecoderConfig, create_decoders
from .noise import BinarySymmetricChannel, DepolarizingNoise

logger = logging.getLogger(__name__)

# Smallest prior handed to the decoders, so a zero error rate still gives finite LLRs.
BACKGROUND_ERROR = 1e-10


class _Simulator:
    """Shared sweep and reporting logic."""

    label = "Error Rate"

    def describe(self) -> List[str]:
        return []

    def run_point(self, error_rate: float, total_shots: int,
                  seed: Optional[int] = None) -> Dict[str, float]:
        raise NotImplementedError

    def run_experiment(
        self,
        error_rates: List[float],
        total_shots: int = 5000,
        verbose: bool = True,
        return_details: bool = False,
        seed: Optional[int] = None,
    ):
        """
        Run Monte Carlo simulation across multiple error rates.

        Parameters
        ----------
        error_rates : list of float
            List of error probabilities to test
        total_shots : int, default=5000
            Number of simulation shots per error rate
        verbose : bool, default=True
            Whether to print progress information
        return_details : bool, default=False
            Whether to return the full statistics of each point
        seed : int, optional
            Seed of the random generator shared by every point

        Returns
        -------
        dict
            If return_details=False: {p: wer}
            If return_details=True: {p: {"wer": float, "fails": int, "shots": int, "seconds": float}}
        """
        rng = np.random.default_rng(seed)
        if verbose:
            for line in self.describe():
                print(line)
            print(f"{self.label:<15} | {'Shots':<10} | {'Log Errors':<10} | {'WER':<10} | {'Time (s)':<10}")
            print("-" * 70)

        results = {}
        for p in error_rates:
            point = self.run_point(p, total_shots, seed=int(rng.integers(1_000_000_000)))
            if verbose:
                print(f"{p:<15.4f} | {point['shots']:<10} | {point['fails']:<10} | "
                      f"{point['wer']:<10.5f} | {point['seconds']:<10.2f}")
            results[p] = point if return_details else point["wer"]

        if verbose:
            print("\n--- SIMULATION COMPLETE ---")
        return results

    @staticmethod
    def _summary(fails: int, shots: int, start_time: float) -> Dict[str, float]:
        return {
            "wer": float(fails / shots) if shots else 0.0,
            "fails": int(fails),
            "shots": int(shots),
            "seconds": float(time.time() - start_time),
        }


class QuantumSimulator(_Simulator):
    """
    Word error rate of a CSS code under depolarizing noise.

    A shot fails when the residual error, the product of the sampled error
    and the correction, is not a product of stabilizers.

    Parameters
    ----------
    code : CssCode
        The quantum code to simulate
    config : DecoderConfig, optional
        Decoder configuration. If None, uses default settings.
    """

    label = "Depolarizing"

    def __init__(self, code: CssCode, config: DecoderConfig = None):
        self.code = code
        self.config = config or DecoderConfig()

    def describe(self) -> List[str]:
        return [
            f"--- {self.code!r} ---",
            f"Matrix Shapes: Hx {self.code.stabilizers.x.shape}, Hz {self.code.stabilizers.z.shape}",
            f"Decoder: {self.config.method} (max_iter = {self.config.max_iter})",
        ]

    def run_point(self, error_rate: float, total_shots: int,
                  seed: Optional[int] = None) -> Dict[str, float]:
        """
        Run a single depolarizing error rate point and return detailed stats.

        Each stabilizer type sees an error with probability 2p/3, which is
        the prior handed to the decoders.
        """
        rng = np.random.default_rng(seed)
        noise = DepolarizingNoise(error_rate)
        decoder = create_decoders(
            self.code, self.config, max(2 * error_rate / 3, BACKGROUND_ERROR)
        )
        start_time = time.time()
        fails = 0
        for _ in range(total_shots):
            error = as_operator(self.code.random_error(noise, rng))
            correction = decoder.correction_for(self.code.syndrome_of(error))
            if not self.code.has_stabilizer(multiply(error, correction)):
                fails += 1
        logger.debug("p = %s: %d failures in %d shots", error_rate, fails, total_shots)
        return self._summary(fails, total_shots, start_time)


class ClassicalSimulator(_Simulator):
    """
    Word error rate of a linear code under the binary symmetric channel.

    A shot fails when the correction differs from the sampled error.

    Parameters
    ----------
    code : LinearCode
        The classical code to simulate
    decoder : LinearDecoder
        Decoder bound to the parity check matrix of the code
    """

    label = "Flip Rate"

    def __init__(self, code: LinearCode, decoder: LinearDecoder):
        self.code = code
        self.decoder = decoder

    def describe(self) -> List[str]:
        return [f"--- {self.code!r} ---", f"Decoder: {self.decoder}"]

    def run_point(self, error_rate: float, total_shots: int,
                  seed: Optional[int] = None) -> Dict[str, float]:
        """Run a single binary symmetric channel point and return detailed stats."""
        rng = np.random.default_rng(seed)
        noise = BinarySymmetricChannel(error_rate)
        start_time = time.time()
        fails = 0
        for _ in range(total_shots):
            error = self.code.random_error(noise, rng)
            correction = self.decoder.correction_for(self.code.syndrome_of(error))
            if not linalg.is_zero(np.bitwise_xor(error, correction)):
                fails += 1
        logger.debug("p = %s: %d failures in %d shots", error_rate, fails, total_shots)
        return self._summary(fails, total_shots, start_time)
