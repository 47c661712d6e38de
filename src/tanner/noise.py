"""
Noise Models

Samplers of random errors for classical and quantum codes. Every sampler
draws from an injected ``numpy.random.Generator`` so runs are reproducible
when the generator is seeded.
"""

from abc import ABC, abstractmethod

import numpy as np
import stim


def check_probability(probability: float) -> float:
    """
    Validates a probability.

    Raises
    ------
    ValueError
        If the probability is not between 0 and 1.
    """
    probability = float(probability)
    if not 0.0 <= probability <= 1.0:
        raise ValueError(f"probability {probability} is not between 0 and 1")
    return probability


class NoiseModel(ABC):
    """A sampler of random errors."""

    def __init__(self, probability: float):
        self.probability = check_probability(probability)

    @abstractmethod
    def sample_error_of_length(self, length: int, rng: np.random.Generator):
        """Generates a random error on ``length`` bits or qubits."""

    def _hits(self, length: int, rng: np.random.Generator) -> np.ndarray:
        return rng.random(length) < self.probability


class BinarySymmetricChannel(NoiseModel):
    """
    Flips each bit independently with the given probability.

    The sampled error is a uint8 vector with a one at each flipped bit.
    """

    def sample_error_of_length(self, length, rng):
        return self._hits(length, rng).astype(np.uint8)

    def __str__(self):
        return f"Binary symmetric channel (prob = {self.probability})"


class ErasureChannel(NoiseModel):
    """
    Erases each bit or qubit independently with the given probability.

    The sampled error is a uint8 mask with a one at each erased position.
    """

    def sample_error_of_length(self, length, rng):
        return self._hits(length, rng).astype(np.uint8)

    def __str__(self):
        return f"Erasure({self.probability})"


class DepolarizingNoise(NoiseModel):
    """
    Applies one of X, Y or Z, chosen uniformly, to each qubit hit with the
    given probability.

    The sampled error is a ``stim.PauliString``.
    """

    def sample_error_of_length(self, length, rng):
        hits = self._hits(length, rng)
        # 1 = X, 2 = Y, 3 = Z in stim's integer encoding.
        paulis = rng.integers(1, 4, size=length)
        error = stim.PauliString(length)
        for qubit in np.flatnonzero(hits):
            error[int(qubit)] = int(paulis[qubit])
        return error

    def __str__(self):
        return f"Depolarizing Noise (prob = {self.probability})"
