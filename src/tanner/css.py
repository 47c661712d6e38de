"""
X/Z pairs.

A ``Css`` holds one value for each Pauli type: stabilizer matrices,
logical matrices, decoders, syndromes or the two binary parts of an
operator. A CSS operator stores its X part and Z part as uint8 vectors;
a Y on a qubit is a one in both parts.
"""

from typing import Any, Callable, NamedTuple

import numpy as np
import stim


class Css(NamedTuple):
    x: Any
    z: Any


def map_css(func: Callable, pair: Css) -> Css:
    return Css(func(pair.x), func(pair.z))


def zip_css(first: Css, second: Css) -> Css:
    """Pairs two Css values component-wise: Css((a.x, b.x), (a.z, b.z))."""
    return Css((first.x, second.x), (first.z, second.z))


def swap_xz(pair: Css) -> Css:
    return Css(pair.z, pair.x)


def both(predicate: Callable[[Any], bool], pair: Css) -> bool:
    return bool(predicate(pair.x)) and bool(predicate(pair.z))


def is_trivial(syndrome: Css) -> bool:
    """Checks if both parts of a syndrome are zero."""
    return both(lambda part: not np.any(part), syndrome)


def operator_from_pauli(pauli: stim.PauliString) -> Css:
    """Binary (x part, z part) representation of a Pauli operator."""
    xs, zs = pauli.to_numpy()
    return Css(xs.astype(np.uint8), zs.astype(np.uint8))


def operator_to_pauli(operator: Css) -> stim.PauliString:
    """Pauli operator with X, Y or Z wherever the x and z parts are set."""
    xs = np.asarray(operator.x, dtype=np.uint8) % 2
    zs = np.asarray(operator.z, dtype=np.uint8) % 2
    if xs.shape != zs.shape:
        raise ValueError(f"x part {xs.shape} and z part {zs.shape} differ in length")
    return stim.PauliString("".join("_XZY"[x + 2 * z] for x, z in zip(xs, zs)))


def as_operator(operator) -> Css:
    """Accepts either a ``stim.PauliString`` or a Css pair of binary vectors."""
    if isinstance(operator, stim.PauliString):
        return operator_from_pauli(operator)
    return Css(np.asarray(operator.x, dtype=np.uint8), np.asarray(operator.z, dtype=np.uint8))


def multiply(first: Css, second: Css) -> Css:
    """Product of two operators, up to a phase."""
    return Css(
        np.bitwise_xor(first.x, second.x).astype(np.uint8),
        np.bitwise_xor(first.z, second.z).astype(np.uint8),
    )
