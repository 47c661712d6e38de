"""
CSS Code Construction Module

A quantum CSS code is defined from a pair of orthogonal linear codes. The
checks of the first code are the X stabilizers and the checks of the second
code are the Z stabilizers. Logical generators are derived from the
codewords of both codes (see ``tanner.logicals``).
"""

from typing import List, Union

import numpy as np
import stim

from . import linalg
from .code import LinearCode
from .css import Css, as_operator, is_trivial, operator_to_pauli
from .logicals import from_linear_codes


class CssError(ValueError):
    """Raised when two linear codes don't define a CSS code."""


class DifferentLengthsError(CssError):
    def __init__(self, x_length: int, z_length: int):
        self.x_length = x_length
        self.z_length = z_length
        super().__init__(f"different x and z lengths: {x_length} & {z_length}")


class NonOrthogonalCodesError(CssError):
    def __init__(self):
        super().__init__("codes are not orthogonal")


class CssCode:
    """
    A quantum CSS code.

    Parameters
    ----------
    stabilizers : Css
        X and Z stabilizer generators as binary matrices over the same qubits.
    logicals : Css
        X and Z logical generators; row i of ``logicals.x`` anticommutes with
        row i of ``logicals.z`` only.

    Examples
    --------
    >>> code = CssCode.steane_code()
    >>> len(code), code.num_x_logicals
    (7, 1)
    """

    def __init__(self, stabilizers: Css, logicals: Css):
        self.stabilizers = Css(linalg.to_csr(stabilizers.x), linalg.to_csr(stabilizers.z))
        self.logicals = Css(linalg.to_csr(logicals.x), linalg.to_csr(logicals.z))

    @classmethod
    def from_linear_codes(cls, x_code: LinearCode, z_code: LinearCode) -> "CssCode":
        """
        Builds the CSS code whose X stabilizers are the checks of ``x_code``
        and Z stabilizers the checks of ``z_code``.

        Raises
        ------
        DifferentLengthsError
            If the codes have different block sizes.
        NonOrthogonalCodesError
            If the parity check matrices are not orthogonal.
        """
        if len(x_code) != len(z_code):
            raise DifferentLengthsError(len(x_code), len(z_code))
        if not linalg.is_zero(
            linalg.mod2_matmul(x_code.parity_check_matrix, z_code.parity_check_matrix.T)
        ):
            raise NonOrthogonalCodesError()
        return cls(
            Css(x_code.parity_check_matrix, z_code.parity_check_matrix),
            from_linear_codes(x_code, z_code),
        )

    @classmethod
    def steane_code(cls) -> "CssCode":
        """Returns the Steane code, built from a pair of Hamming codes."""
        hamming_code = LinearCode.hamming_code()
        return cls.from_linear_codes(hamming_code, hamming_code)

    @classmethod
    def shor_code(cls) -> "CssCode":
        """Returns the 9 qubit Shor code."""
        return cls(
            Css(
                linalg.binary_matrix(9, [[0, 1, 2, 3, 4, 5], [3, 4, 5, 6, 7, 8]]),
                linalg.binary_matrix(
                    9, [[0, 1], [1, 2], [3, 4], [4, 5], [6, 7], [7, 8]]
                ),
            ),
            Css(
                linalg.binary_matrix(9, [[0, 1, 2]]),
                linalg.binary_matrix(9, [[0, 3, 6]]),
            ),
        )

    @classmethod
    def toric_code(cls, distance: int) -> "CssCode":
        """
        Returns the toric code with the given distance.

        It is the hypergraph product of the cyclic repetition code with
        itself and has ``2 * distance**2`` qubits.
        """
        if distance < 2:
            raise ValueError("distance must be >= 2 for toric code")
        checks = [[c, c + 1] for c in range(distance - 1)] + [[0, distance - 1]]
        code = LinearCode.from_parity_check_matrix(linalg.binary_matrix(distance, checks))
        return cls.hypergraph_product(code, code)

    @classmethod
    def hypergraph_product(cls, first_code: LinearCode, second_code: LinearCode) -> "CssCode":
        """
        Returns the hypergraph product of two linear codes.

        Hx = [I(n1) x H2 | H1^T x I(m2)]
        Hz = [H1 x I(n2) | I(m1) x H2^T]

        The product of the 3 bit repetition code with itself is a 13 qubit
        surface code.
        """
        h1 = first_code.parity_check_matrix
        h2 = second_code.parity_check_matrix
        x_checks = linalg.hstack([
            linalg.kron(linalg.identity(len(first_code)), h2),
            linalg.kron(h1.T, linalg.identity(second_code.number_of_checks)),
        ])
        z_checks = linalg.hstack([
            linalg.kron(h1, linalg.identity(len(second_code))),
            linalg.kron(linalg.identity(first_code.number_of_checks), h2.T),
        ])
        return cls.from_linear_codes(
            LinearCode.from_parity_check_matrix(x_checks),
            LinearCode.from_parity_check_matrix(z_checks),
        )

    def __len__(self) -> int:
        """Number of physical qubits."""
        return self.stabilizers.x.shape[1]

    @property
    def num_x_stabs(self) -> int:
        return self.stabilizers.x.shape[0]

    @property
    def num_z_stabs(self) -> int:
        return self.stabilizers.z.shape[0]

    @property
    def num_x_logicals(self) -> int:
        return self.logicals.x.shape[0]

    @property
    def num_z_logicals(self) -> int:
        return self.logicals.z.shape[0]

    def syndrome_of(self, operator: Union[stim.PauliString, Css]) -> Css:
        """
        Returns both parts of the syndrome of an operator.

        The X part is measured by the X stabilizers and thus detects the
        Z errors, and vice versa.

        Raises
        ------
        ValueError
            If the operator length differs from the number of qubits.
        """
        operator = as_operator(operator)
        return Css(
            linalg.mod2_matvec(self.stabilizers.x, operator.z),
            linalg.mod2_matvec(self.stabilizers.z, operator.x),
        )

    def has_logical(self, operator) -> bool:
        """Checks if an operator is a (potentially trivial) logical operator."""
        return is_trivial(self.syndrome_of(operator))

    def has_stabilizer(self, operator) -> bool:
        """Checks if an operator is a product of stabilizers."""
        operator = as_operator(operator)
        return (
            self.has_logical(operator)
            and linalg.is_zero(linalg.mod2_matvec(self.logicals.x, operator.z))
            and linalg.is_zero(linalg.mod2_matvec(self.logicals.z, operator.x))
        )

    def stabilizer_operators(self) -> List[stim.PauliString]:
        """X stabilizer generators followed by Z stabilizer generators."""
        return self._operators_from(self.stabilizers)

    def logical_operators(self) -> List[stim.PauliString]:
        """X logical generators followed by Z logical generators."""
        return self._operators_from(self.logicals)

    def _operators_from(self, matrices: Css) -> List[stim.PauliString]:
        zeros = np.zeros(len(self), dtype=np.uint8)
        x_rows = linalg.to_dense(matrices.x)
        z_rows = linalg.to_dense(matrices.z)
        return [operator_to_pauli(Css(row, zeros)) for row in x_rows] + [
            operator_to_pauli(Css(zeros, row)) for row in z_rows
        ]

    def random_error(self, noise_model, rng: np.random.Generator):
        """Samples an error on every qubit from the noise model."""
        return noise_model.sample_error_of_length(len(self), rng)

    def __repr__(self) -> str:
        return (
            f"CssCode(qubits={len(self)}, x_stabs={self.num_x_stabs}, "
            f"z_stabs={self.num_z_stabs}, logicals={self.num_x_logicals})"
        )
