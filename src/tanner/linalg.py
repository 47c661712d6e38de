"""
Binary Linear Algebra Module

Thin adapter over scipy.sparse and ldpc.mod2 giving the rest of the package
a single vocabulary for binary matrices and vectors over GF(2).

Matrices are canonical ``csr_matrix`` objects of dtype uint8 with every entry
reduced mod 2. Vectors are dense 1-D uint8 numpy arrays.
"""

from typing import Iterable, List, Sequence

import numpy as np
from scipy.sparse import csr_matrix, issparse
from scipy.sparse import hstack as sparse_hstack
from scipy.sparse import identity as sparse_identity
from scipy.sparse import kron as sparse_kron
from ldpc import mod2


def to_csr(matrix) -> csr_matrix:
    """
    Normalise a dense or sparse binary matrix.

    Parameters
    ----------
    matrix : array_like or sparse matrix
        Any 2-D matrix with integer entries. Entries are reduced mod 2, so
        duplicated sparse entries cancel.

    Returns
    -------
    csr_matrix
        Canonical uint8 CSR matrix with sorted indices and no stored zeros.
    """
    if issparse(matrix):
        matrix = csr_matrix(matrix, dtype=np.int64)
    else:
        matrix = np.asarray(matrix, dtype=np.int64)
        if matrix.ndim != 2:
            raise ValueError(f"expected a 2-D matrix, got shape {matrix.shape}")
        matrix = csr_matrix(matrix)
    matrix.sum_duplicates()
    matrix.data %= 2
    matrix.eliminate_zeros()
    matrix = matrix.astype(np.uint8)
    matrix.sort_indices()
    return matrix


def to_dense(matrix) -> np.ndarray:
    """Returns the matrix as a dense uint8 array."""
    if issparse(matrix):
        return to_csr(matrix).toarray().astype(np.uint8)
    return (np.asarray(matrix, dtype=np.int64) % 2).astype(np.uint8)


def binary_matrix(num_columns: int, rows: Sequence[Iterable[int]]) -> csr_matrix:
    """
    Builds a binary matrix from the positions of the ones in each row.

    >>> binary_matrix(3, [[0, 1], [1, 2]]).toarray()
    array([[1, 1, 0],
           [0, 1, 1]], dtype=uint8)
    """
    row_indices, col_indices = [], []
    for r, positions in enumerate(rows):
        for c in positions:
            if not 0 <= c < num_columns:
                raise ValueError(f"position {c} out of range for {num_columns} columns")
            row_indices.append(r)
            col_indices.append(c)
    data = np.ones(len(row_indices), dtype=np.int64)
    matrix = csr_matrix(
        (data, (row_indices, col_indices)), shape=(len(rows), num_columns)
    )
    return to_csr(matrix)


def binary_vector(length: int, positions: Iterable[int] = ()) -> np.ndarray:
    """Builds a binary vector with ones at the given positions."""
    vector = np.zeros(length, dtype=np.uint8)
    for position in positions:
        vector[position] ^= 1
    return vector


def zeros(num_rows: int, num_columns: int) -> csr_matrix:
    return csr_matrix((num_rows, num_columns), dtype=np.uint8)


def identity(size: int) -> csr_matrix:
    return sparse_identity(size, dtype=np.uint8, format="csr")


def kron(first, second) -> csr_matrix:
    """Kronecker product of two binary matrices."""
    return to_csr(sparse_kron(to_csr(first), to_csr(second), format="csr"))


def hstack(blocks) -> csr_matrix:
    """Horizontal concatenation of binary matrices with equal row counts."""
    return to_csr(sparse_hstack([to_csr(block) for block in blocks], format="csr"))


def mod2_matvec(matrix, vector) -> np.ndarray:
    """
    Product of a binary matrix with a binary vector.

    Raises
    ------
    ValueError
        If the vector length differs from the number of columns.
    """
    vector = np.asarray(vector)
    if vector.ndim != 1 or vector.shape[0] != matrix.shape[1]:
        raise ValueError(
            f"vector of length {vector.shape} incompatible with matrix of shape {matrix.shape}"
        )
    if issparse(matrix):
        matrix = csr_matrix(matrix, dtype=np.int64)
    else:
        matrix = np.asarray(matrix, dtype=np.int64)
    product = matrix @ vector.astype(np.int64)
    return (np.asarray(product).ravel() % 2).astype(np.uint8)


def mod2_matmul(first, second) -> csr_matrix:
    """Product of two binary matrices."""
    if first.shape[1] != second.shape[0]:
        raise ValueError(
            f"incompatible shapes {first.shape} and {second.shape}"
        )
    product = csr_matrix(to_csr(first), dtype=np.int64) @ csr_matrix(
        to_csr(second), dtype=np.int64
    )
    return to_csr(product)


def is_zero(value) -> bool:
    """Checks if a binary matrix or vector has no ones."""
    if issparse(value):
        return to_csr(value).nnz == 0
    return not np.any(np.asarray(value) % 2)


def support(vector) -> List[int]:
    """Positions of the ones of a binary vector."""
    return [int(i) for i in np.flatnonzero(np.asarray(vector) % 2)]


def weight(vector) -> int:
    return int(np.count_nonzero(np.asarray(vector) % 2))


def rank(matrix) -> int:
    """Rank over GF(2)."""
    matrix = to_csr(matrix)
    if matrix.nnz == 0:
        return 0
    return int(mod2.rank(matrix.toarray()))


def nullspace(matrix) -> csr_matrix:
    """
    Basis of the kernel of a binary matrix.

    Parameters
    ----------
    matrix : array_like or sparse matrix
        Matrix of shape (m, n).

    Returns
    -------
    csr_matrix
        Matrix of shape (k, n) whose rows span {v : matrix @ v = 0 mod 2}.
    """
    matrix = to_csr(matrix)
    num_columns = matrix.shape[1]
    if matrix.nnz == 0:
        return identity(num_columns)
    kernel = mod2.nullspace(matrix.toarray())
    if issparse(kernel):
        kernel = kernel.toarray()
    kernel = np.asarray(kernel)
    if kernel.size == 0:
        return zeros(0, num_columns)
    return to_csr(np.atleast_2d(kernel))
