import logging
import os
from typing import IO, Optional, Union

from mtxread.data.errors import MatrixMarketError
from mtxread.data.lines import LineSource, open_source, skip_comments
from mtxread.data.load_from_mtx import Matrix, Scalar, check_ndim, read_matrix
from mtxread.data.matrix import DenseMatrix, SparseMatrix, SymmetryKind, resolve_scalar

logger = logging.getLogger("mtxread")

# Loaders for banner-less files whose first non-comment line holds the sizes:
#
#   10 11 2        <- rows cols nnz
#   1 1 0.42
#   6 2 0.7


def _read_headerless(
    source: LineSource, is_sparse: Optional[bool], scalar: Scalar, ndim: int
) -> Matrix:
    check_ndim(ndim)
    sizes_line = skip_comments(source, "size line")
    if is_sparse is None:
        is_sparse = len(sizes_line.split()) > ndim
    return read_matrix(
        source, sizes_line, is_sparse, SymmetryKind.GENERAL, resolve_scalar(scalar), ndim
    )


def dense_from_reader(stream: IO, scalar: Scalar = float, ndim: int = 2) -> DenseMatrix:
    return _read_headerless(LineSource(stream), False, scalar, ndim)


def sparse_from_reader(stream: IO, scalar: Scalar = float, ndim: int = 2) -> SparseMatrix:
    return _read_headerless(LineSource(stream), True, scalar, ndim)


def _load(
    path: Union[str, os.PathLike], is_sparse: Optional[bool], scalar: Scalar, ndim: int
) -> Matrix:
    kind = {None: "banner-less", True: "sparse", False: "dense"}[is_sparse]
    logger.debug(f"Loading {kind} matrix from {path}...")
    try:
        with open_source(path) as source:
            matrix = _read_headerless(source, is_sparse, scalar, ndim)
    except MatrixMarketError as e:
        logger.error(f"Error reading {kind} matrix file {path}: {e}")
        raise
    logger.debug("DONE")
    return matrix


def dense_from_file(
    path: Union[str, os.PathLike], scalar: Scalar = float, ndim: int = 2
) -> DenseMatrix:
    """
    Load a banner-less dense matrix.

    Args:
        path (str): Path to the file.
        scalar (str or callable): Parser for values.
        ndim (int): Number of dimensions.

    Returns:
        DenseMatrix: Values in file (column-major) order, symmetry GENERAL.
    """
    return _load(path, False, scalar, ndim)


def sparse_from_file(
    path: Union[str, os.PathLike], scalar: Scalar = float, ndim: int = 2
) -> SparseMatrix:
    """
    Load a banner-less coordinate matrix. The size line must end with the nnz count.

    Args:
        path (str): Path to the file.
        scalar (str or callable): Parser for values.
        ndim (int): Number of dimensions.

    Returns:
        SparseMatrix: 0-based coordinates and values, symmetry GENERAL.
    """
    return _load(path, True, scalar, ndim)


def headerless_from_file(
    path: Union[str, os.PathLike], scalar: Scalar = float, ndim: int = 2
) -> Matrix:
    """Load a banner-less matrix, sparse if the size line carries an nnz count."""
    return _load(path, None, scalar, ndim)
