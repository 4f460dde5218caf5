import logging
import os
import re
from typing import IO, Any, Callable, List, Optional, Tuple, Union

from mtxread.data.errors import (
    EarlyBannerEndError,
    EarlyLineEndError,
    EarlySizesHeaderEndError,
    InvalidCoordinateError,
    InvalidNumError,
    MatrixMarketError,
    UnsupportedLayoutError,
    UnsupportedNumTypeError,
)
from mtxread.data.lines import (
    LineSource,
    find_first_record,
    is_banner,
    open_source,
    skip_comments,
)
from mtxread.data.matrix import (
    DenseMatrix,
    SparseMatrix,
    SymmetryKind,
    num_values,
    resolve_scalar,
)

logger = logging.getLogger("mtxread")

Matrix = Union[DenseMatrix, SparseMatrix]
Scalar = Union[str, Callable[[str], Any]]

SPARSE_LAYOUT = "coordinate"
DENSE_LAYOUT = "array"
# Field types accepted when the banner is checked strictly
REAL_FIELDS = ("real", "double", "integer")

_UNSIGNED = re.compile(r"\+?[0-9]+")


def _parse_unsigned(token: str) -> Optional[int]:
    if not _UNSIGNED.fullmatch(token):
        return None
    return int(token)


def parse_scalar(token: str, scalar: Callable[[str], Any], line_no: int = None) -> Any:
    try:
        return scalar(token)
    except (ValueError, TypeError, ArithmeticError) as e:
        raise InvalidNumError(token, line_no) from e


def parse_banner(
    line: str, strict: bool = False, line_no: int = 1
) -> Tuple[bool, SymmetryKind]:
    """
    Parse the ``%%MatrixMarket`` banner line.

    Example: ``%%MatrixMarket matrix coordinate real symmetric``

    The object type (tokens 0-1) and the field type (token 3) are ignored
    unless ``strict`` is set; the scalar type chosen by the caller decides how
    values are read.

    Args:
        line (str): The banner line.
        strict (bool): Reject layouts other than coordinate/array and field
            types other than real/double/integer.
        line_no (int): Line number used in error messages.

    Returns:
        tuple: ``(is_sparse, symmetry)``.
    """
    tokens = line.split()
    if len(tokens) < 5:
        missing = ("layout", "field type", "symmetry")[max(len(tokens) - 2, 0)]
        raise EarlyBannerEndError(f"Banner ends before the {missing}", line_no)

    layout, field, symmetry = (t.lower() for t in tokens[2:5])
    if strict:
        if layout not in (SPARSE_LAYOUT, DENSE_LAYOUT):
            raise UnsupportedLayoutError(tokens[2], line_no)
        if field not in REAL_FIELDS:
            raise UnsupportedNumTypeError(tokens[3], line_no)

    return layout == SPARSE_LAYOUT, SymmetryKind.from_token(tokens[4], line_no)


def parse_sizes(
    line: str, ndim: int = 2, line_no: int = None
) -> Tuple[Tuple[int, ...], Optional[int]]:
    """
    Parse the size line: ``ndim`` dimensions, optionally followed by the nnz count.

    Returns:
        tuple: ``(dims, nnz)`` where ``nnz`` is None if the line has no such token.
    """
    tokens = line.split()
    if len(tokens) < ndim:
        raise EarlySizesHeaderEndError(
            f"Expected {ndim} dimensions, got {len(tokens)} token(s)", line_no
        )

    sizes = []
    for token in tokens[: ndim + 1]:
        size = _parse_unsigned(token)
        if size is None:
            raise InvalidNumError(token, line_no)
        sizes.append(size)

    dims = tuple(sizes[:ndim])
    if 0 in dims:
        raise EarlySizesHeaderEndError(
            f"Dimensions must be strictly positive, got {dims}", line_no
        )
    nnz = sizes[ndim] if len(sizes) > ndim else None
    return dims, nnz


def parse_dense_body(
    source: LineSource, dims: Tuple[int, ...], scalar: Callable[[str], Any]
) -> list:
    """Read ``prod(dims)`` lines of one value each, in file (column-major) order."""
    values = []
    for _ in range(num_values(dims)):
        line = source.require_line("dense values")
        values.append(parse_scalar(line.strip(), scalar, source.line_no))
    return values


def parse_sparse_body(
    source: LineSource, nnz: int, ndim: int, scalar: Callable[[str], Any]
) -> Tuple[List[Tuple[int, ...]], list]:
    """
    Read ``nnz`` coordinate lines ``i_1 ... i_ndim value``.

    Coordinates are 1-based in the file and returned 0-based.
    """
    coordinates = []
    values = []
    for _ in range(nnz):
        line = source.require_line("sparse entries")
        tokens = line.split()
        if len(tokens) < ndim + 1:
            raise EarlyLineEndError(
                f"Expected {ndim} coordinates and a value, got {len(tokens)} token(s)",
                source.line_no,
            )
        coordinate = []
        for token in tokens[:ndim]:
            index = _parse_unsigned(token)
            # 0 is not a valid 1-based index
            if not index:
                raise InvalidCoordinateError(token, source.line_no)
            coordinate.append(index - 1)
        coordinates.append(tuple(coordinate))
        values.append(parse_scalar(tokens[-1], scalar, source.line_no))
    return coordinates, values


def read_matrix(
    source: LineSource,
    sizes_line: str,
    is_sparse: bool,
    symmetry: SymmetryKind,
    scalar: Callable[[str], Any],
    ndim: int,
) -> Matrix:
    """Parse the size line, then the dense or coordinate body that follows it."""
    dims, nnz = parse_sizes(sizes_line, ndim, source.line_no)
    logger.debug(f"Sizes of {source.name}: dims={dims}, nnz={nnz}")

    if not is_sparse:
        values = parse_dense_body(source, dims, scalar)
        logger.debug(f"Read {len(values)} dense values from {source.name}")
        return DenseMatrix(dims, values, symmetry)

    if nnz is None:
        raise EarlySizesHeaderEndError(
            "Coordinate matrix size line lacks the number of entries",
            source.line_no,
        )
    coordinates, values = parse_sparse_body(source, nnz, ndim, scalar)
    logger.debug(f"Read {len(values)} sparse entries from {source.name}")
    return SparseMatrix(dims, coordinates, values, symmetry)


def _read_with_banner(
    source: LineSource, banner: str, scalar: Callable[[str], Any], ndim: int, strict: bool
) -> Matrix:
    is_sparse, symmetry = parse_banner(banner, strict, source.line_no)
    logger.debug(
        f"Banner of {source.name}: {'sparse' if is_sparse else 'dense'}, {symmetry.value}"
    )
    sizes_line = skip_comments(source, "size line")
    return read_matrix(source, sizes_line, is_sparse, symmetry, scalar, ndim)


def check_ndim(ndim: int) -> None:
    if not isinstance(ndim, int) or ndim < 1:
        raise ValueError(f"ndim must be a positive integer, got {ndim!r}")


def _from_source(
    source: LineSource, scalar: Scalar, ndim: int, strict: bool
) -> Matrix:
    check_ndim(ndim)
    banner = find_first_record(source)
    if not is_banner(banner):
        raise EarlyBannerEndError("Missing %%MatrixMarket banner", source.line_no)
    return _read_with_banner(source, banner, resolve_scalar(scalar), ndim, strict)


def from_reader(
    stream: IO, scalar: Scalar = float, ndim: int = 2, strict: bool = False
) -> Matrix:
    """
    Read a Matrix Market matrix, banner included, from an open stream.

    Args:
        stream (IO): Text or binary stream positioned at the start of the file.
        scalar (str or callable): Parser for values, e.g. ``float``, ``int``,
            ``numpy.float32`` or a name from ``SCALAR_TYPES``.
        ndim (int): Number of dimensions of the matrix.
        strict (bool): Validate the banner's layout and field type.

    Returns:
        DenseMatrix or SparseMatrix: The parsed matrix.

    Raises:
        MatrixMarketError: On any malformed input; no partial matrix is returned.
    """
    return _from_source(LineSource(stream), scalar, ndim, strict)


def from_file(
    path: Union[str, os.PathLike],
    scalar: Scalar = float,
    ndim: int = 2,
    strict: bool = False,
) -> Matrix:
    """Read a Matrix Market file from ``path``. See ``from_reader``."""
    logger.debug(f"Loading Matrix Market file {path}...")
    try:
        with open_source(path) as source:
            matrix = _from_source(source, scalar, ndim, strict)
    except MatrixMarketError as e:
        logger.error(f"Error reading Matrix Market file {path}: {e}")
        raise
    logger.debug("DONE")
    return matrix


def parse(
    path_or_stream: Union[str, os.PathLike, IO],
    scalar: Scalar = float,
    ndim: int = 2,
    strict: bool = False,
) -> Matrix:
    """
    Read a matrix from a path or stream, with or without a banner.

    Files starting with a ``%%MatrixMarket`` banner are read as such. Otherwise
    the first substantive line is the size line: ``ndim`` sizes mean a dense
    matrix, an extra nnz token means a coordinate matrix. Banner-less matrices
    are always ``GENERAL``.

    Args:
        path_or_stream: File path or open stream.
        scalar (str or callable): Parser for values.
        ndim (int): Number of dimensions of the matrix.
        strict (bool): Validate the banner's layout and field type.

    Returns:
        DenseMatrix or SparseMatrix: The parsed matrix.
    """
    check_ndim(ndim)
    scalar = resolve_scalar(scalar)
    logger.debug(f"Loading matrix from {path_or_stream}...")
    try:
        with open_source(path_or_stream) as source:
            first = find_first_record(source)
            if is_banner(first):
                matrix = _read_with_banner(source, first, scalar, ndim, strict)
            else:
                is_sparse = len(first.split()) > ndim
                matrix = read_matrix(
                    source, first, is_sparse, SymmetryKind.GENERAL, scalar, ndim
                )
    except MatrixMarketError as e:
        logger.error(f"Error reading matrix from {path_or_stream}: {e}")
        raise
    logger.debug("DONE")
    return matrix
