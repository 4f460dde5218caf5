import enum
import math
from dataclasses import dataclass
from typing import Any, Callable, Tuple, Union

import numpy as np
from scipy.sparse import coo_matrix

from mtxread.data.errors import UnsupportedSymmetryError

# Scalar parsers selectable by name from the config file
SCALAR_TYPES = {
    "float": float,
    "int": int,
    "float32": np.float32,
    "float64": np.float64,
    "int32": np.int32,
    "int64": np.int64,
}


def resolve_scalar(scalar: Union[str, Callable[[str], Any]]) -> Callable[[str], Any]:
    """
    Turn a scalar type name (e.g. "float32") into the callable that parses a token.

    Callables are returned unchanged.
    """
    if callable(scalar):
        return scalar
    try:
        return SCALAR_TYPES[scalar]
    except KeyError as e:
        raise ValueError(
            f"Unknown scalar type {scalar!r}, expected one of {sorted(SCALAR_TYPES)}"
        ) from e


class SymmetryKind(enum.Enum):
    GENERAL = "general"
    SYMMETRIC = "symmetric"

    @classmethod
    def from_token(cls, token: str, line_no: int = None) -> "SymmetryKind":
        try:
            return cls(token.lower())
        except ValueError as e:
            raise UnsupportedSymmetryError(token, line_no) from e


@dataclass(frozen=True)
class DenseMatrix:
    """
    Dense matrix stored as a flat tuple of values in column-major order.

    Attributes:
        dims (tuple): Size along each dimension.
        values (tuple): ``prod(dims)`` values, first index varying fastest.
        symmetry (SymmetryKind): Symmetry declared in the banner.
    """

    dims: Tuple[int, ...]
    values: Tuple[Any, ...]
    symmetry: SymmetryKind = SymmetryKind.GENERAL

    is_sparse = False

    def __post_init__(self):
        object.__setattr__(self, "dims", tuple(self.dims))
        object.__setattr__(self, "values", tuple(self.values))

    @property
    def ndim(self) -> int:
        return len(self.dims)

    @property
    def shape(self) -> Tuple[int, ...]:
        return tuple(self.dims)

    def __len__(self) -> int:
        return len(self.values)

    def to_numpy(self, dtype=None) -> np.ndarray:
        """Return the values as an ndarray of shape ``dims``."""
        return np.asarray(self.values, dtype=dtype).reshape(self.dims, order="F")


@dataclass(frozen=True)
class SparseMatrix:
    """
    Sparse matrix in coordinate format.

    Attributes:
        dims (tuple): Size along each dimension.
        coordinates (tuple of tuple): 0-based index of each stored entry.
        values (tuple): Value of each stored entry, aligned with ``coordinates``.
        symmetry (SymmetryKind): Symmetry declared in the banner. For symmetric
            matrices only one triangle is stored.
    """

    dims: Tuple[int, ...]
    coordinates: Tuple[Tuple[int, ...], ...]
    values: Tuple[Any, ...]
    symmetry: SymmetryKind = SymmetryKind.GENERAL

    is_sparse = True

    def __post_init__(self):
        object.__setattr__(self, "dims", tuple(self.dims))
        object.__setattr__(
            self, "coordinates", tuple(tuple(c) for c in self.coordinates)
        )
        object.__setattr__(self, "values", tuple(self.values))

    @property
    def ndim(self) -> int:
        return len(self.dims)

    @property
    def shape(self) -> Tuple[int, ...]:
        return tuple(self.dims)

    @property
    def nnz(self) -> int:
        return len(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def entries(self, expand_symmetry: bool = False) -> Tuple[list, list]:
        """
        Return the coordinates and values as lists.

        Args:
            expand_symmetry (bool): If True and the matrix is symmetric, also
                return the mirror of every off-diagonal entry. 2-D only.
        """
        coordinates = list(self.coordinates)
        values = list(self.values)
        if expand_symmetry and self.symmetry is SymmetryKind.SYMMETRIC:
            if self.ndim != 2:
                raise ValueError(
                    f"Symmetry expansion needs a 2-dimensional matrix, got ndim={self.ndim}"
                )
            for (r, c), v in zip(self.coordinates, self.values):
                if r != c:
                    coordinates.append((c, r))
                    values.append(v)
        return coordinates, values

    def to_scipy(self, dtype=None, expand_symmetry: bool = False) -> coo_matrix:
        """
        Build a scipy COO matrix from the entries.

        Args:
            dtype (optional): dtype of the resulting matrix.
            expand_symmetry (bool): If True and the matrix is symmetric, also
                store the mirror of every off-diagonal entry.

        Returns:
            scipy.sparse.coo_matrix: Matrix of shape ``dims``.
        """
        if self.ndim != 2:
            raise ValueError(
                f"Only 2-dimensional matrices convert to scipy, got ndim={self.ndim}"
            )
        coordinates, values = self.entries(expand_symmetry)
        rows = [c[0] for c in coordinates]
        cols = [c[1] for c in coordinates]
        return coo_matrix(
            (np.asarray(values, dtype=dtype), (rows, cols)), shape=self.shape
        )

    def to_numpy(self, dtype=None, expand_symmetry: bool = False) -> np.ndarray:
        """Return a dense ndarray; duplicate coordinates are summed."""
        coordinates, values = self.entries(expand_symmetry)
        values = np.asarray(values, dtype=dtype)
        out = np.zeros(self.dims, dtype=values.dtype)
        if coordinates:
            index = tuple(np.asarray(coordinates, dtype=np.intp).T)
            np.add.at(out, index, values)
        return out


def num_values(dims: Tuple[int, ...]) -> int:
    return math.prod(dims)
