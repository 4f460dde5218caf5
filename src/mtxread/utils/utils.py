import numpy as np


def describe(matrix) -> str:
    """
    One-line summary of a parsed matrix.

    Args:
        matrix (DenseMatrix or SparseMatrix): The parsed matrix.

    Returns:
        str: e.g. ``"sparse 5x5, nnz=7, symmetric, values in [1, 7]"``.
    """
    kind = "sparse" if matrix.is_sparse else "dense"
    dims = "x".join(str(d) for d in matrix.dims)
    parts = [f"{kind} {dims}"]
    if matrix.is_sparse:
        parts.append(f"nnz={matrix.nnz}")
    parts.append(matrix.symmetry.value)
    if len(matrix.values):
        values = np.asarray(matrix.values)
        parts.append(f"values in [{values.min()}, {values.max()}]")
    return ", ".join(parts)
