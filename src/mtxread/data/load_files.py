import logging

from mtxread.data.errors import MatrixMarketError
from mtxread.data.load import headerless_from_file
from mtxread.data.load_from_mtx import from_file, parse

logger = logging.getLogger("mtxread")


def load_matrix(path: str, banner: str = "auto", **options):
    """
    Load one matrix according to the configured banner mode.

    Args:
        path (str): Path to the matrix file.
        banner (str): "auto" detects the banner, "required" demands one and
            "none" reads a banner-less file, sparse if its size line has an
            nnz token.
        **options: ``scalar``, ``ndim`` and ``strict``.

    Returns:
        DenseMatrix or SparseMatrix: The parsed matrix.
    """
    if banner == "auto":
        return parse(path, **options)
    if banner == "required":
        return from_file(path, **options)
    if banner == "none":
        options.pop("strict", None)
        return headerless_from_file(path, **options)
    raise ValueError(f"Unknown banner mode {banner!r}")


def load_matrices(files: list, banner: str = "auto", **options) -> tuple:
    """
    Load every file, collecting failures instead of stopping at the first one.

    Args:
        files (list of str): Paths to the matrix files.
        banner (str): Banner mode, see ``load_matrix``.
        **options: ``scalar``, ``ndim`` and ``strict``.

    Returns:
        tuple: A tuple containing:
            - matrices (dict): path -> DenseMatrix or SparseMatrix for each file read.
            - failures (dict): path -> MatrixMarketError for each file that failed.
    """
    matrices = {}
    failures = {}
    for path in files:
        try:
            matrices[path] = load_matrix(path, banner, **options)
        except MatrixMarketError as e:
            failures[path] = e

    logger.info(f"Loaded {len(matrices)} of {len(files)} matrices.")
    return matrices, failures
