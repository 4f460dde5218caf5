class MatrixMarketError(ValueError):
    """Base class for every error raised while reading a Matrix Market file.

    Args:
        message (str): Human readable description of the problem.
        line_no (int, optional): 1-based line number the error refers to, if any.
    """

    def __init__(self, message: str, line_no: int = None):
        self.message = message
        self.line_no = line_no
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)


class MtxIOError(MatrixMarketError):
    """The underlying file or stream could not be read."""


class EarlyEOFError(MatrixMarketError):
    """Input ended before a required line was available."""


class EarlyBannerEndError(MatrixMarketError):
    """The banner line lacks the layout, field or symmetry token."""


class EarlyLineEndError(MatrixMarketError):
    """A coordinate body line has fewer tokens than ndim + 1."""


class EarlySizesHeaderEndError(MatrixMarketError):
    """The size line is missing tokens, or declares a zero dimension."""


class UnsupportedSymmetryError(MatrixMarketError):
    def __init__(self, token: str, line_no: int = None):
        self.token = token
        super().__init__(f"Unsupported symmetry {token!r}", line_no)


class UnsupportedNumTypeError(MatrixMarketError):
    def __init__(self, token: str, line_no: int = None):
        self.token = token
        super().__init__(f"Unsupported field type {token!r}", line_no)


class UnsupportedLayoutError(MatrixMarketError):
    def __init__(self, token: str, line_no: int = None):
        self.token = token
        super().__init__(f"Unsupported layout {token!r}", line_no)


class InvalidNumError(MatrixMarketError):
    def __init__(self, raw: str, line_no: int = None):
        self.raw = raw
        super().__init__(f"Invalid number {raw!r}", line_no)


class InvalidCoordinateError(MatrixMarketError):
    def __init__(self, raw: str, line_no: int = None):
        self.raw = raw
        super().__init__(f"Invalid coordinate {raw!r}, expected an integer >= 1", line_no)
