import contextlib
import logging
import os
from typing import IO, Iterator, Optional, Union

from mtxread.data.errors import EarlyEOFError, MtxIOError

logger = logging.getLogger("mtxread")

COMMENT_MARKER = "%"
BANNER_MARKER = "%%matrixmarket"


class LineSource:
    """
    Pulls raw lines from a text or binary stream one at a time.

    Binary lines are decoded as UTF-8. End of input is detected by an empty
    read, so a truncated last line is still returned.

    Args:
        stream (IO): Readable stream with a ``readline`` method.
        name (str, optional): Name used in log messages.
    """

    def __init__(self, stream: IO, name: str = None):
        self.stream = stream
        self.name = name or getattr(stream, "name", "<stream>")
        self.line_no = 0

    def next_line(self) -> Optional[str]:
        """Return the next line without its line terminator, or None at end of input."""
        try:
            raw = self.stream.readline()
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise MtxIOError(f"Failed to read {self.name}: {e}", self.line_no + 1) from e
        if not raw:
            return None
        self.line_no += 1
        return raw.rstrip("\r\n")

    def require_line(self, stage: str) -> str:
        line = self.next_line()
        if line is None:
            raise EarlyEOFError(
                f"Unexpected end of file while reading {stage}", self.line_no + 1
            )
        return line


def is_comment(line: str) -> bool:
    return line.lstrip().startswith(COMMENT_MARKER)


def is_banner(line: str) -> bool:
    tokens = line.split(maxsplit=1)
    return bool(tokens) and tokens[0].lower() == BANNER_MARKER


def skip_comments(source: LineSource, stage: str) -> str:
    """
    Skip comment and blank lines and return the first substantive line.

    Args:
        source (LineSource): Line source positioned anywhere in the file.
        stage (str): What the caller is looking for, used in the EOF error.

    Returns:
        str: The first line that is neither blank nor a comment.

    Raises:
        EarlyEOFError: If the input is exhausted first.
    """
    while True:
        line = source.require_line(stage)
        if line.strip() and not is_comment(line):
            return line


def find_first_record(source: LineSource) -> str:
    """
    Return the banner, or the first substantive line if the file has no banner.

    Blank lines and ``%`` comments before it are skipped, including ``%%`` lines
    whose first token is not ``%%MatrixMarket``.
    """
    while True:
        line = source.next_line()
        if line is None:
            raise EarlyEOFError(
                "File is empty (or contains only comments)", source.line_no + 1
            )
        if is_banner(line):
            return line
        if line.strip() and not is_comment(line):
            return line


@contextlib.contextmanager
def open_source(path_or_stream: Union[str, os.PathLike, IO]) -> Iterator[LineSource]:
    """
    Yield a LineSource over a path or an already open stream.

    A path is opened here and closed on every exit path; a stream belongs to
    the caller and is left open.
    """
    if hasattr(path_or_stream, "readline"):
        yield LineSource(path_or_stream)
        return

    path = os.fspath(path_or_stream)
    try:
        f = open(path, "r", encoding="utf-8")
    except OSError as e:
        raise MtxIOError(f"Failed to open {path}: {e}") from e
    with f:
        logger.debug(f"Opened {path}")
        yield LineSource(f, name=path)
