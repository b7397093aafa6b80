"""Exceptions raised across subsystem boundaries.

The workflow core reports problems as data and raises nothing from this
module; only the dataset readers fail loudly, because a caller asking for
the text of a missing source has nothing sensible to fall back to.
"""


class SourceReadError(Exception):
    """Raised when the raw text of a dataset source cannot be produced.

    Attributes:
        reason: Short human-readable reason, e.g. "FileId not found".
    """

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason
