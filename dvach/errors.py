"""
Exception hierarchy for the board client.

Fetch, decode and invariant failures are fatal: they are raised where they
occur and reported once by the command-line entry point.
"""


class DvachError(Exception):
    """Base exception for all client errors."""
    pass


class FetchFailure(DvachError):
    """Raised when a request fails at the transport level or returns non-2xx."""
    pass


class DecodeFailure(DvachError):
    """Raised when a response is not JSON or does not have the expected shape."""
    pass


class InvariantViolation(DvachError):
    """Raised when the API returns an empty structure that must be non-empty."""
    pass


class SelectionOutOfRange(DvachError, IndexError):
    """Raised when selecting a position outside the visible list entries."""

    def __init__(self, index: int, size: int):
        super().__init__(f"Selection index {index} out of range for {size} visible entries")
        self.index = index
        self.size = size
