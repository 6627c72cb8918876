"""
Error kinds for the Banker's Algorithm core.

All errors are local and synchronous. A denied request is never an error;
see algorithms.avoidance for request outcomes.
"""


class BankerError(Exception):
    """Base class for malformed-input errors raised by the core."""
    pass


class InvalidDimensionError(BankerError, ValueError):
    """Raised when process or resource counts are negative or missing."""
    pass


class IndexOutOfRangeError(BankerError, IndexError):
    """Raised when a process index falls outside [0, P)."""
    pass


class DimensionMismatchError(BankerError, ValueError):
    """Raised when a vector or matrix does not match the state's shape."""
    pass


class MalformedStateError(BankerError, ValueError):
    """Raised when an imported payload fails structural or type validation."""
    pass
