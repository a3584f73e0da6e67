"""Exception types raised by the clustering engine."""


class StoreDensityError(ValueError):
    """Base class for all clustering and summarization failures."""


class InvalidParameterError(StoreDensityError):
    """Raised for out-of-range clustering parameters (``eps``, ``min_pts``)."""


class InvalidInputError(StoreDensityError):
    """Raised for malformed or empty inputs."""


class EmptyInputError(InvalidInputError):
    """Raised when the clusterer receives no points at all."""
