class InvalidInputError(ValueError):
    """Raised when a request cannot be turned into a meaningful layout."""


class DatasetError(ValueError):
    """Raised when static reference data is malformed or breaks an invariant."""
