class NormalizationError(Exception):
    """Custom exception for data normalization errors."""

    pass


class MissingFieldError(NormalizationError):
    """A required cell or value is absent; the row cannot be mapped."""

    pass
