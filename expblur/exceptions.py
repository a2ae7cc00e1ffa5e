"""Exception classes for expblur."""


class ExpBlurError(Exception):
    """Base exception for expblur errors."""

    pass


class InvalidBufferError(ExpBlurError, ValueError):
    """Raised when a pixel buffer does not match its declared dimensions."""

    pass


class InvalidPrecisionError(ExpBlurError, ValueError):
    """Raised when aprec or zprec lies outside the supported range."""

    pass


class InvalidRadiusError(ExpBlurError, ValueError):
    """Raised when the blur radius is not a finite real number."""

    pass
