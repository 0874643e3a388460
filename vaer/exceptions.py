"""Base exception for all vaer errors."""


class VaerError(Exception):
    """Base exception for all errors raised by the forecast pipeline."""

    pass
