"""Errors raised by the AEAD constructions in this package."""


class AeadError(Exception):
    """Raised when an AEAD operation fails, e.g. on tag mismatch or bad input."""

    def __init__(self, message: str = "aead operation failed") -> None:
        super().__init__(message)