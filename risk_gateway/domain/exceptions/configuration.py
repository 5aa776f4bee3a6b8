"""Configuration-related domain exceptions."""

from .base import DomainException


class InvalidConfigurationException(DomainException):
    """
    Raised when the active loan settings violate their invariants.

    A decision is never made against an invalid snapshot.
    """

    def __init__(self, message: str):
        super().__init__(
            message=f"Invalid loan settings: {message}",
            code="INVALID_CONFIGURATION",
        )
