"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .decision import (
    DecisionNotFoundException,
    InvalidLoanRequestException,
)
from .configuration import InvalidConfigurationException

__all__ = [
    "DomainException",
    "DecisionNotFoundException",
    "InvalidLoanRequestException",
    "InvalidConfigurationException",
]
