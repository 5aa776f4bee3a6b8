"""Domain Entities - Core business objects."""

from .decision import DecisionRecord

__all__ = [
    "DecisionRecord",
]
