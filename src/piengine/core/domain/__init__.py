"""
Domain models and value objects.

Contains the algorithm tag and the request/result models.
"""

from piengine.core.domain.algorithm import AlgorithmType
from piengine.core.domain.request import PiResult, PrecisionRequest

__all__ = [
    "AlgorithmType",
    "PrecisionRequest",
    "PiResult",
]
