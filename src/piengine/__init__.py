"""
piengine — вычисление π с произвольной точностью.

Пять классических алгоритмов за единым контрактом:
- Machin-like (arctan series)
- Chudnovsky (гипергеометрический ряд)
- Bailey–Borwein–Plouffe (BBP)
- Gauss–Legendre (AGM iteration)
- Spigot baseline (accelerated Leibniz)

Usage:
    >>> from piengine import compute_pi, AlgorithmType
    >>> compute_pi(10, AlgorithmType.MACHIN_LIKE)
    Decimal('3.1415926536')
"""

from piengine.algorithms.selector import (
    available_algorithms,
    compute,
    compute_pi,
    compute_pi_str,
    get_algorithm,
)
from piengine.core.domain.algorithm import AlgorithmType
from piengine.core.domain.request import PiResult, PrecisionRequest
from piengine.core.errors import (
    ConvergenceFailure,
    DivisionByZero,
    InvalidArgument,
    PiEngineError,
    UnsupportedOperation,
)

__all__ = [
    "AlgorithmType",
    "PrecisionRequest",
    "PiResult",
    "available_algorithms",
    "compute",
    "compute_pi",
    "compute_pi_str",
    "get_algorithm",
    "PiEngineError",
    "InvalidArgument",
    "DivisionByZero",
    "UnsupportedOperation",
    "ConvergenceFailure",
]
