"""Algorithms — пять стратегий вычисления π.

- Machin-like: 16·arctan(1/5) − 4·arctan(1/239)
- Chudnovsky: гипергеометрический ряд, ~14.18 знаков на член
- BBP: ряд по степеням 1/16, извлечение hex-цифр
- Gauss–Legendre: AGM-итерация, квадратичная сходимость
- Spigot: ускоренный ряд Лейбница (baseline)
"""

from .base import BasePiAlgorithm, Computation
from .bbp import BBPAlgorithm, BBPConfig, hex_digit, hex_digits
from .chudnovsky import ChudnovskyAlgorithm, ChudnovskyConfig, required_terms
from .gauss_legendre import (
    GaussLegendreAlgorithm,
    GaussLegendreConfig,
    GaussLegendreState,
    arithmetic_geometric_mean,
)
from .machin_like import MachinLikeAlgorithm, MachinLikeConfig, arctan, arctan_reciprocal
from .selector import ALGORITHMS, available_algorithms, get_algorithm
from .spigot import SpigotAlgorithm, SpigotConfig, leibniz_partial_sum

__all__ = [
    "BasePiAlgorithm",
    "Computation",
    "BBPAlgorithm",
    "BBPConfig",
    "hex_digit",
    "hex_digits",
    "ChudnovskyAlgorithm",
    "ChudnovskyConfig",
    "required_terms",
    "GaussLegendreAlgorithm",
    "GaussLegendreConfig",
    "GaussLegendreState",
    "arithmetic_geometric_mean",
    "MachinLikeAlgorithm",
    "MachinLikeConfig",
    "arctan",
    "arctan_reciprocal",
    "ALGORITHMS",
    "available_algorithms",
    "get_algorithm",
    "SpigotAlgorithm",
    "SpigotConfig",
    "leibniz_partial_sum",
]
