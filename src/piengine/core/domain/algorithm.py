"""
AlgorithmType — закрытый набор алгоритмов вычисления π

Набор фиксирован: это не plugin-система. Каждому тегу соответствует
ровно одна реализация в piengine.algorithms.selector.
"""

from enum import Enum


class AlgorithmType(str, Enum):
    """Тег алгоритма"""

    MACHIN_LIKE = "machin_like"
    CHUDNOVSKY = "chudnovsky"
    BBP = "bbp"
    GAUSS_LEGENDRE = "gauss_legendre"
    SPIGOT = "spigot"
