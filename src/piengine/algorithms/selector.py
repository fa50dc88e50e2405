"""
Strategy Selector — выбор алгоритма по тегу

Набор реализаций закрыт и фиксирован: ровно пять стратегий,
каждая зарегистрирована под своим AlgorithmType. Ядро не зависит
от вызывающего кода; вызывающий код меняет алгоритм одним тегом.
"""

from decimal import Decimal
from typing import Final, Union

from piengine.algorithms.base import BasePiAlgorithm
from piengine.algorithms.bbp import BBPAlgorithm
from piengine.algorithms.chudnovsky import ChudnovskyAlgorithm
from piengine.algorithms.gauss_legendre import GaussLegendreAlgorithm
from piengine.algorithms.machin_like import MachinLikeAlgorithm
from piengine.algorithms.spigot import SpigotAlgorithm
from piengine.core.domain.algorithm import AlgorithmType
from piengine.core.domain.request import PiResult, PrecisionRequest
from piengine.core.errors import InvalidArgument

# Реестр стратегий: тег → класс
ALGORITHMS: Final[dict[AlgorithmType, type[BasePiAlgorithm]]] = {
    AlgorithmType.MACHIN_LIKE: MachinLikeAlgorithm,
    AlgorithmType.CHUDNOVSKY: ChudnovskyAlgorithm,
    AlgorithmType.BBP: BBPAlgorithm,
    AlgorithmType.GAUSS_LEGENDRE: GaussLegendreAlgorithm,
    AlgorithmType.SPIGOT: SpigotAlgorithm,
}

DEFAULT_ALGORITHM: Final[AlgorithmType] = AlgorithmType.CHUDNOVSKY

AlgorithmTag = Union[AlgorithmType, str]


def _resolve(tag: AlgorithmTag) -> AlgorithmType:
    if isinstance(tag, AlgorithmType):
        return tag
    try:
        return AlgorithmType(str(tag).lower())
    except ValueError:
        available = [t.value for t in AlgorithmType]
        raise InvalidArgument(f"Unknown algorithm: {tag!r}. Available: {available}") from None


def get_algorithm(tag: AlgorithmTag) -> BasePiAlgorithm:
    """
    Экземпляр стратегии по тегу (AlgorithmType или его строковое значение).

    Raises:
        InvalidArgument: если тег неизвестен

    Examples:
        >>> get_algorithm("bbp").algorithm_type
        <AlgorithmType.BBP: 'bbp'>
    """
    return ALGORITHMS[_resolve(tag)]()


def available_algorithms() -> list[AlgorithmType]:
    """Все зарегистрированные теги в порядке объявления."""
    return list(ALGORITHMS)


def compute_pi(target_digits: int, algorithm: AlgorithmTag = DEFAULT_ALGORITHM) -> Decimal:
    """π ровно до target_digits знаков выбранным алгоритмом."""
    return get_algorithm(algorithm).compute_pi(target_digits)


def compute_pi_str(target_digits: int, algorithm: AlgorithmTag = DEFAULT_ALGORITHM) -> str:
    """π строкой с фиксированной точкой."""
    return get_algorithm(algorithm).compute_pi_str(target_digits)


def compute(request: PrecisionRequest, algorithm: AlgorithmTag = DEFAULT_ALGORITHM) -> PiResult:
    """π по запросу точности с диагностикой."""
    return get_algorithm(algorithm).compute(request)
