"""
Spigot Baseline — ускоренный ряд Лейбница

ФОРМУЛЫ:
    Лейбниц:  π/4 = Σ_{n≥0} (−1)^n / (2n+1)            — O(1/n), ~10^d членов на d знаков
    Эйлер:    π   = 2 · Σ_{k≥0} k! / (2k+1)!!          — преобразование Эйлера того же ряда
              t_0 = 1,  t_k = t_{k−1} · k / (2k+1)     — отношение → 1/2, ~0.3 знака на член

Базовая линия для сравнения: сходится медленнее всех остальных алгоритмов
и поэтому получает самый большой guard (+20). Это не извлечение цифр
по одной, несмотря на название.

Сырая сумма Лейбница доступна через leibniz_partial_sum и используется
в estimate(): её плохое масштабирование — свойство бенчмарка, а не дефект.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from decimal import Decimal

from piengine.algorithms.base import BasePiAlgorithm, Computation
from piengine.core.domain.algorithm import AlgorithmType
from piengine.core.errors import InvalidArgument
from piengine.core.math.arbitrary_precision import divide, multiply
from piengine.core.math.precision import (
    DEFAULT_CONVERGENCE_MARGIN,
    ConvergencePolicy,
    WorkingContext,
)
from piengine.core.math.series import SeriesAccumulator, summate

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class SpigotConfig:
    """Конфигурация spigot baseline."""

    guard_digits: int = 20
    convergence_margin: int = DEFAULT_CONVERGENCE_MARGIN
    max_terms_factor: int = 8  # лимит членов = factor × precision


# =============================================================================
# РЯД ЛЕЙБНИЦА
# =============================================================================


def leibniz_term(n: int, context: WorkingContext) -> Decimal:
    """(−1)^n / (2n+1)."""
    if isinstance(n, bool) or not isinstance(n, int) or n < 0:
        raise InvalidArgument(f"term index must be a non-negative int, got {n!r}")

    sign = -1 if n % 2 else 1
    return divide(sign, 2 * n + 1, context.decimal_context)


def leibniz_partial_sum(terms: int, context: WorkingContext) -> Decimal:
    """
    4 · Σ_{n<terms} (−1)^n / (2n+1) — сырая (неускоренная) оценка π.

    Ошибка порядка 1/terms.
    """
    if isinstance(terms, bool) or not isinstance(terms, int) or terms < 1:
        raise InvalidArgument(f"terms must be a positive int, got {terms!r}")

    accumulator = SeriesAccumulator(context)
    for n in range(terms):
        accumulator.fold(leibniz_term(n, context))
    return multiply(4, accumulator.seal(), context.decimal_context)


# =============================================================================
# УСКОРЕННЫЙ РЯД
# =============================================================================


def euler_accelerated_terms(context: WorkingContext) -> Iterator[Decimal]:
    """
    Члены 2 · k! / (2k+1)!! — преобразование Эйлера ряда Лейбница.

    Числитель и знаменатель ведутся в int, на член одно деление.
    """
    numerator = 1  # k!
    denominator = 1  # (2k+1)!!
    k = 0
    while True:
        yield divide(2 * numerator, denominator, context.decimal_context)
        k += 1
        numerator *= k
        denominator *= 2 * k + 1


# =============================================================================
# АЛГОРИТМ
# =============================================================================


class SpigotAlgorithm(BasePiAlgorithm):
    """Baseline: ускоренный по Эйлеру ряд Лейбница."""

    algorithm_type = AlgorithmType.SPIGOT
    default_estimate_iterations = 1_000_000

    def __init__(self, config: SpigotConfig | None = None):
        self.config = config or SpigotConfig()

    @property
    def guard_digits(self) -> int:
        return self.config.guard_digits

    def _compute(self, context: WorkingContext) -> Computation:
        accumulator = SeriesAccumulator(context)
        policy = ConvergencePolicy.for_context(context, margin=self.config.convergence_margin)

        summate(
            euler_accelerated_terms(context),
            accumulator,
            policy,
            max_terms=self.config.max_terms_factor * context.precision,
            series_name="spigot",
        )

        terms = accumulator.terms_folded
        logger.debug("spigot: %d accelerated terms for %d digits", terms, context.target_digits)

        pi = accumulator.seal()
        return Computation(value=accumulator.finish(pi), iterations=terms)

    def _estimate(self, iterations: int) -> float:
        pi = 0.0
        sign = 1.0
        for n in range(iterations):
            pi += sign / (2 * n + 1)
            sign = -sign
        return 4.0 * pi
