"""
Machin-like Formula — π через ряды arctan

ФОРМУЛЫ:
    π = 16·arctan(1/5) − 4·arctan(1/239)
    arctan(x) = Σ_{n≥0} (−1)^n · x^(2n+1) / (2n+1),  |x| < 1

Для x = 1/m член ряда считается через точный целый знаменатель:
    term_n = (−1)^n / ((2n+1) · m^(2n+1))
так что единственное округление на член — одно деление.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Знак члена строго (−1)^n: ошибка чередования даёт неверное π без падения,
   поэтому генерация членов тестируется отдельно от суммирования
2. Суммирование останавливается общей ConvergencePolicy
3. Лимит членов: max_terms_factor × precision для arctan(1/m);
   для arctan(x) лимит растёт с |x| (−2·log10|x| знаков на член)
   Превышение → ConvergenceFailure
"""

import logging
import math
from collections.abc import Iterator
from dataclasses import dataclass
from decimal import Decimal
from typing import Final, Optional

from piengine.algorithms.base import BasePiAlgorithm, Computation
from piengine.core.domain.algorithm import AlgorithmType
from piengine.core.errors import InvalidArgument
from piengine.core.math.arbitrary_precision import (
    ONE,
    divide,
    multiply,
    to_decimal,
)
from piengine.core.math.precision import (
    DEFAULT_CONVERGENCE_MARGIN,
    ConvergencePolicy,
    WorkingContext,
)
from piengine.core.math.series import SeriesAccumulator, summate

logger = logging.getLogger(__name__)

# Пары (коэффициент, m)
MACHIN_TERMS: Final[tuple[tuple[int, int], ...]] = ((16, 5), (-4, 239))


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class MachinLikeConfig:
    """Конфигурация Machin-like алгоритма."""

    guard_digits: int = 15
    convergence_margin: int = DEFAULT_CONVERGENCE_MARGIN
    max_terms_factor: int = 2  # лимит членов = factor × precision


# =============================================================================
# ГЕНЕРАЦИЯ ЧЛЕНОВ
# =============================================================================


def arctan_reciprocal_term(m: int, n: int, context: WorkingContext) -> Decimal:
    """
    n-й член ряда arctan(1/m): (−1)^n / ((2n+1) · m^(2n+1)).

    Examples:
        >>> arctan_reciprocal_term(5, 1, make_context(10))
        Decimal('-0.0026666666666666666667')
    """
    sign = -1 if n % 2 else 1
    return divide(sign, (2 * n + 1) * m ** (2 * n + 1), context.decimal_context)


def arctan_reciprocal_terms(m: int, context: WorkingContext) -> Iterator[Decimal]:
    """Бесконечный генератор членов arctan(1/m); степень m ведётся в int."""
    m_squared = m * m
    m_power = m
    n = 0
    while True:
        sign = -1 if n % 2 else 1
        yield divide(sign, (2 * n + 1) * m_power, context.decimal_context)
        m_power *= m_squared
        n += 1


def arctan_terms(x: Decimal, context: WorkingContext) -> Iterator[Decimal]:
    """Бесконечный генератор членов arctan(x) для произвольного |x| < 1."""
    ctx = context.decimal_context
    x_squared = multiply(x, x, ctx)
    x_power = x
    n = 0
    while True:
        term = divide(x_power, 2 * n + 1, ctx)
        yield term if n % 2 == 0 else term.copy_negate()
        x_power = multiply(x_power, x_squared, ctx)
        n += 1


# =============================================================================
# СУММИРОВАНИЕ
# =============================================================================


def _sum_arctan(
    terms: Iterator[Decimal],
    context: WorkingContext,
    config: MachinLikeConfig,
    series_name: str,
    max_terms: Optional[int] = None,
) -> tuple[Decimal, int]:
    accumulator = SeriesAccumulator(context)
    policy = ConvergencePolicy.for_context(context, margin=config.convergence_margin)
    summate(
        terms,
        accumulator,
        policy,
        max_terms=config.max_terms_factor * context.precision if max_terms is None else max_terms,
        series_name=series_name,
    )
    return accumulator.seal(), accumulator.terms_folded


def arctan_max_terms(x: Decimal, context: WorkingContext, config: MachinLikeConfig) -> int:
    """
    Лимит членов ряда arctan(x).

    Член n убывает как |x|^(2n+1), т.е. на −2·log10|x| знаков за член:
    для сходимости нужно ~(target + margin) / (−2·log10|x|) членов.
    Лимит — удвоенная оценка, но не меньше max_terms_factor × precision.

    Examples:
        >>> arctan_max_terms(Decimal("0.9"), make_context(10), MachinLikeConfig())
        328
    """
    base = config.max_terms_factor * context.precision
    magnitude = to_decimal(x).copy_abs()
    if magnitude.is_zero():
        return base

    digits_per_term = -2 * float(magnitude.log10(context.decimal_context))
    needed = math.ceil((context.target_digits + config.convergence_margin) / digits_per_term)
    return max(base, 2 * needed)


def arctan_reciprocal(
    m: int,
    context: WorkingContext,
    config: MachinLikeConfig = MachinLikeConfig(),
) -> tuple[Decimal, int]:
    """
    arctan(1/m) в рабочей точности.

    Args:
        m: Целое ≥ 2
        context: Рабочий контекст
        config: Параметры сходимости

    Returns:
        (arctan(1/m), количество свёрнутых членов)

    Raises:
        InvalidArgument: если m < 2
        ConvergenceFailure: если лимит членов превышен
    """
    if isinstance(m, bool) or not isinstance(m, int) or m < 2:
        raise InvalidArgument(f"m must be an int >= 2, got {m!r}")

    return _sum_arctan(arctan_reciprocal_terms(m, context), context, config, f"arctan(1/{m})")


def arctan(
    x: Decimal,
    context: WorkingContext,
    config: MachinLikeConfig = MachinLikeConfig(),
) -> Decimal:
    """
    arctan(x) рядом Тейлора для |x| < 1.

    Raises:
        InvalidArgument: если |x| ≥ 1 (ряд не сходится или сходится слишком медленно)
        ConvergenceFailure: если лимит arctan_max_terms превышен
    """
    value = to_decimal(x)
    if value.copy_abs() >= ONE:
        raise InvalidArgument(f"arctan series requires |x| < 1, got {value}")

    total, _ = _sum_arctan(
        arctan_terms(value, context),
        context,
        config,
        f"arctan({value})",
        max_terms=arctan_max_terms(value, context, config),
    )
    return total


# =============================================================================
# АЛГОРИТМ
# =============================================================================


class MachinLikeAlgorithm(BasePiAlgorithm):
    """π = 16·arctan(1/5) − 4·arctan(1/239)."""

    algorithm_type = AlgorithmType.MACHIN_LIKE
    default_estimate_iterations = 10

    def __init__(self, config: MachinLikeConfig | None = None):
        self.config = config or MachinLikeConfig()

    @property
    def guard_digits(self) -> int:
        return self.config.guard_digits

    def _compute(self, context: WorkingContext) -> Computation:
        ctx = context.decimal_context

        # Внешняя сумма Σ c_i·arctan(1/m_i) проходит тот же цикл фаз, что и ряды
        combination = SeriesAccumulator(context)
        iterations = 0
        for coefficient, m in MACHIN_TERMS:
            atan, terms = arctan_reciprocal(m, context, self.config)
            logger.debug("machin: arctan(1/%d) %d terms", m, terms)

            combination.fold(multiply(coefficient, atan, ctx))
            iterations += terms

        pi = combination.seal()
        return Computation(value=combination.finish(pi), iterations=iterations)

    def _estimate(self, iterations: int) -> float:
        pi = 0.0
        for coefficient, m in MACHIN_TERMS:
            x = 1.0 / m
            x_power = x
            atan = 0.0
            for n in range(iterations):
                sign = -1.0 if n % 2 else 1.0
                atan += sign * x_power / (2 * n + 1)
                x_power *= x * x
            pi += coefficient * atan
        return pi
