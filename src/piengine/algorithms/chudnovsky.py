"""
Chudnovsky Algorithm — гипергеометрический ряд, ~14.18 знаков на член

ФОРМУЛЫ:
    1/π = 12 · Σ_{k≥0} (−1)^k · (6k)! · (13591409 + 545140134·k)
                      / ((3k)! · (k!)^3 · 640320^(3k + 3/2))

    Эквивалентно:
    π = C / Σ_{k≥0} M_k,   C = 426880 · √10005
    M_k = (−1)^k · (6k)! · (13591409 + 545140134·k) / ((3k)! · (k!)^3 · 640320^(3k))

    Число членов: N = ceil(d / 14.1816) + extra_terms

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Числитель и знаменатель члена — точные int; в Decimal переводятся
   только на финальном делении члена
2. Знак несёт явный множитель (−1)^k, основание 640320^3 положительно
3. C считается один раз на вызов
4. Недобор членов тихо обрезает точность, перебор тратит работу:
   N — критический параметр
"""

import logging
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Final

from piengine.algorithms.base import BasePiAlgorithm, Computation
from piengine.core.domain.algorithm import AlgorithmType
from piengine.core.errors import InvalidArgument
from piengine.core.math.arbitrary_precision import divide, multiply
from piengine.core.math.combinatorics import factorial
from piengine.core.math.precision import WorkingContext, validate_target_digits
from piengine.core.math.series import SeriesAccumulator
from piengine.core.math.square_root import sqrt

logger = logging.getLogger(__name__)

# =============================================================================
# КОНСТАНТЫ РЯДА
# =============================================================================

LINEAR_A: Final[int] = 13591409
LINEAR_B: Final[int] = 545140134
BASE_C: Final[int] = 640320
BASE_C_CUBED: Final[int] = BASE_C**3  # 262537412640768000

CONSTANT_MULTIPLIER: Final[int] = 426880
CONSTANT_RADICAND: Final[int] = 10005

# log10(640320^3 / 1728): верных знаков на один член
DIGITS_PER_TERM: Final[float] = 14.1816


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class ChudnovskyConfig:
    """
    Конфигурация Chudnovsky.

    extra_terms = 1 — запас сверх ceil(d / 14.1816): первый член даёт
    лишь ~13.7 знака (асимптотика 14.18 достигается со второго), поэтому
    без запаса закон недобирает при d, близком к кратному 14.18
    (d = 14: один член, ошибка ~6e-14).
    """

    guard_digits: int = 15
    digits_per_term: float = DIGITS_PER_TERM
    extra_terms: int = 1


# =============================================================================
# ЧЛЕНЫ РЯДА
# =============================================================================


def required_terms(digits: int, config: ChudnovskyConfig = ChudnovskyConfig()) -> int:
    """
    Число членов для d верных знаков: ceil(d / 14.1816) + extra_terms.

    Examples:
        >>> required_terms(20)
        3
        >>> required_terms(50)
        5
    """
    validate_target_digits(digits)
    return math.ceil(digits / config.digits_per_term) + config.extra_terms


def term_numerator(k: int) -> int:
    """(−1)^k · (6k)! · (13591409 + 545140134·k) — точный int."""
    return (-1) ** k * factorial(6 * k) * (LINEAR_A + LINEAR_B * k)


def term_denominator(k: int) -> int:
    """(3k)! · (k!)^3 · 640320^(3k) — точный int."""
    return factorial(3 * k) * factorial(k) ** 3 * BASE_C_CUBED**k


def chudnovsky_term(k: int, context: WorkingContext) -> Decimal:
    """
    k-й член M_k: единственное округление — деление точных int.

    Raises:
        InvalidArgument: если k < 0
    """
    if isinstance(k, bool) or not isinstance(k, int) or k < 0:
        raise InvalidArgument(f"term index must be a non-negative int, got {k!r}")

    return divide(term_numerator(k), term_denominator(k), context.decimal_context)


def chudnovsky_constant(context: WorkingContext) -> Decimal:
    """C = 426880 · √10005 в рабочей точности."""
    return multiply(
        CONSTANT_MULTIPLIER,
        sqrt(Decimal(CONSTANT_RADICAND), context),
        context.decimal_context,
    )


def _accumulate(terms: int, context: WorkingContext) -> SeriesAccumulator:
    if isinstance(terms, bool) or not isinstance(terms, int) or terms < 1:
        raise InvalidArgument(f"terms must be a positive int, got {terms!r}")

    accumulator = SeriesAccumulator(context)
    for k in range(terms):
        accumulator.fold(chudnovsky_term(k, context))
    return accumulator


def sum_terms(terms: int, context: WorkingContext) -> Decimal:
    """Σ_{k<terms} M_k в рабочей точности."""
    return _accumulate(terms, context).seal()


def pi_from_terms(terms: int, context: WorkingContext) -> Decimal:
    """
    π по первым terms членам, без финального округления.

    Используется для проверки закона числа членов.
    """
    return divide(chudnovsky_constant(context), sum_terms(terms, context), context.decimal_context)


# =============================================================================
# АЛГОРИТМ
# =============================================================================


class ChudnovskyAlgorithm(BasePiAlgorithm):
    """π = 426880·√10005 / Σ M_k."""

    algorithm_type = AlgorithmType.CHUDNOVSKY
    default_estimate_iterations = 2

    def __init__(self, config: ChudnovskyConfig | None = None):
        self.config = config or ChudnovskyConfig()

    @property
    def guard_digits(self) -> int:
        return self.config.guard_digits

    def _compute(self, context: WorkingContext) -> Computation:
        terms = required_terms(context.target_digits, self.config)
        constant = chudnovsky_constant(context)

        accumulator = _accumulate(terms, context)
        series_sum = accumulator.seal()

        logger.debug("chudnovsky: %d terms for %d digits", terms, context.target_digits)

        pi = divide(constant, series_sum, context.decimal_context)
        return Computation(value=accumulator.finish(pi), iterations=terms)

    def _estimate(self, iterations: int) -> float:
        series_sum = 0.0
        for k in range(iterations):
            # int / int: корректно округлённое деление даже для огромных факториалов
            series_sum += term_numerator(k) / term_denominator(k)
        return CONSTANT_MULTIPLIER * math.sqrt(CONSTANT_RADICAND) / series_sum
