"""
Gauss–Legendre Algorithm — итерация арифметико-геометрического среднего

ФОРМУЛЫ:
    (a_0, b_0, t_0, p_0) = (1, 1/√2, 1/4, 1)
    a' = (a + b) / 2
    b' = √(a · b)
    t' = t − p · (a − a')²
    p' = 2p
    π ≈ (a + b)² / (4t)

    Число итераций: ceil(log2(target)) + extra_iterations

Сходимость квадратичная (число верных знаков удваивается за итерацию),
поэтому тест сходимости на каждой итерации не нужен: цикл выполняет
фиксированное, выведенное из точности число шагов. Каждая итерация
требует квадратного корня в полной точности.

Состояние (a, b, t, p) — immutable: next = state.advance(context),
каждый переход тестируется независимо.
"""

import logging
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Final

from piengine.algorithms.base import BasePiAlgorithm, Computation
from piengine.core.domain.algorithm import AlgorithmType
from piengine.core.errors import ConvergenceFailure, InvalidArgument
from piengine.core.math.arbitrary_precision import (
    ONE,
    TWO,
    ZERO,
    add,
    divide,
    multiply,
    power,
    pow10,
    subtract,
    to_decimal,
)
from piengine.core.math.precision import WorkingContext, make_context
from piengine.core.math.square_root import sqrt

logger = logging.getLogger(__name__)

QUARTER: Final[Decimal] = Decimal("0.25")

# Лимит итераций AGM = factor × precision
AGM_MAX_ITERATIONS_FACTOR: Final[int] = 2


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class GaussLegendreConfig:
    """Конфигурация Gauss–Legendre."""

    guard_digits: int = 10
    extra_iterations: int = 5


def required_iterations(digits: int, config: GaussLegendreConfig = GaussLegendreConfig()) -> int:
    """
    ceil(log2(digits)) + extra_iterations.

    Examples:
        >>> required_iterations(50)
        11
    """
    if isinstance(digits, bool) or not isinstance(digits, int) or digits <= 0:
        raise InvalidArgument(f"digits must be a positive int, got {digits!r}")
    return math.ceil(math.log2(digits)) + config.extra_iterations


# =============================================================================
# STATE
# =============================================================================


@dataclass(frozen=True)
class GaussLegendreState:
    """Состояние итерации (a, b, t, p)."""

    a: Decimal
    b: Decimal
    t: Decimal
    p: Decimal
    iteration: int = 0

    def advance(self, context: WorkingContext) -> "GaussLegendreState":
        """Один шаг итерации; исходное состояние не изменяется."""
        ctx = context.decimal_context

        a_next = divide(add(self.a, self.b, ctx), TWO, ctx)
        b_next = sqrt(multiply(self.a, self.b, ctx), context)
        a_diff = subtract(self.a, a_next, ctx)
        t_next = subtract(self.t, multiply(self.p, multiply(a_diff, a_diff, ctx), ctx), ctx)
        p_next = multiply(self.p, TWO, ctx)

        return GaussLegendreState(
            a=a_next,
            b=b_next,
            t=t_next,
            p=p_next,
            iteration=self.iteration + 1,
        )

    def pi_estimate(self, context: WorkingContext) -> Decimal:
        """(a + b)² / (4t) в рабочей точности."""
        ctx = context.decimal_context
        numerator = power(add(self.a, self.b, ctx), 2, ctx)
        denominator = multiply(4, self.t, ctx)
        return divide(numerator, denominator, ctx)


def initial_state(context: WorkingContext) -> GaussLegendreState:
    """(1, 1/√2, 1/4, 1)."""
    b0 = divide(ONE, sqrt(TWO, context), context.decimal_context)
    return GaussLegendreState(a=ONE, b=b0, t=QUARTER, p=ONE)


def run_iterations(iterations: int, context: WorkingContext) -> GaussLegendreState:
    """Состояние после iterations шагов."""
    if isinstance(iterations, bool) or not isinstance(iterations, int) or iterations < 0:
        raise InvalidArgument(f"iterations must be a non-negative int, got {iterations!r}")

    state = initial_state(context)
    for _ in range(iterations):
        state = state.advance(context)
    return state


def pi_after_iterations(iterations: int, precision: int) -> Decimal:
    """
    Оценка π после iterations шагов при рабочей точности precision.

    Не округляется до target: используется для исследования сходимости.

    Examples:
        >>> str(pi_after_iterations(1, 50))[:6]
        '3.1405'
    """
    if isinstance(precision, bool) or not isinstance(precision, int) or precision < 2:
        raise InvalidArgument(f"precision must be an int >= 2, got {precision!r}")

    context = make_context(precision - 1, 1)
    return run_iterations(iterations, context).pi_estimate(context)


# =============================================================================
# AGM
# =============================================================================


def arithmetic_geometric_mean(a: Decimal, b: Decimal, context: WorkingContext) -> Decimal:
    """
    Арифметико-геометрическое среднее AGM(a, b) для a, b > 0.

    Итерация до |a − b| < 10^-(precision − 5) (масштаб по порядку a).

    Raises:
        InvalidArgument: если a ≤ 0 или b ≤ 0
        ConvergenceFailure: если лимит итераций превышен
    """
    current_a = to_decimal(a)
    current_b = to_decimal(b)
    if current_a <= ZERO or current_b <= ZERO:
        raise InvalidArgument(f"AGM requires positive inputs, got a={current_a}, b={current_b}")

    ctx = context.decimal_context
    max_iterations = AGM_MAX_ITERATIONS_FACTOR * context.precision

    for _ in range(max_iterations):
        tolerance = pow10(current_a.adjusted() - (context.precision - 5))
        if subtract(current_a, current_b, ctx).copy_abs() < tolerance:
            return current_a

        current_a, current_b = (
            divide(add(current_a, current_b, ctx), TWO, ctx),
            sqrt(multiply(current_a, current_b, ctx), context),
        )

    raise ConvergenceFailure(
        f"AGM did not converge within {max_iterations} iterations at precision {context.precision}"
    )


# =============================================================================
# АЛГОРИТМ
# =============================================================================


class GaussLegendreAlgorithm(BasePiAlgorithm):
    """π через AGM-итерацию Gauss–Legendre."""

    algorithm_type = AlgorithmType.GAUSS_LEGENDRE
    default_estimate_iterations = 3

    def __init__(self, config: GaussLegendreConfig | None = None):
        self.config = config or GaussLegendreConfig()

    @property
    def guard_digits(self) -> int:
        return self.config.guard_digits

    def _compute(self, context: WorkingContext) -> Computation:
        iterations = required_iterations(context.target_digits, self.config)
        state = run_iterations(iterations, context)

        logger.debug("gauss_legendre: %d iterations for %d digits", iterations, context.target_digits)

        return Computation(
            value=context.round_result(state.pi_estimate(context)),
            iterations=iterations,
        )

    def _estimate(self, iterations: int) -> float:
        a = 1.0
        b = 1.0 / math.sqrt(2.0)
        t = 0.25
        p = 1.0
        for _ in range(iterations):
            a_next = (a + b) / 2.0
            b = math.sqrt(a * b)
            t -= p * (a - a_next) ** 2
            p *= 2.0
            a = a_next
        return (a + b) ** 2 / (4.0 * t)
