"""
Bailey–Borwein–Plouffe (BBP) Formula

ФОРМУЛЫ:
    π = Σ_{k≥0} (1/16^k) · (4/(8k+1) − 2/(8k+4) − 1/(8k+5) − 1/(8k+6))

    Извлечение hex-цифры на позиции p (0-based после шестнадцатеричной точки):
    frac(16^p · π) = frac(4·S(1) − 2·S(4) − S(5) − S(6))
    S(j) = Σ_{k≤p} (16^(p−k) mod (8k+j)) / (8k+j) + Σ_{k>p} 16^(p−k) / (8k+j)
    digit = floor(16 · frac(...))

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Десятичное значение суммируется общей ConvergencePolicy
2. 16^k — точный int, на член приходится одно деление на 16^k
3. Hex-извлечение: целочисленное модульное возведение в степень,
   дробные части в Decimal фиксированной точности (не float)
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from decimal import Decimal
from typing import Final

from piengine.algorithms.base import BasePiAlgorithm, Computation
from piengine.core.domain.algorithm import AlgorithmType
from piengine.core.errors import InvalidArgument
from piengine.core.math.arbitrary_precision import (
    ZERO,
    add,
    divide,
    multiply,
    pow10,
    subtract,
)
from piengine.core.math.combinatorics import modular_pow
from piengine.core.math.precision import (
    DEFAULT_CONVERGENCE_MARGIN,
    ConvergencePolicy,
    WorkingContext,
    make_context,
)
from piengine.core.math.series import SeriesAccumulator, summate

logger = logging.getLogger(__name__)

HEX_DIGITS: Final[str] = "0123456789ABCDEF"

# (коэффициент, смещение j) в 4/(8k+1) − 2/(8k+4) − 1/(8k+5) − 1/(8k+6)
BBP_COMPONENTS: Final[tuple[tuple[int, int], ...]] = ((4, 1), (-2, 4), (-1, 5), (-1, 6))


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class BBPConfig:
    """Конфигурация BBP."""

    guard_digits: int = 15
    convergence_margin: int = DEFAULT_CONVERGENCE_MARGIN
    max_terms_factor: int = 2  # лимит членов = factor × precision
    hex_working_precision: int = 32  # значащих цифр при извлечении hex-цифр


# =============================================================================
# ДЕСЯТИЧНЫЙ РЯД
# =============================================================================


def bbp_term(k: int, context: WorkingContext) -> Decimal:
    """
    k-й член ряда: (1/16^k)·(4/(8k+1) − 2/(8k+4) − 1/(8k+5) − 1/(8k+6)).

    Raises:
        InvalidArgument: если k < 0
    """
    if isinstance(k, bool) or not isinstance(k, int) or k < 0:
        raise InvalidArgument(f"term index must be a non-negative int, got {k!r}")

    ctx = context.decimal_context
    bracket = ZERO
    for coefficient, offset in BBP_COMPONENTS:
        bracket = add(bracket, divide(coefficient, 8 * k + offset, ctx), ctx)

    return divide(bracket, 16**k, ctx)


def bbp_terms(context: WorkingContext) -> Iterator[Decimal]:
    """Бесконечный генератор членов BBP."""
    k = 0
    while True:
        yield bbp_term(k, context)
        k += 1


# =============================================================================
# HEX-ЦИФРЫ
# =============================================================================


def _fractional_part(value: Decimal, context: WorkingContext) -> Decimal:
    """s − floor(s) ∈ [0, 1)."""
    ctx = context.decimal_context
    fraction = subtract(value, ctx.divide_int(value, 1), ctx)
    if fraction < ZERO:
        fraction = add(fraction, 1, ctx)
    return fraction


def _series_fraction(position: int, offset: int, context: WorkingContext) -> Decimal:
    """frac(S(offset)) для позиции position."""
    ctx = context.decimal_context
    total = ZERO

    # Левая часть: целочисленный остаток 16^(p−k) mod (8k+j)
    for k in range(position + 1):
        denominator = 8 * k + offset
        remainder = modular_pow(16, position - k, denominator)
        total = _fractional_part(add(total, divide(remainder, denominator, ctx), ctx), context)

    # Правая часть: 16^(p−k) / (8k+j) пока член не ниже разрешения контекста
    threshold = pow10(-context.precision)
    k = position + 1
    while True:
        term = divide(1, 16 ** (k - position) * (8 * k + offset), ctx)
        if term < threshold:
            break
        total = add(total, term, ctx)
        k += 1

    return _fractional_part(total, context)


def hex_digit(position: int, config: "BBPConfig | None" = None) -> int:
    """
    Шестнадцатеричная цифра π на позиции position после точки (0-based).

    Args:
        position: Позиция (≥ 0); π = 3.243F6A88... → позиция 0 это '2'
        config: Точность извлечения (hex_working_precision)

    Returns:
        Цифра в [0, 15]

    Raises:
        InvalidArgument: если position < 0

    Examples:
        >>> hex_digit(0)
        2
        >>> hex_digit(3)
        15
    """
    if isinstance(position, bool) or not isinstance(position, int) or position < 0:
        raise InvalidArgument(f"position must be a non-negative int, got {position!r}")

    cfg = config or BBPConfig()
    # Guard растёт с позицией: левая сумма теряет ~log10(position) знаков
    context = make_context(cfg.hex_working_precision, len(str(position)))
    ctx = context.decimal_context

    combined = ZERO
    for coefficient, offset in BBP_COMPONENTS:
        combined = add(
            combined,
            multiply(coefficient, _series_fraction(position, offset, context), ctx),
            ctx,
        )

    fraction = _fractional_part(combined, context)
    logger.debug("bbp: hex digit at position %d, precision %d", position, context.precision)
    return int(multiply(16, fraction, ctx))


def hex_digits(start: int, count: int, config: "BBPConfig | None" = None) -> str:
    """
    count шестнадцатеричных цифр π начиная с позиции start (uppercase).

    Raises:
        InvalidArgument: если start < 0 или count < 1

    Examples:
        >>> hex_digits(0, 8)
        '243F6A88'
    """
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise InvalidArgument(f"count must be a positive int, got {count!r}")

    return "".join(HEX_DIGITS[hex_digit(start + i, config)] for i in range(count))


# =============================================================================
# АЛГОРИТМ
# =============================================================================


class BBPAlgorithm(BasePiAlgorithm):
    """π как сумма ряда BBP."""

    algorithm_type = AlgorithmType.BBP
    default_estimate_iterations = 100

    def __init__(self, config: BBPConfig | None = None):
        self.config = config or BBPConfig()

    @property
    def guard_digits(self) -> int:
        return self.config.guard_digits

    def _compute(self, context: WorkingContext) -> Computation:
        accumulator = SeriesAccumulator(context)
        policy = ConvergencePolicy.for_context(context, margin=self.config.convergence_margin)

        summate(
            bbp_terms(context),
            accumulator,
            policy,
            max_terms=self.config.max_terms_factor * context.precision,
            series_name="bbp",
        )

        terms = accumulator.terms_folded
        pi = accumulator.seal()
        return Computation(value=accumulator.finish(pi), iterations=terms)

    def _estimate(self, iterations: int) -> float:
        pi = 0.0
        scale = 1.0
        for k in range(iterations):
            pi += scale * (
                4.0 / (8 * k + 1) - 2.0 / (8 * k + 4) - 1.0 / (8 * k + 5) - 1.0 / (8 * k + 6)
            )
            scale /= 16.0
        return pi

    def hex_digit(self, position: int) -> int:
        return hex_digit(position, self.config)

    def hex_digits(self, start: int, count: int) -> str:
        return hex_digits(start, count, self.config)
