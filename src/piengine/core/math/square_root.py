"""
Square Root — Newton–Raphson над Decimal

Используется Gauss–Legendre (на каждой итерации) и Chudnovsky (константа C).

Алгоритм:
    y_0 = 10^floor(e_x / 2), e_x = десятичный порядок x
    y_{n+1} = (y_n + x / y_n) / 2
    стоп: |y_{n+1} - y_n| < 10^(e - (precision - 5)),
          где e — десятичный порядок y_{n+1} (e = 0 для y ~ 1)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. x < 0 → InvalidArgument
2. sqrt(0) = 0
3. Лимит итераций 2 × precision; превышение → ConvergenceFailure
   (для x > 0 не достигается при любом порядке x)
"""

import logging
from decimal import Decimal
from typing import Final

from piengine.core.errors import ConvergenceFailure, InvalidArgument
from piengine.core.math.arbitrary_precision import (
    TWO,
    ZERO,
    add,
    divide,
    pow10,
    subtract,
    to_decimal,
)
from piengine.core.math.precision import WorkingContext

logger = logging.getLogger(__name__)

# Запас порога остановки относительно рабочей точности (в цифрах)
SQRT_TOLERANCE_MARGIN: Final[int] = 5

# Лимит итераций = SQRT_MAX_ITERATIONS_FACTOR × precision
SQRT_MAX_ITERATIONS_FACTOR: Final[int] = 2


def sqrt(x: Decimal, context: WorkingContext) -> Decimal:
    """
    Квадратный корень методом Ньютона в рабочей точности контекста.

    Args:
        x: Подкоренное значение (≥ 0)
        context: Рабочий контекст

    Returns:
        √x, округлённый до context.precision значащих цифр

    Raises:
        InvalidArgument: если x < 0
        ConvergenceFailure: если лимит итераций превышен

    Examples:
        >>> sqrt(Decimal(4), make_context(10))
        Decimal('2')
    """
    value = to_decimal(x)
    if value < ZERO:
        raise InvalidArgument(f"Cannot take square root of negative number: {value}")
    if value.is_zero():
        return ZERO

    ctx = context.decimal_context
    precision = context.precision
    max_iterations = SQRT_MAX_ITERATIONS_FACTOR * precision

    # Начальное приближение 10^floor(e/2): в пределах множителя 10 от корня
    y = pow10(value.adjusted() // 2)

    for iteration in range(1, max_iterations + 1):
        y_next = divide(add(y, divide(value, y, ctx), ctx), TWO, ctx)
        delta = subtract(y_next, y, ctx).copy_abs()

        # Порог масштабируется порядком корня: для y ~ 1 это ровно 10^-(precision-5)
        tolerance = pow10(y_next.adjusted() - (precision - SQRT_TOLERANCE_MARGIN))
        y = y_next

        if delta < tolerance:
            logger.debug("sqrt(%s) converged in %d iterations", value, iteration)
            return y

    raise ConvergenceFailure(
        f"sqrt({value}) did not converge within {max_iterations} iterations "
        f"at precision {precision}"
    )
