"""
Precision Context & Convergence Policy

Модуль централизует всё, что касается точности одного вызова:
- WorkingContext: target + guard digits → рабочая точность (immutable)
- ConvergencePolicy: решение «дальнейшие члены ряда пренебрежимы»
- Финальное округление результата ROUND_HALF_UP ровно до target знаков

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. precision = target + guard > target (guard ≥ 1)
2. target ≤ 0 → InvalidArgument (никакого тихого clamp)
3. Сходимость: |term| < 10^-(target + margin), margin по умолчанию 5
4. Тест сходимости не срабатывает на первых членах (min_terms)
5. Scale результата равен target ровно

ФОРМУЛЫ:
    precision = target_digits + guard_digits
    threshold = 10^-(target_digits + margin)
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Final

from piengine.core.errors import InvalidArgument
from piengine.core.math.arbitrary_precision import make_decimal_context, pow10, to_decimal

# =============================================================================
# ПАРАМЕТРЫ ТОЧНОСТИ
# =============================================================================

# Guard digits по умолчанию (если алгоритм не задаёт свои)
DEFAULT_GUARD_DIGITS: Final[int] = 10

# Минимально допустимый guard: рабочая точность строго больше target
MIN_GUARD_DIGITS: Final[int] = 1

# Запас порога сходимости сверх target
DEFAULT_CONVERGENCE_MARGIN: Final[int] = 5

# Сколько членов ряда суммируется до первой проверки сходимости
MIN_TERMS_BEFORE_CONVERGENCE: Final[int] = 2


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_target_digits(target_digits: int) -> None:
    """
    Проверка запрошенного количества знаков после запятой.

    Raises:
        InvalidArgument: если target_digits не int или ≤ 0
    """
    if isinstance(target_digits, bool) or not isinstance(target_digits, int):
        raise InvalidArgument(
            f"target_digits must be an int, got {type(target_digits).__name__}"
        )
    if target_digits <= 0:
        raise InvalidArgument(f"target_digits must be positive, got {target_digits}")


def validate_guard_digits(guard_digits: int) -> None:
    """
    Проверка guard digits.

    Raises:
        InvalidArgument: если guard_digits не int или < MIN_GUARD_DIGITS
    """
    if isinstance(guard_digits, bool) or not isinstance(guard_digits, int):
        raise InvalidArgument(
            f"guard_digits must be an int, got {type(guard_digits).__name__}"
        )
    if guard_digits < MIN_GUARD_DIGITS:
        raise InvalidArgument(
            f"guard_digits must be >= {MIN_GUARD_DIGITS}, got {guard_digits}"
        )


# =============================================================================
# WORKING CONTEXT
# =============================================================================


@dataclass(frozen=True)
class WorkingContext:
    """
    Рабочий контекст одного вызова.

    Создаётся один раз на входе алгоритма и передаётся во все операции.
    decimal_context принадлежит только этому вызову.
    """

    target_digits: int
    guard_digits: int
    precision: int
    decimal_context: Context = field(repr=False, compare=False)

    def round_result(self, value: Decimal) -> Decimal:
        """
        Финальное округление ROUND_HALF_UP ровно до target_digits знаков.

        Examples:
            >>> ctx = make_context(4, 10)
            >>> ctx.round_result(Decimal("3.14159265"))
            Decimal('3.1416')
        """
        return to_decimal(value).quantize(
            pow10(-self.target_digits),
            rounding=ROUND_HALF_UP,
            context=self.decimal_context,
        )


def make_context(target_digits: int, guard_digits: int = DEFAULT_GUARD_DIGITS) -> WorkingContext:
    """
    Построение WorkingContext: precision = target + guard.

    Args:
        target_digits: Количество верных знаков после запятой (> 0)
        guard_digits: Дополнительные знаки рабочей точности (≥ 1)

    Returns:
        WorkingContext с приватным decimal-контекстом ROUND_HALF_UP

    Raises:
        InvalidArgument: если target_digits ≤ 0 или guard_digits < 1

    Examples:
        >>> make_context(50, 10).precision
        60
    """
    validate_target_digits(target_digits)
    validate_guard_digits(guard_digits)

    precision = target_digits + guard_digits

    return WorkingContext(
        target_digits=target_digits,
        guard_digits=guard_digits,
        precision=precision,
        decimal_context=make_decimal_context(precision),
    )


# =============================================================================
# CONVERGENCE POLICY
# =============================================================================


def convergence_threshold(target_digits: int, margin: int = DEFAULT_CONVERGENCE_MARGIN) -> Decimal:
    """Порог 10^-(target + margin)."""
    return pow10(-(target_digits + margin))


def is_converged(
    term: Decimal,
    target_digits: int,
    margin: int = DEFAULT_CONVERGENCE_MARGIN,
) -> bool:
    """
    Проверка пренебрежимости члена ряда.

    Returns:
        True если |term| < 10^-(target_digits + margin)

    Examples:
        >>> is_converged(Decimal("1E-16"), 10)
        True
        >>> is_converged(Decimal("1E-15"), 10)
        False
    """
    return to_decimal(term).copy_abs() < convergence_threshold(target_digits, margin)


@dataclass(frozen=True)
class ConvergencePolicy:
    """
    Политика сходимости, параметризованная per-call.

    min_terms защищает от ложного срабатывания на первых членах
    (например, член с нулевым вкладом при k=0).
    """

    target_digits: int
    margin: int = DEFAULT_CONVERGENCE_MARGIN
    min_terms: int = MIN_TERMS_BEFORE_CONVERGENCE

    @property
    def threshold(self) -> Decimal:
        return convergence_threshold(self.target_digits, self.margin)

    def should_stop(self, term: Decimal, terms_folded: int) -> bool:
        """
        Решение об остановке суммирования.

        Args:
            term: Последний свёрнутый член
            terms_folded: Количество уже свёрнутых членов (включая term)

        Returns:
            True если terms_folded ≥ min_terms и |term| ниже порога
        """
        if terms_folded < self.min_terms:
            return False
        return to_decimal(term).copy_abs() < self.threshold

    @classmethod
    def for_context(
        cls,
        context: WorkingContext,
        margin: int = DEFAULT_CONVERGENCE_MARGIN,
    ) -> "ConvergencePolicy":
        return cls(target_digits=context.target_digits, margin=margin)
