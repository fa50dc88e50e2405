"""
Arbitrary-Precision Arithmetic — десятичная арифметика с явной точностью

Модуль оборачивает стандартный decimal так, чтобы каждая операция
выполнялась в явно переданном контексте:
- add / subtract / multiply / divide / power / compare
- округление всегда ROUND_HALF_UP
- глобальный decimal-контекст не читается и не изменяется

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление всегда округляется до точности контекста
2. Деление на ноль → DivisionByZero (никогда не Infinity/NaN)
3. Отрицательная степень → UnsupportedOperation
4. Контекст принадлежит одному вызову (без shared mutable state)
"""

from decimal import (
    ROUND_HALF_UP,
    Context,
    Decimal,
    DivisionByZero as DecimalDivisionByZero,
    InvalidOperation,
    Overflow,
)
from typing import Final, Union

from piengine.core.errors import DivisionByZero, InvalidArgument, UnsupportedOperation

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Единственный допустимый режим округления во всём движке
ROUNDING_MODE: Final[str] = ROUND_HALF_UP

ZERO: Final[Decimal] = Decimal(0)
ONE: Final[Decimal] = Decimal(1)
TWO: Final[Decimal] = Decimal(2)

Number = Union[int, str, Decimal]


# =============================================================================
# КОНТЕКСТ
# =============================================================================


def make_decimal_context(precision: int) -> Context:
    """
    Создание приватного decimal-контекста с заданной точностью.

    Каждый вызов возвращает новый объект: контексты decimal изменяемы
    (флаги), поэтому делить их между потоками нельзя.

    Args:
        precision: Количество значащих цифр (≥ 1)

    Returns:
        decimal.Context с ROUND_HALF_UP и включёнными traps

    Raises:
        InvalidArgument: если precision < 1
    """
    if isinstance(precision, bool) or not isinstance(precision, int):
        raise InvalidArgument(f"precision must be an int, got {type(precision).__name__}")
    if precision < 1:
        raise InvalidArgument(f"precision must be positive, got {precision}")

    return Context(
        prec=precision,
        rounding=ROUNDING_MODE,
        traps=[InvalidOperation, DecimalDivisionByZero, Overflow],
    )


def to_decimal(value: Number) -> Decimal:
    """
    Точное преобразование в Decimal (без округления).

    float намеренно не поддерживается: двоичное представление
    внесло бы ошибку ещё до начала вычислений.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise InvalidArgument("bool is not a numeric operand")
    if isinstance(value, (int, str)):
        try:
            return Decimal(value)
        except InvalidOperation as e:
            raise InvalidArgument(f"Cannot convert {value!r} to Decimal") from e
    raise InvalidArgument(f"Unsupported operand type: {type(value).__name__}")


# =============================================================================
# БАЗОВЫЕ ОПЕРАЦИИ
# =============================================================================


def add(a: Number, b: Number, ctx: Context) -> Decimal:
    """a + b, округлённое до точности ctx."""
    return ctx.add(to_decimal(a), to_decimal(b))


def subtract(a: Number, b: Number, ctx: Context) -> Decimal:
    """a - b, округлённое до точности ctx."""
    return ctx.subtract(to_decimal(a), to_decimal(b))


def multiply(a: Number, b: Number, ctx: Context) -> Decimal:
    """a × b, округлённое до точности ctx."""
    return ctx.multiply(to_decimal(a), to_decimal(b))


def divide(numerator: Number, denominator: Number, ctx: Context) -> Decimal:
    """
    Деление с округлением до точности контекста.

    Args:
        numerator: Числитель
        denominator: Знаменатель (≠ 0)
        ctx: Рабочий контекст

    Returns:
        numerator / denominator, ROUND_HALF_UP до ctx.prec значащих цифр

    Raises:
        DivisionByZero: если denominator == 0

    Examples:
        >>> divide(1, 3, make_decimal_context(5))
        Decimal('0.33333')
        >>> divide(2, 3, make_decimal_context(5))
        Decimal('0.66667')
    """
    denom = to_decimal(denominator)
    if denom.is_zero():
        raise DivisionByZero(f"Division by zero: {numerator} / {denominator}")

    return ctx.divide(to_decimal(numerator), denom)


def power(base: Number, exponent: int, ctx: Context) -> Decimal:
    """
    Целая неотрицательная степень.

    Args:
        base: Основание
        exponent: Показатель (int ≥ 0)
        ctx: Рабочий контекст

    Returns:
        base ** exponent, округлённое до точности ctx (0**0 == 1)

    Raises:
        UnsupportedOperation: если exponent < 0
        InvalidArgument: если exponent не int
    """
    if isinstance(exponent, bool) or not isinstance(exponent, int):
        raise InvalidArgument(f"exponent must be an int, got {type(exponent).__name__}")
    if exponent < 0:
        raise UnsupportedOperation(f"Negative exponent is not supported, got {exponent}")

    if exponent == 0:
        return ONE

    return ctx.power(to_decimal(base), exponent)


def compare(a: Number, b: Number) -> int:
    """
    Точное сравнение (без округления).

    Returns:
        -1 если a < b, 0 если a == b, +1 если a > b
    """
    da = to_decimal(a)
    db = to_decimal(b)

    if da < db:
        return -1
    elif da > db:
        return 1
    else:
        return 0


def absolute(value: Number) -> Decimal:
    """|value| без округления."""
    return to_decimal(value).copy_abs()


def pow10(exponent: int) -> Decimal:
    """
    Точная степень десяти 10**exponent (exponent может быть отрицательным).

    Используется для порогов сходимости: Decimal('1E-25') без деления
    и без обращения к глобальному контексту.
    """
    return Decimal((0, (1,), exponent))
