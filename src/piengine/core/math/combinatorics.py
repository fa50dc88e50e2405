"""
Combinatorics — точная целочисленная арифметика

- factorial(n): итеративное произведение 2..n в int (без округления)
- modular_pow(base, exp, modulus): бинарное возведение в степень по модулю

Факториалы считаются только в int и переводятся в Decimal лишь при
делении на округляемые величины: факториал через округляемый Decimal
теряет точность раньше, чем это становится заметно.
"""

from piengine.core.errors import InvalidArgument, UnsupportedOperation


def _require_int(value: int, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{name} must be an int, got {type(value).__name__}")


def factorial(n: int) -> int:
    """
    Точный факториал n!.

    Args:
        n: Неотрицательное целое

    Returns:
        n! как int; factorial(0) == factorial(1) == 1

    Raises:
        InvalidArgument: если n < 0 или n не int

    Examples:
        >>> factorial(5)
        120
        >>> factorial(0)
        1
    """
    _require_int(n, "n")
    if n < 0:
        raise InvalidArgument(f"factorial is undefined for negative n, got {n}")

    result = 1
    for i in range(2, n + 1):
        result *= i
    return result


def modular_pow(base: int, exponent: int, modulus: int) -> int:
    """
    base^exponent mod modulus бинарным возведением в степень.

    Args:
        base: Основание
        exponent: Показатель (≥ 0)
        modulus: Модуль (≥ 1)

    Returns:
        Значение в [0, modulus); при exponent == 0 → 1 % modulus

    Raises:
        UnsupportedOperation: если exponent < 0
        InvalidArgument: если modulus < 1

    Examples:
        >>> modular_pow(16, 0, 1)
        0
        >>> modular_pow(16, 3, 7)
        1
    """
    _require_int(base, "base")
    _require_int(exponent, "exponent")
    _require_int(modulus, "modulus")
    if modulus < 1:
        raise InvalidArgument(f"modulus must be positive, got {modulus}")
    if exponent < 0:
        raise UnsupportedOperation(f"Negative exponent is not supported, got {exponent}")

    if exponent == 0:
        return 1 % modulus

    result = 1
    base = base % modulus
    while exponent > 0:
        if exponent & 1:
            result = (result * base) % modulus
        exponent >>= 1
        base = (base * base) % modulus
    return result
