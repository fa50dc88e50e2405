"""
Тесты для Arbitrary-Precision Arithmetic

Проверяемые инварианты:
1. Деление округляется до точности контекста ROUND_HALF_UP
2. Деление на ноль → DivisionByZero (не Infinity/NaN)
3. Отрицательная степень → UnsupportedOperation
4. Глобальный decimal-контекст не используется и не изменяется
"""

import decimal
from decimal import Decimal

import pytest

from piengine.core.errors import (
    DivisionByZero,
    InvalidArgument,
    PiEngineError,
    UnsupportedOperation,
)
from piengine.core.math.arbitrary_precision import (
    ONE,
    ZERO,
    absolute,
    add,
    compare,
    divide,
    make_decimal_context,
    multiply,
    pow10,
    power,
    subtract,
    to_decimal,
)


# =============================================================================
# ТЕСТЫ: Контекст
# =============================================================================


class TestMakeDecimalContext:
    """Тесты make_decimal_context."""

    def test_precision_and_rounding(self):
        """Контекст несёт заданную точность и ROUND_HALF_UP."""
        ctx = make_decimal_context(42)
        assert ctx.prec == 42
        assert ctx.rounding == decimal.ROUND_HALF_UP

    def test_new_object_per_call(self):
        """Каждый вызов возвращает отдельный контекст."""
        assert make_decimal_context(10) is not make_decimal_context(10)

    @pytest.mark.parametrize("precision", [0, -5])
    def test_non_positive_precision_rejected(self, precision):
        with pytest.raises(InvalidArgument, match="precision must be positive"):
            make_decimal_context(precision)

    def test_non_int_precision_rejected(self):
        with pytest.raises(InvalidArgument, match="precision must be an int"):
            make_decimal_context(10.0)


class TestToDecimal:
    """Тесты to_decimal: точное преобразование."""

    def test_int_and_str(self):
        assert to_decimal(3) == Decimal(3)
        assert to_decimal("0.1") == Decimal("0.1")

    def test_decimal_passthrough(self):
        value = Decimal("1.25")
        assert to_decimal(value) is value

    def test_float_rejected(self):
        """float не принимается: двоичная ошибка представления."""
        with pytest.raises(InvalidArgument, match="Unsupported operand type"):
            to_decimal(0.1)

    def test_bool_rejected(self):
        with pytest.raises(InvalidArgument, match="bool"):
            to_decimal(True)

    def test_garbage_string_rejected(self):
        with pytest.raises(InvalidArgument, match="Cannot convert"):
            to_decimal("pi")


# =============================================================================
# ТЕСТЫ: Операции
# =============================================================================


class TestBasicOperations:
    """add / subtract / multiply округляются до точности контекста."""

    def test_add_rounds_to_context(self):
        ctx = make_decimal_context(5)
        assert add(Decimal("1.00001"), Decimal("0.000004"), ctx) == Decimal("1.0000")

    def test_subtract(self):
        ctx = make_decimal_context(10)
        assert subtract(1, Decimal("0.25"), ctx) == Decimal("0.75")

    def test_multiply_rounds_half_up(self):
        ctx = make_decimal_context(3)
        # 1.25 × 1 → 1.25 (3 цифры), 1.235 → 1.24 (half up)
        assert multiply(Decimal("1.235"), 1, ctx) == Decimal("1.24")

    def test_global_context_untouched(self):
        """Операции не меняют точность глобального контекста."""
        before = decimal.getcontext().prec
        divide(1, 7, make_decimal_context(200))
        assert decimal.getcontext().prec == before


class TestDivide:
    """Тесты divide."""

    def test_round_half_up(self):
        ctx = make_decimal_context(5)
        assert divide(1, 3, ctx) == Decimal("0.33333")
        assert divide(2, 3, ctx) == Decimal("0.66667")

    def test_precision_exceeds_default(self):
        """Точность результата определяется контекстом, а не глобальными 28 цифрами."""
        result = divide(1, 3, make_decimal_context(60))
        assert len(result.as_tuple().digits) == 60

    def test_division_by_zero(self):
        ctx = make_decimal_context(10)
        with pytest.raises(DivisionByZero, match="Division by zero"):
            divide(1, 0, ctx)

    def test_division_by_zero_is_zero_division_error(self):
        """DivisionByZero ловится стандартным обработчиком."""
        ctx = make_decimal_context(10)
        with pytest.raises(ZeroDivisionError):
            divide(Decimal("1.5"), ZERO, ctx)

    def test_division_by_zero_is_engine_error(self):
        with pytest.raises(PiEngineError):
            divide(1, "0", make_decimal_context(10))


class TestPower:
    """Тесты power."""

    def test_integer_power(self):
        ctx = make_decimal_context(20)
        assert power(2, 10, ctx) == Decimal(1024)
        assert power(Decimal("0.5"), 3, ctx) == Decimal("0.125")

    def test_zero_exponent(self):
        ctx = make_decimal_context(10)
        assert power(7, 0, ctx) == ONE
        assert power(0, 0, ctx) == ONE

    def test_negative_exponent_unsupported(self):
        with pytest.raises(UnsupportedOperation, match="Negative exponent"):
            power(2, -1, make_decimal_context(10))

    def test_non_int_exponent_rejected(self):
        with pytest.raises(InvalidArgument, match="exponent must be an int"):
            power(2, Decimal(2), make_decimal_context(10))


class TestCompareAndHelpers:
    """compare / absolute / pow10."""

    def test_compare(self):
        assert compare(1, 2) == -1
        assert compare("2.0", 2) == 0
        assert compare(Decimal("3.1416"), Decimal("3.14159")) == 1

    def test_compare_is_exact(self):
        """Сравнение не округляет: различие в 60-м знаке видно."""
        a = Decimal("1." + "0" * 59 + "1")
        assert compare(a, ONE) == 1

    def test_absolute(self):
        assert absolute(Decimal("-2.5")) == Decimal("2.5")
        assert absolute(3) == Decimal(3)

    def test_pow10(self):
        assert pow10(0) == ONE
        assert pow10(3) == Decimal(1000)
        assert pow10(-25) == Decimal("1E-25")
