"""
Тесты для Combinatorics: factorial и modular_pow
"""

import math

import pytest

from piengine.core.errors import InvalidArgument, UnsupportedOperation
from piengine.core.math.combinatorics import factorial, modular_pow


class TestFactorial:
    """Точный целочисленный факториал."""

    def test_base_cases(self):
        assert factorial(0) == 1
        assert factorial(1) == 1

    def test_small_values(self):
        assert factorial(5) == 120
        assert factorial(10) == 3628800

    def test_exact_for_large_n(self):
        """Никакого округления: 300! совпадает с math.factorial."""
        assert factorial(300) == math.factorial(300)
        assert isinstance(factorial(300), int)

    def test_negative_rejected(self):
        with pytest.raises(InvalidArgument, match="negative n"):
            factorial(-1)

    def test_non_int_rejected(self):
        with pytest.raises(InvalidArgument, match="n must be an int"):
            factorial(5.0)

    def test_bool_rejected(self):
        with pytest.raises(InvalidArgument):
            factorial(True)


class TestModularPow:
    """Бинарное возведение в степень по модулю."""

    @pytest.mark.parametrize(
        "base,exponent,modulus",
        [
            (16, 3, 7),
            (16, 10, 9),
            (2, 100, 1_000_003),
            (16, 123, 8 * 40 + 5),
            (7, 1, 13),
        ],
    )
    def test_matches_builtin_pow(self, base, exponent, modulus):
        assert modular_pow(base, exponent, modulus) == pow(base, exponent, modulus)

    def test_zero_exponent(self):
        """exponent == 0 → 1 % modulus."""
        assert modular_pow(16, 0, 9) == 1
        assert modular_pow(16, 0, 1) == 0

    def test_modulus_one(self):
        assert modular_pow(16, 5, 1) == 0

    def test_negative_exponent_unsupported(self):
        with pytest.raises(UnsupportedOperation, match="Negative exponent"):
            modular_pow(16, -1, 7)

    @pytest.mark.parametrize("modulus", [0, -3])
    def test_non_positive_modulus_rejected(self, modulus):
        with pytest.raises(InvalidArgument, match="modulus must be positive"):
            modular_pow(16, 2, modulus)
