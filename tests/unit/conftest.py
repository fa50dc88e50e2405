"""
Общие фикстуры: эталонное десятичное и шестнадцатеричное разложение π.
"""

from decimal import ROUND_HALF_UP, Context, Decimal

import pytest

from piengine.core.math.arbitrary_precision import pow10

# 150 знаков после запятой
PI_REFERENCE = (
    "3."
    "14159265358979323846264338327950288419716939937510"
    "58209749445923078164062862089986280348253421170679"
    "82148086513282306647093844609550582231725359408128"
)

# Шестнадцатеричные цифры после точки: π = 3.243F6A88...
PI_HEX_REFERENCE = "243F6A8885A308D313198A2E03707344"


def round_reference(digits: int) -> Decimal:
    """Эталон, округлённый ROUND_HALF_UP до digits знаков."""
    return Decimal(PI_REFERENCE).quantize(
        pow10(-digits),
        rounding=ROUND_HALF_UP,
        context=Context(prec=len(PI_REFERENCE)),
    )


@pytest.fixture
def pi_exact() -> Decimal:
    """Эталон π (150 знаков) без округления."""
    return Decimal(PI_REFERENCE)


@pytest.fixture
def pi_rounded():
    """Функция digits → эталон, округлённый до digits знаков."""
    return round_reference


@pytest.fixture
def pi_hex() -> str:
    return PI_HEX_REFERENCE
