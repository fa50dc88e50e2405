"""
PrecisionRequest / PiResult — модели запроса и результата

Immutable Pydantic модели:
- PrecisionRequest: сколько верных знаков нужно и (опционально) guard digits
- PiResult: значение π, масштабированное ровно до target_digits знаков,
  плюс диагностика (рабочая точность, число членов/итераций)
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .algorithm import AlgorithmType


# =============================================================================
# REQUEST
# =============================================================================


class PrecisionRequest(BaseModel):
    """
    Запрос точности.

    guard_digits = None → используется default алгоритма (10–20).
    """

    target_digits: int = Field(..., gt=0, description="Количество верных знаков после запятой")
    guard_digits: Optional[int] = Field(
        None, ge=1, description="Дополнительные знаки рабочей точности"
    )

    model_config = {"frozen": True, "strict": True}


# =============================================================================
# RESULT
# =============================================================================


class PiResult(BaseModel):
    """
    Результат вычисления π.

    value всегда имеет ровно target_digits дробных знаков (ROUND_HALF_UP).
    """

    algorithm: AlgorithmType = Field(..., description="Алгоритм, которым получен результат")
    target_digits: int = Field(..., gt=0, description="Знаков после запятой")
    working_precision: int = Field(..., gt=0, description="Рабочая точность (значащих цифр)")
    iterations: int = Field(..., ge=0, description="Членов ряда или итераций AGM")
    value: Decimal = Field(..., description="π, округлённое до target_digits знаков")

    model_config = {"frozen": True}

    @field_validator("working_precision")
    @classmethod
    def validate_working_precision(cls, v: int, info) -> int:
        """Рабочая точность строго больше target"""
        if "target_digits" in info.data:
            target = info.data["target_digits"]
            if v <= target:
                raise ValueError(
                    f"working_precision {v} must be > target_digits {target}"
                )
        return v

    @model_validator(mode="after")
    def validate_scale(self) -> "PiResult":
        """Scale значения равен target_digits"""
        exponent = self.value.as_tuple().exponent
        if not isinstance(exponent, int) or -exponent != self.target_digits:
            raise ValueError(
                f"value {self.value} must have exactly {self.target_digits} fractional digits"
            )
        return self

    @property
    def digits(self) -> str:
        """Строка с фиксированной точкой: ровно target_digits знаков после запятой"""
        return f"{self.value:.{self.target_digits}f}"
