"""
BasePiAlgorithm — единый контракт пяти алгоритмов

Каждый алгоритм реализует «вычислить π до N верных знаков»:
    compute_pi(target_digits) -> Decimal  (scale == target_digits)

Общий pipeline вызова:
1. Валидация target_digits (≤ 0 → InvalidArgument, без clamp)
2. WorkingContext = target + guard (один раз на вызов)
3. Алгоритм-специфичное вычисление в рабочей точности
4. Округление ROUND_HALF_UP ровно до target_digits

Состояние между вызовами не сохраняется: экземпляр хранит только
immutable конфигурацию, поэтому один экземпляр безопасно вызывать
из нескольких потоков.
"""

import logging
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import ClassVar, NamedTuple, Optional

from piengine.core.domain.algorithm import AlgorithmType
from piengine.core.domain.request import PiResult, PrecisionRequest
from piengine.core.errors import InvalidArgument
from piengine.core.math.precision import WorkingContext, make_context

logger = logging.getLogger(__name__)


class Computation(NamedTuple):
    """Результат алгоритм-специфичной части: округлённое значение и число шагов."""

    value: Decimal
    iterations: int


class BasePiAlgorithm(ABC):
    """
    Базовый класс стратегии вычисления π.

    Подклассы задают algorithm_type, default_estimate_iterations,
    guard_digits (из своего Config) и реализуют _compute/_estimate.
    """

    algorithm_type: ClassVar[AlgorithmType]
    default_estimate_iterations: ClassVar[int]

    @property
    @abstractmethod
    def guard_digits(self) -> int:
        """Guard digits по умолчанию для этого алгоритма."""

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------

    def make_context(self, target_digits: int, guard_digits: Optional[int] = None) -> WorkingContext:
        """WorkingContext с guard алгоритма (или явно переданным)."""
        guard = self.guard_digits if guard_digits is None else guard_digits
        return make_context(target_digits, guard)

    def compute(self, request: PrecisionRequest) -> PiResult:
        """
        Вычисление π по запросу точности.

        Returns:
            PiResult с value, диагностикой рабочей точности и числом шагов
        """
        context = self.make_context(request.target_digits, request.guard_digits)
        return self._run(context)

    def compute_pi(self, target_digits: int) -> Decimal:
        """
        π ровно до target_digits знаков после запятой.

        Raises:
            InvalidArgument: если target_digits ≤ 0
        """
        context = self.make_context(target_digits)
        return self._run(context).value

    def compute_pi_str(self, target_digits: int) -> str:
        """π строкой с фиксированной точкой (ровно target_digits знаков)."""
        context = self.make_context(target_digits)
        return self._run(context).digits

    def estimate(self, iterations: Optional[int] = None) -> float:
        """
        Быстрая оценка π в double precision.

        Args:
            iterations: Число членов/итераций (None → default алгоритма)

        Raises:
            InvalidArgument: если iterations < 1
        """
        n = self.default_estimate_iterations if iterations is None else iterations
        if isinstance(n, bool) or not isinstance(n, int):
            raise InvalidArgument(f"iterations must be an int, got {type(n).__name__}")
        if n < 1:
            raise InvalidArgument(f"iterations must be positive, got {n}")
        return self._estimate(n)

    # -------------------------------------------------------------------------
    # INTERNALS
    # -------------------------------------------------------------------------

    def _run(self, context: WorkingContext) -> PiResult:
        logger.debug(
            "%s: target=%d guard=%d precision=%d",
            self.algorithm_type.value,
            context.target_digits,
            context.guard_digits,
            context.precision,
        )

        computation = self._compute(context)

        logger.debug(
            "%s: done in %d iterations", self.algorithm_type.value, computation.iterations
        )

        return PiResult(
            algorithm=self.algorithm_type,
            target_digits=context.target_digits,
            working_precision=context.precision,
            iterations=computation.iterations,
            value=computation.value,
        )

    @abstractmethod
    def _compute(self, context: WorkingContext) -> Computation:
        """Вычисление в рабочей точности; value уже округлено до target."""

    @abstractmethod
    def _estimate(self, iterations: int) -> float:
        """Double-precision оценка за iterations шагов."""
