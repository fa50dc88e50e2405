"""
Series Accumulator — накопитель ряда и общий state machine суммирования

Алгоритмы-ряды (Machin-like, Chudnovsky, BBP, spigot) проходят один
и тот же жизненный цикл:

    IDLE → ACCUMULATING → ROUNDING → DONE

- IDLE: накопитель создан, членов нет
- ACCUMULATING: член сгенерирован и свёрнут, проверка сходимости
- ROUNDING: суммирование закрыто (seal), идёт финальное преобразование
- DONE: результат округлён, накопитель больше не используется

Gauss–Legendre — итерация, а не ряд: складывать нечего, поэтому он
округляет напрямую через WorkingContext.round_result (то же округление,
что и finish).

Retry нет: любая арифметическая ошибка фатальна и прерывает вызов.
"""

import logging
from collections.abc import Iterable
from decimal import Decimal
from enum import Enum
from typing import Optional

from piengine.core.errors import ConvergenceFailure
from piengine.core.math.arbitrary_precision import ZERO, add, to_decimal
from piengine.core.math.precision import ConvergencePolicy, WorkingContext

logger = logging.getLogger(__name__)


class ComputationPhase(str, Enum):
    """Фаза вычисления."""

    IDLE = "IDLE"
    ACCUMULATING = "ACCUMULATING"
    ROUNDING = "ROUNDING"
    DONE = "DONE"


class SeriesAccumulator:
    """
    Накопитель суммы ряда в рабочей точности.

    Член ряда эфемерен: сворачивается сразу и нигде не хранится.
    Недопустимый переход фазы → RuntimeError.
    """

    def __init__(self, context: WorkingContext):
        self._context = context
        self._total: Decimal = ZERO
        self._terms_folded = 0
        self._phase = ComputationPhase.IDLE

    @property
    def phase(self) -> ComputationPhase:
        return self._phase

    @property
    def total(self) -> Decimal:
        return self._total

    @property
    def terms_folded(self) -> int:
        return self._terms_folded

    def fold(self, term: Decimal) -> Decimal:
        """
        Свернуть член в сумму.

        Returns:
            Новое значение суммы

        Raises:
            RuntimeError: если накопитель уже закрыт
        """
        if self._phase not in (ComputationPhase.IDLE, ComputationPhase.ACCUMULATING):
            raise RuntimeError(f"Cannot fold a term in phase {self._phase.value}")

        self._phase = ComputationPhase.ACCUMULATING
        self._total = add(self._total, term, self._context.decimal_context)
        self._terms_folded += 1
        return self._total

    def seal(self) -> Decimal:
        """
        Закрыть суммирование: ACCUMULATING → ROUNDING.

        Returns:
            Сырая сумма в рабочей точности

        Raises:
            RuntimeError: если не свёрнуто ни одного члена или уже закрыт
        """
        if self._phase != ComputationPhase.ACCUMULATING:
            raise RuntimeError(f"Cannot seal accumulator in phase {self._phase.value}")

        self._phase = ComputationPhase.ROUNDING
        return self._total

    def finish(self, value: Decimal) -> Decimal:
        """
        Финальное округление: ROUNDING → DONE.

        Args:
            value: Значение π в рабочей точности (после преобразования суммы)

        Returns:
            value, округлённое ROUND_HALF_UP до target_digits знаков
        """
        if self._phase != ComputationPhase.ROUNDING:
            raise RuntimeError(f"Cannot finish accumulator in phase {self._phase.value}")

        result = self._context.round_result(value)
        self._phase = ComputationPhase.DONE
        return result


def summate(
    terms: Iterable[Decimal],
    accumulator: SeriesAccumulator,
    policy: ConvergencePolicy,
    max_terms: int,
    series_name: Optional[str] = None,
) -> Decimal:
    """
    Свёртка членов ряда до сходимости.

    Args:
        terms: Генератор членов (бесконечный или конечный)
        accumulator: Накопитель (IDLE или ACCUMULATING)
        policy: Политика сходимости
        max_terms: Лимит членов (страховка завершения)
        series_name: Имя ряда для логов и сообщений об ошибке

    Returns:
        Текущая сумма накопителя после сходимости

    Raises:
        ConvergenceFailure: если порог не достигнут за max_terms членов
            или генератор исчерпан раньше сходимости
    """
    name = series_name or "series"
    folded = 0

    for term in terms:
        if folded >= max_terms:
            break

        term = to_decimal(term)
        accumulator.fold(term)
        folded += 1

        if policy.should_stop(term, folded):
            logger.debug(
                "%s converged after %d terms (threshold=%s)", name, folded, policy.threshold
            )
            return accumulator.total

    raise ConvergenceFailure(
        f"{name} did not converge below {policy.threshold} within {max_terms} terms "
        f"(folded {folded})"
    )
