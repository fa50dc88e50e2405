"""
Тесты для Strategy Selector и общего контракта пяти алгоритмов

Проверяемые инварианты:
1. Каждый алгоритм для d ∈ {5, 10, 20, 50} совпадает с эталоном
2. Детерминизм: одинаковые вызовы → идентичные результаты
3. Монотонная точность: |result(d) − π| не растёт с d
4. Scale результата равен d
5. d ≤ 0 → InvalidArgument
6. Независимые вызовы параллельны без координации
"""

import math
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest

from piengine import (
    AlgorithmType,
    InvalidArgument,
    PrecisionRequest,
    available_algorithms,
    compute,
    compute_pi,
    compute_pi_str,
    get_algorithm,
)
from piengine.algorithms import ALGORITHMS, BasePiAlgorithm, ChudnovskyAlgorithm

ALL_ALGORITHMS = list(AlgorithmType)
REFERENCE_DIGITS = [5, 10, 20, 50]


# =============================================================================
# ТЕСТЫ: Реестр
# =============================================================================


class TestRegistry:
    """Закрытый набор из пяти стратегий."""

    def test_exactly_five(self):
        assert len(ALGORITHMS) == 5
        assert set(available_algorithms()) == set(AlgorithmType)

    @pytest.mark.parametrize("tag", ALL_ALGORITHMS)
    def test_get_by_enum(self, tag):
        algorithm = get_algorithm(tag)
        assert isinstance(algorithm, BasePiAlgorithm)
        assert algorithm.algorithm_type == tag

    def test_get_by_string(self):
        assert isinstance(get_algorithm("chudnovsky"), ChudnovskyAlgorithm)
        assert get_algorithm("GAUSS_LEGENDRE").algorithm_type == AlgorithmType.GAUSS_LEGENDRE

    def test_unknown_tag(self):
        with pytest.raises(InvalidArgument, match="Unknown algorithm: 'ramanujan'"):
            get_algorithm("ramanujan")

    @pytest.mark.parametrize("tag", ALL_ALGORITHMS)
    def test_guard_digits_in_range(self, tag):
        assert 10 <= get_algorithm(tag).guard_digits <= 20


# =============================================================================
# ТЕСТЫ: Эталонные значения
# =============================================================================


class TestReferenceDigits:
    """Все пять алгоритмов × эталонные точности."""

    @pytest.mark.parametrize("digits", REFERENCE_DIGITS)
    @pytest.mark.parametrize("tag", ALL_ALGORITHMS)
    def test_matches_reference(self, tag, digits, pi_rounded):
        assert compute_pi(digits, tag) == pi_rounded(digits)

    @pytest.mark.parametrize("digits", REFERENCE_DIGITS)
    @pytest.mark.parametrize("tag", ALL_ALGORITHMS)
    def test_scale_equals_target(self, tag, digits):
        value = compute_pi(digits, tag)
        assert value.as_tuple().exponent == -digits

    def test_reference_beyond_default_precision(self, pi_rounded):
        """Эталон округляется в собственном контексте, а не в глобальных 28 цифрах."""
        assert pi_rounded(50) == Decimal("3.14159265358979323846264338327950288419716939937511")
        assert str(pi_rounded(100)) == (
            "3.14159265358979323846264338327950288419716939937510"
            "58209749445923078164062862089986280348253421170679"
        )

    @pytest.mark.parametrize("tag", ALL_ALGORITHMS)
    def test_fifty_digit_string(self, tag):
        assert compute_pi_str(50, tag) == "3.14159265358979323846264338327950288419716939937511"

    def test_default_algorithm_is_chudnovsky(self):
        result = compute(PrecisionRequest(target_digits=20))
        assert result.algorithm == AlgorithmType.CHUDNOVSKY
        assert result.digits == "3.14159265358979323846"


# =============================================================================
# ТЕСТЫ: Свойства
# =============================================================================


class TestProperties:
    """Детерминизм, монотонность, валидация."""

    @pytest.mark.parametrize("tag", ALL_ALGORITHMS)
    def test_deterministic(self, tag):
        first = compute_pi(20, tag)
        second = compute_pi(20, tag)
        assert first == second
        assert first.as_tuple() == second.as_tuple()

    @pytest.mark.parametrize("tag", ALL_ALGORITHMS)
    def test_monotonic_accuracy(self, tag, pi_exact):
        errors = [abs(compute_pi(d, tag) - pi_exact) for d in (5, 10, 15, 20, 30)]
        for coarse, fine in zip(errors, errors[1:]):
            assert fine <= coarse

    @pytest.mark.parametrize("tag", ALL_ALGORITHMS)
    @pytest.mark.parametrize("digits", [0, -1])
    def test_non_positive_target_rejected(self, tag, digits):
        with pytest.raises(InvalidArgument, match="target_digits must be positive"):
            compute_pi(digits, tag)

    @pytest.mark.parametrize("tag", ALL_ALGORITHMS)
    def test_explicit_guard_digits(self, tag, pi_rounded):
        result = compute(PrecisionRequest(target_digits=20, guard_digits=12), tag)
        assert result.working_precision == 32
        assert result.value == pi_rounded(20)

    @pytest.mark.parametrize("tag", ALL_ALGORITHMS)
    def test_result_diagnostics(self, tag):
        result = compute(PrecisionRequest(target_digits=10), tag)
        assert result.algorithm == tag
        assert result.target_digits == 10
        assert result.working_precision > 10
        assert result.iterations > 0


class TestConcurrency:
    """Независимые вызовы из нескольких потоков."""

    def test_parallel_sweep(self, pi_rounded):
        jobs = [(tag, digits) for tag in ALL_ALGORITHMS for digits in (5, 10, 15, 20)]

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda job: compute_pi(job[1], job[0]), jobs))

        for (_, digits), value in zip(jobs, results):
            assert value == pi_rounded(digits)

    def test_shared_instance(self, pi_rounded):
        """Один экземпляр безопасно вызывать из разных потоков."""
        algorithm = get_algorithm(AlgorithmType.GAUSS_LEGENDRE)
        digits = [10, 20, 30, 40] * 3

        with ThreadPoolExecutor(max_workers=6) as pool:
            results = list(pool.map(algorithm.compute_pi, digits))

        assert results == [pi_rounded(d) for d in digits]


class TestEstimate:
    """Double-precision оценка."""

    @pytest.mark.parametrize("tag", ALL_ALGORITHMS)
    def test_default_close_to_pi(self, tag):
        assert abs(get_algorithm(tag).estimate() - math.pi) < 1e-5

    @pytest.mark.parametrize("tag", ALL_ALGORITHMS)
    def test_more_iterations_not_worse(self, tag):
        algorithm = get_algorithm(tag)
        assert abs(algorithm.estimate(3) - math.pi) <= abs(algorithm.estimate(1) - math.pi)

    @pytest.mark.parametrize("tag", ALL_ALGORITHMS)
    @pytest.mark.parametrize("iterations", [0, -5])
    def test_non_positive_iterations_rejected(self, tag, iterations):
        with pytest.raises(InvalidArgument, match="iterations must be positive"):
            get_algorithm(tag).estimate(iterations)

    def test_non_int_iterations_rejected(self):
        with pytest.raises(InvalidArgument, match="iterations must be an int"):
            get_algorithm(AlgorithmType.BBP).estimate(2.5)

    def test_returns_float(self):
        assert isinstance(get_algorithm(AlgorithmType.MACHIN_LIKE).estimate(), float)
