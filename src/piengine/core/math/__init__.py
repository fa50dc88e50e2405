"""
Core math modules для piengine

Арифметика произвольной точности, политика точности/сходимости,
накопитель ряда, квадратный корень и точная целочисленная комбинаторика.
"""

# Arbitrary-Precision Arithmetic
from piengine.core.math.arbitrary_precision import (
    ROUNDING_MODE,
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

# Precision Context / Convergence Policy
from piengine.core.math.precision import (
    DEFAULT_CONVERGENCE_MARGIN,
    DEFAULT_GUARD_DIGITS,
    MIN_GUARD_DIGITS,
    MIN_TERMS_BEFORE_CONVERGENCE,
    ConvergencePolicy,
    WorkingContext,
    convergence_threshold,
    is_converged,
    make_context,
    validate_guard_digits,
    validate_target_digits,
)

# Series Accumulator
from piengine.core.math.series import ComputationPhase, SeriesAccumulator, summate

# Square Root
from piengine.core.math.square_root import sqrt

# Combinatorics
from piengine.core.math.combinatorics import factorial, modular_pow

__all__ = [
    # Arithmetic
    "ROUNDING_MODE",
    "absolute",
    "add",
    "compare",
    "divide",
    "make_decimal_context",
    "multiply",
    "pow10",
    "power",
    "subtract",
    "to_decimal",
    # Precision / Convergence
    "DEFAULT_CONVERGENCE_MARGIN",
    "DEFAULT_GUARD_DIGITS",
    "MIN_GUARD_DIGITS",
    "MIN_TERMS_BEFORE_CONVERGENCE",
    "ConvergencePolicy",
    "WorkingContext",
    "convergence_threshold",
    "is_converged",
    "make_context",
    "validate_guard_digits",
    "validate_target_digits",
    # Series
    "ComputationPhase",
    "SeriesAccumulator",
    "summate",
    # Square root
    "sqrt",
    # Combinatorics
    "factorial",
    "modular_pow",
]
