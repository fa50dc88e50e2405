"""
Errors — таксономия ошибок вычисления π

Все ошибки фатальны для одного вызова: вычисления чистые и
детерминированные, повтор идентичного вызова воспроизводит ту же ошибку,
поэтому retry-политики нет.

Классы дополнительно наследуют стандартные исключения Python, чтобы
вызывающий код мог ловить их обычными обработчиками (ValueError и т.д.).
"""


class PiEngineError(Exception):
    """Базовый класс всех ошибок piengine."""
    pass


class InvalidArgument(PiEngineError, ValueError):
    """
    Недопустимый аргумент.

    Примеры:
    - target_digits ≤ 0
    - factorial(n) при n < 0
    - sqrt(x) при x < 0
    """
    pass


class DivisionByZero(PiEngineError, ZeroDivisionError):
    """
    Деление на ноль.

    При фиксированных формулах возникать не должно, но обязано всплыть,
    а не тихо испортить накопитель.
    """
    pass


class UnsupportedOperation(PiEngineError, ArithmeticError):
    """Операция не поддерживается (например, степень с отрицательным показателем)."""
    pass


class ConvergenceFailure(PiEngineError, ArithmeticError):
    """
    Превышен лимит итераций без достижения порога сходимости.

    Означает ошибку в генерации членов ряда, а не штатную ситуацию:
    лимиты итераций существуют только как страховка завершения.
    """
    pass
