"""Error taxonomy for the CORE language.

Every error carries the source line it was detected on (when known) and
renders as ``"<Category>: [Line <n>] <message>"``. Each concrete class has
its own process exit code so callers can tell failures apart.
"""

from typing import Optional


class CoreError(Exception):
    """Base class of all errors raised while tokenizing, parsing or running."""
    category = 'Error'
    exit_code = 1

    def __init__(self, message: str, line: Optional[int] = None):
        self.message = message
        self.line = line
        if line is None:
            text = f"{self.category}: {message}"
        else:
            text = f"{self.category}: [Line {line}] {message}"
        super().__init__(text)


class InvalidTokenError(CoreError):
    category = 'Tokenizer Error'
    exit_code = 2


# Syntax errors

class UnexpectedTokenError(CoreError):
    """The current token cannot start or continue the construct being parsed."""
    category = 'Syntax Error'
    exit_code = 3


class ConsumeMismatchError(CoreError):
    """A specific token kind was required and another one was found."""
    category = 'Syntax Error'
    exit_code = 4


class EmptySequenceError(CoreError):
    category = 'Syntax Error'
    exit_code = 5


# Context errors

class RedeclaredError(CoreError):
    category = 'Context Error'
    exit_code = 6


class UndeclaredError(CoreError):
    category = 'Context Error'
    exit_code = 7


class NoMoreDeclarationsError(CoreError):
    category = 'Context Error'
    exit_code = 8


# Runtime errors

class UninitializedError(CoreError):
    category = 'Runtime Error'
    exit_code = 9


class OverflowUnderflowError(CoreError):
    category = 'Runtime Error'
    exit_code = 10


class IntegerOverflowError(OverflowUnderflowError):
    pass


class IntegerUnderflowError(OverflowUnderflowError):
    exit_code = 11


class InvalidInputError(CoreError):
    """Malformed console input. Only raised inside the read retry loop."""
    category = 'Runtime Error'
    exit_code = 12


class EndOfInputError(CoreError):
    category = 'Runtime Error'
    exit_code = 13
