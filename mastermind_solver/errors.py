"""Exceptions raised by the solver core."""


class InvalidArgument(ValueError):
    """Raised for out-of-domain numeric arguments (negative sizes, bad shapes)."""


class TypeMismatch(TypeError):
    """Raised when a guess or code is not a sequence of symbols."""


class GuessPoolExhausted(RuntimeError):
    """Raised when the repeated-guess retry ladder runs out of guesses.

    This means the candidate bookkeeping produced no usable next guess and
    always indicates a bug, so it is never caught inside the package.
    """
