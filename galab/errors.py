"""
Error types raised by the evolutionary engine and its reporting layer.

Engine errors signal caller bugs and are never caught inside the engine.
Only ReportError is meant to be handled (by the command-line driver).
"""


class ConfigurationError(ValueError):
    """Invalid algorithm, codec or objective-function configuration."""


class EvaluationStateError(RuntimeError):
    """An operation was used in a state that does not support it."""


class FitnessRangeError(ArithmeticError):
    """An objective value exceeded the function's declared max_y."""


class ReportError(OSError):
    """A report file could not be written or read."""
