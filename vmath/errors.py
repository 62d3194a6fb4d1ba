"""
Exceptions raised by vmath.
"""


class VMathError(Exception):
    """Base class for vmath errors."""


class MissingArgumentError(VMathError, TypeError):
    """A positional constructor was called with an incomplete set of components."""


class DivideByZeroError(VMathError, ZeroDivisionError):
    """A quaternion was divided by zero or normalized with zero magnitude."""
