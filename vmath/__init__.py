# vmath/__init__.py

from .math import Vector, Quaternion
from .errors import VMathError, MissingArgumentError, DivideByZeroError
from .logger import get_logger

__all__ = [
    'Vector', 'Quaternion',
    'VMathError', 'MissingArgumentError', 'DivideByZeroError',
    'get_logger',
]
