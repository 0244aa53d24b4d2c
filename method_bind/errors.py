"""
Error types

Configuration errors are raised while generating bindings, before anything
is emitted. Errors raised by host methods at call time are never wrapped.
"""


class BindGenError(Exception):
    """Base class for binding generation errors"""


class InvalidTargetError(BindGenError, TypeError):
    """Target is missing or is not a class where a class is required"""


class BindingError(BindGenError):
    """Instance could not be constructed, bound or is no longer live"""
