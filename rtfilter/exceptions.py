"""
Filter exceptions.

Every failure raised by this package derives from FilterError. The three
concrete kinds also derive from the closest built-in exception so callers
that only catch ValueError or RuntimeError keep working.
"""


class FilterError(Exception):
    """Base class for filter design and filtering errors"""
    pass


class InvalidArgumentError(FilterError, ValueError):
    """
    Raised when an input has the wrong shape or is out of range.

    Examples: empty coefficient lists, a zero leading coefficient, a
    non-positive order, ripple or cutoff, band edges out of order, or more
    zeros than poles when building second order sections.
    """
    pass


class NotInitializedError(FilterError, RuntimeError):
    """Raised when a filter or downsampler is used before initialize()"""
    pass


class NumericalFailureError(FilterError, ArithmeticError):
    """
    Raised when a computation breaks down numerically.

    Examples: the eigenvalue solver fails to converge, a design produces
    non-finite coefficients or an unstable digital filter, or filtering
    produces non-finite output from finite input.
    """
    pass
