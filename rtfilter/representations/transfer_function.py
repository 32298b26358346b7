"""
Transfer Function Representation
================================

A filter written as a ratio of polynomials:

    Digital:  H(z) = (b0 + b1 z^-1 + ... + bM z^-M) / (a0 + a1 z^-1 + ... + aN z^-N)
    Analog:   H(s) = (b0 s^M + ... + bM) / (a0 s^N + ... + aN)

In both cases the coefficients are stored in the order written above.
An FIR filter is a transfer function whose denominator is [1].
"""

import logging
from dataclasses import dataclass

import numpy as np

from ..exceptions import InvalidArgumentError
from ._arrays import frozen_array, real_array

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class BA:
    """
    Immutable numerator (feed-forward) and denominator (feed-back)
    coefficients.

    Attributes:
        numerator: Real b coefficients (read-only array).
        denominator: Real a coefficients (read-only array). The leading
            coefficient is non-zero.
    """
    numerator: np.ndarray
    denominator: np.ndarray

    def __post_init__(self) -> None:
        """Validate and freeze the coefficient arrays."""
        numerator = real_array(self.numerator, "numerator")
        denominator = real_array(self.denominator, "denominator")

        if numerator.size == 0:
            message = "No numerator coefficients"
            logger.error(message)
            raise InvalidArgumentError(message)

        if denominator.size == 0:
            message = "No denominator coefficients"
            logger.error(message)
            raise InvalidArgumentError(message)

        if denominator[0] == 0:
            message = "Leading denominator coefficient cannot be zero"
            logger.error(message)
            raise InvalidArgumentError(message)

        object.__setattr__(self, "numerator", frozen_array(numerator, np.float64))
        object.__setattr__(self, "denominator", frozen_array(denominator, np.float64))

    @classmethod
    def from_fir(cls, taps) -> "BA":
        """Build an FIR transfer function (denominator [1]) from taps."""
        return cls(numerator=taps, denominator=np.ones(1))

    @property
    def order(self) -> int:
        """Filter order: the larger of the numerator and denominator orders."""
        return max(self.numerator.size, self.denominator.size) - 1

    @property
    def delay_line_length(self) -> int:
        """Length of the transposed direct form delay line."""
        return self.order

    def is_fir(self) -> bool:
        """True if the denominator is a single coefficient."""
        return self.denominator.size == 1

    def normalized(self) -> "BA":
        """Return a copy scaled so the leading denominator coefficient is 1."""
        a0: float = float(self.denominator[0])
        return BA(self.numerator / a0, self.denominator / a0)

    def __repr__(self) -> str:
        return (
            f"BA(numerator={np.array2string(self.numerator, precision=6)}, "
            f"denominator={np.array2string(self.denominator, precision=6)})"
        )
