"""
Zero-Pole-Gain Representation
=============================

A filter written in factored form:

    H(s) = k * (s - z1)(s - z2)...(s - zm) / ((s - p1)(s - p2)...(s - pn))

The same form is used for analog (s-plane) and digital (z-plane) filters.
For the transfer function to have real coefficients every zero and pole
must be real or have its complex conjugate in the same set.
"""

import logging
from dataclasses import dataclass, field

import numpy as np

from ..exceptions import InvalidArgumentError
from ._arrays import frozen_array

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ZPK:
    """
    Immutable zeros, poles and gain.

    Attributes:
        zeros: Complex zeros (read-only array).
        poles: Complex poles (read-only array).
        gain: Real scalar gain.
    """
    zeros: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.complex128))
    poles: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.complex128))
    gain: float = 1.0

    def __post_init__(self) -> None:
        """Copy the inputs into read-only arrays and check the gain."""
        zeros = frozen_array(self.zeros, np.complex128)
        poles = frozen_array(self.poles, np.complex128)
        if not (np.all(np.isfinite(zeros)) and np.all(np.isfinite(poles))):
            message = "Zeros and poles must be finite"
            logger.error(message)
            raise InvalidArgumentError(message)

        gain = complex(self.gain)
        if abs(gain.imag) > 1.0e-12 * max(abs(gain.real), 1.0):
            message = f"Gain must be real, got {self.gain}"
            logger.error(message)
            raise InvalidArgumentError(message)

        object.__setattr__(self, "zeros", zeros)
        object.__setattr__(self, "poles", poles)
        object.__setattr__(self, "gain", float(gain.real))

    @property
    def number_of_zeros(self) -> int:
        return int(self.zeros.size)

    @property
    def number_of_poles(self) -> int:
        return int(self.poles.size)

    @property
    def order(self) -> int:
        """Filter order, the larger of the zero and pole counts."""
        return max(self.number_of_zeros, self.number_of_poles)

    @property
    def relative_degree(self) -> int:
        """Number of poles minus number of zeros (zeros at infinity)."""
        return self.number_of_poles - self.number_of_zeros

    def is_empty(self) -> bool:
        """True if there are neither zeros nor poles."""
        return self.number_of_zeros == 0 and self.number_of_poles == 0

    def __repr__(self) -> str:
        return (
            f"ZPK(zeros={np.array2string(self.zeros, precision=6)}, "
            f"poles={np.array2string(self.poles, precision=6)}, "
            f"gain={self.gain:.6g})"
        )
