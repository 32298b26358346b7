"""
Second Order Sections Representation
====================================

A filter written as a cascade of biquadratic sections:

    H(z) = H_1(z) * H_2(z) * ... * H_L(z)

    H_i(z) = (b0 + b1 z^-1 + b2 z^-2) / (1 + a1 z^-1 + a2 z^-2)

Each section is stored as the row [b0, b1, b2, a0, a1, a2] with a0 = 1.
A first order section simply has b2 = a2 = 0.

The product does not depend on the section order, but the rounding error
of a cascade does, so the order in which the sections were built is kept.
"""

import logging
from dataclasses import dataclass

import numpy as np

from ..exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class SOS:
    """
    Immutable cascade of second order sections.

    Attributes:
        sections: Read-only array of shape (number_of_sections, 6). Rows
            are normalized on construction so every a0 equals 1.
            Copy it (np.array(sos.sections)) before passing it to scipy
            routines that need a writable buffer, such as signal.sosfilt.
    """
    sections: np.ndarray

    def __post_init__(self) -> None:
        """Validate the shape, normalize a0, and freeze the array."""
        sections: np.ndarray = np.array(self.sections, copy=True)
        if np.iscomplexobj(sections):
            message = "Section coefficients must be real"
            logger.error(message)
            raise InvalidArgumentError(message)
        sections = np.atleast_2d(sections.astype(np.float64))

        if sections.ndim != 2 or sections.shape[1] != 6 or sections.shape[0] < 1:
            message = (
                f"Sections must have shape (n, 6) with n >= 1, "
                f"got {sections.shape}"
            )
            logger.error(message)
            raise InvalidArgumentError(message)

        if not np.all(np.isfinite(sections)):
            message = "Section coefficients must be finite"
            logger.error(message)
            raise InvalidArgumentError(message)

        a0: np.ndarray = sections[:, 3].copy()
        if np.any(a0 == 0):
            message = "Leading denominator coefficient a0 cannot be zero"
            logger.error(message)
            raise InvalidArgumentError(message)

        sections = sections / a0[:, np.newaxis]
        sections[:, 3] = 1.0
        sections.setflags(write=False)
        object.__setattr__(self, "sections", sections)

    @property
    def number_of_sections(self) -> int:
        return int(self.sections.shape[0])

    @property
    def numerators(self) -> np.ndarray:
        """The (n, 3) array of [b0, b1, b2] rows."""
        return self.sections[:, 0:3]

    @property
    def denominators(self) -> np.ndarray:
        """The (n, 3) array of [a0, a1, a2] rows."""
        return self.sections[:, 3:6]

    def __repr__(self) -> str:
        return f"SOS(sections={np.array2string(self.sections, precision=6)})"
