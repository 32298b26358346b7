"""
IIR Filter Module
=================

Applies a transfer function (BA) with the transposed direct form II
structure:

    y[n]     = b0 x[n] + d0[n-1]
    d_k[n]   = b_(k+1) x[n] - a_(k+1) y[n] + d_(k+1)[n-1]

The delay line d has max(len(b), len(a)) - 1 entries. Coefficients are
normalized so a0 = 1 before filtering. The inner loop is
scipy.signal.lfilter.

For high order filters prefer SOSFilter; the expanded transfer function
loses precision as the order grows.
"""

import logging
from typing import Optional, Tuple

import numpy as np
from scipy import signal

from ..exceptions import InvalidArgumentError
from ..representations import BA
from .base_filter import StatefulFilter

logger = logging.getLogger(__name__)


class IIRFilter(StatefulFilter):
    """
    Stateful IIR filter for BA coefficients.

    Example:
        >>> iir = IIRFilter()
        >>> iir.initialize(design_ba_iir_filter(order=2, critical_frequencies=0.2),
        ...                mode=ProcessingMode.REAL_TIME)
        >>> first = iir.apply(chunk_1)
        >>> second = iir.apply(chunk_2)   # continues where chunk_1 ended
    """

    def __init__(self) -> None:
        super().__init__()
        self._numerator: Optional[np.ndarray] = None
        self._denominator: Optional[np.ndarray] = None

    @property
    def representation(self) -> BA:
        """The normalized transfer function being applied."""
        self._require_initialized()
        return BA(self._numerator, self._denominator)

    def _load_representation(self, representation) -> Tuple[int, ...]:
        if not isinstance(representation, BA):
            message = f"IIRFilter needs a BA representation, got {type(representation).__name__}"
            logger.error(message)
            raise InvalidArgumentError(message)

        normalized: BA = representation.normalized()
        length: int = max(normalized.numerator.size, normalized.denominator.size)

        # Pad both to the same length so lfilter's delay line has a fixed size
        numerator: np.ndarray = np.zeros(length, dtype=self._precision.dtype)
        denominator: np.ndarray = np.zeros(length, dtype=self._precision.dtype)
        numerator[:normalized.numerator.size] = normalized.numerator
        denominator[:normalized.denominator.size] = normalized.denominator

        self._numerator = numerator
        self._denominator = denominator
        return (length - 1,)

    def _release_representation(self) -> None:
        self._numerator = None
        self._denominator = None

    def _filter(self, x: np.ndarray, delay_line: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        if delay_line.size == 0:
            # Pure gain
            return self._numerator[0] * x, delay_line.copy()
        output, final_delay_line = signal.lfilter(
            self._numerator, self._denominator, x, zi=delay_line
        )
        return output, final_delay_line
