"""
FIR Filter Module
=================

Applies a finite impulse response filter (taps only, no feedback). The
delay line holds len(taps) - 1 values.

ZERO PHASE:
===========
A linear phase FIR filter delays every frequency by the same
(len(taps) - 1) / 2 samples. When that delay is a whole number of samples,
i.e. the taps are symmetric or antisymmetric and there is an odd number of
them, the phase is removed exactly by shifting the output:

    1. Pad the input with (len(taps) - 1) / 2 trailing zeros.
    2. Filter once.
    3. Drop the first (len(taps) - 1) / 2 output samples.

The output has the input's length and the filter's own magnitude
response. Any other set of taps falls back to forward-backward filtering,
which squares the magnitude response.
"""

import logging
from typing import Optional, Tuple

import numpy as np
from numpy.typing import ArrayLike
from scipy import signal

from ..exceptions import InvalidArgumentError
from ..representations import BA
from .base_filter import StatefulFilter

logger = logging.getLogger(__name__)


def is_linear_phase(taps: np.ndarray) -> bool:
    """True if taps are symmetric or antisymmetric about the middle tap."""
    reversed_taps: np.ndarray = taps[::-1]
    tolerance: float = 1.0e-12 * max(float(np.max(np.abs(taps))), 1.0)
    return bool(
        np.all(np.abs(taps - reversed_taps) <= tolerance)
        or np.all(np.abs(taps + reversed_taps) <= tolerance)
    )


class FIRFilter(StatefulFilter):
    """
    Stateful FIR filter.

    initialize() accepts a BA whose denominator is a single coefficient, or
    the taps themselves.
    """

    def __init__(self) -> None:
        super().__init__()
        self._taps: Optional[np.ndarray] = None

    @property
    def taps(self) -> np.ndarray:
        self._require_initialized()
        return self._taps.copy()

    @property
    def group_delay(self) -> float:
        """Delay, in samples, of a linear phase filter with these taps."""
        self._require_initialized()
        return (self._taps.size - 1) / 2.0

    @property
    def removes_group_delay(self) -> bool:
        """True if zero-phase filtering is done by dropping the group delay."""
        self._require_initialized()
        return self._taps.size % 2 == 1 and is_linear_phase(self._taps.astype(np.float64))

    def _load_representation(self, representation) -> Tuple[int, ...]:
        if isinstance(representation, BA):
            if not representation.is_fir():
                message = "FIRFilter needs a BA with a single denominator coefficient"
                logger.error(message)
                raise InvalidArgumentError(message)
            taps: np.ndarray = representation.numerator / representation.denominator[0]
        else:
            taps = self._validated_taps(representation)

        self._taps = np.array(taps, dtype=self._precision.dtype)
        return (self._taps.size - 1,)

    @staticmethod
    def _validated_taps(values: ArrayLike) -> np.ndarray:
        taps: np.ndarray = np.atleast_1d(np.asarray(values, dtype=np.float64))
        if taps.ndim != 1 or taps.size == 0:
            message = f"FIR taps must be a non-empty 1-D array, got shape {taps.shape}"
            logger.error(message)
            raise InvalidArgumentError(message)
        if not np.all(np.isfinite(taps)):
            message = "FIR taps must be finite"
            logger.error(message)
            raise InvalidArgumentError(message)
        return taps

    def _release_representation(self) -> None:
        self._taps = None

    def _filter(self, x: np.ndarray, delay_line: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        if delay_line.size == 0:
            return self._taps[0] * x, delay_line.copy()
        one = np.ones(1, dtype=self._precision.dtype)
        output, final_delay_line = signal.lfilter(self._taps, one, x, zi=delay_line)
        return output, final_delay_line

    def _apply_zero_phase(self, x: np.ndarray) -> np.ndarray:
        if not self.removes_group_delay:
            return super()._apply_zero_phase(x)

        delay: int = (self._taps.size - 1) // 2
        padded: np.ndarray = np.concatenate((x, np.zeros(delay, dtype=x.dtype)))
        output, _ = self._filter(padded, self._state.initial_conditions)
        return output[delay:]
