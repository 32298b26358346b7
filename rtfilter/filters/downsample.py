"""
Downsample Module
=================

Keeps every q-th sample of a signal, starting at a phase cursor:

    y = x[phase], x[phase + q], x[phase + 2q], ...

    len(y) = floor((n + q - 1 - phase) / q)

No anti-alias filtering is done here; see Decimator.

In real-time mode the cursor carries over between calls, so a stream
downsampled in chunks keeps exactly the samples it would keep in one call:
after a chunk of n samples the next kept sample is (phase - n) mod q
samples into the following chunk.
"""

import logging
from typing import Optional

import numpy as np
from numpy.typing import ArrayLike

from ..enums import FilterStatus, Precision, ProcessingMode
from ..exceptions import InvalidArgumentError
from .base_filter import StreamProcessor
from .filter_state import DownsampleState

logger = logging.getLogger(__name__)


class Downsampler(StreamProcessor):
    """
    Phase-tracked downsampler.

    Example:
        >>> downsampler = Downsampler()
        >>> downsampler.initialize(3, mode=ProcessingMode.REAL_TIME)
        >>> downsampler.apply(np.arange(4.0))   # keeps 0, 3
        >>> downsampler.apply(np.arange(4.0, 8.0))   # keeps 6
    """

    def __init__(self) -> None:
        super().__init__()
        self._state: Optional[DownsampleState] = None

    @property
    def factor(self) -> int:
        self._require_initialized()
        return self._state.factor

    @property
    def phase(self) -> int:
        """Index into the next chunk of the next sample to keep."""
        self._require_initialized()
        return self._state.phase

    @property
    def initial_phase(self) -> int:
        self._require_initialized()
        return self._state.initial_phase

    def initialize(
        self,
        factor: int,
        mode: ProcessingMode = ProcessingMode.POST_PROCESSING,
        precision: Precision = Precision.DOUBLE
    ) -> None:
        """
        Attach the downsampler.

        Args:
            factor: Downsampling factor q. Must be at least 1.
            mode: Post-processing or real-time.
            precision: Working precision.

        Raises:
            InvalidArgumentError: If factor is less than 1.
        """
        self.clear()
        if isinstance(factor, bool) or int(factor) != factor or factor < 1:
            message = f"Downsampling factor={factor} must be a positive integer"
            logger.error(message)
            raise InvalidArgumentError(message)

        self._attach(mode, precision)
        self._state = DownsampleState(factor=int(factor))
        logger.debug(f"Initialized Downsampler: factor={factor}, mode={mode.value}")

    def estimate_space(self, number_of_samples: int) -> int:
        """Number of samples the next apply() on n samples will return."""
        self._require_initialized()
        factor: int = self._state.factor
        phase: int = self._current_phase()
        return max(0, (number_of_samples + factor - 1 - phase) // factor)

    def _current_phase(self) -> int:
        if self._mode == ProcessingMode.REAL_TIME:
            return self._state.phase
        return self._state.initial_phase

    def apply(self, x: ArrayLike) -> np.ndarray:
        """
        Downsample a signal or the next chunk of a stream.

        Args:
            x: Input samples.

        Returns:
            np.ndarray: The kept samples, estimate_space(len(x)) of them.

        Raises:
            NotInitializedError: If the downsampler is not initialized.
        """
        self._require_initialized()
        signal: np.ndarray = self._as_signal(x)
        if signal.size == 0:
            return np.zeros(0, dtype=self._precision.dtype)

        if self._mode == ProcessingMode.POST_PROCESSING:
            self._state.reset()

        output: np.ndarray = signal[self._state.phase::self._state.factor].copy()

        if self._mode == ProcessingMode.REAL_TIME:
            self._state.advance(signal.size)
            self._status = FilterStatus.ATTACHED_STREAMING
        return output

    def set_initial_conditions(self, phase: int) -> None:
        """
        Set the phase cursor and keep it as the reset target.

        Args:
            phase: Initial phase in [0, factor - 1].

        Raises:
            NotInitializedError: If the downsampler is not initialized.
            InvalidArgumentError: If phase is out of range.
        """
        self._require_initialized()
        if isinstance(phase, bool) or int(phase) != phase or not 0 <= phase < self._state.factor:
            message = f"Phase={phase} must be in [0, {self._state.factor - 1}]"
            logger.error(message)
            raise InvalidArgumentError(message)
        self._state.initial_phase = int(phase)
        self._state.reset()
        self._status = FilterStatus.ATTACHED_IDLE

    def reset_initial_conditions(self) -> None:
        """Restore the phase cursor to the initial phase."""
        self._require_initialized()
        self._state.reset()
        self._status = FilterStatus.ATTACHED_IDLE

    def clear(self) -> None:
        super().clear()
        self._state = None
