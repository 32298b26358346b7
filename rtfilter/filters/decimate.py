"""
Decimate Module
===============

Sample-rate reduction by an integer factor q:

    x --> [FIR lowpass, cutoff 1/q] --> [keep every q-th sample] --> y

The anti-alias filter is a Hamming-window FIR lowpass with nfir taps. nfir
is forced odd so the group delay (nfir - 1)/2 is a whole number of samples,
which lets post-processing remove it exactly and keep the output aligned
with the input.

Large factors need long filters with very narrow passbands. Beyond a
factor of about 13 it is better to decimate in several stages (e.g. 4
then 5 instead of 20); this is a recommendation, not a limit.
"""

import logging
from typing import Optional

import numpy as np
from numpy.typing import ArrayLike

from ..design.fir_design import fir1_lowpass
from ..enums import FilterStatus, FIRWindow, Precision, ProcessingMode
from ..exceptions import InvalidArgumentError
from ..representations import BA
from .base_filter import StreamProcessor
from .downsample import Downsampler
from .fir_filter import FIRFilter

logger = logging.getLogger(__name__)

MINIMUM_FILTER_LENGTH: int = 5
DEFAULT_FILTER_LENGTH: int = 33
# Factors above this should be split into cascaded stages
RECOMMENDED_MAXIMUM_FACTOR: int = 13


class Decimator(StreamProcessor):
    """
    Anti-alias FIR lowpass followed by a downsampler.

    Attributes:
        factor (int): Decimation factor.
        filter_length (int): Number of FIR taps (always odd).
        removes_phase_shift (bool): Whether the FIR group delay is removed.
    """

    def __init__(self) -> None:
        super().__init__()
        self._fir_filter: Optional[FIRFilter] = None
        self._downsampler: Optional[Downsampler] = None
        self._removes_phase_shift: bool = False

    @property
    def factor(self) -> int:
        self._require_initialized()
        return self._downsampler.factor

    @property
    def filter_length(self) -> int:
        self._require_initialized()
        return int(self._fir_filter.taps.size)

    @property
    def removes_phase_shift(self) -> bool:
        return self._removes_phase_shift

    @property
    def fir_filter(self) -> BA:
        """The anti-alias filter taps as a transfer function."""
        self._require_initialized()
        return BA.from_fir(self._fir_filter.taps.astype(np.float64))

    def initialize(
        self,
        factor: int,
        nfir: int = DEFAULT_FILTER_LENGTH,
        mode: ProcessingMode = ProcessingMode.POST_PROCESSING,
        precision: Precision = Precision.DOUBLE,
        remove_phase_shift: Optional[bool] = None
    ) -> None:
        """
        Design the anti-alias filter and attach the decimator.

        Args:
            factor: Decimation factor. At least 2.
            nfir: Number of FIR taps. At least 5; an even value is
                increased by one.
            mode: Post-processing or real-time.
            precision: Working precision.
            remove_phase_shift: Remove the FIR group delay. None means yes
                in post-processing and no in real-time mode.

        Raises:
            InvalidArgumentError: If factor or nfir is out of range, or
                phase shift removal is requested in real-time mode.
        """
        self.clear()
        if isinstance(factor, bool) or int(factor) != factor or factor < 2:
            message = f"Decimation factor={factor} must be an integer of at least 2"
            logger.error(message)
            raise InvalidArgumentError(message)
        if isinstance(nfir, bool) or int(nfir) != nfir or nfir < MINIMUM_FILTER_LENGTH:
            message = f"nfir={nfir} must be an integer of at least {MINIMUM_FILTER_LENGTH}"
            logger.error(message)
            raise InvalidArgumentError(message)
        if remove_phase_shift and mode == ProcessingMode.REAL_TIME:
            message = "The phase shift cannot be removed in real-time mode"
            logger.error(message)
            raise InvalidArgumentError(message)

        factor = int(factor)
        nfir = int(nfir)
        if nfir % 2 == 0:
            nfir += 1
        if factor > RECOMMENDED_MAXIMUM_FACTOR:
            logger.warning(
                f"Decimation factor {factor} is above {RECOMMENDED_MAXIMUM_FACTOR}; "
                f"consider decimating in several stages"
            )

        if remove_phase_shift is None:
            remove_phase_shift = mode == ProcessingMode.POST_PROCESSING

        self._attach(mode, precision)
        taps: BA = fir1_lowpass(nfir - 1, 1.0 / factor, window=FIRWindow.HAMMING)

        self._fir_filter = FIRFilter()
        self._fir_filter.initialize(
            taps, mode=mode, precision=precision, zero_phase=bool(remove_phase_shift)
        )
        self._downsampler = Downsampler()
        self._downsampler.initialize(factor, mode=mode, precision=precision)
        self._removes_phase_shift = bool(remove_phase_shift)

        logger.debug(
            f"Initialized Decimator: factor={factor}, nfir={nfir}, "
            f"mode={mode.value}, remove_phase_shift={self._removes_phase_shift}"
        )

    def estimate_space(self, number_of_samples: int) -> int:
        """Number of samples the next apply() on n samples will return."""
        self._require_initialized()
        return self._downsampler.estimate_space(number_of_samples)

    def apply(self, x: ArrayLike) -> np.ndarray:
        """
        Decimate a signal or the next chunk of a stream.

        Args:
            x: Input samples.

        Returns:
            np.ndarray: Filtered and downsampled samples.

        Raises:
            NotInitializedError: If the decimator is not initialized.
            NumericalFailureError: If filtering produced non-finite output.
        """
        self._require_initialized()
        signal: np.ndarray = self._as_signal(x)
        if signal.size == 0:
            return np.zeros(0, dtype=self._precision.dtype)

        filtered: np.ndarray = self._fir_filter.apply(signal)
        output: np.ndarray = self._downsampler.apply(filtered)
        if self._mode == ProcessingMode.REAL_TIME:
            self._status = FilterStatus.ATTACHED_STREAMING
        return output

    def set_initial_conditions(self, initial_conditions: ArrayLike) -> None:
        """
        Seed the anti-alias filter delay line (length filter_length - 1).

        Raises:
            NotInitializedError: If the decimator is not initialized.
            InvalidArgumentError: If the length is wrong.
        """
        self._require_initialized()
        self._fir_filter.set_initial_conditions(initial_conditions)
        self._downsampler.reset_initial_conditions()
        self._status = FilterStatus.ATTACHED_IDLE

    def reset_initial_conditions(self) -> None:
        """Restore the filter delay line and the downsampling phase."""
        self._require_initialized()
        self._fir_filter.reset_initial_conditions()
        self._downsampler.reset_initial_conditions()
        self._status = FilterStatus.ATTACHED_IDLE

    def clear(self) -> None:
        super().clear()
        self._fir_filter = None
        self._downsampler = None
        self._removes_phase_shift = False
