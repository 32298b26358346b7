"""
Base Filter Module
==================

Lifecycle shared by every execution-time component.

STATUS:
=======
    UNATTACHED          --initialize()-->   ATTACHED_IDLE
    ATTACHED_IDLE       --apply() (real-time)-->   ATTACHED_STREAMING
    ATTACHED_STREAMING  --reset_initial_conditions()-->   ATTACHED_IDLE
    any                 --clear()-->   UNATTACHED

PROCESSING MODES:
=================
POST_PROCESSING:
    Every apply() call is independent: it starts from the initial
    conditions and leaves the state untouched. Zero-phase filtering is
    available because the whole signal is at hand.

REAL_TIME:
    The state carries from one apply() call to the next, so a stream can be
    split into chunks of any size and the concatenated output matches the
    output of one call on the whole stream.

OWNERSHIP:
==========
Each instance owns its state. copy(), copy.copy() and copy.deepcopy() all
produce an independent deep copy. transfer() moves the state into a new
instance and leaves this one unattached.
"""

import copy
import logging
from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np
from numpy.typing import ArrayLike

from ..enums import FilterStatus, Precision, ProcessingMode
from ..exceptions import InvalidArgumentError, NotInitializedError, NumericalFailureError
from .filter_state import DelayLineState

logger = logging.getLogger(__name__)


class StreamProcessor(ABC):
    """
    Base class for filters, downsamplers and decimators.

    Attributes:
        status (FilterStatus): Lifecycle status.
        mode (ProcessingMode): Post-processing or real-time.
        precision (Precision): Working precision of apply().
    """

    def __init__(self) -> None:
        self._status: FilterStatus = FilterStatus.UNATTACHED
        self._mode: ProcessingMode = ProcessingMode.POST_PROCESSING
        self._precision: Precision = Precision.DOUBLE

    # ===== PROPERTIES =====

    @property
    def status(self) -> FilterStatus:
        return self._status

    @property
    def mode(self) -> ProcessingMode:
        return self._mode

    @property
    def precision(self) -> Precision:
        return self._precision

    @property
    def is_initialized(self) -> bool:
        return self._status != FilterStatus.UNATTACHED

    # ===== LIFECYCLE =====

    def _attach(self, mode: ProcessingMode, precision: Precision) -> None:
        """Validate and store the mode and precision, then mark attached."""
        if not isinstance(mode, ProcessingMode):
            message = f"Unknown processing mode {mode!r}"
            logger.error(message)
            raise InvalidArgumentError(message)
        if not isinstance(precision, Precision):
            message = f"Unknown precision {precision!r}"
            logger.error(message)
            raise InvalidArgumentError(message)
        self._mode = mode
        self._precision = precision
        self._status = FilterStatus.ATTACHED_IDLE

    def _require_initialized(self) -> None:
        if not self.is_initialized:
            message = f"{self.__class__.__name__} is not initialized"
            logger.error(message)
            raise NotInitializedError(message)

    def _as_signal(self, x: ArrayLike) -> np.ndarray:
        """Convert an input chunk to a 1-D array in the working precision."""
        signal: np.ndarray = np.asarray(x, dtype=self._precision.dtype)
        if signal.ndim != 1:
            message = f"Input signal must be 1-D, got shape {signal.shape}"
            logger.error(message)
            raise InvalidArgumentError(message)
        return signal

    def clear(self) -> None:
        """Release the state and return to the unattached status."""
        self._status = FilterStatus.UNATTACHED
        self._mode = ProcessingMode.POST_PROCESSING
        self._precision = Precision.DOUBLE

    def copy(self) -> "StreamProcessor":
        """Independent deep copy, state included."""
        return copy.deepcopy(self)

    def __copy__(self) -> "StreamProcessor":
        # A shallow copy would share the delay line
        return copy.deepcopy(self)

    def transfer(self) -> "StreamProcessor":
        """
        Move this instance's state into a new instance.

        Returns:
            A new instance holding the state. This instance is left
            unattached.
        """
        moved = self.__class__()
        moved.__dict__.update(self.__dict__)
        self.clear()
        return moved

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(status={self._status.value}, "
            f"mode={self._mode.value}, precision={self._precision.value})"
        )


class StatefulFilter(StreamProcessor):
    """
    A linear filter with a delay line.

    Subclasses convert a representation into working coefficients and run
    one pass of the filter from a given delay line.
    """

    def __init__(self) -> None:
        super().__init__()
        self._state: Optional[DelayLineState] = None
        self._zero_phase: bool = False

    @property
    def zero_phase(self) -> bool:
        return self._zero_phase

    @property
    def initial_conditions(self) -> np.ndarray:
        """Copy of the initial conditions."""
        self._require_initialized()
        return self._state.initial_conditions.copy()

    @property
    def delay_line(self) -> np.ndarray:
        """Copy of the current delay line."""
        self._require_initialized()
        return self._state.delay_line.copy()

    # ===== SUBCLASS HOOKS =====

    @abstractmethod
    def _load_representation(self, representation) -> Tuple[int, ...]:
        """Store working coefficients and return the delay line shape."""

    @abstractmethod
    def _filter(self, x: np.ndarray, delay_line: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """One causal pass from the given delay line; returns (y, final delay line)."""

    @abstractmethod
    def _release_representation(self) -> None:
        """Drop the working coefficients."""

    def _apply_zero_phase(self, x: np.ndarray) -> np.ndarray:
        """Forward pass, then a pass over the time-reversed output."""
        initial_conditions: np.ndarray = self._state.initial_conditions
        forward, _ = self._filter(x, initial_conditions)
        backward, _ = self._filter(forward[::-1].copy(), initial_conditions)
        return backward[::-1].copy()

    # ===== PUBLIC INTERFACE =====

    def initialize(
        self,
        representation,
        mode: ProcessingMode = ProcessingMode.POST_PROCESSING,
        precision: Precision = Precision.DOUBLE,
        zero_phase: bool = False
    ) -> None:
        """
        Attach the filter to a representation and allocate its state.

        Args:
            representation: The filter coefficients (type depends on the
                subclass).
            mode: Post-processing or real-time.
            precision: Working precision.
            zero_phase: Remove the phase response. Post-processing only.

        Raises:
            InvalidArgumentError: If the representation is invalid, or zero
                phase is requested in real-time mode.
        """
        self.clear()
        if zero_phase and mode == ProcessingMode.REAL_TIME:
            message = "Zero-phase filtering is not possible in real-time mode"
            logger.error(message)
            raise InvalidArgumentError(message)

        self._attach(mode, precision)
        try:
            state_shape: Tuple[int, ...] = self._load_representation(representation)
        except InvalidArgumentError:
            self.clear()
            raise

        self._zero_phase = bool(zero_phase)
        self._state = DelayLineState.zeros(state_shape, self._precision.dtype)
        logger.debug(
            f"Initialized {self.__class__.__name__}: mode={mode.value}, "
            f"precision={precision.value}, zero_phase={self._zero_phase}, "
            f"delay line shape={state_shape}"
        )

    def apply(self, x: ArrayLike) -> np.ndarray:
        """
        Filter a signal (post-processing) or the next chunk of a stream
        (real-time).

        Args:
            x: Input samples.

        Returns:
            np.ndarray: Filtered samples in the working precision, the same
                length as x.

        Raises:
            NotInitializedError: If the filter is not initialized.
            NumericalFailureError: If finite input produced non-finite
                output.
        """
        self._require_initialized()
        signal: np.ndarray = self._as_signal(x)
        if signal.size == 0:
            return np.zeros(0, dtype=self._precision.dtype)

        if self._mode == ProcessingMode.REAL_TIME:
            output, final_delay_line = self._filter(signal, self._state.delay_line)
            self._state.delay_line = final_delay_line
            self._status = FilterStatus.ATTACHED_STREAMING
        elif self._zero_phase:
            output = self._apply_zero_phase(signal)
        else:
            output, _ = self._filter(signal, self._state.initial_conditions)

        output = np.asarray(output, dtype=self._precision.dtype)
        if not np.all(np.isfinite(output)) and np.all(np.isfinite(signal)):
            message = f"{self.__class__.__name__} produced non-finite output"
            logger.error(message)
            raise NumericalFailureError(message)
        return output

    def set_initial_conditions(self, initial_conditions: ArrayLike) -> None:
        """
        Seed the delay line. The values are also kept as the reset target.

        Args:
            initial_conditions: Array with the delay line shape.

        Raises:
            NotInitializedError: If the filter is not initialized.
            InvalidArgumentError: If the shape is wrong or a value is not
                finite.
        """
        self._require_initialized()
        values: np.ndarray = np.asarray(initial_conditions, dtype=self._precision.dtype)
        if values.shape != self._state.shape:
            message = (
                f"Initial conditions must have shape {self._state.shape}, "
                f"got {values.shape}"
            )
            logger.error(message)
            raise InvalidArgumentError(message)
        if not np.all(np.isfinite(values)):
            message = "Initial conditions must be finite"
            logger.error(message)
            raise InvalidArgumentError(message)

        self._state.set_initial_conditions(values)
        self._status = FilterStatus.ATTACHED_IDLE

    def reset_initial_conditions(self) -> None:
        """
        Restore the delay line to the initial conditions.

        Raises:
            NotInitializedError: If the filter is not initialized.
        """
        self._require_initialized()
        self._state.reset()
        self._status = FilterStatus.ATTACHED_IDLE

    def clear(self) -> None:
        super().clear()
        self._state = None
        self._zero_phase = False
        self._release_representation()
