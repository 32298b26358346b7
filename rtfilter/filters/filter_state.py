"""
Filter State Module
===================

The mutable part of an execution-time filter. Each filter instance owns
exactly one state object; copying the filter copies the state.

DelayLineState:
    The transposed direct form II delay line of an IIR/FIR filter (or one
    row per section for a cascade), together with the initial conditions
    it is reset to.

        BA filter:   shape (max(len(b), len(a)) - 1,)
        SOS filter:  shape (number_of_sections, 2)

DownsampleState:
    The phase cursor of a downsampler: which sample of the next chunk is
    the first one kept.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np


@dataclass
class DelayLineState:
    """
    Delay line and the initial conditions it resets to.

    Attributes:
        initial_conditions: Values loaded into the delay line on reset.
        delay_line: Current delay line values.
    """
    initial_conditions: np.ndarray
    delay_line: np.ndarray

    @classmethod
    def zeros(cls, shape: Tuple[int, ...], dtype: np.dtype) -> "DelayLineState":
        """A state with zero initial conditions."""
        return cls(
            initial_conditions=np.zeros(shape, dtype=dtype),
            delay_line=np.zeros(shape, dtype=dtype)
        )

    @property
    def shape(self) -> Tuple[int, ...]:
        return self.initial_conditions.shape

    def set_initial_conditions(self, initial_conditions: np.ndarray) -> None:
        """Store new initial conditions and load them into the delay line."""
        self.initial_conditions = np.array(initial_conditions, copy=True)
        self.reset()

    def reset(self) -> None:
        """Load the initial conditions into the delay line."""
        self.delay_line = self.initial_conditions.copy()


@dataclass
class DownsampleState:
    """
    Phase cursor of a downsampler.

    Attributes:
        factor: Downsampling factor q.
        initial_phase: Phase restored on reset, in [0, q - 1].
        phase: Index (into the next chunk) of the next sample to keep.
    """
    factor: int
    initial_phase: int = 0
    phase: int = 0

    def advance(self, number_of_samples: int) -> None:
        """Move the cursor past a chunk of the given length."""
        self.phase = (self.phase - number_of_samples) % self.factor

    def reset(self) -> None:
        self.phase = self.initial_phase
