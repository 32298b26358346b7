"""
Enumerations shared by the design and execution modules.
"""

from enum import Enum

import numpy as np


class ProcessingMode(Enum):
    """
    How a filter treats its state between apply() calls.

    POST_PROCESSING: every call is independent and starts from the initial
        conditions. The whole signal is assumed to be available.
    REAL_TIME: the delay line (or phase) carries over from one call to the
        next, so a stream can be fed in arbitrary chunks.
    """
    POST_PROCESSING = "post_processing"
    REAL_TIME = "real_time"


class Precision(Enum):
    """Floating point precision used when applying a filter."""
    FLOAT = "float32"
    DOUBLE = "float64"

    @property
    def dtype(self) -> np.dtype:
        """The numpy dtype for this precision."""
        return np.dtype(self.value)


class FilterStatus(Enum):
    """Lifecycle of an execution-time filter."""
    UNATTACHED = "unattached"
    ATTACHED_IDLE = "attached_idle"
    ATTACHED_STREAMING = "attached_streaming"


class Bandtype(Enum):
    """Filter passband."""
    LOWPASS = "lowpass"
    HIGHPASS = "highpass"
    BANDPASS = "bandpass"
    BANDSTOP = "bandstop"


class IIRPrototype(Enum):
    """Analog prototype from which an IIR filter is designed."""
    BUTTERWORTH = "butterworth"
    BESSEL = "bessel"
    CHEBYSHEV1 = "chebyshev1"
    CHEBYSHEV2 = "chebyshev2"


class IIRFilterDomain(Enum):
    """Whether an IIR design targets the z-plane or the s-plane."""
    DIGITAL = "digital"
    ANALOG = "analog"


class SOSPairing(Enum):
    """
    Pole/zero pairing strategy for second order sections.

    NEAREST: pair every pole with its nearest zero, padding odd orders so
        that every section is a biquad.
    KEEP_ODD: same pairing, but odd-order systems keep exactly one first
        order section.
    """
    NEAREST = "nearest"
    KEEP_ODD = "keep_odd"


class FIRWindow(Enum):
    """Window used for window-method FIR design."""
    HAMMING = "hamming"
    BARTLETT = "bartlett"
    HANN = "hann"
    BLACKMAN_OPT = "blackman_opt"
