"""
Filters Module
==============

Execution-time components. Each instance owns its state and works in
post-processing or real-time mode:
- IIRFilter: transfer function (BA) filter
- SOSFilter: cascade of second order sections
- FIRFilter: taps-only filter with exact group delay removal
- Downsampler: phase-tracked sample selection
- Decimator: anti-alias FIR lowpass followed by downsampling
"""

from .base_filter import StatefulFilter, StreamProcessor
from .decimate import Decimator
from .downsample import Downsampler
from .filter_state import DelayLineState, DownsampleState
from .fir_filter import FIRFilter, is_linear_phase
from .iir_filter import IIRFilter
from .sos_filter import SOSFilter

__all__ = [
    "StatefulFilter",
    "StreamProcessor",
    "Decimator",
    "Downsampler",
    "DelayLineState",
    "DownsampleState",
    "FIRFilter",
    "is_linear_phase",
    "IIRFilter",
    "SOSFilter",
]
