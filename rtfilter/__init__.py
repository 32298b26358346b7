"""
Real-Time Filtering Package
===========================

This package designs digital filters and applies them to signals, either
to a whole recording at once (post-processing) or chunk-by-chunk to an
unbounded stream (real-time).

The design path is made of pure functions that produce immutable filter
representations. The execution path owns mutable delay lines and phase
cursors, one set per filter instance.

Package Structure:
- polynomial/: Root finding, polynomial expansion and evaluation
- representations/: BA, ZPK and SOS filter value types
- design/: Analog prototypes, band transforms, bilinear transform,
  representation conversion, IIR and FIR design
- filters/: Stateful IIR, SOS and FIR filters, downsampler and decimator
- analysis/: Frequency response evaluation
"""

import logging

from .enums import (
    Bandtype,
    FilterStatus,
    FIRWindow,
    IIRFilterDomain,
    IIRPrototype,
    Precision,
    ProcessingMode,
    SOSPairing,
)
from .exceptions import (
    FilterError,
    InvalidArgumentError,
    NotInitializedError,
    NumericalFailureError,
)
from .representations import BA, SOS, ZPK

__version__ = "1.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "BA",
    "SOS",
    "ZPK",
    "Bandtype",
    "FilterStatus",
    "FIRWindow",
    "IIRFilterDomain",
    "IIRPrototype",
    "Precision",
    "ProcessingMode",
    "SOSPairing",
    "FilterError",
    "InvalidArgumentError",
    "NotInitializedError",
    "NumericalFailureError",
]
