"""
Representations Module
======================

Immutable value types for the three interconvertible filter
representations:
- ZPK: zeros, poles and gain
- BA: numerator and denominator (transfer function) coefficients
- SOS: cascaded second order sections

Conversion between them lives in rtfilter.design.conversion.
"""

from .second_order_sections import SOS
from .transfer_function import BA
from .zero_pole_gain import ZPK

__all__ = [
    "BA",
    "SOS",
    "ZPK",
]
