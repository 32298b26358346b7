"""
Design Module
=============

Pure functions that design filters and convert between representations:
- analog_prototype: Butterworth, Chebyshev I/II and Bessel lowpass prototypes
- frequency_transform: Lowpass to lowpass/highpass/bandpass/bandstop
- bilinear_transform: Analog to digital mapping
- conversion: BA <-> ZPK <-> SOS
- iir_design: Single-call IIR design
- fir_design: Window-method FIR design and the Hilbert transformer
"""

from .analog_prototype import bessel, bessel_polynomial, butter, cheb1ap, cheb2ap
from .bilinear_transform import zpkbilinear
from .conversion import sos2tf, sos2zpk, tf2zpk, zpk2sos, zpk2tf
from .fir_design import (
    design_window,
    fir1_bandpass,
    fir1_bandstop,
    fir1_highpass,
    fir1_lowpass,
    hilbert_transformer,
    optimal_blackman_window,
)
from .frequency_transform import lp2bp, lp2bs, lp2hp, lp2lp
from .iir_design import (
    IIRFilterSpecification,
    design_ba_iir_filter,
    design_sos_iir_filter,
    design_zpk_iir_filter,
)

__all__ = [
    "bessel",
    "bessel_polynomial",
    "butter",
    "cheb1ap",
    "cheb2ap",
    "zpkbilinear",
    "sos2tf",
    "sos2zpk",
    "tf2zpk",
    "zpk2sos",
    "zpk2tf",
    "design_window",
    "fir1_bandpass",
    "fir1_bandstop",
    "fir1_highpass",
    "fir1_lowpass",
    "hilbert_transformer",
    "optimal_blackman_window",
    "lp2bp",
    "lp2bs",
    "lp2hp",
    "lp2lp",
    "IIRFilterSpecification",
    "design_ba_iir_filter",
    "design_sos_iir_filter",
    "design_zpk_iir_filter",
]
