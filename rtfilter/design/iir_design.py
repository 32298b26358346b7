"""
IIR Filter Design Module
========================

Single-call design of Butterworth, Bessel and Chebyshev (type I and II)
filters in any of the three representations.

DESIGN PIPELINE:
================
1. Analog lowpass prototype with its cutoff at 1 rad/s.
2. Digital only: pre-warp the critical frequencies,

       w_analog = 2 * fs * tan(pi * W / fs),   fs = 2

   where W is normalized so 1 is the Nyquist frequency. This undoes the
   frequency compression of the bilinear transform at the band edges.
3. Frequency transform to the requested band type. Band filters use the
   geometric centre w0 = sqrt(w_low * w_high) and the width
   bw = w_high - w_low.
4. Digital only: bilinear transform with fs = 2.
5. Conversion to BA or SOS if requested.

A filter of order n has n poles for lowpass/highpass and 2n poles for
bandpass/bandstop designs.

Example:
    >>> sos = design_sos_iir_filter(
    ...     order=4,
    ...     critical_frequencies=(0.1, 0.3),
    ...     btype=Bandtype.BANDPASS,
    ...     prototype=IIRPrototype.BUTTERWORTH,
    ... )
    >>> sos.number_of_sections
    4
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

import numpy as np

from ..enums import Bandtype, IIRFilterDomain, IIRPrototype, SOSPairing
from ..exceptions import InvalidArgumentError, NumericalFailureError
from ..representations import BA, SOS, ZPK
from .analog_prototype import bessel, butter, cheb1ap, cheb2ap
from .bilinear_transform import zpkbilinear
from .conversion import zpk2sos, zpk2tf
from .frequency_transform import lp2bp, lp2bs, lp2hp, lp2lp

logger = logging.getLogger(__name__)

# Sampling rate used for pre-warping and the bilinear transform, so that
# normalized frequencies run from 0 to 1 (Nyquist)
DESIGN_SAMPLING_RATE: float = 2.0


@dataclass
class IIRFilterSpecification:
    """
    Parameters of an IIR filter design.

    Attributes:
        order: Prototype order (number of prototype poles).
        critical_frequencies: One frequency for lowpass/highpass, a
            (low, high) pair for bandpass/bandstop. Digital frequencies are
            normalized to (0, 1) with 1 the Nyquist frequency; analog
            frequencies are in rad/s.
        btype: Band type.
        prototype: Analog prototype.
        domain: Digital (z-plane) or analog (s-plane) design.
        passband_ripple_db: Passband ripple. Required for Chebyshev I.
        stopband_attenuation_db: Stopband attenuation. Required for
            Chebyshev II.
    """
    order: int
    critical_frequencies: Union[float, Tuple[float, float]]
    btype: Bandtype = Bandtype.LOWPASS
    prototype: IIRPrototype = IIRPrototype.BUTTERWORTH
    domain: IIRFilterDomain = IIRFilterDomain.DIGITAL
    passband_ripple_db: Optional[float] = None
    stopband_attenuation_db: Optional[float] = None

    def __post_init__(self) -> None:
        """Normalize the critical frequencies and validate everything."""
        self.critical_frequencies = self._as_frequency_tuple(self.critical_frequencies)
        self._validate()

    @staticmethod
    def _as_frequency_tuple(frequencies) -> Tuple[float, ...]:
        values: np.ndarray = np.atleast_1d(np.asarray(frequencies, dtype=np.float64)).ravel()
        return tuple(float(value) for value in values)

    def _fail(self, message: str) -> None:
        logger.error(message)
        raise InvalidArgumentError(message)

    def _validate(self) -> None:
        """Validate the specification."""
        # Enumerations
        if not isinstance(self.btype, Bandtype):
            self._fail(f"Unknown band type {self.btype!r}")
        if not isinstance(self.prototype, IIRPrototype):
            self._fail(f"Unknown prototype {self.prototype!r}")
        if not isinstance(self.domain, IIRFilterDomain):
            self._fail(f"Unknown filter domain {self.domain!r}")

        # Order
        if isinstance(self.order, bool) or int(self.order) != self.order or self.order < 1:
            self._fail(f"Order={self.order} must be a positive integer")
        self.order = int(self.order)

        # Critical frequencies
        frequencies: Tuple[float, ...] = self.critical_frequencies
        is_band: bool = self.btype in (Bandtype.BANDPASS, Bandtype.BANDSTOP)
        if is_band and len(frequencies) != 2:
            self._fail(
                f"A {self.btype.value} filter needs two critical frequencies, "
                f"got {len(frequencies)}"
            )
        if not is_band and len(frequencies) != 1:
            self._fail(
                f"A {self.btype.value} filter needs one critical frequency, "
                f"got {len(frequencies)}"
            )
        if not all(np.isfinite(frequencies)):
            self._fail(f"Critical frequencies {frequencies} must be finite")
        if is_band and not frequencies[0] < frequencies[1]:
            self._fail(
                f"Low critical frequency {frequencies[0]} must be less than "
                f"high critical frequency {frequencies[1]}"
            )
        if self.domain == IIRFilterDomain.DIGITAL:
            if not all(0.0 < frequency < 1.0 for frequency in frequencies):
                self._fail(
                    f"Digital critical frequencies {frequencies} must be in "
                    f"(0, 1), where 1 is the Nyquist frequency"
                )
        elif not all(frequency > 0.0 for frequency in frequencies):
            self._fail(f"Analog critical frequencies {frequencies} must be positive")

        # Ripple
        if self.prototype == IIRPrototype.CHEBYSHEV1:
            if self.passband_ripple_db is None or not self.passband_ripple_db > 0:
                self._fail(
                    f"Chebyshev I needs a positive passband ripple, "
                    f"got {self.passband_ripple_db}"
                )
        if self.prototype == IIRPrototype.CHEBYSHEV2:
            if self.stopband_attenuation_db is None or not self.stopband_attenuation_db > 0:
                self._fail(
                    f"Chebyshev II needs a positive stopband attenuation, "
                    f"got {self.stopband_attenuation_db}"
                )

    @property
    def is_digital(self) -> bool:
        return self.domain == IIRFilterDomain.DIGITAL


# ===== PIPELINE STAGES =====

def _analog_prototype(specification: IIRFilterSpecification) -> ZPK:
    if specification.prototype == IIRPrototype.BUTTERWORTH:
        return butter(specification.order)
    if specification.prototype == IIRPrototype.BESSEL:
        return bessel(specification.order)
    if specification.prototype == IIRPrototype.CHEBYSHEV1:
        return cheb1ap(specification.order, specification.passband_ripple_db)
    return cheb2ap(specification.order, specification.stopband_attenuation_db)


def _prewarp(specification: IIRFilterSpecification) -> np.ndarray:
    """Critical frequencies in rad/s for the analog design."""
    frequencies: np.ndarray = np.asarray(specification.critical_frequencies)
    if not specification.is_digital:
        return frequencies
    fs: float = DESIGN_SAMPLING_RATE
    return 2.0 * fs * np.tan(np.pi * frequencies / fs)


def _band_transform(prototype: ZPK, btype: Bandtype, warped: np.ndarray) -> ZPK:
    if btype == Bandtype.LOWPASS:
        return lp2lp(prototype, float(warped[0]))
    if btype == Bandtype.HIGHPASS:
        return lp2hp(prototype, float(warped[0]))

    w0: float = float(np.sqrt(warped[0] * warped[1]))
    bw: float = float(warped[1] - warped[0])
    if btype == Bandtype.BANDPASS:
        return lp2bp(prototype, w0, bw)
    return lp2bs(prototype, w0, bw)


def _check_design(zpk: ZPK, specification: IIRFilterSpecification) -> None:
    """Reject non-finite gains and unstable digital poles."""
    if not np.isfinite(zpk.gain):
        message = f"Design produced a non-finite gain for {specification}"
        logger.error(message)
        raise NumericalFailureError(message)

    if specification.is_digital and zpk.number_of_poles > 0:
        largest_pole: float = float(np.max(np.abs(zpk.poles)))
        if largest_pole >= 1.0:
            message = (
                f"Design is unstable: pole magnitude {largest_pole:.17g} is not "
                f"inside the unit circle"
            )
            logger.error(message)
            raise NumericalFailureError(message)


def _resolve(specification: Optional[IIRFilterSpecification], parameters: dict) -> IIRFilterSpecification:
    if specification is None:
        return IIRFilterSpecification(**parameters)
    if parameters:
        message = (
            f"Pass either a specification or design parameters, "
            f"not both (got {sorted(parameters)})"
        )
        logger.error(message)
        raise InvalidArgumentError(message)
    if not isinstance(specification, IIRFilterSpecification):
        message = f"Expected an IIRFilterSpecification, got {type(specification).__name__}"
        logger.error(message)
        raise InvalidArgumentError(message)
    return specification


# ===== PUBLIC DESIGN FUNCTIONS =====

def design_zpk_iir_filter(
    specification: Optional[IIRFilterSpecification] = None,
    **parameters
) -> ZPK:
    """
    Design an IIR filter as zeros, poles and gain.

    Args:
        specification: A prebuilt specification, or None to build one from
            the keyword parameters.
        **parameters: The IIRFilterSpecification fields (order,
            critical_frequencies, btype, prototype, domain,
            passband_ripple_db, stopband_attenuation_db).

    Returns:
        ZPK: The filter. Digital designs have as many zeros as poles.

    Raises:
        InvalidArgumentError: If the specification is invalid.
        NumericalFailureError: If the design is not finite or, for digital
            designs, not stable.
    """
    specification = _resolve(specification, parameters)

    prototype: ZPK = _analog_prototype(specification)
    warped: np.ndarray = _prewarp(specification)
    zpk: ZPK = _band_transform(prototype, specification.btype, warped)

    if specification.is_digital:
        zpk = zpkbilinear(zpk, DESIGN_SAMPLING_RATE)

    _check_design(zpk, specification)

    logger.debug(
        f"Designed {specification.prototype.value} {specification.btype.value} "
        f"({specification.domain.value}) with {zpk.number_of_poles} poles"
    )
    return zpk


def design_ba_iir_filter(
    specification: Optional[IIRFilterSpecification] = None,
    **parameters
) -> BA:
    """
    Design an IIR filter as a transfer function.

    High order or narrow band designs are better served by
    design_sos_iir_filter, since the expanded coefficients lose precision.

    Args:
        specification: A prebuilt specification, or None.
        **parameters: The IIRFilterSpecification fields.

    Returns:
        BA: The filter.

    Raises:
        InvalidArgumentError: If the specification is invalid.
        NumericalFailureError: If the design is not finite or not stable.
    """
    zpk: ZPK = design_zpk_iir_filter(specification, **parameters)
    try:
        return zpk2tf(zpk)
    except InvalidArgumentError as error:
        message = f"Could not expand the design into coefficients: {error}"
        logger.error(message)
        raise NumericalFailureError(message) from error


def design_sos_iir_filter(
    specification: Optional[IIRFilterSpecification] = None,
    pairing: SOSPairing = SOSPairing.NEAREST,
    **parameters
) -> SOS:
    """
    Design an IIR filter as cascaded second order sections.

    Args:
        specification: A prebuilt specification, or None.
        pairing: Pole/zero pairing strategy.
        **parameters: The IIRFilterSpecification fields.

    Returns:
        SOS: The filter. The section with the poles closest to the unit
            circle is last.

    Raises:
        InvalidArgumentError: If the specification is invalid, or an analog
            design has fewer zeros than poles.
        NumericalFailureError: If the design is not finite or not stable.
    """
    specification = _resolve(specification, parameters)
    zpk: ZPK = design_zpk_iir_filter(specification)
    return zpk2sos(zpk, pairing=pairing, analog=not specification.is_digital)
