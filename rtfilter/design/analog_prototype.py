"""
Analog Prototype Module
=======================

Normalized lowpass analog prototypes returned as zeros, poles and gain.
Every prototype has its critical frequency at 1 rad/s; the frequency
transforms move it (and turn it into a highpass, bandpass or bandstop).

BUTTERWORTH:
============
Maximally flat passband. The n poles are equally spaced on the unit circle
in the left half of the s-plane:

    p_k = exp(j * pi * (2k + n + 1) / (2n)),   k = 0, ..., n - 1

CHEBYSHEV TYPE I:
=================
Equiripple passband with rp dB of ripple, monotonic stopband. With

    eps = sqrt(10^(rp/10) - 1),   mu = asinh(1/eps) / n

the poles lie on an ellipse: p_k = -sinh(mu + j*theta_k). For even orders
the DC gain is 10^(-rp/20), i.e. the bottom of the ripple band.

CHEBYSHEV TYPE II:
==================
Monotonic passband, equiripple stopband at least rs dB down. Zeros sit on
the imaginary axis and the poles are reciprocals of a stretched
Butterworth pole set, using eps = 1 / sqrt(10^(rs/10) - 1).

BESSEL:
=======
Maximally flat group delay. The poles are the roots of the reverse Bessel
polynomial

    theta_n(s) = sum_k a_k s^k,   a_k = (2n - k)! / (2^(n-k) k! (n-k)!)

which are then scaled so the magnitude response is 3 dB down at 1 rad/s.
"""

import logging
import math

import numpy as np
from scipy import optimize

from ..exceptions import InvalidArgumentError, NumericalFailureError
from ..polynomial import polyval, roots
from ..representations import ZPK

logger = logging.getLogger(__name__)


def _check_order(order: int) -> None:
    if int(order) != order or order <= 0:
        message = f"Order={order} must be a positive integer"
        logger.error(message)
        raise InvalidArgumentError(message)


def butter(order: int) -> ZPK:
    """
    Butterworth analog lowpass prototype.

    Args:
        order: Filter order (number of poles). Must be positive.

    Returns:
        ZPK: No zeros, n poles on the left half of the unit circle, gain 1.

    Raises:
        InvalidArgumentError: If order is not positive.
    """
    _check_order(order)
    order = int(order)

    pole_index: np.ndarray = np.arange(order)
    angles: np.ndarray = np.pi * (2 * pole_index + order + 1) / (2.0 * order)
    poles: np.ndarray = np.exp(1j * angles)

    # Mirror the upper half so conjugate pairs match exactly
    half: int = order // 2
    if half > 0:
        poles[order - half:] = np.conj(poles[:half][::-1])
    # Odd orders have a pole at exactly -1
    if order % 2 == 1:
        poles[half] = -1.0

    return ZPK(zeros=np.zeros(0, dtype=np.complex128), poles=poles, gain=1.0)


def cheb1ap(order: int, ripple_db: float) -> ZPK:
    """
    Chebyshev type I analog lowpass prototype.

    Args:
        order: Filter order. Must be positive.
        ripple_db: Maximum passband ripple in dB. Must be positive.

    Returns:
        ZPK: The prototype. There are no finite zeros.

    Raises:
        InvalidArgumentError: If order or ripple_db is not positive.
    """
    _check_order(order)
    if not ripple_db > 0:
        message = f"Passband ripple={ripple_db} dB must be positive"
        logger.error(message)
        raise InvalidArgumentError(message)
    order = int(order)

    epsilon: float = math.sqrt(10.0 ** (0.1 * ripple_db) - 1.0)
    mu: float = math.asinh(1.0 / epsilon) / order

    m: np.ndarray = np.arange(-order + 1, order, 2)
    theta: np.ndarray = np.pi * m / (2.0 * order)
    poles: np.ndarray = -np.sinh(mu + 1j * theta)

    gain: float = float(np.real(np.prod(-poles)))
    # Even orders start the passband at the bottom of the ripple
    if order % 2 == 0:
        gain = gain / math.sqrt(1.0 + epsilon * epsilon)

    return ZPK(zeros=np.zeros(0, dtype=np.complex128), poles=poles, gain=gain)


def cheb2ap(order: int, stopband_attenuation_db: float) -> ZPK:
    """
    Chebyshev type II analog lowpass prototype.

    Args:
        order: Filter order. Must be positive.
        stopband_attenuation_db: Minimum stopband attenuation in dB. Must
            be positive.

    Returns:
        ZPK: The prototype, with zeros on the imaginary axis.

    Raises:
        InvalidArgumentError: If order or stopband_attenuation_db is not
            positive.
    """
    _check_order(order)
    if not stopband_attenuation_db > 0:
        message = (
            f"Stopband attenuation={stopband_attenuation_db} dB must be positive"
        )
        logger.error(message)
        raise InvalidArgumentError(message)
    order = int(order)

    epsilon: float = 1.0 / math.sqrt(10.0 ** (0.1 * stopband_attenuation_db) - 1.0)
    mu: float = math.asinh(1.0 / epsilon) / order

    # An odd order has one zero at infinity: drop the m = 0 term
    if order % 2 == 1:
        m = np.concatenate((np.arange(-order + 1, 0, 2), np.arange(2, order, 2)))
    else:
        m = np.arange(-order + 1, order, 2)
    zeros: np.ndarray = -np.conj(1j / np.sin(m * np.pi / (2.0 * order)))

    butterworth_poles: np.ndarray = -np.exp(
        1j * np.pi * np.arange(-order + 1, order, 2) / (2.0 * order)
    )
    stretched: np.ndarray = (
        np.sinh(mu) * butterworth_poles.real
        + 1j * np.cosh(mu) * butterworth_poles.imag
    )
    poles: np.ndarray = 1.0 / stretched

    gain: float = float(np.real(np.prod(-poles) / np.prod(-zeros)))
    return ZPK(zeros=zeros, poles=poles, gain=gain)


def bessel_polynomial(order: int) -> np.ndarray:
    """
    Coefficients of the reverse Bessel polynomial, highest order first.

    Example:
        order=3 -> [1, 6, 15, 15] (s^3 + 6s^2 + 15s + 15)
    """
    _check_order(order)
    order = int(order)
    ascending = [
        math.factorial(2 * order - k)
        // (2 ** (order - k) * math.factorial(k) * math.factorial(order - k))
        for k in range(order + 1)
    ]
    return np.array(ascending[::-1], dtype=np.float64)


def _three_db_frequency(coefficients: np.ndarray) -> float:
    """Frequency (rad/s) where a0 / theta(j w) drops to 1/sqrt(2)."""
    dc_value: float = float(coefficients[-1])
    target: float = 1.0 / math.sqrt(2.0)

    def magnitude_excess(frequency: float) -> float:
        response = dc_value / polyval(coefficients, 1j * frequency)
        return float(abs(response)) - target

    # |H| falls monotonically, so double the upper edge until it brackets
    upper: float = 1.0
    while magnitude_excess(upper) > 0:
        upper *= 2.0
        if upper > 1.0e6:
            message = "Could not bracket the Bessel -3 dB frequency"
            logger.error(message)
            raise NumericalFailureError(message)

    return float(optimize.brentq(magnitude_excess, 0.0, upper, xtol=1.0e-15))


def bessel(order: int) -> ZPK:
    """
    Bessel analog lowpass prototype normalized to -3 dB at 1 rad/s.

    Args:
        order: Filter order. Must be positive.

    Returns:
        ZPK: No zeros, n poles, unity DC gain.

    Raises:
        InvalidArgumentError: If order is not positive.
        NumericalFailureError: If the polynomial roots cannot be computed.
    """
    coefficients: np.ndarray = bessel_polynomial(order)
    unscaled_poles: np.ndarray = roots(coefficients)

    frequency_3db: float = _three_db_frequency(coefficients)
    poles: np.ndarray = unscaled_poles / frequency_3db
    gain: float = float(np.real(np.prod(-poles)))

    logger.debug(f"Bessel order {order}: -3 dB at {frequency_3db:.6f} rad/s before scaling")
    return ZPK(zeros=np.zeros(0, dtype=np.complex128), poles=poles, gain=gain)
