"""
Frequency Transform Module
==========================

Maps a normalized analog lowpass prototype (cutoff at 1 rad/s) onto a
lowpass, highpass, bandpass or bandstop filter at a target frequency.
All four work directly on zeros and poles.

SUBSTITUTIONS:
==============
    lowpass  -> lowpass:   s -> s / w0
    lowpass  -> highpass:  s -> w0 / s
    lowpass  -> bandpass:  s -> (s^2 + w0^2) / (s * bw)
    lowpass  -> bandstop:  s -> (s * bw) / (s^2 + w0^2)

Where w0 is the (geometric) centre frequency and bw the bandwidth, both in
rad/s. The band transforms double the order: every root r of the prototype
becomes the two roots of a quadratic in s.

ZEROS AT INFINITY:
==================
A prototype with n poles and m < n zeros has n - m zeros at infinity. The
highpass transform sends them to the origin, the bandpass transform to the
origin, and the bandstop transform to +/- j*w0.
"""

import logging

import numpy as np

from ..exceptions import InvalidArgumentError
from ..representations import ZPK

logger = logging.getLogger(__name__)


def _validate(zpk: ZPK, **frequencies: float) -> None:
    """Reject empty prototypes and non-positive frequencies."""
    if zpk.is_empty():
        message = "ZPK has no zeros or poles"
        logger.error(message)
        raise InvalidArgumentError(message)
    if zpk.number_of_zeros > zpk.number_of_poles:
        message = (
            f"ZPK has more zeros ({zpk.number_of_zeros}) than poles "
            f"({zpk.number_of_poles})"
        )
        logger.error(message)
        raise InvalidArgumentError(message)
    for name, value in frequencies.items():
        if not (np.isfinite(value) and value > 0):
            message = f"{name}={value} must be positive"
            logger.error(message)
            raise InvalidArgumentError(message)


def lp2lp(zpk: ZPK, w0: float) -> ZPK:
    """
    Move the cutoff of a lowpass prototype to w0.

    Args:
        zpk: Lowpass prototype.
        w0: Desired cutoff frequency in rad/s. Must be positive.

    Returns:
        ZPK: Lowpass filter with cutoff w0.

    Raises:
        InvalidArgumentError: If zpk is empty or w0 is not positive.
    """
    _validate(zpk, w0=w0)
    degree: int = zpk.relative_degree

    zeros: np.ndarray = zpk.zeros * w0
    poles: np.ndarray = zpk.poles * w0
    # Each finite zero/pole scaled the gain by 1/w0 or w0
    gain: float = zpk.gain * w0 ** degree
    return ZPK(zeros=zeros, poles=poles, gain=gain)


def lp2hp(zpk: ZPK, w0: float) -> ZPK:
    """
    Transform a lowpass prototype into a highpass filter with cutoff w0.

    Args:
        zpk: Lowpass prototype.
        w0: Desired cutoff frequency in rad/s. Must be positive.

    Returns:
        ZPK: Highpass filter. Zeros at infinity become zeros at the origin.

    Raises:
        InvalidArgumentError: If zpk is empty or w0 is not positive.
    """
    _validate(zpk, w0=w0)
    degree: int = zpk.relative_degree

    zeros: np.ndarray = w0 / zpk.zeros
    poles: np.ndarray = w0 / zpk.poles
    zeros = np.append(zeros, np.zeros(degree))

    gain: float = zpk.gain * float(np.real(np.prod(-zpk.zeros) / np.prod(-zpk.poles)))
    return ZPK(zeros=zeros, poles=poles, gain=gain)


def _quadratic_roots(centre: np.ndarray, w0: float) -> np.ndarray:
    """Both roots of s^2 - 2*centre*s + w0^2 = 0, first all '+' then all '-'."""
    discriminant: np.ndarray = np.sqrt(centre ** 2 - w0 ** 2)
    return np.concatenate((centre + discriminant, centre - discriminant))


def lp2bp(zpk: ZPK, w0: float, bw: float) -> ZPK:
    """
    Transform a lowpass prototype into a bandpass filter.

    Each root r maps to the roots of s^2 - (r * bw) s + w0^2 = 0.

    Args:
        zpk: Lowpass prototype.
        w0: Centre frequency in rad/s. Must be positive.
        bw: Passband width in rad/s. Must be positive.

    Returns:
        ZPK: Bandpass filter of twice the prototype order.

    Raises:
        InvalidArgumentError: If zpk is empty or w0 or bw is not positive.
    """
    _validate(zpk, w0=w0, bw=bw)
    degree: int = zpk.relative_degree

    zeros: np.ndarray = _quadratic_roots(zpk.zeros.astype(np.complex128) * bw / 2.0, w0)
    poles: np.ndarray = _quadratic_roots(zpk.poles.astype(np.complex128) * bw / 2.0, w0)
    zeros = np.append(zeros, np.zeros(degree))

    gain: float = zpk.gain * bw ** degree
    return ZPK(zeros=zeros, poles=poles, gain=gain)


def lp2bs(zpk: ZPK, w0: float, bw: float) -> ZPK:
    """
    Transform a lowpass prototype into a bandstop filter.

    Each root r maps to the roots of s^2 - (bw / r) s + w0^2 = 0.

    Args:
        zpk: Lowpass prototype.
        w0: Centre frequency in rad/s. Must be positive.
        bw: Stopband width in rad/s. Must be positive.

    Returns:
        ZPK: Bandstop filter of twice the prototype order, with the added
            zeros at +/- j*w0.

    Raises:
        InvalidArgumentError: If zpk is empty or w0 or bw is not positive.
    """
    _validate(zpk, w0=w0, bw=bw)
    degree: int = zpk.relative_degree

    zeros: np.ndarray = _quadratic_roots((bw / 2.0) / zpk.zeros, w0)
    poles: np.ndarray = _quadratic_roots((bw / 2.0) / zpk.poles, w0)
    zeros = np.concatenate(
        (zeros, np.full(degree, 1j * w0), np.full(degree, -1j * w0))
    )

    gain: float = zpk.gain * float(np.real(np.prod(-zpk.zeros) / np.prod(-zpk.poles)))
    return ZPK(zeros=zeros, poles=poles, gain=gain)
