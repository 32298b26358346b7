"""
Frequency Response Module
=========================

Complex frequency responses of filter representations, evaluated
numerically (no plotting).

Digital filters are evaluated on the unit circle, z = exp(j w), with w in
rad/sample (pi is Nyquist). Transfer function coefficients are in powers of
z^-1, so

    H(e^jw) = sum_k b_k e^(-jwk) / sum_k a_k e^(-jwk)

Analog filters are evaluated on the imaginary axis, s = j w, with w in
rad/s.
"""

import logging
from typing import Tuple, Union

import numpy as np
from numpy.typing import ArrayLike

from ..exceptions import InvalidArgumentError
from ..polynomial import polyval, roots
from ..representations import BA, SOS, ZPK

logger = logging.getLogger(__name__)

DEFAULT_NUMBER_OF_FREQUENCIES: int = 512


def _frequencies(worN: Union[int, ArrayLike]) -> np.ndarray:
    """
    An int is a count of equally spaced frequencies on [0, pi); anything
    else, a float scalar included, is the frequencies themselves.
    """
    if isinstance(worN, (int, np.integer)) and not isinstance(worN, bool):
        count: int = int(worN)
        if count < 1:
            message = f"Number of frequencies={count} must be positive"
            logger.error(message)
            raise InvalidArgumentError(message)
        return np.linspace(0.0, np.pi, count, endpoint=False)
    frequencies: np.ndarray = np.atleast_1d(np.asarray(worN, dtype=np.float64))
    if not np.all(np.isfinite(frequencies)):
        message = "Frequencies must be finite"
        logger.error(message)
        raise InvalidArgumentError(message)
    return frequencies


def _delay_polynomial(coefficients: np.ndarray, w: np.ndarray) -> np.ndarray:
    """sum_k c_k exp(-j w k)"""
    return polyval(coefficients[::-1], np.exp(-1j * w))


def freqz(ba: BA, worN: Union[int, ArrayLike] = DEFAULT_NUMBER_OF_FREQUENCIES) -> Tuple[np.ndarray, np.ndarray]:
    """
    Frequency response of a digital transfer function.

    Args:
        ba: The filter.
        worN: Number of equally spaced frequencies on [0, pi), or the
            frequencies themselves in rad/sample.

    Returns:
        Tuple of (w, h): frequencies and complex responses.
    """
    w: np.ndarray = _frequencies(worN)
    h: np.ndarray = _delay_polynomial(ba.numerator, w) / _delay_polynomial(ba.denominator, w)
    return w, h


def sosfreqz(sos: SOS, worN: Union[int, ArrayLike] = DEFAULT_NUMBER_OF_FREQUENCIES) -> Tuple[np.ndarray, np.ndarray]:
    """
    Frequency response of a cascade of second order sections.

    Returns:
        Tuple of (w, h): the product of the section responses.
    """
    w: np.ndarray = _frequencies(worN)
    h: np.ndarray = np.ones(w.shape, dtype=np.complex128)
    for numerator, denominator in zip(sos.numerators, sos.denominators):
        h = h * _delay_polynomial(numerator, w) / _delay_polynomial(denominator, w)
    return w, h


def zpk_response(zpk: ZPK, w: ArrayLike, analog: bool = False) -> np.ndarray:
    """
    Response of zeros, poles and gain at the given frequencies.

        H = k * prod(x - z_i) / prod(x - p_j),   x = j w or exp(j w)

    Args:
        zpk: The filter.
        w: Frequencies (rad/s if analog, rad/sample otherwise).
        analog: Evaluate on the imaginary axis instead of the unit circle.

    Returns:
        np.ndarray: Complex responses.
    """
    frequencies: np.ndarray = np.atleast_1d(np.asarray(w, dtype=np.float64))
    x: np.ndarray = 1j * frequencies if analog else np.exp(1j * frequencies)

    numerator: np.ndarray = np.ones(x.shape, dtype=np.complex128)
    for zero in zpk.zeros:
        numerator = numerator * (x - zero)
    denominator: np.ndarray = np.ones(x.shape, dtype=np.complex128)
    for pole in zpk.poles:
        denominator = denominator * (x - pole)
    return zpk.gain * numerator / denominator


def freqs(ba: BA, w: ArrayLike) -> np.ndarray:
    """
    Response of an analog transfer function at the given frequencies (rad/s).
    """
    s: np.ndarray = 1j * np.atleast_1d(np.asarray(w, dtype=np.float64))
    return polyval(ba.numerator, s) / polyval(ba.denominator, s)


def _poles(representation: Union[BA, ZPK, SOS]) -> np.ndarray:
    if isinstance(representation, ZPK):
        return representation.poles
    if isinstance(representation, BA):
        return roots(representation.denominator)
    if isinstance(representation, SOS):
        section_poles = [roots(np.trim_zeros(row, "b")) for row in representation.denominators]
        return np.concatenate(section_poles)
    message = f"Cannot find the poles of {type(representation).__name__}"
    logger.error(message)
    raise InvalidArgumentError(message)


def is_stable(representation: Union[BA, ZPK, SOS], analog: bool = False) -> bool:
    """
    True if every pole is strictly inside the unit circle (digital) or
    strictly in the left half plane (analog).
    """
    poles: np.ndarray = _poles(representation)
    if poles.size == 0:
        return True
    if analog:
        return bool(np.all(poles.real < 0))
    return bool(np.all(np.abs(poles) < 1.0))
