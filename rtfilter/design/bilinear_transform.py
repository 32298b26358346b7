"""
Bilinear Transform Module
=========================

Converts an analog filter into a digital filter with Tustin's method.

Every zero and pole is mapped from the s-plane to the z-plane with

    z = (2*fs + s) / (2*fs - s)

which sends the left half plane into the unit disk, so stable analog
filters stay stable. The frequency axis is compressed (w_digital =
2*atan(w_analog / (2*fs))), which is why the design routines pre-warp the
critical frequencies before calling this.

Analog zeros at infinity land on the Nyquist frequency, z = -1.
"""

import logging

import numpy as np

from ..exceptions import InvalidArgumentError
from ..representations import ZPK

logger = logging.getLogger(__name__)


def zpkbilinear(zpk: ZPK, fs: float) -> ZPK:
    """
    Bilinear transform of an analog ZPK filter.

    Args:
        zpk: Analog zeros, poles and gain.
        fs: Sampling rate in Hz. Must be positive.

    Returns:
        ZPK: Digital zeros, poles and gain with as many zeros as poles.

    Raises:
        InvalidArgumentError: If there are more zeros than poles or fs is
            not positive.
    """
    if not (np.isfinite(fs) and fs > 0):
        message = f"Sampling rate fs={fs} must be positive"
        logger.error(message)
        raise InvalidArgumentError(message)

    if zpk.number_of_zeros > zpk.number_of_poles:
        message = (
            f"Number of zeros ({zpk.number_of_zeros}) cannot exceed "
            f"number of poles ({zpk.number_of_poles})"
        )
        logger.error(message)
        raise InvalidArgumentError(message)

    fs2: float = 2.0 * fs
    degree: int = zpk.relative_degree

    if np.any(zpk.zeros == fs2) or np.any(zpk.poles == fs2):
        message = f"A zero or pole at s = 2*fs = {fs2} maps to infinity"
        logger.error(message)
        raise InvalidArgumentError(message)

    # ===== MAP ZEROS AND POLES =====
    digital_zeros: np.ndarray = (fs2 + zpk.zeros) / (fs2 - zpk.zeros)
    digital_poles: np.ndarray = (fs2 + zpk.poles) / (fs2 - zpk.poles)

    # ===== ZEROS AT INFINITY GO TO NYQUIST =====
    digital_zeros = np.append(digital_zeros, -np.ones(degree))

    # ===== MATCH THE GAIN =====
    gain: float = zpk.gain * float(
        np.real(np.prod(fs2 - zpk.zeros) / np.prod(fs2 - zpk.poles))
    )

    return ZPK(zeros=digital_zeros, poles=digital_poles, gain=gain)
