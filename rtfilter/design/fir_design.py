"""
FIR Filter Design Module
========================

Window-method design of linear phase FIR filters.

Method:
    1. Sample the ideal (infinitely long) impulse response of the band,
       centred on the middle tap:

           lowpass(r)[n] = r * sinc(r * (n - M/2)),   n = 0, ..., M

       where M is the order and r the cutoff normalized so 1 is Nyquist.
       Highpass, bandpass and bandstop responses are built from lowpass
       responses and a unit impulse.
    2. Multiply by the window to truncate it smoothly.
    3. Scale so the gain is exactly 1 at the centre of the first passband:
       DC for lowpass and bandstop, Nyquist for highpass, and the band
       centre for bandpass.

Highpass and bandstop filters must pass Nyquist, which a filter with an
even number of taps cannot do, so they require an even order.

HILBERT TRANSFORMER:
====================
The analytic-signal filter h = h_real + j h_imag, sampled about the middle
tap (m = n - M/2) and tapered by a Kaiser window:

    h_real[n] = sinc(m)
    h_imag[n] = (1 - cos(pi * m)) / (pi * m),   0 at m = 0

An even order (type III) gives a real part that is a pure delay and an
imaginary part whose every other tap is zero. An odd order (type IV) gives
dense taps in both parts but holds the amplitude up to Nyquist.

Windows:
    HAMMING, BARTLETT, HANN: the symmetric windows of scipy.signal.windows.
    BLACKMAN_OPT: the "optimal" Blackman window, whose side-lobe weighting
        depends on the length:

            alpha = -0.5 / (1 + cos(2*pi / (N - 1)))
            w[n]  = (alpha + 1)/2 - 0.5 cos(2*pi*n / (N - 1))
                    - (alpha/2) cos(4*pi*n / (N - 1))
"""

import logging
from typing import Tuple

import numpy as np
from scipy.signal import windows

from ..enums import FIRWindow
from ..exceptions import InvalidArgumentError
from ..representations import BA

logger = logging.getLogger(__name__)

MINIMUM_ORDER: int = 4
DEFAULT_KAISER_BETA: float = 8.0


# ===== WINDOWS =====

def optimal_blackman_window(length: int) -> np.ndarray:
    """
    Optimal Blackman window of the given length.

    Args:
        length: Number of points. Must be at least 2.

    Returns:
        np.ndarray: The symmetric window.
    """
    n: np.ndarray = np.arange(length)
    period: float = float(length - 1)
    alpha: float = -0.5 / (1.0 + np.cos(2.0 * np.pi / period))
    return (
        (alpha + 1.0) / 2.0
        - 0.5 * np.cos(2.0 * np.pi * n / period)
        - (alpha / 2.0) * np.cos(4.0 * np.pi * n / period)
    )


def design_window(length: int, window: FIRWindow) -> np.ndarray:
    """Symmetric window of the requested kind."""
    if window == FIRWindow.HAMMING:
        return windows.hamming(length, sym=True)
    if window == FIRWindow.BARTLETT:
        return windows.bartlett(length, sym=True)
    if window == FIRWindow.HANN:
        return windows.hann(length, sym=True)
    if window == FIRWindow.BLACKMAN_OPT:
        return optimal_blackman_window(length)

    message = f"Unknown window {window!r}"
    logger.error(message)
    raise InvalidArgumentError(message)


# ===== VALIDATION =====

def _check_order(order: int, needs_even: bool) -> int:
    if isinstance(order, bool) or int(order) != order or order < MINIMUM_ORDER:
        message = f"Order={order} must be an integer of at least {MINIMUM_ORDER}"
        logger.error(message)
        raise InvalidArgumentError(message)
    order = int(order)
    if needs_even and order % 2 == 1:
        message = (
            f"Order={order} must be even: the filter has to pass the Nyquist "
            f"frequency, which needs an odd number of taps"
        )
        logger.error(message)
        raise InvalidArgumentError(message)
    return order


def _check_cutoff(r: float) -> float:
    if not (np.isfinite(r) and 0.0 < r < 1.0):
        message = f"Normalized cutoff r={r} must be in (0, 1)"
        logger.error(message)
        raise InvalidArgumentError(message)
    return float(r)


def _check_band(r: Tuple[float, float]) -> Tuple[float, float]:
    if len(r) != 2:
        message = f"Band edges must be a (low, high) pair, got {r}"
        logger.error(message)
        raise InvalidArgumentError(message)
    low: float = _check_cutoff(r[0])
    high: float = _check_cutoff(r[1])
    if not low < high:
        message = f"Low cutoff {low} must be less than high cutoff {high}"
        logger.error(message)
        raise InvalidArgumentError(message)
    return low, high


# ===== IDEAL RESPONSES =====

def _ideal_lowpass(order: int, r: float) -> np.ndarray:
    n: np.ndarray = np.arange(order + 1) - order / 2.0
    return r * np.sinc(r * n)


def _unit_impulse(order: int) -> np.ndarray:
    # Only called with even orders, so the centre is a tap
    impulse: np.ndarray = np.zeros(order + 1)
    impulse[order // 2] = 1.0
    return impulse


def _normalize(taps: np.ndarray, frequency: float) -> np.ndarray:
    """Scale taps to unit gain at the normalized frequency (1 = Nyquist)."""
    n: np.ndarray = np.arange(taps.size) - (taps.size - 1) / 2.0
    gain: float = float(np.abs(np.sum(taps * np.exp(-1j * np.pi * frequency * n))))
    return taps / gain


def _finish(taps: np.ndarray, window: FIRWindow, frequency: float) -> BA:
    windowed: np.ndarray = taps * design_window(taps.size, window)
    return BA.from_fir(_normalize(windowed, frequency))


# ===== PUBLIC DESIGN FUNCTIONS =====

def fir1_lowpass(order: int, r: float, window: FIRWindow = FIRWindow.HAMMING) -> BA:
    """
    Design an FIR lowpass filter with the window method.

    Args:
        order: Filter order; the filter has order + 1 taps. At least 4.
        r: Cutoff frequency normalized so 1 is Nyquist.
        window: Window to apply.

    Returns:
        BA: Taps in the numerator, denominator [1]. Unity gain at DC.

    Raises:
        InvalidArgumentError: If any argument is out of range.
    """
    order = _check_order(order, needs_even=False)
    r = _check_cutoff(r)
    return _finish(_ideal_lowpass(order, r), window, 0.0)


def fir1_highpass(order: int, r: float, window: FIRWindow = FIRWindow.HAMMING) -> BA:
    """
    Design an FIR highpass filter with the window method.

    Args:
        order: Filter order. Must be even and at least 4.
        r: Cutoff frequency normalized so 1 is Nyquist.
        window: Window to apply.

    Returns:
        BA: Taps with unity gain at Nyquist.

    Raises:
        InvalidArgumentError: If any argument is out of range.
    """
    order = _check_order(order, needs_even=True)
    r = _check_cutoff(r)
    taps: np.ndarray = _unit_impulse(order) - _ideal_lowpass(order, r)
    return _finish(taps, window, 1.0)


def fir1_bandpass(
    order: int,
    r: Tuple[float, float],
    window: FIRWindow = FIRWindow.HAMMING
) -> BA:
    """
    Design an FIR bandpass filter with the window method.

    Args:
        order: Filter order. At least 4.
        r: (low, high) cutoff frequencies normalized so 1 is Nyquist.
        window: Window to apply.

    Returns:
        BA: Taps with unity gain at the band centre (low + high) / 2.

    Raises:
        InvalidArgumentError: If any argument is out of range.
    """
    order = _check_order(order, needs_even=False)
    low, high = _check_band(r)
    taps: np.ndarray = _ideal_lowpass(order, high) - _ideal_lowpass(order, low)
    return _finish(taps, window, (low + high) / 2.0)


def fir1_bandstop(
    order: int,
    r: Tuple[float, float],
    window: FIRWindow = FIRWindow.HAMMING
) -> BA:
    """
    Design an FIR bandstop (notch) filter with the window method.

    Args:
        order: Filter order. Must be even and at least 4.
        r: (low, high) stopband edges normalized so 1 is Nyquist.
        window: Window to apply.

    Returns:
        BA: Taps with unity gain at DC.

    Raises:
        InvalidArgumentError: If any argument is out of range.
    """
    order = _check_order(order, needs_even=True)
    low, high = _check_band(r)
    taps: np.ndarray = (
        _unit_impulse(order)
        - _ideal_lowpass(order, high)
        + _ideal_lowpass(order, low)
    )
    return _finish(taps, window, 0.0)


def hilbert_transformer(order: int, beta: float = DEFAULT_KAISER_BETA) -> Tuple[BA, BA]:
    """
    Design an FIR Hilbert transformer with a Kaiser window.

    Filtering a signal with the real taps and the imaginary taps gives the
    real and imaginary parts of its analytic signal, both delayed by
    order / 2 samples.

    Args:
        order: Filter order; both filters have order + 1 taps.
        beta: Kaiser window shape parameter.

    Returns:
        Tuple[BA, BA]: (real part, imaginary part) as FIR filters.

    Raises:
        InvalidArgumentError: If the order is negative or beta is negative
            or too large for the window to be computed.
    """
    if isinstance(order, bool) or int(order) != order or order < 0:
        message = f"Order={order} must be a non-negative integer"
        logger.error(message)
        raise InvalidArgumentError(message)
    order = int(order)
    if not (np.isfinite(beta) and beta >= 0.0):
        message = f"Kaiser beta={beta} must be finite and non-negative"
        logger.error(message)
        raise InvalidArgumentError(message)

    with np.errstate(over="ignore", invalid="ignore"):
        window: np.ndarray = windows.kaiser(order + 1, beta, sym=True)
    if not np.all(np.isfinite(window)):
        message = f"Kaiser beta={beta} is too large"
        logger.error(message)
        raise InvalidArgumentError(message)

    m: np.ndarray = np.arange(order + 1) - order / 2.0
    imaginary_taps: np.ndarray = np.zeros(order + 1)
    if order % 2 == 0:
        # Type III: integer offsets, so the sparsity is exact
        real_taps: np.ndarray = _unit_impulse(order)
        odd_offsets: np.ndarray = np.abs(m) % 2 == 1
        imaginary_taps[odd_offsets] = 2.0 / (np.pi * m[odd_offsets])
    else:
        real_taps = np.sinc(m)
        imaginary_taps = (1.0 - np.cos(np.pi * m)) / (np.pi * m)

    logger.debug(f"Designed Hilbert transformer: order={order}, beta={beta}")
    return BA.from_fir(real_taps * window), BA.from_fir(imaginary_taps * window)
