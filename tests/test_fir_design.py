import numpy as np
import pytest
from scipy import signal

from rtfilter import FIRWindow, InvalidArgumentError
from rtfilter.analysis import freqz
from rtfilter.design import (
    fir1_bandpass,
    fir1_bandstop,
    fir1_highpass,
    fir1_lowpass,
    hilbert_transformer,
    optimal_blackman_window,
)

SCIPY_WINDOWS = {
    FIRWindow.HAMMING: "hamming",
    FIRWindow.HANN: "hann",
    FIRWindow.BARTLETT: "bartlett",
}


@pytest.mark.parametrize("window", list(SCIPY_WINDOWS))
@pytest.mark.parametrize("order", [20, 31])
def test_lowpass_matches_scipy(window, order) -> None:
    ba = fir1_lowpass(order, 0.3, window=window)
    expected = signal.firwin(order + 1, 0.3, window=SCIPY_WINDOWS[window])
    assert ba.numerator.size == order + 1
    np.testing.assert_array_equal(ba.denominator, [1.0])
    np.testing.assert_allclose(ba.numerator, expected, atol=1e-12)


@pytest.mark.parametrize("window", list(SCIPY_WINDOWS))
def test_highpass_matches_scipy(window) -> None:
    ba = fir1_highpass(30, 0.4, window=window)
    expected = signal.firwin(31, 0.4, window=SCIPY_WINDOWS[window], pass_zero=False)
    np.testing.assert_allclose(ba.numerator, expected, atol=1e-12)


@pytest.mark.parametrize("window", list(SCIPY_WINDOWS))
def test_bandpass_matches_scipy(window) -> None:
    ba = fir1_bandpass(40, (0.2, 0.5), window=window)
    expected = signal.firwin(41, [0.2, 0.5], window=SCIPY_WINDOWS[window], pass_zero=False)
    np.testing.assert_allclose(ba.numerator, expected, atol=1e-12)


@pytest.mark.parametrize("window", list(SCIPY_WINDOWS))
def test_bandstop_matches_scipy(window) -> None:
    ba = fir1_bandstop(40, (0.2, 0.5), window=window)
    expected = signal.firwin(41, [0.2, 0.5], window=SCIPY_WINDOWS[window])
    np.testing.assert_allclose(ba.numerator, expected, atol=1e-12)


@pytest.mark.parametrize("window", list(FIRWindow))
def test_unity_gain_at_normalization_frequency(window) -> None:
    _, lowpass = freqz(fir1_lowpass(24, 0.25, window=window), [0.0])
    _, highpass = freqz(fir1_highpass(24, 0.25, window=window), [np.pi])
    _, bandpass = freqz(fir1_bandpass(24, (0.3, 0.6), window=window), [0.45 * np.pi])
    _, bandstop = freqz(fir1_bandstop(24, (0.3, 0.6), window=window), [0.0])
    for response in (lowpass, highpass, bandpass, bandstop):
        assert abs(response[0]) == pytest.approx(1.0, rel=1e-12)


@pytest.mark.parametrize("window", list(FIRWindow))
def test_taps_are_symmetric(window) -> None:
    taps = fir1_lowpass(16, 0.4, window=window).numerator
    np.testing.assert_allclose(taps, taps[::-1], atol=1e-15)


def test_optimal_blackman_window() -> None:
    window = optimal_blackman_window(21)
    alpha = -0.5 / (1.0 + np.cos(2.0 * np.pi / 20.0))
    assert window.size == 21
    assert window[0] == pytest.approx(0.0, abs=1e-15)
    np.testing.assert_allclose(window, window[::-1], atol=1e-15)
    centre = (alpha + 1.0) / 2.0 + 0.5 - alpha / 2.0
    assert window[10] == pytest.approx(centre)


def test_lowpass_attenuates_stopband() -> None:
    ba = fir1_lowpass(60, 0.2, window=FIRWindow.BLACKMAN_OPT)
    _, response = freqz(ba, np.linspace(0.4 * np.pi, np.pi, 50))
    assert np.max(np.abs(response)) < 1e-3


@pytest.mark.parametrize("order", [3, 0, -4, 10.5])
def test_rejects_bad_order(order) -> None:
    with pytest.raises(InvalidArgumentError):
        fir1_lowpass(order, 0.3)


def test_highpass_and_bandstop_need_even_order() -> None:
    with pytest.raises(InvalidArgumentError):
        fir1_highpass(21, 0.3)
    with pytest.raises(InvalidArgumentError):
        fir1_bandstop(21, (0.2, 0.4))
    # Odd orders are fine for lowpass and bandpass
    assert fir1_lowpass(21, 0.3).numerator.size == 22
    assert fir1_bandpass(21, (0.2, 0.4)).numerator.size == 22


@pytest.mark.parametrize("r", [0.0, 1.0, -0.2, np.nan])
def test_rejects_bad_cutoff(r) -> None:
    with pytest.raises(InvalidArgumentError):
        fir1_lowpass(10, r)


def test_rejects_bad_band() -> None:
    with pytest.raises(InvalidArgumentError):
        fir1_bandpass(10, (0.5, 0.2))
    with pytest.raises(InvalidArgumentError):
        fir1_bandpass(10, (0.2,))


# ===== HILBERT TRANSFORMER =====

def _ideal_hilbert_taps(order: int):
    real_taps = np.zeros(order + 1)
    imaginary_taps = np.zeros(order + 1)
    for n in range(order + 1):
        m = n - order / 2.0
        if m == 0:
            real_taps[n] = 1.0
        else:
            real_taps[n] = np.sin(np.pi * m) / (np.pi * m)
            imaginary_taps[n] = (1.0 - np.cos(np.pi * m)) / (np.pi * m)
    return real_taps, imaginary_taps


@pytest.mark.parametrize("order", [20, 21])
def test_hilbert_transformer_matches_windowed_ideal_taps(order: int) -> None:
    real_part, imaginary_part = hilbert_transformer(order, beta=8.0)
    window = signal.windows.kaiser(order + 1, 8.0)
    expected_real, expected_imaginary = _ideal_hilbert_taps(order)
    np.testing.assert_allclose(real_part.numerator, expected_real * window, atol=1e-14)
    np.testing.assert_allclose(imaginary_part.numerator, expected_imaginary * window, atol=1e-14)
    assert real_part.is_fir() and imaginary_part.is_fir()


def test_hilbert_transformer_even_order_is_sparse() -> None:
    real_part, imaginary_part = hilbert_transformer(10)
    assert np.count_nonzero(real_part.numerator) == 1
    assert real_part.numerator[5] == pytest.approx(1.0)
    np.testing.assert_array_equal(imaginary_part.numerator[::2], 0.0)
    # Antisymmetric about the middle tap
    np.testing.assert_allclose(imaginary_part.numerator, -imaginary_part.numerator[::-1])


def test_hilbert_transformer_shifts_phase_by_quarter_cycle() -> None:
    order = 60
    real_part, imaginary_part = hilbert_transformer(order)
    w = np.array([np.pi / 4.0, np.pi / 2.0, 3.0 * np.pi / 4.0])
    delay = np.exp(1j * w * order / 2.0)
    _, real_response = freqz(real_part, w)
    _, imaginary_response = freqz(imaginary_part, w)
    np.testing.assert_allclose(real_response * delay, 1.0, atol=1e-3)
    np.testing.assert_allclose(imaginary_response * delay, -1j, atol=1e-3)


@pytest.mark.parametrize("order, beta", [(-1, 8.0), (2.5, 8.0), (10, -1.0), (10, np.inf), (10, 1.0e6)])
def test_hilbert_transformer_rejects_bad_arguments(order, beta) -> None:
    with pytest.raises(InvalidArgumentError):
        hilbert_transformer(order, beta)
