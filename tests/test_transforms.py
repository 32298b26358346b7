import numpy as np
import pytest
from scipy import signal

from rtfilter import ZPK, InvalidArgumentError
from rtfilter.design import butter, cheb2ap, lp2bp, lp2bs, lp2hp, lp2lp, zpkbilinear

PROTOTYPES = [butter(3), butter(4), cheb2ap(4, 40.0), cheb2ap(3, 30.0)]


def _as_scipy(zpk: ZPK):
    return zpk.zeros, zpk.poles, zpk.gain


def _assert_zpk_matches(actual: ZPK, expected, assert_roots_match) -> None:
    expected_zeros, expected_poles, expected_gain = expected
    assert_roots_match(actual.zeros, expected_zeros, 1e-10)
    assert_roots_match(actual.poles, expected_poles, 1e-10)
    assert actual.gain == pytest.approx(expected_gain, rel=1e-10)


@pytest.mark.parametrize("prototype", PROTOTYPES)
def test_lowpass_to_lowpass(prototype: ZPK, assert_roots_match) -> None:
    expected = signal.lp2lp_zpk(*_as_scipy(prototype), wo=2.5)
    _assert_zpk_matches(lp2lp(prototype, 2.5), expected, assert_roots_match)


@pytest.mark.parametrize("prototype", PROTOTYPES)
def test_lowpass_to_highpass(prototype: ZPK, assert_roots_match) -> None:
    expected = signal.lp2hp_zpk(*_as_scipy(prototype), wo=0.7)
    _assert_zpk_matches(lp2hp(prototype, 0.7), expected, assert_roots_match)


@pytest.mark.parametrize("prototype", PROTOTYPES)
def test_lowpass_to_bandpass(prototype: ZPK, assert_roots_match) -> None:
    expected = signal.lp2bp_zpk(*_as_scipy(prototype), wo=1.3, bw=0.4)
    result = lp2bp(prototype, 1.3, 0.4)
    assert result.number_of_poles == 2 * prototype.number_of_poles
    _assert_zpk_matches(result, expected, assert_roots_match)


@pytest.mark.parametrize("prototype", PROTOTYPES)
def test_lowpass_to_bandstop(prototype: ZPK, assert_roots_match) -> None:
    expected = signal.lp2bs_zpk(*_as_scipy(prototype), wo=1.3, bw=0.4)
    _assert_zpk_matches(lp2bs(prototype, 1.3, 0.4), expected, assert_roots_match)


def test_highpass_moves_zeros_at_infinity_to_origin() -> None:
    result = lp2hp(butter(3), 1.0)
    np.testing.assert_array_equal(result.zeros, np.zeros(3))


def test_bandstop_places_notch_at_centre_frequency() -> None:
    result = lp2bs(butter(2), 2.0, 0.5)
    np.testing.assert_allclose(np.abs(result.zeros), 2.0)
    np.testing.assert_allclose(result.zeros.real, 0.0, atol=1e-15)


@pytest.mark.parametrize("transform", [lp2lp, lp2hp])
def test_transforms_reject_non_positive_frequency(transform) -> None:
    with pytest.raises(InvalidArgumentError):
        transform(butter(2), 0.0)
    with pytest.raises(InvalidArgumentError):
        transform(butter(2), -1.0)


@pytest.mark.parametrize("transform", [lp2bp, lp2bs])
def test_band_transforms_reject_bad_arguments(transform) -> None:
    with pytest.raises(InvalidArgumentError):
        transform(butter(2), 1.0, 0.0)
    with pytest.raises(InvalidArgumentError):
        transform(butter(2), -1.0, 0.5)
    with pytest.raises(InvalidArgumentError):
        transform(ZPK(), 1.0, 0.5)


def test_transforms_reject_empty_zpk() -> None:
    with pytest.raises(InvalidArgumentError):
        lp2lp(ZPK(), 1.0)


@pytest.mark.parametrize("prototype", PROTOTYPES)
def test_bilinear_matches_scipy(prototype: ZPK, assert_roots_match) -> None:
    analog = lp2lp(prototype, 2.0)
    expected = signal.bilinear_zpk(*_as_scipy(analog), fs=2.0)
    result = zpkbilinear(analog, 2.0)
    assert result.number_of_zeros == result.number_of_poles
    _assert_zpk_matches(result, expected, assert_roots_match)


def test_bilinear_keeps_stable_filters_stable() -> None:
    result = zpkbilinear(lp2lp(butter(6), 3.0), 2.0)
    assert np.all(np.abs(result.poles) < 1.0)
    # Zeros at infinity land on Nyquist
    np.testing.assert_array_equal(result.zeros, -np.ones(6))


def test_bilinear_rejects_bad_arguments() -> None:
    with pytest.raises(InvalidArgumentError):
        zpkbilinear(butter(2), 0.0)
    with pytest.raises(InvalidArgumentError):
        zpkbilinear(ZPK(zeros=[-1.0, -2.0], poles=[-3.0]), 2.0)
