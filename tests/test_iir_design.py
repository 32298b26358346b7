import numpy as np
import pytest
from scipy import signal

from rtfilter import (
    BA,
    SOS,
    ZPK,
    Bandtype,
    IIRFilterDomain,
    IIRPrototype,
    InvalidArgumentError,
    SOSPairing,
)
from rtfilter.analysis import is_stable, sosfreqz, zpk_response
from rtfilter.design import (
    IIRFilterSpecification,
    design_ba_iir_filter,
    design_sos_iir_filter,
    design_zpk_iir_filter,
)

SCIPY_NAMES = {
    IIRPrototype.BUTTERWORTH: "butter",
    IIRPrototype.CHEBYSHEV1: "cheby1",
    IIRPrototype.CHEBYSHEV2: "cheby2",
}
SCIPY_BANDS = {
    Bandtype.LOWPASS: ("lowpass", 0.3),
    Bandtype.HIGHPASS: ("highpass", 0.45),
    Bandtype.BANDPASS: ("bandpass", (0.2, 0.5)),
    Bandtype.BANDSTOP: ("bandstop", (0.25, 0.6)),
}


def _reference(order, frequencies, btype, prototype, analog=False):
    return signal.iirfilter(
        order, frequencies, rp=1.0, rs=40.0, btype=SCIPY_BANDS[btype][0],
        analog=analog, ftype=SCIPY_NAMES[prototype], output="zpk",
    )


@pytest.mark.parametrize("prototype", sorted(SCIPY_NAMES, key=lambda item: item.value))
@pytest.mark.parametrize("btype", list(Bandtype))
@pytest.mark.parametrize("order", [3, 4])
def test_digital_zpk_matches_scipy(prototype, btype, order, assert_roots_match) -> None:
    frequencies = SCIPY_BANDS[btype][1]
    zpk = design_zpk_iir_filter(
        order=order, critical_frequencies=frequencies, btype=btype, prototype=prototype,
        passband_ripple_db=1.0, stopband_attenuation_db=40.0,
    )
    expected_zeros, expected_poles, expected_gain = _reference(order, frequencies, btype, prototype)
    assert_roots_match(zpk.poles, expected_poles, 1e-9)
    assert_roots_match(zpk.zeros, expected_zeros, 1e-6)
    assert zpk.gain == pytest.approx(expected_gain, rel=1e-9)


@pytest.mark.parametrize("btype", list(Bandtype))
def test_analog_zpk_matches_scipy(btype, assert_roots_match) -> None:
    frequencies = np.asarray(SCIPY_BANDS[btype][1]) * 10.0
    zpk = design_zpk_iir_filter(
        order=3, critical_frequencies=frequencies, btype=btype,
        prototype=IIRPrototype.CHEBYSHEV1, domain=IIRFilterDomain.ANALOG,
        passband_ripple_db=1.0,
    )
    expected_zeros, expected_poles, expected_gain = _reference(
        3, frequencies, btype, IIRPrototype.CHEBYSHEV1, analog=True
    )
    assert_roots_match(zpk.poles, expected_poles, 1e-9)
    assert_roots_match(zpk.zeros, expected_zeros, 1e-9)
    assert zpk.gain == pytest.approx(expected_gain, rel=1e-9)


def test_bessel_digital_design_matches_scipy_pipeline(assert_roots_match) -> None:
    warped = 4.0 * np.tan(np.pi * 0.2 / 2.0)
    analog = signal.lp2lp_zpk(*signal.besselap(4, norm="mag"), wo=warped)
    expected_zeros, expected_poles, expected_gain = signal.bilinear_zpk(*analog, fs=2.0)

    zpk = design_zpk_iir_filter(order=4, critical_frequencies=0.2, prototype=IIRPrototype.BESSEL)
    assert_roots_match(zpk.poles, expected_poles, 1e-9)
    assert_roots_match(zpk.zeros, expected_zeros, 1e-9)
    assert zpk.gain == pytest.approx(expected_gain, rel=1e-9)


def test_butterworth_is_three_db_down_at_cutoff() -> None:
    zpk = design_zpk_iir_filter(order=5, critical_frequencies=0.4)
    response = zpk_response(zpk, [0.0, 0.4 * np.pi])
    assert abs(response[0]) == pytest.approx(1.0, rel=1e-12)
    assert abs(response[1]) == pytest.approx(1.0 / np.sqrt(2.0), rel=1e-10)


def test_ba_design_matches_scipy() -> None:
    ba = design_ba_iir_filter(order=4, critical_frequencies=0.25)
    b, a = signal.butter(4, 0.25)
    assert isinstance(ba, BA)
    np.testing.assert_allclose(ba.numerator, b, rtol=1e-10, atol=1e-14)
    np.testing.assert_allclose(ba.denominator, a, rtol=1e-10, atol=1e-14)


@pytest.mark.parametrize("pairing", list(SOSPairing))
def test_sos_design_response_matches_scipy(pairing) -> None:
    sos = design_sos_iir_filter(
        order=5, critical_frequencies=(0.1, 0.3), btype=Bandtype.BANDPASS,
        prototype=IIRPrototype.CHEBYSHEV2, stopband_attenuation_db=50.0, pairing=pairing,
    )
    assert isinstance(sos, SOS)
    assert is_stable(sos)
    w = np.linspace(0.0, np.pi, 100, endpoint=False)
    _, actual = sosfreqz(sos, w)
    _, expected = signal.freqz_zpk(
        *signal.cheby2(5, 50.0, (0.1, 0.3), btype="bandpass", output="zpk"), worN=w
    )
    np.testing.assert_allclose(actual, expected, rtol=1e-8, atol=1e-10)


def test_analog_sos_needs_equal_zero_and_pole_counts() -> None:
    with pytest.raises(InvalidArgumentError):
        design_sos_iir_filter(order=4, critical_frequencies=2.0, domain=IIRFilterDomain.ANALOG)
    sos = design_sos_iir_filter(
        order=2, critical_frequencies=(1.0, 3.0), btype=Bandtype.BANDSTOP,
        domain=IIRFilterDomain.ANALOG,
    )
    assert sos.number_of_sections == 2


def test_digital_designs_are_stable() -> None:
    for prototype in IIRPrototype:
        zpk = design_zpk_iir_filter(
            order=6, critical_frequencies=(0.05, 0.9), btype=Bandtype.BANDSTOP,
            prototype=prototype, passband_ripple_db=0.5, stopband_attenuation_db=60.0,
        )
        assert is_stable(zpk)
        assert zpk.number_of_zeros == zpk.number_of_poles == 12


def test_specification_object_is_accepted() -> None:
    specification = IIRFilterSpecification(order=3, critical_frequencies=[0.2])
    assert specification.critical_frequencies == (0.2,)
    zpk = design_zpk_iir_filter(specification)
    assert isinstance(zpk, ZPK)
    assert zpk.number_of_poles == 3


def test_specification_and_parameters_are_exclusive() -> None:
    specification = IIRFilterSpecification(order=3, critical_frequencies=0.2)
    with pytest.raises(InvalidArgumentError):
        design_zpk_iir_filter(specification, order=4)


@pytest.mark.parametrize(
    "parameters",
    [
        dict(order=0, critical_frequencies=0.2),
        dict(order=2.5, critical_frequencies=0.2),
        dict(order=2, critical_frequencies=(0.1, 0.2)),
        dict(order=2, critical_frequencies=0.2, btype=Bandtype.BANDPASS),
        dict(order=2, critical_frequencies=(0.4, 0.2), btype=Bandtype.BANDSTOP),
        dict(order=2, critical_frequencies=1.0),
        dict(order=2, critical_frequencies=0.0),
        dict(order=2, critical_frequencies=-3.0, domain=IIRFilterDomain.ANALOG),
        dict(order=2, critical_frequencies=0.2, prototype=IIRPrototype.CHEBYSHEV1),
        dict(order=2, critical_frequencies=0.2, prototype=IIRPrototype.CHEBYSHEV2,
             stopband_attenuation_db=-1.0),
        dict(order=2, critical_frequencies=0.2, btype="lowpass"),
    ],
)
def test_invalid_specifications_are_rejected(parameters) -> None:
    with pytest.raises(InvalidArgumentError):
        IIRFilterSpecification(**parameters)


def test_analog_frequencies_may_exceed_one() -> None:
    specification = IIRFilterSpecification(
        order=2, critical_frequencies=100.0, domain=IIRFilterDomain.ANALOG
    )
    assert specification.critical_frequencies == (100.0,)
