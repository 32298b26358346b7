import logging

import numpy as np
import pytest
from scipy import signal

from rtfilter import FilterStatus, InvalidArgumentError, NotInitializedError, ProcessingMode
from rtfilter.design import fir1_lowpass
from rtfilter.filters import Decimator


def _decimator(factor: int, nfir: int = 33, **kwargs) -> Decimator:
    decimator = Decimator()
    decimator.initialize(factor, nfir=nfir, **kwargs)
    return decimator


def test_even_filter_length_is_made_odd() -> None:
    assert _decimator(2, nfir=20).filter_length == 21
    assert _decimator(2, nfir=21).filter_length == 21


def test_uses_hamming_lowpass_at_one_over_factor() -> None:
    decimator = _decimator(4, nfir=25)
    np.testing.assert_allclose(decimator.fir_filter.numerator, fir1_lowpass(24, 0.25).numerator)


def test_post_processing_defaults_to_removing_phase_shift() -> None:
    assert _decimator(3).removes_phase_shift
    assert not _decimator(3, mode=ProcessingMode.REAL_TIME).removes_phase_shift
    assert not _decimator(3, remove_phase_shift=False).removes_phase_shift


def test_post_processing_preserves_and_aligns_low_frequencies() -> None:
    n = np.arange(1000)
    x = np.sin(2.0 * np.pi * 0.01 * n)
    y = _decimator(4).apply(x)
    assert y.size == 250
    np.testing.assert_allclose(y[10:-10], x[::4][10:-10], atol=1e-2)


def test_removes_out_of_band_content() -> None:
    n = np.arange(2000)
    x = np.sin(2.0 * np.pi * 0.45 * n)
    y = _decimator(5, nfir=65).apply(x)
    assert np.max(np.abs(y[20:-20])) < 1e-2


def test_real_time_matches_causal_filter_then_downsample(rng) -> None:
    x = rng.standard_normal(700)
    decimator = _decimator(3, nfir=21, mode=ProcessingMode.REAL_TIME)
    chunks = [decimator.apply(x[start:start + 100]) for start in range(0, 700, 100)]
    taps = fir1_lowpass(20, 1.0 / 3.0).numerator
    expected = signal.lfilter(taps, [1.0], x)[::3]
    np.testing.assert_allclose(np.concatenate(chunks), expected, atol=1e-12)
    assert decimator.status == FilterStatus.ATTACHED_STREAMING


def test_estimate_space() -> None:
    decimator = _decimator(4)
    assert decimator.estimate_space(10) == 3
    assert decimator.apply(np.ones(10)).size == 3


def test_large_factor_only_warns(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="rtfilter"):
        decimator = _decimator(16, nfir=129)
    assert decimator.factor == 16
    assert any("stages" in record.getMessage() for record in caplog.records)


@pytest.mark.parametrize(
    "factor, nfir, mode, remove_phase_shift",
    [
        (1, 33, ProcessingMode.POST_PROCESSING, None),
        (2, 4, ProcessingMode.POST_PROCESSING, None),
        (2, 33, ProcessingMode.REAL_TIME, True),
    ],
)
def test_rejects_bad_arguments(factor, nfir, mode, remove_phase_shift) -> None:
    with pytest.raises(InvalidArgumentError):
        Decimator().initialize(factor, nfir=nfir, mode=mode, remove_phase_shift=remove_phase_shift)


def test_requires_initialize() -> None:
    with pytest.raises(NotInitializedError):
        Decimator().apply(np.ones(4))


def test_reset_restarts_stream(rng) -> None:
    x = rng.standard_normal(90)
    decimator = _decimator(3, nfir=9, mode=ProcessingMode.REAL_TIME)
    first = decimator.apply(x)
    decimator.apply(x[:7])
    decimator.reset_initial_conditions()
    np.testing.assert_array_equal(decimator.apply(x), first)


def test_copies_are_independent(rng) -> None:
    x = rng.standard_normal(60)
    decimator = _decimator(2, nfir=9, mode=ProcessingMode.REAL_TIME)
    decimator.apply(x[:31])
    duplicate = decimator.copy()
    duplicate.apply(np.ones(5))
    reference = _decimator(2, nfir=9, mode=ProcessingMode.REAL_TIME)
    reference.apply(x[:31])
    np.testing.assert_allclose(decimator.apply(x[31:]), reference.apply(x[31:]))
