import numpy as np
import pytest


def _match_roots(actual, expected, tolerance: float) -> None:
    actual = list(np.atleast_1d(np.asarray(actual, dtype=np.complex128)))
    expected = np.atleast_1d(np.asarray(expected, dtype=np.complex128))
    assert len(actual) == expected.size, f"{len(actual)} roots, expected {expected.size}"
    for value in expected:
        distances = np.abs(np.asarray(actual) - value)
        index = int(np.argmin(distances))
        assert distances[index] <= tolerance * max(abs(value), 1.0), (
            f"no root near {value}; closest is {actual[index]}"
        )
        actual.pop(index)


@pytest.fixture
def assert_roots_match():
    """Compare two root sets as multisets, ignoring order."""
    return _match_roots


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
