import numpy as np
import pytest

from rtfilter import InvalidArgumentError
from rtfilter.polynomial import poly, polyval, roots


def test_roots_of_quadratic(assert_roots_match) -> None:
    assert_roots_match(roots([1.0, -3.0, 2.0]), [1.0, 2.0], 1e-12)


def test_roots_of_scaled_cubic(assert_roots_match) -> None:
    # 2 (x - 1)(x + 2)(x - 3)
    coefficients = 2.0 * np.poly([1.0, -2.0, 3.0])
    assert_roots_match(roots(coefficients), [1.0, -2.0, 3.0], 1e-10)


def test_roots_of_complex_pair(assert_roots_match) -> None:
    assert_roots_match(roots([1.0, 0.0, 1.0]), [1j, -1j], 1e-12)


def test_constant_polynomial_has_no_roots() -> None:
    result = roots([5.0])
    assert result.size == 0
    assert np.iscomplexobj(result)


@pytest.mark.parametrize(
    "coefficients",
    [[], [0.0, 1.0, 2.0], [1.0, np.nan], [1.0, np.inf, 2.0]],
)
def test_roots_rejects_bad_coefficients(coefficients) -> None:
    with pytest.raises(InvalidArgumentError):
        roots(coefficients)


def test_poly_of_no_roots_is_one() -> None:
    np.testing.assert_array_equal(poly([]), [1.0])


def test_poly_of_single_root() -> None:
    np.testing.assert_array_equal(poly([2.0]), [1.0, -2.0])


def test_poly_matches_numpy_for_real_roots() -> None:
    values = [0.5, -1.5, 2.0, 3.25, -0.75]
    np.testing.assert_allclose(poly(values), np.poly(values), rtol=1e-13)
    assert not np.iscomplexobj(poly(values))


def test_poly_of_conjugate_pair_has_zero_imaginary_part() -> None:
    result = poly([1j, -1j])
    np.testing.assert_array_equal(result.real, [1.0, 0.0, 1.0])
    np.testing.assert_array_equal(result.imag, [0.0, 0.0, 0.0])


def test_poly_inverts_roots() -> None:
    coefficients = np.array([1.0, -6.0, 11.0, -6.0, 0.5])
    np.testing.assert_allclose(poly(roots(coefficients)).real, coefficients, atol=1e-10)


def test_poly_inverts_roots_of_random_polynomials(rng) -> None:
    for _ in range(100):
        degree = int(rng.integers(1, 21))
        coefficients = rng.standard_normal(degree + 1)
        rebuilt = np.real(poly(roots(coefficients))) * coefficients[0]
        tolerance = 1e-9 * np.max(np.abs(coefficients))
        np.testing.assert_allclose(rebuilt, coefficients, rtol=0, atol=tolerance)


@pytest.mark.parametrize("order", [0, 1, 2, 3, 4, 7])
def test_polyval_matches_numpy(order: int, rng) -> None:
    coefficients = rng.standard_normal(order + 1)
    x = rng.standard_normal(11)
    np.testing.assert_allclose(polyval(coefficients, x), np.polyval(coefficients, x), rtol=1e-12, atol=1e-12)


def test_polyval_complex_argument() -> None:
    # p(x) = x^2 + 1 vanishes at j
    assert abs(polyval([1.0, 0.0, 1.0], 1j)) < 1e-15


def test_polyval_scalar_in_scalar_out() -> None:
    value = polyval([1.0, 2.0, 3.0], 2.0)
    assert np.ndim(value) == 0
    assert value == pytest.approx(11.0)


def test_polyval_empty_points() -> None:
    assert polyval([1.0, 2.0], []).size == 0


def test_polyval_rejects_empty_coefficients() -> None:
    with pytest.raises(InvalidArgumentError):
        polyval([], [1.0, 2.0])
