"""
Polynomial Algebra
==================

Root finding, polynomial expansion from roots, and polynomial evaluation.

Conventions:
    Coefficients are stored highest-order term first, so the array
    [1, -3, 2] represents x^2 - 3x + 2.

ROOT FINDING:
=============
The roots of a degree-n polynomial p(x) = c0 x^n + c1 x^(n-1) + ... + cn
are the eigenvalues of its companion matrix, built from the monic
polynomial (every coefficient divided by c0):

        | -c1/c0  -c2/c0  ...  -cn/c0 |
        |   1       0     ...    0    |
    C = |   0       1     ...    0    |
        |  ...     ...    ...   ...   |
        |   0      ...     1     0    |

The eigenvalues are obtained with a general (non-symmetric) real eigenvalue
solver, so the roots come back in whatever order the solver produces.

EXPANSION:
==========
poly(r) computes the coefficients of (x - r1)(x - r2)...(x - rn) by
repeated shift-and-subtract: multiplying the running polynomial a(x) by
(x - ri) is a shift (x * a(x)) minus a scaled copy (ri * a(x)).
"""

import logging

import numpy as np
from numpy.typing import ArrayLike
from scipy import linalg

from ..exceptions import InvalidArgumentError, NumericalFailureError

logger = logging.getLogger(__name__)


def roots(coefficients: ArrayLike) -> np.ndarray:
    """
    Compute the roots of a polynomial.

    Args:
        coefficients: Polynomial coefficients, highest order first.

    Returns:
        np.ndarray: Complex array with len(coefficients) - 1 roots. A
            constant polynomial has no roots and yields an empty array.

    Raises:
        InvalidArgumentError: If there are no coefficients, the leading
            coefficient is zero, or a coefficient is not finite.
        NumericalFailureError: If the eigenvalue solver does not converge.

    Example:
        roots([1, -3, 2]) -> [2, 1] (x^2 - 3x + 2 = (x - 1)(x - 2))
    """
    coefficient_array: np.ndarray = np.atleast_1d(np.asarray(coefficients))
    if coefficient_array.ndim != 1:
        message = f"coefficients must be 1-D, got shape {coefficient_array.shape}"
        logger.error(message)
        raise InvalidArgumentError(message)

    if coefficient_array.size == 0:
        message = "No coefficients"
        logger.error(message)
        raise InvalidArgumentError(message)

    if np.iscomplexobj(coefficient_array):
        coefficient_array = coefficient_array.astype(np.complex128)
    else:
        coefficient_array = coefficient_array.astype(np.float64)

    if not np.all(np.isfinite(coefficient_array)):
        message = "Polynomial coefficients must be finite"
        logger.error(message)
        raise InvalidArgumentError(message)

    if coefficient_array[0] == 0:
        message = "Highest order coefficient is zero"
        logger.error(message)
        raise InvalidArgumentError(message)

    polynomial_order: int = coefficient_array.size - 1
    if polynomial_order == 0:
        return np.zeros(0, dtype=np.complex128)

    # ===== BUILD THE COMPANION MATRIX =====
    companion_matrix: np.ndarray = np.zeros(
        (polynomial_order, polynomial_order), dtype=coefficient_array.dtype
    )
    companion_matrix[0, :] = -coefficient_array[1:] / coefficient_array[0]
    subdiagonal: np.ndarray = np.arange(1, polynomial_order)
    companion_matrix[subdiagonal, subdiagonal - 1] = 1

    # ===== EIGENVALUES ARE THE ROOTS =====
    try:
        eigenvalues: np.ndarray = linalg.eigvals(companion_matrix, check_finite=False)
    except linalg.LinAlgError as error:
        message = f"Eigenvalue solver failed to converge: {error}"
        logger.error(message)
        raise NumericalFailureError(message) from error

    return np.asarray(eigenvalues, dtype=np.complex128)


def poly(polynomial_roots: ArrayLike) -> np.ndarray:
    """
    Expand the polynomial with the given roots.

    Computes the coefficients of (x - r1)(x - r2)...(x - rn).

    Args:
        polynomial_roots: The n roots. May be real or complex.

    Returns:
        np.ndarray: The n + 1 coefficients, highest order first. The
            leading coefficient is 1. Real roots give a real array and
            complex roots a complex array whose imaginary parts smaller
            than machine epsilon are set to zero.
    """
    root_array: np.ndarray = np.atleast_1d(np.asarray(polynomial_roots)).ravel()
    is_complex: bool = np.iscomplexobj(root_array)
    dtype = np.complex128 if is_complex else np.float64
    root_array = root_array.astype(dtype)
    number_of_roots: int = root_array.size

    # Degenerate case: the empty product is 1
    if number_of_roots == 0:
        return np.ones(1, dtype=dtype)

    # Work in ascending order (constant term first) then reverse at the end
    ascending: np.ndarray = np.zeros(number_of_roots + 1, dtype=dtype)
    if number_of_roots == 1:
        ascending[0] = -root_array[0]
        ascending[1] = 1
    else:
        # Initialize with (x - r1)
        ascending[0] = -root_array[0]
        ascending[1] = 1
        for root_index in range(2, number_of_roots + 1):
            root = root_array[root_index - 1]
            # x * a(x) shifts coefficients up by one, then subtract r * a(x).
            # The right-hand side is evaluated before assignment.
            ascending[1:root_index + 1] = (
                ascending[0:root_index] - root * ascending[1:root_index + 1]
            )
            ascending[0] = -root * ascending[0]

    # Purge rounding noise in the imaginary parts
    if is_complex:
        epsilon: float = np.finfo(np.float64).eps
        noise: np.ndarray = np.abs(ascending.imag) < epsilon
        ascending = np.where(noise, ascending.real + 0j, ascending)

    return ascending[::-1].copy()


def polyval(coefficients: ArrayLike, x: ArrayLike) -> np.ndarray:
    """
    Evaluate a polynomial with Horner's method.

    Orders 0 through 3 are written out explicitly; higher orders use the
    general Horner recursion.

    Args:
        coefficients: Polynomial coefficients, highest order first.
        x: Point(s) at which to evaluate. Real or complex, scalar or array.

    Returns:
        np.ndarray: p(x) with the shape of x. A scalar x gives a scalar.
            An empty x gives an empty array.

    Raises:
        InvalidArgumentError: If there are no coefficients.
    """
    coefficient_array: np.ndarray = np.atleast_1d(np.asarray(coefficients)).ravel()
    if coefficient_array.size == 0:
        message = "No coefficients in p"
        logger.error(message)
        raise InvalidArgumentError(message)

    x_array: np.ndarray = np.asarray(x)
    is_scalar: bool = x_array.ndim == 0
    x_array = np.atleast_1d(x_array)
    result_dtype = np.result_type(coefficient_array, x_array, np.float64)
    if x_array.size == 0:
        return np.zeros(x_array.shape, dtype=result_dtype)

    p: np.ndarray = coefficient_array.astype(result_dtype)
    xs: np.ndarray = x_array.astype(result_dtype)
    polynomial_order: int = p.size - 1

    if polynomial_order == 0:
        y = np.full(xs.shape, p[0], dtype=result_dtype)
    elif polynomial_order == 1:
        y = p[0] * xs + p[1]
    elif polynomial_order == 2:
        y = p[2] + xs * (p[1] + xs * p[0])
    elif polynomial_order == 3:
        y = p[3] + xs * (p[2] + xs * (p[1] + xs * p[0]))
    else:
        y = p[0] * xs
        for coefficient_index in range(1, polynomial_order):
            y = (p[coefficient_index] + y) * xs
        y = p[polynomial_order] + y

    if is_scalar:
        return y[0]
    return y
