"""Array helpers shared by the filter representation types."""

import logging

import numpy as np
from numpy.typing import ArrayLike

from ..exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)


def frozen_array(values: ArrayLike, dtype) -> np.ndarray:
    """Return a read-only 1-D copy of values with the given dtype."""
    array: np.ndarray = np.array(values, dtype=dtype, copy=True, ndmin=1).ravel()
    array.setflags(write=False)
    return array


def real_array(values: ArrayLike, name: str) -> np.ndarray:
    """
    Convert values to a float64 array, rejecting complex values that are
    not numerically real.
    """
    array: np.ndarray = np.atleast_1d(np.asarray(values)).ravel()
    if np.iscomplexobj(array):
        scale: float = float(np.max(np.abs(array))) if array.size else 0.0
        if np.any(np.abs(array.imag) > 1.0e-12 * max(scale, 1.0)):
            message = f"{name} must be real"
            logger.error(message)
            raise InvalidArgumentError(message)
        array = array.real
    array = array.astype(np.float64)
    if not np.all(np.isfinite(array)):
        message = f"{name} must be finite"
        logger.error(message)
        raise InvalidArgumentError(message)
    return array
