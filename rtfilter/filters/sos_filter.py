"""
SOS Filter Module
=================

Applies cascaded second order sections. Section i owns row i of the
(number_of_sections, 2) delay line and feeds its output to section i + 1.
The inner loop is scipy.signal.sosfilt.
"""

import logging
from typing import Optional, Tuple

import numpy as np
from scipy import signal

from ..exceptions import InvalidArgumentError
from ..representations import SOS
from .base_filter import StatefulFilter

logger = logging.getLogger(__name__)


class SOSFilter(StatefulFilter):
    """Stateful cascade of biquads."""

    def __init__(self) -> None:
        super().__init__()
        self._sections: Optional[np.ndarray] = None

    @property
    def representation(self) -> SOS:
        self._require_initialized()
        return SOS(self._sections)

    @property
    def number_of_sections(self) -> int:
        self._require_initialized()
        return int(self._sections.shape[0])

    def _load_representation(self, representation) -> Tuple[int, ...]:
        if not isinstance(representation, SOS):
            message = f"SOSFilter needs an SOS representation, got {type(representation).__name__}"
            logger.error(message)
            raise InvalidArgumentError(message)

        self._sections = np.array(representation.sections, dtype=self._precision.dtype)
        return (representation.number_of_sections, 2)

    def _release_representation(self) -> None:
        self._sections = None

    def _filter(self, x: np.ndarray, delay_line: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        output, final_delay_line = signal.sosfilt(self._sections, x, zi=delay_line)
        return output, final_delay_line
