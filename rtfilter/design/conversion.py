"""
Representation Conversion Module
================================

Conversions between the three filter representations:

    BA  --tf2zpk-->  ZPK  --zpk2sos-->  SOS
    BA  <--zpk2tf--  ZPK
    BA  <--sos2tf----------------------  SOS

SECOND ORDER SECTIONS:
======================
High order transfer functions are numerically fragile: small coefficient
errors move the poles a long way. Factoring the filter into biquads keeps
every section well conditioned. How poles and zeros are grouped matters:

1. Poles are taken one (conjugate) pair at a time, starting with the pair
   closest to the unit circle (digital) or to the imaginary axis (analog).
   These are the sharpest resonances.
2. Each pole pair is given the nearest remaining zeros, which keeps the
   peak gain of each individual section small.
3. Sections are filled from the end of the cascade backwards, so the
   section with the sharpest poles comes LAST.

Tie-break: poles and zeros are held in a fixed order (complex values with
positive imaginary part sorted by real then imaginary part, followed by real
values in ascending order). Whenever two candidates are equally good, the
one earlier in that order is taken.

Pairing strategies:
    NEAREST:  odd orders get an extra pole and zero at the origin, so every
              section is a biquad.
    KEEP_ODD: odd orders keep one first order section holding the last real
              pole. Its real zero is set aside before any biquad is paired,
              so greedy pairing cannot leave it without one. If the filter
              has no real zero at all, that section becomes a biquad as
              with NEAREST.
"""

import logging
from functools import reduce
from typing import List, Optional

import numpy as np

from ..enums import SOSPairing
from ..exceptions import InvalidArgumentError, NumericalFailureError
from ..polynomial import poly, roots
from ..representations import BA, SOS, ZPK

logger = logging.getLogger(__name__)

# Relative tolerance for deciding a value is real, or that two values are
# a conjugate pair
_REAL_TOLERANCE: float = 100.0 * np.finfo(np.float64).eps
_CONJUGATE_TOLERANCE: float = 1.0e-9
# Largest allowed imaginary part (relative) of expanded coefficients
_COEFFICIENT_TOLERANCE: float = 1.0e-8


def tf2zpk(ba: BA) -> ZPK:
    """
    Convert a transfer function into zeros, poles and gain.

    Args:
        ba: Numerator and denominator coefficients.

    Returns:
        ZPK: zeros = roots(numerator), poles = roots(denominator),
            gain = numerator[0] / denominator[0].

    Raises:
        InvalidArgumentError: If the leading numerator or denominator
            coefficient is zero.
        NumericalFailureError: If root finding fails.

    Note:
        The numerator and denominator are factored as polynomials as given,
        so for digital filters they should have the same length (pad the
        shorter one with trailing zeros).
    """
    numerator: np.ndarray = ba.numerator
    denominator: np.ndarray = ba.denominator

    if numerator[0] == 0:
        message = "Leading numerator coefficient is zero"
        logger.error(message)
        raise InvalidArgumentError(message)

    zeros: np.ndarray = roots(numerator)
    poles: np.ndarray = roots(denominator)
    gain: float = float(numerator[0] / denominator[0])
    return ZPK(zeros=zeros, poles=poles, gain=gain)


def _real_coefficients(coefficients: np.ndarray, name: str) -> np.ndarray:
    """Drop the imaginary part of coefficients from conjugate-symmetric roots."""
    if not np.iscomplexobj(coefficients):
        return coefficients
    scale: float = max(float(np.max(np.abs(coefficients))), np.finfo(np.float64).tiny)
    if np.max(np.abs(coefficients.imag)) > _COEFFICIENT_TOLERANCE * scale:
        message = (
            f"The {name} roots are not real or in complex conjugate pairs, "
            f"so the {name} coefficients are not real"
        )
        logger.error(message)
        raise InvalidArgumentError(message)
    return coefficients.real.copy()


def zpk2tf(zpk: ZPK) -> BA:
    """
    Convert zeros, poles and gain into a transfer function.

    Args:
        zpk: Zeros, poles and gain. Complex values must come in conjugate
            pairs.

    Returns:
        BA: numerator = gain * poly(zeros), denominator = poly(poles).

    Raises:
        InvalidArgumentError: If the resulting coefficients are not real.
    """
    numerator: np.ndarray = zpk.gain * poly(zpk.zeros)
    denominator: np.ndarray = poly(zpk.poles)

    numerator = _real_coefficients(numerator, "numerator")
    denominator = _real_coefficients(denominator, "denominator")
    return BA(numerator=numerator, denominator=denominator)


def _split_conjugates(values: np.ndarray) -> np.ndarray:
    """
    Keep one member of every conjugate pair plus the real values.

    Returns the positive-imaginary members (each averaged with its partner,
    sorted by real then imaginary part) followed by the real values (sorted
    ascending) with their imaginary parts set to exactly zero.

    Raises:
        InvalidArgumentError: If a complex value has no conjugate partner.
    """
    values = np.asarray(values, dtype=np.complex128)
    magnitudes: np.ndarray = np.abs(values)
    is_real: np.ndarray = np.abs(values.imag) <= _REAL_TOLERANCE * magnitudes

    real_values: np.ndarray = np.sort(values[is_real].real)
    upper: np.ndarray = values[~is_real & (values.imag > 0)]
    lower: np.ndarray = values[~is_real & (values.imag < 0)]

    if upper.size != lower.size:
        message = "Array contains a complex value with no matching conjugate"
        logger.error(message)
        raise InvalidArgumentError(message)

    upper = upper[np.lexsort((upper.imag, upper.real))]
    remaining: List[complex] = list(np.conj(lower))
    paired: List[complex] = []
    for value in upper:
        distances: np.ndarray = np.abs(np.asarray(remaining) - value)
        match_index: int = int(np.argmin(distances))
        if distances[match_index] > _CONJUGATE_TOLERANCE * max(abs(value), 1.0):
            message = f"Complex value {value} has no matching conjugate"
            logger.error(message)
            raise InvalidArgumentError(message)
        paired.append((value + remaining.pop(match_index)) / 2.0)

    return np.concatenate(
        (np.asarray(paired, dtype=np.complex128), real_values.astype(np.complex128))
    )


def _is_real(values: np.ndarray) -> np.ndarray:
    return np.asarray(values).imag == 0


def _worst_pole_index(poles: np.ndarray, analog: bool) -> int:
    """Index of the pole closest to the stability boundary (first on ties)."""
    if analog:
        distance: np.ndarray = np.abs(poles.real)
    else:
        distance = np.abs(1.0 - np.abs(poles))
    return int(np.argmin(distance))


def _nearest_index(candidates: np.ndarray, target: complex, which: str) -> Optional[int]:
    """
    Index of the candidate nearest to target, restricted to real or
    complex candidates if requested. Ties go to the lowest index.
    """
    order: np.ndarray = np.argsort(np.abs(candidates - target), kind="stable")
    if which == "any":
        return int(order[0]) if order.size else None
    mask: np.ndarray = _is_real(candidates[order])
    if which == "complex":
        mask = ~mask
    matches: np.ndarray = np.flatnonzero(mask)
    if matches.size == 0:
        return None
    return int(order[matches[0]])


def _build_section(section_zeros, section_poles) -> np.ndarray:
    """Expand up to two zeros and two poles into [b0, b1, b2, a0, a1, a2]."""
    numerator: np.ndarray = np.real(poly(np.asarray(section_zeros, dtype=np.complex128)))
    denominator: np.ndarray = np.real(poly(np.asarray(section_poles, dtype=np.complex128)))
    section: np.ndarray = np.zeros(6)
    section[3 - numerator.size:3] = numerator
    section[6 - denominator.size:6] = denominator
    return section


def _first_order_pole(poles: np.ndarray, analog: bool) -> Optional[complex]:
    """
    The real pole the pairing loop reaches last, i.e. the real pole furthest
    from the stability boundary (last on ties).
    """
    real_poles: np.ndarray = poles[_is_real(poles)]
    if real_poles.size == 0:
        return None
    if analog:
        distance: np.ndarray = np.abs(real_poles.real)
    else:
        distance = np.abs(1.0 - np.abs(real_poles))
    order: np.ndarray = np.argsort(distance, kind="stable")
    return real_poles[order[-1]]


def _with_origin(values: np.ndarray) -> np.ndarray:
    """Add a real value at 0, keeping the conjugate-split ordering."""
    real: np.ndarray = _is_real(values)
    real_values: np.ndarray = np.sort(np.append(values[real].real, 0.0))
    return np.concatenate((values[~real], real_values.astype(np.complex128)))


def _take_nearest(zeros: np.ndarray, target: complex, which: str):
    """Remove and return the zero nearest to target."""
    zero_index = _nearest_index(zeros, target, which)
    if zero_index is None:
        message = f"No {which} zero left to pair with pole {target}"
        logger.error(message)
        raise NumericalFailureError(message)
    return zeros[zero_index], np.delete(zeros, zero_index)


def zpk2sos(
    zpk: ZPK,
    pairing: SOSPairing = SOSPairing.NEAREST,
    analog: bool = False
) -> SOS:
    """
    Convert zeros, poles and gain into cascaded second order sections.

    Args:
        zpk: Zeros, poles and gain. Digital filters with fewer zeros than
            poles get the missing zeros at the origin; analog filters need
            equal counts.
        pairing: Pole/zero pairing strategy.
            KEEP_ODD pairs the least sharp real pole with its nearest
            real zero in a first order section, falling back to a biquad
            when there is no real zero.
        analog: If True, poles closest to the imaginary axis are treated as
            the sharpest; otherwise those closest to the unit circle.

    Returns:
        SOS: ceil(order / 2) sections. The overall gain is applied to the
            first section; the last section holds the sharpest poles.

    Raises:
        InvalidArgumentError: If the ZPK is empty or improper, the pairing
            is unknown, or a complex value has no conjugate partner.
    """
    if not isinstance(pairing, SOSPairing):
        message = f"Unknown pairing strategy {pairing!r}"
        logger.error(message)
        raise InvalidArgumentError(message)

    if zpk.is_empty():
        message = "ZPK has no zeros or poles"
        logger.error(message)
        raise InvalidArgumentError(message)

    if zpk.number_of_zeros > zpk.number_of_poles:
        message = (
            f"Number of zeros ({zpk.number_of_zeros}) cannot exceed number "
            f"of poles ({zpk.number_of_poles})"
        )
        logger.error(message)
        raise InvalidArgumentError(message)

    if analog and zpk.number_of_zeros != zpk.number_of_poles:
        message = (
            f"Analog sections need as many zeros ({zpk.number_of_zeros}) as "
            f"poles ({zpk.number_of_poles})"
        )
        logger.error(message)
        raise InvalidArgumentError(message)

    zeros: np.ndarray = zpk.zeros.copy()
    poles: np.ndarray = zpk.poles.copy()
    number_of_sections: int = (poles.size + 1) // 2
    is_odd: bool = poles.size % 2 == 1

    # Missing digital zeros sit at the origin, as they do for zpk2tf
    zeros = np.append(zeros, np.zeros(poles.size - zeros.size))

    zeros = _split_conjugates(zeros)
    poles = _split_conjugates(poles)

    # KEEP_ODD reserves the real zero of the first order section up front so
    # the biquads cannot use it up
    reserved_zero: Optional[complex] = None
    keeps_first_order: bool = is_odd and pairing == SOSPairing.KEEP_ODD
    if keeps_first_order:
        odd_pole: Optional[complex] = _first_order_pole(poles, analog)
        zero_index: Optional[int] = (
            None if odd_pole is None else _nearest_index(zeros, odd_pole, "real")
        )
        if zero_index is None:
            keeps_first_order = False
        else:
            reserved_zero = zeros[zero_index]
            zeros = np.delete(zeros, zero_index)

    # Otherwise an odd order gets a pole and zero at the origin, so every
    # section is a biquad
    if is_odd and not keeps_first_order:
        poles = _with_origin(poles)
        zeros = _with_origin(zeros)

    sections: np.ndarray = np.zeros((number_of_sections, 6))

    # ===== FILL SECTIONS FROM THE BACK =====
    for section_index in range(number_of_sections - 1, -1, -1):
        # Next sharpest pole
        pole_index: int = _worst_pole_index(poles, analog)
        p1: complex = poles[pole_index]
        poles = np.delete(poles, pole_index)

        if keeps_first_order and _is_real(p1) and np.count_nonzero(_is_real(poles)) == 0:
            # Last remaining real pole: first order section
            sections[section_index] = _build_section([reserved_zero, 0.0], [p1, 0.0])

        else:
            if _is_real(p1):
                real_indices: np.ndarray = np.flatnonzero(_is_real(poles))
                p2_index: int = int(real_indices[_worst_pole_index(poles[real_indices], analog)])
                p2: complex = poles[p2_index]
                poles = np.delete(poles, p2_index)
            else:
                p2 = np.conj(p1)

            if zeros.size > 0:
                z1, zeros = _take_nearest(zeros, p1, "any")
                if not _is_real(z1):
                    sections[section_index] = _build_section([z1, np.conj(z1)], [p1, p2])
                elif zeros.size > 0:
                    z2, zeros = _take_nearest(zeros, p1, "real")
                    sections[section_index] = _build_section([z1, z2], [p1, p2])
                else:
                    sections[section_index] = _build_section([z1], [p1, p2])
            else:
                sections[section_index] = _build_section([], [p1, p2])

    # The overall gain rides on the first section
    sections[0, 0:3] *= zpk.gain

    logger.debug(f"Built {number_of_sections} sections with {pairing.value} pairing")
    return SOS(sections=sections)


def sos2tf(sos: SOS) -> BA:
    """
    Collapse cascaded second order sections into a single transfer function.

    Args:
        sos: The cascade.

    Returns:
        BA: Products of the section numerators and denominators.
    """
    numerator: np.ndarray = reduce(np.convolve, list(sos.numerators))
    denominator: np.ndarray = reduce(np.convolve, list(sos.denominators))
    return BA(numerator=numerator, denominator=denominator)


def sos2zpk(sos: SOS) -> ZPK:
    """
    Collect the zeros, poles and gain of every section.

    Leading zero numerator coefficients are dropped before root finding, so
    such a section contributes fewer zeros than poles.

    Args:
        sos: The cascade.

    Returns:
        ZPK: Concatenated section zeros and poles and the product of the
            section gains.
    """
    zeros: List[np.ndarray] = []
    poles: List[np.ndarray] = []
    gain: float = 1.0

    for numerator, denominator in zip(sos.numerators, sos.denominators):
        nonzero: np.ndarray = np.flatnonzero(numerator)
        if nonzero.size == 0:
            gain = 0.0
        else:
            trimmed: np.ndarray = numerator[nonzero[0]:]
            zeros.append(roots(trimmed))
            gain *= float(trimmed[0])
        poles.append(roots(denominator))

    return ZPK(
        zeros=np.concatenate(zeros) if zeros else np.zeros(0, dtype=np.complex128),
        poles=np.concatenate(poles),
        gain=gain
    )
