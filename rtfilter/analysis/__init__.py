"""
Analysis Module
===============

Numerical frequency responses and stability checks for BA, ZPK and SOS
filters.
"""

from .frequency_response import freqs, freqz, is_stable, sosfreqz, zpk_response

__all__ = [
    "freqs",
    "freqz",
    "is_stable",
    "sosfreqz",
    "zpk_response",
]
