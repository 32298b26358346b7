"""
Polynomial Module
=================

Polynomial root finding, expansion from roots, and Horner evaluation.
"""

from .polynomial_algebra import poly, polyval, roots

__all__ = [
    "poly",
    "polyval",
    "roots",
]
