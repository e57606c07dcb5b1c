"""
####################################################
Automatic differentiation (:mod:`dualroot.autodiff`)
####################################################

.. currentmodule:: dualroot.autodiff

This module provides forward-mode automatic differentiation.

Differential operators
----------------------

.. autosummary::
    :toctree: generated/

    deriv
    derivative
    seed

Number systems containing infinitesimals
----------------------------------------

.. autosummary::
    :toctree: generated/

    Dual

"""

from .autodiff import deriv, derivative, seed
from .dual import Dual

__all__ = [
    "deriv",
    "derivative",
    "seed",
    "Dual",
]
