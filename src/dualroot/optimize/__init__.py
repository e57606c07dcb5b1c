"""
#######################################
Root finding (:mod:`dualroot.optimize`)
#######################################

.. currentmodule:: dualroot.optimize

This module provides solvers that locate every real root of a univariate function
in a bounded interval.

Root finding
============

.. autosummary::
    :toctree: generated/

    find_bisections
    newton
    root_search

Miscellaneous
=============

.. autosummary::
    :toctree: generated/

    Bracket
    FailedBracket
    InvalidIntervalError
    NewtonResult
    NewtonStatus
    RootSearchResult

"""

from .rootfinding import (
    Bracket,
    FailedBracket,
    InvalidIntervalError,
    NewtonResult,
    NewtonStatus,
    RootSearchResult,
    find_bisections,
    newton,
    root_search,
)

__all__ = [
    "Bracket",
    "FailedBracket",
    "InvalidIntervalError",
    "NewtonResult",
    "NewtonStatus",
    "RootSearchResult",
    "find_bisections",
    "newton",
    "root_search",
]
