from .autodiff import deriv, derivative, seed
from .function import atan, cos, cosh, e, exp, log, pi, pow, sin, sinh, sqrt, tan, tanh
from .optimize import find_bisections, newton, root_search

__all__ = [
    "deriv",
    "derivative",
    "seed",
    "atan",
    "cos",
    "cosh",
    "e",
    "exp",
    "log",
    "pi",
    "pow",
    "sin",
    "sinh",
    "sqrt",
    "tan",
    "tanh",
    "find_bisections",
    "newton",
    "root_search",
]
