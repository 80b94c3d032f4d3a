"""
Manufactured solutions for verifying the fluid transport discretization.

Each exact solution T(t, x) comes with the source S(t, x) that makes it a
steady solution of

    u * dT/dx - alpha * d2T/dx2 = S
"""

import numpy as np
from typing import Callable, Tuple

from .mesh import Mesh1D

FuncTX = Callable[[float, np.ndarray], np.ndarray]


def _cos_kx(velocity: float, alpha: float, k: float) -> Tuple[FuncTX, FuncTX]:
    def exact(t, x):
        return np.cos(k * x)

    def rhs(t, x):
        return -velocity * k * np.sin(k * x) + alpha * k**2 * np.cos(k * x)

    return exact, rhs


def _cos_kx2(velocity: float, alpha: float, k: float) -> Tuple[FuncTX, FuncTX]:
    def exact(t, x):
        return np.cos(k * x**2)

    def rhs(t, x):
        return (-velocity * k * 2.0 * x * np.sin(k * x**2)
                + alpha * (k**2 * 4.0 * x**2 * np.cos(k * x**2)
                           + k * 2.0 * np.sin(k * x**2)))

    return exact, rhs


SOLUTIONS = {
    'cos(kx)': _cos_kx,
    'cos(kx^2)': _cos_kx2,
}


def manufactured_solution(name: str, velocity: float, alpha: float,
                          wavenumber: float) -> Tuple[FuncTX, FuncTX]:
    """
    Exact solution and matching source by name.

    Args:
        name: One of SOLUTIONS ('cos(kx)', 'cos(kx^2)')
        velocity: Fluid velocity u
        alpha: Fluid conductivity
        wavenumber: k

    Returns:
        (func_exact, func_rhs), both f(t, x)
    """
    try:
        factory = SOLUTIONS[name]
    except KeyError:
        raise ValueError(f"Unknown MMS exact solution: {name}. "
                         f"Options: {', '.join(repr(s) for s in SOLUTIONS)}") from None
    return factory(velocity, alpha, wavenumber)


def evaluate(func: FuncTX, t: float, mesh: Mesh1D) -> np.ndarray:
    """Sample f(t, x) at the cell centers."""
    return np.asarray(func(t, mesh.x_cells), dtype=float) * np.ones(mesh.n_cells)
