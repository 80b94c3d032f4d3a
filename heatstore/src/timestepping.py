"""
Explicit time integration of the finite volume transport equations.
"""

import numpy as np


def flux_divergence(F: np.ndarray, cell_face_minus: np.ndarray,
                    cell_face_plus: np.ndarray) -> np.ndarray:
    """
    Net outgoing flux per cell, F(plus face) - F(minus face).

    Args:
        F: Face fluxes (n_faces,)
        cell_face_minus, cell_face_plus: Face indices per cell (n_cells,)
    """
    return F[cell_face_plus] - F[cell_face_minus]


def forward_euler_step(T_prev: np.ndarray, F: np.ndarray, dt: float, h: float,
                       cell_face_minus: np.ndarray, cell_face_plus: np.ndarray,
                       out: np.ndarray) -> np.ndarray:
    """
    Forward Euler finite volume update written into a preallocated buffer.

        T_new = T_prev - dt / h * (F_plus - F_minus)

    Args:
        T_prev: Cell values at the previous time layer
        F: Face fluxes computed from T_prev
        dt: Time step
        h: Cell size (uniform mesh)
        cell_face_minus, cell_face_plus: Face indices per cell
        out: Destination array, must not alias T_prev

    Returns:
        out
    """
    np.subtract(T_prev, dt / h * flux_divergence(F, cell_face_minus, cell_face_plus),
                out=out)
    return out


def add_source(T_new: np.ndarray, S: np.ndarray, dt: float) -> np.ndarray:
    """Explicit source integration, T_new += dt * S (in place)."""
    T_new += dt * S
    return T_new
