"""Norms used for steady-state detection and error measurement."""

import numpy as np

from .mesh import Mesh1D


def calc_diff(first: np.ndarray, second: np.ndarray, mesh: Mesh1D) -> float:
    """Volume-weighted discrete L2 norm of the difference of two cell fields."""
    diff = np.asarray(first) - np.asarray(second)
    return float(np.sqrt(np.sum(mesh.vol * diff**2)))


def convergence_order(error_coarse: float, error_fine: float, factor: float) -> float:
    """Observed order of accuracy between two refinement levels."""
    return float(np.log(error_coarse / error_fine) / np.log(factor))
