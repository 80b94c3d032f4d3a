"""
Numerical flux schemes for fluid/solid temperature transport.

Equation per phase:  dT/dt + d(flux)/dx = S

    fluid flux = u * T - alpha_f * dT/dx
    solid flux =       - alpha_s * dT/dx
"""

import numpy as np
from abc import ABC, abstractmethod
from typing import Tuple

from .mesh import Mesh1D
from .boundary import BoundaryCondition


class FluxScheme(ABC):
    """Abstract base class for numerical flux schemes."""

    @abstractmethod
    def compute_flux_vectorized(self, Tf: np.ndarray, Ts: np.ndarray, mesh: Mesh1D,
                                velocity: float, alpha_fluid: float,
                                alpha_solid: float) -> Tuple[np.ndarray, np.ndarray]:
        """
        Compute interior face fluxes for both phases.

        Args:
            Tf, Ts: Cell temperatures (n_cells,)
            mesh: Computational mesh
            velocity: Fluid velocity
            alpha_fluid, alpha_solid: Conductivities

        Returns:
            F_fluid, F_solid: Fluxes at all faces (n_faces,);
            boundary faces are left at zero for the boundary conditions
        """
        pass

    def compute_fluxes(self, Tf: np.ndarray, Ts: np.ndarray, mesh: Mesh1D,
                       velocity: float, alpha_fluid: float, alpha_solid: float,
                       bc_left: BoundaryCondition,
                       bc_right: BoundaryCondition) -> Tuple[np.ndarray, np.ndarray]:
        """Interior fluxes followed by boundary fluxes."""
        F_fluid, F_solid = self.compute_flux_vectorized(
            Tf, Ts, mesh, velocity, alpha_fluid, alpha_solid)
        bc_left.apply(F_fluid, F_solid, Tf, Ts, mesh, velocity, 'left')
        bc_right.apply(F_fluid, F_solid, Tf, Ts, mesh, velocity, 'right')
        return F_fluid, F_solid


class UpwindCentralFlux(FluxScheme):
    """
    First-order upwind advection with second-order central diffusion.

    The fluid is advected with the value of the minus cell, so the scheme
    is upwind for non-negative velocity. The solid phase only diffuses.
    """

    def compute_flux_vectorized(self, Tf, Ts, mesh, velocity, alpha_fluid, alpha_solid):
        h = mesh.h
        F_fluid = np.zeros(mesh.n_faces)
        F_solid = np.zeros(mesh.n_faces)

        # Faces with both neighbours present
        interior = (mesh.face_minus >= 0) & (mesh.face_plus >= 0)
        cm = mesh.face_minus[interior]
        cp = mesh.face_plus[interior]

        # convection: first order upwind
        F_fluid[interior] = velocity * Tf[cm]
        # diffusion: central second order
        F_fluid[interior] += -alpha_fluid * (Tf[cp] - Tf[cm]) / h
        F_solid[interior] = -alpha_solid * (Ts[cp] - Ts[cm]) / h

        return F_fluid, F_solid
