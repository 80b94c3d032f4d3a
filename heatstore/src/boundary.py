"""
Boundary conditions for the fluid/solid transport solver.

Boundary conditions act on the boundary face fluxes rather than on ghost
cells. The solid phase is insulated at both ends (zero flux).
"""

import numpy as np
from abc import ABC, abstractmethod

from .mesh import Mesh1D


class BoundaryCondition(ABC):
    """Abstract base class for boundary conditions."""

    @abstractmethod
    def apply(self, F_fluid: np.ndarray, F_solid: np.ndarray,
              Tf: np.ndarray, Ts: np.ndarray, mesh: Mesh1D,
              velocity: float, side: str) -> None:
        """
        Set fluxes on the boundary face in place.

        Args:
            F_fluid, F_solid: Face fluxes (n_faces,)
            Tf, Ts: Previous-layer cell temperatures (n_cells,)
            mesh: Computational mesh
            velocity: Advective fluid velocity
            side: 'left' or 'right'
        """
        pass


class InletBC(BoundaryCondition):
    """
    Inflow at a prescribed fluid temperature.

    Left boundary face: advective flux u * T_in, no diffusion.
    """

    def __init__(self, temperature: float):
        """
        Args:
            temperature: Inflow temperature T_in
        """
        self.temperature = temperature

    def apply(self, F_fluid, F_solid, Tf, Ts, mesh, velocity, side):
        if side == 'left':
            F_fluid[0] = velocity * self.temperature
            F_solid[0] = 0.0
        else:
            raise ValueError(f"InletBC supports the left boundary only, got '{side}'")


class OutletBC(BoundaryCondition):
    """
    Outflow: upwind advection of the last interior cell, no diffusion.
    """

    def apply(self, F_fluid, F_solid, Tf, Ts, mesh, velocity, side):
        if side == 'right':
            F_fluid[-1] = velocity * Tf[mesh.face_minus[-1]]
            F_solid[-1] = 0.0
        else:
            raise ValueError(f"OutletBC supports the right boundary only, got '{side}'")
