"""
Source terms for the fluid/solid temperature equations.

Notation:
    S - source rate per cell, dT/dt = ... + S
"""

import numpy as np
from abc import ABC, abstractmethod
from typing import List

from .state import ThermalState
from .mesh import Mesh1D


class SourceTerm(ABC):
    """Abstract base class for source terms."""

    @abstractmethod
    def compute(self, state: ThermalState, mesh: Mesh1D) -> np.ndarray:
        """
        Compute source term contribution.

        Args:
            state: Temperature state
            mesh: Computational mesh

        Returns:
            S: Source rate array of shape (n_cells,)
        """
        pass


class FieldSourceTerm(SourceTerm):
    """
    Fixed per-cell source field.

    The array is owned by the caller and read on every step, so changes
    made to it between steps are picked up.
    """

    def __init__(self, field: np.ndarray):
        """
        Args:
            field: Source rate per cell (n_cells,)
        """
        self.field = field

    def compute(self, state: ThermalState, mesh: Mesh1D) -> np.ndarray:
        if len(self.field) != mesh.n_cells:
            raise ValueError(f"Source field has {len(self.field)} cells, "
                             f"mesh has {mesh.n_cells}")
        return self.field


class CompositeSourceTerm(SourceTerm):
    """Combines multiple source terms."""

    def __init__(self, sources: List[SourceTerm] = None):
        self.sources = sources if sources is not None else []

    def add(self, source: SourceTerm):
        """Add a source term to the composite."""
        self.sources.append(source)

    def compute(self, state: ThermalState, mesh: Mesh1D) -> np.ndarray:
        S_total = np.zeros(mesh.n_cells)
        for source in self.sources:
            S_total += source.compute(state, mesh)
        return S_total
