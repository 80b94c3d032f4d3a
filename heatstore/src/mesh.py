"""
Uniform 1D cell-centered finite volume mesh with face/cell topology.
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple


def to_scalar(vector: Sequence[float], dtype=np.float64):
    """
    Convert a one-component domain vector to a scalar coordinate.

    Args:
        vector: Sequence whose first entry is the coordinate
        dtype: Target numeric precision (e.g. np.float64, np.float32)
    """
    return dtype(vector[0])


@dataclass
class Mesh1D:
    """
    Uniform 1D mesh.

    Cell-centered finite volume mesh:
    - x_faces: Face locations (n_cells + 1)
    - x_cells: Cell centers (n_cells)
    - dx: Cell widths (n_cells)
    - vol: Cell volumes (n_cells), unit cross-section

    Topology (index -1 marks a missing neighbour at the domain boundary):
    - face_minus, face_plus: Cell on the minus/plus side of each face
    - cell_face_minus, cell_face_plus: Face on the minus/plus side of each cell
    """
    x_faces: np.ndarray

    def __post_init__(self):
        self.n_cells = len(self.x_faces) - 1
        self.n_faces = len(self.x_faces)
        self.x_cells = 0.5 * (self.x_faces[:-1] + self.x_faces[1:])
        self.dx = self.x_faces[1:] - self.x_faces[:-1]
        self.vol = self.dx.copy()

        cells = np.arange(self.n_cells)
        self.face_minus = np.arange(-1, self.n_cells)
        self.face_plus = np.arange(self.n_faces)
        self.face_plus[-1] = -1
        self.cell_face_minus = cells
        self.cell_face_plus = cells + 1

    @classmethod
    def uniform(cls, x_min: float, x_max: float, n_cells: int) -> 'Mesh1D':
        """
        Create a uniform mesh.

        Args:
            x_min, x_max: Domain bounds
            n_cells: Number of cells
        """
        if n_cells < 1:
            raise ValueError(f"Mesh needs at least one cell, got {n_cells}")
        x_faces = np.linspace(x_min, x_max, n_cells + 1)
        return cls(x_faces=x_faces)

    @classmethod
    def from_domain(cls, a: Sequence[float], b: Sequence[float], n_cells: int,
                    dtype=np.float64) -> 'Mesh1D':
        """Create a uniform mesh spanning the domain rectangle [a, b]."""
        if n_cells < 1:
            raise ValueError(f"Mesh needs at least one cell, got {n_cells}")
        x_faces = np.linspace(to_scalar(a, dtype), to_scalar(b, dtype), n_cells + 1,
                              dtype=dtype)
        return cls(x_faces=x_faces)

    @property
    def h(self) -> float:
        """Cell spacing (uniform mesh assumed, read from cell 0)."""
        return float(self.vol[0])

    def cell_center(self, cell: int) -> float:
        return float(self.x_cells[cell])

    def face_center(self, face: int) -> float:
        return float(self.x_faces[face])

    def face_cells(self, face: int) -> Tuple[Optional[int], Optional[int]]:
        """Cells on the minus and plus side of a face (None at a boundary)."""
        cm = int(self.face_minus[face])
        cp = int(self.face_plus[face])
        return (cm if cm >= 0 else None, cp if cp >= 0 else None)

    def cell_faces(self, cell: int) -> Tuple[int, int]:
        """Faces on the minus and plus side of a cell."""
        return int(self.cell_face_minus[cell]), int(self.cell_face_plus[cell])

    def neighbour_cell(self, cell: int, direction: int) -> Optional[int]:
        """
        Adjacent cell in the given direction (0 = minus, 1 = plus).

        Returns None past the domain boundary.
        """
        neighbour = cell + 1 if direction else cell - 1
        if neighbour < 0 or neighbour >= self.n_cells:
            return None
        return neighbour
