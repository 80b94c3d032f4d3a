"""
Plain text output of cell fields and scalar time series.

Field files hold one block per frame:

    # t=<time> <title>
    x <name_0> <name_1> ...
    <x> <value_0> <value_1> ...

Scalar files hold a header of column names followed by one row per write.
"""

import numpy as np
from pathlib import Path
from typing import Callable, Dict, Union

from .mesh import Mesh1D

PathLike = Union[str, Path]


class FieldSession:
    """
    Writes cell fields of one mesh to a text file, one block per frame.

    The first write truncates the file, later writes append.
    """

    def __init__(self, mesh: Mesh1D, columns: Dict[str, Callable[[], np.ndarray]],
                 path: PathLike):
        """
        Args:
            mesh: Mesh providing the x column
            columns: Column name -> callable returning the cell values
            path: Output file
        """
        self.mesh = mesh
        self.columns = columns
        self.path = Path(path)
        self.n_frames = 0

    def write(self, time: float, title: str = "field"):
        data = [self.mesh.x_cells] + [np.asarray(f()) for f in self.columns.values()]
        header = f"t={time!r} {title}\n" + " ".join(["x"] + list(self.columns))
        mode = "w" if self.n_frames == 0 else "a"
        with open(self.path, mode) as fh:
            if self.n_frames > 0:
                fh.write("\n")
            np.savetxt(fh, np.column_stack(data), fmt="%.17g", header=header)
        self.n_frames += 1


class ScalarSession:
    """Writes one row of named scalars per call to a text file."""

    def __init__(self, columns: Dict[str, Callable[[], float]], path: PathLike):
        self.columns = columns
        self.path = Path(path)
        self.n_rows = 0

    def write(self):
        row = " ".join(f"{float(f())!r}" for f in self.columns.values())
        mode = "w" if self.n_rows == 0 else "a"
        with open(self.path, mode) as fh:
            if self.n_rows == 0:
                fh.write(" ".join(self.columns) + "\n")
            fh.write(row + "\n")
        self.n_rows += 1


def write_field(path: PathLike, mesh: Mesh1D, values: np.ndarray, name: str = "u"):
    """Write a single cell field as columns 'x <name>'."""
    FieldSession(mesh, {name: lambda: values}, path).write(0.0, "field")


def read_field(path: PathLike) -> np.ndarray:
    """
    Read the last frame of a field file.

    Returns:
        Array of shape (n_cells, n_columns), first column x
    """
    blocks = Path(path).read_text().strip().split("\n\n")
    rows = [line for line in blocks[-1].splitlines() if not line.startswith("#")]
    return np.loadtxt(rows, ndmin=2)
