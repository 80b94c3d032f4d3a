"""
Linear interpolation of cell fields between 1D meshes.

Used to compare solutions computed on meshes of different resolution.
"""

import numpy as np

from .mesh import Mesh1D


def interpolate_linear(x: float, x_left: float, x_right: float,
                       u_left: float, u_right: float) -> float:
    """
    Linear interpolation between two points.

    Returns the endpoint value exactly when x coincides with an endpoint,
    and u_left for a degenerate bracket (x_left == x_right).
    """
    if x == x_left or x_left == x_right:
        return u_left
    if x == x_right:
        return u_right
    return ((x - x_left) * u_right + (x_right - x) * u_left) / (x_right - x_left)


def interpolate_field(field_src: np.ndarray, mesh_src: Mesh1D,
                      mesh_dest: Mesh1D) -> np.ndarray:
    """
    Interpolate a cell field onto the cell centers of another 1D mesh.

    Both meshes are traversed once in ascending order: a bracket of source
    cells (left, right) only moves forward while destination cells are
    visited, so the cost is O(n_src + n_dest).

    Destination centers outside the range of source centers take the value
    of the nearest boundary cell.

    Args:
        field_src: Cell values on mesh_src (n_src,)
        mesh_src: Source mesh, cell centers ascending
        mesh_dest: Destination mesh, cell centers ascending

    Returns:
        Cell values on mesh_dest (n_dest,)
    """
    x_src = mesh_src.x_cells
    last = mesh_src.n_cells - 1
    res = np.empty(mesh_dest.n_cells)

    left = right = 0
    for i, x_dest in enumerate(mesh_dest.x_cells):
        while x_src[right] < x_dest:
            if right == last:
                break
            left = right
            right += 1

        if x_dest >= x_src[last]:
            # beyond the last source center
            res[i] = field_src[last]
        elif x_dest <= x_src[0]:
            # before the first source center
            res[i] = field_src[0]
        else:
            res[i] = interpolate_linear(x_dest, x_src[left], x_src[right],
                                        field_src[left], field_src[right])
    return res
