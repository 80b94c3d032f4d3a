"""
Two-layer temperature state.

Each field keeps two snapshots over all cells:
    current  - result of the most recently finished step
    previous - the step before, read by the update as history

Advancing time swaps the two references and writes the new values into the
fresh current buffer, so a step never reads and writes the same array.
"""

import numpy as np
from dataclasses import dataclass
from enum import Enum


class Layer(Enum):
    """Time layer tag."""
    CURRENT = 'current'
    PREVIOUS = 'previous'


@dataclass
class LayeredField:
    """
    Scalar cell field with current and previous time layers.

    Both layers always have the same size.
    """
    current: np.ndarray
    previous: np.ndarray

    def __post_init__(self):
        if self.current.shape != self.previous.shape:
            raise ValueError(f"Layer shapes differ: {self.current.shape} "
                             f"vs {self.previous.shape}")

    @classmethod
    def uniform(cls, n_cells: int, value: float) -> 'LayeredField':
        """Both layers filled with a constant value."""
        return cls(current=np.full(n_cells, value, dtype=float),
                   previous=np.full(n_cells, value, dtype=float))

    def get(self, layer: Layer = Layer.CURRENT) -> np.ndarray:
        """Layer array by tag (no copy)."""
        if layer is Layer.CURRENT:
            return self.current
        if layer is Layer.PREVIOUS:
            return self.previous
        raise ValueError(f"Unknown layer: {layer}")

    def swap(self):
        """Exchange current and previous in constant time."""
        self.current, self.previous = self.previous, self.current

    def __len__(self) -> int:
        return len(self.current)


@dataclass
class ThermalState:
    """Coupled fluid and solid temperature fields."""
    fluid: LayeredField
    solid: LayeredField

    @classmethod
    def uniform(cls, n_cells: int, temperature: float) -> 'ThermalState':
        return cls(fluid=LayeredField.uniform(n_cells, temperature),
                   solid=LayeredField.uniform(n_cells, temperature))

    def swap(self):
        self.fluid.swap()
        self.solid.swap()

    # --- Shorthand for the current layer ---

    @property
    def Tf(self) -> np.ndarray:
        """Fluid temperature, current layer."""
        return self.fluid.current

    @property
    def Ts(self) -> np.ndarray:
        """Solid temperature, current layer."""
        return self.solid.current
