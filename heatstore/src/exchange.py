"""
Fluid/solid heat exchange applied after the explicit transport update.
"""

from abc import ABC, abstractmethod

from .state import ThermalState
from .mesh import Mesh1D


class HeatExchange(ABC):
    """
    Post-step coupling between the fluid and solid temperatures.

    Called once per step after transport and sources, with the new values
    in the current layers of the state.
    """

    def __init__(self, exchange_fluid: float = 0.0, exchange_solid: float = 0.0):
        """
        Args:
            exchange_fluid: Exchange coefficient of the fluid phase
            exchange_solid: Exchange coefficient of the solid phase
        """
        self.exchange_fluid = exchange_fluid
        self.exchange_solid = exchange_solid

    @abstractmethod
    def apply(self, state: ThermalState, mesh: Mesh1D, dt: float) -> None:
        """Update state.Tf and state.Ts in place."""
        pass


class NoHeatExchange(HeatExchange):
    """Phases stay uncoupled; the coefficients are stored but unused."""

    def apply(self, state: ThermalState, mesh: Mesh1D, dt: float) -> None:
        return None
