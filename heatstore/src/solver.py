"""
Explicit finite volume solver for coupled fluid/solid temperatures.
"""

import logging

import numpy as np
import matplotlib.pyplot as plt
from dataclasses import dataclass
from typing import Optional

from .mesh import Mesh1D
from .state import Layer, ThermalState
from .flux import FluxScheme, UpwindCentralFlux
from .boundary import BoundaryCondition, InletBC, OutletBC
from .sources import CompositeSourceTerm, FieldSourceTerm, SourceTerm
from .exchange import HeatExchange, NoHeatExchange
from .timestepping import forward_euler_step, add_source
from .output import write_field

log = logging.getLogger(__name__)


@dataclass
class SolverConfig:
    """Physical and numerical parameters of the heat storage solver."""
    time_step: float = 1e-3
    fluid_velocity: float = 1.0
    conductivity_fluid: float = 0.0
    conductivity_solid: float = 0.0
    temperature_hot: float = 1.0   # Inflow temperature
    temperature_cold: float = 0.0  # Initial temperature
    exchange_fluid: float = 0.0
    exchange_solid: float = 0.0


class HeatStorageSolver:
    """
    Heat storage solver: fluid and solid temperatures on a 1D mesh.

    Features:
    - Fluid advected with first-order upwind, central diffusion
    - Solid diffusion only, insulated at both ends
    - Optional per-cell source fields for each phase
    - Pluggable post-step heat exchange (no-op by default)

    One step is bracketed as start_step(), calc_step(), finish_step().
    """

    def __init__(self, mesh: Mesh1D, config: SolverConfig = None,
                 rhs_fluid: Optional[np.ndarray] = None,
                 rhs_solid: Optional[np.ndarray] = None,
                 heat_exchange: HeatExchange = None):
        """
        Initialize the solver.

        Args:
            mesh: Computational mesh (uniform)
            config: Solver configuration
            rhs_fluid: Source field for the fluid, owned by the caller
            rhs_solid: Source field for the solid, owned by the caller
            heat_exchange: Post-step coupling between the phases
        """
        self._mesh = mesh
        self.config = config if config is not None else SolverConfig()

        # Numerical components
        self.flux_scheme: FluxScheme = UpwindCentralFlux()
        self.bc_left: BoundaryCondition = InletBC(self.config.temperature_hot)
        self.bc_right: BoundaryCondition = OutletBC()
        self.sources_fluid = CompositeSourceTerm()
        self.sources_solid = CompositeSourceTerm()
        if rhs_fluid is not None:
            self.sources_fluid.add(FieldSourceTerm(rhs_fluid))
        if rhs_solid is not None:
            self.sources_solid.add(FieldSourceTerm(rhs_solid))

        if heat_exchange is None:
            heat_exchange = NoHeatExchange(self.config.exchange_fluid,
                                           self.config.exchange_solid)
        self.heat_exchange = heat_exchange

        # Solution storage
        self.state = ThermalState.uniform(mesh.n_cells, self.config.temperature_cold)
        self.time = 0.0
        self.iteration = 0
        self._in_step = False
        self._step_done = False

    @property
    def mesh(self) -> Mesh1D:
        return self._mesh

    @property
    def time_step(self) -> float:
        return self.config.time_step

    def add_fluid_source(self, source: SourceTerm):
        self.sources_fluid.add(source)

    def add_solid_source(self, source: SourceTerm):
        self.sources_solid.add(source)

    # --- Accessors ---

    def get_fluid_temperature(self, layer: Layer = Layer.CURRENT) -> np.ndarray:
        """Fluid temperature of a time layer (read-only view)."""
        view = self.state.fluid.get(layer).view()
        view.flags.writeable = False
        return view

    def get_solid_temperature(self, layer: Layer = Layer.CURRENT) -> np.ndarray:
        """Solid temperature of a time layer (read-only view)."""
        view = self.state.solid.get(layer).view()
        view.flags.writeable = False
        return view

    # --- Stepping ---

    def start_step(self):
        self._in_step = True
        self._step_done = False

    def calc_step(self):
        """
        Advance both temperatures by one time step.

        Equation: dT/dt + div(fluxes) = S
        """
        if not self._in_step or self._step_done:
            raise RuntimeError("calc_step() must be called once between "
                               "start_step() and finish_step()")

        self.state.swap()
        Tf, Tf_new = self.state.fluid.previous, self.state.fluid.current
        Ts, Ts_new = self.state.solid.previous, self.state.solid.current

        mesh = self._mesh
        h = mesh.h  # uniform mesh assumed
        dt = self.config.time_step

        F_fluid, F_solid = self.flux_scheme.compute_fluxes(
            Tf, Ts, mesh,
            self.config.fluid_velocity,
            self.config.conductivity_fluid,
            self.config.conductivity_solid,
            self.bc_left, self.bc_right)

        # Time integration of flux terms
        forward_euler_step(Tf, F_fluid, dt, h,
                           mesh.cell_face_minus, mesh.cell_face_plus, out=Tf_new)
        forward_euler_step(Ts, F_solid, dt, h,
                           mesh.cell_face_minus, mesh.cell_face_plus, out=Ts_new)

        # Time integration of source terms
        if self.sources_fluid.sources:
            add_source(Tf_new, self.sources_fluid.compute(self.state, mesh), dt)
        if self.sources_solid.sources:
            add_source(Ts_new, self.sources_solid.compute(self.state, mesh), dt)

        self.heat_exchange.apply(self.state, mesh, dt)
        self._step_done = True

    def finish_step(self):
        self._in_step = False
        self.time += self.config.time_step
        self.iteration += 1

    def step(self):
        """Perform one bracketed time step."""
        self.start_step()
        self.calc_step()
        self.finish_step()

    # --- Output ---

    def write_field(self, field: np.ndarray, filename):
        """Write a cell field as plain text columns 'x u'."""
        write_field(filename, self._mesh, field, name="u")

    def plot_solution(self, filename: str = None):
        """Plot fluid and solid temperatures."""
        x = self._mesh.x_cells

        fig, ax = plt.subplots(figsize=(8, 5))
        ax.plot(x, self.state.Tf, 'r-', linewidth=2, label='Fluid')
        ax.plot(x, self.state.Ts, 'b--', linewidth=2, label='Solid')
        ax.set_xlabel('x')
        ax.set_ylabel('Temperature')
        ax.set_title(f'Heat storage (t = {self.time:.4e}, step = {self.iteration})')
        ax.grid(True)
        ax.legend()
        plt.tight_layout()

        if filename:
            plt.savefig(filename, dpi=150, bbox_inches='tight')
            log.info("Saved plot to %s", filename)
        plt.close(fig)
