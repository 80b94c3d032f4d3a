"""
Mesh convergence study with manufactured solutions.

Runs independent solvers on meshes refined by a constant factor, each to
steady state or to a step budget, and compares every result with the
exact solution and with the previous (coarser) result.

Output files in the output directory:
    mms_statistics.dat           num_cells error diff dt num_steps step_diff
    field_T_fluid_<n>.dat        computed fluid temperature, n cells
    field_T_fluid_exact.dat      exact solution on the finest mesh
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

import numpy as np
import matplotlib.pyplot as plt

from .mesh import Mesh1D
from .state import Layer
from .solver import HeatStorageSolver, SolverConfig
from .interpolation import interpolate_field
from .metrics import calc_diff, convergence_order
from .mms import FuncTX, evaluate

log = logging.getLogger(__name__)

FIELD_NAME_PREFIX = "field_T_fluid_"
STATISTICS_FILENAME = "mms_statistics.dat"


@dataclass(frozen=True)
class ConvergenceEntry:
    """Result of one refinement stage, never modified once recorded."""
    num_cells: int
    h: float
    mesh: Mesh1D
    solver: HeatStorageSolver
    fluid_temperature: np.ndarray
    exact_fluid_temperature: np.ndarray
    error: float
    diff_prev: float
    num_steps: int
    step_diff: float


class ConvergenceTester:
    """Sequence of solver runs on uniformly refined meshes."""

    def __init__(self, num_cells_initial: int, num_stages: int, factor: int,
                 domain_length: float, num_steps: int, time_step: float,
                 step_threshold: float, fluid_velocity: float, conductivity: float,
                 temperature_left: float, func_rhs_fluid: FuncTX,
                 func_exact_fluid_temperature: FuncTX, output_dir=".",
                 write_output: bool = True):
        """
        Args:
            num_cells_initial: Cells on the coarsest mesh
            num_stages: Number of meshes
            factor: Refinement factor between stages
            domain_length: Domain [0, domain_length]
            num_steps: Step budget per stage
            time_step: Fixed time step
            step_threshold: Steady state once the step difference drops below
            fluid_velocity: Fluid velocity
            conductivity: Conductivity of both phases
            temperature_left: Inflow and initial temperature
            func_rhs_fluid: Fluid source f(t, x)
            func_exact_fluid_temperature: Exact solution f(t, x)
            output_dir: Directory for statistics and field files
            write_output: Write files (disable for in-memory studies)
        """
        self.num_cells_initial = num_cells_initial
        self.num_stages = num_stages
        self.factor = factor
        self.domain_length = domain_length
        self.num_steps = num_steps
        self.time_step = time_step
        self.step_threshold = step_threshold
        self.fluid_velocity = fluid_velocity
        self.conductivity = conductivity
        self.temperature_left = temperature_left
        self.func_rhs_fluid = func_rhs_fluid
        self.func_exact_fluid_temperature = func_exact_fluid_temperature
        self.output_dir = Path(output_dir)
        self.write_output = write_output
        self._series: List[ConvergenceEntry] = []

    @property
    def series(self) -> List[ConvergenceEntry]:
        return list(self._series)

    def _solver_config(self) -> SolverConfig:
        return SolverConfig(
            time_step=self.time_step,
            fluid_velocity=self.fluid_velocity,
            conductivity_fluid=self.conductivity,
            conductivity_solid=self.conductivity,
            temperature_hot=self.temperature_left,
            temperature_cold=self.temperature_left,
            exchange_fluid=0.0,
            exchange_solid=0.0,
        )

    def _run_to_steady_state(self, solver: HeatStorageSolver):
        """Step until the step difference falls below the threshold."""
        mesh = solver.mesh
        step_diff = np.inf
        for n in range(self.num_steps):
            solver.step()
            step_diff = calc_diff(solver.get_fluid_temperature(Layer.CURRENT),
                                  solver.get_fluid_temperature(Layer.PREVIOUS), mesh)
            if step_diff < self.step_threshold:
                log.debug("Steady state after %d steps (diff %.3e)", n + 1, step_diff)
                return n + 1, step_diff
        if self.num_steps == 0:
            step_diff = calc_diff(solver.get_fluid_temperature(Layer.CURRENT),
                                  solver.get_fluid_temperature(Layer.PREVIOUS), mesh)
        return self.num_steps, step_diff

    def run_stage(self, num_cells: int) -> ConvergenceEntry:
        """Solve on a fresh mesh and append the stage result."""
        mesh = Mesh1D.uniform(0.0, self.domain_length, num_cells)

        rhs_fluid = evaluate(self.func_rhs_fluid, 0.0, mesh)
        rhs_solid = np.zeros(mesh.n_cells)
        solver = HeatStorageSolver(mesh, self._solver_config(),
                                   rhs_fluid=rhs_fluid, rhs_solid=rhs_solid)

        actual_num_steps, step_diff = self._run_to_steady_state(solver)

        fluid_temperature = solver.get_fluid_temperature().copy()
        if self._series:
            prev = self._series[-1]
            diff_prev = calc_diff(
                fluid_temperature,
                interpolate_field(prev.fluid_temperature, prev.mesh, mesh),
                mesh)
        else:
            diff_prev = 0.0

        exact = evaluate(self.func_exact_fluid_temperature, 0.0, mesh)
        error = calc_diff(exact, fluid_temperature, mesh)

        entry = ConvergenceEntry(
            num_cells=num_cells, h=mesh.h, mesh=mesh, solver=solver,
            fluid_temperature=fluid_temperature,
            exact_fluid_temperature=exact,
            error=error, diff_prev=diff_prev,
            num_steps=actual_num_steps, step_diff=step_diff)
        self._series.append(entry)

        log.info("cells=%d error=%.6e diff_prev=%.6e steps=%d step_diff=%.3e",
                 num_cells, error, diff_prev, actual_num_steps, step_diff)

        if self.write_output:
            self.write_stage(entry)
        return entry

    def run(self) -> List[ConvergenceEntry]:
        """Run all stages; each writes its results as soon as it finishes."""
        self._series = []
        if self.write_output:
            self.write_header()

        num_cells = self.num_cells_initial
        for _ in range(self.num_stages):
            self.run_stage(num_cells)
            num_cells *= self.factor

        if self.write_output:
            self.write_exact()
        return self.series

    def write_header(self):
        """Start a fresh statistics file."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        with open(self.output_dir / STATISTICS_FILENAME, "w") as stat:
            stat.write("num_cells error diff dt num_steps step_diff\n")

    def write_stage(self, entry: ConvergenceEntry):
        """Append the statistics line of a stage and export its field."""
        if not (self.output_dir / STATISTICS_FILENAME).exists():
            self.write_header()
        with open(self.output_dir / STATISTICS_FILENAME, "a") as stat:
            stat.write(f"{entry.num_cells} {entry.error!r} {entry.diff_prev!r} "
                       f"{self.time_step!r} {entry.num_steps} {entry.step_diff!r}\n")
        entry.solver.write_field(
            entry.fluid_temperature,
            self.output_dir / f"{FIELD_NAME_PREFIX}{entry.num_cells}.dat")

    def write_exact(self):
        """Exact solution on the finest mesh."""
        if self._series:
            entry = self._series[-1]
            entry.solver.write_field(entry.exact_fluid_temperature,
                                     self.output_dir / f"{FIELD_NAME_PREFIX}exact.dat")

    def convergence_orders(self) -> List[float]:
        """Observed orders between consecutive stages."""
        return [convergence_order(coarse.error, fine.error, coarse.h / fine.h)
                for coarse, fine in zip(self._series[:-1], self._series[1:])]

    def plot_convergence(self, filename: str = None):
        """Plot error and diff_prev against the cell size."""
        h = np.array([e.h for e in self._series])
        error = np.array([e.error for e in self._series])

        fig, ax = plt.subplots(figsize=(8, 5))
        ax.loglog(h, error, 'bo-', linewidth=1, label='error')
        if len(self._series) > 1:
            diff = np.array([e.diff_prev for e in self._series[1:]])
            ax.loglog(h[1:], diff, 'rs--', linewidth=1, label='diff_prev')
        ax.loglog(h, error[0] * h / h[0], 'k:', linewidth=1, label='first order')
        ax.set_xlabel('h')
        ax.set_ylabel('L2 norm')
        ax.set_title('Mesh Convergence')
        ax.grid(True, which='both', alpha=0.3)
        ax.legend()

        if filename:
            plt.savefig(filename, dpi=150, bbox_inches='tight')
            log.info("Saved plot to %s", filename)
        plt.close(fig)
