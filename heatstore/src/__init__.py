"""
1D Heat Storage Solver Package
==============================

Explicit finite volume solver for a packed-bed heat storage: a fluid
temperature advected and diffused through the bed, coupled to a solid
temperature that only diffuses.

Features:
- First-order upwind advection, second-order central diffusion
- Two-layer (current/previous) fields swapped every step
- Per-cell source fields and a pluggable fluid/solid exchange hook
- Mesh convergence study with manufactured solutions
- Cyclic charge/idle/discharge/idle operating schedule

Equations:
    dTf/dt + d/dx(u Tf - alpha_f dTf/dx) = Sf
    dTs/dt + d/dx(     - alpha_s dTs/dx) = Ss

Example:
    mesh = Mesh1D.uniform(0.0, 1.0, 100)
    solver = HeatStorageSolver(mesh, SolverConfig(time_step=1e-3,
                                                  conductivity_fluid=0.01))
    for _ in range(1000):
        solver.step()
    print(solver.get_fluid_temperature())
"""

from .mesh import Mesh1D, to_scalar
from .state import Layer, LayeredField, ThermalState
from .boundary import BoundaryCondition, InletBC, OutletBC
from .flux import FluxScheme, UpwindCentralFlux
from .sources import SourceTerm, FieldSourceTerm, CompositeSourceTerm
from .exchange import HeatExchange, NoHeatExchange
from .solver import HeatStorageSolver, SolverConfig
from .interpolation import interpolate_linear, interpolate_field
from .metrics import calc_diff, convergence_order
from .mms import manufactured_solution, evaluate
from .convergence import ConvergenceEntry, ConvergenceTester
from .scheduler import OperatingMode, Scheduler
from .output import FieldSession, ScalarSession, write_field, read_field
from .config import ExperimentConfig, load_config, save_config
from .simulation import Simulation

__all__ = [
    # Mesh
    'Mesh1D',
    'to_scalar',

    # State
    'Layer',
    'LayeredField',
    'ThermalState',

    # Boundary conditions
    'BoundaryCondition',
    'InletBC',
    'OutletBC',

    # Flux schemes
    'FluxScheme',
    'UpwindCentralFlux',

    # Source terms
    'SourceTerm',
    'FieldSourceTerm',
    'CompositeSourceTerm',

    # Heat exchange
    'HeatExchange',
    'NoHeatExchange',

    # Solver
    'HeatStorageSolver',
    'SolverConfig',

    # Interpolation and norms
    'interpolate_linear',
    'interpolate_field',
    'calc_diff',
    'convergence_order',

    # Convergence study
    'manufactured_solution',
    'evaluate',
    'ConvergenceEntry',
    'ConvergenceTester',

    # Schedule
    'OperatingMode',
    'Scheduler',

    # Output and configuration
    'FieldSession',
    'ScalarSession',
    'write_field',
    'read_field',
    'ExperimentConfig',
    'load_config',
    'save_config',
    'Simulation',
]

__version__ = '1.0.0'
