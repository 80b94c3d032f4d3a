"""
heatstore - 1D Heat Storage Solver
==================================

Re-exports all public components from heatstore.src
"""

from heatstore.src import (
    # Mesh
    Mesh1D,
    # State
    Layer,
    LayeredField,
    ThermalState,
    # Solver
    HeatStorageSolver,
    SolverConfig,
    # Interpolation
    interpolate_field,
    calc_diff,
    # Convergence study
    manufactured_solution,
    ConvergenceTester,
    # Schedule
    OperatingMode,
    Scheduler,
    # Driver
    ExperimentConfig,
    load_config,
    Simulation,
)

__all__ = [
    'Mesh1D',
    'Layer',
    'LayeredField',
    'ThermalState',
    'HeatStorageSolver',
    'SolverConfig',
    'interpolate_field',
    'calc_diff',
    'manufactured_solution',
    'ConvergenceTester',
    'OperatingMode',
    'Scheduler',
    'ExperimentConfig',
    'load_config',
    'Simulation',
]
