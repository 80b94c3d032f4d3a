"""
Simulation driver: builds the solver from an experiment configuration,
advances it in time and writes field frames and scalar time series.
"""

import logging
import math
from pathlib import Path
from typing import List, Optional

from .config import ExperimentConfig
from .convergence import ConvergenceEntry, ConvergenceTester
from .mesh import Mesh1D
from .mms import manufactured_solution
from .output import FieldSession, ScalarSession
from .scheduler import Scheduler
from .solver import HeatStorageSolver, SolverConfig

log = logging.getLogger(__name__)


def _frame_duration(total_time: float, max_index: int) -> float:
    """Simulated time between frames; a count of 0 disables periodic frames."""
    if max_index <= 0:
        return math.inf
    return total_time / max_index


class Simulation:
    """
    Heat storage run with frame output.

    Field frames are written every total_time / max_frame_index and scalar
    rows every total_time / max_frame_scalar_index of simulated time.
    """

    def __init__(self, config: ExperimentConfig):
        self.config = config
        domain = config.domain
        physics = config.physics

        self.mesh = Mesh1D.from_domain(domain.a, domain.b, domain.n_cells)
        self.solver = HeatStorageSolver(self.mesh, SolverConfig(
            time_step=config.run.time_step,
            fluid_velocity=physics.velocity,
            conductivity_fluid=physics.alpha_fluid,
            conductivity_solid=physics.alpha_solid,
            temperature_hot=physics.temperature_hot,
            temperature_cold=physics.temperature_cold,
            exchange_fluid=physics.exchange,
            exchange_solid=physics.exchange,
        ))

        self.scheduler: Optional[Scheduler] = None
        if config.schedule is not None:
            s = config.schedule
            self.scheduler = Scheduler(s.duration_1, s.duration_2, s.duration_3, s.duration_4)

        self.current_frame = 0
        self.current_frame_scalar = 0
        self.last_frame_time = 0.0
        self.last_frame_scalar_time = 0.0

        self.session = None
        self.session_scalar = None
        if not config.output.no_output:
            directory = Path(config.output.directory)
            directory.mkdir(parents=True, exist_ok=True)
            self.session = FieldSession(self.mesh, {
                "Tf": lambda: self.solver.get_fluid_temperature(),
                "Ts": lambda: self.solver.get_solid_temperature(),
            }, directory / config.output.filename_field)

            scalars = {
                "time": lambda: self.solver.time,
                "n": lambda: self.solver.iteration,
            }
            if self.scheduler is not None:
                scalars["status"] = lambda: self.scheduler.get_state_idx(self.solver.time)
            self.session_scalar = ScalarSession(
                scalars, directory / config.output.filename_scalar)

            self.session.write(0.0, "initial")
            self.session_scalar.write()

    @property
    def time(self) -> float:
        return self.solver.time

    def step(self):
        self.solver.step()

    def write_results(self, force: bool = False):
        """Write field and scalar frames that are due (all of them if force)."""
        if self.session is None:
            return

        time = self.solver.time
        total_time = self.config.run.total_time
        frame_duration = _frame_duration(total_time, self.config.run.max_frame_index)

        if force or (not self.config.output.no_mesh_output
                     and time >= self.last_frame_time + frame_duration):
            self.last_frame_time = time
            self.session.write(time, "step")
            log.info("Frame %d: t=%g", self.current_frame, time)
            self.current_frame += 1

        frame_scalar_duration = _frame_duration(
            total_time, self.config.run.max_frame_scalar_index)
        if force or time >= self.last_frame_scalar_time + frame_scalar_duration:
            self.last_frame_scalar_time = time
            self.session_scalar.write()
            log.info("Frame_scalar %d: t=%g", self.current_frame_scalar, time)
            self.current_frame_scalar += 1

    def run(self) -> HeatStorageSolver:
        """Step until total_time, then force a final frame."""
        total_time = self.config.run.total_time
        # half a step of slack against accumulated round-off in time
        while self.solver.time < total_time - 0.5 * self.solver.time_step:
            self.step()
            self.write_results()
        self.write_results(force=True)
        log.info("Finished: t=%g, %d steps", self.solver.time, self.solver.iteration)
        return self.solver

    def run_mms(self) -> List[ConvergenceEntry]:
        """Mesh convergence study configured in config.mms."""
        mms = self.config.mms
        func_exact, func_rhs = manufactured_solution(
            mms.exact_solution, mms.fluid_velocity, mms.alpha, mms.wavenumber)
        tester = ConvergenceTester(
            mms.mesh_initial, mms.num_stages, mms.factor, mms.domain_length,
            mms.num_steps, mms.time_step, mms.step_threshold,
            mms.fluid_velocity, mms.alpha, mms.T_left,
            func_rhs, func_exact, output_dir=self.config.output.directory,
            write_output=not self.config.output.no_output)
        return tester.run()
