"""
Pytest tests for output files, configuration and the simulation driver.

Tests verify:
1. Field and scalar files are written in the documented layout
2. Configuration loads from JSON with defaults
3. The driver steps to the end time and writes frames
"""

import json

import numpy as np
import pytest
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from heatstore.src import (
    Mesh1D, FieldSession, ScalarSession, write_field, read_field,
    ExperimentConfig, load_config, save_config, Simulation
)
from heatstore.src.config import (
    DomainConfig, PhysicsConfig, RunConfig, OutputConfig, ScheduleConfig
)


@pytest.fixture
def mesh():
    return Mesh1D.uniform(0.0, 1.0, 5)


def create_config(tmp_path, **kwargs):
    """Short run with conduction in both phases."""
    return ExperimentConfig(
        name="test",
        domain=DomainConfig(a=[0.0], b=[1.0], n_cells=20),
        physics=PhysicsConfig(velocity=1.0, alpha_fluid=0.01, alpha_solid=0.01),
        run=RunConfig(time_step=0.01, total_time=0.1, max_frame_index=5,
                      max_frame_scalar_index=10),
        output=OutputConfig(directory=str(tmp_path)),
        **kwargs)


class TestOutput:

    def test_write_and_read_field(self, tmp_path, mesh):
        values = np.array([0.1, 0.2, 0.3, 0.4, 1.0 / 3.0])
        path = tmp_path / "T.dat"
        write_field(path, mesh, values, name="T")

        lines = path.read_text().splitlines()
        assert lines[0].startswith("# t=")
        assert lines[1] == "# x T"
        data = read_field(path)
        assert data.shape == (5, 2)
        np.testing.assert_array_equal(data[:, 0], mesh.x_cells)
        np.testing.assert_array_equal(data[:, 1], values)

    def test_field_session_frames(self, tmp_path, mesh):
        values = np.zeros(mesh.n_cells)
        session = FieldSession(mesh, {"a": lambda: values, "b": lambda: 2 * values},
                               tmp_path / "f.dat")
        session.write(0.0, "initial")
        values[:] = 1.0
        session.write(0.5, "step")

        assert session.n_frames == 2
        text = (tmp_path / "f.dat").read_text()
        assert text.count("# x a b") == 2
        data = read_field(tmp_path / "f.dat")
        np.testing.assert_array_equal(data[:, 1], 1.0)
        np.testing.assert_array_equal(data[:, 2], 2.0)

    def test_scalar_session(self, tmp_path):
        counter = {"n": 0}
        session = ScalarSession({"time": lambda: 0.5 * counter["n"],
                                 "n": lambda: counter["n"]}, tmp_path / "s.dat")
        for _ in range(3):
            session.write()
            counter["n"] += 1

        lines = (tmp_path / "s.dat").read_text().splitlines()
        assert lines[0] == "time n"
        assert len(lines) == 4
        assert [float(v) for v in lines[3].split()] == [1.0, 2.0]


class TestConfig:

    def test_defaults_from_name(self):
        config = ExperimentConfig(name="bed")
        assert config.output.title == "bed"
        assert config.output.filename_field == "bed.field.dat"
        assert config.output.filename_scalar == "bed.scalar.dat"
        assert config.schedule is None

    def test_load_partial_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "name": "storage",
            "domain": {"n_cells": 50},
            "physics": {"velocity": 0.5},
            "schedule": {"duration_1": 2.0, "duration_3": 3.0},
        }))
        config = load_config(path)
        assert config.domain.n_cells == 50
        assert config.domain.b == [1.0]
        assert config.physics.velocity == 0.5
        assert isinstance(config.schedule, ScheduleConfig)
        assert config.schedule.duration_1 == 2.0
        assert config.output.filename_field == "storage.field.dat"

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"physics": {"viscosity": 1.0}}))
        with pytest.raises(TypeError):
            load_config(path)

    def test_save_and_load(self, tmp_path):
        config = create_config(tmp_path, schedule=ScheduleConfig(1.0, 0.5, 1.0, 0.5))
        save_config(config, tmp_path / "config.json")
        assert load_config(tmp_path / "config.json") == config


class TestSimulation:

    def test_run_to_end_time(self, tmp_path):
        simulation = Simulation(create_config(tmp_path))
        solver = simulation.run()
        assert solver.iteration == 10
        assert simulation.time == pytest.approx(0.1)

    def test_frames_written(self, tmp_path):
        simulation = Simulation(create_config(tmp_path))
        simulation.run()

        assert simulation.session.n_frames == 1 + simulation.current_frame
        assert simulation.session_scalar.n_rows == 1 + simulation.current_frame_scalar

        data = read_field(tmp_path / "test.field.dat")
        assert data.shape == (20, 3)
        np.testing.assert_array_equal(data[:, 1], simulation.solver.get_fluid_temperature())
        np.testing.assert_array_equal(data[:, 2], simulation.solver.get_solid_temperature())

        lines = (tmp_path / "test.scalar.dat").read_text().splitlines()
        assert lines[0] == "time n"
        assert float(lines[-1].split()[1]) == 10

    def test_fluid_heats_from_inlet(self, tmp_path):
        simulation = Simulation(create_config(tmp_path))
        simulation.run()
        Tf = simulation.solver.get_fluid_temperature()
        assert Tf[0] > Tf[-1]
        assert np.all((Tf >= 0.0) & (Tf <= 1.0))

    def test_status_column_with_schedule(self, tmp_path):
        config = create_config(tmp_path, schedule=ScheduleConfig(1.0, 0.0, 1.0, 0.0))
        simulation = Simulation(config)
        simulation.run()

        lines = (tmp_path / "test.scalar.dat").read_text().splitlines()
        assert lines[0] == "time n status"
        assert all(float(line.split()[2]) == 1.0 for line in lines[1:])

    def test_no_output(self, tmp_path):
        config = create_config(tmp_path)
        config.output.no_output = True
        simulation = Simulation(config)
        simulation.run()
        assert simulation.session is None
        assert list(tmp_path.iterdir()) == []

    def test_mms_from_config(self, tmp_path):
        config = create_config(tmp_path)
        config.mms.num_stages = 2
        config.mms.num_steps = 50
        series = Simulation(config).run_mms()
        assert [entry.num_cells for entry in series] == [10, 20]
        assert (tmp_path / "mms_statistics.dat").exists()


class TestFrameCounts:
    """A frame count of 0 leaves only the initial and the final frame."""

    @pytest.mark.parametrize("max_frame_index, max_frame_scalar_index", [
        (0, 10), (5, 0), (0, 0),
    ])
    def test_zero_frame_count(self, tmp_path, max_frame_index, max_frame_scalar_index):
        config = create_config(tmp_path)
        config.run.max_frame_index = max_frame_index
        config.run.max_frame_scalar_index = max_frame_scalar_index
        simulation = Simulation(config)
        simulation.run()

        assert simulation.solver.iteration == 10
        if max_frame_index == 0:
            assert simulation.session.n_frames == 2
        if max_frame_scalar_index == 0:
            assert simulation.session_scalar.n_rows == 2
