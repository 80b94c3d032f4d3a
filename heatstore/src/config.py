"""
Experiment configuration.

Nested dataclasses loaded from / saved to JSON, e.g.

    {
        "name": "storage",
        "domain": {"a": [0.0], "b": [1.0], "n_cells": 100},
        "physics": {"velocity": 1.0, "alpha_fluid": 0.01, ...},
        "run": {"time_step": 0.001, "total_time": 1.0},
        "schedule": {"duration_1": 1.0, ...},
        "mms": {"enabled": true, "exact_solution": "cos(kx)", ...}
    }
"""

import dataclasses
import json
import typing
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import numpy as np


class AdvancedJSONEncoder(json.JSONEncoder):
    def default(self, o):
        if dataclasses.is_dataclass(o):
            return dataclasses.asdict(o)
        if isinstance(o, np.generic):
            return o.item()
        if isinstance(o, Path):
            return str(o)
        return super().default(o)


def dataclass_from_dict(cls, dct):
    """Build a (nested) dataclass from a dict; Optional[...] fields are unwrapped."""
    if typing.get_origin(cls) is typing.Union:
        args = [a for a in typing.get_args(cls) if a is not type(None)]
        if dct is None or len(args) != 1:
            return dct
        cls = args[0]
    if dataclasses.is_dataclass(cls):
        fieldtypes = {f.name: f.type for f in dataclasses.fields(cls)}
        unknown = set(dct) - set(fieldtypes)
        if unknown:
            raise TypeError(f"Unknown {cls.__name__} parameters: {sorted(unknown)}")
        return cls(**{name: dataclass_from_dict(fieldtypes[name], dct[name]) for name in dct})
    else:
        return dct


@dataclass
class DomainConfig:
    a: List[float] = field(default_factory=lambda: [0.0])
    b: List[float] = field(default_factory=lambda: [1.0])
    n_cells: int = 100


@dataclass
class PhysicsConfig:
    velocity: float = 1.0
    alpha_fluid: float = 0.0
    alpha_solid: float = 0.0
    temperature_hot: float = 1.0
    temperature_cold: float = 0.0
    exchange: float = 0.0


@dataclass
class RunConfig:
    time_step: float = 1e-3
    total_time: float = 1.0
    max_frame_index: int = 10
    max_frame_scalar_index: int = 100


@dataclass
class OutputConfig:
    title: Optional[str] = None
    filename_field: Optional[str] = None
    filename_scalar: Optional[str] = None
    no_output: bool = False
    no_mesh_output: bool = False
    directory: str = "."


@dataclass
class ScheduleConfig:
    duration_1: float = 1.0   # charge
    duration_2: float = 0.0   # idle, charged
    duration_3: float = 1.0   # discharge
    duration_4: float = 0.0   # idle, discharged


@dataclass
class MMSConfig:
    enabled: bool = False
    exact_solution: str = "cos(kx)"
    fluid_velocity: float = 1.0
    alpha: float = 0.1
    wavenumber: float = float(np.pi)
    mesh_initial: int = 10
    num_stages: int = 3
    factor: int = 2
    domain_length: float = 1.0
    num_steps: int = 20000
    time_step: float = 1e-3
    step_threshold: float = 1e-10
    T_left: float = 1.0


@dataclass
class ExperimentConfig:
    name: str = "heatstore"
    domain: DomainConfig = field(default_factory=DomainConfig)
    physics: PhysicsConfig = field(default_factory=PhysicsConfig)
    run: RunConfig = field(default_factory=RunConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    schedule: Optional[ScheduleConfig] = None
    mms: MMSConfig = field(default_factory=MMSConfig)

    def __post_init__(self):
        # Output names default to the experiment name
        if self.output.title is None:
            self.output.title = self.name
        if self.output.filename_field is None:
            self.output.filename_field = f"{self.name}.field.dat"
        if self.output.filename_scalar is None:
            self.output.filename_scalar = f"{self.name}.scalar.dat"


def load_config(path) -> ExperimentConfig:
    with open(path) as f:
        return dataclass_from_dict(ExperimentConfig, json.load(f))


def save_config(config: ExperimentConfig, path):
    with open(path, "w") as f:
        json.dump(config, f, cls=AdvancedJSONEncoder, indent=2)
