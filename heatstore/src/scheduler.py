"""
Cyclic operating schedule of the heat storage.

One cycle consists of four phases:
    charge -> idle -> discharge -> idle
"""

from dataclasses import dataclass
from enum import Enum


class OperatingMode(Enum):
    CHARGING = 'charging'
    IDLE = 'idle'
    DISCHARGING = 'discharging'


# Integer codes used in scalar output
MODE_INDEX = {
    OperatingMode.CHARGING: 1,
    OperatingMode.DISCHARGING: 2,
    OperatingMode.IDLE: 3,
}


@dataclass(frozen=True)
class Scheduler:
    """Operating mode as a function of time."""
    duration_charge: float
    duration_idle_charged: float
    duration_discharge: float
    duration_idle_discharged: float

    def __post_init__(self):
        durations = (self.duration_charge, self.duration_idle_charged,
                     self.duration_discharge, self.duration_idle_discharged)
        if any(d < 0 for d in durations):
            raise ValueError(f"Phase durations must be non-negative, got {durations}")
        if self.cycle_duration <= 0:
            raise ValueError("Cycle duration must be positive")

    @property
    def cycle_duration(self) -> float:
        return (self.duration_charge + self.duration_idle_charged
                + self.duration_discharge + self.duration_idle_discharged)

    def get_state(self, t: float) -> OperatingMode:
        offset = t % self.cycle_duration
        d1 = self.duration_charge
        d2 = d1 + self.duration_idle_charged
        d3 = d2 + self.duration_discharge
        if offset < d1:
            return OperatingMode.CHARGING
        if offset < d2:
            return OperatingMode.IDLE
        if offset < d3:
            return OperatingMode.DISCHARGING
        return OperatingMode.IDLE

    def get_state_idx(self, t: float) -> int:
        """Integer code of the mode at time t (charging 1, discharging 2, idle 3)."""
        return state_index(self.get_state(t))


def state_index(mode: OperatingMode) -> int:
    try:
        return MODE_INDEX[mode]
    except KeyError:
        raise AssertionError(f"Unmapped operating mode: {mode!r}") from None
