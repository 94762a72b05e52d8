# Copyright (c) 2022-2026, The Isaac Lab Project Developers.
# All rights reserved.
#
# SPDX-License-Identifier: BSD-3-Clause

"""Phase schedule data structures for the preview engine.

This module defines pure data structures describing the phase timing of a
locomotion cycle. It has no dependency on the dynamics model, making it easy
to test and use standalone.

The key data structures are:
- PhaseType: Whether a phase is a SLIP stance phase or a ballistic flight phase
- PreviewPhase: A single phase (type, feet that step, nominal duration)
- PreviewSchedule: An ordered sequence of PreviewPhases
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

import numpy as np


class PhaseType(Enum):
    """Type of a preview phase.

    STANCE phases are simulated with the SLIP model and carry five decision
    variables; FLIGHT phases are ballistic and carry only their duration.
    """

    STANCE = "stance"
    FLIGHT = "flight"

    @classmethod
    def parse(cls, value: Union["PhaseType", str]) -> "PhaseType":
        """Convert a PhaseType or its (case-insensitive) name into a PhaseType."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(
                f"phase_type must be one of {[t.value for t in cls]}, got {value!r}"
            ) from None


# Number of decision variables per phase type:
#   STANCE: duration, cop_shift (x, y), length_shift, head_acc
#   FLIGHT: duration
PARAMS_DIMENSION = {
    PhaseType.STANCE: 5,
    PhaseType.FLIGHT: 1,
}


@dataclass
class PreviewPhase:
    """Describes a single phase of a preview schedule.

    Attributes:
        phase_type: STANCE or FLIGHT.
        feet: Feet that are repositioned during the phase, e.g., ["LF", "RH"].
            In a stance phase these feet move to their foothold shift; the
            remaining feet stay planted.
        duration: Nominal phase duration in seconds.
    """

    phase_type: PhaseType
    feet: List[str] = field(default_factory=list)
    duration: float = 0.0

    def __post_init__(self):
        """Validate the phase configuration."""
        self.phase_type = PhaseType.parse(self.phase_type)
        self.feet = list(self.feet)

        if self.duration < 0:
            raise ValueError(f"duration must be non-negative, got {self.duration}")

        if len(set(self.feet)) != len(self.feet):
            raise ValueError(f"Duplicated foot names in phase: {self.feet}")

    @property
    def is_stance(self) -> bool:
        """Check if the phase is simulated with the SLIP stance model."""
        return self.phase_type is PhaseType.STANCE

    @property
    def is_flight(self) -> bool:
        """Check if the phase is ballistic."""
        return self.phase_type is PhaseType.FLIGHT

    @property
    def params_dimension(self) -> int:
        """Return the number of decision variables of this phase."""
        return PARAMS_DIMENSION[self.phase_type]

    def copy(self) -> "PreviewPhase":
        """Create a copy of this phase."""
        return PreviewPhase(
            phase_type=self.phase_type,
            feet=self.feet.copy(),
            duration=self.duration,
        )


@dataclass
class PreviewSchedule:
    """An ordered sequence of preview phases forming one locomotion cycle.

    Attributes:
        phases: List of PreviewPhase objects in temporal order.
    """

    phases: List[PreviewPhase] = field(default_factory=list)

    @property
    def total_duration(self) -> float:
        """Return total nominal duration of all phases in seconds."""
        return sum(p.duration for p in self.phases)

    @property
    def num_phases(self) -> int:
        """Return number of phases in the schedule."""
        return len(self.phases)

    @property
    def durations(self) -> np.ndarray:
        """Return the nominal durations of all phases, shape (num_phases,)."""
        return np.array([p.duration for p in self.phases], dtype=float)

    def get_phase_at_time(self, t: float) -> Optional[PreviewPhase]:
        """Return the phase active at time t.

        Args:
            t: Time in seconds from start of schedule.

        Returns:
            PreviewPhase active at time t, or None if t is outside the schedule.
        """
        index = self.get_phase_index_at_time(t)
        if index < 0:
            return None
        return self.phases[index]

    def get_phase_index_at_time(self, t: float) -> int:
        """Return the index of the phase active at time t, or -1."""
        if t < 0:
            return -1

        cumulative_time = 0.0
        for i, phase in enumerate(self.phases):
            cumulative_time += phase.duration
            if t < cumulative_time:
                return i

        return -1

    def get_phase_start_time(self, phase_index: int) -> float:
        """Return the start time of a phase by index, or -1 if invalid."""
        if phase_index < 0 or phase_index >= len(self.phases):
            return -1.0

        return sum(p.duration for p in self.phases[:phase_index])

    def get_step_timings(self, foot_name: str) -> List[Tuple[float, float]]:
        """Return list of (start_time, end_time) when the foot is stepping.

        Args:
            foot_name: Foot identifier.

        Returns:
            List of (start, end) time tuples for each phase that moves this foot.
        """
        timings = []
        cumulative_time = 0.0

        for phase in self.phases:
            phase_start = cumulative_time
            phase_end = cumulative_time + phase.duration

            if foot_name in phase.feet:
                timings.append((phase_start, phase_end))

            cumulative_time = phase_end

        return timings

    def append_phase(self, phase: PreviewPhase):
        """Add a phase to the end of the schedule."""
        self.phases.append(phase)

    def extend(self, other: "PreviewSchedule"):
        """Extend this schedule with phases from another schedule."""
        self.phases.extend(other.phases)

    def repeat(self, n: int) -> "PreviewSchedule":
        """Create a new schedule by repeating this one n times."""
        new_phases = []
        for _ in range(n):
            new_phases.extend([p.copy() for p in self.phases])
        return PreviewSchedule(phases=new_phases)

    def scale_durations(self, factor: float) -> "PreviewSchedule":
        """Create a new schedule with all durations scaled."""
        new_phases = []
        for phase in self.phases:
            new_phase = phase.copy()
            new_phase.duration *= factor
            new_phases.append(new_phase)
        return PreviewSchedule(phases=new_phases)

    def copy(self) -> "PreviewSchedule":
        """Create a deep copy of this schedule."""
        return PreviewSchedule(phases=[p.copy() for p in self.phases])

    def __iter__(self):
        """Iterate over phases."""
        return iter(self.phases)

    def __len__(self):
        """Return number of phases."""
        return len(self.phases)

    def __getitem__(self, index: int) -> PreviewPhase:
        """Get phase by index."""
        return self.phases[index]
