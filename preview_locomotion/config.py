# Copyright (c) 2022-2026, The Isaac Lab Project Developers.
# All rights reserved.
#
# SPDX-License-Identifier: BSD-3-Clause

"""Configuration for the preview engine.

Timing:
    Preview sample time: 1 kHz (sample_time = 0.001 s)

Swing:
    Step height:         0.1 m

Reduced model (SLIP):
    Pendulum height:     0.5 m
    Spring stiffness:    1000 N/m
"""

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping


@dataclass
class PreviewLocomotionConfig:
    """Configuration of a PreviewLocomotion engine.

    Gravity and total mass are not configured here; they come from the
    floating-base system.

    Attributes:
        sample_time: Preview sampling period in seconds.
        step_height: Swing height of stepping feet in meters.
        force_threshold: Contact force above which a contact is active, in N.
        slip_height: Natural pendulum height of the SLIP model in meters.
        slip_stiffness: Vertical spring stiffness of the SLIP model in N/m.
    """

    sample_time: float = 0.001
    step_height: float = 0.1
    force_threshold: float = 0.0
    slip_height: float = 0.5
    slip_stiffness: float = 1000.0

    def __post_init__(self):
        """Validate the configuration."""
        if self.sample_time <= 0:
            raise ValueError(f"sample_time must be positive, got {self.sample_time}")
        if self.step_height < 0:
            raise ValueError(f"step_height must be non-negative, got {self.step_height}")
        if self.force_threshold < 0:
            raise ValueError(
                f"force_threshold must be non-negative, got {self.force_threshold}"
            )
        if self.slip_height <= 0:
            raise ValueError(f"slip_height must be positive, got {self.slip_height}")
        if self.slip_stiffness <= 0:
            raise ValueError(f"slip_stiffness must be positive, got {self.slip_stiffness}")

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "PreviewLocomotionConfig":
        """Create a configuration from a plain mapping.

        Raises:
            ValueError: If the mapping contains unknown keys.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}. Valid keys: {sorted(known)}")
        return cls(**dict(values))

    def to_dict(self) -> Dict[str, Any]:
        """Return the configuration as a plain dict."""
        return asdict(self)
