# Copyright (c) 2022-2026, The Isaac Lab Project Developers.
# All rights reserved.
#
# SPDX-License-Identifier: BSD-3-Clause

"""Value types exchanged with the preview engine.

- PreviewState: Reduced state (CoM, heading, CoP, support region, feet)
- PreviewParams: Decision parameters of a single phase
- PreviewControl: Per-phase parameters plus foothold shifts
- SwingParams: Per-phase foot shift targets used by the swing composer
- SLIPModel: Physical constants of the spring-loaded inverted pendulum
- WholeBodyState: Full floating-base robot state

Foot quantities of a PreviewState are expressed relative to the CoM. Contact
quantities of a WholeBodyState are expressed relative to the base.
"""

from dataclasses import dataclass, field
from typing import Dict, List

import numpy as np


def _vec3() -> np.ndarray:
    return np.zeros(3)


def _vec2() -> np.ndarray:
    return np.zeros(2)


def _vec6() -> np.ndarray:
    return np.zeros(6)


def _copy_vectors(vectors: Dict[str, np.ndarray]) -> Dict[str, np.ndarray]:
    return {name: np.array(value, dtype=float) for name, value in vectors.items()}


@dataclass
class PreviewState:
    """Reduced state used by the preview engine.

    Attributes:
        time: Timestamp in seconds.
        com_pos: CoM position, shape (3,).
        com_vel: CoM velocity, shape (3,).
        com_acc: CoM acceleration, shape (3,).
        head_pos: Heading (yaw) angle in radians.
        head_vel: Heading rate in rad/s.
        head_acc: Heading acceleration in rad/s^2.
        cop: Center of pressure in the world frame, shape (3,).
        support_region: Vertices of the support region relative to the CoM.
        foot_pos: Dict mapping foot name to position relative to the CoM.
        foot_vel: Dict mapping foot name to velocity.
        foot_acc: Dict mapping foot name to acceleration.
    """

    time: float = 0.0
    com_pos: np.ndarray = field(default_factory=_vec3)
    com_vel: np.ndarray = field(default_factory=_vec3)
    com_acc: np.ndarray = field(default_factory=_vec3)
    head_pos: float = 0.0
    head_vel: float = 0.0
    head_acc: float = 0.0
    cop: np.ndarray = field(default_factory=_vec3)
    support_region: List[np.ndarray] = field(default_factory=list)
    foot_pos: Dict[str, np.ndarray] = field(default_factory=dict)
    foot_vel: Dict[str, np.ndarray] = field(default_factory=dict)
    foot_acc: Dict[str, np.ndarray] = field(default_factory=dict)

    def __post_init__(self):
        self.com_pos = np.asarray(self.com_pos, dtype=float)
        self.com_vel = np.asarray(self.com_vel, dtype=float)
        self.com_acc = np.asarray(self.com_acc, dtype=float)
        self.cop = np.asarray(self.cop, dtype=float)

    def copy(self) -> "PreviewState":
        """Create a deep copy of this state."""
        return PreviewState(
            time=self.time,
            com_pos=self.com_pos.copy(),
            com_vel=self.com_vel.copy(),
            com_acc=self.com_acc.copy(),
            head_pos=self.head_pos,
            head_vel=self.head_vel,
            head_acc=self.head_acc,
            cop=self.cop.copy(),
            support_region=[np.array(v, dtype=float) for v in self.support_region],
            foot_pos=_copy_vectors(self.foot_pos),
            foot_vel=_copy_vectors(self.foot_vel),
            foot_acc=_copy_vectors(self.foot_acc),
        )


@dataclass
class PreviewParams:
    """Decision parameters of a single preview phase.

    Attributes:
        duration: Phase duration in seconds (> 0).
        cop_shift: Horizontal CoP displacement over the phase, shape (2,).
            Stance only, zero for flight.
        length_shift: Pendulum length displacement over the phase.
            Stance only, zero for flight.
        head_acc: Heading acceleration. Stance only, zero for flight.
    """

    duration: float = 0.0
    cop_shift: np.ndarray = field(default_factory=_vec2)
    length_shift: float = 0.0
    head_acc: float = 0.0

    def __post_init__(self):
        self.cop_shift = np.asarray(self.cop_shift, dtype=float)


@dataclass
class PreviewControl:
    """Structured preview control.

    Attributes:
        params: One PreviewParams per scheduled phase, in schedule order.
        feet_shift: Dict mapping foot name to horizontal foothold shift, shape (2,).
    """

    params: List[PreviewParams] = field(default_factory=list)
    feet_shift: Dict[str, np.ndarray] = field(default_factory=dict)


@dataclass
class SwingParams:
    """Swing targets of a single phase.

    Attributes:
        duration: Phase duration in seconds.
        feet_shift: Dict mapping swinging foot name to its 3D shift. Feet that
            are not present stay planted.
    """

    duration: float = 0.0
    feet_shift: Dict[str, np.ndarray] = field(default_factory=dict)


@dataclass
class SLIPModel:
    """Spring-loaded inverted pendulum constants.

    Attributes:
        height: Natural pendulum height in meters.
        stiffness: Vertical spring stiffness in N/m.
    """

    height: float = 0.5
    stiffness: float = 1000.0

    def __post_init__(self):
        if self.height <= 0:
            raise ValueError(f"SLIP height must be positive, got {self.height}")
        if self.stiffness <= 0:
            raise ValueError(f"SLIP stiffness must be positive, got {self.stiffness}")


@dataclass
class WholeBodyState:
    """Full floating-base robot state.

    Attributes:
        time: Timestamp in seconds.
        base_pos: Base pose [x, y, z, roll, pitch, yaw], shape (6,).
        base_vel: Base velocity [linear, angular], shape (6,).
        base_acc: Base acceleration [linear, angular], shape (6,).
        joint_pos: Joint positions, shape (joint_dof,).
        joint_vel: Joint velocities, shape (joint_dof,).
        joint_acc: Joint accelerations, shape (joint_dof,).
        joint_eff: Joint efforts, shape (joint_dof,).
        contact_pos: Dict mapping contact name to position w.r.t. the base.
        contact_vel: Dict mapping contact name to velocity.
        contact_acc: Dict mapping contact name to acceleration.
        contact_eff: Dict mapping contact name to wrench [f, tau], shape (6,).
    """

    time: float = 0.0
    base_pos: np.ndarray = field(default_factory=_vec6)
    base_vel: np.ndarray = field(default_factory=_vec6)
    base_acc: np.ndarray = field(default_factory=_vec6)
    joint_pos: np.ndarray = field(default_factory=lambda: np.zeros(0))
    joint_vel: np.ndarray = field(default_factory=lambda: np.zeros(0))
    joint_acc: np.ndarray = field(default_factory=lambda: np.zeros(0))
    joint_eff: np.ndarray = field(default_factory=lambda: np.zeros(0))
    contact_pos: Dict[str, np.ndarray] = field(default_factory=dict)
    contact_vel: Dict[str, np.ndarray] = field(default_factory=dict)
    contact_acc: Dict[str, np.ndarray] = field(default_factory=dict)
    contact_eff: Dict[str, np.ndarray] = field(default_factory=dict)

    def __post_init__(self):
        self.base_pos = np.asarray(self.base_pos, dtype=float)
        self.base_vel = np.asarray(self.base_vel, dtype=float)
        self.base_acc = np.asarray(self.base_acc, dtype=float)
        self.joint_pos = np.asarray(self.joint_pos, dtype=float)
        self.joint_vel = np.asarray(self.joint_vel, dtype=float)
        self.joint_acc = np.asarray(self.joint_acc, dtype=float)
        self.joint_eff = np.asarray(self.joint_eff, dtype=float)

    @classmethod
    def zeros(cls, joint_dof: int) -> "WholeBodyState":
        """Create a state with zero base and joint vectors of the given size."""
        return cls(
            joint_pos=np.zeros(joint_dof),
            joint_vel=np.zeros(joint_dof),
            joint_acc=np.zeros(joint_dof),
            joint_eff=np.zeros(joint_dof),
        )


PreviewTrajectory = List[PreviewState]
WholeBodyTrajectory = List[WholeBodyState]
