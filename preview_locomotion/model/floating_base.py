# Copyright (c) 2022-2026, The Isaac Lab Project Developers.
# All rights reserved.
#
# SPDX-License-Identifier: BSD-3-Clause

"""Floating-base system interface used by the preview engine.

The preview engine does not compute rigid-body dynamics itself. It consumes a
floating-base system that supplies the total mass, the gravity magnitude, the
center of mass (and its rate) for a given base pose and joint configuration,
the end-effector names, and contact-wrench helpers.

Base vectors are 6D, linear part first: base pose = [x, y, z, roll, pitch, yaw]
and base velocity = [vx, vy, vz, wx, wy, wz] in the world frame. Contact
wrenches are [fx, fy, fz, tx, ty, tz].

Two implementations are provided:
- LumpedMassSystem: rigid body with a fixed CoM offset (this module)
- PinocchioFloatingBaseSystem: free-flyer Pinocchio model (pinocchio_system.py)
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Mapping, Optional, Sequence

import numpy as np

from ..utils.math_utils import angular_part, euler_to_rotation_matrix, linear_part, LX, LZ

# End-effector types
FOOT = "foot"
HAND = "hand"


class FloatingBaseSystem(ABC):
    """Abstract floating-base system.

    Subclasses must implement:
        - get_total_mass: Total mass of the robot
        - get_system_com: CoM position in the world frame
        - get_system_com_rate: CoM velocity in the world frame

    Attributes:
        end_effectors: Ordered dict mapping end-effector name to its type
            (FOOT, HAND, ...). The order defines the end-effector enumeration
            order used by the decision vector.
        gravity: Gravity acceleration magnitude in m/s^2.
        joint_dof: Number of actuated joints.
    """

    def __init__(
        self,
        end_effectors: Mapping[str, str],
        gravity: float = 9.81,
        joint_dof: int = 0,
    ):
        self.end_effectors: Dict[str, str] = dict(end_effectors)
        self.gravity = float(gravity)
        self.joint_dof = int(joint_dof)

    @abstractmethod
    def get_total_mass(self) -> float:
        """Return the total mass of the system in kg."""
        pass

    @abstractmethod
    def get_system_com(self, base_pos: np.ndarray, joint_pos: np.ndarray) -> np.ndarray:
        """Compute the CoM position in the world frame.

        Args:
            base_pos: Base pose [x, y, z, roll, pitch, yaw], shape (6,).
            joint_pos: Joint positions, shape (joint_dof,).

        Returns:
            CoM position, shape (3,).
        """
        pass

    @abstractmethod
    def get_system_com_rate(
        self,
        base_pos: np.ndarray,
        joint_pos: np.ndarray,
        base_vel: np.ndarray,
        joint_vel: np.ndarray,
    ) -> np.ndarray:
        """Compute the CoM velocity in the world frame.

        Args:
            base_pos: Base pose, shape (6,).
            joint_pos: Joint positions, shape (joint_dof,).
            base_vel: Base velocity [linear, angular], shape (6,).
            joint_vel: Joint velocities, shape (joint_dof,).

        Returns:
            CoM velocity, shape (3,).
        """
        pass

    def get_gravity_acceleration(self) -> float:
        """Return the gravity acceleration magnitude in m/s^2."""
        return self.gravity

    def get_joint_dof(self) -> int:
        """Return the number of actuated joints."""
        return self.joint_dof

    def get_floating_base_com(self) -> np.ndarray:
        """Return the CoM w.r.t. the base at the zero joint configuration."""
        return self.get_system_com(np.zeros(6), np.zeros(self.joint_dof))

    def get_end_effector_names(self, ee_type: Optional[str] = None) -> List[str]:
        """Return end-effector names in enumeration order.

        Args:
            ee_type: If given, only return end-effectors of this type (e.g., FOOT).

        Returns:
            List of end-effector names.
        """
        if ee_type is None:
            return list(self.end_effectors.keys())
        return [name for name, kind in self.end_effectors.items() if kind == ee_type]

    def get_number_of_end_effectors(self, ee_type: Optional[str] = None) -> int:
        """Return the number of end-effectors, optionally of a given type."""
        return len(self.get_end_effector_names(ee_type))

    def compute_center_of_pressure(
        self,
        contact_eff: Mapping[str, np.ndarray],
        contact_pos: Mapping[str, np.ndarray],
        names: Sequence[str],
    ) -> np.ndarray:
        """Compute the center of pressure from contact wrenches.

        The CoP is the normal-force weighted average of the contact positions,
        expressed in the same frame as contact_pos.

        Args:
            contact_eff: Dict mapping contact name to wrench [f, tau], shape (6,).
            contact_pos: Dict mapping contact name to position, shape (3,).
            names: Contacts to consider.

        Returns:
            CoP position, shape (3,). Zero if there is no normal force.
        """
        weighted_pos = np.zeros(3)
        total_force = 0.0
        for name in names:
            if name not in contact_eff or name not in contact_pos:
                continue

            normal_force = float(linear_part(contact_eff[name])[2])
            weighted_pos += normal_force * np.asarray(contact_pos[name], dtype=float)
            total_force += normal_force

        if total_force <= 1e-9:
            return np.zeros(3)

        return weighted_pos / total_force

    def get_active_contacts(
        self,
        contact_eff: Mapping[str, np.ndarray],
        force_threshold: float,
    ) -> List[str]:
        """Return the contacts whose force magnitude exceeds the threshold.

        Args:
            contact_eff: Dict mapping contact name to wrench, shape (6,).
            force_threshold: Force threshold in N.

        Returns:
            Names of the active contacts, in end-effector order.
        """
        ordered = [n for n in self.end_effectors if n in contact_eff]
        ordered += [n for n in contact_eff if n not in self.end_effectors]

        return [
            name
            for name in ordered
            if np.linalg.norm(linear_part(contact_eff[name])) > force_threshold
        ]


class LumpedMassSystem(FloatingBaseSystem):
    """Floating base whose mass is lumped at a fixed point of the base.

    The joints do not move the CoM, which makes this model suitable for
    quick previews and for robots with light legs.

    Attributes:
        mass: Total mass in kg.
        com_offset: CoM position in the base frame, shape (3,).
    """

    def __init__(
        self,
        mass: float,
        end_effectors: Mapping[str, str],
        com_offset: Optional[np.ndarray] = None,
        gravity: float = 9.81,
        joint_dof: int = 0,
    ):
        """Initialize the lumped-mass system.

        Args:
            mass: Total mass in kg.
            end_effectors: Ordered dict mapping end-effector name to type.
            com_offset: CoM position in the base frame. Defaults to the base origin.
            gravity: Gravity acceleration magnitude.
            joint_dof: Number of joints carried in whole-body states.
        """
        super().__init__(end_effectors, gravity=gravity, joint_dof=joint_dof)
        if mass <= 0:
            raise ValueError(f"mass must be positive, got {mass}")

        self.mass = float(mass)
        self.com_offset = np.zeros(3) if com_offset is None else np.asarray(com_offset, dtype=float)

    def get_total_mass(self) -> float:
        return self.mass

    def get_system_com(self, base_pos: np.ndarray, joint_pos: np.ndarray) -> np.ndarray:
        base_pos = np.asarray(base_pos, dtype=float)
        rotation = euler_to_rotation_matrix(angular_part(base_pos))
        return base_pos[LX:LZ + 1] + rotation @ self.com_offset

    def get_system_com_rate(
        self,
        base_pos: np.ndarray,
        joint_pos: np.ndarray,
        base_vel: np.ndarray,
        joint_vel: np.ndarray,
    ) -> np.ndarray:
        base_pos = np.asarray(base_pos, dtype=float)
        base_vel = np.asarray(base_vel, dtype=float)
        rotation = euler_to_rotation_matrix(angular_part(base_pos))
        return linear_part(base_vel) + np.cross(angular_part(base_vel), rotation @ self.com_offset)
