# Copyright (c) 2022-2026, The Isaac Lab Project Developers.
# All rights reserved.
#
# SPDX-License-Identifier: BSD-3-Clause

"""Pinocchio-backed floating-base system.

Wraps a free-flyer Pinocchio model so the preview engine can reduce whole-body
states to CoM quantities.

Pinocchio configuration layout for a free-flyer model:
    q = [x, y, z, qx, qy, qz, qw, joint1...jointN]   → nq = 7 + N
    v = [vx, vy, vz, wx, wy, wz, dq1...dqN]          → nv = 6 + N
with the base velocity expressed in the local (base) frame.
"""

from typing import Dict, Mapping, Optional

import numpy as np

from ..utils.math_utils import (
    angular_part,
    euler_to_quat,
    euler_to_rotation_matrix,
    linear_part,
)
from .floating_base import FOOT, FloatingBaseSystem

# Try to import Pinocchio
try:
    import pinocchio

    PINOCCHIO_AVAILABLE = True
except ImportError:
    PINOCCHIO_AVAILABLE = False
    pinocchio = None


class PinocchioFloatingBaseSystem(FloatingBaseSystem):
    """Floating-base system backed by a Pinocchio free-flyer model.

    Attributes:
        rmodel: Pinocchio robot model.
        rdata: Pinocchio robot data.
        frame_names: Dict mapping end-effector name to Pinocchio frame name.
        frame_ids: Dict mapping end-effector name to Pinocchio frame ID.
    """

    def __init__(
        self,
        rmodel: "pinocchio.Model",
        foot_frame_names: Mapping[str, str],
        other_frame_names: Optional[Mapping[str, str]] = None,
        other_type: str = "hand",
    ):
        """Initialize from a Pinocchio model.

        Args:
            rmodel: Pinocchio model with a free-flyer root joint.
            foot_frame_names: Dict mapping foot name to Pinocchio frame name.
                Example: {"LF": "LF_FOOT", "RF": "RF_FOOT", ...}
            other_frame_names: Additional non-foot end-effectors.
            other_type: End-effector type of the additional end-effectors.
        """
        if not PINOCCHIO_AVAILABLE:
            raise ImportError(
                "Pinocchio is not available. Please install pin to use PinocchioFloatingBaseSystem."
            )

        if rmodel.nq - rmodel.nv != 1 or rmodel.nv < 6:
            raise ValueError(
                f"Expected a free-flyer model, got nq={rmodel.nq}, nv={rmodel.nv}"
            )

        end_effectors: Dict[str, str] = {name: FOOT for name in foot_frame_names}
        self.frame_names: Dict[str, str] = dict(foot_frame_names)
        if other_frame_names is not None:
            for name, frame_name in other_frame_names.items():
                end_effectors[name] = other_type
                self.frame_names[name] = frame_name

        super().__init__(
            end_effectors,
            gravity=float(np.linalg.norm(rmodel.gravity.linear)),
            joint_dof=rmodel.nv - 6,
        )

        self.rmodel = rmodel
        self.rdata = rmodel.createData()
        self.total_mass = float(pinocchio.computeTotalMass(rmodel))

        self.frame_ids: Dict[str, int] = {}
        for name, frame_name in self.frame_names.items():
            if not rmodel.existFrame(frame_name):
                raise ValueError(f"Frame '{frame_name}' not found in model")
            self.frame_ids[name] = rmodel.getFrameId(frame_name)

    @classmethod
    def from_urdf(
        cls,
        urdf_path: str,
        foot_frame_names: Mapping[str, str],
        other_frame_names: Optional[Mapping[str, str]] = None,
    ) -> "PinocchioFloatingBaseSystem":
        """Build the system from a URDF file with a free-flyer root joint."""
        if not PINOCCHIO_AVAILABLE:
            raise ImportError("Pinocchio is not available. Please install pin.")

        rmodel = pinocchio.buildModelFromUrdf(urdf_path, pinocchio.JointModelFreeFlyer())
        return cls(rmodel, foot_frame_names, other_frame_names)

    def get_total_mass(self) -> float:
        return self.total_mass

    def get_system_com(self, base_pos: np.ndarray, joint_pos: np.ndarray) -> np.ndarray:
        q = self._configuration(base_pos, joint_pos)
        return np.array(pinocchio.centerOfMass(self.rmodel, self.rdata, q))

    def get_system_com_rate(
        self,
        base_pos: np.ndarray,
        joint_pos: np.ndarray,
        base_vel: np.ndarray,
        joint_vel: np.ndarray,
    ) -> np.ndarray:
        q = self._configuration(base_pos, joint_pos)
        v = self._velocity(base_pos, base_vel, joint_vel)
        pinocchio.centerOfMass(self.rmodel, self.rdata, q, v)
        return np.array(self.rdata.vcom[0])

    def get_contact_positions(self, joint_pos: np.ndarray) -> Dict[str, np.ndarray]:
        """Compute end-effector positions w.r.t. the base for a joint configuration.

        Args:
            joint_pos: Joint positions, shape (joint_dof,).

        Returns:
            Dict mapping end-effector name to position in the base frame.
        """
        q = self._configuration(np.zeros(6), joint_pos)
        pinocchio.framesForwardKinematics(self.rmodel, self.rdata, q)
        return {
            name: np.array(self.rdata.oMf[frame_id].translation)
            for name, frame_id in self.frame_ids.items()
        }

    def get_neutral_joint_positions(self) -> np.ndarray:
        """Return the joint part of the model's reference configuration."""
        q0 = pinocchio.neutral(self.rmodel)
        if "standing" in self.rmodel.referenceConfigurations:
            q0 = self.rmodel.referenceConfigurations["standing"]
        return np.array(q0[7:])

    def _configuration(self, base_pos: np.ndarray, joint_pos: np.ndarray) -> np.ndarray:
        """Assemble the Pinocchio configuration vector."""
        base_pos = np.asarray(base_pos, dtype=float)
        w, x, y, z = euler_to_quat(angular_part(base_pos))
        joint_pos = np.asarray(joint_pos, dtype=float).reshape(-1)
        if joint_pos.size != self.joint_dof:
            raise ValueError(
                f"Expected {self.joint_dof} joint positions, got {joint_pos.size}"
            )
        return np.concatenate([linear_part(base_pos), [x, y, z, w], joint_pos])

    def _velocity(
        self,
        base_pos: np.ndarray,
        base_vel: np.ndarray,
        joint_vel: np.ndarray,
    ) -> np.ndarray:
        """Assemble the Pinocchio velocity vector (base twist in the local frame)."""
        rotation = euler_to_rotation_matrix(angular_part(base_pos))
        base_vel = np.asarray(base_vel, dtype=float)
        joint_vel = np.asarray(joint_vel, dtype=float).reshape(-1)
        return np.concatenate([
            rotation.T @ linear_part(base_vel),
            rotation.T @ angular_part(base_vel),
            joint_vel,
        ])
