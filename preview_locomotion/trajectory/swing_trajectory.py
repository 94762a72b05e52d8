# Copyright (c) 2022-2026, The Isaac Lab Project Developers.
# All rights reserved.
#
# SPDX-License-Identifier: BSD-3-Clause

"""Single-step foot swing trajectory generators.

The preview engine queries a foot pattern generator once per swinging foot and
phase: it is configured with the step start time, lift-off and landing
positions and the step parameters, and then sampled at arbitrary times within
the step.

BezierSwingTrajectory produces a smooth arc as a cubic Bezier curve:

              P1────P2
             /        \\
            /          \\
    P0 ──/              \\── P3
    ─────                  ─────
    ground                 ground

The curve parameter follows a minimum-jerk time scaling, so the foot lifts off
and lands with zero velocity and acceleration.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from ..utils.math_utils import (
    bezier_curvature_vector,
    bezier_point,
    bezier_tangent,
)


@dataclass
class StepParameters:
    """Timing and shape of a single step.

    Attributes:
        duration: Swing duration in seconds.
        step_height: Swing height in meters.
    """

    duration: float = 0.25
    step_height: float = 0.1


class FootPatternGenerator(ABC):
    """Abstract single-step foot pattern generator.

    Subclasses must implement:
        - set_parameters: Configure one step
        - generate_trajectory: Sample position, velocity and acceleration
    """

    @abstractmethod
    def set_parameters(
        self,
        initial_time: float,
        start_pos: np.ndarray,
        target_pos: np.ndarray,
        step_params: StepParameters,
    ):
        """Configure the generator for one step.

        Args:
            initial_time: Time at lift-off in seconds.
            start_pos: Foot position at lift-off, shape (3,).
            target_pos: Foot position at landing, shape (3,).
            step_params: Step duration and height.
        """
        pass

    @abstractmethod
    def generate_trajectory(self, time: float) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Sample the configured step.

        Args:
            time: Absolute time in seconds.

        Returns:
            Tuple of (position, velocity, acceleration), each shape (3,).
        """
        pass


class BezierSwingTrajectory(FootPatternGenerator):
    """Time-parameterized cubic Bezier swing trajectory.

    Control point computation:
        P0 = start_pos
        P1 = start_pos + (target_pos - start_pos) * lift_ratio + [0, 0, step_height * height_ratio]
        P2 = start_pos + (target_pos - start_pos) * land_ratio + [0, 0, step_height * height_ratio]
        P3 = target_pos

    Attributes:
        lift_ratio: P1 horizontal position as fraction of step length.
        land_ratio: P2 horizontal position as fraction of step length.
        height_ratio: P1/P2 height as fraction of step_height.
    """

    def __init__(
        self,
        lift_ratio: float = 0.25,
        land_ratio: float = 0.75,
        height_ratio: float = 4.0 / 3.0,
    ):
        """Initialize foot trajectory generator.

        Args:
            lift_ratio: P1 at this fraction of step length. Default 0.25.
            land_ratio: P2 at this fraction of step length. Default 0.75.
            height_ratio: P1,P2 height as fraction of step_height. The default
                4/3 makes the apex of a level step reach exactly step_height.
        """
        self.lift_ratio = lift_ratio
        self.land_ratio = land_ratio
        self.height_ratio = height_ratio

        self.initial_time = 0.0
        self.duration = 0.0
        self.control_points = np.zeros((4, 3))

    def set_parameters(
        self,
        initial_time: float,
        start_pos: np.ndarray,
        target_pos: np.ndarray,
        step_params: StepParameters,
    ):
        if step_params.duration <= 0:
            raise ValueError(f"Step duration must be positive, got {step_params.duration}")

        self.initial_time = initial_time
        self.duration = step_params.duration
        self.control_points = self.get_control_points(
            start_pos, target_pos, step_params.step_height
        )

    def generate_trajectory(self, time: float) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        tau = (time - self.initial_time) / self.duration
        if tau <= 0.0 or tau >= 1.0:
            position = bezier_point(self.control_points, np.clip(tau, 0.0, 1.0))
            return position, np.zeros(3), np.zeros(3)

        # Minimum-jerk time scaling s(tau) and its derivatives w.r.t. tau
        s = 10 * tau**3 - 15 * tau**4 + 6 * tau**5
        ds = 30 * tau**2 - 60 * tau**3 + 30 * tau**4
        dds = 60 * tau - 180 * tau**2 + 120 * tau**3

        tangent = bezier_tangent(self.control_points, s)
        curvature = bezier_curvature_vector(self.control_points, s)

        position = bezier_point(self.control_points, s)
        velocity = tangent * ds / self.duration
        acceleration = (curvature * ds**2 + tangent * dds) / self.duration**2

        return position, velocity, acceleration

    def get_control_points(
        self,
        start_pos: np.ndarray,
        target_pos: np.ndarray,
        step_height: float,
    ) -> np.ndarray:
        """Get the Bezier control points for a swing trajectory.

        Args:
            start_pos: Foot position at lift-off, shape (3,).
            target_pos: Foot position at landing, shape (3,).
            step_height: Swing height in meters.

        Returns:
            Control points array with shape (4, 3).
        """
        start_pos = np.asarray(start_pos, dtype=float)
        target_pos = np.asarray(target_pos, dtype=float)

        step_vector = target_pos - start_pos
        height_offset = np.array([0.0, 0.0, step_height * self.height_ratio])

        P0 = start_pos
        P1 = start_pos + step_vector * self.lift_ratio + height_offset
        P2 = start_pos + step_vector * self.land_ratio + height_offset
        P3 = target_pos

        return np.array([P0, P1, P2, P3])
