# Copyright (c) 2022-2026, The Isaac Lab Project Developers.
# All rights reserved.
#
# SPDX-License-Identifier: BSD-3-Clause

"""
Preview Locomotion Module for reduced-model locomotion planning.

This standalone module predicts the motion of a legged robot over a phase
schedule using:
1. Spring-loaded inverted pendulum (SLIP) dynamics for stance phases
2. Ballistic projectile motion for flight phases
3. Bezier swing trajectories for stepping feet
4. A flat decision vector for trajectory optimizers

Dependencies:
- numpy (core math)
- pinocchio (optional, for whole-body CoM computations)
- example-robot-data (for robot models in testing)
- matplotlib (optional, for visualization)

Usage:
    # Import schedule components
    from preview_locomotion.gait import GaitScheduler, PreviewPhase, PreviewSchedule

    # Import floating-base systems
    from preview_locomotion.model import LumpedMassSystem, PinocchioFloatingBaseSystem

    # Import the preview engine
    from preview_locomotion.simulation import PreviewLocomotion, PreviewState
"""

__version__ = "0.1.0"
__author__ = "Isaac Lab Project Developers"

# Import core modules
from . import utils
from . import trajectory
from . import gait
from . import model
from . import simulation

from .config import PreviewLocomotionConfig
from .errors import ControlDimensionError, PreviewLocomotionError, ScheduleNotSetError

# Convenience imports from gait
from .gait import GaitScheduler, PhaseType, PreviewPhase, PreviewSchedule

# Convenience imports from model
from .model import (
    FOOT,
    HAND,
    FloatingBaseSystem,
    LumpedMassSystem,
    PinocchioFloatingBaseSystem,
    PINOCCHIO_AVAILABLE,
)

# Convenience imports from trajectory
from .trajectory import BezierSwingTrajectory, FootPatternGenerator, StepParameters

# Convenience imports from simulation
from .simulation import (
    PreviewControl,
    PreviewLocomotion,
    PreviewParams,
    PreviewState,
    SLIPModel,
    SwingParams,
    WholeBodyState,
)

__all__ = [
    # Modules
    "utils",
    "trajectory",
    "gait",
    "model",
    "simulation",
    # Configuration and errors
    "PreviewLocomotionConfig",
    "PreviewLocomotionError",
    "ControlDimensionError",
    "ScheduleNotSetError",
    # Gait classes
    "GaitScheduler",
    "PhaseType",
    "PreviewPhase",
    "PreviewSchedule",
    # Model classes
    "FOOT",
    "HAND",
    "FloatingBaseSystem",
    "LumpedMassSystem",
    "PinocchioFloatingBaseSystem",
    # Trajectory classes
    "BezierSwingTrajectory",
    "FootPatternGenerator",
    "StepParameters",
    # Simulation classes
    "PreviewControl",
    "PreviewLocomotion",
    "PreviewParams",
    "PreviewState",
    "SLIPModel",
    "SwingParams",
    "WholeBodyState",
    # Availability flags
    "PINOCCHIO_AVAILABLE",
]
