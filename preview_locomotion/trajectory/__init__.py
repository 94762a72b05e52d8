# Copyright (c) 2022-2026, The Isaac Lab Project Developers.
# All rights reserved.
#
# SPDX-License-Identifier: BSD-3-Clause

"""Foot swing trajectory generation."""

from .swing_trajectory import BezierSwingTrajectory, FootPatternGenerator, StepParameters

__all__ = [
    "BezierSwingTrajectory",
    "FootPatternGenerator",
    "StepParameters",
]
