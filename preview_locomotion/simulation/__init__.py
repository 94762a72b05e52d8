# Copyright (c) 2022-2026, The Isaac Lab Project Developers.
# All rights reserved.
#
# SPDX-License-Identifier: BSD-3-Clause

"""Reduced-model preview of legged locomotion.

This module provides:
- Value types of the preview (states, phase parameters, controls, whole-body states)
- PreviewLocomotion engine (SLIP stance, ballistic flight, swing composition)
"""

from .preview_state import (
    PreviewControl,
    PreviewParams,
    PreviewState,
    PreviewTrajectory,
    SLIPModel,
    SwingParams,
    WholeBodyState,
    WholeBodyTrajectory,
)
from .preview_locomotion import PreviewLocomotion

__all__ = [
    "PreviewControl",
    "PreviewParams",
    "PreviewState",
    "PreviewTrajectory",
    "SLIPModel",
    "SwingParams",
    "WholeBodyState",
    "WholeBodyTrajectory",
    "PreviewLocomotion",
]
