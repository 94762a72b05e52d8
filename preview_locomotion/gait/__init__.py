# Copyright (c) 2022-2026, The Isaac Lab Project Developers.
# All rights reserved.
#
# SPDX-License-Identifier: BSD-3-Clause

"""Gait management module for the preview engine.

This module provides:
- Phase schedule data structures (stance/flight phases and their timing)
- Gait scheduler for generating standard gait schedules (trot, walk, pace, bound, pronk)
"""

from .gait_scheduler import GaitScheduler
from .preview_schedule import PARAMS_DIMENSION, PhaseType, PreviewPhase, PreviewSchedule

__all__ = [
    "PARAMS_DIMENSION",
    "PhaseType",
    "PreviewPhase",
    "PreviewSchedule",
    "GaitScheduler",
]
