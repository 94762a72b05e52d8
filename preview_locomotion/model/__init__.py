# Copyright (c) 2022-2026, The Isaac Lab Project Developers.
# All rights reserved.
#
# SPDX-License-Identifier: BSD-3-Clause

"""Floating-base system models consumed by the preview engine."""

from .floating_base import FOOT, HAND, FloatingBaseSystem, LumpedMassSystem
from .pinocchio_system import PINOCCHIO_AVAILABLE, PinocchioFloatingBaseSystem

__all__ = [
    "FOOT",
    "HAND",
    "FloatingBaseSystem",
    "LumpedMassSystem",
    "PinocchioFloatingBaseSystem",
    "PINOCCHIO_AVAILABLE",
]
