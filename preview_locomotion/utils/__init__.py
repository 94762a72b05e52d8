# Copyright (c) 2022-2026, The Isaac Lab Project Developers.
# All rights reserved.
#
# SPDX-License-Identifier: BSD-3-Clause

"""Mathematical utilities for the preview engine."""

from .math_utils import (
    LX,
    LY,
    LZ,
    AX,
    AY,
    AZ,
    X,
    Y,
    Z,
    linear_part,
    angular_part,
    euler_to_rotation_matrix,
    euler_to_quat,
    bezier_point,
    bezier_tangent,
    bezier_curvature_vector,
)

__all__ = [
    "LX",
    "LY",
    "LZ",
    "AX",
    "AY",
    "AZ",
    "X",
    "Y",
    "Z",
    "linear_part",
    "angular_part",
    "euler_to_rotation_matrix",
    "euler_to_quat",
    "bezier_point",
    "bezier_tangent",
    "bezier_curvature_vector",
]
