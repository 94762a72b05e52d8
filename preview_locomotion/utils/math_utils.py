# Copyright (c) 2022-2026, The Isaac Lab Project Developers.
# All rights reserved.
#
# SPDX-License-Identifier: BSD-3-Clause

"""Mathematical utility functions for the preview engine.

This module provides common mathematical operations for:
- Euler angle, quaternion and rotation matrix conversions
- Cubic Bezier evaluation and its first/second derivatives
"""

import numpy as np


# =============================================================================
# Spatial Vector Indices
# =============================================================================

# Six-dimensional base and wrench vectors are stored linear part first:
#   base pose = [x, y, z, roll, pitch, yaw]
#   wrench    = [fx, fy, fz, tx, ty, tz]
LX, LY, LZ, AX, AY, AZ = range(6)
X, Y, Z = range(3)


def linear_part(vector: np.ndarray) -> np.ndarray:
    """Return the linear (first three) components of a 6D vector."""
    return np.asarray(vector)[LX:LZ + 1]


def angular_part(vector: np.ndarray) -> np.ndarray:
    """Return the angular (last three) components of a 6D vector."""
    return np.asarray(vector)[AX:AZ + 1]


# =============================================================================
# Rotation Operations
# =============================================================================

def euler_to_rotation_matrix(euler: np.ndarray) -> np.ndarray:
    """Convert Euler angles (roll, pitch, yaw) to a 3x3 rotation matrix.

    Uses ZYX (yaw-pitch-roll) convention: R = Rz(yaw) @ Ry(pitch) @ Rx(roll).

    Args:
        euler: Euler angles (roll, pitch, yaw) in radians. Shape: (3,)

    Returns:
        Rotation matrix. Shape: (3, 3)
    """
    roll, pitch, yaw = np.asarray(euler, dtype=float)

    cr, sr = np.cos(roll), np.sin(roll)
    cp, sp = np.cos(pitch), np.sin(pitch)
    cy, sy = np.cos(yaw), np.sin(yaw)

    return np.array([
        [cy * cp, cy * sp * sr - sy * cr, cy * sp * cr + sy * sr],
        [sy * cp, sy * sp * sr + cy * cr, sy * sp * cr - cy * sr],
        [-sp, cp * sr, cp * cr],
    ])


def euler_to_quat(euler: np.ndarray) -> np.ndarray:
    """Convert Euler angles (roll, pitch, yaw) to quaternion.

    Uses ZYX (yaw-pitch-roll) convention.

    Args:
        euler: Euler angles (roll, pitch, yaw) in radians. Shape: (3,)

    Returns:
        Quaternion in (w, x, y, z) format. Shape: (4,)
    """
    roll, pitch, yaw = np.asarray(euler, dtype=float)

    cy = np.cos(yaw * 0.5)
    sy = np.sin(yaw * 0.5)
    cp = np.cos(pitch * 0.5)
    sp = np.sin(pitch * 0.5)
    cr = np.cos(roll * 0.5)
    sr = np.sin(roll * 0.5)

    w = cr * cp * cy + sr * sp * sy
    x = sr * cp * cy - cr * sp * sy
    y = cr * sp * cy + sr * cp * sy
    z = cr * cp * sy - sr * sp * cy

    return np.array([w, x, y, z])


# =============================================================================
# Bezier Curve Operations
# =============================================================================

def bezier_point(control_points: np.ndarray, t: float) -> np.ndarray:
    """Evaluate a cubic Bezier at a single parameter value.

    Args:
        control_points: Control points with shape (4, D).
        t: Parameter value, clipped to [0, 1].

    Returns:
        Curve point with shape (D,).
    """
    control_points = np.asarray(control_points)
    t = np.clip(t, 0, 1)
    one_minus_t = 1 - t

    return (
        (one_minus_t ** 3) * control_points[0]
        + 3 * (one_minus_t ** 2) * t * control_points[1]
        + 3 * one_minus_t * (t ** 2) * control_points[2]
        + (t ** 3) * control_points[3]
    )


def bezier_tangent(control_points: np.ndarray, t: float) -> np.ndarray:
    """Compute tangent vector of cubic Bezier at parameter t.

    The derivative of a cubic Bezier curve is:
        B'(t) = 3(1-t)²(P₁-P₀) + 6(1-t)t(P₂-P₁) + 3t²(P₃-P₂)

    Args:
        control_points: Control points with shape (4, D) for cubic Bezier.
        t: Parameter value in [0, 1].

    Returns:
        Tangent vector with shape (D,).
    """
    control_points = np.asarray(control_points)
    t = np.clip(t, 0, 1)

    one_minus_t = 1 - t

    q0 = control_points[1] - control_points[0]
    q1 = control_points[2] - control_points[1]
    q2 = control_points[3] - control_points[2]

    tangent = 3 * (
        (one_minus_t ** 2) * q0
        + 2 * one_minus_t * t * q1
        + (t ** 2) * q2
    )

    return tangent


def bezier_curvature_vector(control_points: np.ndarray, t: float) -> np.ndarray:
    """Compute the second derivative of a cubic Bezier at parameter t.

        B''(t) = 6(1-t)(P₂ - 2P₁ + P₀) + 6t(P₃ - 2P₂ + P₁)

    Args:
        control_points: Control points with shape (4, D).
        t: Parameter value in [0, 1].

    Returns:
        Second derivative with shape (D,).
    """
    control_points = np.asarray(control_points)
    t = np.clip(t, 0, 1)

    r0 = control_points[2] - 2 * control_points[1] + control_points[0]
    r1 = control_points[3] - 2 * control_points[2] + control_points[1]

    return 6 * ((1 - t) * r0 + t * r1)
