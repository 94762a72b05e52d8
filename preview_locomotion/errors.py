# Copyright (c) 2022-2026, The Isaac Lab Project Developers.
# All rights reserved.
#
# SPDX-License-Identifier: BSD-3-Clause

"""Exceptions raised by the preview engine."""


class PreviewLocomotionError(Exception):
    """Base class for preview engine errors."""


class ScheduleNotSetError(PreviewLocomotionError, RuntimeError):
    """Raised when an operation needs a phase schedule and none was set."""

    def __init__(self, operation: str = "this operation"):
        super().__init__(f"A preview schedule must be set before calling {operation}")
        self.operation = operation


class ControlDimensionError(PreviewLocomotionError, ValueError):
    """Raised when a decision vector disagrees with the schedule-derived dimension.

    Attributes:
        expected: Dimension derived from the current schedule and feet.
        actual: Dimension that was supplied.
    """

    def __init__(self, expected: int, actual: int, what: str = "decision vector"):
        super().__init__(
            f"The preview-control and {what} dimensions are not consistent: "
            f"expected {expected}, got {actual}"
        )
        self.expected = expected
        self.actual = actual
