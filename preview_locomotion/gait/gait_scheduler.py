# Copyright (c) 2022-2026, The Isaac Lab Project Developers.
# All rights reserved.
#
# SPDX-License-Identifier: BSD-3-Clause

"""Gait scheduler for generating preview schedules for quadruped locomotion.

This module generates PreviewSchedule objects for standard quadruped gaits.
It is pure logic with NO dynamics dependency.

Supported gaits:
- trot: Diagonal pairs alternate (RF+LH, then LF+RH)
- walk: One leg at a time (RH→RF→LH→LF)
- pace: Lateral pairs alternate (RF+RH, then LF+LH)
- bound: Front/hind pairs alternate (LF+RF, then LH+RH)
- pronk: All feet step together

Walking gaits separate the stepping phases with full-support stance phases.
Running variants (flight_duration > 0) separate them with flight phases.
"""

from typing import Dict, List, Optional

from .preview_schedule import PhaseType, PreviewPhase, PreviewSchedule


class GaitScheduler:
    """Generate preview schedules for standard quadruped gaits.

    Gait definitions (which groups of feet step together):
        trot:  RF+LH step together, then LF+RH (diagonal pairs)
        walk:  RH→RF→LH→LF (one leg at a time)
        pace:  RF+RH step together, then LF+LH (lateral pairs)
        bound: LF+RF step together, then LH+RH (front/hind pairs)
        pronk: all four feet together

    Attributes:
        foot_names: Names of the feet, in end-effector order.
        GAIT_PATTERNS: Dictionary of gait definitions over the default
            foot names ("LF", "RF", "LH", "RH").
    """

    FOOT_NAMES = ["LF", "RF", "LH", "RH"]

    GAIT_PATTERNS: Dict[str, Dict] = {
        "trot": {
            "step_groups": [["RF", "LH"], ["LF", "RH"]],
            "description": "Diagonal pairs alternate",
        },
        "walk": {
            "step_groups": [["RH"], ["RF"], ["LH"], ["LF"]],
            "description": "One leg at a time",
        },
        "pace": {
            "step_groups": [["RF", "RH"], ["LF", "LH"]],
            "description": "Lateral pairs alternate",
        },
        "bound": {
            "step_groups": [["LF", "RF"], ["LH", "RH"]],
            "description": "Front/hind pairs alternate",
        },
        "pronk": {
            "step_groups": [["LF", "RF", "LH", "RH"]],
            "description": "All feet together",
        },
    }

    def __init__(self, foot_names: Optional[List[str]] = None):
        """Initialize the gait scheduler.

        Args:
            foot_names: Foot names in end-effector order. Gait patterns are
                defined over ["LF", "RF", "LH", "RH"]; other names are mapped
                positionally onto those.
        """
        if foot_names is None:
            foot_names = self.FOOT_NAMES
        if len(foot_names) != len(self.FOOT_NAMES):
            raise ValueError(
                f"GaitScheduler expects {len(self.FOOT_NAMES)} feet, got {len(foot_names)}"
            )
        self.foot_names = list(foot_names)
        self._name_map = dict(zip(self.FOOT_NAMES, self.foot_names))

    @classmethod
    def get_available_gaits(cls) -> List[str]:
        """Return list of available gait types."""
        return list(cls.GAIT_PATTERNS.keys())

    @classmethod
    def get_gait_description(cls, gait_type: str) -> str:
        """Get description of a gait type.

        Args:
            gait_type: Name of the gait.

        Returns:
            Description string.
        """
        if gait_type not in cls.GAIT_PATTERNS:
            raise ValueError(f"Unknown gait type: {gait_type}. Available: {cls.get_available_gaits()}")
        return cls.GAIT_PATTERNS[gait_type]["description"]

    def generate(
        self,
        gait_type: str,
        step_duration: float = 0.15,
        support_duration: float = 0.05,
        num_cycles: int = 2,
        flight_duration: float = 0.0,
        include_initial_support: bool = True,
        include_final_support: bool = True,
    ) -> PreviewSchedule:
        """Generate a complete PreviewSchedule for the requested gait.

        Structure per cycle (e.g., trot, walking variant):
            [full support] → [stance, RF+LH step] → [full support] → [stance, LF+RH step]

        With flight_duration > 0 the full-support phases between steps are
        replaced by flight phases:
            [stance, RF+LH step] → [flight] → [stance, LF+RH step] → [flight]

        Args:
            gait_type: Type of gait ("trot", "walk", "pace", "bound", "pronk").
            step_duration: Duration of each stepping stance phase in seconds.
            support_duration: Duration of full-support stance phases.
            num_cycles: Number of complete gait cycles.
            flight_duration: Duration of flight phases; 0 for walking gaits.
            include_initial_support: Start with a full-support phase.
            include_final_support: End with a full-support phase.

        Returns:
            PreviewSchedule with all phases for the gait.

        Raises:
            ValueError: If gait_type is not recognized.
        """
        if gait_type not in self.GAIT_PATTERNS:
            raise ValueError(
                f"Unknown gait type: {gait_type}. Available: {self.get_available_gaits()}"
            )

        step_groups = self.GAIT_PATTERNS[gait_type]["step_groups"]
        running = flight_duration > 0

        phases: List[PreviewPhase] = []

        if include_initial_support:
            phases.append(self._support_phase(support_duration))

        for cycle_idx in range(num_cycles):
            for group_idx, group in enumerate(step_groups):
                if not running and (group_idx > 0 or cycle_idx > 0):
                    phases.append(self._support_phase(support_duration))

                phases.append(
                    PreviewPhase(
                        phase_type=PhaseType.STANCE,
                        feet=[self._name_map[f] for f in group],
                        duration=step_duration,
                    )
                )

                if running:
                    phases.append(
                        PreviewPhase(phase_type=PhaseType.FLIGHT, duration=flight_duration)
                    )

        if include_final_support:
            phases.append(self._support_phase(support_duration))

        return PreviewSchedule(phases=phases)

    def generate_standing(self, duration: float = 1.0) -> PreviewSchedule:
        """Generate a standing (all feet planted) schedule.

        Args:
            duration: Standing duration in seconds.

        Returns:
            PreviewSchedule with a single full-support phase.
        """
        return PreviewSchedule(phases=[self._support_phase(duration)])

    def generate_jump(
        self,
        flight_duration: float = 0.2,
        takeoff_duration: float = 0.1,
        landing_duration: float = 0.1,
    ) -> PreviewSchedule:
        """Generate a jumping schedule (takeoff → flight → landing).

        The landing phase moves every foot to its foothold shift.

        Args:
            flight_duration: Duration of flight phase.
            takeoff_duration: Stance duration before takeoff.
            landing_duration: Stance duration after landing.

        Returns:
            PreviewSchedule for the jump.
        """
        phases = []

        if takeoff_duration > 0:
            phases.append(self._support_phase(takeoff_duration))

        phases.append(PreviewPhase(phase_type=PhaseType.FLIGHT, duration=flight_duration))

        if landing_duration > 0:
            phases.append(
                PreviewPhase(
                    phase_type=PhaseType.STANCE,
                    feet=self.foot_names.copy(),
                    duration=landing_duration,
                )
            )

        return PreviewSchedule(phases=phases)

    def get_step_group_for_gait(self, gait_type: str, group_index: int) -> List[str]:
        """Get the feet that step together for a specific group in a gait.

        Args:
            gait_type: Type of gait.
            group_index: Index of the step group (0-indexed).

        Returns:
            List of feet that step together in that group.
        """
        if gait_type not in self.GAIT_PATTERNS:
            raise ValueError(f"Unknown gait type: {gait_type}")

        step_groups = self.GAIT_PATTERNS[gait_type]["step_groups"]
        if group_index < 0 or group_index >= len(step_groups):
            raise ValueError(
                f"Group index {group_index} out of range for {gait_type} "
                f"(has {len(step_groups)} groups)"
            )

        return [self._name_map[f] for f in step_groups[group_index]]

    def _support_phase(self, duration: float) -> PreviewPhase:
        """Full-support stance phase, no foot is repositioned."""
        return PreviewPhase(phase_type=PhaseType.STANCE, feet=[], duration=duration)
