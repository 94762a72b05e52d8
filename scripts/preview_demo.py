#!/usr/bin/env python3
# Copyright (c) 2022-2026, The Isaac Lab Project Developers.
# All rights reserved.
#
# SPDX-License-Identifier: BSD-3-Clause

"""Preview locomotion demo with matplotlib visualization.

This script runs the complete preview pipeline on a lumped-mass quadruped:
1. Gait scheduling (stance/flight phase schedule)
2. Decision vector → preview control conversion
3. Multi-phase SLIP/ballistic preview with swing feet
4. Conversion of the preview into whole-body states

Usage:
    # Trotting preview with plots
    python scripts/preview_demo.py

    # Running trot with flight phases
    python scripts/preview_demo.py --gait trot --flight 0.08

    # Pronking on a step
    python scripts/preview_demo.py --gait pronk --flight 0.15 --terrain-step 0.05

Installation:
    pip install -e .[viz]
"""

import argparse
import logging
from typing import Dict, Optional

import numpy as np

from preview_locomotion import (
    FOOT,
    GaitScheduler,
    LumpedMassSystem,
    PreviewLocomotion,
    PreviewLocomotionConfig,
    PreviewState,
)

# =============================================================================
# Check optional dependencies
# =============================================================================
try:
    import matplotlib.pyplot as plt
    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False
    print("Warning: matplotlib not available. Install with: pip install matplotlib")


FOOT_NAMES = ["LF", "RF", "LH", "RH"]

FOOT_COLORS = {
    "LF": "green",
    "RF": "red",
    "LH": "cyan",
    "RH": "orange",
}


def create_initial_state(height: float = 0.45) -> PreviewState:
    """Standing state with the CoM above the center of the feet."""
    return PreviewState(
        com_pos=np.array([0.0, 0.0, height]),
        com_vel=np.array([0.3, 0.0, 0.0]),
        cop=np.zeros(3),
        foot_pos={
            "LF": np.array([0.3, 0.2, -height]),
            "RF": np.array([0.3, -0.2, -height]),
            "LH": np.array([-0.3, 0.2, -height]),
            "RH": np.array([-0.3, -0.2, -height]),
        },
    )


def create_decision_vector(engine: PreviewLocomotion, step_length: float) -> np.ndarray:
    """Build a decision vector that walks forward at the nominal timing."""
    params = []
    for k in range(engine.get_number_of_phases()):
        phase = engine.get_phase(k)
        if phase.is_stance:
            # CoP moves forward with the body
            params.extend([phase.duration, 0.3 * phase.duration, 0.0, 0.0, 0.0])
        else:
            params.append(phase.duration)

    feet_shift = [step_length, 0.0] * len(FOOT_NAMES)
    return np.array(params + feet_shift)


def run_preview(
    gait_type: str = "trot",
    flight_duration: float = 0.0,
    num_cycles: int = 2,
    step_length: float = 0.1,
    terrain_step: float = 0.0,
) -> Dict:
    """Run the preview pipeline and return its results."""
    print("=" * 60)
    print("Preview Locomotion Demo")
    print("=" * 60)

    system = LumpedMassSystem(
        mass=20.0,
        end_effectors={name: FOOT for name in FOOT_NAMES},
        com_offset=np.array([0.02, 0.0, 0.0]),
    )
    config = PreviewLocomotionConfig(sample_time=0.005, step_height=0.08, slip_height=0.45)
    engine = PreviewLocomotion(system, config=config)

    scheduler = GaitScheduler(FOOT_NAMES)
    schedule = scheduler.generate(
        gait_type,
        step_duration=0.2,
        support_duration=0.05,
        num_cycles=num_cycles,
        flight_duration=flight_duration,
    )
    engine.set_schedule(schedule)

    print(f"\nGait: {gait_type} ({scheduler.get_gait_description(gait_type)})")
    print(f"Phases: {engine.get_number_of_phases()}")
    print(f"Total duration: {schedule.total_duration:.2f}s")
    print(f"Decision vector dimension: {engine.get_control_dimension()}")

    if terrain_step > 0:
        engine.set_terrain_height_fn(lambda x, y: terrain_step if x > 0.25 else 0.0)
        print(f"Terrain step: {terrain_step:.3f}m at x > 0.25m")

    decision_vector = create_decision_vector(engine, step_length)
    control = engine.to_preview_control(decision_vector)

    initial_state = create_initial_state()
    trajectory = engine.multi_phase_preview(initial_state, control)
    full_trajectory = engine.to_whole_body_trajectory(trajectory)

    com = np.array([state.com_pos for state in trajectory])
    times = np.array([state.time for state in trajectory])

    print(f"\nPreview samples: {len(trajectory)}")
    print(f"Start CoM: {initial_state.com_pos}")
    print(f"End CoM:   {com[-1]}")
    print(f"CoM height range: [{com[:, 2].min():.3f}, {com[:, 2].max():.3f}] m")
    print(f"End base:  {full_trajectory[-1].base_pos[:3]}")

    print("\nFinal foot positions (world):")
    for name in FOOT_NAMES:
        print(f"  {name}: {trajectory[-1].foot_pos[name] + com[-1]}")

    print("\n" + "=" * 60)
    print("Preview complete!")
    print("=" * 60)

    return {
        "gait_type": gait_type,
        "times": times,
        "com": com,
        "trajectory": trajectory,
    }


def visualize_matplotlib(results: Dict, save_path: Optional[str] = None):
    """Plot the CoM and world-frame feet motion of a preview."""
    times = results["times"]
    com = results["com"]
    trajectory = results["trajectory"]

    fig, axes = plt.subplots(1, 3, figsize=(15, 4))
    fig.suptitle(f"Preview: {results['gait_type']}")

    # Bird's eye view (XY)
    ax = axes[0]
    ax.set_title("Bird's Eye View (XY)")
    ax.set_xlabel("X (m)")
    ax.set_ylabel("Y (m)")
    ax.set_aspect("equal")
    ax.grid(True, alpha=0.3)
    ax.plot(com[:, 0], com[:, 1], "b-", linewidth=2, label="CoM")
    for name in FOOT_NAMES:
        feet = np.array([state.foot_pos[name] + state.com_pos for state in trajectory])
        ax.plot(feet[:, 0], feet[:, 1], color=FOOT_COLORS[name], label=name)
    ax.legend(loc="upper left", fontsize=8)

    # CoM height
    ax = axes[1]
    ax.set_title("CoM Height")
    ax.set_xlabel("Time (s)")
    ax.set_ylabel("Z (m)")
    ax.grid(True, alpha=0.3)
    ax.plot(times, com[:, 2], "b-", linewidth=2)

    # Foot heights (world)
    ax = axes[2]
    ax.set_title("Foot Height")
    ax.set_xlabel("Time (s)")
    ax.set_ylabel("Z (m)")
    ax.grid(True, alpha=0.3)
    for name in FOOT_NAMES:
        heights = [state.foot_pos[name][2] + state.com_pos[2] for state in trajectory]
        ax.plot(times, heights, color=FOOT_COLORS[name], label=name)
    ax.legend(loc="upper right", fontsize=8)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150)
        print(f"\nVisualization saved to: {save_path}")

    plt.show()


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Preview locomotion demo")
    parser.add_argument(
        "--gait",
        type=str,
        default="trot",
        choices=GaitScheduler.get_available_gaits(),
        help="Gait type to preview",
    )
    parser.add_argument("--flight", type=float, default=0.0, help="Flight phase duration (s)")
    parser.add_argument("--cycles", type=int, default=2, help="Number of gait cycles")
    parser.add_argument("--step-length", type=float, default=0.1, help="Foothold shift (m)")
    parser.add_argument("--terrain-step", type=float, default=0.0, help="Terrain step height (m)")
    parser.add_argument("--no-plot", action="store_true", help="Disable plotting")
    parser.add_argument("--save", type=str, default=None, help="Save the plot to this path")
    parser.add_argument("--verbose", action="store_true", help="Show debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    results = run_preview(
        gait_type=args.gait,
        flight_duration=args.flight,
        num_cycles=args.cycles,
        step_length=args.step_length,
        terrain_step=args.terrain_step,
    )

    if not args.no_plot and HAS_MATPLOTLIB:
        visualize_matplotlib(results, args.save)


if __name__ == "__main__":
    main()
