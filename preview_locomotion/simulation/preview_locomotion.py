# Copyright (c) 2022-2026, The Isaac Lab Project Developers.
# All rights reserved.
#
# SPDX-License-Identifier: BSD-3-Clause

"""Multi-phase preview of legged locomotion with a SLIP/ballistic reduced model.

Given a phase schedule, an initial reduced state and a preview control, the
engine predicts the CoM, heading, CoP and feet motion phase by phase:

    STANCE → spring-loaded inverted pendulum (closed form)
             horizontal: linear inverted pendulum, ω = sqrt(g / h)
             vertical:   spring-mass oscillator, ω_v = sqrt(k / m)
             heading:    constant angular acceleration
    FLIGHT → projectile motion, constant heading rate

Every sample is an independent evaluation of the closed form at its elapsed
time; there is no incremental integration.

The engine also maps the structured PreviewControl to and from the flat
decision vector used by trajectory optimizers:

    [phase_0 params | phase_1 params | ... | foot_0 (x, y) | foot_1 (x, y) | ...]
     STANCE: duration, cop_shift_x, cop_shift_y, length_shift, head_acc
     FLIGHT: duration

and reduces/lifts whole-body states to/from preview states. The CoM offset
w.r.t. the base cached by from_whole_body_state is engine state; use clone()
to give each parallel worker its own engine.
"""

import copy
import logging
from typing import Callable, Optional, Sequence, Union

import numpy as np

from ..config import PreviewLocomotionConfig
from ..errors import ControlDimensionError, ScheduleNotSetError
from ..gait.preview_schedule import PARAMS_DIMENSION, PhaseType, PreviewPhase, PreviewSchedule
from ..model.floating_base import FOOT, FloatingBaseSystem
from ..trajectory.swing_trajectory import (
    BezierSwingTrajectory,
    FootPatternGenerator,
    StepParameters,
)
from ..utils.math_utils import AZ, LX, LZ, angular_part, euler_to_rotation_matrix
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

logger = logging.getLogger(__name__)

# Relative tolerance used when counting samples, so that e.g. 0.5 / 0.01
# yields 50 samples despite floating-point rounding.
_SAMPLE_TOLERANCE = 1e-9


class PreviewLocomotion:
    """Preview engine for legged locomotion.

    Attributes:
        system: Floating-base system supplying mass, gravity and CoM.
        slip: SLIP model constants.
        sample_time: Preview sampling period in seconds.
        step_height: Swing height of stepping feet.
        force_threshold: Force above which a contact is active.
        gravity: Gravity acceleration magnitude, from the system.
        mass: Total mass, from the system.
        schedule: Phase schedule, None until set_schedule is called.
        com_offset: CoM w.r.t. the base cached from the last whole-body reduction.
        foot_pattern_generator: Single-step swing generator.
        terrain_height_fn: Optional terrain_height(x, y) → z used to derive
            the vertical foothold shift of stepping feet.
    """

    def __init__(
        self,
        system: FloatingBaseSystem,
        config: Optional[PreviewLocomotionConfig] = None,
        foot_pattern_generator: Optional[FootPatternGenerator] = None,
    ):
        """Initialize the preview engine.

        Args:
            system: Floating-base system of the robot.
            config: Engine configuration. Uses PreviewLocomotionConfig defaults if None.
            foot_pattern_generator: Swing generator. Uses BezierSwingTrajectory if None.
        """
        if config is None:
            config = PreviewLocomotionConfig()

        self.sample_time = config.sample_time
        self.step_height = config.step_height
        self.force_threshold = config.force_threshold
        self.slip = SLIPModel(height=config.slip_height, stiffness=config.slip_stiffness)

        if foot_pattern_generator is None:
            foot_pattern_generator = BezierSwingTrajectory()
        self.foot_pattern_generator = foot_pattern_generator

        self.schedule: Optional[PreviewSchedule] = None
        self.terrain_height_fn: Optional[Callable[[float, float], float]] = None

        self.reset(system)

    # =========================================================================
    # Configuration
    # =========================================================================

    def reset(self, system: FloatingBaseSystem):
        """Set the floating-base system and read its physical constants."""
        self.system = system
        self.gravity = system.get_gravity_acceleration()
        self.mass = system.get_total_mass()
        if self.mass <= 0:
            raise ValueError(f"The floating-base system must have positive mass, got {self.mass}")

        self.com_offset = np.asarray(system.get_floating_base_com(), dtype=float)
        logger.debug(
            "Preview engine reset: mass=%.3f kg, gravity=%.3f m/s^2", self.mass, self.gravity
        )

    def set_sample_time(self, sample_time: float):
        if sample_time <= 0:
            raise ValueError(f"sample_time must be positive, got {sample_time}")
        self.sample_time = sample_time

    def set_model(self, model: SLIPModel):
        self.slip = model

    def set_step_height(self, step_height: float):
        if step_height < 0:
            raise ValueError(f"step_height must be non-negative, got {step_height}")
        self.step_height = step_height

    def set_force_threshold(self, force_threshold: float):
        if force_threshold < 0:
            raise ValueError(f"force_threshold must be non-negative, got {force_threshold}")
        self.force_threshold = force_threshold

    def set_terrain_height_fn(self, terrain_height_fn: Optional[Callable[[float, float], float]]):
        """Set the terrain height function used for vertical foothold shifts.

        Args:
            terrain_height_fn: Function terrain_height(x, y) → z, or None to
                keep the vertical foothold shift at zero.
        """
        self.terrain_height_fn = terrain_height_fn

    def set_schedule(self, schedule: Union[PreviewSchedule, Sequence[PreviewPhase]]):
        """Set the phase schedule. The number of phases is fixed from now on.

        The engine keeps its own copy, so later changes to the given schedule
        do not affect it.
        """
        if isinstance(schedule, PreviewSchedule):
            schedule = schedule.copy()
        else:
            schedule = PreviewSchedule(phases=[phase.copy() for phase in schedule])
        self.schedule = schedule
        logger.debug("Preview schedule set with %d phases", len(schedule))

    def clone(self) -> "PreviewLocomotion":
        """Create an engine for another worker.

        The schedule, SLIP model and floating-base system are shared by
        reference; the cached CoM offset and the swing generator are copied.
        """
        other = copy.copy(self)
        other.com_offset = self.com_offset.copy()
        other.foot_pattern_generator = copy.deepcopy(self.foot_pattern_generator)
        return other

    # =========================================================================
    # Accessors
    # =========================================================================

    def get_floating_base_system(self) -> FloatingBaseSystem:
        return self.system

    def get_sample_time(self) -> float:
        return self.sample_time

    def get_number_of_phases(self) -> int:
        """Return the number of scheduled phases, 0 if no schedule is set."""
        if self.schedule is None:
            return 0
        return len(self.schedule)

    def get_phase(self, phase: int) -> PreviewPhase:
        """Return a scheduled phase by index.

        Raises:
            ScheduleNotSetError: If no schedule has been set.
        """
        if self.schedule is None:
            raise ScheduleNotSetError("get_phase")
        return self.schedule[phase]

    # =========================================================================
    # Multi-phase preview
    # =========================================================================

    def multi_phase_preview(
        self,
        state: PreviewState,
        control: PreviewControl,
    ) -> PreviewTrajectory:
        """Compute the preview trajectory over the whole schedule.

        Each phase starts from the last state of the previous phase. STANCE
        phases move the phase's feet by their foothold shift; FLIGHT phases
        keep every foot fixed w.r.t. the ground.

        Args:
            state: Initial preview state.
            control: Preview control with one PreviewParams per phase.

        Returns:
            Concatenated preview trajectory. Empty if no schedule is set.

        Raises:
            ControlDimensionError: If the control does not have one set of
                parameters per phase.
            KeyError: If a stepping foot has no foothold shift.
        """
        if self.schedule is None:
            logger.error("There is not defined the preview schedule, skipping the preview")
            return []

        if len(control.params) != len(self.schedule):
            raise ControlDimensionError(
                len(self.schedule), len(control.params), "phase parameters"
            )

        trajectory: PreviewTrajectory = []
        for i, phase in enumerate(self.schedule):
            params = control.params[i]
            actual_state = state if i == 0 else trajectory[-1]

            if phase.phase_type is PhaseType.STANCE:
                phase_traj = self.stance_preview(actual_state, params)

                swing_shift = {}
                for foot_name in phase.feet:
                    if foot_name not in control.feet_shift:
                        raise KeyError(f"No foothold shift defined for foot '{foot_name}'")

                    foot_shift_2d = np.asarray(control.feet_shift[foot_name], dtype=float)
                    z_shift = self._vertical_shift(foot_name, foot_shift_2d, actual_state, phase_traj)
                    swing_shift[foot_name] = np.array([foot_shift_2d[0], foot_shift_2d[1], z_shift])

                self.add_swing_pattern(
                    phase_traj, actual_state, SwingParams(params.duration, swing_shift)
                )
            elif phase.phase_type is PhaseType.FLIGHT:
                phase_traj = self.flight_preview(actual_state, params)

                # No foothold targets during flight
                self.add_swing_pattern(phase_traj, actual_state, SwingParams(params.duration, {}))
            else:
                raise ValueError(f"Unknown phase type: {phase.phase_type}")

            trajectory.extend(phase_traj)

            # The next phase needs a starting state
            if not trajectory:
                trajectory.append(state.copy())

        return trajectory

    def stance_preview(self, state: PreviewState, params: PreviewParams) -> PreviewTrajectory:
        """Preview a stance phase with the spring-loaded inverted pendulum.

        Horizontal CoM motion (linear inverted pendulum with moving CoP):
            x(t) = β₁ e^{ωt} + β₂ e^{-ωt} + (Δcop / T) t + cop₀
            β₁,₂ = (com₀ - cop₀) / 2 ± (v₀ T - Δcop) / (2 ω T)

        Vertical CoM motion (spring-mass with moving rest length):
            z(t) = d₁ cos(ω_v t) + d₂ sin(ω_v t) + (Δl / T) t + l₀ - g / ω_v²
            d₁ = z₀ - l₀ + g / ω_v²,  d₂ = ż₀ / ω_v - Δl / (ω_v T)

        Args:
            state: Initial preview state of the phase.
            params: Phase parameters.

        Returns:
            Samples every sample_time, the last one at the phase duration.
            Empty if the duration is shorter than the sample time.
        """
        times = self._sample_times(params.duration)
        if times.size == 0:
            return []

        duration = params.duration
        cop_shift = np.asarray(params.cop_shift, dtype=float)
        t = times[:, np.newaxis]

        # Coefficients of the pendulum response
        slip_omega = np.sqrt(self.gravity / self.slip.height)
        alpha = 2 * slip_omega * duration
        slip_hor_proj = (state.com_pos - state.cop)[:2]
        slip_hor_disp = state.com_vel[:2] * duration
        beta_1 = slip_hor_proj / 2 + (slip_hor_disp - cop_shift) / alpha
        beta_2 = slip_hor_proj / 2 - (slip_hor_disp - cop_shift) / alpha

        # Coefficients of the spring-mass response
        initial_length = np.linalg.norm(state.com_pos - state.cop)
        spring_omega = np.sqrt(self.slip.stiffness / self.mass)
        rest_offset = self.gravity / spring_omega**2
        d_1 = state.com_pos[2] - initial_length + rest_offset
        d_2 = state.com_vel[2] / spring_omega - params.length_shift / (spring_omega * duration)

        growth = np.exp(slip_omega * t)
        decay = np.exp(-slip_omega * t)
        com_pos_xy = beta_1 * growth + beta_2 * decay + (cop_shift / duration) * t + state.cop[:2]
        com_vel_xy = slip_omega * (beta_1 * growth - beta_2 * decay) + cop_shift / duration
        com_acc_xy = slip_omega**2 * (beta_1 * growth + beta_2 * decay)

        cos_t = np.cos(spring_omega * times)
        sin_t = np.sin(spring_omega * times)
        length_rate = params.length_shift / duration
        com_pos_z = d_1 * cos_t + d_2 * sin_t + length_rate * times + initial_length - rest_offset
        com_vel_z = spring_omega * (-d_1 * sin_t + d_2 * cos_t) + length_rate
        com_acc_z = -spring_omega**2 * (d_1 * cos_t + d_2 * sin_t)

        cop_shift_3d = np.array([cop_shift[0], cop_shift[1], 0.0])

        trajectory: PreviewTrajectory = [None] * times.size
        for k, time in enumerate(times):
            trajectory[k] = PreviewState(
                time=state.time + time,
                com_pos=np.array([com_pos_xy[k, 0], com_pos_xy[k, 1], com_pos_z[k]]),
                com_vel=np.array([com_vel_xy[k, 0], com_vel_xy[k, 1], com_vel_z[k]]),
                com_acc=np.array([com_acc_xy[k, 0], com_acc_xy[k, 1], com_acc_z[k]]),
                head_pos=state.head_pos + state.head_vel * time + 0.5 * params.head_acc * time**2,
                head_vel=state.head_vel + params.head_acc * time,
                head_acc=params.head_acc,
                cop=state.cop + (time / duration) * cop_shift_3d,
            )

        return trajectory

    def flight_preview(self, state: PreviewState, params: PreviewParams) -> PreviewTrajectory:
        """Preview a flight phase with projectile motion.

        The angular momentum is conserved, so the heading rate stays constant
        and any commanded heading acceleration is ignored.

        Args:
            state: Initial preview state of the phase.
            params: Phase parameters; only the duration is used.

        Returns:
            Samples every sample_time, the last one at the phase duration.
            Empty if the duration is shorter than the sample time.
        """
        times = self._sample_times(params.duration)
        if times.size == 0:
            return []

        gravity_vec = np.array([0.0, 0.0, -self.gravity])

        trajectory: PreviewTrajectory = [None] * times.size
        for k, time in enumerate(times):
            trajectory[k] = PreviewState(
                time=state.time + time,
                com_pos=state.com_pos + state.com_vel * time + 0.5 * gravity_vec * time**2,
                com_vel=state.com_vel + gravity_vec * time,
                com_acc=gravity_vec.copy(),
                head_pos=state.head_pos + state.head_vel * time,
                head_vel=state.head_vel,
                head_acc=0.0,
                cop=state.cop.copy(),
            )

        return trajectory

    def add_swing_pattern(
        self,
        trajectory: PreviewTrajectory,
        state: PreviewState,
        params: SwingParams,
    ) -> PreviewTrajectory:
        """Add the feet motion to a phase trajectory, in place.

        Feet with a shift in params follow a swing from their current position
        to current position + shift. Feet without a shift stay on the ground:
        their CoM-relative position moves opposite to the base, with zero
        velocity and acceleration.

        Args:
            trajectory: Phase trajectory with the CoM motion already computed.
            state: Initial preview state of the phase.
            params: Phase duration and foot shifts.

        Returns:
            The same trajectory, for convenience.
        """
        num_samples = min(self._num_samples(params.duration), len(trajectory))
        if num_samples == 0:
            return trajectory

        end_time = state.time + params.duration
        times = np.minimum(state.time + self.sample_time * np.arange(1, num_samples + 1), end_time)

        # Base positions for computing the planted feet w.r.t. the base
        actual_base_pos = trajectory[0].com_pos - self.com_offset
        step_params = StepParameters(duration=params.duration, step_height=self.step_height)

        for name, foot_pos in state.foot_pos.items():
            actual_pos = np.asarray(foot_pos, dtype=float)

            if name in params.feet_shift:
                target_pos = actual_pos + np.asarray(params.feet_shift[name], dtype=float)
                self.foot_pattern_generator.set_parameters(
                    state.time, actual_pos, target_pos, step_params
                )

                for k in range(num_samples):
                    pos, vel, acc = self.foot_pattern_generator.generate_trajectory(times[k])
                    trajectory[k].foot_pos[name] = pos
                    trajectory[k].foot_vel[name] = vel
                    trajectory[k].foot_acc[name] = acc
            else:
                for k in range(num_samples):
                    base_pos = trajectory[k].com_pos - self.com_offset
                    trajectory[k].foot_pos[name] = actual_pos - (base_pos - actual_base_pos)
                    trajectory[k].foot_vel[name] = np.zeros(3)
                    trajectory[k].foot_acc[name] = np.zeros(3)

        return trajectory

    # =========================================================================
    # Decision vector
    # =========================================================================

    def get_params_dimension(self, phase: int) -> int:
        """Return the number of decision variables of a phase, 0 without schedule."""
        if self.schedule is None:
            logger.error("There is not defined the preview schedule")
            return 0
        return PARAMS_DIMENSION[self.schedule[phase].phase_type]

    def get_control_dimension(self) -> int:
        """Return the decision vector dimension for the current schedule.

        The dimension is the sum of the phase widths (STANCE = 5, FLIGHT = 1)
        plus two horizontal shift components per foot. Returns 0 if no
        schedule is set.
        """
        if self.schedule is None:
            logger.error("There is not defined the preview schedule")
            return 0

        control_dim = sum(self.get_params_dimension(k) for k in range(len(self.schedule)))
        control_dim += 2 * self.system.get_number_of_end_effectors(FOOT)

        return control_dim

    def to_preview_control(self, generalized_control: np.ndarray) -> PreviewControl:
        """Convert a decision vector into a structured preview control.

        Args:
            generalized_control: Decision vector, shape (get_control_dimension(),).

        Returns:
            PreviewControl with one PreviewParams per phase and one foothold
            shift per foot.

        Raises:
            ControlDimensionError: If the vector length is inconsistent with
                the schedule.
        """
        generalized_control = np.asarray(generalized_control, dtype=float).reshape(-1)

        if self.schedule is None:
            logger.error("There is not defined the preview schedule")
            return PreviewControl()

        control_dim = self.get_control_dimension()
        if generalized_control.size != control_dim:
            raise ControlDimensionError(control_dim, generalized_control.size)

        preview_control = PreviewControl()

        actual_idx = 0
        for k, phase in enumerate(self.schedule):
            params_dim = self.get_params_dimension(k)
            decision_params = generalized_control[actual_idx:actual_idx + params_dim]

            if phase.phase_type is PhaseType.STANCE:
                params = PreviewParams(
                    duration=float(decision_params[0]),
                    cop_shift=decision_params[1:3].copy(),
                    length_shift=float(decision_params[3]),
                    head_acc=float(decision_params[4]),
                )
            else:
                params = PreviewParams(duration=float(decision_params[0]))

            preview_control.params.append(params)
            actual_idx += params_dim

        for foot_name in self.system.get_end_effector_names(FOOT):
            preview_control.feet_shift[foot_name] = generalized_control[actual_idx:actual_idx + 2].copy()
            actual_idx += 2

        return preview_control

    def from_preview_control(self, preview_control: PreviewControl) -> np.ndarray:
        """Convert a structured preview control into a decision vector.

        Exact inverse of to_preview_control.

        Raises:
            ControlDimensionError: If the control does not have one set of
                parameters per phase.
            KeyError: If a foot has no foothold shift.
        """
        if self.schedule is None:
            logger.error("There is not defined the preview schedule")
            return np.zeros(0)

        if len(preview_control.params) != len(self.schedule):
            raise ControlDimensionError(
                len(self.schedule), len(preview_control.params), "phase parameters"
            )

        generalized_control = np.zeros(self.get_control_dimension())

        actual_idx = 0
        for params, phase in zip(preview_control.params, self.schedule):
            generalized_control[actual_idx] = params.duration
            actual_idx += 1

            if phase.phase_type is PhaseType.STANCE:
                generalized_control[actual_idx:actual_idx + 2] = params.cop_shift[:2]
                actual_idx += 2

                generalized_control[actual_idx] = params.length_shift
                actual_idx += 1

                generalized_control[actual_idx] = params.head_acc
                actual_idx += 1

        for foot_name in self.system.get_end_effector_names(FOOT):
            if foot_name not in preview_control.feet_shift:
                raise KeyError(f"No foothold shift defined for foot '{foot_name}'")
            generalized_control[actual_idx:actual_idx + 2] = np.asarray(
                preview_control.feet_shift[foot_name], dtype=float
            )[:2]
            actual_idx += 2

        return generalized_control

    # =========================================================================
    # Whole-body conversions
    # =========================================================================

    def to_whole_body_state(self, preview_state: PreviewState) -> WholeBodyState:
        """Lift a preview state into a whole-body state.

        The joint states are unknown to the preview model, so the joint
        contribution to the CoM is neglected and the joint vectors are zero.
        """
        joint_dof = self.system.get_joint_dof()
        full_state = WholeBodyState.zeros(joint_dof)
        full_state.time = preview_state.time

        full_state.base_pos[LX:LZ + 1] = preview_state.com_pos - self.com_offset
        full_state.base_vel[LX:LZ + 1] = preview_state.com_vel
        full_state.base_acc[LX:LZ + 1] = preview_state.com_acc

        full_state.base_pos[AZ] = preview_state.head_pos
        full_state.base_vel[AZ] = preview_state.head_vel
        full_state.base_acc[AZ] = preview_state.head_acc

        # Contacts w.r.t. the base frame
        full_state.contact_pos = {
            name: np.asarray(pos, dtype=float) + self.com_offset
            for name, pos in preview_state.foot_pos.items()
        }
        full_state.contact_vel = {
            name: np.array(vel, dtype=float) for name, vel in preview_state.foot_vel.items()
        }
        full_state.contact_acc = {
            name: np.array(acc, dtype=float) for name, acc in preview_state.foot_acc.items()
        }

        return full_state

    def from_whole_body_state(self, full_state: WholeBodyState) -> PreviewState:
        """Reduce a whole-body state into a preview state.

        Updates the cached CoM offset w.r.t. the base from the joint positions.
        The CoM acceleration neglects the joint accelerations.
        """
        preview_state = PreviewState(time=full_state.time)

        self.com_offset = np.asarray(
            self.system.get_system_com(np.zeros(6), full_state.joint_pos), dtype=float
        )
        preview_state.com_pos = np.asarray(
            self.system.get_system_com(full_state.base_pos, full_state.joint_pos), dtype=float
        )
        preview_state.com_vel = np.asarray(
            self.system.get_system_com_rate(
                full_state.base_pos,
                full_state.joint_pos,
                full_state.base_vel,
                full_state.joint_vel,
            ),
            dtype=float,
        )
        preview_state.com_acc = np.array(full_state.base_acc[LX:LZ + 1], dtype=float)

        preview_state.head_pos = float(full_state.base_pos[AZ])
        preview_state.head_vel = float(full_state.base_vel[AZ])
        preview_state.head_acc = float(full_state.base_acc[AZ])

        # CoP in the world frame
        base_translation = full_state.base_pos[LX:LZ + 1]
        base_rotation = euler_to_rotation_matrix(angular_part(full_state.base_pos))
        cop_wrt_base = self.system.compute_center_of_pressure(
            full_state.contact_eff,
            full_state.contact_pos,
            self.system.get_end_effector_names(),
        )
        preview_state.cop = base_translation + base_rotation @ cop_wrt_base

        # Support region from the active contacts, w.r.t. the CoM
        active_contacts = self.system.get_active_contacts(
            full_state.contact_eff, self.force_threshold
        )
        preview_state.support_region = [
            np.asarray(full_state.contact_pos[name], dtype=float) - self.com_offset
            for name in active_contacts
            if name in full_state.contact_pos
        ]

        preview_state.foot_pos = {
            name: np.asarray(pos, dtype=float) - self.com_offset
            for name, pos in full_state.contact_pos.items()
        }
        preview_state.foot_vel = {
            name: np.array(vel, dtype=float) for name, vel in full_state.contact_vel.items()
        }
        preview_state.foot_acc = {
            name: np.array(acc, dtype=float) for name, acc in full_state.contact_acc.items()
        }

        return preview_state

    def to_whole_body_trajectory(self, preview_traj: PreviewTrajectory) -> WholeBodyTrajectory:
        """Lift every state of a preview trajectory, preserving order and length."""
        return [self.to_whole_body_state(preview_state) for preview_state in preview_traj]

    # =========================================================================
    # Helpers
    # =========================================================================

    def _num_samples(self, duration: float) -> int:
        """Number of samples of a phase, 0 if shorter than the sample time."""
        if duration < self.sample_time:
            logger.debug(
                "Phase duration %.6f s is shorter than the sample time %.6f s",
                duration,
                self.sample_time,
            )
            return 0
        return int(np.ceil(duration / self.sample_time - _SAMPLE_TOLERANCE))

    def _sample_times(self, duration: float) -> np.ndarray:
        """Elapsed sample times of a phase, the last one clamped to the duration."""
        num_samples = self._num_samples(duration)
        return np.minimum(self.sample_time * np.arange(1, num_samples + 1), duration)

    def _vertical_shift(
        self,
        foot_name: str,
        foot_shift_2d: np.ndarray,
        state: PreviewState,
        phase_traj: PreviewTrajectory,
    ) -> float:
        """Vertical foothold shift so that the foot lands on the terrain.

        The swing target is CoM-relative, so the landing point is estimated
        from the terminal CoM of the phase plus the current CoM-relative foot
        position and the horizontal shift. The returned shift moves that
        landing height onto terrain_height(x, y). Zero unless a terrain height
        function is set.
        """
        if self.terrain_height_fn is None:
            return 0.0

        foot_pos = np.asarray(state.foot_pos.get(foot_name, np.zeros(3)), dtype=float)
        terminal_com = phase_traj[-1].com_pos if phase_traj else state.com_pos

        foothold = terminal_com + foot_pos
        foothold[:2] += foot_shift_2d[:2]

        terrain_height = float(self.terrain_height_fn(foothold[0], foothold[1]))
        return terrain_height - foothold[2]
