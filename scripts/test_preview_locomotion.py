#!/usr/bin/env python3
# Copyright (c) 2022-2026, The Isaac Lab Project Developers.
# All rights reserved.
#
# SPDX-License-Identifier: BSD-3-Clause

"""Tests for the multi-phase preview engine.

Covers the stance (SLIP) and flight (ballistic) simulators, the swing pattern
composer, the multi-phase driver and the decision vector conversions, using a
lumped-mass quadruped.

Usage:
    pytest scripts/test_preview_locomotion.py
"""

import numpy as np
import pytest

from preview_locomotion import (
    FOOT,
    ControlDimensionError,
    LumpedMassSystem,
    PhaseType,
    PreviewControl,
    PreviewLocomotion,
    PreviewLocomotionConfig,
    PreviewParams,
    PreviewPhase,
    PreviewSchedule,
    PreviewState,
    ScheduleNotSetError,
    SLIPModel,
    SwingParams,
)

FOOT_NAMES = ["LF", "RF", "LH", "RH"]
MASS = 20.0
GRAVITY = 9.81


# =============================================================================
# Helpers
# =============================================================================

def make_system(com_offset=(0.02, 0.0, 0.01)) -> LumpedMassSystem:
    return LumpedMassSystem(
        mass=MASS,
        end_effectors={name: FOOT for name in FOOT_NAMES},
        com_offset=np.array(com_offset),
        gravity=GRAVITY,
    )


def make_engine(sample_time: float = 0.01, **kwargs) -> PreviewLocomotion:
    config = PreviewLocomotionConfig(sample_time=sample_time, **kwargs)
    return PreviewLocomotion(make_system(), config=config)


def make_state() -> PreviewState:
    return PreviewState(
        time=0.0,
        com_pos=np.array([0.0, 0.0, 0.45]),
        com_vel=np.array([0.2, 0.05, 0.0]),
        cop=np.array([0.01, 0.0, 0.0]),
        foot_pos={
            "LF": np.array([0.3, 0.2, -0.45]),
            "RF": np.array([0.3, -0.2, -0.45]),
            "LH": np.array([-0.3, 0.2, -0.45]),
            "RH": np.array([-0.3, -0.2, -0.45]),
        },
    )


def zero_shifts():
    return {name: np.zeros(2) for name in FOOT_NAMES}


def world_foot(sample: PreviewState, name: str, com_offset: np.ndarray) -> np.ndarray:
    """Foot position plus base position, constant while the foot is planted."""
    return sample.foot_pos[name] + (sample.com_pos - com_offset)


# =============================================================================
# Stance phase
# =============================================================================

def test_stance_vertical_matches_closed_form():
    engine = make_engine(sample_time=0.01)
    state = PreviewState(com_pos=np.array([0.0, 0.0, 0.45]))
    params = PreviewParams(duration=0.3)

    trajectory = engine.stance_preview(state, params)
    assert len(trajectory) == 30

    spring_omega = np.sqrt(engine.slip.stiffness / MASS)
    rest_offset = GRAVITY / spring_omega**2
    initial_length = 0.45
    d_1 = 0.45 - initial_length + rest_offset
    expected_z = d_1 * np.cos(spring_omega * 0.3) + initial_length - rest_offset

    assert trajectory[-1].time == pytest.approx(0.3)
    assert trajectory[-1].com_pos[2] == pytest.approx(expected_z, abs=1e-12)

    # Balanced over the CoP the horizontal motion stays at rest
    np.testing.assert_allclose(trajectory[-1].com_pos[:2], [0.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(trajectory[-1].com_vel[:2], [0.0, 0.0], atol=1e-12)


def test_stance_velocity_is_position_derivative():
    engine = make_engine(sample_time=0.001)
    state = make_state()
    params = PreviewParams(
        duration=0.2, cop_shift=np.array([0.05, -0.02]), length_shift=0.02, head_acc=0.5
    )

    trajectory = engine.stance_preview(state, params)
    positions = np.array([s.com_pos for s in trajectory])
    velocities = np.array([s.com_vel for s in trajectory])
    accelerations = np.array([s.com_acc for s in trajectory])

    dt = engine.get_sample_time()
    fd_velocities = (positions[2:] - positions[:-2]) / (2 * dt)
    fd_accelerations = (velocities[2:] - velocities[:-2]) / (2 * dt)

    np.testing.assert_allclose(velocities[1:-1], fd_velocities, atol=1e-4)
    np.testing.assert_allclose(accelerations[1:-1], fd_accelerations, atol=1e-2)


def test_stance_cop_and_heading():
    engine = make_engine(sample_time=0.01)
    state = make_state()
    state.head_pos = 0.1
    state.head_vel = 0.2
    params = PreviewParams(duration=0.5, cop_shift=np.array([0.1, 0.04]), head_acc=1.0)

    trajectory = engine.stance_preview(state, params)
    final = trajectory[-1]

    np.testing.assert_allclose(final.cop, state.cop + np.array([0.1, 0.04, 0.0]), atol=1e-12)
    assert final.head_pos == pytest.approx(0.1 + 0.2 * 0.5 + 0.5 * 1.0 * 0.5**2)
    assert final.head_vel == pytest.approx(0.2 + 1.0 * 0.5)
    assert final.head_acc == pytest.approx(1.0)


def test_stance_sample_count():
    engine = make_engine(sample_time=0.01)
    state = make_state()

    assert len(engine.stance_preview(state, PreviewParams(duration=0.5))) == 50
    assert len(engine.stance_preview(state, PreviewParams(duration=0.005))) == 0

    # The last sample lies at the phase duration
    trajectory = engine.stance_preview(state, PreviewParams(duration=0.105))
    assert len(trajectory) == 11
    assert trajectory[-1].time == pytest.approx(0.105)
    assert trajectory[0].time == pytest.approx(0.01)


# =============================================================================
# Flight phase
# =============================================================================

def test_flight_acceleration_is_gravity():
    engine = make_engine(sample_time=0.01)
    state = make_state()
    state.com_vel = np.array([0.5, 0.0, 1.0])
    state.head_vel = 0.3

    trajectory = engine.flight_preview(state, PreviewParams(duration=0.2, head_acc=5.0))
    assert len(trajectory) == 20

    for sample in trajectory:
        np.testing.assert_allclose(sample.com_acc, [0.0, 0.0, -GRAVITY])
        assert sample.head_acc == 0.0
        assert sample.head_vel == pytest.approx(0.3)
        np.testing.assert_allclose(sample.cop, state.cop)

    final = trajectory[-1]
    expected_pos = state.com_pos + state.com_vel * 0.2 + 0.5 * np.array([0.0, 0.0, -GRAVITY]) * 0.2**2
    np.testing.assert_allclose(final.com_pos, expected_pos, atol=1e-12)
    np.testing.assert_allclose(final.com_vel, [0.5, 0.0, 1.0 - GRAVITY * 0.2], atol=1e-12)
    assert final.head_pos == pytest.approx(0.3 * 0.2)


def test_flight_short_duration_is_empty():
    engine = make_engine(sample_time=0.01)
    assert engine.flight_preview(make_state(), PreviewParams(duration=0.001)) == []


# =============================================================================
# Swing pattern
# =============================================================================

def test_planted_feet_stay_fixed_in_world():
    engine = make_engine(sample_time=0.01)
    state = make_state()
    params = PreviewParams(duration=0.3, cop_shift=np.array([0.05, 0.0]))

    trajectory = engine.stance_preview(state, params)
    shift = {"LF": np.array([0.1, 0.0, 0.0]), "RH": np.array([0.1, 0.0, 0.0])}
    engine.add_swing_pattern(trajectory, state, SwingParams(0.3, shift))

    for name in ["RF", "LH"]:
        base_0 = trajectory[0].com_pos - engine.com_offset
        reference = trajectory[0].foot_pos[name] + base_0
        np.testing.assert_allclose(trajectory[0].foot_pos[name], state.foot_pos[name])

        for sample in trajectory:
            base = sample.com_pos - engine.com_offset
            np.testing.assert_allclose(sample.foot_pos[name] + base, reference, atol=1e-12)
            np.testing.assert_allclose(sample.foot_vel[name], np.zeros(3))
            np.testing.assert_allclose(sample.foot_acc[name], np.zeros(3))


def test_swing_feet_reach_their_target():
    engine = make_engine(sample_time=0.01, step_height=0.08)
    state = make_state()

    trajectory = engine.stance_preview(state, PreviewParams(duration=0.3))
    shift = {"LF": np.array([0.1, 0.02, 0.0])}
    engine.add_swing_pattern(trajectory, state, SwingParams(0.3, shift))

    final = trajectory[-1]
    np.testing.assert_allclose(final.foot_pos["LF"], state.foot_pos["LF"] + shift["LF"], atol=1e-9)
    np.testing.assert_allclose(final.foot_vel["LF"], np.zeros(3), atol=1e-9)

    heights = [sample.foot_pos["LF"][2] for sample in trajectory]
    assert max(heights) == pytest.approx(state.foot_pos["LF"][2] + 0.08, abs=1e-3)


# =============================================================================
# Multi-phase driver
# =============================================================================

def test_end_to_end_stance_scenario():
    engine = make_engine(sample_time=0.01)
    engine.set_schedule([PreviewPhase(PhaseType.STANCE, feet=FOOT_NAMES, duration=0.5)])

    assert engine.get_number_of_phases() == 1
    assert engine.get_control_dimension() == 13

    control = PreviewControl(params=[PreviewParams(duration=0.5)], feet_shift=zero_shifts())
    trajectory = engine.multi_phase_preview(make_state(), control)

    assert len(trajectory) == 50
    assert trajectory[-1].time == pytest.approx(0.5)

    with pytest.raises(ControlDimensionError) as excinfo:
        engine.to_preview_control(np.zeros(12))
    assert excinfo.value.expected == 13
    assert excinfo.value.actual == 12


def test_phases_are_chained():
    engine = make_engine(sample_time=0.01)
    engine.set_schedule([
        PreviewPhase(PhaseType.STANCE, feet=["RF", "LH"], duration=0.2),
        PreviewPhase(PhaseType.FLIGHT, duration=0.1),
        PreviewPhase(PhaseType.STANCE, feet=["LF", "RH"], duration=0.2),
    ])
    control = PreviewControl(
        params=[
            PreviewParams(duration=0.2, cop_shift=np.array([0.05, 0.0])),
            PreviewParams(duration=0.1),
            PreviewParams(duration=0.2, length_shift=0.01),
        ],
        feet_shift={name: np.array([0.08, 0.0]) for name in FOOT_NAMES},
    )

    state = make_state()
    trajectory = engine.multi_phase_preview(state, control)
    assert len(trajectory) == 50

    times = np.array([sample.time for sample in trajectory])
    np.testing.assert_allclose(np.diff(times), 0.01, atol=1e-9)
    assert times[-1] == pytest.approx(0.5)

    # Flight samples follow the ballistic law
    for sample in trajectory[20:30]:
        np.testing.assert_allclose(sample.com_acc, [0.0, 0.0, -GRAVITY])

    # Every foot is described in every sample
    for sample in trajectory:
        assert set(sample.foot_pos) == set(FOOT_NAMES)

    com_offset = engine.com_offset
    shift = np.array([0.08, 0.0, 0.0])

    first_stance = trajectory[:20]
    flight = trajectory[20:30]
    second_stance = trajectory[30:]

    # Feet that do not step stay fixed in the world during the first stance
    for name in ["LF", "RH"]:
        reference = world_foot(first_stance[0], name, com_offset)
        for sample in first_stance:
            np.testing.assert_allclose(world_foot(sample, name, com_offset), reference, atol=1e-12)
            np.testing.assert_allclose(sample.foot_vel[name], np.zeros(3))

    # Stepping feet reach their foothold at the end of the phase
    for name in ["RF", "LH"]:
        np.testing.assert_allclose(first_stance[-1].foot_pos[name], state.foot_pos[name] + shift, atol=1e-9)
        np.testing.assert_allclose(first_stance[-1].foot_vel[name], np.zeros(3), atol=1e-9)

    # No foot moves w.r.t. the ground during flight
    for name in FOOT_NAMES:
        reference = world_foot(flight[0], name, com_offset)
        for sample in flight:
            np.testing.assert_allclose(world_foot(sample, name, com_offset), reference, atol=1e-12)
            np.testing.assert_allclose(sample.foot_acc[name], np.zeros(3))

    # The second stance starts from the last flight sample
    for name in ["LF", "RH"]:
        np.testing.assert_allclose(
            second_stance[-1].foot_pos[name], flight[-1].foot_pos[name] + shift, atol=1e-9
        )
    for name in ["RF", "LH"]:
        reference = world_foot(second_stance[0], name, com_offset)
        for sample in second_stance:
            np.testing.assert_allclose(world_foot(sample, name, com_offset), reference, atol=1e-12)


def test_empty_phase_keeps_initial_state():
    engine = make_engine(sample_time=0.01)
    engine.set_schedule([PreviewPhase(PhaseType.FLIGHT, duration=0.005)])

    state = make_state()
    trajectory = engine.multi_phase_preview(state, PreviewControl(params=[PreviewParams(duration=0.005)]))

    assert len(trajectory) == 1
    assert trajectory[0] is not state
    assert trajectory[0].time == state.time
    np.testing.assert_allclose(trajectory[0].com_pos, state.com_pos)
    np.testing.assert_allclose(trajectory[0].foot_pos["LF"], state.foot_pos["LF"])

    # Editing the returned trajectory leaves the input untouched
    trajectory[0].com_pos[2] = 1.0
    trajectory[0].foot_pos["LF"][0] = 1.0
    assert state.com_pos[2] == pytest.approx(0.45)
    assert state.foot_pos["LF"][0] == pytest.approx(0.3)


def test_schedule_changes_after_setting_are_ignored():
    engine = make_engine(sample_time=0.01)
    schedule = PreviewSchedule(phases=[PreviewPhase(PhaseType.STANCE, feet=list(FOOT_NAMES), duration=0.5)])
    engine.set_schedule(schedule)
    other = engine.clone()

    schedule.append_phase(PreviewPhase(PhaseType.FLIGHT, duration=0.1))
    schedule[0].feet.clear()
    schedule[0].duration = 1.0

    for preview in [engine, other]:
        assert preview.get_number_of_phases() == 1
        assert preview.get_control_dimension() == 13
        assert preview.get_phase(0).feet == FOOT_NAMES
        assert preview.get_phase(0).duration == 0.5

    phases = [PreviewPhase(PhaseType.STANCE, duration=0.2)]
    engine.set_schedule(phases)
    phases.append(PreviewPhase(PhaseType.FLIGHT, duration=0.1))
    phases[0].duration = 0.4
    assert engine.get_number_of_phases() == 1
    assert engine.get_phase(0).duration == 0.2


def test_terrain_height_sets_vertical_foothold():
    engine = make_engine(sample_time=0.01)
    engine.set_schedule([PreviewPhase(PhaseType.STANCE, feet=["LF"], duration=0.3)])
    engine.set_terrain_height_fn(lambda x, y: 0.05)

    control = PreviewControl(params=[PreviewParams(duration=0.3)], feet_shift=zero_shifts())
    state = make_state()
    trajectory = engine.multi_phase_preview(state, control)

    final = trajectory[-1]
    assert final.com_pos[2] + final.foot_pos["LF"][2] == pytest.approx(0.05)


def test_missing_foot_shift_raises():
    engine = make_engine(sample_time=0.01)
    engine.set_schedule([PreviewPhase(PhaseType.STANCE, feet=["LF"], duration=0.1)])

    with pytest.raises(KeyError):
        engine.multi_phase_preview(make_state(), PreviewControl(params=[PreviewParams(duration=0.1)]))


def test_control_phase_mismatch_raises():
    engine = make_engine(sample_time=0.01)
    engine.set_schedule([PreviewPhase(PhaseType.STANCE, duration=0.1)] * 2)

    control = PreviewControl(params=[PreviewParams(duration=0.1)], feet_shift=zero_shifts())
    with pytest.raises(ControlDimensionError):
        engine.multi_phase_preview(make_state(), control)
    with pytest.raises(ControlDimensionError):
        engine.from_preview_control(control)


def test_missing_schedule_is_a_no_op(caplog):
    engine = make_engine()

    assert engine.get_number_of_phases() == 0
    assert engine.get_control_dimension() == 0
    assert engine.multi_phase_preview(make_state(), PreviewControl()) == []
    assert "preview schedule" in caplog.text

    with pytest.raises(ScheduleNotSetError):
        engine.get_phase(0)


# =============================================================================
# Decision vector
# =============================================================================

def test_control_dimension():
    engine = make_engine()
    engine.set_schedule(PreviewSchedule(phases=[
        PreviewPhase(PhaseType.STANCE, duration=0.1),
        PreviewPhase(PhaseType.FLIGHT, duration=0.1),
    ]))

    assert engine.get_params_dimension(0) == 5
    assert engine.get_params_dimension(1) == 1
    assert engine.get_control_dimension() == 14


def test_control_vector_round_trip():
    engine = make_engine()
    engine.set_schedule([
        PreviewPhase(PhaseType.STANCE, feet=["LF"], duration=0.1),
        PreviewPhase(PhaseType.FLIGHT, duration=0.1),
        PreviewPhase(PhaseType.STANCE, feet=["RH"], duration=0.1),
    ])

    rng = np.random.default_rng(0)
    vector = rng.uniform(-1.0, 1.0, engine.get_control_dimension())

    control = engine.to_preview_control(vector)
    assert len(control.params) == 3
    assert list(control.feet_shift) == FOOT_NAMES

    np.testing.assert_allclose(engine.from_preview_control(control), vector)


def test_control_vector_layout():
    engine = make_engine()
    engine.set_schedule([
        PreviewPhase(PhaseType.STANCE, duration=0.1),
        PreviewPhase(PhaseType.FLIGHT, duration=0.1),
    ])

    vector = np.arange(14, dtype=float)
    control = engine.to_preview_control(vector)

    stance, flight = control.params
    assert stance.duration == 0.0
    np.testing.assert_allclose(stance.cop_shift, [1.0, 2.0])
    assert stance.length_shift == 3.0
    assert stance.head_acc == 4.0

    assert flight.duration == 5.0
    np.testing.assert_allclose(flight.cop_shift, [0.0, 0.0])
    assert flight.length_shift == 0.0
    assert flight.head_acc == 0.0

    np.testing.assert_allclose(control.feet_shift["LF"], [6.0, 7.0])
    np.testing.assert_allclose(control.feet_shift["RH"], [12.0, 13.0])


# =============================================================================
# Configuration
# =============================================================================

def test_configuration_validation():
    engine = make_engine()

    with pytest.raises(ValueError):
        engine.set_sample_time(0.0)
    with pytest.raises(ValueError):
        engine.set_step_height(-0.1)
    with pytest.raises(ValueError):
        PreviewLocomotionConfig(slip_stiffness=0.0)
    with pytest.raises(ValueError):
        PreviewLocomotionConfig.from_dict({"sample_period": 0.01})

    config = PreviewLocomotionConfig.from_dict({"sample_time": 0.005, "slip_height": 0.4})
    assert config.to_dict()["slip_height"] == 0.4

    system = make_system()
    engine = PreviewLocomotion(system, config=config)
    assert engine.get_floating_base_system() is system
    assert engine.get_sample_time() == 0.005
    assert engine.slip.height == 0.4
    assert engine.mass == MASS
    assert engine.gravity == GRAVITY

    engine.set_model(SLIPModel(height=0.6, stiffness=2000.0))
    engine.set_force_threshold(5.0)
    assert engine.slip.stiffness == 2000.0
    assert engine.force_threshold == 5.0

    with pytest.raises(ValueError):
        SLIPModel(height=-0.5)

    other_system = LumpedMassSystem(mass=40.0, end_effectors={"LF": FOOT}, gravity=9.0)
    engine.reset(other_system)
    assert engine.mass == 40.0
    assert engine.gravity == 9.0
    assert engine.get_floating_base_system() is other_system


def test_clone_is_independent():
    engine = make_engine()
    engine.set_schedule([PreviewPhase(PhaseType.STANCE, duration=0.1)])

    other = engine.clone()
    other.com_offset[0] = 1.0

    assert engine.com_offset[0] == pytest.approx(0.02)
    assert other.schedule is engine.schedule
    assert other.foot_pattern_generator is not engine.foot_pattern_generator
    assert other.get_control_dimension() == engine.get_control_dimension()
