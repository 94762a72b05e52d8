#!/usr/bin/env python3
# Copyright (c) 2022-2026, The Isaac Lab Project Developers.
# All rights reserved.
#
# SPDX-License-Identifier: BSD-3-Clause

"""Tests for the gait scheduler.

Usage:
    pytest scripts/test_gait_scheduler.py
"""

import pytest

from preview_locomotion.gait import GaitScheduler, PhaseType


def test_available_gaits():
    gaits = GaitScheduler.get_available_gaits()
    for gait in ["trot", "walk", "pace", "bound", "pronk"]:
        assert gait in gaits
        assert GaitScheduler.get_gait_description(gait)

    with pytest.raises(ValueError):
        GaitScheduler.get_gait_description("gallop")


def test_trot_walking_schedule():
    scheduler = GaitScheduler()
    schedule = scheduler.generate("trot", step_duration=0.2, support_duration=0.05, num_cycles=2)

    # [S] G1 S G2 S G1 S G2 [S]
    assert len(schedule) == 9
    assert all(phase.is_stance for phase in schedule)
    assert schedule[0].feet == []
    assert schedule[1].feet == ["RF", "LH"]
    assert schedule[3].feet == ["LF", "RH"]
    assert schedule.total_duration == pytest.approx(4 * 0.2 + 5 * 0.05)


def test_trot_running_schedule():
    scheduler = GaitScheduler()
    schedule = scheduler.generate(
        "trot",
        step_duration=0.15,
        num_cycles=2,
        flight_duration=0.1,
        include_initial_support=False,
        include_final_support=False,
    )

    assert len(schedule) == 8
    phase_types = [phase.phase_type for phase in schedule]
    assert phase_types.count(PhaseType.FLIGHT) == 4
    assert phase_types[0] is PhaseType.STANCE
    assert phase_types[1] is PhaseType.FLIGHT


def test_walk_steps_one_foot_at_a_time():
    scheduler = GaitScheduler()
    schedule = scheduler.generate("walk", num_cycles=1, include_initial_support=False)

    stepping = [phase.feet for phase in schedule if phase.feet]
    assert stepping == [["RH"], ["RF"], ["LH"], ["LF"]]


def test_custom_foot_names():
    scheduler = GaitScheduler(["FL", "FR", "HL", "HR"])

    assert scheduler.get_step_group_for_gait("trot", 0) == ["FR", "HL"]
    assert scheduler.get_step_group_for_gait("bound", 1) == ["HL", "HR"]

    with pytest.raises(ValueError):
        scheduler.get_step_group_for_gait("trot", 2)

    with pytest.raises(ValueError):
        GaitScheduler(["LF", "RF"])


def test_standing_and_jump():
    scheduler = GaitScheduler()

    standing = scheduler.generate_standing(0.5)
    assert len(standing) == 1
    assert standing[0].is_stance and standing[0].feet == []

    jump = scheduler.generate_jump(flight_duration=0.2, takeoff_duration=0.1, landing_duration=0.1)
    assert [phase.phase_type for phase in jump] == [
        PhaseType.STANCE,
        PhaseType.FLIGHT,
        PhaseType.STANCE,
    ]
    assert jump[2].feet == ["LF", "RF", "LH", "RH"]


def test_unknown_gait():
    with pytest.raises(ValueError):
        GaitScheduler().generate("gallop")
