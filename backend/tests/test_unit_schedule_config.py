"""Tests for schedule config parsing and expected-day baselines."""

import uuid
from datetime import date

import pytest

from choreinsights.services.presets import ROTATION_PRESETS, get_preset
from choreinsights.services.schedule_config import (
    DynamicRotation,
    FixedRotation,
    NoSchedule,
    expected_days_for_week,
    expected_days_per_week,
    parse_schedule_config,
    uses_assignment_baseline,
)

CHILD_A = uuid.UUID("00000000-0000-0000-0000-00000000000a")
CHILD_B = uuid.UUID("00000000-0000-0000-0000-00000000000b")
STRANGER = uuid.UUID("00000000-0000-0000-0000-0000000000ff")


def _rotation(preset_key: str) -> dict:
    return {
        "rotation": {
            "active_preset": preset_key,
            "start_date": "2026-01-04",
            "child_slots": [
                {"slot": "Child A", "profile_id": str(CHILD_A)},
                {"slot": "Child B", "profile_id": str(CHILD_B)},
            ],
            "assignment_mode": "rotation",
        }
    }


class TestParseScheduleConfig:
    @pytest.mark.parametrize("raw", [None, {}, {"rotation": None}, {"theme": "dark"}])
    def test_no_rotation_is_manual(self, raw):
        assert parse_schedule_config(raw) == NoSchedule()

    def test_fixed_rotation(self):
        config = parse_schedule_config(_rotation("weekend_warrior"))
        assert isinstance(config, FixedRotation)
        assert config.preset_key == "weekend_warrior"
        assert config.slot_map == {CHILD_A: "Child A", CHILD_B: "Child B"}
        assert set(config.weekly_pattern) == {"Child A", "Child B"}

    def test_dynamic_rotation(self):
        config = parse_schedule_config(_rotation("dynamic_daily"))
        assert isinstance(config, DynamicRotation)
        assert config.slot_map[CHILD_B] == "Child B"

    def test_unknown_preset_keeps_slots_without_pattern(self):
        config = parse_schedule_config(_rotation("does_not_exist"))
        assert isinstance(config, FixedRotation)
        assert config.weekly_pattern == {}
        assert config.slot_map[CHILD_A] == "Child A"

    def test_malformed_slots_are_skipped(self):
        raw = _rotation("daily_basics")
        raw["rotation"]["child_slots"].append({"slot": "Child C"})
        raw["rotation"]["child_slots"].append({"slot": "Child D", "profile_id": "nope"})
        config = parse_schedule_config(raw)
        assert config.slot_map == {CHILD_A: "Child A", CHILD_B: "Child B"}

    @pytest.mark.parametrize("raw", [["rotation"], "smart_rotation", 42])
    def test_settings_that_are_not_a_mapping_are_manual(self, raw):
        assert parse_schedule_config(raw) == NoSchedule()

    @pytest.mark.parametrize("rotation", ["smart_rotation", ["smart_rotation"], 7])
    def test_rotation_that_is_not_a_mapping_keeps_seven_days(self, rotation):
        config = parse_schedule_config({"rotation": rotation})
        assert config == FixedRotation(preset_key="")
        assert expected_days_per_week(config, CHILD_A) == 7

    @pytest.mark.parametrize("preset_key", [["weekend_warrior"], {"key": "x"}, None, 3])
    def test_unusable_preset_key_keeps_slots(self, preset_key):
        raw = _rotation("weekend_warrior")
        raw["rotation"]["active_preset"] = preset_key
        config = parse_schedule_config(raw)
        assert isinstance(config, FixedRotation)
        assert config.weekly_pattern == {}
        assert config.slot_map[CHILD_B] == "Child B"

    def test_child_slots_that_are_not_a_list_are_ignored(self):
        raw = _rotation("daily_basics")
        raw["rotation"]["child_slots"] = {"slot": "Child A", "profile_id": str(CHILD_A)}
        config = parse_schedule_config(raw)
        assert config.slot_map == {}

    def test_slot_missing_from_preset_gets_no_pattern(self):
        raw = _rotation("weekend_warrior")
        raw["rotation"]["child_slots"][1]["slot"] = "Child Q"
        config = parse_schedule_config(raw)
        assert set(config.weekly_pattern) == {"Child A"}
        assert expected_days_per_week(config, CHILD_B) == 7


class TestExpectedDaysPerWeek:
    def test_manual_is_seven(self):
        assert expected_days_per_week(NoSchedule(), CHILD_A) == 7
        assert expected_days_per_week(None, CHILD_A) == 7

    def test_dynamic_is_seven(self):
        assert expected_days_per_week(DynamicRotation("dynamic_daily"), CHILD_A) == 7

    def test_fixed_counts_days_with_chores(self):
        config = FixedRotation(
            preset_key="custom",
            slot_map={CHILD_A: "Child A"},
            weekly_pattern={
                "Child A": {
                    "mon": ["dishes"],
                    "tue": [],
                    "wed": ["trash"],
                    "thu": [],
                    "fri": ["dishes"],
                    "sat": [],
                    "sun": [],
                }
            },
        )
        assert expected_days_per_week(config, CHILD_A) == 3

    def test_fixed_child_without_slot_is_seven(self):
        config = parse_schedule_config(_rotation("weekend_warrior"))
        assert expected_days_per_week(config, STRANGER) == 7

    def test_fixed_slot_without_pattern_is_seven(self):
        config = FixedRotation(preset_key="custom", slot_map={CHILD_A: "Child Z"})
        assert expected_days_per_week(config, CHILD_A) == 7

    @pytest.mark.parametrize("preset_key", ["smart_rotation", "weekend_warrior", "large_family"])
    def test_builtin_presets_work_every_day(self, preset_key):
        config = parse_schedule_config(_rotation(preset_key))
        assert expected_days_per_week(config, CHILD_A) == 7
        assert expected_days_per_week(config, CHILD_B) == 7

    def test_unknown_variant_is_rejected(self):
        with pytest.raises(TypeError):
            expected_days_per_week("rotation", CHILD_A)


class TestAssignmentBaseline:
    def test_only_manual_families_use_assignments(self):
        assert uses_assignment_baseline(NoSchedule())
        assert uses_assignment_baseline(None)
        assert not uses_assignment_baseline(FixedRotation("weekend_warrior"))
        assert not uses_assignment_baseline(DynamicRotation("dynamic_daily"))

    def test_distinct_assigned_days_in_week(self):
        week_start = date(2026, 1, 25)
        assigned = [
            date(2026, 1, 26),
            date(2026, 1, 26),
            date(2026, 1, 28),
            date(2026, 2, 1),  # next week
            date(2026, 1, 24),  # previous week
        ]
        assert expected_days_for_week(7, assigned, week_start) == 2

    def test_week_without_assignments_falls_back_to_baseline(self):
        assert expected_days_for_week(7, [date(2026, 1, 5)], date(2026, 1, 25)) == 7


class TestPresets:
    def test_lookup(self):
        assert get_preset("daily_basics").name
        assert get_preset("missing") is None
        assert get_preset(None) is None
        assert get_preset(["daily_basics"]) is None

    def test_slots_follow_first_week_type(self):
        assert get_preset("large_family").slots == ["Child A", "Child B", "Child C", "Child D"]
        assert get_preset("dynamic_daily").slots == []

    def test_registry_keys_are_unique(self):
        keys = [p.key for p in ROTATION_PRESETS]
        assert len(keys) == len(set(keys))
