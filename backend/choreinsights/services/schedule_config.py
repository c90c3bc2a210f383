"""Family scheduling configuration and expected-activity baselines.

A family schedules chores in exactly one of three ways:

- ``NoSchedule``: parents assign chores by hand (or not at all).
- ``FixedRotation``: a preset maps each child slot to a fixed weekly pattern.
- ``DynamicRotation``: a preset hands out chores algorithmically each day.

The raw shape stored in ``Family.settings["rotation"]`` is::

    {
        "active_preset": "weekend_warrior",
        "start_date": "2026-01-04",
        "child_slots": [{"slot": "Child A", "profile_id": "<uuid>"}, ...],
        "assignment_mode": "rotation"
    }

Expected activity for manual families adapts to what was actually
scheduled: once a family records manual assignments, a child's expected
days for a given week are the distinct days that child had assignments
that week, and the static baseline only applies to weeks without any.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Iterable, Union

from choreinsights.services.presets import WeeklyPattern, get_preset

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7


@dataclass(frozen=True)
class NoSchedule:
    pass


@dataclass(frozen=True)
class FixedRotation:
    preset_key: str
    # profile_id -> slot name
    slot_map: dict[uuid.UUID, str] = field(default_factory=dict)
    # slot name -> day -> chore keys (first week type of the preset)
    weekly_pattern: dict[str, WeeklyPattern] = field(default_factory=dict)


@dataclass(frozen=True)
class DynamicRotation:
    preset_key: str
    slot_map: dict[uuid.UUID, str] = field(default_factory=dict)


ScheduleConfig = Union[NoSchedule, FixedRotation, DynamicRotation]


def _parse_slot_map(raw_slots: Any) -> dict[uuid.UUID, str]:
    slot_map: dict[uuid.UUID, str] = {}
    if not raw_slots:
        return slot_map
    if not isinstance(raw_slots, list):
        logger.warning("Ignoring child slots that are not a list: %r", raw_slots)
        return slot_map
    for entry in raw_slots:
        try:
            slot_map[uuid.UUID(str(entry["profile_id"]))] = str(entry["slot"])
        except (KeyError, TypeError, ValueError):
            logger.warning("Ignoring malformed child slot entry: %r", entry)
    return slot_map


def parse_schedule_config(family_settings: Any) -> ScheduleConfig:
    """Turn raw family settings into one ``ScheduleConfig`` variant.

    Malformed settings never raise. Settings that are not a mapping count
    as manual scheduling; a rotation that cannot be read becomes a
    ``FixedRotation`` without a pattern, so every child keeps 7 days.
    """
    if not family_settings:
        return NoSchedule()
    if not isinstance(family_settings, dict):
        logger.warning("Ignoring family settings that are not a mapping: %r", family_settings)
        return NoSchedule()

    rotation = family_settings.get("rotation")
    if not rotation:
        return NoSchedule()
    if not isinstance(rotation, dict):
        logger.warning("Ignoring rotation config that is not a mapping: %r", rotation)
        return FixedRotation(preset_key="")

    preset_key = rotation.get("active_preset")
    slot_map = _parse_slot_map(rotation.get("child_slots"))
    if not isinstance(preset_key, str):
        logger.warning("Rotation has no usable preset key: %r", preset_key)
        return FixedRotation(preset_key="", slot_map=slot_map)

    preset = get_preset(preset_key)
    if preset is None:
        # Still a structured rotation, just one we cannot read days from
        logger.warning("Rotation references unknown preset %r", preset_key)
        return FixedRotation(preset_key=preset_key, slot_map=slot_map)

    if preset.is_dynamic:
        return DynamicRotation(preset_key=preset.key, slot_map=slot_map)

    known_slots = set(preset.slots)
    weekly_pattern: dict[str, WeeklyPattern] = {}
    for slot in set(slot_map.values()):
        if slot not in known_slots:
            logger.warning("Preset %r has no slot %r", preset.key, slot)
            continue
        weekly_pattern[slot] = preset.pattern_for(slot)
    return FixedRotation(
        preset_key=preset.key, slot_map=slot_map, weekly_pattern=weekly_pattern,
    )


def expected_days_per_week(config: ScheduleConfig | None, child_id: uuid.UUID) -> int:
    """Baseline number of days per week *child_id* is expected to be active.

    Returns 7 unless a fixed rotation gives the child a slot with a weekly
    pattern, in which case the days with at least one chore are counted.
    """
    if config is None or isinstance(config, NoSchedule):
        return DAYS_PER_WEEK
    if isinstance(config, DynamicRotation):
        return DAYS_PER_WEEK
    if isinstance(config, FixedRotation):
        slot = config.slot_map.get(child_id)
        pattern = config.weekly_pattern.get(slot) if slot is not None else None
        if pattern is None:
            return DAYS_PER_WEEK
        return sum(1 for chores in pattern.values() if chores)
    raise TypeError(f"Unsupported schedule config: {config!r}")


def uses_assignment_baseline(config: ScheduleConfig | None) -> bool:
    """Only manual families derive weekly expectations from assignments."""
    return config is None or isinstance(config, NoSchedule)


def expected_days_for_week(
    baseline: int,
    assigned_dates: Iterable[date],
    week_start: date,
) -> int:
    """Expected active days for a manual family's child in one week.

    Distinct assigned dates inside ``[week_start, week_start + 7)``, or
    *baseline* when the child had no assignments that week.
    """
    week_end = week_start + timedelta(days=DAYS_PER_WEEK)
    assigned = {d for d in assigned_dates if week_start <= d < week_end}
    return len(assigned) or baseline
