"""Built-in chore rotation presets.

A preset's schedule maps ``week_type -> slot -> day -> [chore keys]``.
Families bind their children to slots ("Child A", "Child B", ...) in
their rotation config; the insights core only reads which days a slot has
work on.
"""

from __future__ import annotations

from dataclasses import dataclass, field

DAYS = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")

WeeklyPattern = dict[str, list[str]]
RotationSchedule = dict[str, dict[str, WeeklyPattern]]


@dataclass(frozen=True)
class RotationPreset:
    key: str
    name: str
    cycle_type: str  # daily | weekly | biweekly
    week_types: tuple[str, ...]
    min_children: int
    max_children: int
    schedule: RotationSchedule = field(default_factory=dict)
    is_dynamic: bool = False

    @property
    def slots(self) -> list[str]:
        """Slot names defined for the first week type."""
        return list(self.schedule.get(self.week_types[0], {}))

    def pattern_for(self, slot: str) -> WeeklyPattern | None:
        """Weekly pattern of *slot* in the first week type, if any."""
        return self.schedule.get(self.week_types[0], {}).get(slot)


def _same_every_day(chores: list[str]) -> WeeklyPattern:
    return {day: list(chores) for day in DAYS}


SMART_ROTATION = RotationPreset(
    key="smart_rotation",
    name="Smart Family Rotation",
    cycle_type="biweekly",
    week_types=("cleaning", "non-cleaning"),
    min_children=2,
    max_children=2,
    schedule={
        "cleaning": {
            "Child A": {
                "mon": ["vacuum_living", "take_trash"],
                "tue": ["dust_surfaces"],
                "wed": ["mop_kitchen"],
                "thu": ["tidy_room"],
                "fri": ["vacuum_bedroom"],
                "sat": ["clean_bathroom"],
                "sun": ["water_plants"],
            },
            "Child B": {
                "mon": ["dust_surfaces"],
                "tue": ["vacuum_living", "take_trash"],
                "wed": ["tidy_room"],
                "thu": ["mop_kitchen"],
                "fri": ["clean_bathroom"],
                "sat": ["vacuum_bedroom"],
                "sun": ["feed_pet"],
            },
        },
        "non-cleaning": {
            "Child A": {
                "mon": ["take_trash"],
                "tue": ["water_plants"],
                "wed": ["tidy_room"],
                "thu": ["feed_pet"],
                "fri": ["sort_laundry"],
                "sat": ["tidy_room"],
                "sun": ["water_plants"],
            },
            "Child B": {
                "mon": ["feed_pet"],
                "tue": ["take_trash"],
                "wed": ["water_plants"],
                "thu": ["tidy_room"],
                "fri": ["feed_pet"],
                "sat": ["sort_laundry"],
                "sun": ["tidy_room"],
            },
        },
    },
)

WEEKEND_WARRIOR = RotationPreset(
    key="weekend_warrior",
    name="Weekend Warrior",
    cycle_type="weekly",
    week_types=("standard",),
    min_children=2,
    max_children=6,
    schedule={
        "standard": {
            "Child A": {
                "mon": ["make_bed", "quick_tidy"],
                "tue": ["make_bed", "load_dishwasher"],
                "wed": ["make_bed", "take_trash"],
                "thu": ["make_bed", "quick_tidy"],
                "fri": ["make_bed", "load_dishwasher"],
                "sat": ["vacuum_whole", "clean_bathroom"],
                "sun": ["mop_floors", "organize_closet"],
            },
            "Child B": {
                "mon": ["make_bed", "load_dishwasher"],
                "tue": ["make_bed", "quick_tidy"],
                "wed": ["make_bed", "load_dishwasher"],
                "thu": ["make_bed", "take_trash"],
                "fri": ["make_bed", "quick_tidy"],
                "sat": ["mop_floors", "wash_windows"],
                "sun": ["vacuum_whole", "yard_work"],
            },
        },
    },
)

DAILY_BASICS = RotationPreset(
    key="daily_basics",
    name="Daily Basics",
    cycle_type="daily",
    week_types=("standard",),
    min_children=2,
    max_children=2,
    schedule={
        "standard": {
            "Child A": _same_every_day(
                ["make_bed", "brush_teeth_am", "clear_table", "brush_teeth_pm", "tidy_toys"],
            ),
            "Child B": _same_every_day(
                ["get_dressed", "brush_teeth_am", "pajamas", "brush_teeth_pm", "tidy_toys"],
            ),
        },
    },
)

SCHOOL_YEAR = RotationPreset(
    key="school_year",
    name="School Year",
    cycle_type="weekly",
    week_types=("standard",),
    min_children=2,
    max_children=2,
    schedule={
        "standard": {
            "Child A": {
                "mon": ["make_bed", "unpack_bag", "set_table", "tidy_room"],
                "tue": ["make_bed", "pack_lunch", "clear_table", "feed_pet"],
                "wed": ["make_bed", "unpack_bag", "set_table", "tidy_room"],
                "thu": ["make_bed", "snack_cleanup", "clear_table", "feed_pet"],
                "fri": ["make_bed", "unpack_bag", "set_table", "tidy_room"],
                "sat": ["make_bed", "vacuum_room", "fold_laundry", "help_groceries"],
                "sun": ["make_bed", "clean_bathroom", "tidy_room"],
            },
            "Child B": {
                "mon": ["make_bed", "pack_lunch", "clear_table", "feed_pet"],
                "tue": ["make_bed", "unpack_bag", "set_table", "tidy_room"],
                "wed": ["make_bed", "snack_cleanup", "clear_table", "feed_pet"],
                "thu": ["make_bed", "unpack_bag", "set_table", "tidy_room"],
                "fri": ["make_bed", "pack_lunch", "clear_table", "feed_pet"],
                "sat": ["make_bed", "clean_bathroom", "help_groceries", "tidy_room"],
                "sun": ["make_bed", "vacuum_room", "fold_laundry"],
            },
        },
    },
)

SUMMER_BREAK = RotationPreset(
    key="summer_break",
    name="Summer Break",
    cycle_type="weekly",
    week_types=("standard",),
    min_children=2,
    max_children=2,
    schedule={
        "standard": {
            "Child A": {
                "mon": ["make_bed", "breakfast_dishes", "water_garden", "clear_table"],
                "tue": ["make_bed", "vacuum_room", "pull_weeds", "feed_pet"],
                "wed": ["make_bed", "breakfast_dishes", "sweep_patio", "dinner_help"],
                "thu": ["make_bed", "fold_laundry", "water_garden", "clear_table"],
                "fri": ["make_bed", "clean_room", "wash_car", "feed_pet"],
                "sat": ["make_bed", "breakfast_dishes", "mow_lawn", "dinner_help"],
                "sun": ["make_bed", "water_garden", "clear_table"],
            },
            "Child B": {
                "mon": ["make_bed", "vacuum_room", "pull_weeds", "feed_pet"],
                "tue": ["make_bed", "breakfast_dishes", "water_garden", "dinner_help"],
                "wed": ["make_bed", "fold_laundry", "wash_car", "clear_table"],
                "thu": ["make_bed", "breakfast_dishes", "sweep_patio", "feed_pet"],
                "fri": ["make_bed", "vacuum_room", "water_garden", "dinner_help"],
                "sat": ["make_bed", "clean_room", "pull_weeds", "clear_table"],
                "sun": ["make_bed", "breakfast_dishes", "feed_pet"],
            },
        },
    },
)

LARGE_FAMILY = RotationPreset(
    key="large_family",
    name="Large Family Rotation",
    cycle_type="weekly",
    week_types=("standard",),
    min_children=3,
    max_children=8,
    schedule={
        "standard": {
            # Kitchen duty Mon/Fri, house chores Tue/Sat
            "Child A": {
                "mon": ["make_bed", "set_table", "clear_table", "tidy_room"],
                "tue": ["make_bed", "vacuum_floor", "feed_pet", "tidy_room"],
                "wed": ["make_bed", "wipe_counters", "water_plants", "tidy_room"],
                "thu": ["make_bed", "take_trash", "tidy_room"],
                "fri": ["make_bed", "set_table", "clear_table", "tidy_room"],
                "sat": ["make_bed", "fold_laundry", "tidy_room"],
                "sun": ["make_bed", "feed_pet", "tidy_room"],
            },
            # Kitchen duty Tue/Sat, house chores Wed/Sun
            "Child B": {
                "mon": ["make_bed", "vacuum_floor", "water_plants", "tidy_room"],
                "tue": ["make_bed", "set_table", "clear_table", "tidy_room"],
                "wed": ["make_bed", "sweep_floor", "feed_pet", "tidy_room"],
                "thu": ["make_bed", "wipe_counters", "tidy_room"],
                "fri": ["make_bed", "take_trash", "tidy_room"],
                "sat": ["make_bed", "set_table", "clear_table", "tidy_room"],
                "sun": ["make_bed", "fold_laundry", "water_plants", "tidy_room"],
            },
            # Kitchen duty Wed/Sun, house chores Thu/Mon
            "Child C": {
                "mon": ["make_bed", "fold_laundry", "feed_pet", "tidy_room"],
                "tue": ["make_bed", "take_trash", "tidy_room"],
                "wed": ["make_bed", "set_table", "clear_table", "tidy_room"],
                "thu": ["make_bed", "vacuum_floor", "water_plants", "tidy_room"],
                "fri": ["make_bed", "wipe_counters", "tidy_room"],
                "sat": ["make_bed", "sweep_floor", "feed_pet", "tidy_room"],
                "sun": ["make_bed", "set_table", "clear_table", "tidy_room"],
            },
            # Kitchen duty Thu, house chores Fri/Tue
            "Child D": {
                "mon": ["make_bed", "wipe_counters", "tidy_room"],
                "tue": ["make_bed", "fold_laundry", "water_plants", "tidy_room"],
                "wed": ["make_bed", "take_trash", "feed_pet", "tidy_room"],
                "thu": ["make_bed", "set_table", "clear_table", "tidy_room"],
                "fri": ["make_bed", "sweep_floor", "tidy_room"],
                "sat": ["make_bed", "vacuum_floor", "water_plants", "tidy_room"],
                "sun": ["make_bed", "take_trash", "feed_pet", "tidy_room"],
            },
        },
    },
)

# Chores are distributed algorithmically at runtime, so there is no schedule
DYNAMIC_DAILY = RotationPreset(
    key="dynamic_daily",
    name="Daily Routines (Any Size)",
    cycle_type="daily",
    week_types=("standard",),
    min_children=1,
    max_children=8,
    is_dynamic=True,
)

ROTATION_PRESETS: tuple[RotationPreset, ...] = (
    SMART_ROTATION,
    WEEKEND_WARRIOR,
    DAILY_BASICS,
    SCHOOL_YEAR,
    SUMMER_BREAK,
    LARGE_FAMILY,
    DYNAMIC_DAILY,
)

_BY_KEY = {preset.key: preset for preset in ROTATION_PRESETS}


def get_preset(key: object) -> RotationPreset | None:
    if not isinstance(key, str):
        return None
    return _BY_KEY.get(key)

