from datetime import time

import pytest

from smartclinic.core.slots import TimeSlot, has_slot_in_period, normalize_slots

def test_parse_accepts_loose_spacing():
    assert TimeSlot.parse("9:00-10:00") == TimeSlot(time(9, 0), time(10, 0))
    assert TimeSlot.parse(" 09:00 -  10:00 ") == TimeSlot(time(9, 0), time(10, 0))

def test_str_is_canonical():
    assert str(TimeSlot.parse("9:00-10:00")) == "09:00 - 10:00"

def test_slot_ending_at_midnight():
    slot = TimeSlot.parse("23:00 - 00:00")
    assert slot.start == time(23, 0)
    assert slot.end == time(0, 0)

@pytest.mark.parametrize("descriptor", [
    "",
    "09:00",
    "nine - ten",
    "25:00 - 26:00",
    "09:60 - 10:00",
    "10:00 - 09:00",
    "10:00 - 10:00",
])
def test_parse_rejects_malformed(descriptor):
    with pytest.raises(ValueError):
        TimeSlot.parse(descriptor)

def test_starting_at_is_one_hour():
    assert TimeSlot.starting_at(time(9, 30, 15)) == TimeSlot(time(9, 30), time(10, 30))
    assert TimeSlot.starting_at(time(23, 0)).end == time(0, 0)

def test_period():
    assert TimeSlot.parse("11:00 - 12:00").period == "AM"
    assert TimeSlot.parse("12:00 - 13:00").period == "PM"

def test_normalize_dedupes_equivalent_descriptors():
    assert normalize_slots(["9:00-10:00", "09:00 - 10:00", "14:00 - 15:00"]) == [
        "09:00 - 10:00",
        "14:00 - 15:00",
    ]

def test_normalize_rejects_bad_descriptor():
    with pytest.raises(ValueError):
        normalize_slots(["09:00 - 10:00", "whenever"])

def test_has_slot_in_period_skips_malformed():
    slots = ["garbage", "14:00 - 15:00"]
    assert has_slot_in_period(slots, "pm")
    assert not has_slot_in_period(slots, "AM")
    assert not has_slot_in_period([], "AM")
