from datetime import datetime, timezone

from wave_slot_agent.diff import diff_slots, slot_key
from wave_slot_agent.models import BaselineEntry, Level, Slot

SAVED = datetime(2024, 9, 20, 9, 0, tzinfo=timezone.utc)


def _slot(left: int, right: int, level: Level = Level.ADVANCED, time: str = "10:00") -> Slot:
    return Slot.from_counts(date="2024-09-27", time=time, level=level, left=left, right=right, raw_text=f"{left}/{right}")


def _entry(slot: Slot, total: int) -> BaselineEntry:
    """Baseline entry under ``slot``'s key but with a different recorded total."""
    return BaselineEntry.model_construct(**{**slot.model_dump(), "total_seats": total, "saved_at": SAVED})


def test_key_format() -> None:
    assert slot_key(_slot(3, 2)) == "2024-09-27-10:00-3/2"


def test_everything_is_new_against_empty_baseline() -> None:
    slots = [_slot(3, 2), _slot(1, 0, time="11:00")]
    result = diff_slots(slots, {}, saved_at=SAVED)
    assert result.new_or_increased == slots
    assert list(result.next_baseline) == ["2024-09-27-10:00-3/2", "2024-09-27-11:00-1/0"]
    assert all(entry.saved_at == SAVED for entry in result.next_baseline.values())


def test_second_run_with_same_slots_reports_nothing() -> None:
    slots = [_slot(3, 2), _slot(1, 0, time="11:00")]
    first = diff_slots(slots, {})
    second = diff_slots(slots, first.next_baseline)
    assert second.new_or_increased == []
    assert list(second.next_baseline) == list(first.next_baseline)


def test_increase_is_reported_and_decrease_is_not() -> None:
    current = _slot(3, 2)
    assert diff_slots([current], {current.key: _entry(current, 2)}).new_or_increased == [current]
    assert diff_slots([current], {current.key: _entry(current, 5)}).new_or_increased == []
    assert diff_slots([current], {current.key: _entry(current, 9)}).new_or_increased == []


def test_next_baseline_drops_stale_keys() -> None:
    old = diff_slots([_slot(4, 4, time="09:00")], {}).next_baseline
    result = diff_slots([_slot(3, 2)], old)
    assert list(result.next_baseline) == ["2024-09-27-10:00-3/2"]


def test_cross_level_collision_last_write_wins() -> None:
    advanced = _slot(3, 2, level=Level.ADVANCED)
    intermediate = _slot(3, 2, level=Level.INTERMEDIATE)
    assert advanced.key == intermediate.key

    result = diff_slots([advanced, intermediate], {}, saved_at=SAVED)

    assert result.new_or_increased == [advanced, intermediate]
    assert len(result.next_baseline) == 1
    assert result.next_baseline[advanced.key].level is Level.INTERMEDIATE


def test_empty_selection_yields_empty_baseline() -> None:
    old = diff_slots([_slot(3, 2)], {}).next_baseline
    result = diff_slots([], old)
    assert result.new_or_increased == []
    assert result.next_baseline == {}
