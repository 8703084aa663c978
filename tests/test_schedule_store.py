"""스케줄 스토어 테스트.

ScheduleStore tests — load fallback, edit commands, copy/reset,
validation-gated save, and state transitions.
"""

import asyncio

import pytest

from service_hours.schemas.schedule import DayStatus, ServiceType, TimeSlot
from service_hours.schemas.schedule_session import StoreState
from service_hours.services.schedule_store import ScheduleStore
from service_hours.utils.exceptions import (
    SaveError,
    ScheduleCommandError,
    ScheduleValidationError,
    StoreBusyError,
)
from tests.conftest import RESTAURANT_ID, FakeTimeSlotRepository, make_record


class TestLoad:
    """load 테스트."""

    async def test_load_normalizes_records(self, repository):
        repository.records = [make_record(3, 1, slots=[("9:00", "17:00")])]
        store = ScheduleStore(RESTAURANT_ID, repository)

        schedule = await store.load()

        assert store.state == StoreState.READY
        assert repository.fetch_calls == [RESTAURANT_ID]
        assert len(list(schedule.iter_days())) == 21
        assert schedule.day(ServiceType.DELIVERY, 1).slots == [
            TimeSlot(start_time="09:00", end_time="17:00")
        ]
        assert store.original_schedule == schedule
        assert store.notices == []

    async def test_fetch_failure_falls_back_to_defaults(self, repository):
        repository.fail_fetch = True
        store = ScheduleStore(RESTAURANT_ID, repository)

        schedule = await store.load()

        assert store.state == StoreState.READY
        assert store.is_valid
        for _, day in schedule.iter_days():
            assert day.id is None
            assert day.slots == [TimeSlot(start_time="10:00", end_time="23:00")]
        notices = store.drain_notices()
        assert [(n.level, n.message) for n in notices] == [
            ("error", "Failed to load opening hours")
        ]
        assert store.notices == []

    async def test_malformed_records_still_load(self, repository):
        broken = make_record(1, 1, record_id=1.5)
        broken["slots"] = 5
        repository.records = [broken, make_record(2, 3, record_id={"x": 1})]
        store = ScheduleStore(RESTAURANT_ID, repository)

        schedule = await store.load()

        assert store.state == StoreState.READY
        assert len(list(schedule.iter_days())) == 21
        assert schedule.day(ServiceType.DINE_IN, 1).id is None
        assert schedule.day(ServiceType.TAKEAWAY, 3).id is None
        assert store.is_valid

    async def test_second_load_while_loading_is_refused(self):
        gate = asyncio.Event()

        class SlowRepository(FakeTimeSlotRepository):
            async def fetch_schedule(self, restaurant_id):
                await gate.wait()
                return []

        store = ScheduleStore(RESTAURANT_ID, SlowRepository())
        first = asyncio.create_task(store.load())
        await asyncio.sleep(0)
        assert store.is_loading

        with pytest.raises(StoreBusyError):
            await store.load()
        with pytest.raises(StoreBusyError):
            store.toggle_day(ServiceType.DINE_IN, 1, False)

        gate.set()
        await first
        assert store.state == StoreState.READY

    async def test_commands_before_load_are_refused(self, repository):
        store = ScheduleStore(RESTAURANT_ID, repository)
        with pytest.raises(ScheduleCommandError):
            store.add_slot(ServiceType.DINE_IN, 1)


class TestEditCommands:
    """편집 명령 테스트."""

    async def test_toggle_keeps_slots(self, store):
        before = store.schedule.day(ServiceType.TAKEAWAY, 2).slots
        store.toggle_day(ServiceType.TAKEAWAY, 2, False)

        day = store.schedule.day(ServiceType.TAKEAWAY, 2)
        assert day.status == DayStatus.DISABLED
        assert day.slots == before
        assert store.state == StoreState.EDITING

        store.toggle_day(ServiceType.TAKEAWAY, 2, True)
        assert store.schedule.day(ServiceType.TAKEAWAY, 2).slots == before

    async def test_commands_return_new_values(self, store):
        previous = store.schedule
        store.add_slot(ServiceType.DINE_IN, 1)
        assert store.schedule is not previous
        assert len(previous.day(ServiceType.DINE_IN, 1).slots) == 2
        assert len(store.schedule.day(ServiceType.DINE_IN, 1).slots) == 3

    async def test_add_slot_appends_default(self, store):
        store.add_slot(ServiceType.DELIVERY, 4)
        slots = store.schedule.day(ServiceType.DELIVERY, 4).slots
        assert slots[-1] == TimeSlot(start_time="10:00", end_time="23:00")

    async def test_add_slot_on_disabled_day_is_refused(self, store):
        # 토요일(7)은 비활성 — day 7 is disabled in the fixture data
        with pytest.raises(ScheduleCommandError):
            store.add_slot(ServiceType.DINE_IN, 7)

    async def test_remove_slot(self, store):
        store.remove_slot(ServiceType.DINE_IN, 2, 0)
        slots = store.schedule.day(ServiceType.DINE_IN, 2).slots
        assert [(s.start_time, s.end_time) for s in slots] == [("17:30", "22:00")]

    async def test_last_slot_cannot_be_removed(self, store):
        """슬롯이 하나만 남으면 삭제 불가."""
        store.remove_slot(ServiceType.DINE_IN, 2, 1)
        with pytest.raises(ScheduleCommandError):
            store.remove_slot(ServiceType.DINE_IN, 2, 0)
        assert len(store.schedule.day(ServiceType.DINE_IN, 2).slots) == 1

    async def test_remove_out_of_range_is_refused(self, store):
        with pytest.raises(ScheduleCommandError):
            store.remove_slot(ServiceType.DINE_IN, 2, 5)

    async def test_edit_slot_stores_raw_value(self, store):
        store.edit_slot(ServiceType.TAKEAWAY, 5, 1, "start_time", "7:3")
        slot = store.schedule.day(ServiceType.TAKEAWAY, 5).slots[1]
        assert slot.start_time == "7:3"
        assert slot.id is not None

    async def test_edit_unknown_field_is_refused(self, store):
        with pytest.raises(ScheduleCommandError):
            store.edit_slot(ServiceType.TAKEAWAY, 5, 0, "id", "1")

    async def test_unknown_day_is_refused(self, store):
        with pytest.raises(ScheduleCommandError):
            store.toggle_day(ServiceType.TAKEAWAY, 9, True)

    async def test_disabled_day_with_empty_times_stays_valid(self, store):
        store.edit_slot(ServiceType.TAKEAWAY, 2, 0, "start_time", "")
        store.edit_slot(ServiceType.TAKEAWAY, 2, 1, "end_time", "")
        assert not store.is_valid

        store.toggle_day(ServiceType.TAKEAWAY, 2, False)
        assert store.is_valid

        store.toggle_day(ServiceType.TAKEAWAY, 2, True)
        assert not store.is_valid
        assert store.incomplete_sections == [ServiceType.TAKEAWAY]


class TestCopyAndReset:
    """복사 및 초기화 테스트."""

    async def test_copy_defaults_to_other_service_types(self, store):
        store.select_service_type(ServiceType.TAKEAWAY)
        store.edit_slot(ServiceType.TAKEAWAY, 3, 0, "start_time", "06:15")

        store.copy_to_others()

        for target in (ServiceType.DINE_IN, ServiceType.DELIVERY):
            tuesday = store.schedule.day(target, 3)
            assert tuesday.id is None
            assert tuesday.slots[0].start_time == "06:15"
            assert all(slot.id is None for slot in tuesday.slots)
        assert store.schedule.day(ServiceType.TAKEAWAY, 3).id is not None
        assert [n.message for n in store.drain_notices()] == ["Time slots copied successfully"]

    async def test_copy_to_self_is_refused(self, store):
        with pytest.raises(ScheduleCommandError):
            store.copy_to_others(ServiceType.DINE_IN, [ServiceType.DINE_IN, ServiceType.DELIVERY])

    async def test_copy_without_targets_is_refused(self, store):
        with pytest.raises(ScheduleCommandError):
            store.copy_to_others(ServiceType.DINE_IN, [])

    async def test_reset_clears_only_one_service_type(self, store):
        store.edit_slot(ServiceType.DINE_IN, 4, 0, "start_time", "11:00")
        store.edit_slot(ServiceType.DINE_IN, 4, 0, "end_time", "22:00")

        store.reset_active(ServiceType.DINE_IN)

        wednesday = store.schedule.day(ServiceType.DINE_IN, 4)
        assert all(s.start_time == "" and s.end_time == "" for s in wednesday.slots)
        assert store.schedule.day(ServiceType.TAKEAWAY, 4).slots[0].start_time == "09:00"
        assert not store.is_valid
        assert store.incomplete_sections == [ServiceType.DINE_IN]

        notice = store.drain_notices()[0]
        assert notice.title == "Reset Successful"
        assert notice.message.startswith("Dine In timings have been cleared")

    async def test_reset_does_not_restore_fetched_values(self, store):
        store.reset_active(ServiceType.DELIVERY)
        assert store.original_schedule.day(ServiceType.DELIVERY, 1).slots[0].start_time == "09:00"
        assert store.schedule.day(ServiceType.DELIVERY, 1).slots[0].start_time == ""

    async def test_reset_defaults_to_active_service_type(self, store):
        store.select_service_type(ServiceType.DELIVERY)
        store.reset_active()
        assert store.incomplete_sections == [ServiceType.DELIVERY]


class TestSave:
    """save 테스트."""

    async def test_save_submits_full_replace(self, store, repository):
        records = await store.save()

        assert store.state == StoreState.CLOSED
        assert len(repository.saved) == 1
        restaurant_id, submitted = repository.saved[0]
        assert restaurant_id == RESTAURANT_ID
        assert submitted == records
        assert len(records) == 21
        assert all(r["restaurant_id"] == RESTAURANT_ID for r in records)
        assert [n.message for n in store.drain_notices()] == ["Opening hours updated successfully"]

    async def test_invalid_schedule_is_never_sent(self, store, repository):
        store.reset_active(ServiceType.TAKEAWAY)

        with pytest.raises(ScheduleValidationError) as exc_info:
            await store.save()

        assert exc_info.value.sections == [ServiceType.TAKEAWAY]
        assert repository.saved == []
        assert store.state == StoreState.READY
        notice = store.drain_notices()[-1]
        assert notice.level == "error"
        assert "Please enter a valid time" in notice.message

    async def test_save_failure_keeps_edits_for_retry(self, store, repository):
        repository.fail_save = True
        repository.save_message = "Restaurant is locked"
        store.edit_slot(ServiceType.DELIVERY, 2, 0, "start_time", "05:00")
        edited = store.schedule

        with pytest.raises(SaveError) as exc_info:
            await store.save()

        assert exc_info.value.message == "Restaurant is locked"
        assert store.state == StoreState.READY
        assert store.schedule == edited
        assert store.drain_notices()[-1].message == "Restaurant is locked"

        repository.fail_save = False
        await store.save()
        assert repository.saved[0][1][15]["slots"][0]["start_time"] == "05:00"

    async def test_commands_are_refused_while_saving(self):
        gate = asyncio.Event()

        class SlowRepository(FakeTimeSlotRepository):
            async def replace_schedule(self, restaurant_id, records):
                await gate.wait()

        store = ScheduleStore(RESTAURANT_ID, SlowRepository())
        await store.load()
        task = asyncio.create_task(store.save())
        await asyncio.sleep(0)
        assert store.is_saving

        with pytest.raises(StoreBusyError):
            store.add_slot(ServiceType.DINE_IN, 1)
        with pytest.raises(StoreBusyError):
            await store.save()

        gate.set()
        await task
        assert store.state == StoreState.CLOSED

    async def test_saved_schedule_becomes_baseline(self, store):
        store.edit_slot(ServiceType.DINE_IN, 1, 0, "start_time", "08:00")
        await store.save()
        assert store.original_schedule.day(ServiceType.DINE_IN, 1).slots[0].start_time == "08:00"

    async def test_copied_entries_are_created_on_save(self, store, repository):
        store.copy_to_others(ServiceType.DINE_IN, [ServiceType.TAKEAWAY])
        records = await store.save()

        takeaway = [r for r in records if r["order_type_id"] == 2]
        dine_in = [r for r in records if r["order_type_id"] == 1]
        assert all("id" not in r for r in takeaway)
        assert all("id" not in s for r in takeaway for s in r["slots"])
        assert all("id" in r for r in dine_in)
