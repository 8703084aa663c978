"""스케줄 편집 명령 — 이전 스케줄을 새 스케줄로 바꾸는 순수 함수.

Schedule edit commands. Each function takes the prior WeeklySchedule and
returns a new one; the input is never mutated. Refused commands raise
ScheduleCommandError.
"""

from service_hours.schemas.schedule import (
    DEFAULT_END_TIME,
    DEFAULT_START_TIME,
    DaySchedule,
    DayStatus,
    ServiceType,
    SlotField,
    TimeSlot,
    WeeklySchedule,
)
from service_hours.utils.exceptions import ScheduleCommandError


def _find_day(
    schedule: WeeklySchedule, service_type: ServiceType, day_of_week: int
) -> DaySchedule:
    day: DaySchedule | None = schedule.day(service_type, day_of_week)
    if day is None:
        raise ScheduleCommandError(
            f"Unknown day {day_of_week} for {service_type.label}"
        )
    return day


def _replace_day(
    schedule: WeeklySchedule, service_type: ServiceType, new_day: DaySchedule
) -> WeeklySchedule:
    days: list[DaySchedule] = [
        new_day if day.day_of_week == new_day.day_of_week else day
        for day in schedule.service(service_type)
    ]
    return schedule.with_service(service_type, days)


def _check_slot_index(day: DaySchedule, slot_index: int) -> None:
    if not 0 <= slot_index < len(day.slots):
        raise ScheduleCommandError(
            f"No slot {slot_index} on {day.day_name}"
        )


def toggle_day(
    schedule: WeeklySchedule,
    service_type: ServiceType,
    day_of_week: int,
    enabled: bool,
) -> WeeklySchedule:
    """요일 운영 여부를 설정합니다. 슬롯은 그대로 유지됩니다.

    Set a day's status; its slots are kept verbatim.
    """
    day: DaySchedule = _find_day(schedule, service_type, day_of_week)
    status: DayStatus = DayStatus.ENABLED if enabled else DayStatus.DISABLED
    return _replace_day(schedule, service_type, day.model_copy(update={"status": status}))


def add_slot(
    schedule: WeeklySchedule, service_type: ServiceType, day_of_week: int
) -> WeeklySchedule:
    """기본 슬롯(10:00–23:00)을 추가합니다. 비활성 요일에는 불가.

    Append a default slot. Refused on disabled days.
    """
    day: DaySchedule = _find_day(schedule, service_type, day_of_week)
    if not day.is_enabled:
        raise ScheduleCommandError(f"{day.day_name} is disabled")
    slots: list[TimeSlot] = [
        *day.slots,
        TimeSlot(start_time=DEFAULT_START_TIME, end_time=DEFAULT_END_TIME),
    ]
    return _replace_day(schedule, service_type, day.model_copy(update={"slots": slots}))


def remove_slot(
    schedule: WeeklySchedule,
    service_type: ServiceType,
    day_of_week: int,
    slot_index: int,
) -> WeeklySchedule:
    """슬롯을 삭제합니다. 마지막 남은 슬롯은 삭제할 수 없습니다.

    Remove the slot at ``slot_index``. A day's last slot cannot be removed.
    """
    day: DaySchedule = _find_day(schedule, service_type, day_of_week)
    _check_slot_index(day, slot_index)
    if len(day.slots) <= 1:
        raise ScheduleCommandError(
            f"{day.day_name} must keep at least one time slot"
        )
    slots: list[TimeSlot] = [
        slot for index, slot in enumerate(day.slots) if index != slot_index
    ]
    return _replace_day(schedule, service_type, day.model_copy(update={"slots": slots}))


def edit_slot(
    schedule: WeeklySchedule,
    service_type: ServiceType,
    day_of_week: int,
    slot_index: int,
    field: SlotField | str,
    value: str,
) -> WeeklySchedule:
    """슬롯의 시작/종료 시각을 그대로 설정합니다 (정규화/검증 없음).

    Set ``start_time`` or ``end_time`` on a slot. The value is stored as-is;
    validation happens only at save time.
    """
    try:
        slot_field: SlotField = SlotField(field)
    except ValueError:
        raise ScheduleCommandError(f"Unknown slot field: {field}") from None

    day: DaySchedule = _find_day(schedule, service_type, day_of_week)
    _check_slot_index(day, slot_index)
    slots: list[TimeSlot] = list(day.slots)
    slots[slot_index] = slots[slot_index].model_copy(update={slot_field.value: value})
    return _replace_day(schedule, service_type, day.model_copy(update={"slots": slots}))


def reset_service(schedule: WeeklySchedule, service_type: ServiceType) -> WeeklySchedule:
    """한 서비스 유형의 모든 슬롯 시각을 빈 문자열로 비웁니다.

    Clear start and end times of every slot in one service type.
    Ids, statuses and slot counts are kept; fetched values are not restored.
    """
    days: list[DaySchedule] = [
        day.model_copy(
            update={
                "slots": [
                    slot.model_copy(update={"start_time": "", "end_time": ""})
                    for slot in day.slots
                ]
            }
        )
        for day in schedule.service(service_type)
    ]
    return schedule.with_service(service_type, days)
