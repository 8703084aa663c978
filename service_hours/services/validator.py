"""스케줄 검증 — 저장 가능 여부 판정.

Schedule validator — Decides whether a WeeklySchedule may be submitted.
Disabled days always pass; enabled days need a non-blank start and end on
every slot. Slot ordering (start < end) and overlaps are not checked.
"""

from service_hours.schemas.schedule import DaySchedule, ServiceType, WeeklySchedule


def is_day_valid(day: DaySchedule) -> bool:
    """요일 하나를 검증합니다 (Check a single DaySchedule)."""
    if not day.is_enabled:
        return True
    return all(
        slot.start_time.strip() != "" and slot.end_time.strip() != ""
        for slot in day.slots
    )


def incomplete_sections(schedule: WeeklySchedule) -> list[ServiceType]:
    """검증에 실패한 서비스 유형 목록을 반환합니다.

    Return the service types that contain at least one invalid day,
    in dine-in, takeaway, delivery order.
    """
    return [
        service_type
        for service_type in ServiceType
        if not all(is_day_valid(day) for day in schedule.service(service_type))
    ]


def is_valid(schedule: WeeklySchedule) -> bool:
    """주간 스케줄 전체가 저장 가능한지 확인합니다 (True iff every day passes)."""
    return not incomplete_sections(schedule)
