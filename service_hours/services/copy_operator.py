"""서비스 유형 간 스케줄 복사.

Copy operator — Replicates one service type's 7-day schedule onto other
service types. Copied days and slots lose their ids so the backend creates
them as new rows instead of updating the target's existing ones.
"""

from typing import Iterable

from service_hours.schemas.schedule import (
    DaySchedule,
    ServiceSchedule,
    ServiceType,
    TimeSlot,
    WeeklySchedule,
)


def _copy_day(day: DaySchedule, target: ServiceType) -> DaySchedule:
    return DaySchedule(
        day_of_week=day.day_of_week,
        status=day.status,
        slots=[
            TimeSlot(start_time=slot.start_time, end_time=slot.end_time)
            for slot in day.slots
        ],
        service_type=target,
    )


def copy_service_schedule(
    schedule: WeeklySchedule,
    source: ServiceType,
    targets: Iterable[ServiceType],
) -> WeeklySchedule:
    """원본 서비스 유형의 스케줄을 대상 서비스 유형들에 복사합니다.

    Replace each target's ServiceSchedule with an id-less deep copy of the
    source's. ``day_of_week``, ``status`` and slot times are kept verbatim.
    Self-copy is not rejected here; the caller must exclude the source.

    Args:
        schedule: 현재 주간 스케줄 (Current weekly schedule)
        source: 원본 서비스 유형 (Source service type)
        targets: 대상 서비스 유형 목록 (Target service types)

    Returns:
        WeeklySchedule: 복사가 적용된 새 스케줄 (New schedule; input is untouched)
    """
    source_days: ServiceSchedule = schedule.service(source)
    result: WeeklySchedule = schedule
    for target in targets:
        result = result.with_service(
            target, [_copy_day(day, target) for day in source_days]
        )
    return result
