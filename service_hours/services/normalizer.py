"""스케줄 정규화 — 백엔드 평면 레코드 ⇄ 주간 스케줄 변환.

Schedule normalizer — Pure conversions between the backend's flat
per-(restaurant, day, service type) record list and the structured
WeeklySchedule used by the store.

Backend record shape (both directions):
    {
        "id": 12,                    # optional
        "day_of_week": 1,            # 1=Sunday .. 7=Saturday
        "status": 1,                 # 0=disabled, 1=enabled
        "order_type_id": 1,          # 1=dine-in, 2=takeaway, 3=delivery
        "slots": [{"id": 5, "start_time": "10:00", "end_time": "23:00"}],
    }

The fetch endpoint spells the service type as ``order_types.id`` and the
slots as ``restaurant_time_slot_hours``; both spellings are accepted.
"""

from typing import Any, Iterable

from service_hours.schemas.schedule import (
    DAYS_OF_WEEK,
    DEFAULT_END_TIME,
    DEFAULT_START_TIME,
    DaySchedule,
    DayStatus,
    RecordId,
    ServiceSchedule,
    ServiceType,
    TimeSlot,
    WeeklySchedule,
)


def normalize_time(value: Any) -> str:
    """시간 문자열을 "HH:MM" 형식으로 정규화합니다.

    Normalize a backend time string to zero-padded "HH:MM".
    Seconds are dropped ("09:00:00" → "09:00") and single digits padded
    ("9:5" → "09:05"). Empty values or strings without a colon fall back to
    "10:00" instead of failing the whole load.

    Args:
        value: 백엔드 시간 값 (Backend time value)

    Returns:
        str: "HH:MM" 문자열 (Normalized time string)
    """
    if not value or not isinstance(value, str) or ":" not in value:
        return DEFAULT_START_TIME
    parts: list[str] = value.strip().split(":")
    hours: str = parts[0].strip() or "0"
    minutes: str = parts[1].strip() or "0"
    return f"{hours.zfill(2)}:{minutes.zfill(2)}"


def default_day_schedule(day_of_week: int, service_type: ServiceType) -> DaySchedule:
    """기본 요일 스케줄 — 활성, 10:00–23:00 슬롯 1개, ID 없음.

    Build the default DaySchedule used for any day missing from the backend.
    """
    return DaySchedule(
        day_of_week=day_of_week,
        status=DayStatus.ENABLED,
        slots=[TimeSlot(start_time=DEFAULT_START_TIME, end_time=DEFAULT_END_TIME)],
        service_type=service_type,
    )


def default_weekly_schedule() -> WeeklySchedule:
    """모든 요일이 기본값인 주간 스케줄 (All 21 days set to the default)."""
    return WeeklySchedule(
        **{
            service_type.value: [
                default_day_schedule(day, service_type) for day in DAYS_OF_WEEK
            ]
            for service_type in ServiceType
        }
    )


def _record_service_type(record: dict[str, Any]) -> ServiceType | None:
    """레코드의 서비스 유형을 추출합니다 (order_type_id 또는 order_types.id)."""
    if record.get("order_type_id") is not None:
        return ServiceType.from_order_type_id(record["order_type_id"])
    order_types: Any = record.get("order_types")
    if isinstance(order_types, dict):
        return ServiceType.from_order_type_id(order_types.get("id"))
    return None


def _record_id(value: Any) -> RecordId | None:
    # bool은 int 하위 타입이므로 제외 — bool is an int subclass, not an id
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        return None
    return value


def _record_slots(record: dict[str, Any]) -> list[dict[str, Any]]:
    slots: Any = record.get("slots")
    if slots is None:
        slots = record.get("restaurant_time_slot_hours")
    if not isinstance(slots, list):
        return []
    return [slot for slot in slots if isinstance(slot, dict)]


def _record_day(record: dict[str, Any]) -> int | None:
    try:
        day: int = int(record.get("day_of_week"))
    except (TypeError, ValueError, OverflowError):
        return None
    return day if day in DAYS_OF_WEEK else None


def _record_status(value: Any) -> DayStatus:
    try:
        return DayStatus.ENABLED if int(value) else DayStatus.DISABLED
    except (TypeError, ValueError, OverflowError):
        return DayStatus.ENABLED if value else DayStatus.DISABLED


def _day_from_record(
    record: dict[str, Any], day_of_week: int, service_type: ServiceType
) -> DaySchedule:
    slots: list[TimeSlot] = [
        TimeSlot(
            id=_record_id(slot.get("id")),
            start_time=normalize_time(slot.get("start_time")),
            end_time=normalize_time(slot.get("end_time")),
        )
        for slot in _record_slots(record)
    ]
    # 사용 가능한 슬롯이 없으면 기본 슬롯 — a day always carries at least one slot
    if not slots:
        slots = [TimeSlot(start_time=DEFAULT_START_TIME, end_time=DEFAULT_END_TIME)]
    return DaySchedule(
        id=_record_id(record.get("id")),
        day_of_week=day_of_week,
        status=_record_status(record.get("status")),
        slots=slots,
        service_type=service_type,
    )


def from_backend(records: Iterable[dict[str, Any]] | None) -> WeeklySchedule:
    """백엔드 레코드 목록을 주간 스케줄로 변환합니다.

    Convert the backend's flat record list into a WeeklySchedule.
    Records are grouped by service type; for every service type and day 1..7
    the first matching record wins, and missing days are synthesized with
    the default DaySchedule. Records with an unknown service type or an
    out-of-range day are ignored, so the result always holds 3 × 7 days.
    Ids that are neither int nor str are dropped, and a record without any
    usable slot gets the default 10:00–23:00 slot.

    Args:
        records: 백엔드 요일 레코드 목록 (Flat backend day records, may be empty)

    Returns:
        WeeklySchedule: 21개 요일이 모두 채워진 주간 스케줄 (Complete schedule)
    """
    grouped: dict[ServiceType, dict[int, dict[str, Any]]] = {
        service_type: {} for service_type in ServiceType
    }
    for record in records or []:
        if not isinstance(record, dict):
            continue
        service_type: ServiceType | None = _record_service_type(record)
        day: int | None = _record_day(record)
        if service_type is None or day is None:
            continue
        # 첫 번째 레코드 우선 — First record for a (service type, day) wins
        grouped[service_type].setdefault(day, record)

    services: dict[str, ServiceSchedule] = {}
    for service_type in ServiceType:
        days: ServiceSchedule = []
        for day in DAYS_OF_WEEK:
            record: dict[str, Any] | None = grouped[service_type].get(day)
            if record is None:
                days.append(default_day_schedule(day, service_type))
            else:
                days.append(_day_from_record(record, day, service_type))
        services[service_type.value] = days
    return WeeklySchedule(**services)


def to_backend(
    schedule: WeeklySchedule, restaurant_id: Any | None = None
) -> list[dict[str, Any]]:
    """주간 스케줄을 전체 교체용 평면 레코드 목록으로 변환합니다.

    Flatten a WeeklySchedule into backend records for a full-replace write.
    Order is preserved (dine-in, takeaway, delivery; stored day order).
    ``id`` keys are emitted only when present. No validation is done here.

    Args:
        schedule: 주간 스케줄 (Weekly schedule)
        restaurant_id: 레코드에 포함할 레스토랑 ID (Optional restaurant id per record)

    Returns:
        list[dict]: 백엔드 레코드 목록 (Flat backend records)
    """
    records: list[dict[str, Any]] = []
    for service_type, day in schedule.iter_days():
        slots: list[dict[str, Any]] = []
        for slot in day.slots:
            slot_record: dict[str, Any] = {
                "start_time": slot.start_time,
                "end_time": slot.end_time,
            }
            if slot.id is not None:
                slot_record["id"] = slot.id
            slots.append(slot_record)

        record: dict[str, Any] = {
            "status": int(day.status),
            "day_of_week": day.day_of_week,
            "slots": slots,
            "order_type_id": service_type.order_type_id,
        }
        if day.id is not None:
            record["id"] = day.id
        if restaurant_id is not None:
            record["restaurant_id"] = restaurant_id
        records.append(record)
    return records
