"""주간 영업시간 도메인 스키마 — 시간 슬롯/요일/서비스 유형/주간 스케줄.

Weekly service-hours domain schemas.
Defines the structured client-side representation of a restaurant's opening
hours: TimeSlot → DaySchedule → ServiceSchedule (7 days) → WeeklySchedule
(dine-in, takeaway, delivery).

All values are treated as immutable by the services layer: commands build
new instances with ``model_copy`` instead of mutating in place.
"""

from enum import Enum, IntEnum
from typing import Any

from pydantic import BaseModel, Field

# 기본 슬롯 시간 — Default slot window for synthesized days and new slots
DEFAULT_START_TIME: str = "10:00"
DEFAULT_END_TIME: str = "23:00"

# 요일 이름 (1=일요일) — Day names indexed by day_of_week - 1
DAY_NAMES: tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)
DAYS_OF_WEEK: range = range(1, 8)

# 백엔드 식별자 — Opaque backend identifier (int or str depending on the API)
RecordId = int | str


class ServiceType(str, Enum):
    """서비스 유형 — 독립적인 스케줄 축.

    Service type. Each one owns an independent 7-day schedule.
    The backend identifies them by ``order_type_id`` (1/2/3).
    """

    DINE_IN = "dine_in"
    TAKEAWAY = "takeaway"
    DELIVERY = "delivery"

    @property
    def order_type_id(self) -> int:
        """백엔드 주문 유형 ID (Backend order_type_id)."""
        return _ORDER_TYPE_IDS[self]

    @property
    def label(self) -> str:
        """표시 이름 (Display name, e.g. "Dine In")."""
        return _LABELS[self]

    @classmethod
    def from_order_type_id(cls, order_type_id: Any) -> "ServiceType | None":
        """주문 유형 ID로 서비스 유형을 찾습니다. 알 수 없으면 None.

        Resolve a backend order_type_id; returns None for unknown ids.
        """
        try:
            key: int = int(order_type_id)
        except (TypeError, ValueError, OverflowError):
            return None
        for service_type, type_id in _ORDER_TYPE_IDS.items():
            if type_id == key:
                return service_type
        return None


_ORDER_TYPE_IDS: dict[ServiceType, int] = {
    ServiceType.DINE_IN: 1,
    ServiceType.TAKEAWAY: 2,
    ServiceType.DELIVERY: 3,
}

_LABELS: dict[ServiceType, str] = {
    ServiceType.DINE_IN: "Dine In",
    ServiceType.TAKEAWAY: "Takeaway",
    ServiceType.DELIVERY: "Delivery",
}


class DayStatus(IntEnum):
    """요일 운영 상태 (Day status, wire value 0/1)."""

    DISABLED = 0
    ENABLED = 1


class SlotField(str, Enum):
    """수정 가능한 슬롯 필드 (Editable slot field)."""

    START_TIME = "start_time"
    END_TIME = "end_time"


class TimeSlot(BaseModel):
    """시간 슬롯 — 하루 중 하나의 연속 영업 구간.

    A single contiguous open window on a day.
    ``id`` is present only for slots that already exist on the backend.

    Attributes:
        id: 백엔드 슬롯 ID (Backend slot id; None means "create on save")
        start_time: 시작 시각 "HH:MM" (Start time, may be "" mid-edit)
        end_time: 종료 시각 "HH:MM" (End time, may be "" mid-edit)
    """

    id: RecordId | None = None
    start_time: str = DEFAULT_START_TIME
    end_time: str = DEFAULT_END_TIME


class DaySchedule(BaseModel):
    """요일 스케줄 — 한 서비스 유형의 하루 운영 상태와 슬롯 목록.

    One weekday's enabled flag and ordered slots for one service type.
    Slots of a disabled day are kept verbatim so re-enabling restores them.

    Attributes:
        id: 백엔드 요일 레코드 ID (Backend day record id, optional)
        day_of_week: 요일 1..7, 1=일요일 (Day of week, 1 = Sunday)
        status: 운영 여부 (Enabled / Disabled)
        slots: 시간 슬롯 목록 (Ordered time slots)
        service_type: 서비스 유형 (Owning service type)
    """

    id: RecordId | None = None
    day_of_week: int = Field(ge=1, le=7)
    status: DayStatus = DayStatus.ENABLED
    slots: list[TimeSlot] = Field(default_factory=list)
    service_type: ServiceType

    @property
    def is_enabled(self) -> bool:
        return self.status == DayStatus.ENABLED

    @property
    def day_name(self) -> str:
        return DAY_NAMES[self.day_of_week - 1]


# 서비스 스케줄 — 요일 1..7 순서의 DaySchedule 7개
# ServiceSchedule: exactly seven DaySchedules ordered by day_of_week
ServiceSchedule = list[DaySchedule]


class WeeklySchedule(BaseModel):
    """주간 스케줄 — 세 서비스 유형의 스케줄 묶음 (로드/저장 단위).

    The full 3 service types × 7 days aggregate; the unit of load and save.

    Attributes:
        dine_in: 매장 식사 스케줄 (Dine-in ServiceSchedule)
        takeaway: 포장 스케줄 (Takeaway ServiceSchedule)
        delivery: 배달 스케줄 (Delivery ServiceSchedule)
    """

    dine_in: ServiceSchedule = Field(default_factory=list)
    takeaway: ServiceSchedule = Field(default_factory=list)
    delivery: ServiceSchedule = Field(default_factory=list)

    def service(self, service_type: ServiceType) -> ServiceSchedule:
        """서비스 유형별 스케줄을 반환합니다 (Return one ServiceSchedule)."""
        return getattr(self, service_type.value)

    def day(self, service_type: ServiceType, day_of_week: int) -> DaySchedule | None:
        """특정 요일 스케줄을 찾습니다 (Find a DaySchedule, None if missing)."""
        for day in self.service(service_type):
            if day.day_of_week == day_of_week:
                return day
        return None

    def with_service(
        self, service_type: ServiceType, days: ServiceSchedule
    ) -> "WeeklySchedule":
        """한 서비스 유형만 교체한 새 스케줄을 반환합니다.

        Return a new WeeklySchedule with one ServiceSchedule replaced.
        """
        return self.model_copy(update={service_type.value: days})

    def iter_days(self):
        """(서비스 유형, 요일 스케줄) 쌍을 순서대로 순회합니다.

        Yield (service_type, DaySchedule) pairs in dine-in, takeaway,
        delivery order, each in stored day order.
        """
        for service_type in ServiceType:
            for day in self.service(service_type):
                yield service_type, day
