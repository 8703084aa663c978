"""영업시간 편집 세션 관련 Pydantic 요청/응답 스키마 정의.

Editing-session Pydantic request/response schema definitions.
Covers store state, user-facing notices, and the request bodies of the
schedule-session endpoints.
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field

from service_hours.schemas.schedule import ServiceType, SlotField, WeeklySchedule


class StoreState(str, Enum):
    """편집 세션 상태 (Editing session state).

    Closed → Loading → Ready ⇄ Editing → Validating → Saving → Closed
    """

    CLOSED = "closed"
    LOADING = "loading"
    READY = "ready"
    EDITING = "editing"
    VALIDATING = "validating"
    SAVING = "saving"


class Notice(BaseModel):
    """사용자 알림 (User-facing notice, shown as a toast by the client).

    Attributes:
        level: 알림 수준 (success / error)
        title: 제목 (Title, e.g. "Error")
        message: 본문 (Message body)
    """

    level: Literal["success", "error"]
    title: str
    message: str


# === 요청 (Requests) ===

class ActiveServiceUpdate(BaseModel):
    service_type: ServiceType


class DayToggleRequest(BaseModel):
    enabled: bool  # 요일 운영 여부 (Enable or disable the day)


class SlotEditRequest(BaseModel):
    """슬롯 수정 요청 스키마.

    Slot edit request schema. The value is stored without normalization.

    Attributes:
        field: 수정할 필드 (start_time / end_time)
        value: 새 값 "HH:MM" 또는 빈 문자열 (New value, may be empty)
    """

    field: SlotField
    value: str


class CopyRequest(BaseModel):
    """스케줄 복사 요청 스키마.

    Copy request schema. ``source`` defaults to the active service type and
    ``targets`` to every other service type.
    """

    source: ServiceType | None = None
    targets: list[ServiceType] | None = None


class ResetRequest(BaseModel):
    service_type: ServiceType | None = None  # None이면 활성 탭 (None = active service type)


# === 응답 (Responses) ===

class SessionResponse(BaseModel):
    """편집 세션 응답 스키마.

    Editing session response schema.

    Attributes:
        session_id: 세션 UUID (Session identifier)
        restaurant_id: 레스토랑 ID (Owning restaurant)
        state: 세션 상태 (Store state)
        active_service_type: 선택된 서비스 유형 (Selected tab)
        is_valid: 저장 가능 여부 (Whether save() would pass validation)
        incomplete_sections: 미완성 서비스 유형 (Service types failing validation)
        schedule: 현재 주간 스케줄 (Current weekly schedule)
        notices: 대기 중인 알림 (Pending notices, drained by this response)
    """

    session_id: str
    restaurant_id: int
    state: StoreState
    active_service_type: ServiceType
    is_valid: bool
    incomplete_sections: list[ServiceType] = Field(default_factory=list)
    schedule: WeeklySchedule
    notices: list[Notice] = Field(default_factory=list)


class SaveResponse(BaseModel):
    """저장 결과 응답 — 닫힌 세션의 마지막 알림 포함.

    Save result with the submitted records and the closed session's
    final notices.
    """

    message: str
    records: list[dict[str, Any]]
    notices: list[Notice] = Field(default_factory=list)
