"""관리자 영업시간 편집 세션 라우터.

Admin schedule-session router — Opens an editing session over a
restaurant's weekly service hours, applies edit commands, and saves.
All endpoints are nested under /restaurants/{restaurant_id}/schedule-sessions.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends

from service_hours.api.deps import get_repository, get_session_service
from service_hours.repositories.time_slot_repository import RestaurantTimeSlotRepository
from service_hours.schemas.schedule import ServiceType
from service_hours.schemas.schedule_session import (
    ActiveServiceUpdate,
    CopyRequest,
    DayToggleRequest,
    ResetRequest,
    SaveResponse,
    SessionResponse,
    SlotEditRequest,
)
from service_hours.services.schedule_store import ScheduleStore
from service_hours.services.session_service import SessionService
from service_hours.utils.exceptions import (
    BadGatewayError,
    BadRequestError,
    ConflictError,
    NotFoundError,
    SaveError,
    ScheduleCommandError,
    ScheduleValidationError,
    SessionNotFoundError,
    StoreBusyError,
    UnprocessableError,
)

router: APIRouter = APIRouter()

SESSION_PATH: str = "/restaurants/{restaurant_id}/schedule-sessions/{session_id}"
DAY_PATH: str = SESSION_PATH + "/days/{service_type}/{day_of_week}"


@contextmanager
def _translate_errors() -> Iterator[None]:
    """도메인 예외를 HTTP 예외로 변환합니다 (Map domain errors to HTTP errors)."""
    try:
        yield
    except SessionNotFoundError as exc:
        raise NotFoundError(str(exc)) from exc
    except StoreBusyError as exc:
        raise ConflictError(str(exc)) from exc
    except ScheduleCommandError as exc:
        raise BadRequestError(str(exc)) from exc
    except ScheduleValidationError as exc:
        raise UnprocessableError({
            "message": "Please enter a valid time",
            "incomplete_sections": [section.value for section in exc.sections],
        }) from exc
    except SaveError as exc:
        raise BadGatewayError(str(exc)) from exc


def _session_response(session_id: UUID, store: ScheduleStore) -> SessionResponse:
    """스토어 상태로 세션 응답을 구성합니다. 대기 중인 알림은 비워집니다.

    Build the session response; pending notices are drained into it.
    """
    return SessionResponse(
        session_id=str(session_id),
        restaurant_id=store.restaurant_id,
        state=store.state,
        active_service_type=store.active_service_type,
        is_valid=store.is_valid,
        incomplete_sections=store.incomplete_sections,
        schedule=store.schedule,
        notices=store.drain_notices(),
    )


@router.post(
    "/restaurants/{restaurant_id}/schedule-sessions",
    response_model=SessionResponse,
    status_code=201,
)
async def open_session(
    restaurant_id: int,
    repository: Annotated[RestaurantTimeSlotRepository, Depends(get_repository)],
    sessions: Annotated[SessionService, Depends(get_session_service)],
) -> SessionResponse:
    """편집 세션을 열고 저장된 영업시간을 불러옵니다.

    Open an editing session and load the stored opening hours.
    A failed fetch still opens the session with default hours and an
    error notice.
    """
    with _translate_errors():
        session_id, store = await sessions.open_session(restaurant_id, repository)
    return _session_response(session_id, store)


@router.get(SESSION_PATH, response_model=SessionResponse)
async def get_session(
    restaurant_id: int,
    session_id: UUID,
    sessions: Annotated[SessionService, Depends(get_session_service)],
) -> SessionResponse:
    """편집 세션의 현재 상태를 조회합니다.

    Get the current state of an editing session.
    """
    with _translate_errors():
        store: ScheduleStore = sessions.get_store(session_id, restaurant_id)
    return _session_response(session_id, store)


@router.put(SESSION_PATH + "/active-service", response_model=SessionResponse)
async def select_service_type(
    restaurant_id: int,
    session_id: UUID,
    data: ActiveServiceUpdate,
    sessions: Annotated[SessionService, Depends(get_session_service)],
) -> SessionResponse:
    """활성 서비스 유형(탭)을 변경합니다."""
    with _translate_errors():
        store: ScheduleStore = sessions.get_store(session_id, restaurant_id)
        store.select_service_type(data.service_type)
    return _session_response(session_id, store)


@router.put(DAY_PATH, response_model=SessionResponse)
async def toggle_day(
    restaurant_id: int,
    session_id: UUID,
    service_type: ServiceType,
    day_of_week: int,
    data: DayToggleRequest,
    sessions: Annotated[SessionService, Depends(get_session_service)],
) -> SessionResponse:
    """요일 운영 여부를 변경합니다."""
    with _translate_errors():
        store: ScheduleStore = sessions.get_store(session_id, restaurant_id)
        store.toggle_day(service_type, day_of_week, data.enabled)
    return _session_response(session_id, store)


@router.post(DAY_PATH + "/slots", response_model=SessionResponse, status_code=201)
async def add_slot(
    restaurant_id: int,
    session_id: UUID,
    service_type: ServiceType,
    day_of_week: int,
    sessions: Annotated[SessionService, Depends(get_session_service)],
) -> SessionResponse:
    """기본 시간 슬롯(10:00–23:00)을 추가합니다."""
    with _translate_errors():
        store: ScheduleStore = sessions.get_store(session_id, restaurant_id)
        store.add_slot(service_type, day_of_week)
    return _session_response(session_id, store)


@router.patch(DAY_PATH + "/slots/{slot_index}", response_model=SessionResponse)
async def edit_slot(
    restaurant_id: int,
    session_id: UUID,
    service_type: ServiceType,
    day_of_week: int,
    slot_index: int,
    data: SlotEditRequest,
    sessions: Annotated[SessionService, Depends(get_session_service)],
) -> SessionResponse:
    """슬롯의 시작/종료 시각을 수정합니다 (저장 시점에만 검증)."""
    with _translate_errors():
        store: ScheduleStore = sessions.get_store(session_id, restaurant_id)
        store.edit_slot(service_type, day_of_week, slot_index, data.field, data.value)
    return _session_response(session_id, store)


@router.delete(DAY_PATH + "/slots/{slot_index}", response_model=SessionResponse)
async def remove_slot(
    restaurant_id: int,
    session_id: UUID,
    service_type: ServiceType,
    day_of_week: int,
    slot_index: int,
    sessions: Annotated[SessionService, Depends(get_session_service)],
) -> SessionResponse:
    """슬롯을 삭제합니다. 요일의 마지막 슬롯은 삭제할 수 없습니다."""
    with _translate_errors():
        store: ScheduleStore = sessions.get_store(session_id, restaurant_id)
        store.remove_slot(service_type, day_of_week, slot_index)
    return _session_response(session_id, store)


@router.post(SESSION_PATH + "/copy", response_model=SessionResponse)
async def copy_to_others(
    restaurant_id: int,
    session_id: UUID,
    data: CopyRequest,
    sessions: Annotated[SessionService, Depends(get_session_service)],
) -> SessionResponse:
    """한 서비스 유형의 영업시간을 다른 서비스 유형에 복사합니다.

    Copy one service type's hours onto other service types.
    Copied days and slots are created as new rows on save.
    """
    with _translate_errors():
        store: ScheduleStore = sessions.get_store(session_id, restaurant_id)
        store.copy_to_others(data.source, data.targets)
    return _session_response(session_id, store)


@router.post(SESSION_PATH + "/reset", response_model=SessionResponse)
async def reset_service_type(
    restaurant_id: int,
    session_id: UUID,
    data: ResetRequest,
    sessions: Annotated[SessionService, Depends(get_session_service)],
) -> SessionResponse:
    """한 서비스 유형의 모든 시각을 비웁니다."""
    with _translate_errors():
        store: ScheduleStore = sessions.get_store(session_id, restaurant_id)
        store.reset_active(data.service_type)
    return _session_response(session_id, store)


@router.post(SESSION_PATH + "/save", response_model=SaveResponse)
async def save_session(
    restaurant_id: int,
    session_id: UUID,
    repository: Annotated[RestaurantTimeSlotRepository, Depends(get_repository)],
    sessions: Annotated[SessionService, Depends(get_session_service)],
) -> SaveResponse:
    """영업시간을 검증하고 저장합니다. 성공 시 세션이 닫힙니다.

    Validate and save the opening hours; the session closes on success.
    Validation failures return 422 with the incomplete sections and a
    rejected write returns 502; in both cases the edits are kept.
    """
    with _translate_errors():
        store: ScheduleStore = sessions.get_store(session_id, restaurant_id)
        records = await sessions.save_session(session_id, restaurant_id, repository)
    # 세션은 이미 닫힘 — the session is gone, so its notices ride on this response
    notices = store.drain_notices()
    return SaveResponse(
        message=notices[-1].message if notices else "Opening hours updated successfully",
        records=records,
        notices=notices,
    )


@router.delete(SESSION_PATH, status_code=204)
async def close_session(
    restaurant_id: int,
    session_id: UUID,
    sessions: Annotated[SessionService, Depends(get_session_service)],
) -> None:
    """편집 세션을 닫고 저장하지 않은 편집을 버립니다."""
    with _translate_errors():
        sessions.close_session(session_id, restaurant_id)
