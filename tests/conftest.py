"""테스트 인프라 — 가짜 레스토랑 API, 스토어, httpx 클라이언트 픽스처.

Test infrastructure — In-memory restaurant API collaborator, store, and
httpx client fixtures. The FastAPI app runs in-process via ASGITransport
with its repository and session registry overridden.
"""

import copy
from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from service_hours.api.deps import get_repository, get_session_service
from service_hours.main import app
from service_hours.services.schedule_store import ScheduleStore
from service_hours.services.session_service import SessionService
from service_hours.utils.exceptions import FetchError, SaveError

RESTAURANT_ID = 42


class FakeTimeSlotRepository:
    """메모리 기반 레스토랑 API — 호출 기록 및 실패 주입.

    In-memory stand-in for the restaurant API collaborator.
    Records every call and can be told to fail fetches or saves.
    """

    def __init__(self, records: list[dict[str, Any]] | None = None) -> None:
        self.records: list[dict[str, Any]] = records or []
        self.fail_fetch: bool = False
        self.fail_save: bool = False
        self.save_message: str | None = None
        self.fetch_calls: list[Any] = []
        self.saved: list[tuple[Any, list[dict[str, Any]]]] = []

    async def fetch_schedule(self, restaurant_id: Any) -> list[dict[str, Any]]:
        self.fetch_calls.append(restaurant_id)
        if self.fail_fetch:
            raise FetchError("Failed to fetch time slots")
        return copy.deepcopy(self.records)

    async def replace_schedule(
        self, restaurant_id: Any, records: list[dict[str, Any]]
    ) -> None:
        if self.fail_save:
            raise SaveError(self.save_message)
        self.saved.append((restaurant_id, copy.deepcopy(records)))
        self.records = copy.deepcopy(records)


def make_record(
    order_type_id: int,
    day_of_week: int,
    slots: list[tuple[str, str]] | None = None,
    status: int = 1,
    record_id: Any = None,
    slot_ids: list[Any] | None = None,
) -> dict[str, Any]:
    """테스트용 백엔드 레코드를 생성합니다 (flat record builder)."""
    slots = slots if slots is not None else [("10:00", "23:00")]
    slot_ids = slot_ids or [None] * len(slots)
    record: dict[str, Any] = {
        "day_of_week": day_of_week,
        "status": status,
        "order_type_id": order_type_id,
        "slots": [],
    }
    for (start, end), slot_id in zip(slots, slot_ids):
        slot: dict[str, Any] = {"start_time": start, "end_time": end}
        if slot_id is not None:
            slot["id"] = slot_id
        record["slots"].append(slot)
    if record_id is not None:
        record["id"] = record_id
    return record


def make_full_records() -> list[dict[str, Any]]:
    """ID가 모두 채워진 21개 레코드 (All 21 records with ids)."""
    records: list[dict[str, Any]] = []
    next_id = 1
    for order_type_id in (1, 2, 3):
        for day in range(1, 8):
            records.append(make_record(
                order_type_id,
                day,
                slots=[("09:00", "14:00"), ("17:30", "22:00")],
                status=0 if day == 7 else 1,
                record_id=next_id,
                slot_ids=[next_id * 10, next_id * 10 + 1],
            ))
            next_id += 1
    return records


@pytest.fixture
def repository() -> FakeTimeSlotRepository:
    return FakeTimeSlotRepository(make_full_records())


@pytest_asyncio.fixture
async def store(repository: FakeTimeSlotRepository) -> ScheduleStore:
    """불러오기가 끝난 스토어 (A store that has finished loading)."""
    s = ScheduleStore(RESTAURANT_ID, repository)
    await s.load()
    return s


@pytest.fixture
def sessions() -> SessionService:
    return SessionService()


@pytest_asyncio.fixture
async def client(
    repository: FakeTimeSlotRepository, sessions: SessionService
) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — 레포지토리와 세션 서비스를 오버라이드합니다."""
    app.dependency_overrides[get_repository] = lambda: repository
    app.dependency_overrides[get_session_service] = lambda: sessions

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


def auth_header(token: str = "test-token") -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
