"""편집 세션 서비스 — 세션별 스케줄 스토어 생성/조회/종료.

Editing session service — Creates one ScheduleStore per editing session,
looks sessions up, and discards them on close. A store lives exactly as long
as its session; nothing is shared between sessions.

Results of a load or save that complete after their session was closed are
ignored here rather than in the store.
"""

from typing import Any
from uuid import UUID, uuid4

from service_hours.services.schedule_store import ScheduleRepository, ScheduleStore
from service_hours.utils.exceptions import SessionNotFoundError


class SessionService:
    """편집 세션 레지스트리.

    In-process registry of open editing sessions keyed by session UUID.
    """

    def __init__(self) -> None:
        self._sessions: dict[UUID, ScheduleStore] = {}

    def get_store(self, session_id: UUID, restaurant_id: Any) -> ScheduleStore:
        """세션의 스토어를 조회합니다.

        Look up the store of an open session owned by ``restaurant_id``.

        Raises:
            SessionNotFoundError: 세션이 없거나 다른 레스토랑 소유
                (Unknown session, or owned by another restaurant)
        """
        store: ScheduleStore | None = self._sessions.get(session_id)
        if store is None or store.restaurant_id != restaurant_id:
            raise SessionNotFoundError("Schedule session not found")
        return store

    def _is_current(self, session_id: UUID, store: ScheduleStore) -> bool:
        return self._sessions.get(session_id) is store

    async def open_session(
        self, restaurant_id: Any, repository: ScheduleRepository
    ) -> tuple[UUID, ScheduleStore]:
        """새 편집 세션을 열고 스케줄을 불러옵니다.

        Open a session and load its schedule.

        Args:
            restaurant_id: 레스토랑 ID (Restaurant identifier)
            repository: 영속성 협력자 (Persistence collaborator)

        Returns:
            tuple[UUID, ScheduleStore]: 세션 ID와 스토어 (Session id and its store)

        Raises:
            SessionNotFoundError: 로드 도중 세션이 닫힘 (Session closed while loading)
        """
        session_id: UUID = uuid4()
        store: ScheduleStore = ScheduleStore(restaurant_id, repository)
        self._sessions[session_id] = store

        try:
            await store.load()
        except Exception:
            self._sessions.pop(session_id, None)
            raise

        # 로드 중 세션이 닫혔으면 결과 무시 — Ignore a load that outlived its session
        if not self._is_current(session_id, store):
            raise SessionNotFoundError("Schedule session was closed while loading")
        return session_id, store

    async def save_session(
        self,
        session_id: UUID,
        restaurant_id: Any,
        repository: ScheduleRepository | None = None,
    ) -> list[dict[str, Any]]:
        """세션 스케줄을 저장합니다. 성공 시 세션이 닫힙니다.

        Save the session's schedule; the session is closed on success.
        ``repository`` replaces the store's collaborator so the write uses
        the caller's current credentials.

        Returns:
            list[dict]: 전송한 백엔드 레코드 (Submitted backend records)
        """
        store: ScheduleStore = self.get_store(session_id, restaurant_id)
        if repository is not None:
            store.repository = repository

        records: list[dict[str, Any]] = await store.save()

        if self._is_current(session_id, store):
            del self._sessions[session_id]
        return records

    def close_session(self, session_id: UUID, restaurant_id: Any) -> None:
        """세션을 닫고 저장하지 않은 편집을 버립니다.

        Close a session and discard its unsaved edits.
        """
        store: ScheduleStore = self.get_store(session_id, restaurant_id)
        store.close()
        del self._sessions[session_id]

    def clear(self) -> None:
        """모든 세션을 닫습니다 (Close every session)."""
        for store in self._sessions.values():
            store.close()
        self._sessions.clear()


# 싱글턴 인스턴스 — Singleton instance
session_service: SessionService = SessionService()
