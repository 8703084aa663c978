"""FastAPI 의존성 주입 모듈 — Bearer 토큰 및 레스토랑 API 협력자.

FastAPI dependency injection module.
Token issuance lives outside this service: the caller's bearer token is
only extracted here and forwarded to the restaurant backend.

Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. HTTPBearer가 토큰을 추출, 없으면 401 (Token extracted, 401 if missing)
    3. 토큰에 바인딩된 RestaurantTimeSlotRepository 생성
       (A repository bound to that token is built per request)
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from service_hours.repositories.time_slot_repository import RestaurantTimeSlotRepository
from service_hours.services.session_service import SessionService, session_service
from service_hours.utils.exceptions import UnauthorizedError

# HTTP Bearer 토큰 추출기 — 누락 시 직접 401 처리 (Missing token handled below)
security: HTTPBearer = HTTPBearer(auto_error=False)


async def get_bearer_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> str:
    """Authorization 헤더에서 Bearer 토큰을 추출합니다.

    Extract the bearer token from the Authorization header.

    Raises:
        UnauthorizedError: 토큰이 없을 때 (When the token is missing)
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()
    return credentials.credentials


async def get_repository(
    token: Annotated[str, Depends(get_bearer_token)],
) -> RestaurantTimeSlotRepository:
    """요청 토큰에 바인딩된 레스토랑 API 레포지토리 (Per-request repository)."""
    return RestaurantTimeSlotRepository(token=token)


def get_session_service() -> SessionService:
    """편집 세션 서비스 싱글턴 (Editing session service singleton)."""
    return session_service
