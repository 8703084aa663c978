"""레스토랑 영업시간 레포지토리 — 레스토랑 백엔드 API 호출 계층.

Restaurant time-slot repository — The persistence collaborator.
Fetches the stored flat day-schedule records for a restaurant and submits
a full-replace write, over the restaurant backend's HTTP API.

Endpoints:
    GET {base}/restaurant-time-slots?restaurant_id=<id>
        → {"restaurant_time_slots": [...]}
    PUT {base}/restaurant_time_slots
        body: [flat day-schedule record, ...]
"""

from typing import Any

import httpx

from service_hours.config import settings
from service_hours.utils.exceptions import FetchError, SaveError


class RestaurantTimeSlotRepository:
    """레스토랑 영업시간 API 클라이언트.

    Restaurant backend client for opening hours.
    One instance is bound to the caller's bearer token; transport errors,
    non-2xx responses and unparsable bodies are raised as FetchError or
    SaveError.

    Attributes:
        base_url: 백엔드 API 기본 주소 (Backend base URL)
        token: 전달할 Bearer 토큰 (Bearer token forwarded to the backend)
        timezone: X-Timezone 헤더 값 (Zone label sent as X-Timezone)
    """

    def __init__(
        self,
        token: str,
        base_url: str | None = None,
        timeout: float | None = None,
        timezone: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.token: str = token
        self.base_url: str = (base_url or settings.RESTAURANT_API_BASE_URL).rstrip("/")
        self.timeout: float | None = (
            timeout if timeout is not None else settings.RESTAURANT_API_TIMEOUT
        )
        self.timezone: str = timezone or settings.SCHEDULE_TIMEZONE
        self._transport: httpx.AsyncBaseTransport | None = transport

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "Authorization": f"Bearer {self.token}",
            "X-Timezone": self.timezone,
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._headers(),
            timeout=self.timeout,
            transport=self._transport,
        )

    async def fetch_schedule(self, restaurant_id: Any) -> list[dict[str, Any]]:
        """레스토랑의 저장된 영업시간 레코드를 조회합니다.

        Fetch the stored flat day-schedule records of a restaurant.

        Args:
            restaurant_id: 레스토랑 ID (Restaurant identifier)

        Returns:
            list[dict]: 백엔드 요일 레코드 목록 (Flat backend records, possibly empty)

        Raises:
            FetchError: 네트워크/인증/파싱 실패 (Network, auth or parse failure)
        """
        try:
            async with self._client() as client:
                response: httpx.Response = await client.get(
                    "/restaurant-time-slots",
                    params={"restaurant_id": restaurant_id},
                )
                response.raise_for_status()
                data: Any = response.json()
        except httpx.HTTPStatusError as exc:
            raise FetchError(
                f"Failed to fetch time slots (HTTP {exc.response.status_code})"
            ) from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"Failed to fetch time slots: {exc}") from exc
        except ValueError as exc:
            raise FetchError("Failed to parse time slots response") from exc

        # 응답 키가 없으면 빈 목록 — A missing key means no stored records
        if isinstance(data, dict):
            records: Any = data.get("restaurant_time_slots") or []
        else:
            records = data or []
        if not isinstance(records, list):
            raise FetchError("Unexpected time slots payload")
        return records

    async def replace_schedule(
        self, restaurant_id: Any, records: list[dict[str, Any]]
    ) -> None:
        """레스토랑 영업시간 전체를 교체합니다.

        Submit a full-replace write of a restaurant's day-schedule records.

        Args:
            restaurant_id: 레스토랑 ID (Restaurant identifier)
            records: 전체 교체용 레코드 목록 (Complete flat record list)

        Raises:
            SaveError: 백엔드가 요청을 거부함 (Backend rejected the write)
        """
        payload: list[dict[str, Any]] = [
            {**record, "restaurant_id": record.get("restaurant_id", restaurant_id)}
            for record in records
        ]
        try:
            async with self._client() as client:
                response: httpx.Response = await client.put(
                    "/restaurant_time_slots", json=payload
                )
        except httpx.HTTPError as exc:
            raise SaveError(f"Failed to update opening hours: {exc}") from exc

        if response.is_error:
            raise SaveError(self._error_message(response))

    @staticmethod
    def _error_message(response: httpx.Response) -> str | None:
        """오류 응답 본문에서 메시지를 추출합니다 (message / detail 키).

        Extract a human-readable message from an error response, if any.
        """
        try:
            body: Any = response.json()
        except ValueError:
            return None
        if isinstance(body, dict):
            message: Any = body.get("message") or body.get("detail")
            if isinstance(message, str) and message:
                return message
        return None
