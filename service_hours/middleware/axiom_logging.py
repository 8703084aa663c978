"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Sends one structured event per schedule-session request to Axiom:
endpoint, method, restaurant/session ids, request body, status code and
error reason. Sensitive fields (token, secret, authorization) are masked.
"""

import json
import logging
import re
import time
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from service_hours.config import settings
from service_hours.utils.event_log import get_axiom_client

logger: logging.Logger = logging.getLogger(__name__)

# 마스킹 대상 필드 패턴 — Fields to mask in request bodies
_SENSITIVE_KEYS = re.compile(
    r"(password|secret|token|authorization|api_key|apikey|credential)",
    re.IGNORECASE,
)

# 경로에서 레스토랑/세션 ID 추출 — Pull ids out of schedule-session paths
_SESSION_PATH = re.compile(
    r"/restaurants/(?P<restaurant_id>[^/]+)/schedule-sessions(?:/(?P<session_id>[^/]+))?"
)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}


def _mask_dict(data: Any, depth: int = 0) -> Any:
    """민감 필드 자동 마스킹 — Recursively mask sensitive fields in dicts/lists."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(k) else _mask_dict(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [_mask_dict(item, depth + 1) for item in data[:20]]
    return data


def _truncate(value: Any, max_len: int = 2000) -> Any:
    """로그 크기 제한 — Truncate large string values."""
    if isinstance(value, str) and len(value) > max_len:
        return value[:max_len] + "...(truncated)"
    return value


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Middleware that logs API requests and responses to Axiom.
    Passes requests straight through when Axiom is not configured.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path: str = request.url.path
        client = get_axiom_client()
        if path in _SKIP_PATHS or client is None:
            return await call_next(request)

        started: float = time.time()
        method: str = request.method

        request_body: Any = None
        if method in ("POST", "PUT", "PATCH"):
            try:
                body_bytes: bytes = await request.body()
                if body_bytes:
                    request_body = _truncate(_mask_dict(json.loads(body_bytes)))
            except (json.JSONDecodeError, UnicodeDecodeError):
                request_body = "(non-json body)"

        error_detail: str | None = None
        status_code: int = 500
        try:
            response: Response = await call_next(request)
            status_code = response.status_code

            # 에러 응답시 body에서 사유 추출 — Extract error detail from error responses
            if status_code >= 400:
                resp_body: bytes = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                try:
                    detail: Any = json.loads(resp_body).get("detail")
                    error_detail = _truncate(
                        detail if isinstance(detail, str) else json.dumps(detail), 500
                    )
                except (json.JSONDecodeError, UnicodeDecodeError, AttributeError):
                    error_detail = resp_body.decode("utf-8", errors="replace")[:500]

                # 소비한 body를 다시 응답으로 반환 — Re-wrap consumed body
                response = Response(
                    content=resp_body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error_detail = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            log_event: dict[str, Any] = {
                "method": method,
                "path": path,
                "status_code": status_code,
                "duration_ms": round((time.time() - started) * 1000, 2),
            }
            match = _SESSION_PATH.search(path)
            if match:
                log_event["restaurant_id"] = match.group("restaurant_id")
                if match.group("session_id"):
                    log_event["session_id"] = match.group("session_id")
            if request_body is not None:
                log_event["request_body"] = request_body
            if error_detail:
                log_event["error"] = error_detail

            try:
                client.ingest_events(settings.AXIOM_DATASET, [log_event])
            except Exception:
                # 로깅 실패가 요청 처리에 영향주지 않도록 — Never break a request on log failure
                logger.warning("Axiom ingest failed for %s %s", method, path, exc_info=True)

        return response
