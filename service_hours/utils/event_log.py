"""스케줄 이벤트 로거 — Axiom 이벤트 전송 + 표준 로거 기록.

Schedule event logger.
Emits structured lifecycle events (load, fallback, save, failures) to Axiom
when it is configured, and always to the module's standard logger.
Logging failures never propagate to the caller.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from axiom_py import Client as AxiomClient

from service_hours.config import settings

logger: logging.Logger = logging.getLogger("service_hours.events")

_client: AxiomClient | None = None


def get_axiom_client() -> AxiomClient | None:
    """설정된 경우 공유 Axiom 클라이언트를 반환합니다.

    Return the shared Axiom client, or None when Axiom is not configured.
    """
    global _client
    if _client is None and settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
        _client = AxiomClient(token=settings.AXIOM_API_TOKEN)
    return _client


def log_event(event: str, level: int = logging.INFO, **fields: Any) -> None:
    """스케줄 이벤트를 기록합니다.

    Record a schedule lifecycle event.

    Args:
        event: 이벤트 이름 (Event name, e.g. "schedule.save")
        level: 표준 로거 레벨 (Standard logging level)
        **fields: 추가 필드 (Extra structured fields, e.g. restaurant_id)
    """
    logger.log(level, "%s %s", event, fields)

    client: AxiomClient | None = get_axiom_client()
    if client is None:
        return

    payload: dict[str, Any] = {
        "_time": datetime.now(timezone.utc).isoformat(),
        "event": event,
        "level": logging.getLevelName(level),
        **fields,
    }
    try:
        client.ingest_events(settings.AXIOM_DATASET, [payload])
    except Exception:
        # 로깅 실패가 스케줄 처리에 영향주지 않도록 — Never break scheduling on log failure
        logger.warning("Axiom ingest failed for %s", event, exc_info=True)
