"""관리자 API 라우터 패키지 — 모든 관리자 엔드포인트 통합.

Admin API Router package — Aggregates all admin-facing endpoints
into a single router for inclusion in the FastAPI application.

Included routers:
    - schedule_sessions: 영업시간 편집 세션 (Weekly service-hours editing sessions)
"""

from fastapi import APIRouter

from service_hours.api.admin.schedule_sessions import router as schedule_sessions_router

admin_router: APIRouter = APIRouter()

# 영업시간: /restaurants/{restaurant_id}/schedule-sessions 형태 (nested under restaurants)
admin_router.include_router(schedule_sessions_router, tags=["Schedule Sessions"])
