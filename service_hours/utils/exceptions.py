"""커스텀 예외 클래스 모듈.

Custom exception classes module.

Two families live here:
    - 도메인 예외 (Domain exceptions): raised by the schedule core and the
      restaurant API collaborator. They carry no HTTP semantics.
    - HTTP 예외 (HTTP exceptions): pre-configured HTTPException subclasses
      raised by routers after translating a domain exception.

Usage:
    from service_hours.utils.exceptions import SaveError, BadGatewayError
    raise SaveError("Restaurant API rejected the schedule")
    raise BadGatewayError(str(exc))
"""

from fastapi import HTTPException, status


# === 도메인 예외 (Domain exceptions) ===

class ScheduleError(Exception):
    """스케줄 도메인 예외의 기본 클래스 (Base class for schedule errors)."""


class FetchError(ScheduleError):
    """스케줄 조회 실패 — 네트워크/인증/파싱 오류.

    Raised when the restaurant API cannot return the stored schedule
    (network, auth or parse failure). Recovered locally by the store.
    """


class SaveError(ScheduleError):
    """스케줄 저장 실패 — 백엔드가 전체 교체 요청을 거부.

    Raised when the restaurant API rejects a full-replace write.
    Not recovered locally; the store keeps in-memory edits for a retry.

    Args:
        message: 사용자용 오류 메시지 (Optional human-readable message)
    """

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "Failed to update opening hours")
        self.message: str | None = message


class ScheduleValidationError(ScheduleError):
    """검증 실패 — 활성화된 요일에 빈 시간 슬롯이 있음.

    Raised by save() when an enabled day has an empty start or end time.
    Never reaches the collaborator.

    Args:
        sections: 미완성 서비스 유형 목록 (Incomplete service types)
    """

    def __init__(self, sections: list) -> None:
        names: str = ", ".join(section.label for section in sections)
        super().__init__(f"Please enter a valid time ({names})")
        self.sections: list = list(sections)


class ScheduleCommandError(ScheduleError):
    """허용되지 않는 편집 명령 (Refused edit command, e.g. removing the last slot)."""


class StoreBusyError(ScheduleError):
    """로드/저장 진행 중 명령 거부 (Command refused while loading or saving)."""


class SessionNotFoundError(ScheduleError):
    """편집 세션이 없거나 이미 닫힘 (Editing session unknown or already closed)."""


# === HTTP 예외 (HTTP exceptions) ===

class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    404 Not Found exception.
    Raised when a requested resource (editing session, day, slot) does not exist.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 — 인증 토큰이 없을 때 사용.

    401 Unauthorized exception.
    Raised when the Authorization bearer token needed for the restaurant API is missing.

    Args:
        detail: 오류 메시지 (Error message, default: "Authentication required")
    """

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 편집 명령 시 사용.

    400 Bad Request exception.
    Raised when a schedule command is refused (e.g. removing a day's last slot,
    adding a slot to a disabled day, copying a service type onto itself).

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class ConflictError(HTTPException):
    """409 Conflict 예외 — 로드/저장 진행 중 요청 시 사용.

    409 Conflict exception.
    Raised when a command arrives while the session is loading or saving.

    Args:
        detail: 오류 메시지 (Error message, default: "Session is busy")
    """

    def __init__(self, detail: str = "Session is busy") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class UnprocessableError(HTTPException):
    """422 Unprocessable 예외 — 스케줄 검증 실패 시 사용.

    422 Unprocessable Entity exception.
    Carries the incomplete service types so the client can flag each section.

    Args:
        detail: 오류 메시지 또는 구조화된 상세 (Message or structured detail)
    """

    def __init__(self, detail: str | dict = "Please enter a valid time") -> None:
        super().__init__(status_code=422, detail=detail)


class BadGatewayError(HTTPException):
    """502 Bad Gateway 예외 — 레스토랑 API 저장 실패 시 사용.

    502 Bad Gateway exception.
    Raised when the upstream restaurant API rejects the schedule write.

    Args:
        detail: 오류 메시지 (Error message, default: "Failed to update opening hours")
    """

    def __init__(self, detail: str = "Failed to update opening hours") -> None:
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)
