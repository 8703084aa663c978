"""스케줄 스토어 — 편집 세션의 주간 스케줄 상태 관리.

Schedule store — The stateful core of an editing session.
Owns the current WeeklySchedule, applies edit commands as pure
transformations, gates submission through the validator, and orchestrates
load/save against the persistence collaborator.

State machine:
    Closed → Loading → Ready ⇄ Editing → Validating
        → Saving → Closed            (write accepted)
        → Saving → Ready             (write rejected, edits kept)
        → Ready                      (validation failed)
"""

import logging
from typing import Any, Iterable, Protocol

from service_hours.schemas.schedule import ServiceType, SlotField, WeeklySchedule
from service_hours.schemas.schedule_session import Notice, StoreState
from service_hours.services import schedule_commands
from service_hours.services.copy_operator import copy_service_schedule
from service_hours.services.normalizer import (
    default_weekly_schedule,
    from_backend,
    to_backend,
)
from service_hours.services.validator import incomplete_sections
from service_hours.utils.event_log import log_event
from service_hours.utils.exceptions import (
    FetchError,
    SaveError,
    ScheduleCommandError,
    ScheduleValidationError,
    StoreBusyError,
)


class ScheduleRepository(Protocol):
    """영속성 협력자 계약 (Persistence collaborator contract)."""

    async def fetch_schedule(self, restaurant_id: Any) -> list[dict[str, Any]]: ...

    async def replace_schedule(
        self, restaurant_id: Any, records: list[dict[str, Any]]
    ) -> None: ...


class ScheduleStore:
    """편집 세션 하나의 주간 스케줄 스토어.

    Weekly schedule store owned by one editing session.
    Mutation commands are synchronous and refused while a load or save is
    in flight; ``load`` and ``save`` are the only suspension points.

    Attributes:
        restaurant_id: 소유 레스토랑 ID (Owning restaurant)
        repository: 영속성 협력자 (Persistence collaborator)
        schedule: 현재 주간 스케줄 (Current weekly schedule)
        original_schedule: 마지막으로 불러오거나 저장한 스케줄
            (Last fetched or saved baseline; never used by reset)
        active_service_type: 선택된 서비스 유형 (Selected tab)
        state: 세션 상태 (Store state)
        notices: 대기 중인 사용자 알림 (Pending user-facing notices)
    """

    def __init__(self, restaurant_id: Any, repository: ScheduleRepository) -> None:
        self.restaurant_id: Any = restaurant_id
        self.repository: ScheduleRepository = repository
        self.schedule: WeeklySchedule = WeeklySchedule()
        self.original_schedule: WeeklySchedule | None = None
        self.active_service_type: ServiceType = ServiceType.DINE_IN
        self.state: StoreState = StoreState.CLOSED
        self.notices: list[Notice] = []

    # ------------------------------------------------------------------
    # 파생 상태 — Derived state
    # ------------------------------------------------------------------
    @property
    def is_loading(self) -> bool:
        return self.state == StoreState.LOADING

    @property
    def is_saving(self) -> bool:
        return self.state == StoreState.SAVING

    @property
    def incomplete_sections(self) -> list[ServiceType]:
        return incomplete_sections(self.schedule)

    @property
    def is_valid(self) -> bool:
        return not self.incomplete_sections

    def drain_notices(self) -> list[Notice]:
        """대기 중인 알림을 꺼내고 비웁니다 (Pop all pending notices)."""
        notices, self.notices = self.notices, []
        return notices

    def _notify(self, level: str, title: str, message: str) -> None:
        self.notices.append(Notice(level=level, title=title, message=message))

    def _ensure_editable(self) -> None:
        if self.state in (StoreState.LOADING, StoreState.VALIDATING, StoreState.SAVING):
            raise StoreBusyError(f"Schedule is {self.state.value}")
        if self.state == StoreState.CLOSED:
            raise ScheduleCommandError("Schedule is not loaded")

    def _apply(self, schedule: WeeklySchedule) -> WeeklySchedule:
        self.schedule = schedule
        self.state = StoreState.EDITING
        return schedule

    # ------------------------------------------------------------------
    # 로드 — Load
    # ------------------------------------------------------------------
    async def load(self) -> WeeklySchedule:
        """협력자에서 스케줄을 불러옵니다. 실패 시 기본 스케줄로 대체.

        Fetch and normalize the stored schedule. On FetchError the store
        falls back to an all-default schedule and queues an error notice so
        the user can still configure hours from scratch.

        Returns:
            WeeklySchedule: 불러온(또는 기본) 스케줄 (Loaded or default schedule)

        Raises:
            StoreBusyError: 로드/저장이 이미 진행 중 (A load or save is in flight)
        """
        if self.state in (StoreState.LOADING, StoreState.VALIDATING, StoreState.SAVING):
            raise StoreBusyError(f"Schedule is {self.state.value}")

        self.state = StoreState.LOADING
        try:
            records: list[dict[str, Any]] = await self.repository.fetch_schedule(
                self.restaurant_id
            )
            schedule: WeeklySchedule = from_backend(records)
        except FetchError as exc:
            schedule = default_weekly_schedule()
            self._notify("error", "Error", "Failed to load opening hours")
            log_event(
                "schedule.load_fallback",
                level=logging.WARNING,
                restaurant_id=self.restaurant_id,
                error=str(exc),
            )
        except Exception:
            self.state = StoreState.CLOSED
            raise
        else:
            log_event(
                "schedule.load",
                restaurant_id=self.restaurant_id,
                record_count=len(records),
            )

        self.schedule = schedule
        self.original_schedule = schedule
        self.state = StoreState.READY
        return schedule

    # ------------------------------------------------------------------
    # 편집 명령 — Edit commands
    # ------------------------------------------------------------------
    def select_service_type(self, service_type: ServiceType) -> None:
        """활성 탭을 변경합니다 (스케줄은 변경하지 않음)."""
        self.active_service_type = service_type

    def toggle_day(
        self, service_type: ServiceType, day_of_week: int, enabled: bool
    ) -> WeeklySchedule:
        self._ensure_editable()
        return self._apply(
            schedule_commands.toggle_day(self.schedule, service_type, day_of_week, enabled)
        )

    def add_slot(self, service_type: ServiceType, day_of_week: int) -> WeeklySchedule:
        self._ensure_editable()
        return self._apply(
            schedule_commands.add_slot(self.schedule, service_type, day_of_week)
        )

    def remove_slot(
        self, service_type: ServiceType, day_of_week: int, slot_index: int
    ) -> WeeklySchedule:
        self._ensure_editable()
        return self._apply(
            schedule_commands.remove_slot(
                self.schedule, service_type, day_of_week, slot_index
            )
        )

    def edit_slot(
        self,
        service_type: ServiceType,
        day_of_week: int,
        slot_index: int,
        field: SlotField | str,
        value: str,
    ) -> WeeklySchedule:
        self._ensure_editable()
        return self._apply(
            schedule_commands.edit_slot(
                self.schedule, service_type, day_of_week, slot_index, field, value
            )
        )

    def copy_to_others(
        self,
        source: ServiceType | None = None,
        targets: Iterable[ServiceType] | None = None,
    ) -> WeeklySchedule:
        """한 서비스 유형의 스케줄을 다른 서비스 유형에 복사합니다.

        Copy the source's schedule (default: active tab) onto ``targets``
        (default: every other service type). Copied entries lose their ids.

        Raises:
            ScheduleCommandError: 대상이 없거나 원본이 대상에 포함됨
                (No targets, or the source is among the targets)
        """
        self._ensure_editable()
        source = source or self.active_service_type
        if targets is None:
            target_list: list[ServiceType] = [
                service_type for service_type in ServiceType if service_type != source
            ]
        else:
            target_list = list(dict.fromkeys(targets))
        if not target_list:
            raise ScheduleCommandError("Select at least one service type to copy to")
        if source in target_list:
            raise ScheduleCommandError(f"Cannot copy {source.label} onto itself")

        schedule: WeeklySchedule = self._apply(
            copy_service_schedule(self.schedule, source, target_list)
        )
        self._notify("success", "Success", "Time slots copied successfully")
        return schedule

    def reset_active(self, service_type: ServiceType | None = None) -> WeeklySchedule:
        """한 서비스 유형의 모든 시각을 비웁니다 (불러온 값으로 복원하지 않음).

        Clear every slot time of one service type (default: active tab).
        The fetched baseline is intentionally not restored.
        """
        self._ensure_editable()
        service_type = service_type or self.active_service_type
        schedule: WeeklySchedule = self._apply(
            schedule_commands.reset_service(self.schedule, service_type)
        )
        self._notify(
            "success",
            "Reset Successful",
            f"{service_type.label} timings have been cleared. Please enter new timings.",
        )
        return schedule

    # ------------------------------------------------------------------
    # 저장 — Save
    # ------------------------------------------------------------------
    async def save(self) -> list[dict[str, Any]]:
        """스케줄을 검증하고 전체 교체로 저장합니다.

        Validate the schedule and submit it as a full replace.
        On success the submitted schedule becomes the new baseline and the
        store closes. On SaveError the store returns to Ready with every
        in-memory edit preserved so the caller can retry.

        Returns:
            list[dict]: 전송한 백엔드 레코드 (Submitted backend records)

        Raises:
            StoreBusyError: 로드/저장이 이미 진행 중 (A load or save is in flight)
            ScheduleValidationError: 활성 요일에 빈 시각 존재 (Incomplete enabled day)
            SaveError: 협력자가 저장을 거부 (Collaborator rejected the write)
        """
        self._ensure_editable()

        self.state = StoreState.VALIDATING
        sections: list[ServiceType] = incomplete_sections(self.schedule)
        if sections:
            self.state = StoreState.READY
            error = ScheduleValidationError(sections)
            self._notify("error", "Error", str(error))
            log_event(
                "schedule.validation_failed",
                level=logging.WARNING,
                restaurant_id=self.restaurant_id,
                sections=[section.value for section in sections],
            )
            raise error

        records: list[dict[str, Any]] = to_backend(self.schedule, self.restaurant_id)
        self.state = StoreState.SAVING
        try:
            await self.repository.replace_schedule(self.restaurant_id, records)
        except SaveError as exc:
            self.state = StoreState.READY
            self._notify("error", "Error", str(exc))
            log_event(
                "schedule.save_failed",
                level=logging.ERROR,
                restaurant_id=self.restaurant_id,
                error=str(exc),
            )
            raise
        except Exception:
            self.state = StoreState.READY
            raise

        self.original_schedule = self.schedule
        self.state = StoreState.CLOSED
        self._notify("success", "Success", "Opening hours updated successfully")
        log_event(
            "schedule.save",
            restaurant_id=self.restaurant_id,
            record_count=len(records),
        )
        return records

    def close(self) -> None:
        """세션을 닫습니다. 저장하지 않은 편집은 버려집니다.

        Close the store; unsaved edits are discarded with it.
        """
        self.state = StoreState.CLOSED
