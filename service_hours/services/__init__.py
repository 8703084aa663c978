"""서비스 패키지 — 영업시간 비즈니스 로직 계층.

Service package — Business logic layer.
Contains the pure schedule functions (normalizer, validator, copy operator,
edit commands), the stateful ScheduleStore, and the editing session registry.
"""
