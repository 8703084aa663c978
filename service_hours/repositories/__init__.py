"""레포지토리 패키지 — 레스토랑 백엔드 API 계층.

Repository package — Restaurant backend access layer.
Contains the persistence collaborator that fetches and replaces a
restaurant's stored opening hours over HTTP.
"""
