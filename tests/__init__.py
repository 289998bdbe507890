"""Unit tests for the translation router.

Tests use pytest with asyncio support; backend services and HTTP calls are replaced through
monkeypatch or served by in-process aiohttp test servers.
"""
