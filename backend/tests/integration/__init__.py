"""
Integration tests for the AI Career Coach backend.

Repositories are exercised against SQLite through aiosqlite; the HTTP API is
driven through httpx.AsyncClient with ASGITransport and dependency overrides.
"""
