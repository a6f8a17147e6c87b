"""
Unit tests for the AI Career Coach backend.

Services run against an in-memory SQLite database and a scripted
text-generation client; the Gemini client is tested with httpx.MockTransport.
"""
