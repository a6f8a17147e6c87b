"""
LLM services package for the AI Career Coach backend.

This package contains the Gemini text-generation client and the resilient
structured generator that turns its answers into normalized documents.

Usage:
    from careercoach.services.llm import GeminiService, ResilientStructuredGenerator

    client = GeminiService(api_key=settings.gemini_api_key, model=settings.gemini_model)
    generator = ResilientStructuredGenerator(client, max_retries=3, retry_delay=30.0)
    document = await generator.generate(prompt, schema)
"""

from .gemini_service import GeminiService, JSON_RESPONSE, TEXT_RESPONSE
from .structured_generator import (
    FailurePolicy,
    ResilientStructuredGenerator,
    TextGenerationClient,
    parse_document,
)

__all__ = [
    "GeminiService",
    "JSON_RESPONSE",
    "TEXT_RESPONSE",
    "FailurePolicy",
    "ResilientStructuredGenerator",
    "TextGenerationClient",
    "parse_document",
]
