"""
Resilient structured generation on top of an unreliable text generator.

``ResilientStructuredGenerator`` wraps any client exposing
``generate_text(prompt, response_format)`` and adds:

- retry with a fixed backoff on rate limiting, bounded by a retry budget
- immediate failure on configuration errors (unknown model, bad key)
- code-fence cleanup and JSON parsing of the answer
- schema normalization of enum, list and number fields

and the named failure policies callers choose from:

- ``FailurePolicy.PROPAGATE``: ``generate`` raises GenerationFailedError
- ``FailurePolicy.SKIP_AND_CONTINUE``: ``generate_or_skip`` returns None
- ``FailurePolicy.PLACEHOLDER``: ``generate_or_placeholder`` returns a copy
  of a declared placeholder
"""

import asyncio
import copy
import enum
import json
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Protocol

from careercoach.core.exceptions import (
    GenerationFailedError,
    MalformedResponseError,
    ModelNotAvailableError,
    RateLimitedError,
    ServiceError,
)
from careercoach.services.llm.gemini_service import JSON_RESPONSE
from careercoach.utils.text_processing import strip_code_fences
from careercoach.utils.validation import DocumentSchema, normalize_document

logger = logging.getLogger(__name__)


class TextGenerationClient(Protocol):
    async def generate_text(self, prompt: str, response_format: Optional[str] = None) -> str:
        ...


class FailurePolicy(enum.Enum):
    """What a caller does when a document cannot be generated."""
    PROPAGATE = "propagate"
    SKIP_AND_CONTINUE = "skip_and_continue"
    PLACEHOLDER = "placeholder"


def parse_document(text: str) -> Dict[str, Any]:
    """
    Parse generated text into a JSON object.

    Raises:
        MalformedResponseError: If the cleaned text is not a JSON object
    """
    cleaned = strip_code_fences(text)
    try:
        document = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Generated text is not valid JSON: {e.msg}") from e
    if not isinstance(document, dict):
        raise MalformedResponseError(
            f"Generated JSON is a {type(document).__name__}, expected an object"
        )
    return document


class ResilientStructuredGenerator:
    """Retrying, normalizing front end to a text-generation client."""

    def __init__(
        self,
        client: TextGenerationClient,
        max_retries: int = 3,
        retry_delay: float = 30.0,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.client = client
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._sleep = sleep

    async def complete(self, prompt: str, response_format: Optional[str] = None) -> str:
        """
        Call the text generator, retrying on rate limiting.

        The first attempt is followed by at most ``max_retries`` retries, each
        preceded by a ``retry_delay`` second pause.

        Raises:
            GenerationFailedError: Retry budget exhausted, configuration error,
                or any other service error
        """
        retries_left = self.max_retries
        while True:
            try:
                return await self.client.generate_text(prompt, response_format=response_format)
            except RateLimitedError as e:
                if retries_left <= 0:
                    logger.error(f"Rate limit retry budget of {self.max_retries} exhausted")
                    raise GenerationFailedError("Text generation rate limited; retries exhausted") from e
                retries_left -= 1
                logger.warning(
                    f"Quota hit. Waiting {self.retry_delay}s before retry "
                    f"({self.max_retries - retries_left}/{self.max_retries})"
                )
                await self._sleep(self.retry_delay)
            except ModelNotAvailableError as e:
                logger.error(f"Text generation misconfigured: {e}")
                raise GenerationFailedError(f"Text generation unavailable: {e}") from e
            except ServiceError as e:
                logger.error(f"Text generation failed: {e}")
                raise GenerationFailedError(f"Text generation failed: {e}") from e

    async def generate(self, prompt: str, schema: Optional[DocumentSchema] = None) -> Dict[str, Any]:
        """
        Produce a normalized structured document for a prompt.

        Raises:
            GenerationFailedError: The call failed or the answer was unparsable
        """
        text = await self.complete(prompt, response_format=JSON_RESPONSE)
        document = parse_document(text)
        if schema is not None:
            document = normalize_document(document, schema)
        return document

    async def generate_or_skip(
        self,
        prompt: str,
        schema: Optional[DocumentSchema] = None,
        subject: str = "",
    ) -> Optional[Dict[str, Any]]:
        """Skip-and-continue policy: None instead of an error, for batch callers."""
        try:
            return await self.generate(prompt, schema)
        except GenerationFailedError as e:
            logger.warning(f"Skipping {subject or 'subject'}: {e}")
            return None

    async def generate_or_placeholder(
        self,
        prompt: str,
        placeholder: Dict[str, Any],
        schema: Optional[DocumentSchema] = None,
    ) -> Dict[str, Any]:
        """Placeholder policy: a copy of ``placeholder`` instead of an error."""
        try:
            return await self.generate(prompt, schema)
        except GenerationFailedError as e:
            logger.error(f"Generation failed, using placeholder: {e}")
            return copy.deepcopy(placeholder)
