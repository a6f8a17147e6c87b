"""
Cover letter generation service.

Generates a markdown cover letter from the caller's profile and a job
posting, and manages the caller's stored letters. Generation failures
propagate to the caller; nothing is stored in that case.
"""

import json
import logging
from typing import List, Optional

from careercoach.core.exceptions import NotFoundError
from careercoach.core.security import Identity, require_identity
from careercoach.models import CoverLetter, CoverLetterStatus, User
from careercoach.repositories import CoverLetterRepository, UserRepository
from careercoach.schemas.document import CoverLetterRequest
from careercoach.services.llm.structured_generator import FailurePolicy, ResilientStructuredGenerator
from careercoach.templates.prompts import CandidateProfile, JobPosting, cover_letter_prompt
from careercoach.utils.text_processing import strip_code_fences

logger = logging.getLogger(__name__)

CONTENT_KEYS = ("coverLetter", "cover_letter", "content")


def extract_cover_letter_content(text: str) -> str:
    """
    Pull the letter out of generated text.

    JSON answers carrying the letter under a known key yield that value;
    anything else is used as the letter itself.
    """
    cleaned = strip_code_fences(text)
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError:
        return cleaned

    if isinstance(parsed, dict):
        for key in CONTENT_KEYS:
            value = parsed.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return cleaned


class CoverLetterService:
    """Service for generating and managing cover letters."""

    failure_policy = FailurePolicy.PROPAGATE

    def __init__(
        self,
        users: UserRepository,
        cover_letters: CoverLetterRepository,
        structured: ResilientStructuredGenerator,
    ):
        self.users = users
        self.cover_letters = cover_letters
        self.structured = structured

    async def _require_user(self, identity: Optional[Identity]) -> User:
        identity = require_identity(identity)
        user = await self.users.find_by_subject(identity.subject)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def generate_cover_letter(
        self,
        identity: Optional[Identity],
        request: CoverLetterRequest,
    ) -> CoverLetter:
        """
        Generate and store a cover letter.

        Raises:
            UnauthorizedError: No caller identity
            NotFoundError: Unknown user
            GenerationFailedError: The letter could not be generated
        """
        user = await self._require_user(identity)

        prompt = cover_letter_prompt(
            CandidateProfile.from_dict(user.to_profile()),
            JobPosting(
                job_title=request.job_title,
                company_name=request.company_name,
                job_description=request.job_description,
            ),
        )
        logger.info(f"Generating cover letter for user {user.id}: {request.job_title} at {request.company_name}")
        await self.users.release()
        content = extract_cover_letter_content(await self.structured.complete(prompt))

        async with self.cover_letters.transaction():
            cover_letter = await self.cover_letters.add(
                CoverLetter(
                    user_id=user.id,
                    content=content,
                    job_description=request.job_description,
                    company_name=request.company_name,
                    job_title=request.job_title,
                    status=CoverLetterStatus.COMPLETED,
                )
            )
        return cover_letter

    async def list_cover_letters(self, identity: Optional[Identity]) -> List[CoverLetter]:
        user = await self._require_user(identity)
        return await self.cover_letters.list_for_user(user.id)

    async def get_cover_letter(self, identity: Optional[Identity], cover_letter_id: int) -> CoverLetter:
        user = await self._require_user(identity)
        cover_letter = await self.cover_letters.get_for_user(cover_letter_id, user.id)
        if cover_letter is None:
            raise NotFoundError(f"Cover letter {cover_letter_id} not found")
        return cover_letter

    async def delete_cover_letter(self, identity: Optional[Identity], cover_letter_id: int) -> None:
        """
        Raises:
            NotFoundError: No such letter owned by the caller
        """
        cover_letter = await self.get_cover_letter(identity, cover_letter_id)
        async with self.cover_letters.transaction():
            await self.cover_letters.delete(cover_letter)
        logger.info(f"Deleted cover letter {cover_letter_id}")
