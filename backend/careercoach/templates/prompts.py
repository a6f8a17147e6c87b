"""
Prompt Templates

Builders for the instructions sent to the text-generation service. Each
builder returns a plain string; parsing and normalization of the answer is
handled by ResilientStructuredGenerator.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from careercoach.utils.text_processing import format_bullet_list


@dataclass
class CandidateProfile:
    """Profile fields used to personalize prompts"""
    industry: Optional[str] = None
    experience: Optional[int] = None
    skills: List[str] = field(default_factory=list)
    bio: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "CandidateProfile":
        return cls(
            industry=data.get("industry"),
            experience=data.get("experience"),
            skills=list(data.get("skills") or []),
            bio=data.get("bio"),
        )


@dataclass
class JobPosting:
    """Target position for a cover letter"""
    job_title: str
    company_name: str
    job_description: Optional[str] = None


def industry_insight_prompt(industry: str) -> str:
    return f"""
Analyze the {industry} industry and return strictly valid JSON like this:
{{
  "salary_ranges": [
    {{ "role": "string", "min": number, "max": number, "median": number, "location": "string" }}
  ],
  "growth_rate": number,
  "demand_level": "HIGH" | "MEDIUM" | "LOW",
  "top_skills": ["string"],
  "market_outlook": "POSITIVE" | "NEUTRAL" | "NEGATIVE",
  "key_trends": ["string"],
  "recommended_skills": ["string"]
}}
Include at least 5 common roles in salary_ranges, and at least 5 entries in
each skills and trends list. growth_rate is a percentage.
IMPORTANT: Return ONLY JSON. No markdown, no backticks, no extra text.
""".strip()


def cover_letter_prompt(profile: CandidateProfile, job: JobPosting) -> str:
    skills = ", ".join(profile.skills) if profile.skills else "Not specified"
    return f"""
Write a professional cover letter for a {job.job_title} position at {job.company_name}.

About the candidate:
- Industry: {profile.industry or "Not specified"}
- Years of Experience: {profile.experience if profile.experience is not None else "Not specified"}
- Skills: {skills}
- Professional Background: {profile.bio or "Not specified"}

Job Description:
{job.job_description or "Not provided"}

Requirements:
1. Use a professional, enthusiastic tone
2. Highlight relevant skills and experience
3. Show understanding of the company's needs
4. Keep it concise (max 400 words)
5. Use proper business letter formatting in markdown
6. Include specific examples of achievements
7. Relate candidate's background to job requirements

Format the letter in markdown.
""".strip()


def quiz_prompt(profile: CandidateProfile, question_count: int = 10) -> str:
    skills = f" with expertise in {', '.join(profile.skills)}" if profile.skills else ""
    return f"""
Generate {question_count} technical interview questions for a {profile.industry} professional{skills}.

Each question should be multiple choice with 4 options.

Return the response in this JSON format only, no additional text:
{{
  "questions": [
    {{
      "question": "string",
      "options": ["string", "string", "string", "string"],
      "correct_answer": "string",
      "explanation": "string"
    }}
  ]
}}
""".strip()


def improvement_tip_prompt(industry: Optional[str], wrong_questions: List[str]) -> str:
    return f"""
The user is learning {industry or "their field"}. They struggled with these topics:
{format_bullet_list(wrong_questions)}

Based on these topics, provide a single, encouraging improvement tip.
Focus on the core concepts they should master next.

Return the response in this JSON format:
{{
  "tip": "your one-to-two sentence tip here"
}}
""".strip()
