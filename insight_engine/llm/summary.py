"""
Session Summary Generation

Summarizes a single session in the professional language of the
therapist's role, through the same dispatcher as insight generation.
"""

import logging
from typing import Optional

from insight_engine.config import AIConfig
from insight_engine.insights.formatter import format_session
from insight_engine.llm.client import CompletionClient, GenerationResult
from insight_engine.llm.dispatcher import generate_completion
from insight_engine.llm.prompts import NO_TRANSCRIPT_TEXT, get_prompt_for_role
from insight_engine.schemas.session import Session

logger = logging.getLogger(__name__)


def build_summary_prompts(session: Session, transcript: Optional[str] = None) -> tuple[str, str]:
    prompt = get_prompt_for_role(session.therapist_role)
    user_prompt = prompt.user_prompt_template.format(
        soap_notes=format_session(session),
        transcript=transcript.strip() if transcript and transcript.strip() else NO_TRANSCRIPT_TEXT,
    )
    return prompt.system_prompt, user_prompt


async def generate_session_summary(
    session: Session,
    config: AIConfig,
    transcript: Optional[str] = None,
    client: Optional[CompletionClient] = None,
) -> GenerationResult:
    """Generate a role-specific summary for one session. Never raises."""
    system_prompt, user_prompt = build_summary_prompts(session, transcript)
    result = await generate_completion(
        system_prompt,
        user_prompt,
        config,
        role=session.therapist_role,
        client=client,
    )
    if result.error:
        logger.error(f"Summary generation failed for session {session.id}: {result.error}")
    else:
        logger.info(f"Generated {result.mode.value} summary for session {session.id}")
    return result
