"""
Generation Dispatcher

Chooses between the offline mock and the live text-completion service based
on the configuration passed in. Both paths return a GenerationResult of the
same shape; no exception crosses this boundary.
"""

import logging
from typing import Optional

from insight_engine.config import AIConfig
from insight_engine.llm.client import CompletionClient, GenerationResult
from insight_engine.llm.mock import generate_mock_completion
from insight_engine.schemas.insights import GenerationMode
from insight_engine.schemas.session import TherapistRole

logger = logging.getLogger(__name__)


async def generate_completion(
    system_prompt: str,
    user_prompt: str,
    config: AIConfig,
    role: Optional[TherapistRole] = None,
    client: Optional[CompletionClient] = None,
) -> GenerationResult:
    """
    Generate text for a system/user prompt pair.

    Args:
        system_prompt: Instructions establishing the generator's role
        user_prompt: The content to act on
        config: Generation settings; an API key selects real mode
        role: Therapist role, used to pick the mock template
        client: Optional pre-built live client (real mode only)

    Returns:
        GenerationResult; failures are reported through its error field
    """
    if config.mode == GenerationMode.MOCK:
        logger.info("No API key configured, using mock generation")
        return generate_mock_completion(user_prompt, role)

    client = client or CompletionClient(config)
    return await client.complete(system_prompt, user_prompt)
