"""
Text Generation

Live client for the text-completion service, its offline mock, prompt
templates, and the dispatcher that picks between them.
"""

from insight_engine.llm.client import CompletionClient, GenerationResult
from insight_engine.llm.dispatcher import generate_completion

__all__ = [
    "CompletionClient",
    "GenerationResult",
    "generate_completion",
]
