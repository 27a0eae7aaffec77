"""
Sprint Simulator - Integrations

External collaborators used by the simulator:
- OpenAI: generative epic-to-story breakdown
"""

from .openai import (
    OpenAIClient,
    StoryGenerationError,
    ServiceNotConfiguredError,
    ServiceRequestError,
    EmptyResponseError,
    ResponseParseError,
    is_openai_configured
)

__all__ = [
    "OpenAIClient",
    "StoryGenerationError",
    "ServiceNotConfiguredError",
    "ServiceRequestError",
    "EmptyResponseError",
    "ResponseParseError",
    "is_openai_configured",
]
