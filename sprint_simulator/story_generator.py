"""
Story Generator

Breaks an epic description into stories, either by keyword rules or by
delegating to a generative text service with a rule-based fallback.
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from .integrations.openai import OpenAIClient, clamp_points
from .models import Epic, Story, StoryStatus


logger = logging.getLogger(__name__)


# (keywords, [(title, description, points), ...])
KEYWORD_STORIES = [
    (
        ("api", "backend"),
        [
            ("Design and implement API endpoints",
             "Create RESTful API endpoints with proper error handling and validation", 8),
            ("Database schema and migrations",
             "Design database schema and create migration scripts", 5),
        ]
    ),
    (
        ("ui", "frontend", "interface"),
        [
            ("Build user interface components",
             "Create responsive UI components with proper styling", 8),
            ("Implement user interactions",
             "Add event handlers and state management for user interactions", 5),
        ]
    ),
    (
        ("auth", "login", "authentication"),
        [
            ("Implement authentication system",
             "Set up user authentication with secure token management", 13),
        ]
    ),
    (
        ("test", "testing"),
        [
            ("Write unit and integration tests",
             "Create comprehensive test coverage for critical paths", 8),
        ]
    ),
]

FALLBACK_STORIES = [
    ("Initial setup and configuration",
     "Set up project structure and development environment", 5),
    ("Core feature implementation",
     "Implement main functionality based on requirements", 13),
    ("Testing and validation",
     "Test the implementation and fix any issues", 8),
]


def _timestamp_ms() -> int:
    return int(time.time() * 1000)


def generate_stories_from_epic(description: str) -> list[Story]:
    """
    Rule-based breakdown of an epic description.

    Each keyword group found in the description adds its canned stories,
    in group order. When nothing matches, a fixed three-story set is used,
    so the result is never empty.
    """
    text = (description or "").lower()
    base_id = _timestamp_ms()

    templates = []
    for keywords, stories in KEYWORD_STORIES:
        if any(k in text for k in keywords):
            templates.extend(stories)

    if not templates:
        templates = FALLBACK_STORIES

    return [
        Story(
            id=f"story-{base_id}-{index}",
            title=title,
            description=desc,
            points=points,
            status=StoryStatus.PLANNED
        )
        for index, (title, desc, points) in enumerate(templates, start=1)
    ]


class StoryStrategy(ABC):
    """Abstract base class for story breakdown strategies."""

    name: str

    @abstractmethod
    async def generate(self, title: str, description: str) -> list[Story]:
        """Break an epic into stories."""
        pass


class RuleBasedStoryGenerator(StoryStrategy):
    """Deterministic keyword breakdown. Always available."""

    name = "rule-based"

    async def generate(self, title: str, description: str) -> list[Story]:
        return generate_stories_from_epic(description)


class OpenAIStoryGenerator(StoryStrategy):
    """Generative breakdown backed by the OpenAI chat completions API."""

    name = "openai"

    def __init__(self, client: OpenAIClient):
        self.client = client

    async def generate(self, title: str, description: str) -> list[Story]:
        stories = await self.client.generate_stories(title, description)
        # Clamp again so any client implementation honours the point range
        return [
            Story(
                id=s.id,
                title=s.title,
                description=s.description,
                points=clamp_points(s.points),
                status=StoryStatus.PLANNED
            )
            for s in stories
        ]


@dataclass
class EpicResult:
    """An epic plus the generator used and any fallback notice for the user."""
    epic: Epic
    generator: str
    notice: Optional[str] = None

    @property
    def fell_back(self) -> bool:
        return self.notice is not None

    def to_dict(self) -> dict:
        return {
            "epic": self.epic.to_dict(),
            "generator": self.generator,
            "notice": self.notice
        }


class StoryGenerator:
    """
    Picks a generation strategy and falls back to rules on any failure.

    Usage:
        generator = StoryGenerator(openai_client=OpenAIClient())
        result = await generator.create_epic("Checkout", "API and UI", use_ai=True)
    """

    def __init__(self, openai_client: Optional[OpenAIClient] = None):
        self.rule_based = RuleBasedStoryGenerator()
        self.generative = OpenAIStoryGenerator(openai_client) if openai_client else None

    @property
    def generative_available(self) -> bool:
        return self.generative is not None

    async def create_epic(
        self,
        title: str,
        description: str,
        use_ai: bool = False
    ) -> EpicResult:
        """
        Build an epic from a title and description.

        Never raises for generation failures; the returned notice carries
        the error message when the rule-based fallback was used.
        """
        stories = None
        notice = None
        generator = self.rule_based.name

        if use_ai and self.generative is not None:
            try:
                stories = await self.generative.generate(title, description)
                generator = self.generative.name
            except Exception as e:
                notice = str(e)
                logger.warning("Generative story breakdown failed, using rules: %s", notice)

        if not stories:
            stories = await self.rule_based.generate(title, description)
            generator = self.rule_based.name

        epic = Epic(
            id=f"epic-{_timestamp_ms()}",
            title=title,
            description=description,
            stories=stories
        )
        logger.info(
            "Created epic %r with %d stories (%d points) via %s",
            title, len(stories), epic.total_points, generator
        )
        return EpicResult(epic=epic, generator=generator, notice=notice)


def create_epic_from_description(title: str, description: str) -> Epic:
    """Rule-based epic, no network involved."""
    return Epic(
        id=f"epic-{_timestamp_ms()}",
        title=title,
        description=description,
        stories=generate_stories_from_epic(description)
    )


# Convenience function
async def create_epic(
    title: str,
    description: str,
    use_ai: bool = False,
    openai_client: Optional[OpenAIClient] = None
) -> EpicResult:
    """
    Quick function to build an epic, optionally via OpenAI.

    Example:
        result = await create_epic("Login", "auth flow with UI", use_ai=True,
                                   openai_client=OpenAIClient())
        if result.notice:
            print(f"Fell back to rules: {result.notice}")
    """
    return await StoryGenerator(openai_client).create_epic(title, description, use_ai)
