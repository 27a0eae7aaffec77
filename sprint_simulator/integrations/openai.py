"""
OpenAI Integration for Sprint Simulator

Breaks an epic into user stories with the chat completions API.
"""

import json
import logging
import os
import re
import time
from typing import Optional

import httpx

from ..models import Story, StoryStatus


logger = logging.getLogger(__name__)

OPENAI_API_URL = "https://api.openai.com/v1/chat/completions"

MIN_POINTS = 1
MAX_POINTS = 21

CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)

SYSTEM_PROMPT = """You are an expert Agile product owner who breaks down epics into well-structured user stories.

Your task is to analyze an epic description and generate a list of user stories with:
1. Clear, actionable titles
2. Detailed descriptions
3. Story point estimates using Fibonacci sequence (1, 2, 3, 5, 8, 13, 21)

Return ONLY a valid JSON array of stories in this exact format:
[
  {
    "title": "Story title",
    "description": "Detailed description of what needs to be done",
    "points": 8
  }
]

Guidelines:
- Break down the epic into 3-8 stories
- Each story should be independently deliverable
- Points should reflect complexity (1=trivial, 13=complex, 21=very complex)
- Include stories for backend, frontend, testing, and infrastructure as needed
- Be specific and technical"""


class StoryGenerationError(Exception):
    """Base error for generative story breakdown."""


class ServiceNotConfiguredError(StoryGenerationError):
    """No API key available."""


class ServiceRequestError(StoryGenerationError):
    """Network failure or non-2xx response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class EmptyResponseError(StoryGenerationError):
    """The response carried no message content."""


class ResponseParseError(StoryGenerationError):
    """The message content was not a valid story list."""


def clamp_points(points) -> int:
    """Round to a whole point value inside [1, 21]."""
    return max(MIN_POINTS, min(MAX_POINTS, int(round(float(points)))))


def strip_code_fences(content: str) -> str:
    """Remove ```json / ``` markdown fences around a JSON payload."""
    # Fences may share a line with the payload
    return CODE_FENCE_RE.sub("", content.strip()).strip()


def build_user_prompt(epic_title: str, epic_description: str) -> str:
    return (
        f"Epic Title: {epic_title}\n\n"
        f"Epic Description:\n{epic_description}\n\n"
        "Generate user stories for this epic. Return only the JSON array, no additional text."
    )


def parse_stories(content: str, base_id: Optional[int] = None) -> list[Story]:
    """
    Convert model output into planned stories.

    Raises:
        ResponseParseError: content is not a JSON array of
            {title, description, points} objects
    """
    try:
        data = json.loads(strip_code_fences(content))
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Failed to parse OpenAI response: {e}") from e

    if not isinstance(data, list) or not data:
        raise ResponseParseError("Failed to parse OpenAI response: expected a non-empty JSON array of stories")

    base_id = base_id or int(time.time() * 1000)
    stories = []
    for index, item in enumerate(data, start=1):
        if not isinstance(item, dict):
            raise ResponseParseError(f"Failed to parse OpenAI response: story {index} is not an object")
        try:
            title = str(item["title"])
            points = clamp_points(item["points"])
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            raise ResponseParseError(f"Failed to parse OpenAI response: story {index} is malformed ({e})") from e

        stories.append(Story(
            id=f"story-{base_id}-{index}",
            title=title,
            description=str(item.get("description", "")),
            points=points,
            status=StoryStatus.PLANNED
        ))

    return stories


class OpenAIClient:
    """
    OpenAI chat completions client for epic breakdown.

    Usage:
        client = OpenAIClient(api_key="sk-...")
        stories = await client.generate_stories("Checkout", "Build the checkout API and UI")
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4o-mini",
        url: str = OPENAI_API_URL,
        temperature: float = 0.7,
        max_tokens: int = 2000,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        self.model = model
        self.url = url
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.transport = transport

        if not self.api_key:
            raise ServiceNotConfiguredError(
                "OpenAI API key not found. Set OPENAI_API_KEY or pass api_key."
            )

        self.headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}"
        }

    async def _request(self, payload: dict) -> dict:
        """POST to the completions endpoint and return the decoded body."""
        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.post(
                    self.url,
                    headers=self.headers,
                    json=payload,
                    timeout=self.timeout
                )
        except httpx.HTTPError as e:
            raise ServiceRequestError(f"OpenAI API request failed: {e}") from e

        if response.is_error:
            detail = ""
            try:
                detail = (response.json().get("error") or {}).get("message", "")
            except (ValueError, AttributeError):
                pass
            raise ServiceRequestError(
                f"OpenAI API error: {response.status_code} {response.reason_phrase}. {detail}".strip(),
                status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError as e:
            raise ResponseParseError(f"Failed to parse OpenAI response: {e}") from e

    async def generate_stories(self, epic_title: str, epic_description: str) -> list[Story]:
        """
        Ask the model for a story breakdown of an epic.

        Raises:
            StoryGenerationError subclasses on any failure.
        """
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_user_prompt(epic_title, epic_description)}
            ],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens
        }

        data = await self._request(payload)

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None

        if not content:
            raise EmptyResponseError("No response content from OpenAI")

        stories = parse_stories(content)
        logger.info("OpenAI generated %d stories for epic %r", len(stories), epic_title)
        return stories


def is_openai_configured(api_key: Optional[str] = None) -> bool:
    """Check whether an API key is available."""
    return bool(api_key or os.getenv("OPENAI_API_KEY"))
