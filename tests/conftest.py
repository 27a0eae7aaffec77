"""
Shared fixtures for the sprint simulator tests.
"""

import pytest

from sprint_simulator.config import load_skill_multipliers
from sprint_simulator.models import SkillArea, SkillLevel, Story, StoryStatus, TeamMember


@pytest.fixture
def multipliers():
    return load_skill_multipliers()


def make_member(member_id, name=None, availability=1.0, **skills):
    """Build a member from keyword skills, e.g. backend=SkillLevel.SENIOR."""
    return TeamMember(
        id=member_id,
        name=name or member_id.title(),
        skills={SkillArea(area): level for area, level in skills.items()},
        availability=availability
    )


def make_story(story_id, points, status=StoryStatus.PLANNED):
    return Story(
        id=story_id,
        title=f"Story {story_id}",
        description="",
        points=points,
        status=status
    )


@pytest.fixture
def senior_backend():
    return make_member("alice", "Alice", backend=SkillLevel.SENIOR)
