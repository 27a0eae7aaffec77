"""
Sprint Planner

Packs stories into sprints against the team's weekly capacity.
"""

import logging
from typing import Optional

from .capacity import CapacityModel
from .config import SkillMultiplierTable
from .models import Epic, Sprint, Story, TeamMember


logger = logging.getLogger(__name__)


class SprintPlanner:
    """
    Greedy largest-first sprint packing.

    Each sprint takes, in descending point order, every story that still
    fits in its remaining capacity. When a sprint cannot take anything,
    the leftover stories go into a single overflow sprint that may exceed
    capacity. Packing is not optimal.

    Usage:
        planner = SprintPlanner(load_skill_multipliers())
        sprints = planner.plan(epic.stories, team)
    """

    def __init__(self, multipliers: Optional[SkillMultiplierTable] = None):
        self.capacity_model = CapacityModel(multipliers)

    def sprint_capacity(self, team: list[TeamMember]) -> int:
        return self.capacity_model.calculate(team).sprint_capacity

    def plan(self, stories: list[Story], team: list[TeamMember]) -> list[Sprint]:
        if not team or not stories:
            return []

        capacity = self.sprint_capacity(team)
        if capacity <= 0:
            logger.info("Team has no sprint capacity, no plan produced")
            return []

        # Stable sort keeps input order among equal-point stories
        unassigned = sorted(stories, key=lambda s: s.points, reverse=True)
        sprints: list[Sprint] = []
        sprint_number = 1

        while unassigned:
            remaining = capacity
            taken = []
            left = []
            for story in unassigned:
                if story.points <= remaining:
                    taken.append(story.with_sprint(sprint_number))
                    remaining -= story.points
                else:
                    left.append(story)

            if not taken:
                # The largest remaining story alone exceeds capacity
                break

            sprints.append(Sprint(
                id=sprint_number,
                name=f"Sprint {sprint_number}",
                stories=taken,
                capacity=capacity
            ))
            unassigned = left
            sprint_number += 1

        if unassigned:
            sprints.append(Sprint(
                id=sprint_number,
                name=f"Sprint {sprint_number} (Overflow)",
                stories=[s.with_sprint(sprint_number) for s in unassigned],
                capacity=capacity
            ))
            logger.info(
                "%d stories exceed sprint capacity %d and were placed in overflow",
                len(unassigned), capacity
            )

        logger.debug("Planned %d sprints at capacity %d", len(sprints), capacity)
        return sprints


def move_story(
    sprints: list[Sprint],
    story_id: str,
    from_sprint_id: int,
    to_sprint_id: int
) -> list[Sprint]:
    """
    Move a story between sprints, returning a new plan.

    Unknown sprint or story ids leave the plan unchanged.
    """
    source = next((s for s in sprints if s.id == from_sprint_id), None)
    target = next((s for s in sprints if s.id == to_sprint_id), None)
    if source is None or target is None or source.id == target.id:
        return list(sprints)

    story = next((s for s in source.stories if s.id == story_id), None)
    if story is None:
        return list(sprints)

    updated = []
    for sprint in sprints:
        if sprint.id == from_sprint_id:
            sprint = Sprint(
                id=sprint.id,
                name=sprint.name,
                stories=[s for s in sprint.stories if s.id != story_id],
                capacity=sprint.capacity
            )
        elif sprint.id == to_sprint_id:
            sprint = Sprint(
                id=sprint.id,
                name=sprint.name,
                stories=sprint.stories + [story.with_sprint(to_sprint_id)],
                capacity=sprint.capacity
            )
        updated.append(sprint)
    return updated


def assign_sprints(epic: Epic, sprints: list[Sprint]) -> Epic:
    """Return a copy of the epic whose stories carry their sprint ids."""
    sprint_by_story = {
        story.id: sprint.id for sprint in sprints for story in sprint.stories
    }
    return Epic(
        id=epic.id,
        title=epic.title,
        description=epic.description,
        stories=[s.with_sprint(sprint_by_story.get(s.id)) for s in epic.stories]
    )


# Convenience function
def plan_sprints(
    stories: list[Story],
    team: list[TeamMember],
    multipliers: Optional[SkillMultiplierTable] = None
) -> list[Sprint]:
    """
    Quick function to plan sprints for a story list.

    Example:
        sprints = plan_sprints(epic.stories, team)
        for sprint in sprints:
            print(f"{sprint.name}: {sprint.planned_points}/{sprint.capacity}")
    """
    return SprintPlanner(multipliers).plan(stories, team)
