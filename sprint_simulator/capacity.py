"""
Team Capacity Model

Converts a team roster into daily and weekly point capacity.
"""

import math
from dataclasses import dataclass, field
from typing import Optional

from .config import SkillMultiplierTable, default_multipliers
from .models import SkillArea, TeamMember


WORK_DAYS_PER_WEEK = 5


def _empty_breakdown() -> dict[SkillArea, float]:
    return {area: 0.0 for area in SkillArea}


@dataclass
class TeamCapacity:
    """Point capacity of a team, in total and per skill area."""
    daily_capacity: float = 0.0
    weekly_capacity: float = 0.0
    by_skill: dict[SkillArea, float] = field(default_factory=_empty_breakdown)

    @property
    def sprint_capacity(self) -> int:
        """Whole points that fit into one sprint."""
        return math.floor(self.weekly_capacity)

    @property
    def strongest_area(self) -> Optional[SkillArea]:
        if self.daily_capacity <= 0:
            return None
        return max(self.by_skill, key=lambda a: self.by_skill[a])

    def __add__(self, other: "TeamCapacity") -> "TeamCapacity":
        return TeamCapacity(
            daily_capacity=self.daily_capacity + other.daily_capacity,
            weekly_capacity=self.weekly_capacity + other.weekly_capacity,
            by_skill={a: self.by_skill[a] + other.by_skill[a] for a in SkillArea}
        )

    def to_dict(self) -> dict:
        return {
            "daily_capacity": round(self.daily_capacity, 2),
            "weekly_capacity": round(self.weekly_capacity, 2),
            "sprint_capacity": self.sprint_capacity,
            "by_skill": {a.value: round(v, 2) for a, v in self.by_skill.items()}
        }


class CapacityModel:
    """
    Computes team capacity from skills and availability.

    Usage:
        model = CapacityModel(load_skill_multipliers())
        capacity = model.calculate(team)
    """

    def __init__(self, multipliers: Optional[SkillMultiplierTable] = None):
        self.multipliers = multipliers or default_multipliers()

    def member_contribution(self, member: TeamMember) -> dict[SkillArea, float]:
        """Daily points a member adds in each area they hold a level in."""
        contribution = _empty_breakdown()
        for area, level in member.active_skills.items():
            contribution[area] = self.multipliers.get(level, area) * member.availability
        return contribution

    def calculate(self, team: list[TeamMember]) -> TeamCapacity:
        by_skill = _empty_breakdown()
        daily = 0.0

        for member in team:
            for area, points in self.member_contribution(member).items():
                by_skill[area] += points
                daily += points

        return TeamCapacity(
            daily_capacity=daily,
            weekly_capacity=daily * WORK_DAYS_PER_WEEK,
            by_skill=by_skill
        )


# Convenience function
def calculate_team_capacity(
    team: list[TeamMember],
    multipliers: Optional[SkillMultiplierTable] = None
) -> TeamCapacity:
    """
    Quick function to compute team capacity.

    Example:
        capacity = calculate_team_capacity(team, load_skill_multipliers())
        print(f"Weekly capacity: {capacity.weekly_capacity:.1f} points")
    """
    return CapacityModel(multipliers).calculate(team)
