"""
Skill level mapping

Converts between proficiency percentages (0-100) and skill levels for
data entry. Not used by the simulation itself.
"""

from typing import Optional

from .models import SkillLevel


# Representative percentage per level (lossy, display only)
_LEVEL_PERCENTAGES = {
    SkillLevel.JUNIOR: 20,
    SkillLevel.MID: 50,
    SkillLevel.SENIOR: 75,
    SkillLevel.LEAD: 95,
}


def percentage_to_skill_level(percentage: float) -> Optional[SkillLevel]:
    """
    Map a proficiency percentage to a skill level.

    0 means no capability. Values below 0 are treated as no capability and
    values above 100 as lead.
    """
    if percentage <= 0:
        return None
    if percentage <= 30:
        return SkillLevel.JUNIOR
    if percentage <= 60:
        return SkillLevel.MID
    if percentage <= 85:
        return SkillLevel.SENIOR
    return SkillLevel.LEAD


def skill_level_to_percentage(level: Optional[SkillLevel]) -> int:
    """Midpoint percentage for a level. Not an exact inverse of the classifier."""
    if level is None:
        return 0
    return _LEVEL_PERCENTAGES.get(level, 0)


def get_skill_level_label(percentage: float) -> str:
    """
    Human label for a percentage slider, e.g. "Senior (70%)".

    These bands are finer than percentage_to_skill_level and intentionally
    use their own thresholds (novice up to 20, junior up to 35).
    """
    shown = f"{percentage:g}"
    if percentage == 0:
        return "None (0%)"
    if percentage <= 20:
        return f"Novice ({shown}%)"
    if percentage <= 35:
        return f"Junior ({shown}%)"
    if percentage <= 60:
        return f"Mid-Level ({shown}%)"
    if percentage <= 85:
        return f"Senior ({shown}%)"
    return f"Lead ({shown}%)"
