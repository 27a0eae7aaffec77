"""
Tests for skill level mapping.
"""

import pytest

from sprint_simulator.models import SkillLevel
from sprint_simulator.skill_levels import (
    get_skill_level_label,
    percentage_to_skill_level,
    skill_level_to_percentage
)


class TestPercentageToSkillLevel:
    """Tests for the classifier thresholds."""

    @pytest.mark.parametrize("percentage,expected", [
        (0, None),
        (1, SkillLevel.JUNIOR),
        (30, SkillLevel.JUNIOR),
        (31, SkillLevel.MID),
        (60, SkillLevel.MID),
        (61, SkillLevel.SENIOR),
        (85, SkillLevel.SENIOR),
        (86, SkillLevel.LEAD),
        (100, SkillLevel.LEAD),
    ])
    def test_thresholds(self, percentage, expected):
        assert percentage_to_skill_level(percentage) == expected

    def test_out_of_range_does_not_raise(self):
        assert percentage_to_skill_level(-5) is None
        assert percentage_to_skill_level(150) == SkillLevel.LEAD


class TestSkillLevelToPercentage:
    """Tests for representative percentages."""

    def test_midpoints(self):
        assert skill_level_to_percentage(None) == 0
        assert skill_level_to_percentage(SkillLevel.JUNIOR) == 20
        assert skill_level_to_percentage(SkillLevel.MID) == 50
        assert skill_level_to_percentage(SkillLevel.SENIOR) == 75
        assert skill_level_to_percentage(SkillLevel.LEAD) == 95

    def test_round_trip_is_stable_per_level(self):
        """Midpoints classify back to the level they came from."""
        for level in SkillLevel:
            assert percentage_to_skill_level(skill_level_to_percentage(level)) == level


class TestSkillLevelLabel:
    """Tests for the display label."""

    @pytest.mark.parametrize("percentage,expected", [
        (0, "None (0%)"),
        (15, "Novice (15%)"),
        (20, "Novice (20%)"),
        (25, "Junior (25%)"),
        (50, "Mid-Level (50%)"),
        (70, "Senior (70%)"),
        (90, "Lead (90%)"),
    ])
    def test_labels(self, percentage, expected):
        assert get_skill_level_label(percentage) == expected

    def test_label_bands_differ_from_classifier(self):
        """33% is mid for the classifier but labelled junior."""
        assert percentage_to_skill_level(33) == SkillLevel.MID
        assert get_skill_level_label(33) == "Junior (33%)"
        assert percentage_to_skill_level(15) == SkillLevel.JUNIOR
        assert get_skill_level_label(15).startswith("Novice")
