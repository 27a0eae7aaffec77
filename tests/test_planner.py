"""
Tests for the sprint planner.
"""

import pytest

from sprint_simulator.models import Epic, SkillLevel, TeamMember
from sprint_simulator.planner import SprintPlanner, assign_sprints, move_story, plan_sprints

from conftest import make_member, make_story


class TestSprintPlanner:
    """Tests for greedy sprint packing."""

    def test_largest_first_with_overflow(self, multipliers, senior_backend):
        """Capacity 5 with stories 8, 5, 3 gives [5], [3] and an overflow [8]."""
        stories = [make_story("a", 8), make_story("b", 5), make_story("c", 3)]

        sprints = plan_sprints(stories, [senior_backend], multipliers)

        assert [s.name for s in sprints] == ["Sprint 1", "Sprint 2", "Sprint 3 (Overflow)"]
        assert [[st.points for st in s.stories] for s in sprints] == [[5], [3], [8]]
        assert [s.id for s in sprints] == [1, 2, 3]
        assert all(s.capacity == 5 for s in sprints)
        assert sprints[2].is_overflow
        assert sprints[2].planned_points == 8

    def test_single_sprint_when_everything_fits(self, multipliers):
        team = [
            make_member("a", backend=SkillLevel.SENIOR),
            make_member("b", backend=SkillLevel.SENIOR),
        ]
        stories = [make_story("s1", 2), make_story("s2", 5), make_story("s3", 3)]

        sprints = plan_sprints(stories, team, multipliers)

        assert len(sprints) == 1
        assert [st.points for st in sprints[0].stories] == [5, 3, 2]
        assert sprints[0].planned_points == 10
        assert sprints[0].capacity == 10

    def test_fills_remaining_capacity_with_smaller_stories(self, multipliers):
        """A sprint keeps scanning past stories that don't fit."""
        team = [
            make_member("a", backend=SkillLevel.SENIOR),
            make_member("b", backend=SkillLevel.SENIOR),
        ]
        stories = [make_story(str(i), p) for i, p in enumerate([8, 8, 3, 2, 1])]

        sprints = plan_sprints(stories, team, multipliers)

        assert [[st.points for st in s.stories] for s in sprints] == [[8, 2], [8, 1], [3]]

    def test_stories_tagged_with_sprint(self, multipliers, senior_backend):
        stories = [make_story("a", 3), make_story("b", 3)]

        sprints = plan_sprints(stories, [senior_backend], multipliers)

        for sprint in sprints:
            assert all(st.assigned_sprint == sprint.id for st in sprint.stories)
        assert stories[0].assigned_sprint is None

    @pytest.mark.parametrize("points", [
        [8, 5, 3],
        [1, 1, 1, 1, 1, 1, 1],
        [13, 21, 2, 3, 5, 8, 1],
        [5, 5, 5, 5],
    ])
    def test_coverage_and_capacity(self, multipliers, senior_backend, points):
        """Every story lands in exactly one sprint; only overflow exceeds capacity."""
        stories = [make_story(f"s{i}", p) for i, p in enumerate(points)]

        sprints = plan_sprints(stories, [senior_backend], multipliers)

        planned_ids = [st.id for s in sprints for st in s.stories]
        assert sorted(planned_ids) == sorted(s.id for s in stories)
        assert sum(s.planned_points for s in sprints) == sum(points)
        for sprint in sprints[:-1]:
            assert sprint.planned_points <= sprint.capacity
            assert not sprint.is_overflow
        last = sprints[-1]
        assert last.is_overflow or last.planned_points <= last.capacity

    def test_empty_inputs(self, multipliers, senior_backend):
        assert plan_sprints([], [senior_backend], multipliers) == []
        assert plan_sprints([make_story("a", 3)], [], multipliers) == []

    def test_zero_capacity(self, multipliers):
        team = [TeamMember(id="x", name="X")]
        assert plan_sprints([make_story("a", 3)], team, multipliers) == []

    def test_sprint_capacity(self, multipliers):
        planner = SprintPlanner(multipliers)
        team = [make_member("a", availability=0.5, fullstack=SkillLevel.LEAD)]

        # 1.3 * 0.5 * 5 = 3.25
        assert planner.sprint_capacity(team) == 3


class TestPlanEditing:
    """Tests for manual moves and plan acceptance."""

    def plan(self, multipliers, senior_backend):
        stories = [make_story("a", 8), make_story("b", 5), make_story("c", 3)]
        return plan_sprints(stories, [senior_backend], multipliers)

    def test_move_story(self, multipliers, senior_backend):
        sprints = self.plan(multipliers, senior_backend)

        moved = move_story(sprints, "c", from_sprint_id=2, to_sprint_id=1)

        assert [st.id for st in moved[0].stories] == ["b", "c"]
        assert moved[0].planned_points == 8
        assert moved[0].stories[-1].assigned_sprint == 1
        assert moved[1].stories == []
        assert moved[1].planned_points == 0
        # Original plan untouched
        assert [st.id for st in sprints[1].stories] == ["c"]

    def test_move_unknown_ids(self, multipliers, senior_backend):
        sprints = self.plan(multipliers, senior_backend)

        assert move_story(sprints, "zzz", 1, 2) == sprints
        assert move_story(sprints, "b", 1, 99) == sprints
        assert move_story(sprints, "b", 1, 1) == sprints

    def test_assign_sprints(self, multipliers, senior_backend):
        stories = [make_story("a", 8), make_story("b", 5), make_story("c", 3)]
        epic = Epic(id="e1", title="Epic", description="", stories=stories)
        sprints = plan_sprints(stories, [senior_backend], multipliers)

        accepted = assign_sprints(epic, sprints)

        assert [s.assigned_sprint for s in accepted.stories] == [3, 1, 2]
        assert accepted.total_points == epic.total_points
        assert [s.assigned_sprint for s in epic.stories] == [None, None, None]
