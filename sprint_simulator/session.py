"""
Planning and simulation sessions

Holds the team, epic and sprint plan for one user, and steps a selected
sprint through a work week one day at a time.
"""

import logging
import uuid
from typing import Optional

from .capacity import CapacityModel, TeamCapacity
from .config import SkillMultiplierTable, default_multipliers
from .metrics import calculate_sprint_metrics, metrics_for_day
from .models import (
    DailyDisruption,
    DailyState,
    Epic,
    SkillArea,
    SkillLevel,
    Sprint,
    SprintMetrics,
    Story,
    StoryStatus,
    TeamMember,
)
from .narrative import SPRINT_STARTED_MESSAGE, generate_log
from .planner import SprintPlanner, assign_sprints, move_story
from .simulation import day_of_week, no_disruptions, simulate_day_progress


logger = logging.getLogger(__name__)

DISRUPTION_FIELDS = ("on_call_percent", "sick_percent", "support_work", "context_switched")


class SimulationError(ValueError):
    """Invalid operation on a planning or simulation session."""


class SprintSimulation:
    """
    Day-by-day replay of one sprint.

    Days form an append-only list. Only the last (current) day's
    disruptions may be edited, and only by replacing that day's state.

    Usage:
        sim = SprintSimulation(sprint, team, multipliers)
        sim.set_disruption(member.id, sick_percent=0.5)
        state = sim.advance()
    """

    def __init__(
        self,
        sprint: Sprint,
        team: list[TeamMember],
        multipliers: Optional[SkillMultiplierTable] = None,
        total_days: int = 5
    ):
        self.sprint = sprint
        self.team = list(team)
        self.total_days = total_days
        self.capacity = CapacityModel(multipliers).calculate(self.team)

        self.stories: list[Story] = [
            s.with_status(StoryStatus.PLANNED) for s in sprint.stories
        ]
        self.days: list[DailyState] = [DailyState(
            day=day_of_week(1),
            day_number=1,
            disruptions=no_disruptions(self.team),
            completed_points=0,
            in_progress_points=0,
            remaining_points=sprint.planned_points,
            velocity=self.capacity.weekly_capacity / 5,
            confidence=100,
            log=[SPRINT_STARTED_MESSAGE]
        )]

    @property
    def current(self) -> DailyState:
        return self.days[-1]

    @property
    def current_day(self) -> int:
        return self.current.day_number

    @property
    def is_finished(self) -> bool:
        return self.current_day >= self.total_days

    def view(self, day_number: int) -> DailyState:
        """Return a stored day. Viewing never changes history."""
        if not 1 <= day_number <= len(self.days):
            raise SimulationError(f"Day {day_number} has not been simulated yet")
        return self.days[day_number - 1]

    def metrics(self, day_number: Optional[int] = None) -> SprintMetrics:
        state = self.view(day_number or self.current_day)
        return metrics_for_day(state, self.sprint.planned_points, self.total_days)

    def set_disruption(self, member_id: str, **changes) -> DailyState:
        """
        Update one member's disruptions for the current day.

        Keyword arguments are DailyDisruption fields. The current day's
        state is replaced, earlier days are left alone.
        """
        unknown = set(changes) - set(DISRUPTION_FIELDS)
        if unknown:
            raise SimulationError(f"Unknown disruption fields: {', '.join(sorted(unknown))}")

        state = self.current
        if not any(d.member_id == member_id for d in state.disruptions):
            raise SimulationError(f"Member {member_id} is not part of this simulation")

        disruptions = []
        for d in state.disruptions:
            if d.member_id == member_id:
                values = d.to_dict()
                values.update(changes)
                d = DailyDisruption(**values)
            disruptions.append(d)

        self.days[-1] = DailyState(
            day=state.day,
            day_number=state.day_number,
            disruptions=disruptions,
            completed_points=state.completed_points,
            in_progress_points=state.in_progress_points,
            remaining_points=state.remaining_points,
            velocity=state.velocity,
            confidence=state.confidence,
            log=list(state.log)
        )
        return self.days[-1]

    def advance(self) -> DailyState:
        """Simulate the current day and append the next one."""
        if self.is_finished:
            raise SimulationError(f"Sprint simulation already reached day {self.total_days}")

        state = self.current
        result = simulate_day_progress(self.stories, self.team, state.disruptions)
        self.stories = result.stories

        next_day = state.day_number + 1
        metrics = calculate_sprint_metrics(
            self.sprint.planned_points,
            result.completed_points,
            result.in_progress_points,
            result.remaining_points,
            next_day,
            self.total_days,
            result.velocity
        )
        log = generate_log(
            self.team,
            state.disruptions,
            state.velocity,
            result.velocity,
            metrics.spillover_risk
        )

        self.days.append(DailyState(
            day=day_of_week(next_day),
            day_number=next_day,
            disruptions=no_disruptions(self.team),
            completed_points=result.completed_points,
            in_progress_points=metrics.in_progress_points,
            remaining_points=metrics.remaining_points,
            velocity=result.velocity,
            confidence=metrics.confidence,
            log=log
        ))
        logger.info(
            "%s day %d: %d pts done, velocity %.1f, confidence %.0f",
            self.sprint.name, next_day, result.completed_points,
            result.velocity, metrics.confidence
        )
        return self.current

    def to_dict(self) -> dict:
        return {
            "sprint": self.sprint.to_dict(),
            "current_day": self.current_day,
            "total_days": self.total_days,
            "stories": [s.to_dict() for s in self.stories],
            "days": [d.to_dict() for d in self.days],
            "metrics": self.metrics().to_dict()
        }


class PlanningSession:
    """
    One user's team, epic, sprint plan and running simulation.

    Usage:
        session = PlanningSession(load_skill_multipliers())
        session.add_member("Alice", {SkillArea.BACKEND: SkillLevel.SENIOR})
        session.set_epic(epic)
        session.plan()
        session.start_simulation()
    """

    def __init__(
        self,
        multipliers: Optional[SkillMultiplierTable] = None,
        total_days: int = 5
    ):
        self.multipliers = multipliers or default_multipliers()
        self.total_days = total_days
        self.planner = SprintPlanner(self.multipliers)
        self.team: list[TeamMember] = []
        self.epic: Optional[Epic] = None
        self.sprints: list[Sprint] = []
        self.simulation: Optional[SprintSimulation] = None

    # Team

    def get_member(self, member_id: str) -> TeamMember:
        for member in self.team:
            if member.id == member_id:
                return member
        raise SimulationError(f"Member {member_id} not found")

    def add_member(
        self,
        name: str,
        skills: Optional[dict[SkillArea, Optional[SkillLevel]]] = None,
        availability: float = 1.0,
        member_id: Optional[str] = None
    ) -> TeamMember:
        member = TeamMember(
            id=member_id or uuid.uuid4().hex[:12],
            name=name,
            skills=dict(skills or {}),
            availability=availability
        )
        if any(m.id == member.id for m in self.team):
            raise SimulationError(f"Member {member.id} already exists")
        self.team = self.team + [member]
        return member

    def update_member(
        self,
        member_id: str,
        name: Optional[str] = None,
        skills: Optional[dict[SkillArea, Optional[SkillLevel]]] = None,
        availability: Optional[float] = None
    ) -> TeamMember:
        current = self.get_member(member_id)
        merged_skills = dict(current.skills)
        if skills:
            merged_skills.update(skills)
        updated = TeamMember(
            id=current.id,
            name=name if name is not None else current.name,
            skills=merged_skills,
            availability=availability if availability is not None else current.availability
        )
        self.team = [updated if m.id == member_id else m for m in self.team]
        return updated

    def remove_member(self, member_id: str) -> None:
        self.get_member(member_id)
        self.team = [m for m in self.team if m.id != member_id]

    def capacity(self) -> TeamCapacity:
        return CapacityModel(self.multipliers).calculate(self.team)

    # Epic and plan

    def set_epic(self, epic: Epic) -> None:
        self.epic = epic
        self.sprints = []
        self.simulation = None

    def plan(self) -> list[Sprint]:
        if self.epic is None:
            raise SimulationError("Define an epic before planning sprints")
        self.sprints = self.planner.plan(self.epic.stories, self.team)
        self.simulation = None
        return self.sprints

    def move_story(self, story_id: str, from_sprint_id: int, to_sprint_id: int) -> list[Sprint]:
        self.sprints = move_story(self.sprints, story_id, from_sprint_id, to_sprint_id)
        return self.sprints

    def accept_plan(self) -> Epic:
        """Record each story's sprint on the epic."""
        if self.epic is None:
            raise SimulationError("No epic to accept a plan for")
        self.epic = assign_sprints(self.epic, self.sprints)
        return self.epic

    # Simulation

    def get_sprint(self, sprint_id: int) -> Sprint:
        for sprint in self.sprints:
            if sprint.id == sprint_id:
                return sprint
        raise SimulationError(f"Sprint {sprint_id} not found")

    def start_simulation(self, sprint_id: Optional[int] = None) -> SprintSimulation:
        """Start (or restart) the day-by-day replay of a sprint."""
        if not self.team:
            raise SimulationError("Add team members before simulating")
        if not self.sprints:
            raise SimulationError("Plan sprints before simulating")

        sprint = self.get_sprint(sprint_id) if sprint_id is not None else self.sprints[0]
        self.simulation = SprintSimulation(
            sprint, self.team, self.multipliers, self.total_days
        )
        logger.info("Started simulation of %s (%d points)", sprint.name, sprint.planned_points)
        return self.simulation

    def reset(self) -> None:
        self.team = []
        self.epic = None
        self.sprints = []
        self.simulation = None
