"""
Sprint Simulator data model

Plain dataclasses shared by the capacity, planning and simulation modules.
"""

from dataclasses import dataclass, field, replace
from typing import Optional
from enum import Enum


class SkillArea(Enum):
    """Category of work a team member can pick up."""
    BACKEND = "backend"
    FRONTEND = "frontend"
    FULLSTACK = "fullstack"
    QA = "qa"
    DEVOPS = "devops"
    MOBILE = "mobile"


class SkillLevel(Enum):
    """Proficiency tier within a skill area."""
    JUNIOR = "junior"
    MID = "mid"
    SENIOR = "senior"
    LEAD = "lead"


class StoryStatus(Enum):
    """Story lifecycle. Transitions only move forward."""
    PLANNED = "planned"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


def empty_skills() -> dict[SkillArea, Optional[SkillLevel]]:
    """Skill map with every area present and no capability."""
    return {area: None for area in SkillArea}


@dataclass
class TeamMember:
    """A team member with per-area skills and daily availability (0-1)."""
    id: str
    name: str
    skills: dict[SkillArea, Optional[SkillLevel]] = field(default_factory=empty_skills)
    availability: float = 1.0

    def __post_init__(self):
        # Every area must be keyed, even when the member has no level there
        for area in SkillArea:
            self.skills.setdefault(area, None)

    @property
    def active_skills(self) -> dict[SkillArea, SkillLevel]:
        return {area: level for area, level in self.skills.items() if level is not None}

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "skills": {
                area.value: level.value if level else None
                for area, level in self.skills.items()
            },
            "availability": self.availability
        }


@dataclass
class Story:
    """A unit of work with a point estimate."""
    id: str
    title: str
    description: str
    points: int
    assigned_sprint: Optional[int] = None
    status: StoryStatus = StoryStatus.PLANNED

    @property
    def is_completed(self) -> bool:
        return self.status == StoryStatus.COMPLETED

    @property
    def is_in_progress(self) -> bool:
        return self.status == StoryStatus.IN_PROGRESS

    def with_status(self, status: StoryStatus) -> "Story":
        """Return a copy with a new status, leaving this story untouched."""
        return replace(self, status=status)

    def with_sprint(self, sprint_id: Optional[int]) -> "Story":
        return replace(self, assigned_sprint=sprint_id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "points": self.points,
            "assigned_sprint": self.assigned_sprint,
            "status": self.status.value
        }


@dataclass
class Epic:
    """An epic broken down into stories."""
    id: str
    title: str
    description: str
    stories: list[Story] = field(default_factory=list)

    @property
    def total_points(self) -> int:
        """Always derived from the current stories."""
        return sum(s.points for s in self.stories)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "stories": [s.to_dict() for s in self.stories],
            "total_points": self.total_points
        }


@dataclass
class Sprint:
    """A planned sprint and the stories assigned to it."""
    id: int
    name: str
    stories: list[Story] = field(default_factory=list)
    capacity: int = 0

    @property
    def planned_points(self) -> int:
        return sum(s.points for s in self.stories)

    @property
    def is_overflow(self) -> bool:
        return self.name.endswith("(Overflow)")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "stories": [s.to_dict() for s in self.stories],
            "planned_points": self.planned_points,
            "capacity": self.capacity,
            "overflow": self.is_overflow
        }


@dataclass
class DailyDisruption:
    """Disruptions affecting one team member on one simulated day."""
    member_id: str
    on_call_percent: float = 0.0  # 0-1
    sick_percent: float = 0.0  # 0-1
    support_work: bool = False
    context_switched: bool = False

    @property
    def is_disrupted(self) -> bool:
        return (
            self.on_call_percent > 0 or
            self.sick_percent > 0 or
            self.support_work or
            self.context_switched
        )

    def to_dict(self) -> dict:
        return {
            "member_id": self.member_id,
            "on_call_percent": self.on_call_percent,
            "sick_percent": self.sick_percent,
            "support_work": self.support_work,
            "context_switched": self.context_switched
        }


@dataclass
class DailyState:
    """Snapshot of one simulated day."""
    day: str
    day_number: int
    disruptions: list[DailyDisruption] = field(default_factory=list)
    completed_points: float = 0
    in_progress_points: float = 0
    remaining_points: float = 0
    velocity: float = 0
    confidence: float = 100
    log: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "day": self.day,
            "day_number": self.day_number,
            "disruptions": [d.to_dict() for d in self.disruptions],
            "points": {
                "completed": self.completed_points,
                "in_progress": self.in_progress_points,
                "remaining": self.remaining_points
            },
            "velocity": round(self.velocity, 2),
            "confidence": self.confidence,
            "log": self.log
        }


@dataclass
class SprintMetrics:
    """Forecast metrics derived from a day's point totals."""
    planned_points: float
    remaining_points: float
    completed_points: float
    in_progress_points: float
    eta: int
    confidence: float
    velocity: float
    spillover_risk: float

    def to_dict(self) -> dict:
        return {
            "points": {
                "planned": self.planned_points,
                "completed": self.completed_points,
                "in_progress": self.in_progress_points,
                "remaining": self.remaining_points
            },
            "eta": self.eta,
            "confidence": self.confidence,
            "velocity": round(self.velocity, 2),
            "spillover_risk": round(self.spillover_risk, 1)
        }
