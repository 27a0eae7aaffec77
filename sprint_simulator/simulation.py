"""
Day Simulator

Advances story progress by one simulated day under per-member disruptions.
"""

from dataclasses import dataclass, field

from .models import DailyDisruption, Story, StoryStatus, TeamMember


DAYS = ["Mon", "Tue", "Wed", "Thu", "Fri"]

SUPPORT_WORK_FACTOR = 0.5
CONTEXT_SWITCH_FACTOR = 0.7


@dataclass
class DayResult:
    """Partition of a day's stories by outcome."""
    completed: list[Story] = field(default_factory=list)
    in_progress: list[Story] = field(default_factory=list)
    remaining: list[Story] = field(default_factory=list)
    velocity: float = 0.0

    @property
    def stories(self) -> list[Story]:
        """All stories in completed, in-progress, remaining order."""
        return self.completed + self.in_progress + self.remaining

    @property
    def completed_points(self) -> int:
        return sum(s.points for s in self.completed)

    @property
    def in_progress_points(self) -> int:
        return sum(s.points for s in self.in_progress)

    @property
    def remaining_points(self) -> int:
        return sum(s.points for s in self.remaining)


def effective_availability(member: TeamMember, disruption: DailyDisruption) -> float:
    """A member's availability after stacking every active penalty."""
    availability = member.availability
    availability *= (1 - disruption.on_call_percent)
    availability *= (1 - disruption.sick_percent)
    if disruption.support_work:
        availability *= SUPPORT_WORK_FACTOR
    if disruption.context_switched:
        availability *= CONTEXT_SWITCH_FACTOR
    return availability


def calculate_effective_capacity(
    team: list[TeamMember],
    disruptions: list[DailyDisruption]
) -> float:
    """
    Points the team can deliver today.

    Members without a disruption entry contribute their full availability.
    """
    by_member = {d.member_id: d for d in disruptions}

    total = 0.0
    for member in team:
        disruption = by_member.get(member.id)
        if disruption is None:
            total += member.availability
        else:
            total += effective_availability(member, disruption)
    return total


def simulate_day_progress(
    stories: list[Story],
    team: list[TeamMember],
    disruptions: list[DailyDisruption]
) -> DayResult:
    """
    Simulate one day of work.

    Stories are visited in order against a running total of points done
    today. Completed stories stay completed and count toward the total.
    In-progress stories finish if they fit under the day's velocity.
    Planned stories finish if they fit in what is left, start if any
    capacity is left, otherwise stay planned. Points never carry over
    below story granularity, so a story larger than the daily velocity
    cannot finish on that day.
    """
    velocity = calculate_effective_capacity(team, disruptions)
    result = DayResult(velocity=velocity)
    used = 0.0

    for story in stories:
        if story.is_completed:
            result.completed.append(story)
            used += story.points
        elif story.is_in_progress:
            if used + story.points <= velocity:
                result.completed.append(story.with_status(StoryStatus.COMPLETED))
                used += story.points
            else:
                result.in_progress.append(story)
        elif used >= velocity:
            result.remaining.append(story)
        else:
            remaining_capacity = velocity - used
            if story.points <= remaining_capacity:
                result.completed.append(story.with_status(StoryStatus.COMPLETED))
                used += story.points
            elif remaining_capacity > 0:
                result.in_progress.append(story.with_status(StoryStatus.IN_PROGRESS))
            else:
                result.remaining.append(story)

    return result


def day_of_week(day_number: int) -> str:
    """Mon..Fri for days 1-5; anything else maps to Mon."""
    if 1 <= day_number <= len(DAYS):
        return DAYS[day_number - 1]
    return DAYS[0]


def no_disruptions(team: list[TeamMember]) -> list[DailyDisruption]:
    """A fresh, undisrupted entry for every member."""
    return [DailyDisruption(member_id=m.id) for m in team]
