"""
Narrative log

Explains a simulated day in a few plain sentences: who was disrupted,
how velocity moved and whether the sprint is likely to spill over.
"""

import math

from .metrics import RiskLevel, spillover_level
from .models import DailyDisruption, TeamMember


ON_TRACK_MESSAGE = "Sprint progressing as planned"
SPRINT_STARTED_MESSAGE = "Sprint started. Initial velocity calculated."


def _percent(value: float) -> int:
    """Round half up to a whole percent."""
    return math.floor(value + 0.5)


def describe_disruption(member: TeamMember, disruption: DailyDisruption) -> list[str]:
    details = []
    if disruption.sick_percent > 0:
        details.append(f"{member.name} unavailable ({_percent(disruption.sick_percent * 100)}%)")
    if disruption.on_call_percent > 0:
        details.append(f"{member.name} on-call ({_percent(disruption.on_call_percent * 100)}%)")
    if disruption.support_work:
        details.append(f"{member.name} handling support work")
    if disruption.context_switched:
        details.append(f"{member.name} context-switched")
    return details


def generate_log(
    team: list[TeamMember],
    disruptions: list[DailyDisruption],
    previous_velocity: float,
    current_velocity: float,
    spillover_risk: float
) -> list[str]:
    """
    Build the day's log lines.

    Order is fixed: disruptions, velocity change, spillover risk. When none
    apply the log is a single on-track line.
    """
    members = {m.id: m for m in team}
    logs = []

    details = []
    for disruption in disruptions:
        member = members.get(disruption.member_id)
        if member is None:
            continue
        details.extend(describe_disruption(member, disruption))
    if details:
        logs.append(f"Team capacity reduced: {', '.join(details)}")

    if current_velocity != previous_velocity:
        direction = "increased" if current_velocity > previous_velocity else "decreased"
        logs.append(
            f"Velocity {direction} from {previous_velocity:.1f} → {current_velocity:.1f} pts/day"
        )

    level = spillover_level(spillover_risk)
    if level == RiskLevel.HIGH:
        logs.append(f"High spillover risk detected ({_percent(spillover_risk)}%)")
    elif level == RiskLevel.MODERATE:
        logs.append(f"Moderate spillover risk ({_percent(spillover_risk)}%)")

    if not logs:
        logs.append(ON_TRACK_MESSAGE)

    return logs
