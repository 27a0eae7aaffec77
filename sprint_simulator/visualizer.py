"""
Visualizer for Sprint Simulator

Plain-text reports of team capacity, sprint plans and simulated days.
"""

from .capacity import TeamCapacity
from .metrics import RiskLevel, spillover_level
from .models import DailyState, Sprint, SprintMetrics


WIDTH = 60


# ASCII art for terminal output
class ASCIICharts:
    """Generate ASCII art charts for terminal/text output."""

    @staticmethod
    def horizontal_bar(
        value: float,
        max_value: float = 100,
        width: int = 20,
        filled_char: str = "█",
        empty_char: str = "░"
    ) -> str:
        """Create a horizontal bar chart."""
        if max_value <= 0:
            return empty_char * width

        filled = int((value / max_value) * width)
        filled = max(0, min(filled, width))
        return filled_char * filled + empty_char * (width - filled)

    @staticmethod
    def load_bar(planned: float, capacity: float, width: int = 20) -> str:
        """Bar of planned points against capacity, flagged when over."""
        bar = ASCIICharts.horizontal_bar(planned, capacity, width)
        status = "⚠" if planned > capacity else "✓"
        return f"{bar} {planned:>3.0f}/{capacity:<3.0f} {status}"


def _row(text: str = "") -> str:
    return f"║  {text}".ljust(WIDTH + 1) + "║"


def _header(title: str) -> list[str]:
    return [
        "╔" + "═" * WIDTH + "╗",
        "║" + title.center(WIDTH) + "║",
        "╠" + "═" * WIDTH + "╣",
    ]


def _divider() -> str:
    return "║" + "─" * WIDTH + "║"


def _footer() -> str:
    return "╚" + "═" * WIDTH + "╝"


class TextReporter:
    """Generate text-based reports."""

    @staticmethod
    def capacity_report(capacity: TeamCapacity) -> str:
        lines = _header("TEAM CAPACITY")
        lines.append(_row(f"Daily: {capacity.daily_capacity:.1f} pts   Weekly: {capacity.weekly_capacity:.1f} pts"))
        lines.append(_row(f"Sprint capacity: {capacity.sprint_capacity} pts"))
        lines.append(_divider())

        peak = max(capacity.by_skill.values(), default=0)
        for area, points in capacity.by_skill.items():
            bar = ASCIICharts.horizontal_bar(points, peak, 25)
            lines.append(_row(f"{area.value.ljust(10)} {bar} {points:.2f}"))

        lines.append(_footer())
        return "\n".join(lines)

    @staticmethod
    def sprint_plan_report(sprints: list[Sprint]) -> str:
        lines = _header("SPRINT PLAN")

        if not sprints:
            lines.append(_row("No plan produced (no capacity or no stories)"))
        for sprint in sprints:
            lines.append(_row(f"{sprint.name[:24].ljust(24)} {ASCIICharts.load_bar(sprint.planned_points, sprint.capacity, 15)}"))
            for story in sprint.stories:
                lines.append(_row(f"  • {story.title[:40]} ({story.points})"))

        lines.append(_footer())
        return "\n".join(lines)

    @staticmethod
    def simulation_day_report(state: DailyState, metrics: SprintMetrics) -> str:
        lines = _header(f"DAY {state.day_number} ({state.day})")

        progress = ASCIICharts.horizontal_bar(metrics.completed_points, metrics.planned_points, 30)
        lines.append(_row(f"Progress: {progress}"))
        lines.append(_row(
            f"Done {metrics.completed_points:.0f}  In progress {metrics.in_progress_points:.0f}  "
            f"Remaining {metrics.remaining_points:.0f}"
        ))
        lines.append(_row(f"Velocity: {metrics.velocity:.1f} pts/day   ETA: {metrics.eta} days"))

        risk = spillover_level(metrics.spillover_risk)
        marker = "⚠" if risk == RiskLevel.HIGH else "•"
        lines.append(_row(f"Confidence: {metrics.confidence:.0f}%   {marker} Spillover: {metrics.spillover_risk:.0f}%"))
        lines.append(_divider())

        lines.append(_row("LOG:"))
        for entry in state.log:
            lines.append(_row(f"  {entry[:54]}"))

        lines.append(_footer())
        return "\n".join(lines)


# Main visualization class
class Visualizer:
    """
    Entry point for reports.

    Usage:
        viz = Visualizer()
        print(viz.capacity_report(capacity))
        print(viz.day_report(state, metrics))
    """

    def __init__(self):
        self.text = TextReporter()

    def capacity_report(self, capacity: TeamCapacity) -> str:
        return self.text.capacity_report(capacity)

    def plan_report(self, sprints: list[Sprint]) -> str:
        return self.text.sprint_plan_report(sprints)

    def day_report(
        self,
        state: DailyState,
        metrics: SprintMetrics
    ) -> str:
        return self.text.simulation_day_report(state, metrics)
