"""
Tests for the narrative log.
"""

from sprint_simulator.models import DailyDisruption, SkillLevel
from sprint_simulator.narrative import generate_log

from conftest import make_member


TEAM = [
    make_member("alice", "Alice", backend=SkillLevel.SENIOR),
    make_member("bob", "Bob", frontend=SkillLevel.MID),
]


def calm():
    return [DailyDisruption(member_id=m.id) for m in TEAM]


class TestGenerateLog:
    """Tests for log line generation."""

    def test_quiet_day(self):
        assert generate_log(TEAM, calm(), 3.0, 3.0, 10) == ["Sprint progressing as planned"]

    def test_disruptions_listed_in_order(self):
        disruptions = [
            DailyDisruption(member_id="alice", sick_percent=0.5, on_call_percent=0.25),
            DailyDisruption(member_id="bob", support_work=True, context_switched=True),
        ]

        log = generate_log(TEAM, disruptions, 2.0, 2.0, 0)

        assert log == [
            "Team capacity reduced: Alice unavailable (50%), Alice on-call (25%), "
            "Bob handling support work, Bob context-switched"
        ]

    def test_velocity_decrease(self):
        log = generate_log(TEAM, calm(), 3.0, 2.1, 0)
        assert log == ["Velocity decreased from 3.0 → 2.1 pts/day"]

    def test_velocity_increase(self):
        log = generate_log(TEAM, calm(), 1.5, 2.0, 0)
        assert log == ["Velocity increased from 1.5 → 2.0 pts/day"]

    def test_spillover_bands(self):
        assert generate_log(TEAM, calm(), 1, 1, 60) == ["High spillover risk detected (60%)"]
        assert generate_log(TEAM, calm(), 1, 1, 30.4) == ["Moderate spillover risk (30%)"]
        assert generate_log(TEAM, calm(), 1, 1, 25) == ["Sprint progressing as planned"]

    def test_fixed_order(self):
        disruptions = [DailyDisruption(member_id="bob", sick_percent=1.0)]

        log = generate_log(TEAM, disruptions, 2.0, 1.0, 100)

        assert log == [
            "Team capacity reduced: Bob unavailable (100%)",
            "Velocity decreased from 2.0 → 1.0 pts/day",
            "High spillover risk detected (100%)",
        ]

    def test_unknown_member_ignored(self):
        disruptions = [DailyDisruption(member_id="ghost", sick_percent=1.0)]
        assert generate_log(TEAM, disruptions, 1, 1, 0) == ["Sprint progressing as planned"]

    def test_deterministic(self):
        disruptions = [DailyDisruption(member_id="alice", on_call_percent=0.3)]
        first = generate_log(TEAM, disruptions, 2.0, 1.4, 40)
        assert generate_log(TEAM, disruptions, 2.0, 1.4, 40) == first
