"""
Sprint Simulator

Plans sprints from team capacity and simulates a work week day by day
under sick leave, on-call, support and context-switching disruptions.
"""

__version__ = "1.0.0"

from .models import (
    SkillArea,
    SkillLevel,
    StoryStatus,
    TeamMember,
    Story,
    Epic,
    Sprint,
    DailyDisruption,
    DailyState,
    SprintMetrics
)

from .config import (
    Config,
    SkillMultiplierTable,
    load_skill_multipliers,
    default_multipliers
)

from .capacity import (
    CapacityModel,
    TeamCapacity,
    calculate_team_capacity
)

from .skill_levels import (
    percentage_to_skill_level,
    skill_level_to_percentage,
    get_skill_level_label
)

from .story_generator import (
    StoryGenerator,
    StoryStrategy,
    RuleBasedStoryGenerator,
    OpenAIStoryGenerator,
    EpicResult,
    generate_stories_from_epic,
    create_epic_from_description,
    create_epic
)

from .planner import (
    SprintPlanner,
    plan_sprints,
    move_story,
    assign_sprints
)

from .simulation import (
    DayResult,
    calculate_effective_capacity,
    simulate_day_progress,
    day_of_week
)

from .metrics import (
    RiskLevel,
    calculate_sprint_metrics
)

from .narrative import generate_log

from .session import (
    PlanningSession,
    SprintSimulation,
    SimulationError
)

__all__ = [
    # Version
    "__version__",

    # Models
    "SkillArea",
    "SkillLevel",
    "StoryStatus",
    "TeamMember",
    "Story",
    "Epic",
    "Sprint",
    "DailyDisruption",
    "DailyState",
    "SprintMetrics",

    # Config
    "Config",
    "SkillMultiplierTable",
    "load_skill_multipliers",
    "default_multipliers",

    # Capacity
    "CapacityModel",
    "TeamCapacity",
    "calculate_team_capacity",

    # Skill levels
    "percentage_to_skill_level",
    "skill_level_to_percentage",
    "get_skill_level_label",

    # Stories
    "StoryGenerator",
    "StoryStrategy",
    "RuleBasedStoryGenerator",
    "OpenAIStoryGenerator",
    "EpicResult",
    "generate_stories_from_epic",
    "create_epic_from_description",
    "create_epic",

    # Planning
    "SprintPlanner",
    "plan_sprints",
    "move_story",
    "assign_sprints",

    # Simulation
    "DayResult",
    "calculate_effective_capacity",
    "simulate_day_progress",
    "day_of_week",

    # Metrics and log
    "RiskLevel",
    "calculate_sprint_metrics",
    "generate_log",

    # Sessions
    "PlanningSession",
    "SprintSimulation",
    "SimulationError",
]
