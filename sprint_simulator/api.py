"""
FastAPI Backend for Sprint Simulator

REST surface over a single in-process planning session.
"""

import logging
from datetime import datetime
from typing import Optional
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .config import Config
from .integrations import OpenAIClient, is_openai_configured
from .logging_config import configure_logging
from .metrics import calculate_sprint_metrics
from .models import SkillArea, SkillLevel
from .session import PlanningSession, SimulationError
from .simulation import calculate_effective_capacity
from .skill_levels import get_skill_level_label, percentage_to_skill_level
from .story_generator import StoryGenerator
from .visualizer import Visualizer


logger = logging.getLogger(__name__)


# Global instances
config = Config()
session = PlanningSession(config.skill_multipliers, total_days=config.total_days)
visualizer = Visualizer()


# Pydantic models for API
class MemberRequest(BaseModel):
    name: str
    skills: dict[SkillArea, Optional[SkillLevel]] = Field(default_factory=dict)
    availability: float = Field(default=1.0, ge=0, le=1)


class MemberUpdateRequest(BaseModel):
    name: Optional[str] = None
    skills: Optional[dict[SkillArea, Optional[SkillLevel]]] = None
    availability: Optional[float] = Field(default=None, ge=0, le=1)


class EpicRequest(BaseModel):
    title: str
    description: str = ""
    use_ai: bool = False


class MoveStoryRequest(BaseModel):
    story_id: str
    from_sprint_id: int
    to_sprint_id: int


class StartSimulationRequest(BaseModel):
    sprint_id: Optional[int] = None


class DisruptionRequest(BaseModel):
    member_id: str
    on_call_percent: Optional[float] = Field(default=None, ge=0, le=1)
    sick_percent: Optional[float] = Field(default=None, ge=0, le=1)
    support_work: Optional[bool] = None
    context_switched: Optional[bool] = None


class MetricsRequest(BaseModel):
    planned_points: float
    completed_points: float = 0
    in_progress_points: float = 0
    remaining_points: float = 0
    current_day: int = 1
    total_days: int = 5
    velocity: float = 0


def _openai_client() -> Optional[OpenAIClient]:
    if not is_openai_configured(config.openai_api_key):
        return None
    return OpenAIClient(
        api_key=config.openai_api_key,
        model=config.openai_model,
        url=config.openai_url,
        temperature=config.openai_temperature,
        max_tokens=config.openai_max_tokens,
        timeout=config.openai_timeout
    )


def _require_simulation():
    if session.simulation is None:
        raise HTTPException(status_code=400, detail="No simulation running")
    return session.simulation


# Lifespan context manager
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    configure_logging(config.log_level)
    logger.info("Sprint Simulator API starting up")
    yield
    logger.info("Sprint Simulator API shutting down")


# Create FastAPI app
app = FastAPI(
    title="Sprint Simulator",
    description="Team capacity, sprint planning and day-by-day sprint simulation",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Health check
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "integrations": {
            "openai": is_openai_configured(config.openai_api_key)
        }
    }


# Team endpoints
@app.get("/api/team")
async def get_team():
    return {"members": [m.to_dict() for m in session.team]}


@app.post("/api/team")
async def add_member(request: MemberRequest):
    member = session.add_member(request.name, request.skills, request.availability)
    return member.to_dict()


@app.patch("/api/team/{member_id}")
async def update_member(member_id: str, request: MemberUpdateRequest):
    try:
        member = session.update_member(
            member_id, request.name, request.skills, request.availability
        )
    except SimulationError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return member.to_dict()


@app.delete("/api/team/{member_id}")
async def remove_member(member_id: str):
    try:
        session.remove_member(member_id)
    except SimulationError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"removed": member_id}


@app.get("/api/team/capacity")
async def get_capacity():
    return session.capacity().to_dict()


@app.get("/api/skills/level")
async def classify_skill(percentage: float):
    """Map a proficiency slider value to a skill level and label."""
    level = percentage_to_skill_level(percentage)
    return {
        "percentage": percentage,
        "level": level.value if level else None,
        "label": get_skill_level_label(percentage)
    }


# Epic and planning endpoints
@app.post("/api/epic")
async def create_epic(request: EpicRequest):
    """Break an epic into stories. Falls back to rules if OpenAI fails."""
    generator = StoryGenerator(_openai_client() if request.use_ai else None)
    result = await generator.create_epic(request.title, request.description, request.use_ai)

    if request.use_ai and not generator.generative_available:
        result.notice = "OpenAI is not configured; used rule-based breakdown."

    session.set_epic(result.epic)
    return result.to_dict()


@app.post("/api/sprints/plan")
async def plan_sprints():
    try:
        sprints = session.plan()
    except SimulationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {
        "sprint_capacity": session.capacity().sprint_capacity,
        "sprints": [s.to_dict() for s in sprints]
    }


@app.post("/api/sprints/move")
async def move_story(request: MoveStoryRequest):
    sprints = session.move_story(request.story_id, request.from_sprint_id, request.to_sprint_id)
    return {"sprints": [s.to_dict() for s in sprints]}


@app.post("/api/sprints/accept")
async def accept_plan():
    try:
        epic = session.accept_plan()
    except SimulationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return epic.to_dict()


# Simulation endpoints
@app.post("/api/simulation/start")
async def start_simulation(request: StartSimulationRequest):
    try:
        simulation = session.start_simulation(request.sprint_id)
    except SimulationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return simulation.to_dict()


@app.get("/api/simulation")
async def get_simulation():
    return _require_simulation().to_dict()


@app.post("/api/simulation/disruption")
async def set_disruption(request: DisruptionRequest):
    simulation = _require_simulation()
    changes = request.model_dump(exclude={"member_id"}, exclude_none=True)
    try:
        state = simulation.set_disruption(request.member_id, **changes)
    except SimulationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "day": state.to_dict(),
        "effective_capacity": round(
            calculate_effective_capacity(simulation.team, state.disruptions), 2
        )
    }


@app.post("/api/simulation/advance")
async def advance_day():
    simulation = _require_simulation()
    try:
        state = simulation.advance()
    except SimulationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {
        "day": state.to_dict(),
        "metrics": simulation.metrics().to_dict()
    }


@app.get("/api/simulation/days/{day_number}")
async def get_day(day_number: int):
    simulation = _require_simulation()
    try:
        state = simulation.view(day_number)
    except SimulationError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {
        "day": state.to_dict(),
        "metrics": simulation.metrics(day_number).to_dict()
    }


@app.post("/api/metrics")
async def compute_metrics(request: MetricsRequest):
    """Stateless metrics calculation for arbitrary inputs."""
    metrics = calculate_sprint_metrics(**request.model_dump())
    return metrics.to_dict()


# Reports
@app.get("/api/reports/capacity")
async def get_capacity_report():
    return {"report": visualizer.capacity_report(session.capacity())}


@app.get("/api/reports/plan")
async def get_plan_report():
    return {"report": visualizer.plan_report(session.sprints)}


@app.get("/api/reports/day")
async def get_day_report():
    simulation = _require_simulation()
    return {"report": visualizer.day_report(simulation.current, simulation.metrics())}


@app.post("/api/session/reset")
async def reset_session():
    session.reset()
    return {"status": "reset"}


# Run with: uvicorn sprint_simulator.api:app --reload
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
