"""
Configuration for Sprint Simulator

Loads settings from config.yaml and the environment, and the skill
multiplier table used by the capacity model.
"""

import csv
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml

from .models import SkillArea, SkillLevel


DEFAULT_MULTIPLIERS_PATH = Path(__file__).parent / "data" / "skill_multipliers.csv"
DEFAULT_OPENAI_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"


@dataclass(frozen=True)
class SkillMultiplierTable:
    """
    Daily point output per unit of availability, keyed by level and area.

    Missing entries count as 0.
    """
    values: dict[SkillLevel, dict[SkillArea, float]] = field(default_factory=dict)

    def get(self, level: SkillLevel, area: SkillArea) -> float:
        return self.values.get(level, {}).get(area, 0.0)

    def to_dict(self) -> dict:
        return {
            level.value: {area.value: self.get(level, area) for area in SkillArea}
            for level in SkillLevel
        }


def _parse_multiplier(raw: Optional[str]) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0.0
    return value if value > 0 else 0.0


def load_skill_multipliers(path: Optional[str | Path] = None) -> SkillMultiplierTable:
    """
    Read a multiplier table from CSV.

    Expected header: skill_level,backend,frontend,fullstack,qa,devops,mobile.
    Rows for unknown levels are skipped; unparseable or missing cells become 0.
    """
    path = Path(path) if path else DEFAULT_MULTIPLIERS_PATH

    parsed: dict[SkillLevel, dict[SkillArea, float]] = {}
    with open(path, newline="", encoding="utf-8") as f:
        for row in csv.DictReader(f):
            raw_level = (row.get("skill_level") or "").strip().lower()
            try:
                level = SkillLevel(raw_level)
            except ValueError:
                continue
            parsed[level] = {
                area: _parse_multiplier(row.get(area.value)) for area in SkillArea
            }

    # Fill every level/area pair so lookups never miss
    complete = {
        level: {area: parsed.get(level, {}).get(area, 0.0) for area in SkillArea}
        for level in SkillLevel
    }
    return SkillMultiplierTable(values=complete)


@lru_cache(maxsize=None)
def default_multipliers(path: Optional[str] = None) -> SkillMultiplierTable:
    """Load the multiplier table once per process and reuse it."""
    return load_skill_multipliers(path)


class Config:
    """Load configuration from config.yaml and environment."""

    def __init__(self, config_path: str = "config/config.yaml"):
        self.config = {}

        if os.path.exists(config_path):
            with open(config_path) as f:
                self.config = yaml.safe_load(f) or {}

        # Override with environment variables
        self._load_env()

    def _load_env(self):
        """Load configuration from environment variables."""
        env_mapping = {
            "OPENAI_API_KEY": ("openai", "api_key"),
            "OPENAI_MODEL": ("openai", "model"),
            "OPENAI_API_URL": ("openai", "url"),
            "SKILL_MULTIPLIERS_PATH": ("capacity", "multipliers_path"),
            "SPRINT_SIM_LOG_LEVEL": ("logging", "level"),
        }

        for env_var, (section, key) in env_mapping.items():
            value = os.getenv(env_var)
            if value:
                if section not in self.config:
                    self.config[section] = {}
                self.config[section][key] = value

    def get(self, section: str, key: str, default=None):
        """Get configuration value."""
        return (self.config.get(section) or {}).get(key, default)

    @property
    def openai_api_key(self) -> Optional[str]:
        return self.get("openai", "api_key") or None

    @property
    def openai_model(self) -> str:
        return self.get("openai", "model", DEFAULT_OPENAI_MODEL)

    @property
    def openai_url(self) -> str:
        return self.get("openai", "url", DEFAULT_OPENAI_URL)

    @property
    def openai_temperature(self) -> float:
        return float(self.get("openai", "temperature", 0.7))

    @property
    def openai_max_tokens(self) -> int:
        return int(self.get("openai", "max_tokens", 2000))

    @property
    def openai_timeout(self) -> float:
        return float(self.get("openai", "timeout", 30.0))

    @property
    def multipliers_path(self) -> Optional[str]:
        return self.get("capacity", "multipliers_path") or None

    @property
    def total_days(self) -> int:
        return int(self.get("simulation", "total_days", 5))

    @property
    def log_level(self) -> str:
        return str(self.get("logging", "level", "INFO")).upper()

    @property
    def skill_multipliers(self) -> SkillMultiplierTable:
        return default_multipliers(self.multipliers_path)
