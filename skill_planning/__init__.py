"""Skills-based planning: team ↔ project matching and skill coverage."""

from .config import DEFAULT_SETTINGS, EngineSettings, load_settings
from .skill_models import (
    Person,
    PersonSkill,
    Project,
    ProjectSkill,
    ProjectSolution,
    RequiredSkill,
    Skill,
    Solution,
    Team,
)

__all__ = [
    "DEFAULT_SETTINGS",
    "EngineSettings",
    "Person",
    "PersonSkill",
    "Project",
    "ProjectSkill",
    "ProjectSolution",
    "RequiredSkill",
    "Skill",
    "Solution",
    "Team",
    "load_settings",
]
