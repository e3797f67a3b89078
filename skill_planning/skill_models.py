"""Skill, team, and project data models for skills-based planning.

Reference data (skills, solutions) and snapshots (teams, people, projects and
their association rows) are supplied by the caller; the engine never mutates
them.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Literal

from pydantic import BaseModel, Field, field_validator


# ---------------------------------------------------------------------------
# Closed value sets
# ---------------------------------------------------------------------------
Importance = Literal["low", "medium", "high"]
RequirementSource = Literal["solution", "project", "adhoc"]
MatchType = Literal["exact", "category", "none"]
RecommendationLevel = Literal["poor", "fair", "good", "excellent"]
GapPriority = Literal["critical", "important", "nice-to-have"]
ProficiencyLevel = Literal["beginner", "intermediate", "advanced", "expert"]

IMPORTANCE_RANK: dict[str, int] = {"low": 0, "medium": 1, "high": 2}


# ---------------------------------------------------------------------------
# Reference data
# ---------------------------------------------------------------------------
class Skill(BaseModel):
    """A catalog skill with its category tag (e.g. "Frontend", "DevOps")."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    description: str = ""


class Solution(BaseModel):
    """A reusable technology/methodology bundle with intrinsic skill needs."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    category: str = ""
    skills: list[str] = Field(default_factory=list)

    @field_validator("skills", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        return [] if value is None else value


# ---------------------------------------------------------------------------
# Teams and people
# ---------------------------------------------------------------------------
class Team(BaseModel):
    """A delivery team and its declared target skills.

    ``target_skills`` normally holds catalog skill ids. Older data may still
    carry free-text skill names; those are resolved by name when scoring.
    """

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    target_skills: list[str] = Field(default_factory=list)

    @field_validator("target_skills", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        return [] if value is None else value


class Person(BaseModel):
    """A staffed person; belongs to at most one team."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    team_id: str | None = None
    is_active: bool = True


class PersonSkill(BaseModel):
    """An individually tracked skill held by a person."""

    person_id: str = Field(..., min_length=1)
    skill_id: str = Field(..., min_length=1)
    proficiency_level: ProficiencyLevel = "intermediate"
    years_of_experience: float | None = Field(default=None, ge=0)


# ---------------------------------------------------------------------------
# Projects and associations
# ---------------------------------------------------------------------------
class Project(BaseModel):
    """A project. ``solution_ids`` is the legacy inline solution link list."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    solution_ids: list[str] = Field(default_factory=list)

    @field_validator("solution_ids", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        return [] if value is None else value


class ProjectSolution(BaseModel):
    """Links a project to a solution."""

    project_id: str = Field(..., min_length=1)
    solution_id: str = Field(..., min_length=1)
    importance: Importance = "medium"


class ProjectSkill(BaseModel):
    """A project-specific skill requirement."""

    project_id: str = Field(..., min_length=1)
    skill_id: str = Field(..., min_length=1)
    importance: Importance = "medium"


# ---------------------------------------------------------------------------
# Derived
# ---------------------------------------------------------------------------
class RequiredSkill(BaseModel):
    """A resolved requirement; one per skill id."""

    skill_id: str
    skill_name: str
    category: str
    source: RequirementSource
    importance: Importance = "medium"


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def index_skills(skills: Iterable[Skill]) -> dict[str, Skill]:
    """Map skill id → Skill. Later duplicates win."""
    return {s.id: s for s in skills}


def higher_importance(a: Importance, b: Importance) -> Importance:
    """Return whichever of *a* / *b* ranks higher."""
    return a if IMPORTANCE_RANK[a] >= IMPORTANCE_RANK[b] else b
