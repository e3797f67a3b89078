"""Organisation-wide skill coverage: how many teams can cover each skill.

All functions are *pure*.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, Field

from skill_planning.config import DEFAULT_SETTINGS, EngineSettings
from skill_planning.engine.compatibility import team_skills_from_index
from skill_planning.skill_models import Person, PersonSkill, Skill, Team, index_skills


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class TeamRef(BaseModel):
    team_id: str
    team_name: str


class SkillCoverage(BaseModel):
    """Coverage of a single catalog skill."""

    skill_id: str
    skill_name: str
    category: str
    teams_with_skill: list[TeamRef] = Field(default_factory=list)
    coverage_count: int = Field(default=0, ge=0)
    is_well_covered: bool = False
    is_at_risk: bool = False


class CategoryCoverage(BaseModel):
    total_skills: int = Field(default=0, ge=0)
    covered_skills: int = Field(default=0, ge=0)
    coverage_percentage: float = Field(default=0.0, ge=0.0, le=100.0)
    average_teams_per_skill: float = Field(default=0.0, ge=0.0)


class CoverageRecommendations(BaseModel):
    skills_at_risk: list[str] = Field(default_factory=list)
    skills_low_coverage: list[str] = Field(default_factory=list)
    skills_well_covered: list[str] = Field(default_factory=list)
    categories_needing_attention: list[str] = Field(default_factory=list)


class SkillCoverageReport(BaseModel):
    """Overall coverage report."""

    total_skills: int = Field(ge=0)
    covered_skills: int = Field(ge=0)
    coverage_percentage: float = Field(ge=0.0, le=100.0)
    skill_coverage: list[SkillCoverage]
    category_analysis: dict[str, CategoryCoverage]
    recommendations: CoverageRecommendations


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def analyze_skill_coverage(
    teams: Iterable[Team],
    skills: Iterable[Skill],
    people: Iterable[Person] | None = None,
    person_skills: Iterable[PersonSkill] | None = None,
    *,
    settings: EngineSettings | None = None,
) -> SkillCoverageReport:
    """Count, per catalog skill, the teams whose effective skill set holds it."""
    settings = settings or DEFAULT_SETTINGS
    skill_list = list(skills)
    catalog = index_skills(skill_list)
    people_list = list(people) if people is not None else None
    person_skill_list = list(person_skills) if person_skills is not None else None

    # one row per team id; first occurrence wins
    unique_teams: dict[str, Team] = {}
    for team in teams:
        unique_teams.setdefault(team.id, team)

    team_skills = [
        (team, team_skills_from_index(team, catalog, people_list, person_skill_list, settings))
        for team in unique_teams.values()
    ]

    coverage: list[SkillCoverage] = []
    for skill in skill_list:
        holders = [
            TeamRef(team_id=team.id, team_name=team.name)
            for team, held in team_skills
            if skill.id in held
        ]
        count = len(holders)
        coverage.append(SkillCoverage(
            skill_id=skill.id,
            skill_name=skill.name,
            category=skill.category,
            teams_with_skill=holders,
            coverage_count=count,
            is_well_covered=count >= settings.well_covered_threshold,
            is_at_risk=count == 0,
        ))

    covered = sum(1 for sc in coverage if sc.coverage_count > 0)
    categories = _category_analysis(coverage)

    return SkillCoverageReport(
        total_skills=len(coverage),
        covered_skills=covered,
        coverage_percentage=_percentage(covered, len(coverage)),
        skill_coverage=coverage,
        category_analysis=categories,
        recommendations=CoverageRecommendations(
            skills_at_risk=[sc.skill_name for sc in coverage if sc.is_at_risk],
            skills_low_coverage=[
                sc.skill_name
                for sc in coverage
                if 0 < sc.coverage_count <= settings.low_coverage_threshold
            ],
            skills_well_covered=[sc.skill_name for sc in coverage if sc.is_well_covered],
            categories_needing_attention=[
                name
                for name, cat in categories.items()
                if cat.coverage_percentage < settings.category_attention_percentage
            ],
        ),
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------
def _percentage(part: int, whole: int) -> float:
    return part / whole * 100 if whole > 0 else 0.0


def _category_analysis(coverage: list[SkillCoverage]) -> dict[str, CategoryCoverage]:
    grouped: dict[str, list[SkillCoverage]] = {}
    for sc in coverage:
        grouped.setdefault(sc.category, []).append(sc)

    result: dict[str, CategoryCoverage] = {}
    for category, items in grouped.items():
        covered = sum(1 for sc in items if sc.coverage_count > 0)
        result[category] = CategoryCoverage(
            total_skills=len(items),
            covered_skills=covered,
            coverage_percentage=_percentage(covered, len(items)),
            average_teams_per_skill=sum(sc.coverage_count for sc in items) / len(items),
        )
    return result
