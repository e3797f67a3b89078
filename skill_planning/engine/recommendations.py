"""Ranked team recommendations for a project.

All functions are *pure*.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, Field

from skill_planning.config import EngineSettings
from skill_planning.engine.compatibility import CompatibilityResult, score_team_against_requirements
from skill_planning.engine.requirements import resolve_required_skills
from skill_planning.skill_models import (
    Person,
    PersonSkill,
    Project,
    ProjectSkill,
    ProjectSolution,
    RecommendationLevel,
    Skill,
    Solution,
    Team,
)


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class RankedRecommendation(BaseModel):
    """A ranked staffing suggestion."""

    rank: int = Field(ge=1)
    team_id: str
    team_name: str
    compatibility: CompatibilityResult
    recommendation: str


_RANKING_TEXT: dict[RecommendationLevel, str] = {
    "excellent": "Excellent match - ready to staff immediately",
    "good": "Good match - minor skill gaps",
    "fair": "Fair match - training recommended",
    "poor": "Poor match - consider alternative team or hire",
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def recommend_teams_for_project(
    project: Project,
    teams: Iterable[Team],
    project_skills: Iterable[ProjectSkill],
    solutions: Iterable[Solution],
    skill_catalog: Iterable[Skill],
    project_solutions: Iterable[ProjectSolution] = (),
    people: Iterable[Person] | None = None,
    person_skills: Iterable[PersonSkill] | None = None,
    max_results: int = 5,
    *,
    settings: EngineSettings | None = None,
) -> list[RankedRecommendation]:
    """Return the top *max_results* teams for *project*, rank 1 first.

    Ordering: score desc, then smaller skill gap, then team id.

    Raises:
        ValueError: If *max_results* is negative or *project* is ``None``.
    """
    if max_results < 0:
        raise ValueError(f"max_results must be >= 0, got {max_results}")

    catalog = list(skill_catalog)
    team_list = list(teams)
    people_list = list(people) if people is not None else None
    person_skill_list = list(person_skills) if person_skills is not None else None

    required = resolve_required_skills(project, project_skills, solutions, catalog, project_solutions)
    names = {t.id: t.name for t in team_list}
    results = [
        score_team_against_requirements(
            team, required, catalog, people_list, person_skill_list,
            project_id=project.id, settings=settings,
        )
        for team in team_list
    ]
    ranked = sorted(results, key=lambda r: (-r.compatibility_score, r.skills_gap, r.team_id))

    return [
        RankedRecommendation(
            rank=i,
            team_id=res.team_id,
            team_name=names[res.team_id],
            compatibility=res,
            recommendation=_RANKING_TEXT[res.recommendation],
        )
        for i, res in enumerate(ranked[:max_results], start=1)
    ]
