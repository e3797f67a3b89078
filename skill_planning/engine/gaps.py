"""Project skill-gap analysis across every candidate team.

All functions are *pure*.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, Field

from skill_planning.config import EngineSettings
from skill_planning.engine.compatibility import CompatibilityResult, score_team_against_requirements
from skill_planning.engine.requirements import resolve_required_skills
from skill_planning.skill_models import (
    GapPriority,
    Person,
    PersonSkill,
    Project,
    ProjectSkill,
    ProjectSolution,
    Skill,
    Solution,
    Team,
)


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class PrioritizedSkill(BaseModel):
    """A required skill annotated with its organisation-wide gap priority."""

    skill_id: str
    skill_name: str
    category: str
    priority: GapPriority


class TeamSkillProfile(BaseModel):
    """Per-team view: what it brings and what it lacks for this project."""

    team_id: str
    team_name: str
    compatibility: CompatibilityResult
    missing_skills: list[str] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)


class SkillGap(BaseModel):
    """A required skill that at least one team lacks exactly."""

    skill_id: str
    skill_name: str
    category: str
    teams_needing: list[str] = Field(default_factory=list)
    priority: GapPriority


class ProjectSkillGapAnalysis(BaseModel):
    """Gap report for one project."""

    project_id: str
    project_name: str
    required_skills: list[PrioritizedSkill] = Field(default_factory=list)
    available_teams: list[TeamSkillProfile] = Field(default_factory=list)
    best_team: str | None = None
    skill_gaps: list[SkillGap] = Field(default_factory=list)
    training_needs: list[str] = Field(default_factory=list)
    hiring_needs: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def analyze_project_skill_gaps(
    project: Project,
    teams: Iterable[Team],
    project_skills: Iterable[ProjectSkill],
    solutions: Iterable[Solution],
    skill_catalog: Iterable[Skill],
    project_solutions: Iterable[ProjectSolution] = (),
    people: Iterable[Person] | None = None,
    person_skills: Iterable[PersonSkill] | None = None,
    *,
    settings: EngineSettings | None = None,
) -> ProjectSkillGapAnalysis:
    """Score every team for *project* and aggregate cross-team skill gaps."""
    catalog = list(skill_catalog)
    team_list = list(teams)
    people_list = list(people) if people is not None else None
    person_skill_list = list(person_skills) if person_skills is not None else None

    required = resolve_required_skills(project, project_skills, solutions, catalog, project_solutions)
    results = [
        score_team_against_requirements(
            team, required, catalog, people_list, person_skill_list,
            project_id=project.id, settings=settings,
        )
        for team in team_list
    ]

    gaps = _skill_gaps(results)
    priorities = {g.skill_id: g.priority for g in gaps}
    category_covered = _category_covered(results)

    return ProjectSkillGapAnalysis(
        project_id=project.id,
        project_name=project.name,
        required_skills=[
            PrioritizedSkill(
                skill_id=r.skill_id,
                skill_name=r.skill_name,
                category=r.category,
                priority=priorities.get(r.skill_id, "nice-to-have"),
            )
            for r in required
        ],
        available_teams=[_profile(team, res) for team, res in zip(team_list, results)],
        best_team=select_best_team(results),
        skill_gaps=gaps,
        training_needs=[g.skill_name for g in gaps if g.skill_id in category_covered],
        hiring_needs=[g.skill_name for g in gaps if g.priority == "critical"],
    )


def select_best_team(results: list[CompatibilityResult]) -> str | None:
    """Highest score wins; ties go to the smaller gap, then the lower team id.

    Returns ``None`` when there is nothing to choose from: no results, no
    requirements, or several teams tied at a score of 0.
    """
    if not results or results[0].skills_required == 0:
        return None
    ranked = sorted(results, key=lambda r: (-r.compatibility_score, r.skills_gap, r.team_id))
    top = ranked[0]
    if top.compatibility_score == 0 and len(ranked) > 1 and ranked[1].compatibility_score == 0:
        return None
    return top.team_id


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------
def _skill_gaps(results: list[CompatibilityResult]) -> list[SkillGap]:
    if not results:
        return []
    team_count = len(results)

    gaps: list[SkillGap] = []
    for idx, match in enumerate(results[0].skill_matches):
        per_team = [(res.team_id, res.skill_matches[idx].match_type) for res in results]
        needing = [team_id for team_id, kind in per_team if kind != "exact"]
        if not needing:
            continue

        priority: GapPriority
        if all(kind == "none" for _, kind in per_team):
            priority = "critical"
        elif len(needing) / team_count > 0.5:
            priority = "important"
        else:
            priority = "nice-to-have"

        gaps.append(SkillGap(
            skill_id=match.skill_id,
            skill_name=match.skill_name,
            category=match.category,
            teams_needing=needing,
            priority=priority,
        ))
    return gaps


def _category_covered(results: list[CompatibilityResult]) -> set[str]:
    """Skill ids for which at least one team holds an adjacent skill."""
    return {
        m.skill_id
        for res in results
        for m in res.skill_matches
        if m.match_type == "category"
    }


def _profile(team: Team, result: CompatibilityResult) -> TeamSkillProfile:
    return TeamSkillProfile(
        team_id=team.id,
        team_name=team.name,
        compatibility=result,
        missing_skills=[m.skill_name for m in result.skill_matches if m.match_type == "none"],
        strengths=[m.skill_name for m in result.skill_matches if m.match_type == "exact"],
    )
