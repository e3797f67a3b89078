"""Compatibility scoring between a team and a set of required skills.

All functions are *pure*: no side-effects and no I/O.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import logging

from pydantic import BaseModel, Field

from skill_planning.config import DEFAULT_SETTINGS, EngineSettings
from skill_planning.engine.requirements import resolve_required_skills
from skill_planning.skill_models import (
    MatchType,
    Person,
    PersonSkill,
    Project,
    ProjectSkill,
    ProjectSolution,
    RecommendationLevel,
    RequiredSkill,
    Skill,
    Solution,
    Team,
    index_skills,
)
from skill_planning.text_similarity import find_best_skill_match

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class SkillMatch(BaseModel):
    """How a team covers one required skill."""

    skill_id: str
    skill_name: str
    category: str
    match_type: MatchType


class CategoryTally(BaseModel):
    """Required vs exactly matched skills within one category."""

    required: int = Field(default=0, ge=0)
    matched: int = Field(default=0, ge=0)


class CompatibilityResult(BaseModel):
    """Score for a single team ↔ requirement set pair."""

    team_id: str
    project_id: str | None = None
    skills_required: int = Field(ge=0)
    skills_matched: int = Field(ge=0)
    skills_gap: int = Field(ge=0)
    compatibility_score: float = Field(ge=0.0, le=1.0)
    skill_matches: list[SkillMatch] = Field(default_factory=list)
    category_distribution: dict[str, CategoryTally] = Field(default_factory=dict)
    recommendation: RecommendationLevel
    reasoning: list[str] = Field(default_factory=list)


_CREDIT_EXACT = 1.0

_HEADLINES: dict[RecommendationLevel, str] = {
    "excellent": "High skill match",
    "good": "Good skill compatibility",
    "fair": "Moderate skill match",
    "poor": "Low skill compatibility",
}


# ---------------------------------------------------------------------------
# Effective skill set
# ---------------------------------------------------------------------------
def effective_team_skills(
    team: Team,
    skill_catalog: Iterable[Skill],
    people: Iterable[Person] | None = None,
    person_skills: Iterable[PersonSkill] | None = None,
    *,
    settings: EngineSettings | None = None,
) -> set[str]:
    """Catalog skill ids a team can bring: declared skills ∪ active members' skills."""
    return team_skills_from_index(
        team, index_skills(skill_catalog), people, person_skills, settings or DEFAULT_SETTINGS
    )


def team_skills_from_index(
    team: Team,
    catalog: Mapping[str, Skill],
    people: Iterable[Person] | None,
    person_skills: Iterable[PersonSkill] | None,
    settings: EngineSettings,
) -> set[str]:
    """Same as :func:`effective_team_skills`, over a prebuilt id → Skill index."""
    skills: set[str] = set()
    for label in team.target_skills:
        if label in catalog:
            skills.add(label)
            continue
        # legacy free-text label
        match = find_best_skill_match(label, catalog.values(), settings.name_match_threshold)
        if match is None:
            logger.debug("Team %s: skill label %r not in catalog", team.id, label)
            continue
        logger.debug(
            "Team %s: resolved label %r to %s (%.2f)",
            team.id, label, match.skill_id, match.confidence,
        )
        skills.add(match.skill_id)

    if people and person_skills:
        members = {p.id for p in people if p.team_id == team.id and p.is_active}
        skills.update(
            ps.skill_id
            for ps in person_skills
            if ps.person_id in members and ps.skill_id in catalog
        )
    return skills


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def recommendation_level(score: float, settings: EngineSettings | None = None) -> RecommendationLevel:
    """Bucket a score; lower bounds are inclusive."""
    settings = settings or DEFAULT_SETTINGS
    if score >= settings.excellent_threshold:
        return "excellent"
    if score >= settings.good_threshold:
        return "good"
    if score >= settings.fair_threshold:
        return "fair"
    return "poor"


def score_team_against_requirements(
    team: Team,
    required_skills: Iterable[RequiredSkill],
    skill_catalog: Iterable[Skill],
    people: Iterable[Person] | None = None,
    person_skills: Iterable[PersonSkill] | None = None,
    *,
    project_id: str | None = None,
    settings: EngineSettings | None = None,
) -> CompatibilityResult:
    """Score *team* against *required_skills*.

    Exact matches earn full credit, category matches earn
    ``settings.category_match_credit``; only exact matches count as matched.
    An empty requirement set scores 0.

    Raises:
        ValueError: If *team* is ``None``.
    """
    if team is None:
        raise ValueError("team is required")
    settings = settings or DEFAULT_SETTINGS

    catalog = index_skills(skill_catalog)
    team_skills = team_skills_from_index(team, catalog, people, person_skills, settings)
    team_categories = {catalog[sid].category for sid in team_skills}

    matches: list[SkillMatch] = []
    distribution: dict[str, CategoryTally] = {}
    seen: set[str] = set()
    credit = 0.0

    for req in required_skills:
        if req.skill_id in seen:
            continue
        seen.add(req.skill_id)

        tally = distribution.setdefault(req.category, CategoryTally())
        tally.required += 1

        match_type: MatchType
        if req.skill_id in team_skills:
            match_type = "exact"
            credit += _CREDIT_EXACT
            tally.matched += 1
        elif req.category in team_categories:
            match_type = "category"
            credit += settings.category_match_credit
        else:
            match_type = "none"

        matches.append(SkillMatch(
            skill_id=req.skill_id,
            skill_name=req.skill_name,
            category=req.category,
            match_type=match_type,
        ))

    required = len(matches)
    matched = sum(1 for m in matches if m.match_type == "exact")
    score = 0.0 if required == 0 else max(0.0, min(1.0, credit / required))
    level = recommendation_level(score, settings)

    return CompatibilityResult(
        team_id=team.id,
        project_id=project_id,
        skills_required=required,
        skills_matched=matched,
        skills_gap=required - matched,
        compatibility_score=score,
        skill_matches=matches,
        category_distribution=distribution,
        recommendation=level,
        reasoning=_reasoning(score, level, matches),
    )


def calculate_team_project_compatibility(
    team: Team,
    project: Project,
    project_skills: Iterable[ProjectSkill],
    solutions: Iterable[Solution],
    skill_catalog: Iterable[Skill],
    project_solutions: Iterable[ProjectSolution] = (),
    people: Iterable[Person] | None = None,
    person_skills: Iterable[PersonSkill] | None = None,
    *,
    settings: EngineSettings | None = None,
) -> CompatibilityResult:
    """Resolve *project*'s requirements and score *team* against them."""
    catalog = list(skill_catalog)
    required = resolve_required_skills(project, project_skills, solutions, catalog, project_solutions)
    return score_team_against_requirements(
        team, required, catalog, people, person_skills,
        project_id=project.id, settings=settings,
    )


# ---------------------------------------------------------------------------
# Reasoning text
# ---------------------------------------------------------------------------
def _reasoning(score: float, level: RecommendationLevel, matches: list[SkillMatch]) -> list[str]:
    lines = [f"{_HEADLINES[level]} ({round(score * 100)}%)"]
    strong = [m.skill_name for m in matches if m.match_type == "exact"]
    missing = [m.skill_name for m in matches if m.match_type != "exact"]
    if strong:
        lines.append(f"Strong in: {', '.join(strong)}")
    if missing:
        lines.append(f"Missing: {', '.join(missing)}")
    return lines
