"""Ad-hoc team search: which teams cover a hand-picked list of skills?

All functions are *pure*.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, Field

from skill_planning.config import EngineSettings
from skill_planning.engine.compatibility import score_team_against_requirements
from skill_planning.engine.requirements import adhoc_requirements
from skill_planning.skill_models import (
    Person,
    PersonSkill,
    RecommendationLevel,
    Skill,
    Team,
)


class RankedTeamMatch(BaseModel):
    """A team that passed the filter."""

    team_id: str
    team_name: str
    compatibility_score: float = Field(ge=0.0, le=1.0)
    skills_required: int = Field(default=0, ge=0)
    skills_matched: int = Field(default=0, ge=0)
    matching_skills: list[str] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)
    recommendation: RecommendationLevel


def filter_teams_by_skills(
    teams: Iterable[Team],
    required_skill_ids: Iterable[str],
    skill_catalog: Iterable[Skill],
    people: Iterable[Person] | None = None,
    person_skills: Iterable[PersonSkill] | None = None,
    min_compatibility: float = 0.0,
    *,
    settings: EngineSettings | None = None,
) -> list[RankedTeamMatch]:
    """Return teams scoring at least *min_compatibility*, best first.

    An empty *required_skill_ids* is a zero-constraint query: every team
    scores 1.0 and passes whatever the threshold. Unknown skill ids are
    ignored. Ties are broken by team name.
    """
    team_list = list(teams)
    skill_ids = list(required_skill_ids)

    if not skill_ids:
        return sorted(
            (
                RankedTeamMatch(
                    team_id=t.id,
                    team_name=t.name,
                    compatibility_score=1.0,
                    recommendation="excellent",
                )
                for t in team_list
            ),
            key=lambda m: m.team_name,
        )

    catalog = list(skill_catalog)
    people_list = list(people) if people is not None else None
    person_skill_list = list(person_skills) if person_skills is not None else None
    required = adhoc_requirements(skill_ids, catalog)

    matches: list[RankedTeamMatch] = []
    for team in team_list:
        res = score_team_against_requirements(
            team, required, catalog, people_list, person_skill_list, settings=settings,
        )
        if res.compatibility_score < min_compatibility:
            continue
        matches.append(RankedTeamMatch(
            team_id=team.id,
            team_name=team.name,
            compatibility_score=res.compatibility_score,
            skills_required=res.skills_required,
            skills_matched=res.skills_matched,
            matching_skills=[m.skill_name for m in res.skill_matches if m.match_type == "exact"],
            missing_skills=[m.skill_name for m in res.skill_matches if m.match_type != "exact"],
            recommendation=res.recommendation,
        ))

    return sorted(matches, key=lambda m: (-m.compatibility_score, m.team_name))
