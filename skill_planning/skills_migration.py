"""Migration of legacy free-text team skills to catalog skill ids.

Older team records list skill *names* in ``target_skills``. These helpers
propose catalog ids for them, flag ambiguous names for manual review, and
validate the migrated teams.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import logging
import uuid

from pydantic import BaseModel, Field

from skill_planning.config import AUTO_MATCH_CONFIDENCE, NAME_MATCH_THRESHOLD
from skill_planning.skill_models import Skill, Team
from skill_planning.text_similarity import AmbiguousName, SkillNameMatch, find_skill_matches

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class SkillMigrationResult(BaseModel):
    """Migration plan for a single team."""

    team_id: str
    original_skills: list[str] = Field(default_factory=list)
    # entries that already are catalog ids
    valid_ids: list[str] = Field(default_factory=list)
    automatic_matches: list[SkillNameMatch] = Field(default_factory=list)
    ambiguous_matches: list[AmbiguousName] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)
    success: bool = False


class MigrationSummary(BaseModel):
    total_teams: int = Field(ge=0)
    teams_processed: int = Field(ge=0)
    automatic_matches: int = Field(ge=0)
    ambiguous_matches: int = Field(ge=0)
    missing_skills: int = Field(ge=0)
    results: list[SkillMigrationResult] = Field(default_factory=list)


class ReviewItem(BaseModel):
    team_name: str
    skill: str
    candidates: list[str]


class MigrationPreview(BaseModel):
    summary: MigrationSummary
    auto_create: list[str] = Field(default_factory=list)
    needs_review: list[ReviewItem] = Field(default_factory=list)
    high_confidence: int = Field(default=0, ge=0)


class MigrationValidation(BaseModel):
    is_valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Analysis
# ---------------------------------------------------------------------------
def analyze_team_skill_migration(
    team: Team,
    skills: Iterable[Skill],
    confidence_threshold: float = NAME_MATCH_THRESHOLD,
    auto_accept_confidence: float = AUTO_MATCH_CONFIDENCE,
) -> SkillMigrationResult:
    """Plan the migration of one team's skill labels.

    Labels that already are catalog ids are kept as-is; only the rest are
    matched by name.
    """
    catalog = list(skills)
    known_ids = {s.id for s in catalog}
    result = SkillMigrationResult(team_id=team.id, original_skills=list(team.target_skills))

    for label in team.target_skills:
        if label in known_ids:
            if label not in result.valid_ids:
                result.valid_ids.append(label)
            continue
        matches = find_skill_matches(label, catalog, confidence_threshold)
        if not matches:
            result.missing_skills.append(label)
        elif len(matches) == 1 or matches[0].confidence >= auto_accept_confidence:
            result.automatic_matches.append(matches[0])
        else:
            result.ambiguous_matches.append(AmbiguousName(original_name=label, candidates=matches))

    result.success = not result.missing_skills and not result.ambiguous_matches
    return result


def analyze_all_teams_migration(
    teams: Iterable[Team],
    skills: Iterable[Skill],
    confidence_threshold: float = NAME_MATCH_THRESHOLD,
    auto_accept_confidence: float = AUTO_MATCH_CONFIDENCE,
) -> MigrationSummary:
    """Run :func:`analyze_team_skill_migration` for every team."""
    catalog = list(skills)
    team_list = list(teams)
    results = [
        analyze_team_skill_migration(t, catalog, confidence_threshold, auto_accept_confidence)
        for t in team_list
    ]

    summary = MigrationSummary(
        total_teams=len(team_list),
        teams_processed=len(results),
        automatic_matches=sum(len(r.automatic_matches) for r in results),
        ambiguous_matches=sum(len(r.ambiguous_matches) for r in results),
        missing_skills=sum(len(r.missing_skills) for r in results),
        results=results,
    )
    logger.info(
        "Skill migration analysed %d teams: %d automatic, %d ambiguous, %d missing",
        summary.teams_processed,
        summary.automatic_matches,
        summary.ambiguous_matches,
        summary.missing_skills,
    )
    return summary


def generate_migration_preview(
    teams: Iterable[Team],
    skills: Iterable[Skill],
    confidence_threshold: float = NAME_MATCH_THRESHOLD,
    auto_accept_confidence: float = AUTO_MATCH_CONFIDENCE,
) -> MigrationPreview:
    """Summarise what a migration would do before applying it."""
    team_list = list(teams)
    summary = analyze_all_teams_migration(
        team_list, skills, confidence_threshold, auto_accept_confidence
    )
    names = {t.id: t.name for t in team_list}

    auto_create: list[str] = []
    needs_review: list[ReviewItem] = []
    high_confidence = 0
    for result in summary.results:
        auto_create.extend(s for s in result.missing_skills if s not in auto_create)
        needs_review.extend(
            ReviewItem(
                team_name=names.get(result.team_id, result.team_id),
                skill=amb.original_name,
                candidates=[c.skill_name for c in amb.candidates],
            )
            for amb in result.ambiguous_matches
        )
        high_confidence += sum(
            1 for m in result.automatic_matches if m.confidence >= auto_accept_confidence
        )

    return MigrationPreview(
        summary=summary,
        auto_create=auto_create,
        needs_review=needs_review,
        high_confidence=high_confidence,
    )


# ---------------------------------------------------------------------------
# Apply / validate
# ---------------------------------------------------------------------------
def apply_skill_migration(
    team: Team,
    result: SkillMigrationResult,
    manual_mappings: Mapping[str, str] | None = None,
) -> Team:
    """Return a copy of *team* whose ``target_skills`` are catalog ids.

    Teams that already used ids (a successful result without matches) are
    returned unchanged. Labels that were catalog ids are carried over in
    place; ambiguous names are kept only when *manual_mappings* resolves
    them. Original label order is preserved.
    """
    if result.success and not result.automatic_matches:
        return team.model_copy()

    manual = manual_mappings or {}
    valid = set(result.valid_ids)
    automatic = {m.original_name: m.skill_id for m in result.automatic_matches}
    ambiguous = {a.original_name for a in result.ambiguous_matches}

    new_ids: list[str] = []
    for label in result.original_skills:
        if label in valid:
            skill_id = label
        elif label in automatic:
            skill_id = automatic[label]
        elif label in ambiguous:
            skill_id = manual.get(label)
        else:
            skill_id = None
        if skill_id and skill_id not in new_ids:
            new_ids.append(skill_id)
    return team.model_copy(update={"target_skills": new_ids})


def create_missing_skills(names: Iterable[str], default_category: str = "General") -> list[Skill]:
    """Create catalog entries for names that matched nothing."""
    return [
        Skill(
            id=str(uuid.uuid4()),
            name=name.strip(),
            category=default_category,
            description="Auto-created during team skills migration",
        )
        for name in names
        if name.strip()
    ]


def validate_migration(
    original_teams: Iterable[Team],
    migrated_teams: Iterable[Team],
    skills: Iterable[Skill],
) -> MigrationValidation:
    """Check migrated teams reference only catalog ids and lost no skills."""
    originals = {t.id: t for t in original_teams}
    migrated = list(migrated_teams)
    known_ids = {s.id for s in skills}
    errors: list[str] = []
    warnings: list[str] = []

    if len(originals) != len(migrated):
        errors.append("Team count mismatch after migration")

    for team in migrated:
        errors.extend(
            f"Team {team.name}: Invalid skill ID {skill_id}"
            for skill_id in team.target_skills
            if skill_id not in known_ids
        )
        original = originals.get(team.id)
        if original is not None and len(team.target_skills) < len(original.target_skills):
            warnings.append(
                f"Team {team.name}: Skill count reduced from "
                f"{len(original.target_skills)} to {len(team.target_skills)}"
            )

    return MigrationValidation(is_valid=not errors, errors=errors, warnings=warnings)
