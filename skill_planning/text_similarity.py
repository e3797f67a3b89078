"""Free-text skill name matching against the skill catalog.

One confidence contract shared by the compatibility scorer (legacy team skill
labels), the skills migration helpers, and collaborators that propose skill
names extracted from documents. Confidence is always in [0, 1].
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Literal

from pydantic import BaseModel, Field
from rapidfuzz.distance import Levenshtein

from skill_planning.skill_models import Skill


NameMatchType = Literal["exact", "partial", "fuzzy"]

_TYPE_PRIORITY: dict[str, int] = {"exact": 0, "partial": 1, "fuzzy": 2}


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class SkillNameMatch(BaseModel):
    """A catalog skill proposed for a free-text name."""

    original_name: str
    skill_id: str
    skill_name: str
    confidence: float = Field(ge=0.0, le=1.0)
    match_type: NameMatchType


class AmbiguousName(BaseModel):
    """A name with several plausible catalog skills."""

    original_name: str
    candidates: list[SkillNameMatch]


class SkillReconciliation(BaseModel):
    """Outcome of mapping a batch of free-text names onto the catalog."""

    matched: list[SkillNameMatch] = Field(default_factory=list)
    ambiguous: list[AmbiguousName] = Field(default_factory=list)
    unmatched: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Similarity
# ---------------------------------------------------------------------------
def _normalise(text: str) -> str:
    return text.lower().strip()


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance between *a* and *b* (insert / delete / substitute)."""
    return Levenshtein.distance(a, b)


def calculate_similarity(a: str, b: str) -> float:
    """Case-insensitive similarity ∈ [0, 1] based on edit distance.

    similarity = (len(longer) - distance) / len(longer)
    """
    s1, s2 = _normalise(a), _normalise(b)
    if s1 == s2:
        return 1.0
    longer = max(len(s1), len(s2))
    return (longer - levenshtein_distance(s1, s2)) / longer


# ---------------------------------------------------------------------------
# Catalog matching
# ---------------------------------------------------------------------------
def find_skill_matches(
    name: str,
    skills: Iterable[Skill],
    confidence_threshold: float = 0.8,
) -> list[SkillNameMatch]:
    """Return catalog skills matching *name*, best first.

    Each skill appears at most once, with its strongest match kind:
    exact (case-insensitive equality), partial (one name contains the other;
    confidence = shorter / longer length) or fuzzy (edit-distance similarity).
    Partial and fuzzy candidates below *confidence_threshold* are dropped.
    """
    search = _normalise(name)
    if not search:
        return []

    matches: list[SkillNameMatch] = []
    for skill in skills:
        candidate = _normalise(skill.name)
        if candidate == search:
            matches.append(_match(name, skill, 1.0, "exact"))
            continue

        # raw confidences; rounding happens only in _match
        partial = 0.0
        if candidate and (search in candidate or candidate in search):
            partial = min(len(search), len(candidate)) / max(len(search), len(candidate))
        similarity = calculate_similarity(search, candidate)

        if partial >= confidence_threshold and partial >= similarity:
            matches.append(_match(name, skill, partial, "partial"))
        elif similarity >= confidence_threshold:
            matches.append(_match(name, skill, similarity, "fuzzy"))

    return sorted(
        matches,
        key=lambda m: (-m.confidence, _TYPE_PRIORITY[m.match_type], m.skill_name),
    )


def find_best_skill_match(
    name: str,
    skills: Iterable[Skill],
    confidence_threshold: float = 0.8,
) -> SkillNameMatch | None:
    """Return the single best catalog match for *name*, or ``None``."""
    matches = find_skill_matches(name, skills, confidence_threshold)
    return matches[0] if matches else None


def reconcile_skill_names(
    names: Iterable[str],
    skills: Iterable[Skill],
    confidence_threshold: float = 0.8,
    auto_accept_confidence: float = 0.95,
) -> SkillReconciliation:
    """Map proposed skill names onto the catalog.

    A name is *matched* when it has a single candidate or its best candidate
    reaches *auto_accept_confidence*; *ambiguous* when several candidates
    compete below that level; *unmatched* when nothing clears the threshold.
    """
    catalog = list(skills)
    result = SkillReconciliation()
    seen: set[str] = set()

    for name in names:
        key = _normalise(name)
        if not key or key in seen:
            continue
        seen.add(key)

        matches = find_skill_matches(name, catalog, confidence_threshold)
        if not matches:
            result.unmatched.append(name)
        elif len(matches) == 1 or matches[0].confidence >= auto_accept_confidence:
            result.matched.append(matches[0])
        else:
            result.ambiguous.append(AmbiguousName(original_name=name, candidates=matches))

    return result


def _match(original: str, skill: Skill, confidence: float, kind: NameMatchType) -> SkillNameMatch:
    return SkillNameMatch(
        original_name=original,
        skill_id=skill.id,
        skill_name=skill.name,
        confidence=round(confidence, 4),
        match_type=kind,
    )
