"""Requirement resolution: which skills does a project need?

All functions are *pure*.
"""

from __future__ import annotations

from collections.abc import Iterable
import logging

from skill_planning.skill_models import (
    Importance,
    Project,
    ProjectSkill,
    ProjectSolution,
    RequiredSkill,
    RequirementSource,
    Skill,
    Solution,
    higher_importance,
    index_skills,
)

logger = logging.getLogger(__name__)


def resolve_required_skills(
    project: Project,
    project_skills: Iterable[ProjectSkill],
    solutions: Iterable[Solution],
    skill_catalog: Iterable[Skill],
    project_solutions: Iterable[ProjectSolution] = (),
) -> list[RequiredSkill]:
    """Return the de-duplicated skills *project* requires.

    Solution-derived skills come first, then project-specific ones. A skill
    listed by both is tagged ``"project"`` and keeps its highest importance.
    Rows for other projects are ignored; stale references (unknown solution
    or skill ids) are dropped.

    Raises:
        ValueError: If *project* is ``None``.
    """
    if project is None:
        raise ValueError("project is required")

    catalog = index_skills(skill_catalog)
    solutions_by_id = {s.id: s for s in solutions}

    # skill_id → (source, importance); dict keeps first-seen order
    collected: dict[str, tuple[RequirementSource, Importance]] = {}

    for solution_id, importance in _solution_links(project, project_solutions):
        solution = solutions_by_id.get(solution_id)
        if solution is None:
            logger.debug("Project %s links unknown solution %s", project.id, solution_id)
            continue
        for skill_id in solution.skills:
            if skill_id in collected:
                source, seen = collected[skill_id]
                collected[skill_id] = (source, higher_importance(seen, importance))
            else:
                collected[skill_id] = ("solution", importance)

    for ps in project_skills:
        if ps.project_id != project.id:
            continue
        if ps.skill_id in collected:
            _, seen = collected[ps.skill_id]
            collected[ps.skill_id] = ("project", higher_importance(seen, ps.importance))
        else:
            collected[ps.skill_id] = ("project", ps.importance)

    required: list[RequiredSkill] = []
    for skill_id, (source, importance) in collected.items():
        skill = catalog.get(skill_id)
        if skill is None:
            logger.debug("Project %s requires unknown skill %s", project.id, skill_id)
            continue
        required.append(RequiredSkill(
            skill_id=skill.id,
            skill_name=skill.name,
            category=skill.category,
            source=source,
            importance=importance,
        ))
    return required


def adhoc_requirements(
    skill_ids: Iterable[str],
    skill_catalog: Iterable[Skill],
) -> list[RequiredSkill]:
    """Build high-importance requirements from a bare list of skill ids."""
    catalog = index_skills(skill_catalog)
    required: list[RequiredSkill] = []
    seen: set[str] = set()
    for skill_id in skill_ids:
        if skill_id in seen:
            continue
        seen.add(skill_id)
        skill = catalog.get(skill_id)
        if skill is None:
            logger.debug("Ad-hoc requirement references unknown skill %s", skill_id)
            continue
        required.append(RequiredSkill(
            skill_id=skill.id,
            skill_name=skill.name,
            category=skill.category,
            source="adhoc",
            importance="high",
        ))
    return required


def _solution_links(
    project: Project,
    project_solutions: Iterable[ProjectSolution],
) -> list[tuple[str, Importance]]:
    """(solution_id, importance) pairs from association rows + inline ids."""
    links: list[tuple[str, Importance]] = [
        (row.solution_id, row.importance)
        for row in project_solutions
        if row.project_id == project.id
    ]
    linked = {sid for sid, _ in links}
    links.extend((sid, "medium") for sid in project.solution_ids if sid not in linked)
    return links
