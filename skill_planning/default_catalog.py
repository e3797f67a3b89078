"""Default skill catalog, solutions and teams.

A small but realistic organisation used for demos and as test fixtures:
six skills across four categories, two solutions and four teams. No team
holds Vue.js.
"""

from __future__ import annotations

from skill_planning.skill_models import Skill, Solution, Team


# ---------------------------------------------------------------------------
# Skills
# ---------------------------------------------------------------------------
_DEFAULT_SKILLS: list[dict[str, str]] = [
    {"id": "react", "name": "React", "category": "Frontend"},
    {"id": "vue", "name": "Vue.js", "category": "Frontend"},
    {"id": "typescript", "name": "TypeScript", "category": "Language"},
    {"id": "python", "name": "Python", "category": "Language"},
    {"id": "nodejs", "name": "Node.js", "category": "Backend"},
    {"id": "docker", "name": "Docker", "category": "DevOps"},
]

DEFAULT_SKILLS: list[Skill] = [Skill(**s) for s in _DEFAULT_SKILLS]


# ---------------------------------------------------------------------------
# Solutions
# ---------------------------------------------------------------------------
DEFAULT_SOLUTIONS: list[Solution] = [
    Solution(id="web-app", name="React Web App", category="Frontend", skills=["react", "typescript"]),
    Solution(id="containers", name="Container Platform", category="Infrastructure", skills=["docker"]),
]


# ---------------------------------------------------------------------------
# Teams
# ---------------------------------------------------------------------------
DEFAULT_TEAMS: list[Team] = [
    Team(id="team-frontend", name="Frontend Squad", target_skills=["react", "typescript"]),
    Team(id="team-fullstack", name="Full Stack Squad", target_skills=["react", "nodejs", "typescript"]),
    Team(id="team-platform", name="Platform Squad", target_skills=["docker", "python"]),
    Team(id="team-data", name="Data Squad", target_skills=["python"]),
]


def get_default_skill(skill_id: str) -> Skill | None:
    """Look up a default skill by ID."""
    return next((s for s in DEFAULT_SKILLS if s.id == skill_id), None)


def get_default_categories() -> set[str]:
    """Return every category used by the default catalog."""
    return {s.category for s in DEFAULT_SKILLS}
