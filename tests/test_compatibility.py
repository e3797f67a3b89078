"""Tests for skill_planning/engine/compatibility.py."""

import pytest

from skill_planning.config import EngineSettings
from skill_planning.default_catalog import DEFAULT_SKILLS, DEFAULT_SOLUTIONS, DEFAULT_TEAMS
from skill_planning.engine.compatibility import (
    CompatibilityResult,
    calculate_team_project_compatibility,
    effective_team_skills,
    recommendation_level,
    score_team_against_requirements,
)
from skill_planning.engine.requirements import adhoc_requirements
from skill_planning.skill_models import Person, PersonSkill, Project, ProjectSolution, Skill, Team


def _team(skills: list[str], team_id: str = "t1") -> Team:
    return Team(id=team_id, name=f"Team {team_id}", target_skills=skills)


class TestScoring:
    def test_category_match_is_partial_credit(self):
        """React + TypeScript team vs React, TypeScript, Vue.js."""
        required = adhoc_requirements(["react", "typescript", "vue"], DEFAULT_SKILLS)
        res = score_team_against_requirements(_team(["react", "typescript"]), required, DEFAULT_SKILLS)
        # (1 + 1 + 0.25) / 3
        assert res.compatibility_score == pytest.approx(0.75)
        assert res.skills_matched == 2
        assert res.skills_gap == 1
        assert res.recommendation in {"good", "fair"}
        vue = next(m for m in res.skill_matches if m.skill_id == "vue")
        assert vue.match_type == "category"

    def test_no_adjacency_scores_exact_ratio(self):
        """Full stack team vs React, TypeScript, Node.js, Docker."""
        required = adhoc_requirements(["react", "typescript", "nodejs", "docker"], DEFAULT_SKILLS)
        team = _team(["react", "nodejs", "typescript"])
        res = score_team_against_requirements(team, required, DEFAULT_SKILLS)
        assert res.compatibility_score == 0.75
        assert res.skills_matched == 3
        assert res.skills_gap == 1
        assert res.reasoning == [
            "Good skill compatibility (75%)",
            "Strong in: React, TypeScript, Node.js",
            "Missing: Docker",
        ]

    def test_zero_requirements(self):
        res = score_team_against_requirements(_team(["react"]), [], DEFAULT_SKILLS)
        assert res.compatibility_score == 0
        assert res.skills_required == 0
        assert res.recommendation == "poor"
        assert res.reasoning == ["Low skill compatibility (0%)"]

    def test_perfect_match(self):
        required = adhoc_requirements(["react", "typescript"], DEFAULT_SKILLS)
        res = score_team_against_requirements(_team(["react", "typescript"]), required, DEFAULT_SKILLS)
        assert res.compatibility_score == 1.0
        assert res.recommendation == "excellent"
        assert res.reasoning[0] == "High skill match (100%)"
        assert not any(line.startswith("Missing") for line in res.reasoning)

    def test_empty_team(self):
        required = adhoc_requirements(["react", "docker"], DEFAULT_SKILLS)
        res = score_team_against_requirements(Team(id="t", name="T", target_skills=None), required, DEFAULT_SKILLS)
        assert res.compatibility_score == 0
        assert all(m.match_type == "none" for m in res.skill_matches)
        assert not any(line.startswith("Strong") for line in res.reasoning)

    def test_category_distribution(self):
        required = adhoc_requirements(["react", "typescript", "nodejs", "docker"], DEFAULT_SKILLS)
        res = score_team_against_requirements(_team(["react", "nodejs", "typescript"]), required, DEFAULT_SKILLS)
        assert res.category_distribution["Frontend"].matched == 1
        assert res.category_distribution["DevOps"].required == 1
        assert res.category_distribution["DevOps"].matched == 0

    def test_custom_category_credit(self):
        required = adhoc_requirements(["react", "typescript", "vue"], DEFAULT_SKILLS)
        settings = EngineSettings(category_match_credit=0.5)
        res = score_team_against_requirements(
            _team(["react", "typescript"]), required, DEFAULT_SKILLS, settings=settings,
        )
        # (1 + 1 + 0.5) / 3
        assert res.compatibility_score == pytest.approx(2.5 / 3)
        assert res.recommendation == "excellent"

    def test_none_team_raises(self):
        with pytest.raises(ValueError, match="team"):
            score_team_against_requirements(None, [], DEFAULT_SKILLS)


class TestInvariants:
    @pytest.mark.parametrize("team", DEFAULT_TEAMS, ids=lambda t: t.id)
    def test_required_is_matched_plus_gap(self, team):
        required = adhoc_requirements([s.id for s in DEFAULT_SKILLS], DEFAULT_SKILLS)
        res = score_team_against_requirements(team, required, DEFAULT_SKILLS)
        assert res.skills_required == res.skills_matched + res.skills_gap
        assert 0.0 <= res.compatibility_score <= 1.0

    def test_adding_exact_skill_never_lowers_score(self):
        required = adhoc_requirements(["react", "vue", "docker", "python"], DEFAULT_SKILLS)
        skills: list[str] = []
        previous = score_team_against_requirements(_team(skills), required, DEFAULT_SKILLS).compatibility_score
        for skill_id in ["react", "vue", "docker", "python"]:
            skills.append(skill_id)
            score = score_team_against_requirements(_team(skills), required, DEFAULT_SKILLS).compatibility_score
            assert score >= previous
            previous = score
        assert previous == 1.0


class TestRecommendationLevel:
    @pytest.mark.parametrize(
        ("score", "level"),
        [(1.0, "excellent"), (0.8, "excellent"), (0.79, "good"), (0.6, "good"),
         (0.59, "fair"), (0.3, "fair"), (0.29, "poor"), (0.0, "poor")],
    )
    def test_inclusive_lower_bounds(self, score, level):
        assert recommendation_level(score) == level


class TestEffectiveSkills:
    def test_active_members_augment_team(self):
        team = _team(["python"], team_id="data")
        people = [
            Person(id="p1", name="Ada", team_id="data"),
            Person(id="p2", name="Bo", team_id="data", is_active=False),
            Person(id="p3", name="Cy", team_id="other"),
        ]
        person_skills = [
            PersonSkill(person_id="p1", skill_id="react", proficiency_level="advanced"),
            PersonSkill(person_id="p2", skill_id="docker"),
            PersonSkill(person_id="p3", skill_id="nodejs"),
            PersonSkill(person_id="p1", skill_id="ghost"),
        ]
        skills = effective_team_skills(team, DEFAULT_SKILLS, people, person_skills)
        assert skills == {"python", "react"}

    def test_member_skill_counts_as_exact(self):
        team = _team([], team_id="data")
        people = [Person(id="p1", name="Ada", team_id="data")]
        person_skills = [PersonSkill(person_id="p1", skill_id="docker", years_of_experience=4)]
        required = adhoc_requirements(["docker"], DEFAULT_SKILLS)
        res = score_team_against_requirements(team, required, DEFAULT_SKILLS, people, person_skills)
        assert res.skills_matched == 1

    def test_legacy_labels_resolved_by_name(self):
        team = _team(["Typescript", "NodeJS", "COBOL"])
        assert effective_team_skills(team, DEFAULT_SKILLS) == {"typescript", "nodejs"}

    def test_legacy_label_tie_prefers_containment(self):
        """'Golang' is 6/7 to both names; the name containing it wins."""
        catalog = [
            Skill(id="go", name="Go Lang", category="Language"),
            Skill(id="gos", name="Golangs", category="Language"),
        ]
        assert effective_team_skills(_team(["Golang"]), catalog) == {"gos"}


class TestProjectCompatibility:
    def test_resolves_project_requirements(self):
        project = Project(id="p1", name="Portal")
        links = [ProjectSolution(project_id="p1", solution_id="web-app")]
        res = calculate_team_project_compatibility(
            DEFAULT_TEAMS[0], project, [], DEFAULT_SOLUTIONS, DEFAULT_SKILLS, links,
        )
        assert isinstance(res, CompatibilityResult)
        assert res.project_id == "p1"
        assert res.team_id == "team-frontend"
        assert res.compatibility_score == 1.0
