"""Tests for skill_planning.default_catalog module."""

from skill_planning.default_catalog import (
    DEFAULT_SKILLS,
    DEFAULT_SOLUTIONS,
    DEFAULT_TEAMS,
    get_default_categories,
    get_default_skill,
)


class TestDefaultCatalog:
    def test_unique_ids(self):
        ids = [s.id for s in DEFAULT_SKILLS]
        assert len(ids) == len(set(ids)) == 6

    def test_references_resolve(self):
        ids = {s.id for s in DEFAULT_SKILLS}
        for team in DEFAULT_TEAMS:
            assert set(team.target_skills) <= ids, team.id
        for solution in DEFAULT_SOLUTIONS:
            assert set(solution.skills) <= ids, solution.id

    def test_no_team_holds_vue(self):
        assert all("vue" not in t.target_skills for t in DEFAULT_TEAMS)

    def test_lookup(self):
        assert get_default_skill("docker").category == "DevOps"
        assert get_default_skill("cobol") is None

    def test_categories(self):
        assert get_default_categories() == {"Frontend", "Language", "Backend", "DevOps"}
