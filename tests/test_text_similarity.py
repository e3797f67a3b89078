"""Tests for skill_planning/text_similarity.py."""

import pytest

from skill_planning.default_catalog import DEFAULT_SKILLS
from skill_planning.skill_models import Skill
from skill_planning.text_similarity import (
    calculate_similarity,
    find_best_skill_match,
    find_skill_matches,
    levenshtein_distance,
    reconcile_skill_names,
)

_GO_SKILLS = [
    Skill(id="go", name="Go Lang", category="Language"),
    Skill(id="gos", name="Golangs", category="Language"),
]


class TestSimilarity:
    def test_levenshtein(self):
        assert levenshtein_distance("kitten", "sitting") == 3
        assert levenshtein_distance("", "abc") == 3

    def test_case_and_whitespace_insensitive(self):
        assert calculate_similarity("  React ", "react") == 1.0

    def test_one_edit(self):
        # "nodejs" vs "node.js": one insertion over 7 chars
        assert calculate_similarity("NodeJS", "Node.js") == pytest.approx(6 / 7)

    def test_empty_strings(self):
        assert calculate_similarity("", "") == 1.0
        assert calculate_similarity("", "abc") == 0.0

    def test_symmetric(self):
        assert calculate_similarity("Docker", "Dockr") == calculate_similarity("Dockr", "Docker")


class TestFindSkillMatches:
    def test_exact_first(self):
        matches = find_skill_matches("react", DEFAULT_SKILLS)
        assert matches[0].skill_id == "react"
        assert matches[0].match_type == "exact"
        assert matches[0].confidence == 1.0

    def test_partial_match(self):
        matches = find_skill_matches("Python3", DEFAULT_SKILLS)
        assert len(matches) == 1
        assert matches[0].skill_id == "python"
        assert matches[0].match_type == "partial"
        assert matches[0].confidence == pytest.approx(6 / 7, abs=1e-4)

    def test_fuzzy_match(self):
        match = find_best_skill_match("Type Script", DEFAULT_SKILLS)
        assert match is not None
        assert match.skill_id == "typescript"
        assert match.match_type == "fuzzy"

    def test_below_threshold(self):
        assert find_skill_matches("Vue", DEFAULT_SKILLS) == []
        assert find_best_skill_match("COBOL", DEFAULT_SKILLS) is None

    def test_lower_threshold_admits_more(self):
        assert find_skill_matches("Vue", DEFAULT_SKILLS, confidence_threshold=0.5)[0].skill_id == "vue"

    def test_blank_name(self):
        assert find_skill_matches("   ", DEFAULT_SKILLS) == []

    def test_equal_confidence_prefers_partial(self):
        matches = find_skill_matches("Golang", _GO_SKILLS)
        assert [m.skill_id for m in matches] == ["gos", "go"]
        assert [m.match_type for m in matches] == ["partial", "fuzzy"]


class TestReconcileSkillNames:
    def test_buckets(self):
        result = reconcile_skill_names(["react", "Dockr", "COBOL", "React"], DEFAULT_SKILLS)
        assert [m.skill_id for m in result.matched] == ["react", "docker"]
        assert result.unmatched == ["COBOL"]
        assert result.ambiguous == []

    def test_ambiguous(self):
        result = reconcile_skill_names(["Golang"], _GO_SKILLS)
        assert result.matched == []
        assert result.ambiguous[0].original_name == "Golang"
        assert len(result.ambiguous[0].candidates) == 2

    def test_auto_accept_level(self):
        result = reconcile_skill_names(["Golang"], _GO_SKILLS, auto_accept_confidence=0.8)
        assert [m.skill_id for m in result.matched] == ["gos"]
