"""
Unit tests for exam scoring.
"""
from conftest import make_question
from safeprep.quiz.models import Domain
from safeprep.quiz.scoring import DomainScore, is_correct, overall_percentage, score_by_domain


class TestIsCorrect:
    def test_single_select(self):
        q = make_question("q1", correct_index=2)
        assert is_correct(q, 2)
        assert not is_correct(q, 1)
        assert not is_correct(q, None)

    def test_multi_select_needs_exact_set(self):
        q = make_question("q2", correct_indices=(0, 3), multi_select=2)
        assert is_correct(q, [3, 0])
        assert not is_correct(q, [0])
        assert not is_correct(q, [0, 1, 3])
        assert not is_correct(q, 0)


class TestScoreByDomain:
    def test_tallies_per_domain(self):
        questions = [
            make_question("a", Domain.INTRO_SCRUM, correct_index=0),
            make_question("b", Domain.INTRO_SCRUM, correct_index=1),
            make_question("c", Domain.ART_EVENTS, correct_index=2),
        ]
        scores = score_by_domain(questions, {"a": 0, "b": 3, "c": 2})

        assert scores[Domain.INTRO_SCRUM] == DomainScore(correct=1, total=2)
        assert scores[Domain.INTRO_SCRUM].percentage == 50
        assert scores[Domain.ART_EVENTS].percentage == 100
        assert Domain.SM_ROLE not in scores

    def test_unanswered_counts_as_wrong(self):
        scores = score_by_domain([make_question("a", Domain.SM_ROLE)], {})
        assert scores[Domain.SM_ROLE] == DomainScore(correct=0, total=1)

    def test_uncategorised_ignored(self):
        assert score_by_domain([make_question("a", domain=None)], {"a": 0}) == {}


def test_overall_percentage():
    questions = [make_question(f"q{i}") for i in range(4)]
    assert overall_percentage(questions, {"q0": 0, "q1": 0, "q2": 0, "q3": 1}) == 75
    assert overall_percentage([], {}) == 0


def test_empty_domain_score():
    assert DomainScore().percentage == 0
