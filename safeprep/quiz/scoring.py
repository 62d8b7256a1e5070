"""Per-domain scoring of a completed exam."""
from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from .models import Domain, Question


@dataclass
class DomainScore:
    correct: int = 0
    total: int = 0

    @property
    def percentage(self) -> int:
        return round(self.correct / self.total * 100) if self.total else 0


def is_correct(question: Question, selected: int | Iterable[int] | None) -> bool:
    """
    Check a response.

    Single-select questions need exactly the correct index; multi-select
    questions need exactly the set of correct indices.
    """
    if selected is None:
        return False
    chosen = frozenset({selected}) if isinstance(selected, int) else frozenset(selected)
    return chosen == question.correct_answers


def score_by_domain(
    questions: Sequence[Question],
    answers: Mapping[str, int | Iterable[int] | None],
) -> dict[Domain, DomainScore]:
    """Tally correct/total per domain; unanswered questions count as wrong."""
    results: dict[Domain, DomainScore] = {}
    for q in questions:
        if q.domain is None:
            continue
        score = results.setdefault(q.domain, DomainScore())
        score.total += 1
        if is_correct(q, answers.get(q.id)):
            score.correct += 1
    return results


def overall_percentage(questions: Sequence[Question], answers: Mapping[str, int | Iterable[int] | None]) -> int:
    if not questions:
        return 0
    correct = sum(1 for q in questions if is_correct(q, answers.get(q.id)))
    return round(correct / len(questions) * 100)
