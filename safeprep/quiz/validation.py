"""
Question Bank Validator.

Checks the integrity rules every pooled question must satisfy. Returns a
list of human-readable problems instead of raising, so a whole bank can be
reported at once (see `safeprep check`).
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence

from .models import Lesson, Question


def question_problems(q: Question, lessons: dict[int, Lesson] | None = None) -> list[str]:
    """Integrity problems for a single question."""
    problems = []

    if not q.text or not q.text.strip():
        problems.append("empty question text")
    if len(q.options) < 2:
        problems.append(f"only {len(q.options)} option(s)")
    if not 0 <= q.correct_index < len(q.options):
        problems.append(f"correct_index {q.correct_index} out of range")

    if q.multi_select:
        if q.correct_indices is None:
            problems.append("multi_select without correct_indices")
        else:
            if len(set(q.correct_indices)) != q.multi_select:
                problems.append(
                    f"multi_select={q.multi_select} but {len(set(q.correct_indices))} unique correct_indices"
                )
            if any(not 0 <= i < len(q.options) for i in q.correct_indices):
                problems.append("correct_indices out of range")

    if lessons is not None and q.lesson_id is not None and q.section is not None:
        lesson = lessons.get(q.lesson_id)
        if lesson is None:
            problems.append(f"unknown lesson {q.lesson_id}")
        elif not lesson.has_section(q.section):
            problems.append(f"section {q.section!r} not declared by lesson {q.lesson_id}")

    return problems


def validate_questions(
    questions: Sequence[Question],
    lessons: Iterable[Lesson] | None = None,
    require_domain: bool = False,
) -> list[str]:
    """
    Validate a bank.

    Args:
        questions: Questions to check
        lessons: Lesson catalog for section checks (skipped if None)
        require_domain: Flag questions without a known exam domain

    Returns:
        One "id: problem" line per problem found
    """
    lesson_index = {lesson.id: lesson for lesson in lessons} if lessons is not None else None
    report = []
    seen_ids: set[str] = set()

    for q in questions:
        if q.id in seen_ids:
            report.append(f"{q.id}: duplicate id")
        seen_ids.add(q.id)

        if require_domain and q.domain is None:
            report.append(f"{q.id}: missing or unknown domain")

        report.extend(f"{q.id}: {problem}" for problem in question_problems(q, lesson_index))

    return report
