"""
Lesson and Section Pool Builder.

Collects the built-in questions that belong to a lesson and narrows them to
a single section for section quizzes.

Sources:
- Practice bank: placement parsed from "Lesson N – Section Name" topics
- Exam bank: placement looked up in the static id -> lesson/section table

Built-in questions are only emitted with a section id the lesson declares.
"""
from __future__ import annotations

import random
from collections.abc import Mapping, Sequence
from dataclasses import replace

from loguru import logger

from config import get_settings

from . import bank
from .models import Lesson, LessonMapping, PracticeQuestion, Provenance, Question
from .pool_merger import dedup_key, shuffled
from .taxonomy import parse_topic_label


def collect_lesson_questions(
    lesson_id: int,
    practice: Sequence[PracticeQuestion] | None = None,
    exam: Sequence[Question] | None = None,
    exam_map: Mapping[str, LessonMapping] | None = None,
    lesson: Lesson | None = None,
) -> list[Question]:
    """
    Collect built-in questions tagged to a lesson, in source order.

    Practice questions come first, then exam questions; the first copy of a
    duplicated text wins. Any argument left as None is read from the
    built-in banks.
    """
    practice = bank.load_practice_questions() if practice is None else practice
    exam = bank.load_exam_questions() if exam is None else exam
    exam_map = bank.load_exam_lesson_map() if exam_map is None else exam_map
    lesson = bank.get_lesson(lesson_id) if lesson is None else lesson

    if lesson is None:
        logger.debug(f"Lesson {lesson_id} is not in the catalog")
        return []

    questions: list[Question] = []
    seen: set[str] = set()
    undeclared = 0

    for q in practice:
        parsed = parse_topic_label(q.topic)
        if parsed is None or parsed[0] != lesson_id:
            continue
        section_id = parsed[1]
        if not lesson.has_section(section_id):
            undeclared += 1
            continue
        key = dedup_key(q.text)
        if key in seen:
            continue
        seen.add(key)
        questions.append(
            Question(
                id=Provenance.PRACTICE.tag(q.id),
                text=q.text,
                options=q.options,
                correct_index=q.correct_index,
                lesson_id=lesson_id,
                section=section_id,
                source=Provenance.PRACTICE,
            )
        )

    for q in exam:
        mapping = exam_map.get(q.id)
        if mapping is None or mapping.lesson != lesson_id:
            continue
        if not lesson.has_section(mapping.section):
            undeclared += 1
            continue
        key = dedup_key(q.text)
        if key in seen:
            continue
        seen.add(key)
        questions.append(replace(q, lesson_id=lesson_id, section=mapping.section))

    if undeclared:
        logger.debug(f"Lesson {lesson_id}: dropped {undeclared} questions with undeclared sections")
    return questions


def get_lesson_questions(lesson_id: int, rng: random.Random | None = None) -> list[Question]:
    """All built-in questions for a lesson, shuffled."""
    return shuffled(collect_lesson_questions(lesson_id), rng)


def _section_matches(
    lesson_id: int,
    section_id: str,
    pool: Sequence[Question] | None,
) -> list[Question]:
    source = collect_lesson_questions(lesson_id) if pool is None else pool
    return [q for q in source if q.section == section_id]


def get_section_questions(
    lesson_id: int,
    section_id: str,
    pool: Sequence[Question] | None = None,
    *,
    limit: int | None = None,
    rng: random.Random | None = None,
) -> list[Question]:
    """
    Draw a section quiz.

    Args:
        lesson_id: Lesson the section belongs to
        section_id: Section to filter on
        pool: Lesson pool already scoped to lesson_id (built-in bank if None)
        limit: Maximum questions (settings.section_quiz_max_questions if None)
        rng: Random source

    Returns:
        Up to `limit` matching questions, sampled uniformly when there are more
    """
    if limit is None:
        limit = get_settings().section_quiz_max_questions
    matches = _section_matches(lesson_id, section_id, pool)
    if len(matches) > limit:
        return (rng or random).sample(matches, max(limit, 0))
    return shuffled(matches, rng)


def get_section_question_count(
    lesson_id: int,
    section_id: str,
    pool: Sequence[Question] | None = None,
) -> int:
    """Number of questions available for a section, before the quiz cap."""
    return len(_section_matches(lesson_id, section_id, pool))


def get_lesson_question_count(lesson_id: int, pool: Sequence[Question] | None = None) -> int:
    if pool is not None:
        return len(pool)
    return len(collect_lesson_questions(lesson_id))
