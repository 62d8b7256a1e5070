"""
Built-in question banks and lesson catalog.

The JSON files under safeprep/data are loaded once per process and treated
as read-only configuration. Loaders return tuples of frozen dataclasses or
read-only mappings so callers can share them freely.
"""
from __future__ import annotations

import json
from collections.abc import Mapping
from functools import lru_cache
from importlib import resources
from types import MappingProxyType
from typing import Any

from loguru import logger

from .models import Lesson, LessonMapping, PracticeQuestion, Provenance, Question

DATA_PACKAGE = "safeprep.data"


def _read_json(name: str) -> Any:
    text = resources.files(DATA_PACKAGE).joinpath(name).read_text(encoding="utf-8")
    return json.loads(text)


@lru_cache(maxsize=1)
def load_exam_questions() -> tuple[Question, ...]:
    """The canonical built-in exam bank."""
    questions = tuple(
        Question.from_dict(row, source=Provenance.BUILT_IN)
        for row in _read_json("exam_questions.json")
    )
    logger.debug(f"Loaded {len(questions)} built-in exam questions")
    return questions


@lru_cache(maxsize=1)
def load_practice_questions() -> tuple[PracticeQuestion, ...]:
    """The secondary practice bank (topic-labelled)."""
    questions = tuple(PracticeQuestion.from_dict(row) for row in _read_json("practice_questions.json"))
    logger.debug(f"Loaded {len(questions)} practice questions")
    return questions


@lru_cache(maxsize=1)
def load_lessons() -> tuple[Lesson, ...]:
    return tuple(Lesson.from_dict(row) for row in _read_json("lessons.json"))


@lru_cache(maxsize=1)
def load_exam_lesson_map() -> Mapping[str, LessonMapping]:
    """Static id -> (lesson, section) table for built-in exam questions."""
    return MappingProxyType({
        question_id: LessonMapping(lesson=int(entry["lesson"]), section=entry["section"])
        for question_id, entry in _read_json("exam_lesson_map.json").items()
    })


def get_lesson(lesson_id: int) -> Lesson | None:
    for lesson in load_lessons():
        if lesson.id == lesson_id:
            return lesson
    return None
