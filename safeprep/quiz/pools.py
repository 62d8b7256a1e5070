"""Full pools: built-in banks merged with an external snapshot."""
from __future__ import annotations

import random

from . import bank
from .external import ExternalQuestionCache
from .lesson_pool import collect_lesson_questions
from .models import Question
from .pool_merger import merge_exam_pool, merge_lesson_pool


def build_exam_pool(cache: ExternalQuestionCache | None = None) -> list[Question]:
    """Built-in exam bank + practice bank + external snapshot, deduplicated."""
    external = cache.get() if cache is not None else []
    return merge_exam_pool(bank.load_exam_questions(), bank.load_practice_questions(), external)


def build_lesson_pool(
    lesson_id: int,
    cache: ExternalQuestionCache | None = None,
    rng: random.Random | None = None,
) -> list[Question]:
    """Built-in lesson questions + external questions for the lesson, shuffled."""
    external = cache.get() if cache is not None else []
    return merge_lesson_pool(lesson_id, collect_lesson_questions(lesson_id), external, rng)
