"""
Question Pool Merger.

Combines the built-in bank, the practice bank and an external snapshot into
one deduplicated, provenance-tagged pool.

Deduplication uses the lowercased first 80 characters of the question text.
This is an approximation: two different questions that share a long common
prefix collide, and the later one is dropped.
"""
from __future__ import annotations

import random
from collections.abc import Iterable, Sequence
from typing import TypeVar

from loguru import logger

from config import get_settings

from .models import Domain, ExternalQuestion, PracticeQuestion, Provenance, Question
from .taxonomy import domain_for_topic

T = TypeVar("T")


def dedup_key(text: str, length: int | None = None) -> str:
    """Approximate identity of a question: its lowercased leading characters."""
    if length is None:
        length = get_settings().dedup_key_length
    return text.lower()[:length]


def shuffled(items: Iterable[T], rng: random.Random | None = None) -> list[T]:
    """Return a uniformly shuffled copy."""
    result = list(items)
    (rng or random).shuffle(result)
    return result


def external_to_question(record: ExternalQuestion) -> Question:
    """Convert an external record, keeping its multi-select and placement fields as given."""
    return Question(
        id=Provenance.EXTERNAL.tag(record.id),
        text=record.question,
        options=tuple(record.options),
        correct_index=record.correct_index,
        correct_indices=tuple(record.correct_indices) if record.correct_indices is not None else None,
        multi_select=record.multi_select,
        domain=Domain.parse(record.domain),
        lesson_id=record.lesson_id,
        section=record.section_id,
        source=Provenance.EXTERNAL,
    )


def merge_exam_pool(
    built_in: Sequence[Question],
    secondary: Sequence[PracticeQuestion] = (),
    external: Sequence[ExternalQuestion] = (),
) -> list[Question]:
    """
    Build the full exam pool.

    Order is built-in first, then practice, then external, each in source
    order. Practice questions whose topic has no domain are dropped.
    External records pass through even when their domain is missing or
    unknown; the selector simply never draws them.

    Args:
        built_in: Canonical exam bank (assumed valid and deduplicated)
        secondary: Practice bank, categorised by topic label
        external: Snapshot from the external store

    Returns:
        Merged pool, unshuffled
    """
    pool = list(built_in)
    seen = {dedup_key(q.text) for q in built_in}
    duplicates = 0
    unmapped = 0

    for q in secondary:
        key = dedup_key(q.text)
        if key in seen:
            duplicates += 1
            continue
        domain = domain_for_topic(q.topic)
        if domain is None:
            unmapped += 1
            continue
        seen.add(key)
        pool.append(
            Question(
                id=Provenance.PRACTICE.tag(q.id),
                text=q.text,
                options=q.options,
                correct_index=q.correct_index,
                domain=domain,
                source=Provenance.PRACTICE,
            )
        )

    for record in external:
        key = dedup_key(record.question)
        if key in seen:
            duplicates += 1
            continue
        seen.add(key)
        pool.append(external_to_question(record))

    logger.debug(
        f"Merged exam pool: {len(pool)} questions "
        f"({len(built_in)} built-in, {duplicates} duplicates skipped, {unmapped} unmapped topics dropped)"
    )
    return pool


def merge_lesson_pool(
    lesson_id: int,
    hardcoded: Sequence[Question],
    external: Sequence[ExternalQuestion] = (),
    rng: random.Random | None = None,
) -> list[Question]:
    """
    Build the full pool for one lesson, shuffled.

    External records are filtered to the lesson; their section id is
    trusted as-is since the catalog does not list dynamically added sections.
    """
    pool = list(hardcoded)
    seen = {dedup_key(q.text) for q in hardcoded}

    for record in external:
        if record.lesson_id != lesson_id:
            continue
        key = dedup_key(record.question)
        if key in seen:
            continue
        seen.add(key)
        pool.append(external_to_question(record))

    logger.debug(f"Merged lesson {lesson_id} pool: {len(hardcoded)} hardcoded, {len(pool)} total")
    return shuffled(pool, rng)
