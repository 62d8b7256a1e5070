"""
Exam Question Selector.

Draws a fixed-size, domain-weighted exam from a question pool.

The algorithm:
1. Split the target across domains by weight (largest-remainder rounding)
2. Cap each domain at what the pool holds for it
3. Hand any shortfall to the domains with the most unused questions
4. Sample each domain without replacement, then shuffle the whole draw

Option order is never changed; answer-position variety comes from which
questions get drawn.
"""
from __future__ import annotations

import hashlib
import random
from collections.abc import Iterable, Mapping, Sequence
from fractions import Fraction

from loguru import logger

from . import bank
from .models import Domain, Question
from .taxonomy import DOMAIN_WEIGHTS


def create_seed(seed: str | int) -> int:
    """Create a reproducible integer seed from string or int."""
    if isinstance(seed, int):
        return seed

    # Hash string to create seed
    hash_bytes = hashlib.sha256(str(seed).encode()).digest()
    return int.from_bytes(hash_bytes[:8], byteorder="big")


def allocate_domain_counts(
    target_count: int,
    weights: Mapping[Domain, float] = DOMAIN_WEIGHTS,
) -> dict[Domain, int]:
    """
    Split target_count across domains in proportion to their weights.

    Each domain gets the floor of its exact share; the remaining questions go
    to the largest fractional remainders, ties broken by declaration order.
    The counts always sum to target_count.
    """
    if target_count <= 0 or not weights:
        return {domain: 0 for domain in weights}

    total = sum(Fraction(w) for w in weights.values())
    exact = {domain: Fraction(target_count) * Fraction(w) / total for domain, w in weights.items()}
    counts = {domain: int(share) for domain, share in exact.items()}

    remainder = target_count - sum(counts.values())
    # sorted() is stable, so equal remainders keep declaration order
    by_fraction = sorted(weights, key=lambda d: exact[d] - counts[d], reverse=True)
    for domain in by_fraction[:remainder]:
        counts[domain] += 1

    return counts


def select_exam_questions(
    target_count: int,
    pool: Sequence[Question] | None = None,
    *,
    seed: str | int | None = None,
    rng: random.Random | None = None,
    weights: Mapping[Domain, float] = DOMAIN_WEIGHTS,
) -> list[Question]:
    """
    Select a shuffled, domain-weighted exam.

    Args:
        target_count: Number of questions wanted
        pool: Questions to draw from (built-in exam bank if None)
        seed: Reproducible seed, e.g. "user:attempt" (ignored when rng given)
        rng: Random source
        weights: Domain weights

    Returns:
        Exactly target_count questions when the pool holds enough categorised
        questions, otherwise every categorised question in the pool
    """
    if target_count <= 0:
        return []
    if pool is None:
        pool = bank.load_exam_questions()
    if rng is None:
        rng = random.Random(create_seed(seed)) if seed is not None else random.Random()

    by_domain: dict[Domain, list[Question]] = {domain: [] for domain in weights}
    uncategorised = 0
    for q in pool:
        if q.domain in by_domain:
            by_domain[q.domain].append(q)
        else:
            uncategorised += 1

    if uncategorised:
        logger.debug(f"Skipping {uncategorised} questions without a weighted domain")

    quotas = allocate_domain_counts(target_count, weights)
    take = {domain: min(quotas[domain], len(by_domain[domain])) for domain in weights}

    shortfall = target_count - sum(take.values())
    while shortfall > 0:
        spare = {domain: len(by_domain[domain]) - take[domain] for domain in weights}
        # max() keeps the first maximal domain, i.e. declaration order on ties
        donor = max(weights, key=lambda d: spare[d])
        if spare[donor] <= 0:
            break
        take[donor] += 1
        shortfall -= 1

    if shortfall:
        logger.warning(
            f"Question pool too small for a {target_count}-question exam; "
            f"returning {target_count - shortfall}"
        )
    elif take != quotas:
        logger.debug(f"Redistributed domain shortfall: quotas={_fmt(quotas)} drawn={_fmt(take)}")

    selected: list[Question] = []
    for domain in weights:
        selected.extend(rng.sample(by_domain[domain], take[domain]))
    rng.shuffle(selected)

    return selected


def domain_counts(questions: Iterable[Question]) -> dict[Domain, int]:
    """Per-domain tally of a drawn exam (every domain present, zero if absent)."""
    counts = {domain: 0 for domain in Domain}
    for q in questions:
        if q.domain is not None:
            counts[q.domain] += 1
    return counts


def _fmt(counts: Mapping[Domain, int]) -> str:
    return ", ".join(f"{domain.name}={n}" for domain, n in counts.items())
