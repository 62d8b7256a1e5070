"""
External question source.

The external store holds questions added at runtime (by admins or by AI
generation). The pool builders never fetch on their own: callers take a
snapshot from an ExternalQuestionCache and pass it in as a plain list.

Hardening:
- Transport and HTTP errors raise QuestionSourceError; the cache keeps its
  last good snapshot and retries on the next get()
- Records failing validation are skipped individually
- Disabled records never leave the cache
"""

from __future__ import annotations

import json
import time
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

import httpx
from loguru import logger
from pydantic import ValidationError

from config import get_settings

from .models import ExternalQuestion

Fetcher = Callable[[], list[ExternalQuestion]]


class QuestionSourceError(Exception):
    """The external question source could not be read."""


def parse_records(rows: Iterable[Any]) -> list[ExternalQuestion]:
    """Validate raw records, skipping the ones that do not fit."""
    records = []
    for row in rows:
        try:
            records.append(ExternalQuestion.model_validate(row))
        except ValidationError as e:
            row_id = row.get("id") if isinstance(row, dict) else None
            logger.warning(f"Skipping invalid external question {row_id!r}: {e.error_count()} error(s)")
    return records


class HttpQuestionFetcher:
    """Fetch question records from an HTTP endpoint returning a JSON array."""

    def __init__(
        self,
        url: str,
        client: httpx.Client | None = None,
        timeout: float | None = None,
    ):
        """
        Initialize fetcher.

        Args:
            url: Endpoint URL
            client: Preconfigured client (one is created if None)
            timeout: Request timeout in seconds (default from config)
        """
        settings = get_settings()
        self.url = url
        self.timeout = timeout if timeout is not None else settings.question_source_timeout_seconds
        self.client = client or httpx.Client(timeout=httpx.Timeout(self.timeout), follow_redirects=True)

    def __call__(self) -> list[ExternalQuestion]:
        try:
            response = self.client.get(self.url)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise QuestionSourceError(f"Question source returned {e.response.status_code} for {self.url}") from e
        except httpx.RequestError as e:
            raise QuestionSourceError(f"Failed to fetch external questions from {self.url}: {e}") from e
        except ValueError as e:
            raise QuestionSourceError(f"Question source returned invalid JSON: {e}") from e

        if not isinstance(data, list):
            raise QuestionSourceError(f"Question source returned {type(data).__name__}, expected a list")
        return parse_records(data)

    def close(self) -> None:
        self.client.close()


def load_external_questions(path: Path) -> list[ExternalQuestion]:
    """Read external question records from a JSON file."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array of question records")
    return parse_records(data)


class ExternalQuestionCache:
    """
    Time-bounded cache around an external fetcher.

    get() returns a copy of the cached snapshot while it is fresh and calls
    the fetcher otherwise. A failed fetch leaves the last good snapshot (and
    its timestamp) in place, so the next get() tries again. invalidate()
    forces the next get() to fetch, e.g. after an admin adds or edits a
    question.
    """

    def __init__(
        self,
        fetch: Fetcher,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.fetch = fetch
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else get_settings().external_cache_ttl_seconds
        self.clock = clock
        self._snapshot: list[ExternalQuestion] | None = None
        self._fetched_at = 0.0

    @property
    def is_fresh(self) -> bool:
        return self._snapshot is not None and self.clock() - self._fetched_at < self.ttl_seconds

    def get(self) -> list[ExternalQuestion]:
        if not self.is_fresh:
            try:
                records = self.fetch()
            except QuestionSourceError as e:
                logger.error(str(e))
                return list(self._snapshot or [])
            self._snapshot = [r for r in records if r.enabled]
            self._fetched_at = self.clock()
            logger.debug(f"Fetched {len(self._snapshot)} enabled external questions")
        return list(self._snapshot)

    def invalidate(self) -> None:
        self._snapshot = None
        self._fetched_at = 0.0

    def close(self) -> None:
        """Release the fetcher's connection, if it holds one."""
        close = getattr(self.fetch, "close", None)
        if close is not None:
            close()


def cache_from_settings() -> ExternalQuestionCache | None:
    """Cache over the configured HTTP source, or None when none is configured."""
    settings = get_settings()
    if not settings.has_external_source():
        return None
    return ExternalQuestionCache(HttpQuestionFetcher(settings.question_source_url))
