"""
Question Pool Data Models.

Questions are immutable value objects. Built-in banks are loaded once from
static data; external records arrive as point-in-time snapshots and are
converted into the same Question shape when merged into a pool.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Enums
# =============================================================================


class Domain(str, Enum):
    """The four exam content domains, in declaration order."""

    INTRO_SCRUM = "Introducing Scrum in SAFe"
    SM_ROLE = "Defining the SM/TC Role"
    TEAM_EVENTS = "Supporting Team Events"
    ART_EVENTS = "Supporting ART Events"

    @classmethod
    def parse(cls, value: Any) -> Domain | None:
        """Return the matching domain, or None for anything unrecognised."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class Provenance(str, Enum):
    """Which source a pooled question came from."""

    BUILT_IN = "built_in"    # Canonical exam bank
    PRACTICE = "practice"    # Secondary practice-quiz bank
    EXTERNAL = "external"    # Dynamically fetched store

    @property
    def id_prefix(self) -> str:
        """Namespace prefix that keeps merged ids unique across sources."""
        return _ID_PREFIXES[self]

    def tag(self, raw_id: str) -> str:
        prefix = self.id_prefix
        return f"{prefix}-{raw_id}" if prefix else raw_id


_ID_PREFIXES = {
    Provenance.BUILT_IN: "",
    Provenance.PRACTICE: "pq",
    Provenance.EXTERNAL: "ext",
}


# =============================================================================
# Questions
# =============================================================================


@dataclass(frozen=True)
class Question:
    """
    A pooled multiple-choice question.

    Exam-flavoured questions carry a domain; lesson-flavoured questions carry
    a lesson id and section id. Multi-select questions set both
    correct_indices and multi_select.
    """

    id: str
    text: str
    options: tuple[str, ...]
    correct_index: int
    correct_indices: tuple[int, ...] | None = None
    multi_select: int | None = None
    domain: Domain | None = None
    lesson_id: int | None = None
    section: str | None = None
    source: Provenance = Provenance.BUILT_IN

    @property
    def is_multi_select(self) -> bool:
        return bool(self.multi_select)

    @property
    def correct_answers(self) -> frozenset[int]:
        """Indices that make up a correct response."""
        if self.is_multi_select and self.correct_indices is not None:
            return frozenset(self.correct_indices)
        return frozenset({self.correct_index})

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: Provenance = Provenance.BUILT_IN) -> Question:
        """Build from the camelCase record shape used by the data files."""
        correct_indices = data.get("correctIndices")
        return cls(
            id=str(data["id"]),
            text=data["question"],
            options=tuple(data["options"]),
            correct_index=data["correctIndex"],
            correct_indices=tuple(correct_indices) if correct_indices is not None else None,
            multi_select=data.get("multiSelect"),
            domain=Domain.parse(data.get("domain")),
            lesson_id=data.get("lessonId"),
            section=data.get("sectionId"),
            source=source,
        )


@dataclass(frozen=True)
class PracticeQuestion:
    """A practice-bank question labelled with a free-text topic."""

    id: str
    text: str
    options: tuple[str, ...]
    correct_index: int
    topic: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PracticeQuestion:
        return cls(
            id=str(data["id"]),
            text=data["question"],
            options=tuple(data["options"]),
            correct_index=data["correctIndex"],
            topic=data.get("topic", ""),
        )


class ExternalQuestion(BaseModel):
    """
    A record from the external question store.

    Only the fields needed to render a question are required. Everything
    else is optional so that an incomplete record still merges as a plain
    single-select question instead of breaking the pool.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    id: str
    question: str
    options: list[str]
    correct_index: int = Field(default=0, alias="correctIndex")
    correct_indices: list[int] | None = Field(default=None, alias="correctIndices")
    multi_select: int | None = Field(default=None, alias="multiSelect")
    domain: str | None = None
    lesson_id: int | None = Field(default=None, alias="lessonId")
    section_id: str | None = Field(default=None, alias="sectionId")
    enabled: bool = True
    created_by: str | None = Field(default=None, alias="createdBy")


# =============================================================================
# Lesson Catalog
# =============================================================================


@dataclass(frozen=True)
class Section:
    """A sub-topic within a lesson."""

    id: str
    name: str
    study_tips: tuple[str, ...] = ()


@dataclass(frozen=True)
class Lesson:
    """A lesson and its ordered sections."""

    id: int
    title: str
    short_title: str = ""
    description: str = ""
    sections: tuple[Section, ...] = field(default_factory=tuple)

    @property
    def section_ids(self) -> tuple[str, ...]:
        return tuple(s.id for s in self.sections)

    def has_section(self, section_id: str) -> bool:
        return section_id in self.section_ids

    def get_section(self, section_id: str) -> Section | None:
        for section in self.sections:
            if section.id == section_id:
                return section
        return None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Lesson:
        return cls(
            id=int(data["id"]),
            title=data["title"],
            short_title=data.get("shortTitle", ""),
            description=data.get("description", ""),
            sections=tuple(
                Section(
                    id=s["id"],
                    name=s["name"],
                    study_tips=tuple(s.get("studyTips", [])),
                )
                for s in data.get("sections", [])
            ),
        )


@dataclass(frozen=True)
class LessonMapping:
    """Where a built-in exam question sits in the lesson catalog."""

    lesson: int
    section: str
