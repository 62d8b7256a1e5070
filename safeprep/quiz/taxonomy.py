"""
Taxonomy tables for categorising questions.

These mappings are configuration data: a practice topic that is missing
from TOPIC_TO_DOMAIN has no domain, and a lesson section name missing from
LESSON_SECTION_NAMES falls back to its slug.
"""
from __future__ import annotations

import re

from .models import Domain

# Percent of the exam drawn from each domain (sums to 100).
# 45 questions -> 11 / 13 / 9 / 12.
DOMAIN_WEIGHTS: dict[Domain, float] = {
    Domain.INTRO_SCRUM: 25.0,
    Domain.SM_ROLE: 28.0,
    Domain.TEAM_EVENTS: 20.0,
    Domain.ART_EVENTS: 27.0,
}

TOPIC_TO_DOMAIN: dict[str, Domain] = {
    "Lesson 1 – Agile Basics": Domain.INTRO_SCRUM,
    "Lesson 1 – Scrum Basics": Domain.INTRO_SCRUM,
    "Lesson 1 – Agile Team": Domain.INTRO_SCRUM,
    "Lesson 2 – SM Role": Domain.SM_ROLE,
    "Lesson 2 – Events": Domain.SM_ROLE,
    "Lesson 2 – High-Performing Teams": Domain.SM_ROLE,
    "Lesson 3 – PI Planning": Domain.ART_EVENTS,
    "Lesson 3 – Features": Domain.ART_EVENTS,
    "Lesson 4 – Iteration Planning": Domain.TEAM_EVENTS,
    "Lesson 4 – Team Sync": Domain.TEAM_EVENTS,
    "Lesson 4 – Backlog Refinement": Domain.TEAM_EVENTS,
    "Lesson 4 – Iteration Review": Domain.TEAM_EVENTS,
    "Lesson 4 – Retrospective": Domain.TEAM_EVENTS,
    "Lesson 4 – DevOps": Domain.INTRO_SCRUM,
    "Lesson 4 – Flow": Domain.TEAM_EVENTS,
    "Lesson 4 – Commitment": Domain.TEAM_EVENTS,
    "Lesson 5 – IP Iteration": Domain.ART_EVENTS,
    "Lesson 5 – Inspect & Adapt": Domain.ART_EVENTS,
    "Lesson 6 – AI for SMs": Domain.INTRO_SCRUM,
    "Roles": Domain.SM_ROLE,
    "Prioritization": Domain.INTRO_SCRUM,
}

# Section display names used in practice topics -> catalog section ids
LESSON_SECTION_NAMES: dict[int, dict[str, str]] = {
    1: {"Agile Basics": "agile-basics", "Scrum Basics": "scrum-basics", "Agile Team": "agile-team"},
    2: {"SM Role": "sm-role", "Events": "events", "High-Performing Teams": "high-performing-teams"},
    3: {"PI Planning": "pi-planning", "Features": "backlog"},
    4: {
        "Iteration Planning": "iteration-planning",
        "Team Sync": "team-sync",
        "Backlog Refinement": "backlog-refinement",
        "Iteration Review": "review-retro",
        "Retrospective": "review-retro",
        "DevOps": "flow-devops",
        "Flow": "flow-devops",
        "Commitment": "iteration-planning",
    },
    5: {"IP Iteration": "ip-iteration", "Inspect & Adapt": "inspect-adapt"},
    6: {"AI for SMs": "ai-basics"},
}

TOPIC_PATTERN = re.compile(r"^Lesson (\d+)\s*[–-]\s*(.+)$")


def domain_for_topic(topic: str) -> Domain | None:
    """Map a practice topic label to its exam domain."""
    return TOPIC_TO_DOMAIN.get(topic)


def slugify(name: str) -> str:
    return re.sub(r"\s+", "-", name.strip().lower())


def parse_topic_label(topic: str) -> tuple[int, str] | None:
    """
    Parse a "Lesson N – Section Name" label into (lesson, section_id).

    Returns None when the label does not follow the pattern. The section id
    comes from LESSON_SECTION_NAMES when listed there, otherwise from the
    slugified section name.
    """
    match = TOPIC_PATTERN.match(topic)
    if not match:
        return None

    lesson = int(match.group(1))
    section_name = match.group(2).strip()
    section_id = LESSON_SECTION_NAMES.get(lesson, {}).get(section_name) or slugify(section_name)
    return lesson, section_id
