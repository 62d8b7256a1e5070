"""
Unit tests for domain and topic taxonomy tables.
"""
import pytest

from safeprep.quiz.models import Domain, Provenance
from safeprep.quiz.taxonomy import (
    DOMAIN_WEIGHTS,
    TOPIC_TO_DOMAIN,
    domain_for_topic,
    parse_topic_label,
    slugify,
)


class TestDomain:
    def test_declaration_order(self):
        assert list(Domain) == [
            Domain.INTRO_SCRUM,
            Domain.SM_ROLE,
            Domain.TEAM_EVENTS,
            Domain.ART_EVENTS,
        ]

    def test_parse_known_value(self):
        assert Domain.parse("Supporting ART Events") == Domain.ART_EVENTS
        assert Domain.parse(Domain.SM_ROLE) == Domain.SM_ROLE

    @pytest.mark.parametrize("value", [None, "", "supporting art events", "Unknown", 3])
    def test_parse_unknown_value(self, value):
        assert Domain.parse(value) is None


class TestProvenance:
    def test_built_in_ids_unchanged(self):
        assert Provenance.BUILT_IN.tag("d1-1") == "d1-1"

    def test_prefixed_ids(self):
        assert Provenance.PRACTICE.tag("12") == "pq-12"
        assert Provenance.EXTERNAL.tag("abc") == "ext-abc"


class TestWeights:
    def test_weights_sum_to_100(self):
        assert sum(DOMAIN_WEIGHTS.values()) == 100

    def test_every_domain_weighted(self):
        assert set(DOMAIN_WEIGHTS) == set(Domain)


class TestTopicToDomain:
    def test_plain_topics(self):
        assert domain_for_topic("Roles") == Domain.SM_ROLE
        assert domain_for_topic("Prioritization") == Domain.INTRO_SCRUM

    def test_lesson_topics(self):
        assert domain_for_topic("Lesson 3 – PI Planning") == Domain.ART_EVENTS
        assert domain_for_topic("Lesson 4 – DevOps") == Domain.INTRO_SCRUM

    def test_unmapped_topic(self):
        assert domain_for_topic("Unmapped Topic XYZ") is None

    def test_every_mapped_value_is_domain(self):
        assert all(isinstance(domain, Domain) for domain in TOPIC_TO_DOMAIN.values())


class TestParseTopicLabel:
    @pytest.mark.parametrize(
        "topic, expected",
        [
            ("Lesson 1 – Scrum Basics", (1, "scrum-basics")),
            ("Lesson 3 – Features", (3, "backlog")),
            ("Lesson 4 – Retrospective", (4, "review-retro")),
            ("Lesson 5 – Inspect & Adapt", (5, "inspect-adapt")),
            ("Lesson 2 - SM Role", (2, "sm-role")),
        ],
    )
    def test_listed_section_names(self, topic, expected):
        assert parse_topic_label(topic) == expected

    def test_unlisted_name_slugified(self):
        assert parse_topic_label("Lesson 2 – Servant Leadership") == (2, "servant-leadership")

    @pytest.mark.parametrize("topic", ["Roles", "Prioritization", "Lesson X – Foo", "lesson 1 – Agile Basics", ""])
    def test_non_matching_labels(self, topic):
        assert parse_topic_label(topic) is None

    def test_slugify(self):
        assert slugify("  High Performing   Teams ") == "high-performing-teams"
