"""
Quiz module for question pool assembly and selection.

This module provides:
- merge_exam_pool / merge_lesson_pool: Deduplicated multi-source pools
- select_exam_questions: Domain-weighted exam draw
- get_lesson_questions / get_section_questions: Lesson and section quizzes
- ExternalQuestionCache: Snapshot cache over the external question store

Exam Domains:
- Introducing Scrum in SAFe (25%)
- Defining the SM/TC Role (28%)
- Supporting Team Events (20%)
- Supporting ART Events (27%)
"""

from .exam_selector import allocate_domain_counts, domain_counts, select_exam_questions
from .external import ExternalQuestionCache, HttpQuestionFetcher, QuestionSourceError, load_external_questions
from .lesson_pool import (
    collect_lesson_questions,
    get_lesson_question_count,
    get_lesson_questions,
    get_section_question_count,
    get_section_questions,
)
from .models import Domain, ExternalQuestion, Lesson, PracticeQuestion, Provenance, Question, Section
from .pool_merger import dedup_key, merge_exam_pool, merge_lesson_pool
from .pools import build_exam_pool, build_lesson_pool
from .scoring import DomainScore, overall_percentage, score_by_domain
from .validation import validate_questions

__all__ = [
    "Domain",
    "DomainScore",
    "ExternalQuestion",
    "ExternalQuestionCache",
    "HttpQuestionFetcher",
    "Lesson",
    "PracticeQuestion",
    "Provenance",
    "Question",
    "QuestionSourceError",
    "Section",
    "allocate_domain_counts",
    "build_exam_pool",
    "build_lesson_pool",
    "collect_lesson_questions",
    "dedup_key",
    "domain_counts",
    "get_lesson_question_count",
    "get_lesson_questions",
    "get_section_question_count",
    "get_section_questions",
    "load_external_questions",
    "merge_exam_pool",
    "merge_lesson_pool",
    "overall_percentage",
    "score_by_domain",
    "select_exam_questions",
    "validate_questions",
]
