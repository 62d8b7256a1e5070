"""
Typer CLI for the safeprep question engine.

Commands:
    safeprep exam            - Draw a domain-weighted exam
    safeprep lessons         - List lessons, sections and question counts
    safeprep lesson 3        - Show the full question pool for a lesson
    safeprep section 3 pi-planning - Draw a section quiz
    safeprep score answers.json --seed "alice:1" - Score a seeded exam
    safeprep check           - Validate the built-in question banks

Usage:
    safeprep exam --count 45 --seed "alice:1"
    safeprep exam --external extra_questions.json --show-answers
    safeprep section 4 team-sync
"""

from __future__ import annotations

import json
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from config import get_settings
from safeprep.quiz import bank
from safeprep.quiz.exam_selector import domain_counts, select_exam_questions
from safeprep.quiz.external import ExternalQuestionCache, cache_from_settings, load_external_questions
from safeprep.quiz.lesson_pool import (
    collect_lesson_questions,
    get_section_question_count,
    get_section_questions,
)
from safeprep.quiz.models import Lesson, Question
from safeprep.quiz.pools import build_exam_pool, build_lesson_pool
from safeprep.quiz.scoring import overall_percentage, score_by_domain
from safeprep.quiz.taxonomy import DOMAIN_WEIGHTS
from safeprep.quiz.validation import validate_questions

app = typer.Typer(
    help="safeprep: exam and lesson quiz builder for SAFe Scrum Master prep",
    no_args_is_help=True,
)

console = Console()

EXTERNAL_OPTION_HELP = "JSON file of extra question records (overrides the configured source)"


@app.callback()
def configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Configure logging for every command."""
    settings = get_settings()
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else settings.log_level,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )


# =============================================================================
# Helpers
# =============================================================================


def _external_cache(path: Path | None) -> ExternalQuestionCache | None:
    if path is None:
        return cache_from_settings()
    if not path.exists():
        console.print(f"[red]Error: External question file not found: {path}[/red]")
        raise typer.Exit(1)
    try:
        records = load_external_questions(path)
    except (json.JSONDecodeError, ValueError) as e:
        console.print(f"[red]Error: Could not read {path}: {e}[/red]")
        raise typer.Exit(1)
    return ExternalQuestionCache(lambda: records)


@contextmanager
def _external_source(path: Path | None) -> Iterator[ExternalQuestionCache | None]:
    cache = _external_cache(path)
    try:
        yield cache
    finally:
        if cache is not None:
            cache.close()


def _load_answers(path: Path) -> dict:
    if not path.exists():
        console.print(f"[red]Error: Answers file not found: {path}[/red]")
        raise typer.Exit(1)
    try:
        answers = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        console.print(f"[red]Error: Could not read {path}: {e}[/red]")
        raise typer.Exit(1)
    if not isinstance(answers, dict):
        console.print(f"[red]Error: {path} must map question ids to option indices[/red]")
        raise typer.Exit(1)
    return answers


def _require_lesson(lesson_id: int) -> Lesson:
    lesson = bank.get_lesson(lesson_id)
    if lesson is None:
        known = ", ".join(str(item.id) for item in bank.load_lessons())
        console.print(f"[red]Error: Unknown lesson {lesson_id} (known: {known})[/red]")
        raise typer.Exit(1)
    return lesson


def _question_table(title: str, questions: list[Question], show_answers: bool, label: str) -> Table:
    table = Table(title=title, show_header=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("ID", style="cyan")
    table.add_column(label, style="magenta")
    table.add_column("Question")
    if show_answers:
        table.add_column("Answer", style="green")

    for i, q in enumerate(questions, 1):
        tag = q.domain.value if label == "Domain" and q.domain else (q.section or "-")
        text = q.text + (f" [dim](choose {q.multi_select})[/dim]" if q.is_multi_select else "")
        row = [str(i), q.id, tag, text]
        if show_answers:
            row.append(", ".join(q.options[idx] for idx in sorted(q.correct_answers) if 0 <= idx < len(q.options)))
        table.add_row(*row)
    return table


# =============================================================================
# Commands
# =============================================================================


@app.command("exam")
def exam(
    count: int = typer.Option(None, "--count", "-n", help="Number of questions (default from config)"),
    seed: str = typer.Option(None, "--seed", "-s", help="Reproducible seed, e.g. user:attempt"),
    external: Path = typer.Option(None, "--external", "-e", help=EXTERNAL_OPTION_HELP),
    show_answers: bool = typer.Option(False, "--show-answers", help="Show correct answers"),
):
    """Draw a domain-weighted exam from the merged question pool."""
    settings = get_settings()
    target = count if count is not None else settings.exam_question_count

    with _external_source(external) as cache:
        pool = build_exam_pool(cache)
    questions = select_exam_questions(target, pool, seed=seed)

    if not questions:
        console.print("[yellow]No questions available.[/yellow]")
        raise typer.Exit(1)

    console.print(_question_table(f"Exam ({len(questions)} questions)", questions, show_answers, "Domain"))

    breakdown = Table(title="Domain Breakdown", show_header=True)
    breakdown.add_column("Domain", style="cyan")
    breakdown.add_column("Weight", justify="right", style="dim")
    breakdown.add_column("Drawn", justify="right", style="green")
    for domain, n in domain_counts(questions).items():
        breakdown.add_row(domain.value, f"{DOMAIN_WEIGHTS.get(domain, 0):.0f}%", str(n))
    console.print(breakdown)

    if len(questions) < target:
        console.print(f"[yellow]Only {len(questions)} of {target} questions available.[/yellow]")
    console.print(
        f"Time limit: {settings.exam_time_limit_minutes} min | "
        f"Passing score: {settings.exam_passing_percentage}%"
    )


@app.command("lessons")
def lessons():
    """List lessons and sections with available question counts."""
    table = Table(title="Lessons", show_header=True)
    table.add_column("Lesson", justify="right", style="cyan")
    table.add_column("Section", style="magenta")
    table.add_column("Name")
    table.add_column("Questions", justify="right", style="green")

    for lesson in bank.load_lessons():
        pool = collect_lesson_questions(lesson.id)
        table.add_row(str(lesson.id), "", f"[bold]{lesson.title}[/bold]", str(len(pool)))
        for section in lesson.sections:
            count = get_section_question_count(lesson.id, section.id, pool)
            table.add_row("", section.id, section.name, str(count))

    console.print(table)


@app.command("lesson")
def lesson(
    lesson_id: int = typer.Argument(..., help="Lesson number"),
    external: Path = typer.Option(None, "--external", "-e", help=EXTERNAL_OPTION_HELP),
    show_answers: bool = typer.Option(False, "--show-answers", help="Show correct answers"),
):
    """Show the full (shuffled) question pool for a lesson."""
    info = _require_lesson(lesson_id)
    with _external_source(external) as cache:
        pool = build_lesson_pool(lesson_id, cache)
    console.print(_question_table(f"Lesson {info.id}: {info.title}", pool, show_answers, "Section"))


@app.command("section")
def section(
    lesson_id: int = typer.Argument(..., help="Lesson number"),
    section_id: str = typer.Argument(..., help="Section id, e.g. pi-planning"),
    external: Path = typer.Option(None, "--external", "-e", help=EXTERNAL_OPTION_HELP),
    show_answers: bool = typer.Option(False, "--show-answers", help="Show correct answers"),
):
    """Draw a capped section quiz."""
    info = _require_lesson(lesson_id)
    with _external_source(external) as cache:
        pool = build_lesson_pool(lesson_id, cache)
    available = get_section_question_count(lesson_id, section_id, pool)

    if available == 0 and not info.has_section(section_id):
        known = ", ".join(info.section_ids)
        console.print(f"[red]Error: Lesson {lesson_id} has no section {section_id!r} (known: {known})[/red]")
        raise typer.Exit(1)

    questions = get_section_questions(lesson_id, section_id, pool)
    name = info.get_section(section_id).name if info.has_section(section_id) else section_id
    console.print(_question_table(f"{name}", questions, show_answers, "Section"))
    console.print(f"{len(questions)} questions (from {available} available)")


@app.command("score")
def score(
    answers_file: Path = typer.Argument(..., help="JSON object mapping question id to chosen option index(es)"),
    seed: str = typer.Option(..., "--seed", "-s", help="Seed the exam was drawn with"),
    count: int = typer.Option(None, "--count", "-n", help="Number of questions (default from config)"),
    external: Path = typer.Option(None, "--external", "-e", help=EXTERNAL_OPTION_HELP),
):
    """Score answers to a seeded exam, per domain and overall."""
    settings = get_settings()
    target = count if count is not None else settings.exam_question_count
    answers = _load_answers(answers_file)

    with _external_source(external) as cache:
        pool = build_exam_pool(cache)
    questions = select_exam_questions(target, pool, seed=seed)

    if not questions:
        console.print("[yellow]No questions available.[/yellow]")
        raise typer.Exit(1)

    table = Table(title="Results by Domain", show_header=True)
    table.add_column("Domain", style="cyan")
    table.add_column("Correct", justify="right", style="green")
    table.add_column("Total", justify="right")
    table.add_column("Score", justify="right", style="magenta")
    for domain, result in score_by_domain(questions, answers).items():
        table.add_row(domain.value, str(result.correct), str(result.total), f"{result.percentage}%")
    console.print(table)

    overall = overall_percentage(questions, answers)
    passed = overall >= settings.exam_passing_percentage
    verdict = "[green]PASS[/green]" if passed else "[red]FAIL[/red]"
    console.print(
        f"Overall: {overall}% ({len([q for q in questions if q.id in answers])} of {len(questions)} answered) | "
        f"Passing score: {settings.exam_passing_percentage}% | {verdict}"
    )


@app.command("check")
def check():
    """Validate the built-in question banks."""
    lessons_catalog = bank.load_lessons()
    problems = validate_questions(bank.load_exam_questions(), require_domain=True)

    for lesson_info in lessons_catalog:
        problems.extend(validate_questions(collect_lesson_questions(lesson_info.id), lessons_catalog))

    mapped = bank.load_exam_lesson_map()
    exam_ids = {q.id for q in bank.load_exam_questions()}
    problems.extend(f"{qid}: mapped to a lesson but not in the exam bank" for qid in mapped if qid not in exam_ids)

    if problems:
        for problem in problems:
            console.print(f"  [red]-[/red] {problem}")
        console.print(f"\n[red]{len(problems)} problem(s) found[/red]")
        raise typer.Exit(1)

    console.print(
        f"[green]OK[/green] {len(exam_ids)} exam questions, "
        f"{len(bank.load_practice_questions())} practice questions, {len(lessons_catalog)} lessons"
    )


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
