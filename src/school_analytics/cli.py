"""Command-line interface for school analytics."""

import logging
from pathlib import Path
from typing import List, Optional

import typer
import yaml
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from aggregation import (
    build_student_report,
    build_teacher_progress,
    current_state_summary,
    latest_per_teacher,
    rollup_by_grade,
    teacher_performance,
    trend_summary,
)
from directory import YamlTeacherDirectory
from models import TierThresholds, UploadRecord, UserScope, format_growth
from models.utils import tier_color
from school_analytics.config import Settings
from uploads import load_uploads

app = typer.Typer(
    name="school-analytics",
    help="School Analytics - Assessment score aggregation and tier reporting",
    add_completion=False,
)

console = Console()

logger = logging.getLogger(__name__)


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.app.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def _load(
    path: Optional[Path],
    settings: Settings,
    role: Optional[str],
    user: Optional[str],
    teacher: Optional[str]
) -> List[UploadRecord]:
    """Load uploads and apply the requested user scope."""
    source = path or (Path(settings.app.uploads_path) if settings.app.uploads_path else None)
    if source is None:
        raise ValueError("No uploads file given (pass PATH or set SCHOOL_ANALYTICS_UPLOADS_PATH)")

    uploads = list(load_uploads(source))
    if role is not None:
        uploads = UserScope.from_request(role, user, teacher).filter_uploads(uploads)
    elif teacher is not None:
        uploads = [u for u in uploads if u.teacher_name == teacher]
    return uploads


def _for_assessment(uploads: List[UploadRecord], assessment: Optional[str]) -> List[UploadRecord]:
    """Keep uploads for one assessment; None or "all" keeps everything."""
    if assessment is None or assessment.lower() == "all":
        return uploads
    return [u for u in uploads if u.assessment == assessment]


def _setup() -> Settings:
    try:
        settings = Settings.load()
    except ValueError as e:
        console.print(f"[red]❌ Invalid configuration: {e}[/red]")
        raise typer.Exit(code=1)
    _configure_logging(settings)
    return settings


def _fmt(value: float, settings: Settings) -> str:
    return f"{value:.{settings.app.decimal_places}f}"


def _colored(value: float, settings: Settings, thresholds: TierThresholds) -> str:
    color = tier_color(value, thresholds)
    style = "grey50" if color == "gray" else color
    if color == "orange":
        style = "dark_orange"
    return f"[{style}]{_fmt(value, settings)}[/{style}]"


PathArgument = typer.Argument(None, help="Uploads JSON/JSONL file (defaults to SCHOOL_ANALYTICS_UPLOADS_PATH)")
RoleOption = typer.Option(None, "--role", "-r", help="Scope as TEACHER or LEADER")
UserOption = typer.Option(None, "--user", "-u", help="Signed-in user name for TEACHER scope")
TeacherOption = typer.Option(None, "--teacher", "-t", help="Restrict to one teacher's uploads")
AssessmentOption = typer.Option(None, "--assessment", "-a", help="Restrict to one assessment (or 'all')")


@app.command()
def version():
    """Show version information."""
    from school_analytics import __version__

    console.print(Panel.fit(
        f"[bold blue]School Analytics[/bold blue]\n"
        f"Version: [green]{__version__}[/green]",
        title="Version Info"
    ))


@app.command()
def summary(
    path: Optional[Path] = PathArgument,
    assessment: Optional[str] = AssessmentOption,
    role: Optional[str] = RoleOption,
    user: Optional[str] = UserOption,
    teacher: Optional[str] = TeacherOption,
):
    """Show the current-state school summary (latest upload per teacher)."""
    settings = _setup()
    thresholds = settings.tiers.to_thresholds()
    try:
        uploads = _load(path, settings, role, user, teacher)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(code=1)

    uploads = _for_assessment(uploads, assessment)
    result = current_state_summary(uploads, thresholds)

    console.print(Panel.fit(
        f"Students: [bold]{result.total_students}[/bold]\n"
        f"Assessments: [bold]{result.total_assessments}[/bold]\n"
        f"School average: {_colored(result.school_average, settings, thresholds)}",
        title="School Summary"
    ))

    table = Table(title="Performance Distribution")
    table.add_column("Scope")
    for label, style in (("Green", "green"), ("Orange", "dark_orange"), ("Red", "red"), ("Gray", "grey50")):
        table.add_column(label, style=style, justify="right")
    table.add_column("Total", justify="right")

    rows = [("All", result.performance_distribution)] + list(result.subject_distributions.items())
    for scope, dist in rows:
        table.add_row(scope, str(dist.green), str(dist.orange), str(dist.red), str(dist.gray), str(dist.total))
    console.print(table)


@app.command()
def grades(
    path: Optional[Path] = PathArgument,
    role: Optional[str] = RoleOption,
    user: Optional[str] = UserOption,
    teacher: Optional[str] = TeacherOption,
):
    """Show Math and Reading averages per grade."""
    settings = _setup()
    thresholds = settings.tiers.to_thresholds()
    try:
        uploads = _load(path, settings, role, user, teacher)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(code=1)

    table = Table(title="Grade Breakdown")
    table.add_column("Grade")
    table.add_column("Math", justify="right")
    table.add_column("Reading", justify="right")
    table.add_column("Students", justify="right")
    table.add_column("Teachers", justify="right")

    for grade in rollup_by_grade(uploads):
        table.add_row(
            grade.grade,
            _colored(grade.math_average, settings, thresholds),
            _colored(grade.reading_average, settings, thresholds),
            str(grade.student_count),
            str(grade.teacher_count),
        )
    console.print(table)


@app.command()
def trend(
    path: Optional[Path] = PathArgument,
    latest_week: Optional[int] = typer.Option(None, "--latest-week", help="Week to compare (default: newest)"),
    previous_week: Optional[int] = typer.Option(None, "--previous-week", help="Baseline week (default: week before)"),
    role: Optional[str] = RoleOption,
    user: Optional[str] = UserOption,
    teacher: Optional[str] = TeacherOption,
):
    """Show weekly averages and growth between two weeks."""
    settings = _setup()
    try:
        uploads = _load(path, settings, role, user, teacher)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(code=1)

    comparison = trend_summary(uploads, latest_week, previous_week)

    table = Table(title="Weekly Averages")
    table.add_column("Week", justify="right")
    table.add_column("Label")
    table.add_column("Average", justify="right")
    table.add_column("Uploads", justify="right")
    for week in comparison.weeks:
        table.add_row(
            str(week.week_number),
            week.week_label or "",
            _fmt(week.average, settings),
            str(week.upload_count),
        )
    console.print(table)

    console.print(
        f"Growth (week {comparison.previous_week} → {comparison.latest_week}): "
        f"[bold]{format_growth(comparison.growth_rate)}[/bold]"
    )


@app.command()
def students(
    path: Optional[Path] = PathArgument,
    grade: Optional[str] = typer.Option(None, "--grade", help="Filter by grade"),
    class_name: Optional[str] = typer.Option(None, "--class", help="Filter by class"),
    subject: Optional[str] = typer.Option(None, "--subject", help="Filter by subject (or 'all')"),
    assessment: Optional[str] = AssessmentOption,
    min_score: Optional[float] = typer.Option(None, "--min-score", help="Minimum overall score"),
    latest_only: bool = typer.Option(False, "--latest-only", help="Use only each teacher's newest upload"),
    role: Optional[str] = RoleOption,
    user: Optional[str] = UserOption,
    teacher: Optional[str] = TeacherOption,
):
    """List students ranked by overall score."""
    settings = _setup()
    thresholds = settings.tiers.to_thresholds()
    try:
        uploads = _load(path, settings, role, user, teacher)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(code=1)

    uploads = _for_assessment(uploads, assessment)
    if latest_only:
        uploads = list(latest_per_teacher(uploads).values())

    report = build_student_report(
        uploads,
        grade=grade,
        class_name=class_name,
        subject=subject,
        assessment=assessment,
        min_score=min_score,
        thresholds=thresholds,
    )

    table = Table(title="Students")
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Math", justify="right")
    table.add_column("Reading", justify="right")
    table.add_column("Overall", justify="right")
    table.add_column("Tier")
    for student in report.students:
        table.add_row(
            student.student_id,
            student.student_name or "",
            "" if student.math_score is None else _fmt(student.math_score, settings),
            "" if student.reading_score is None else _fmt(student.reading_score, settings),
            "" if student.overall_score is None else _colored(student.overall_score, settings, thresholds),
            student.overall_tier.value if student.overall_tier else "",
        )
    console.print(table)

    s = report.summary
    console.print(
        f"{s.total_students} students, average {_fmt(s.average_score, settings)}; "
        f"{s.above_threshold} at or above {_fmt(s.threshold, settings)}, {s.below_threshold} below"
    )


@app.command()
def progress(
    teacher_name: str = typer.Argument(..., help="Teacher whose students to show"),
    path: Optional[Path] = typer.Option(None, "--uploads", help="Uploads JSON/JSONL file"),
    role: Optional[str] = RoleOption,
    user: Optional[str] = UserOption,
):
    """Show week-by-week overall scores for one teacher's students."""
    settings = _setup()
    thresholds = settings.tiers.to_thresholds()
    try:
        uploads = _load(path, settings, role, user, None)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(code=1)

    report = build_teacher_progress(uploads, teacher_name, thresholds)
    if report is None:
        console.print(f"[yellow]No data found for {teacher_name}[/yellow]")
        raise typer.Exit(code=1)

    table = Table(title=f"{report.teacher_name} - {report.class_name or ''}")
    table.add_column("Student")
    for week in report.weeks:
        table.add_column(f"Wk {week.week_number}", justify="right")
    for student in report.students:
        cells = []
        for week in report.weeks:
            entry = student.weeks.get(week.week_number)
            if entry is None or entry.overall is None:
                cells.append("")
            else:
                cells.append(_colored(entry.overall.score, settings, thresholds))
        table.add_row(student.student_name or student.student_id, *cells)
    console.print(table)


@app.command()
def teachers(
    path: Optional[Path] = PathArgument,
    roster: Optional[Path] = typer.Option(None, "--roster", help="YAML teacher roster"),
):
    """Show per-teacher performance, including roster teachers without uploads."""
    settings = _setup()
    thresholds = settings.tiers.to_thresholds()
    try:
        uploads = _load(path, settings, None, None, None)
        roster_path = roster or (Path(settings.app.roster_path) if settings.app.roster_path else None)
        roster_teachers = YamlTeacherDirectory(roster_path).list_teachers() if roster_path else None
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(code=1)

    table = Table(title="Teacher Performance")
    table.add_column("Teacher")
    table.add_column("Grade")
    table.add_column("Uploads", justify="right")
    table.add_column("Students", justify="right")
    table.add_column("Average", justify="right")

    performances = teacher_performance(uploads)
    for perf in performances:
        table.add_row(
            perf.teacher_name,
            perf.grade or "",
            str(perf.total_uploads),
            str(perf.total_students),
            _colored(perf.average_score, settings, thresholds),
        )

    if roster_teachers is not None:
        seen = {p.teacher_name for p in performances}
        for teacher in roster_teachers:
            if teacher.name not in seen:
                table.add_row(teacher.name, teacher.grade or "", "0", "0", "-")
    console.print(table)


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
