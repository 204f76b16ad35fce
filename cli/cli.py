"""CLI for CoachLab lesson generation.

Developer CLI that runs the same lesson generation path as a calling
application: prompt composition, the generation service with fallback, and
markdown rendering.
"""

import asyncio
import json
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.json import JSON
from rich.panel import Panel
from rich.text import Text

from coachlab.config.settings import settings
from coachlab.core.logger import setup_logger
from coachlab.lessons.cache import RedisLessonCache
from coachlab.lessons.composer import compose_lesson_prompt
from coachlab.lessons.config import config_for
from coachlab.lessons.renderer import render_lesson_markdown
from coachlab.lessons.schema_builder import build_response_schema
from coachlab.lessons.service import LessonGenerationResult, LessonGenerationService, LessonRequest

# Initialize Rich console for output
console = Console()

# Initialize Typer app
app = typer.Typer(
    name="coachlab",
    help="CoachLab CLI - AI lesson plan generation",
    add_completion=False,
)

DEFAULT_LEVEL = "intermediate"
DEFAULT_DURATION = "45 minutes"


def _setup_logging(debug: bool = False) -> None:
    setup_logger(level="DEBUG" if debug else settings.log_level, log_file=settings.log_file)


def _build_request(
    topic: str,
    sport: str,
    level: str,
    duration: str,
    instructions: str | None,
    detail_level: str | None,
) -> LessonRequest:
    """Validate CLI arguments into a LessonRequest, exiting on bad input."""
    try:
        return LessonRequest(
            topic=topic,
            sport=sport,
            level=level,
            duration=duration,
            detailed_instructions=instructions,
            detail_level=detail_level or settings.lesson_default_detail_level,
        )
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            console.print(f"[red]Error:[/red] {field}: {error['msg']}", style="bold red")
        raise typer.Exit(1) from e


def _format_result(result: LessonGenerationResult, as_json: bool) -> str:
    if as_json:
        payload = {"source": result.source, "error": result.error, "plan": result.plan.to_wire()}
        return json.dumps(payload, indent=2, ensure_ascii=False)
    return render_lesson_markdown(result.plan)


@app.command()
def generate(
    topic: str = typer.Argument(..., help="Lesson topic"),
    sport: str = typer.Argument(..., help="Sport name or alias (e.g. bjj, wrestling)"),
    level: str = typer.Option(DEFAULT_LEVEL, "--level", "-l", help="beginner, intermediate or advanced"),
    duration: str = typer.Option(DEFAULT_DURATION, "--duration", "-d", help="Total lesson duration"),
    instructions: str | None = typer.Option(None, "--instructions", "-i", help="Instructor notes to expand upon"),
    detail_level: str | None = typer.Option(None, "--detail-level", help="comprehensive, expert or masterclass"),
    offline: bool = typer.Option(False, "--offline", help="Skip the generation service and use the fallback"),
    use_cache: bool = typer.Option(False, "--cache", help="Cache AI lesson plans in Redis"),
    as_json: bool = typer.Option(False, "--json", help="Print the plan as JSON instead of markdown"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the result to a file"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Generate a lesson plan and print it as markdown or JSON.

    Examples:
        python run_cli.py generate "Hip Escape Fundamentals" bjj --level beginner

        python run_cli.py generate "Double Leg Takedown" wrestling --offline --json
    """
    _setup_logging(debug)
    request = _build_request(topic, sport, level, duration, instructions, detail_level)

    service = LessonGenerationService(
        cache=RedisLessonCache() if use_cache else None,
        ai_enabled=False if offline else None,
    )
    result = asyncio.run(service.generate(request))
    rendered = _format_result(result, as_json)

    if output is not None:
        output.write_text(rendered, encoding="utf-8")
        console.print(f"[green]✓ Lesson written to {output}[/green]")
    elif as_json:
        typer.echo(rendered)
    else:
        console.print(rendered, markup=False, highlight=False, soft_wrap=True)

    if not as_json or output is not None:
        console.print(
            Panel(
                f"Source: {result.source}\nBlocks: {result.plan.block_count}",
                title="Lesson generated",
                border_style="yellow" if result.used_fallback else "green",
            )
        )


@app.command()
def prompt(
    topic: str = typer.Argument(..., help="Lesson topic"),
    sport: str = typer.Argument(..., help="Sport name"),
    level: str = typer.Option(DEFAULT_LEVEL, "--level", "-l", help="beginner, intermediate or advanced"),
    duration: str = typer.Option(DEFAULT_DURATION, "--duration", "-d", help="Total lesson duration"),
    instructions: str | None = typer.Option(None, "--instructions", "-i", help="Instructor notes to expand upon"),
    detail_level: str | None = typer.Option(None, "--detail-level", help="comprehensive, expert or masterclass"),
) -> None:
    """Show the system instruction and user prompt sent to the generation service."""
    request = _build_request(topic, sport, level, duration, instructions, detail_level)
    composed = compose_lesson_prompt(
        request.topic,
        request.sport,
        request.level,
        request.duration,
        request.detailed_instructions,
        config_for(request.detail_level),
    )
    console.print(Panel(Text(composed.system_instruction), title="System instruction", border_style="cyan"))
    console.print(Panel(Text(composed.user_prompt), title="User prompt", border_style="cyan"))


@app.command()
def schema(
    detail_level: str | None = typer.Option(None, "--detail-level", help="comprehensive, expert or masterclass"),
) -> None:
    """Print the response schema for a detail level."""
    try:
        config = config_for(detail_level or settings.lesson_default_detail_level)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}", style="bold red")
        raise typer.Exit(1) from e

    console.print(JSON(json.dumps(build_response_schema(config))))


if __name__ == "__main__":
    app()
