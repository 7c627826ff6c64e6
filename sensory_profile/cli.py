"""CLI for the sensory-profile scoring engine."""

import json
from datetime import datetime
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from sensory_profile import __version__
from sensory_profile.activities import ActivitySelector, time_slot_for
from sensory_profile.config import (
    GlobalConfig,
    get_config_path,
    get_registry_path,
    get_results_path,
    load_global_config,
    save_global_config,
)
from sensory_profile.interpretation import SYSTEM_DISPLAY_NAMES, describe_profile
from sensory_profile.io import JsonlResultSink, latest_record
from sensory_profile.logging import configure_logging
from sensory_profile.pipeline import Pipeline, PipelineConfig
from sensory_profile.registry import (
    QUESTIONNAIRE_SCHEMA_PATH,
    QuestionnaireNotFoundError,
    QuestionnaireValidationError,
    load_questionnaire,
)

app = typer.Typer(
    name="sensory-profile",
    help="Scoring engine for the child sensory-profile questionnaire.",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"sensory-profile version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
) -> None:
    """sensory-profile: Scoring engine for the child sensory-profile questionnaire."""
    configure_logging(load_global_config().log_level)


def _build_pipeline(
    config: GlobalConfig,
    registry: Path | None,
    questionnaire_version: str | None,
    deterministic_ids: bool = False,
    sink: JsonlResultSink | None = None,
) -> Pipeline:
    registry_path = registry or get_registry_path(config)
    if not registry_path.exists():
        console.print(f"[red]Error:[/red] Registry not found: {registry_path}")
        raise typer.Exit(1)

    try:
        return Pipeline(
            PipelineConfig(
                registry_path=registry_path,
                questionnaire_id=config.questionnaire_id,
                questionnaire_version=questionnaire_version or config.questionnaire_version,
                deterministic_ids=deterministic_ids,
            ),
            sink=sink,
        )
    except (QuestionnaireNotFoundError, QuestionnaireValidationError) as e:
        console.print(f"\n[red]Error initializing pipeline:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def init(
    registry: Annotated[
        Path | None,
        typer.Option("--registry", "-r", help="Questionnaire registry directory"),
    ] = None,
    child_name: Annotated[
        str | None,
        typer.Option("--child-name", help="Placeholder used when no child name is given"),
    ] = None,
    results: Annotated[
        Path | None,
        typer.Option("--results", help="JSONL file that scored records are appended to"),
    ] = None,
    force: bool = typer.Option(
        False,
        "--force",
        help="Overwrite an existing config file",
    ),
) -> None:
    """Create the global configuration file.

    Creates:
      ~/.config/sensory-profile/config.yaml

    Examples:
        sensory-profile init
        sensory-profile init --registry ./registry --child-name "Your kid"
    """
    config_path = get_config_path()
    if config_path.exists() and not force:
        console.print(f"[yellow]Warning:[/yellow] Config already exists at {config_path}")
        console.print("Use --force to overwrite")
        raise typer.Exit(1)

    if registry is not None and not registry.exists():
        console.print(f"[red]Error:[/red] Registry not found: {registry}")
        raise typer.Exit(1)

    config = GlobalConfig()
    if registry is not None:
        config.registry_path = str(registry.resolve())
    if child_name:
        config.default_child_name = child_name
    if results is not None:
        config.results_path = str(results.resolve())

    save_global_config(config, config_path)
    console.print(f"[green]✓[/green] Created config at {config_path}")


@app.command()
def questions(
    child_name: Annotated[
        str | None,
        typer.Option("--child-name", "-n", help="Name substituted into the questions"),
    ] = None,
    registry: Annotated[
        Path | None,
        typer.Option("--registry", "-r", envvar="SENSORY_PROFILE_REGISTRY", help="Registry path"),
    ] = None,
    questionnaire_version: Annotated[
        str | None,
        typer.Option("--questionnaire-version", help="Questionnaire version (default: latest)"),
    ] = None,
) -> None:
    """Print the question bank for a child."""
    config = load_global_config()
    pipeline = _build_pipeline(config, registry, questionnaire_version)
    spec = pipeline.spec

    table = Table(title=f"{spec.name} ({spec.ref})")
    table.add_column("#", justify="right")
    table.add_column("System")
    table.add_column("Question")
    for question in spec.questions:
        table.add_row(
            str(question.id),
            SYSTEM_DISPLAY_NAMES.get(question.system, question.system),
            question.render(child_name, config.default_child_name),
        )
    console.print(table)

    options = " / ".join(option.label for option in spec.questions[0].options)
    console.print(f"Answer each question with: {options}")


@app.command()
def score(
    input_path: Annotated[
        Path,
        typer.Option("--in", "-i", help="Input JSONL file of submissions"),
    ],
    output_path: Annotated[
        Path,
        typer.Option("--out", "-o", help="Output JSONL file for assessment records"),
    ],
    registry: Annotated[
        Path | None,
        typer.Option("--registry", "-r", envvar="SENSORY_PROFILE_REGISTRY", help="Registry path"),
    ] = None,
    questionnaire_version: Annotated[
        str | None,
        typer.Option("--questionnaire-version", help="Questionnaire version (default: latest)"),
    ] = None,
    deterministic_ids: bool = typer.Option(
        False,
        "--deterministic-ids",
        help="Derive assessment ids from user id and completion time",
    ),
    save: bool = typer.Option(
        False,
        "--save",
        help="Also append records to the configured results file",
    ),
) -> None:
    """Score submissions and write one assessment record per line.

    Each input line holds {"user_id", "answers", "completed_at"?, "child_name"?}.
    """
    if not input_path.exists():
        console.print(f"[red]Error:[/red] Input file not found: {input_path}")
        raise typer.Exit(1)

    config = load_global_config()
    sink = JsonlResultSink(get_results_path(config)) if save else None
    pipeline = _build_pipeline(config, registry, questionnaire_version, deterministic_ids, sink)

    console.print(f"[bold]sensory-profile[/bold] v{__version__}")
    console.print(f"  Input: {input_path}")
    console.print(f"  Output: {output_path}")
    console.print(f"  Questionnaire: {pipeline.spec.ref}")

    counts: dict[str, int] = {}
    success_count = 0
    failed_count = 0

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Scoring submissions...", total=None)

        with open(input_path) as f_in, open(output_path, "w") as f_out:
            for line_num, line in enumerate(f_in, 1):
                line = line.strip()
                if not line:
                    continue

                try:
                    submission = json.loads(line)
                except json.JSONDecodeError as e:
                    console.print(
                        f"\n[yellow]Warning:[/yellow] Invalid JSON on line {line_num}: {e}"
                    )
                    failed_count += 1
                    continue

                result = pipeline.process(submission)
                if result.success and result.record is not None:
                    f_out.write(result.record.model_dump_json() + "\n")
                    success_count += 1
                    profile = result.record.profile
                    counts[profile] = counts.get(profile, 0) + 1
                else:
                    failed_count += 1
                    for error in result.errors:
                        console.print(f"\n[yellow]Line {line_num}:[/yellow] {error}")

                progress.update(task, description=f"Processed {line_num} submissions...")

    table = Table(title="Summary")
    table.add_column("Profile")
    table.add_column("Count", justify="right")
    for profile, count in sorted(counts.items()):
        table.add_row(profile, str(count))
    console.print(table)
    console.print(f"  [green]Scored:[/green] {success_count}")
    if failed_count:
        console.print(f"  [red]Failed:[/red] {failed_count}")


@app.command()
def activities(
    hour: Annotated[
        int | None,
        typer.Option("--hour", help="Hour of the day, 0-23 (default: now)"),
    ] = None,
    user_id: Annotated[
        str | None,
        typer.Option("--user", "-u", help="User whose latest record drives the suggestions"),
    ] = None,
    results: Annotated[
        Path | None,
        typer.Option("--results", help="JSONL file of assessment records"),
    ] = None,
    limit: int = typer.Option(6, "--limit", "-n", help="Number of suggestions"),
) -> None:
    """Suggest activities for the time of day and a child's latest result."""
    if hour is None:
        hour = datetime.now().hour
    try:
        slot = time_slot_for(hour)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    config = load_global_config()
    record = None
    if user_id:
        results_path = results or get_results_path(config)
        record = latest_record(JsonlResultSink(results_path).read(), user_id)
        if record is None:
            console.print(f"[yellow]Warning:[/yellow] No assessment found for {user_id}")

    if record is not None:
        description = describe_profile(
            record.profile, record.child_name, config.default_child_name
        )
        console.print(f"[bold]{description.title}[/bold]: {description.description}")

    selector = ActivitySelector()
    suggestions = selector.suggest(
        record.results if record else None,
        record.system_labels if record else None,
        hour,
        limit=limit,
    )

    table = Table(title=f"Activities for {slot}")
    table.add_column("Activity")
    table.add_column("Type")
    table.add_column("Minutes", justify="right")
    table.add_column("Context")
    for activity in suggestions:
        table.add_row(
            activity.title,
            activity.activity_type,
            str(activity.duration_minutes),
            activity.context or "",
        )
    console.print(table)


@app.command()
def validate(
    spec_path: Annotated[
        Path,
        typer.Argument(help="Path to the questionnaire spec file"),
    ],
    schema_path: Annotated[
        Path | None,
        typer.Option("--schema", "-s", help="Path to the schema file"),
    ] = None,
) -> None:
    """Validate a questionnaire spec against its schema and structure rules."""
    if not spec_path.exists():
        console.print(f"[red]Error:[/red] Spec file not found: {spec_path}")
        raise typer.Exit(1)

    schema_path = schema_path or QUESTIONNAIRE_SCHEMA_PATH
    if not schema_path.exists():
        console.print(f"[red]Error:[/red] Schema file not found: {schema_path}")
        raise typer.Exit(1)

    with open(schema_path) as f:
        schema = json.load(f)

    try:
        load_questionnaire(spec_path, schema)
    except QuestionnaireValidationError as e:
        console.print(f"[red]Invalid:[/red] {e}")
        raise typer.Exit(1)
    console.print(f"[green]Valid:[/green] {spec_path}")


if __name__ == "__main__":
    app()
