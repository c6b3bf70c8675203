"""CLI for the neuroscale clinical scale scoring engine."""

import json
import shutil
from pathlib import Path
from typing import Annotated, NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from neuroscale import __version__
from neuroscale.config import (
    ENV_SCALE_REGISTRY,
    get_bundled_registry_path,
    get_neuroscale_home,
    get_registry_root,
    get_schema_path,
    load_global_config,
    save_global_config,
)
from neuroscale.exceptions import ScoringError
from neuroscale.io import read_jsonl, write_jsonl
from neuroscale.pipeline import Pipeline, PipelineConfig, ProcessingResult
from neuroscale.registry import (
    ScaleCatalog,
    ScaleNotFoundError,
    ScaleRegistry,
    ScaleValidationError,
    default_catalog,
    load_spec,
)
from neuroscale.rendering import render_text
from neuroscale.scoring import ScoringEngine
from neuroscale.suggestions import suggest_scales

app = typer.Typer(
    name="neuroscale",
    help="Scoring engine for neurological clinical scales.",
    no_args_is_help=True,
)
console = Console()

RegistryOption = Annotated[
    Path | None,
    typer.Option(
        "--registry",
        envvar=ENV_SCALE_REGISTRY,
        help="Path to the scale registry (default: configured or bundled)",
    ),
]


def version_callback(value: bool) -> None:
    if value:
        console.print(f"neuroscale version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
) -> None:
    """neuroscale: Scoring engine for neurological clinical scales."""
    pass


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
    raise typer.Exit(1)


def _load_catalog(registry: Path | None) -> ScaleCatalog:
    """Load the catalog from an explicit registry, or the configured one."""
    try:
        if registry is None:
            return default_catalog()
        if not registry.exists():
            _fail(f"Scale registry not found: {registry}")
        return ScaleCatalog.from_registry(
            ScaleRegistry(registry, schema_path=get_schema_path())
        )
    except (ScaleNotFoundError, ScaleValidationError) as e:
        _fail(str(e))


def _parse_responses(
    pairs: list[str] | None,
    responses_file: Path | None,
) -> dict[str, object]:
    responses: dict[str, object] = {}
    if responses_file is not None:
        if not responses_file.exists():
            _fail(f"Responses file not found: {responses_file}")
        with open(responses_file, encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                _fail(f"Invalid JSON in {responses_file}: {e}")
        if not isinstance(data, dict):
            _fail(f"{responses_file} must contain an object of item_id -> response")
        responses.update(data)

    for pair in pairs or []:
        item_id, sep, value = pair.partition("=")
        if not sep or not item_id:
            _fail(f"Invalid response '{pair}', expected item_id=value")
        responses[item_id.strip()] = value.strip()
    return responses


@app.command("list")
def list_scales(registry: RegistryOption = None) -> None:
    """List the scales available for scoring."""
    catalog = _load_catalog(registry)

    table = Table(title="Clinical scales")
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Items", justify="right")
    table.add_column("Max", justify="right")
    table.add_column("Version")

    for scale in catalog:
        table.add_row(
            scale.scale_id,
            scale.name,
            scale.category,
            str(len(scale.items)),
            str(scale.max_possible_score),
            scale.version,
        )
    console.print(table)

    unapproved = catalog.unapproved(load_global_config().approved_scale_types)
    if unapproved:
        console.print(
            f"[yellow]Warning:[/yellow] not in approved scale types: {', '.join(unapproved)}"
        )


@app.command()
def show(
    scale_id: Annotated[str, typer.Argument(help="Scale id or alias (e.g., NIHSS)")],
    registry: RegistryOption = None,
) -> None:
    """Show the items and interpretation bands of a scale."""
    catalog = _load_catalog(registry)
    try:
        scale = catalog.get_scale(scale_id)
    except ScaleNotFoundError as e:
        _fail(str(e))

    console.print(f"[bold]{scale.name}[/bold] ({scale.scale_id}@{scale.version})")
    if scale.description:
        console.print(scale.description)
    console.print(f"Max possible score: {scale.max_possible_score}")

    items = Table(title="Items")
    items.add_column("#", justify="right")
    items.add_column("Item ID", style="bold")
    items.add_column("Label")
    items.add_column("Options")
    for item in scale.items:
        options = "\n".join(f"{o.value}: {o.text}" for o in item.options)
        items.add_row(str(item.position), item.item_id, item.label, options)
    console.print(items)

    bands = Table(title="Interpretation")
    bands.add_column("Range")
    bands.add_column("Label")
    bands.add_column("Severity")
    for band in scale.interpretation_bands:
        upper = "+" if band.max_score is None else f"-{band.max_score}"
        bands.add_row(f"{band.min_score}{upper}", band.label, band.severity or "")
    console.print(bands)


@app.command()
def score(
    scale_id: Annotated[str, typer.Argument(help="Scale id or alias (e.g., NIHSS)")],
    response: Annotated[
        list[str] | None,
        typer.Option("--response", "-r", help="Item response as item_id=value (repeatable)"),
    ] = None,
    responses_file: Annotated[
        Path | None,
        typer.Option("--responses", help="JSON file with an item_id -> response object"),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the score result as JSON"),
    ] = False,
    registry: RegistryOption = None,
) -> None:
    """Score a complete response set and print the clinical text block."""
    responses = _parse_responses(response, responses_file)
    engine = ScoringEngine(_load_catalog(registry))

    try:
        result = engine.score(scale_id, responses)
    except (ScaleNotFoundError, ScoringError) as e:
        _fail(str(e))

    if as_json:
        console.print_json(result.model_dump_json())
    else:
        console.print(render_text(result), end="", markup=False, highlight=False, soft_wrap=True)


@app.command()
def suggest(
    text: Annotated[str, typer.Argument(help="Clinical free text")],
    limit: Annotated[int, typer.Option("--limit", "-n", help="Maximum suggestions")] = 5,
    registry: RegistryOption = None,
) -> None:
    """Suggest scales relevant to a clinical text."""
    suggestions = suggest_scales(text, _load_catalog(registry), limit=limit)
    if not suggestions:
        console.print("No scales suggested.")
        return

    table = Table(title="Suggested scales")
    table.add_column("Scale", style="bold")
    table.add_column("Confidence", justify="right")
    table.add_column("Keywords")
    table.add_column("Reason")
    for suggestion in suggestions:
        table.add_row(
            suggestion.scale_id,
            f"{suggestion.confidence:.2f}",
            ", ".join(suggestion.keywords),
            suggestion.reason,
        )
    console.print(table)


@app.command()
def run(
    input_path: Annotated[
        Path,
        typer.Option("--in", "-i", help="Input JSONL file with submissions"),
    ],
    output_path: Annotated[
        Path,
        typer.Option("--out", "-o", help="Output JSONL file path for score records"),
    ],
    diagnostics: Annotated[
        Path | None,
        typer.Option("--diagnostics", "-d", help="Diagnostics output JSONL path"),
    ] = None,
    deterministic_ids: Annotated[
        bool,
        typer.Option("--deterministic-ids", help="Derive missing submission ids from content"),
    ] = False,
    registry: RegistryOption = None,
) -> None:
    """Score submissions from a JSONL file.

    Each input line is a submission: {"submission_id", "scale_id", "responses"}.
    """
    if not input_path.exists():
        _fail(f"Input file not found: {input_path}")

    catalog = _load_catalog(registry)
    pipeline = Pipeline(
        PipelineConfig(scale_registry_path=registry, deterministic_ids=deterministic_ids),
        catalog=catalog,
    )

    console.print(f"[bold]neuroscale[/bold] v{__version__}")
    console.print(f"  Input: {input_path}")
    console.print(f"  Output: {output_path}")
    if diagnostics:
        console.print(f"  Diagnostics: {diagnostics}")

    def report_invalid(line_num: int, error: json.JSONDecodeError) -> None:
        console.print(f"\n[yellow]Warning:[/yellow] Invalid JSON on line {line_num}: {error}")

    results: list[ProcessingResult] = []
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Scoring submissions...", total=None)
        for submission in read_jsonl(input_path, on_invalid=report_invalid):
            results.append(pipeline.process(submission))
            progress.update(task, description=f"Scored {len(results)} submissions...")

    records_written = write_jsonl(output_path, (r.to_record() for r in results if r.success))
    if diagnostics:
        write_jsonl(diagnostics, (r.diagnostics.model_dump(mode="json") for r in results))

    counts = {"success": 0, "partial": 0, "failed": 0}
    for result in results:
        counts[result.diagnostics.status.value] += 1

    console.print("\n[bold]Summary:[/bold]")
    console.print(f"  Submissions processed: {len(results)}")
    console.print(f"  [green]Success:[/green] {counts['success']}")
    if counts["partial"]:
        console.print(f"  [yellow]Partial:[/yellow] {counts['partial']}")
    if counts["failed"]:
        console.print(f"  [red]Failed:[/red] {counts['failed']}")
    console.print(f"  Records written: {records_written}")


@app.command()
def validate(
    spec_path: Annotated[Path, typer.Argument(help="Path to the scale spec file")],
    schema_path: Annotated[
        Path | None,
        typer.Option("--schema", "-s", help="Path to the schema file"),
    ] = None,
) -> None:
    """Validate a scale spec file (schema, model and band coverage)."""
    if not spec_path.exists():
        _fail(f"Spec file not found: {spec_path}")

    schema_path = schema_path or get_schema_path()
    if not schema_path.exists():
        _fail(f"Schema file not found: {schema_path}")

    with open(schema_path, encoding="utf-8") as f:
        schema = json.load(f)

    try:
        spec = load_spec(spec_path, schema)
    except ScaleValidationError as e:
        console.print(f"[red]Invalid:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1)

    console.print(
        f"[green]Valid:[/green] {spec_path} "
        f"({spec.scale_id}@{spec.version}, {len(spec.items)} items, "
        f"max {spec.max_possible_score})",
        highlight=False,
    )


@app.command()
def init(
    source: Annotated[
        Path | None,
        typer.Option(
            "--from",
            "-f",
            help="Source scale registry directory (default: bundled registry)",
        ),
    ] = None,
    force: bool = typer.Option(
        False,
        "--force",
        help="Overwrite existing registry",
    ),
) -> None:
    """Initialize neuroscale global configuration and sync the scale registry.

    Creates:
      ~/.config/neuroscale/config.yaml
      ~/.config/neuroscale/registry/scale-registry/

    Examples:
        neuroscale init
        neuroscale init --from /workspace/scale-registry
    """
    home = get_neuroscale_home()
    registry_root = get_registry_root()
    scale_dest = registry_root / "scale-registry"

    if source is None:
        source = get_bundled_registry_path()

    if not (source / "scales").exists():
        console.print(f"[red]Error:[/red] scale registry not found at {source}")
        console.print("Use --from to specify source directory")
        raise typer.Exit(1)

    if scale_dest.exists() and not force:
        console.print(f"[yellow]Warning:[/yellow] Registry already exists at {scale_dest}")
        console.print("Use --force to overwrite")
        raise typer.Exit(1)

    console.print(f"[bold]Initializing neuroscale at {home}[/bold]")
    registry_root.mkdir(parents=True, exist_ok=True)

    console.print(f"  Syncing scale registry from {source}...")
    if scale_dest.exists():
        shutil.rmtree(scale_dest)
    shutil.copytree(source, scale_dest)
    scale_count = len(list(scale_dest.glob("scales/*")))
    console.print(f"    [green]✓[/green] {scale_count} scales synced")

    config = load_global_config().model_copy(
        update={"default_scale_registry_path": str(scale_dest)}
    )
    config_path = save_global_config(config)
    console.print(f"  [green]✓[/green] Created config at {config_path}")

    console.print("\n[green]✓ Initialized neuroscale[/green]")
    console.print(f"  Home: {home}")
    console.print(f"  Registry: {scale_dest}")


if __name__ == "__main__":
    app()
