from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from .config import Settings
from .errors import DatasetError
from .ingest import get_schema_policy
from .logging_utils import setup_logging
from .session import ask_current, current_history, record_upload, reset_history
from .utils import write_json

app = typer.Typer(add_completion=False, help="Dialogix: tabular dataset summaries, insights and chart specs")

# ---- History commands ----
history_app = typer.Typer(help="Inspect or clear the stored chat history.")
app.add_typer(history_app, name="history")


def _settings() -> Settings:
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    return settings


@app.command()
def analyze(
    data: Path = typer.Option(..., "--data", exists=True, dir_okay=False, help="Path to a .csv, .xlsx or .xls file"),
    out: Optional[Path] = typer.Option(None, "--out", help="Directory for dataset.json, insights.json, charts.json"),
    schema: Optional[str] = typer.Option(
        None,
        "--schema",
        help="Column policy: first_row (columns from the first record) or union (all records)",
    ),
):
    """
    Process a file and make it the current dataset for `dialogix ask`.

    Prints the insights; with --out also writes:
      dataset.json, insights.json, charts.json
    """
    settings = _settings()
    try:
        policy = get_schema_policy(schema or settings.schema_policy)
        _, result = record_upload(data, settings=settings, policy=policy)
    except DatasetError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(code=2)
    except ValueError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(code=1)

    d = result.descriptor
    typer.echo(f"Processed {d.name}: {d.row_count} rows, {d.column_count} columns")
    for insight in result.insights:
        typer.echo(f"  {insight.title}: {insight.value}")
    typer.echo(f"Charts: {', '.join(c.id for c in result.charts) or '(none)'}")

    if out is not None:
        write_json(out / "dataset.json", d.model_dump(mode="json"))
        write_json(out / "insights.json", [i.model_dump(mode="json") for i in result.insights])
        write_json(out / "charts.json", [c.model_dump(mode="json") for c in result.charts])
        typer.echo(f"Artifacts written to: {out}")


@app.command()
def ask(
    question: str = typer.Option(..., "--question", help="A question about the current dataset"),
):
    """Ask the question-answering service about the current dataset."""
    settings = _settings()
    _, result = ask_current(question, settings=settings)
    if result is None:
        typer.echo("No dataset loaded. Run: dialogix analyze --data <file>", err=True)
        raise typer.Exit(code=2)

    typer.echo(result.answer.rstrip())
    if result.generated_by == "fallback":
        typer.echo("\n(answer generated without the question-answering service)", err=True)


@history_app.command("show")
def show_history(
    as_json: bool = typer.Option(False, "--json", help="Emit the stored history as JSON"),
):
    """Print the stored chat transcript."""
    settings = _settings()
    history = current_history(settings)
    if as_json:
        typer.echo(json.dumps(history.model_dump(mode="json"), indent=2, allow_nan=False))
        return

    for m in history.messages:
        typer.echo(f"[{m.timestamp.isoformat()}] {m.role}: {m.content}")
    if history.current_dataset is not None:
        typer.echo(f"Current dataset: {history.current_dataset.name}")


@history_app.command("clear")
def clear():
    """Delete the stored history and current dataset."""
    settings = _settings()
    reset_history(settings)
    typer.echo("Chat history has been cleared.")
