"""Command-line interface for Galley."""

from __future__ import annotations

import json
from typing import Any, List, Optional

import typer
import uvicorn

from galley.agents import add_recommendation_to_shopping_list, compute_id, merge, reconcile
from galley.config import get_settings
from galley.logging_utils import configure_logging

app = typer.Typer(help="Galley kitchen equipment reconciliation commands.")


def _load_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as fh:
        return json.load(fh)


def _echo(payload: Any, pretty: bool) -> None:
    typer.echo(json.dumps(payload, indent=2 if pretty else None, sort_keys=pretty))


@app.callback()
def _setup() -> None:
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format, [settings.api_token or ""])


@app.command("reconcile")
def reconcile_command(
    equipment_path: str = typer.Argument(..., help="JSON file with the equipment list."),
    candidates_path: str = typer.Argument(..., help="JSON file with advisor maintenance output."),
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print output JSON."),
) -> None:
    """
    Reduce advisor maintenance candidates to one date-ordered entry per equipment name.
    """

    schedule = reconcile(_load_json(equipment_path), _load_json(candidates_path))
    _echo([entry.model_dump(mode="json", by_alias=True) for entry in schedule], pretty)


@app.command("merge")
def merge_command(
    recommendations_path: str = typer.Argument(
        ..., help="JSON file with advisor recommendation output."
    ),
    dismissed: Optional[List[int]] = typer.Option(
        None, "--dismissed", "-d", help="Recommendation id to drop; repeatable."
    ),
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print output JSON."),
) -> None:
    """Stamp stable ids on recommendations and remove dismissed or repeated ones."""

    merged = merge(_load_json(recommendations_path), dismissed or [])
    _echo([rec.model_dump(mode="json", by_alias=True) for rec in merged], pretty)


@app.command("recommendation-id")
def recommendation_id_command(
    name: str = typer.Argument(..., help="Recommendation name."),
    category: str = typer.Argument("", help="Recommendation category."),
) -> None:
    """Print the stable id for a recommendation name and category."""

    typer.echo(str(compute_id(name, category)))


@app.command("add-to-list")
def add_to_list_command(
    recommendation_path: str = typer.Argument(..., help="JSON file with one recommendation."),
    lists_path: str = typer.Argument(..., help="JSON file with the user's grocery lists."),
    user_id: Optional[int] = typer.Option(None, "--user-id", help="Owner for a newly created list."),
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print output JSON."),
) -> None:
    """
    Add a recommendation to the shopping list, reporting added/created/duplicate.
    """

    if user_id is None:
        user_id = get_settings().default_user_id
    result = add_recommendation_to_shopping_list(
        _load_json(recommendation_path), _load_json(lists_path), user_id
    )
    _echo(result.model_dump(mode="json", by_alias=True), pretty)


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind."),
    port: int = typer.Option(8000, "--port", help="Port to listen on."),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes."),
) -> None:
    """Run the HTTP API under uvicorn."""

    uvicorn.run("galley.server.app:app", host=host, port=port, reload=reload)


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
