"""
CLI entry point: export saved ChatGPT conversations from the shell.

    chat2pdf export path/to/chat.html -o exports --filter both
    chat2pdf extract path/to/chat.html        # dump the extracted messages as JSON
    chat2pdf config show                      # effective defaults and config file
"""

import json
import logging
from pathlib import Path

import typer

from chat2pdf import config as config_module
from chat2pdf.api import export_chat_to_pdf
from chat2pdf.backends import REGISTRY
from chat2pdf.errors import SourceError
from chat2pdf.extractor import extract_messages, extract_title
from chat2pdf.nodes import RoleFilter
from chat2pdf.source import load_source
from chat2pdf.tools.config import config_app

app = typer.Typer(
    name="chat2pdf",
    help="Export saved ChatGPT conversations to paginated PDF.",
)
app.add_typer(config_app, name="config")

FILTER_CHOICES = ", ".join(f.value for f in RoleFilter)


def _role_filter(value: str | None) -> RoleFilter:
    value = value or config_module.load_config()["filter"]
    try:
        return RoleFilter(value)
    except ValueError:
        typer.echo(f"Error: unknown filter '{value}'. Choose: {FILTER_CHOICES}", err=True)
        raise typer.Exit(1)


@app.command("export")
def export(
    page: Path = typer.Argument(..., help="Saved conversation page (.html)", path_type=Path),
    output_dir: Path | None = typer.Option(
        None,
        "-o",
        "--output-dir",
        help="Directory for the PDF (default: output_dir from config)",
        path_type=Path,
    ),
    role_filter: str | None = typer.Option(
        None,
        "--filter",
        "-f",
        help=f"Whose messages to include: {FILTER_CHOICES} (default: from config)",
    ),
    url: str | None = typer.Option(
        None,
        "--url",
        help="URL the page was saved from (default: the page's canonical link)",
    ),
    surface: str | None = typer.Option(
        None,
        "--surface",
        "-s",
        help=f"Drawing surface: {', '.join(REGISTRY)} (default: from config)",
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Print progress info"),
) -> None:
    """Render a saved conversation page to PDF."""
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    if not page.is_file():
        typer.echo(f"Error: page not found: {page}", err=True)
        raise typer.Exit(1)
    chosen_filter = _role_filter(role_filter)
    surface = surface or config_module.load_config()["surface"]
    if surface not in REGISTRY:
        typer.echo(f"Error: unknown surface '{surface}'. Choose: {', '.join(REGISTRY)}", err=True)
        raise typer.Exit(1)
    try:
        layout = config_module.get_layout_config()
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo("Generating PDF...")
    result = export_chat_to_pdf(
        page,
        output_dir or config_module.get_output_dir(),
        role_filter=chosen_filter,
        surface=surface,
        source_url=url,
        layout=layout,
    )
    if not result.success:
        typer.echo(f"Error: {result.error}", err=True)
        raise typer.Exit(1)

    typer.echo(f"PDF saved! ({result.message_count} messages)")
    typer.echo(f"  file  → {result.output_path}")
    typer.echo(f"  pages → {result.page_count}")


@app.command("extract")
def extract_cmd(
    page: Path = typer.Argument(..., help="Saved conversation page (.html)", path_type=Path),
    role_filter: str | None = typer.Option(
        None,
        "--filter",
        "-f",
        help=f"Whose messages to include: {FILTER_CHOICES} (default: from config)",
    ),
) -> None:
    """Print the title and extracted content nodes of a saved page as JSON."""
    chosen_filter = _role_filter(role_filter)
    try:
        soup = load_source(page)
    except SourceError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    messages = extract_messages(soup, chosen_filter)
    payload = {
        "title": extract_title(soup),
        "filter": chosen_filter.value,
        "messages": [m.model_dump(mode="json") for m in messages],
    }
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def main() -> None:
    """Entry point for the chat2pdf console script."""
    app()


if __name__ == "__main__":
    main()
