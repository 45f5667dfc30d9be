"""
Config tool: CLI subapp only. Implementation in chat2pdf.config.
"""

import typer

from chat2pdf import config as config_module

config_app = typer.Typer(help="Export defaults (output directory, role filter, drawing surface, layout overrides).")


def _report(result: dict, done: str) -> None:
    if not result["ok"]:
        typer.echo(result["error"], err=True)
        raise typer.Exit(1)
    typer.echo(done)


@config_app.command("show")
def _show() -> None:
    """Show the config file in use and the effective export defaults."""
    data = config_module.get_config()
    cf = data.get("_config_file", "")
    if data.get("_no_file", False):
        typer.echo(f"Config file: {cf} (not found; using defaults)")
    elif data.get("_load_error", False):
        typer.echo(f"Config file: {cf} (unreadable; using defaults)")
    else:
        typer.echo(f"Config file: {cf}")
    typer.echo(f"Output dir: {data.get('output_dir')}")
    typer.echo(f"Resolved output dir: {data.get('_resolved_output_dir')}")
    typer.echo(f"Filter: {data.get('filter')}")
    typer.echo(f"Surface: {data.get('surface')}")
    typer.echo(f"Layout overrides: {data.get('layout') or '(none)'}")


@config_app.command("set-filter")
def _set_filter(value: str = typer.Argument(..., help="user, assistant or both")) -> None:
    """Set which authors are exported by default."""
    _report(config_module.set_filter(value), f"Filter set to: {value}")


@config_app.command("set-output-dir")
def _set_output_dir(path: str = typer.Argument(..., help="Directory for PDFs (relative to config file dir)")) -> None:
    """Set the default output directory."""
    result = config_module.set_output_dir(path)
    _report(result, f"Output dir set to: {path}")
    typer.echo(f"Resolved: {result['config'].get('_resolved_output_dir')}")


@config_app.command("set-surface")
def _set_surface(name: str = typer.Argument(..., help="Drawing surface name (e.g. pymupdf)")) -> None:
    """Set the default drawing surface."""
    _report(config_module.set_surface(name), f"Surface set to: {name}")


@config_app.command("path")
def _path() -> None:
    """Print the config file path in use."""
    typer.echo(config_module.get_config_path())
