"""CLI de ezpkgm (Typer).

Uso:
    ezpkgm <project> [--config PATH] [--no-sync] [--list] [--verbose]

La CLI solo traduce flags a `InstallRequest`, imprime los hooks con Rich y
pregunta al usuario; toda la lógica vive en `core.services.install_pipeline`.
Los resultados documentados (uso, proyecto inexistente, fallos de red o de
extracción) terminan siempre con código 0.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from cli.ui_components import build_console_hooks, build_registry_table
from core.config import AppSettings
from core.services.install_pipeline import (
    InstallRequest,
    build_pipeline,
    install_project,
    resolve_registry,
)

app = typer.Typer(add_completion=False, help="Download and install projects from the ezpkgm registry.")

_console = Console()
_err_console = Console(stderr=True)


def confirm_on_terminal(question: str) -> bool:
    """Pregunta y/n por stdin; EOF o Ctrl+C cuentan como "no"."""

    try:
        return typer.confirm(question, default=False)
    except typer.Abort:
        return False


@app.command()
def install(
    project: Optional[str] = typer.Argument(None, help="Project name to install."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Local registry JSON file."),
    no_sync: bool = typer.Option(False, "--no-sync", help="Skip the remote registry check."),
    list_projects: bool = typer.Option(False, "--list", help="Show the registry and exit."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output."),
) -> None:
    """Install PROJECT into the directory recorded in the registry."""

    settings = AppSettings()
    if config is not None:
        settings = settings.model_copy(update={"registry_path": config})

    hooks = build_console_hooks(_console, _err_console, verbose=verbose)
    pipeline = build_pipeline(settings, confirm=confirm_on_terminal, hooks=hooks)
    request = InstallRequest(project_name=project, sync=settings.sync_enabled and not no_sync)

    if list_projects:
        registry = asyncio.run(resolve_registry(request, pipeline))
        _console.print(build_registry_table(registry))
        return

    asyncio.run(install_project(request, pipeline))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
