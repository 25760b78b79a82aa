"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- El Core solo conoce `PipelineHooks`; aquí se traducen a salida Rich.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from core.domain.models import Registry
from core.services.hooks import PipelineHooks


def _tagged(tag: str, style: str, message: str) -> Text:
    # Text (no markup): los mensajes traen rutas/URLs con corchetes arbitrarios.
    return Text.assemble((f"[{tag}] ", style), message)


def build_console_hooks(
    console: Console,
    err_console: Console,
    *,
    verbose: bool = False,
) -> PipelineHooks:
    """Hooks que imprimen con el formato `[TAG] mensaje`.

    Errores a stderr; debug solo con `--verbose`.
    """

    def debug(message: str) -> None:
        console.print(_tagged("DEBUG", "dim", message))

    return PipelineHooks(
        debug=debug if verbose else None,
        info=lambda m: console.print(_tagged("INFO", "cyan", m)),
        success=lambda m: console.print(_tagged("SUCCESS", "green", m)),
        warning=lambda m: console.print(_tagged("WARNING", "yellow", m)),
        error=lambda m: err_console.print(_tagged("ERROR", "bold red", m)),
    )


def build_registry_table(registry: Registry) -> Table:
    """Tabla Rich con los proyectos instalables."""

    table = Table(title="ezpkgm projects")
    table.add_column("Project", style="cyan", no_wrap=True)
    table.add_column("Repo", style="white")
    table.add_column("Version", style="green")
    table.add_column("Origin", style="magenta")
    for name in sorted(registry.projects):
        record = registry.projects[name]
        table.add_row(name, record.repo, record.version, record.origin)
    return table
