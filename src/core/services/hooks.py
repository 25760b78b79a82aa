"""Callbacks de reporte para las capas de UI.

El Core nunca imprime: cada componente recibe un `PipelineHooks` y la CLI
decide cómo mostrar los mensajes (Rich, JSON, nada en tests).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (messages, progress)."""

    debug: Callable[[str], None] | None = None
    info: Callable[[str], None] | None = None
    success: Callable[[str], None] | None = None
    warning: Callable[[str], None] | None = None
    error: Callable[[str], None] | None = None
    download_progress: Callable[[int, int | None], None] | None = None

    def emit_debug(self, message: str) -> None:
        if self.debug:
            self.debug(message)

    def emit_info(self, message: str) -> None:
        if self.info:
            self.info(message)

    def emit_success(self, message: str) -> None:
        if self.success:
            self.success(message)

    def emit_warning(self, message: str) -> None:
        if self.warning:
            self.warning(message)

    def emit_error(self, message: str) -> None:
        if self.error:
            self.error(message)

    def emit_progress(self, written: int, total: int | None) -> None:
        if self.download_progress:
            self.download_progress(written, total)
