"""Contrato de persistencia del registro.

Por qué Protocol:
- El pipeline solo necesita `load`/`save`; el formato en disco (JSON) es un
  detalle del adaptador y puede sustituirse en tests.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import Registry


@runtime_checkable
class RegistryStorage(Protocol):
    """Key-value persistence for the local registry.

    Reglas de diseño:
    - `load` nunca falla: ante error reporta y devuelve un registro vacío.
    - `save` sobrescribe el documento completo y devuelve si tuvo éxito.
    """

    def load(self) -> Registry:
        ...

    def save(self, registry: Registry) -> bool:
        ...
