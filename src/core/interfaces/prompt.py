"""Contrato de confirmación interactiva."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ConfirmPrompt(Protocol):
    """Yes/no question asked before a destructive operation.

    Any answer other than an explicit yes (including EOF) is `False`.
    """

    def __call__(self, question: str) -> bool:
        ...
