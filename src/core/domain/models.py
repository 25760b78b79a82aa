"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los alias (`Repo`, `Version`, `Origin`) son el formato fijo del registro JSON.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from core.domain.errors import ProjectNotFoundError


class ConflictPolicy(str, Enum):
    """What extraction does when a destination file already exists."""

    OVERWRITE = "overwrite"
    SKIP = "skip"
    FAIL = "fail"


class ProjectRecord(BaseModel):
    """Metadata needed to locate and install one project.

    Fields are not validated for emptiness: a registry may carry partial
    records and the URL is templated from whatever is there. Numbers
    (`"Version": 1`) are read as their string form.
    """

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        frozen=True,
        coerce_numbers_to_str=True,
    )

    repo: str = Field(
        default="",
        alias="Repo",
        description="Remote repository name/slug.",
    )
    version: str = Field(
        default="",
        alias="Version",
        description="Tag/ref identifying the archive to fetch.",
    )
    origin: str = Field(
        default="",
        alias="Origin",
        description="Local directory the archive is extracted into.",
    )


class Registry(BaseModel):
    """Project name -> `ProjectRecord`.

    Lifecycle:
    - Created by the store at startup (empty when loading fails).
    - Replaced wholesale by the sync engine after confirmation, never mutated.
    """

    model_config = ConfigDict(extra="ignore")

    projects: dict[str, ProjectRecord] = Field(
        default_factory=dict,
        description="Installable projects keyed by name.",
    )

    @field_validator("projects", mode="before")
    @classmethod
    def _null_projects(cls, value: Any) -> Any:
        return {} if value is None else value

    def get_project(self, name: str) -> ProjectRecord:
        record = self.projects.get(name)
        if record is None:
            raise ProjectNotFoundError(name)
        return record

    def to_document(self) -> dict[str, Any]:
        """JSON document shape persisted on disk and served remotely."""

        return self.model_dump(mode="json", by_alias=True)

    def same_as(self, other: Registry) -> bool:
        """Deep value equality of both documents (whole-document, not per key)."""

        return self.to_document() == other.to_document()

    def diff(self, remote: Registry) -> RegistryDiff:
        local_names = set(self.projects)
        remote_names = set(remote.projects)
        changed = {
            name
            for name in local_names & remote_names
            if self.projects[name] != remote.projects[name]
        }
        return RegistryDiff(
            added=remote_names - local_names,
            removed=local_names - remote_names,
            changed=changed,
        )


@dataclass(frozen=True)
class RegistryDiff:
    """Per-project summary between a local and a remote registry (reporting only)."""

    added: set[str] = field(default_factory=set)
    removed: set[str] = field(default_factory=set)
    changed: set[str] = field(default_factory=set)

    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.changed)

    def summary(self) -> str:
        parts = []
        if self.added:
            parts.append(f"{len(self.added)} added")
        if self.removed:
            parts.append(f"{len(self.removed)} removed")
        if self.changed:
            parts.append(f"{len(self.changed)} changed")
        return ", ".join(parts) if parts else "metadata only"


@dataclass
class DownloadTask:
    """One fetch attempt. Owned by the fetcher, never persisted."""

    url: str
    project_name: str
    version: str
    destination: Path
    archive_path: Path
    hops: int = 0
