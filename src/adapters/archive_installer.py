"""Extracción del archivo descargado al directorio del proyecto.

Garantías:
- El directorio destino se crea (idempotente).
- Cada entrada se extrae en streaming conservando su ruta relativa.
- Solo tras una extracción completa se borra el zip temporal; si falla, el
  zip queda en disco para poder inspeccionarlo.
"""

from __future__ import annotations

import shutil
import zipfile
import zlib
from pathlib import Path

from core.domain.errors import ExtractionConflictError, ExtractionError, FilesystemError
from core.domain.models import ConflictPolicy
from core.services.hooks import PipelineHooks

_CHUNK_SIZE = 64 * 1024


def _member_target(destination: Path, member: zipfile.ZipInfo) -> Path:
    """Resolve where `member` lands, rejecting paths that escape `destination`."""

    root = destination.resolve()
    target = (root / member.filename).resolve()
    if target != root and root not in target.parents:
        raise ExtractionError(f"Unsafe path in archive: {member.filename}")
    return target


class ArchiveInstaller:
    def __init__(
        self,
        hooks: PipelineHooks | None = None,
        *,
        conflict_policy: ConflictPolicy = ConflictPolicy.OVERWRITE,
    ) -> None:
        self._hooks = hooks or PipelineHooks()
        self._conflict_policy = conflict_policy

    def install(self, archive_path: Path, destination: Path) -> list[Path]:
        """Extract `archive_path` into `destination` and delete the archive.

        Returns the files written (skipped files are not included).
        """

        try:
            destination.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(f"Could not create {destination}: {exc}") from exc

        extracted = self._extract(archive_path, destination)
        self._hooks.emit_success(f"Unzipped {archive_path} to {destination}")

        try:
            archive_path.unlink()
        except OSError as exc:
            raise FilesystemError(f"Could not remove {archive_path}: {exc}") from exc
        self._hooks.emit_info(f"Removed zip file: {archive_path}")
        return extracted

    def _extract(self, archive_path: Path, destination: Path) -> list[Path]:
        try:
            archive = zipfile.ZipFile(archive_path)
        except (zipfile.BadZipFile, OSError) as exc:
            raise ExtractionError(f"Cannot read archive {archive_path}: {exc}") from exc

        extracted: list[Path] = []
        try:
            with archive:
                for member in archive.infolist():
                    target = _member_target(destination, member)
                    if member.is_dir():
                        target.mkdir(parents=True, exist_ok=True)
                        continue
                    if target.exists() and not self._should_write(target):
                        continue
                    target.parent.mkdir(parents=True, exist_ok=True)
                    with archive.open(member) as src, target.open("wb") as dst:
                        shutil.copyfileobj(src, dst, _CHUNK_SIZE)
                    extracted.append(target)
        except (zipfile.BadZipFile, zlib.error, EOFError) as exc:
            raise ExtractionError(f"Error unzipping {archive_path}: {exc}") from exc
        except NotImplementedError as exc:
            # Método de compresión no soportado (p. ej. AES, método 99).
            raise ExtractionError(f"Unsupported archive {archive_path}: {exc}") from exc
        except RuntimeError as exc:
            # zipfile lo lanza para miembros cifrados sin contraseña.
            raise ExtractionError(f"Unsupported archive {archive_path}: {exc}") from exc
        except OSError as exc:
            raise FilesystemError(f"Error unzipping {archive_path}: {exc}") from exc
        return extracted

    def _should_write(self, target: Path) -> bool:
        policy = self._conflict_policy
        if policy is ConflictPolicy.SKIP:
            self._hooks.emit_debug(f"Skipping existing file: {target}")
            return False
        if policy is ConflictPolicy.FAIL:
            raise ExtractionConflictError(f"Refusing to overwrite existing file: {target}")
        return True
