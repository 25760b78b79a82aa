"""Errores del dominio.

Cada fase (sync, fetch, install) lanza una subclase de `EzpkgmError`; el
pipeline la captura, la reporta y termina esa fase sin romper el proceso.
"""

from __future__ import annotations


class EzpkgmError(Exception):
    """Base for every failure the pipeline reports instead of crashing."""


class ConfigLoadError(EzpkgmError):
    """The local registry could not be read or parsed."""


class ConfigSaveError(EzpkgmError):
    """The local registry could not be written."""


class RemoteFetchError(EzpkgmError):
    """A remote endpoint was unreachable or served something unusable."""


class NetworkError(RemoteFetchError):
    """Transport-level failure (DNS, TLS, connection reset...)."""


class HttpStatusError(RemoteFetchError):
    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"HTTP {status_code} from {url}")
        self.status_code = status_code
        self.url = url


class TooManyRedirectsError(RemoteFetchError):
    def __init__(self, max_redirects: int, url: str) -> None:
        super().__init__(f"Exceeded {max_redirects} redirects (last location: {url})")
        self.max_redirects = max_redirects
        self.url = url


class ProjectNotFoundError(EzpkgmError):
    def __init__(self, project_name: str) -> None:
        super().__init__(f"Project '{project_name}' not found in config.")
        self.project_name = project_name


class ExtractionError(EzpkgmError):
    """The archive is corrupt, unreadable or contains unsafe paths."""


class ExtractionConflictError(ExtractionError):
    """A destination file already exists and the conflict policy is `fail`."""


class FilesystemError(EzpkgmError):
    """Directory creation, file write or archive removal was denied."""
