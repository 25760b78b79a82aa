"""Ejecuta `ezpkgm` desde un checkout, sin `pip install -e .`.

Uso:
- `python main.py foo` equivale a `ezpkgm foo`.
- `python main.py --list --no-sync` muestra el registro local.

Añade `src/` al `sys.path` para que `cli`, `core` y `adapters` se importen
igual que desde el paquete instalado.
"""

from __future__ import annotations

import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent / "src"


def main() -> None:
    if str(SRC_DIR) not in sys.path:
        sys.path.insert(0, str(SRC_DIR))

    # Nombres de proyecto y rutas del registro pueden no ser ASCII (cp1252 en Windows).
    if sys.platform == "win32":
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
