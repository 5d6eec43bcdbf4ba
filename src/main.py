"""Script de ejecución.

Permite ejecutar la CLI con `python -m main` desde `src/`, además del script
`tagnotes` instalado por pip.
"""

from __future__ import annotations

import sys

# Los mensajes de los tags son UTF-8 arbitrario; la consola de Windows usa cp1252.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
