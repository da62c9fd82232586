"""
Exécution en module: python -m epub_ingest <file.epub> [--render N]

Convertit toute issue de main() en code de sortie entier.
"""

from __future__ import annotations

import sys


def cli(argv: list[str] | None = None) -> int:
    try:
        from .main import main  # type: ignore
    except Exception as exc:  # pragma: no cover
        sys.stderr.write(f"Failed to import epub_ingest.main: {exc}\n")
        return 1

    try:
        code = main(argv)
        return 0 if (code is None or code == 0) else int(code)
    except SystemExit as se:
        return int(se.code) if isinstance(se.code, int) else 1
    except KeyboardInterrupt:
        sys.stderr.write("Interrupted\n")
        return 130
    except BrokenPipeError:
        # Sortie tronquée par le lecteur (ex: `| head`), pas une erreur d'analyse
        return 0
    except Exception as exc:  # pragma: no cover
        sys.stderr.write(f"Unhandled error: {exc}\n")
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(cli())
