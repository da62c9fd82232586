"""
Point d'entrée principal pour EPUB Ingest
Analyse un fichier EPUB et affiche le résultat
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from .config import (
    LOG_BACKUP_COUNT,
    LOG_DIR,
    LOG_ENCODING,
    LOG_MAX_BYTES,
    ensure_directories,
)
from .core.errors import EpubError


def setup_logging():
    """Configure le système de logging."""
    ensure_directories()
    logger = logging.getLogger("epub_ingest")
    logger.setLevel(logging.DEBUG)

    # Handler pour fichier avec rotation
    logfile = os.path.join(LOG_DIR, "epub_ingest.log")
    handler = RotatingFileHandler(
        logfile, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT, encoding=LOG_ENCODING
    )
    formatter = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # Handler pour console
    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console)

    return logger


def _parse_render_index(argv) -> int | None:
    if "--render" not in argv:
        return None
    pos = argv.index("--render")
    if pos + 1 >= len(argv):
        raise ValueError("--render requires a chapter index")
    return int(argv[pos + 1])


def run_cli(argv=None) -> int:
    """Lance le mode ligne de commande."""
    logger = logging.getLogger("epub_ingest")
    argv = sys.argv[1:] if argv is None else argv

    if not argv:
        print("Usage: python -m epub_ingest <file.epub> [--render N]")
        print("  file.epub: Chemin vers le fichier EPUB")
        print("  --render N: Affiche le balisage réécrit du chapitre N (0-based)")
        return 1

    epub_path = argv[0]
    if not os.path.isfile(epub_path):
        print(f"Error: {epub_path} is not a valid file")
        return 1

    try:
        render_index = _parse_render_index(argv)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    from .cli import cli_parse_file, print_book_summary, print_rendered_chapter

    try:
        book = cli_parse_file(epub_path)
    except (OSError, EpubError) as e:
        logger.exception("Error in CLI mode")
        print(f"Error: {e}")
        return 1

    if render_index is not None:
        return 0 if print_rendered_chapter(book, render_index) else 1

    print_book_summary(book)
    return 0


def main(argv=None) -> int:
    """Point d'entrée principal."""
    setup_logging()
    return run_cli(argv)


if __name__ == "__main__":
    raise SystemExit(main())
