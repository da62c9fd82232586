# epub_ingest/src/epub_ingest/core/epub/__init__.py
"""
Module EPUB - Analyse complète des archives EPUB.

Ce module transforme une archive EPUB en modèle Book (métadonnées,
chapitres ordonnés, ressources inline, couverture).
"""

from .archive import ArchiveReader
from .reader import parse_archive, parse_epub, read_epub_file, safe_read_epub

__all__ = [
    "ArchiveReader",
    "parse_archive",
    "parse_epub",
    "read_epub_file",
    "safe_read_epub",
]
