"""
EPUB Ingest - analyse d'archives EPUB en modèle Book prêt pour le rendu.
"""

from .core.content_rewriter import render_chapter, rewrite_content
from .core.epub import parse_epub, read_epub_file, safe_read_epub
from .core.errors import ContainerError, EpubError, PackageError
from .core.models import Book, Chapter, Metadata

__version__ = "0.1.0"

__all__ = [
    "Book",
    "Chapter",
    "ContainerError",
    "EpubError",
    "Metadata",
    "PackageError",
    "parse_epub",
    "read_epub_file",
    "render_chapter",
    "rewrite_content",
    "safe_read_epub",
]
